"""
MQTT Area Subscriber
====================

Bounded Context: Message Consumption

Architecture:
    MQTT Broker → AreaSubscriber → on_area callback → CLI / dashboards

Message Flow:
    1. Subscriber receives JSON from MQTT
    2. Deserializes to AreaSelectedMessage
    3. Invokes user callback with the typed message
    4. Continues listening (non-blocking)

Malformed payloads are logged and dropped; they never reach the callback
and never stop the network loop.

Example:
    >>> subscriber = AreaSubscriber(
    ...     broker_host="localhost",
    ...     topic="areasel/areas/moscow_selector",
    ...     on_area=lambda msg: print(msg.area.to_list()),
    ...     logger=create_logger("watcher")
    ... )
    >>> if subscriber.connect():
    ...     subscriber.start()
    >>> ...
    >>> subscriber.stop()
"""

import json
import threading
from typing import Callable, Optional
import paho.mqtt.client as mqtt

from areasel_draw.logging import StructuredLogger, LogEvent

from .schemas import AreaSelectedMessage


class AreaSubscriber:
    """
    MQTT subscriber for selected area messages.

    Thread Safety:
        Callbacks are invoked in the MQTT network thread. Keep them fast.
    """

    def __init__(
        self,
        broker_host: str,
        topic: str,
        on_area: Callable[[AreaSelectedMessage], None],
        logger: StructuredLogger,
        broker_port: int = 1883,
        client_id: str = "areasel_subscriber",
        username: Optional[str] = None,
        password: Optional[str] = None,
        qos: int = 0
    ):
        self.broker_host = broker_host
        self.broker_port = broker_port
        self.topic = topic
        self.client_id = client_id
        self.logger = logger
        self.qos = qos

        self.on_area = on_area

        self.client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id,
        )
        if username and password:
            self.client.username_pw_set(username, password)

        self.client.on_connect = self._on_connect
        self.client.on_disconnect = self._on_disconnect
        self.client.on_message = self._on_message

        self._connected = threading.Event()
        self._running = False
        self._stats_lock = threading.Lock()
        self._message_count = {'received': 0, 'rejected': 0}

    def _on_connect(self, client, userdata, flags, reason_code, properties) -> None:
        """Subscribe once the broker accepts the connection."""
        if not reason_code.is_failure:
            self._connected.set()
            client.subscribe(self.topic, qos=self.qos)

            self.logger.info(
                event=LogEvent.MQTT_CONNECTED,
                message="Connected to MQTT broker and subscribed to topic",
                metadata={
                    'broker': f"{self.broker_host}:{self.broker_port}",
                    'topic': self.topic
                }
            )
        else:
            self.logger.error(
                event=LogEvent.MQTT_CONNECTION_ERROR,
                message=f"Failed to connect to broker (rc={reason_code})",
                metadata={'broker': f"{self.broker_host}:{self.broker_port}"}
            )

    def _on_disconnect(self, client, userdata, flags, reason_code, properties) -> None:
        self._connected.clear()
        self.logger.warning(
            event=LogEvent.MQTT_DISCONNECTED,
            message="Disconnected from MQTT broker",
            metadata={
                'broker': f"{self.broker_host}:{self.broker_port}",
                'reason_code': str(reason_code)
            }
        )

    def _on_message(self, client, userdata, msg) -> None:
        """
        Callback when message received.

        Thread: Runs in MQTT client thread
        """
        try:
            payload = msg.payload.decode('utf-8')
            data = json.loads(payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            self._reject()
            self.logger.error(
                event=LogEvent.DESERIALIZATION_ERROR,
                message="Failed to decode JSON message",
                exc_info=e,
                metadata={'topic': msg.topic}
            )
            return

        self._handle_area_message(data, msg.topic)

    def _handle_area_message(self, data, topic: str) -> None:
        """Deserialize to AreaSelectedMessage and invoke the user callback."""
        if not isinstance(data, dict):
            self._reject()
            self.logger.error(
                event=LogEvent.SCHEMA_VALIDATION_ERROR,
                message="Area message must be a JSON object",
                metadata={'topic': topic}
            )
            return

        try:
            area_msg = AreaSelectedMessage.from_dict(data)
        except ValueError as e:
            self._reject()
            self.logger.error(
                event=LogEvent.SCHEMA_VALIDATION_ERROR,
                message="Area message failed schema validation",
                exc_info=e,
                metadata={'topic': topic}
            )
            return

        with self._stats_lock:
            self._message_count['received'] += 1

        self.logger.info(
            event=LogEvent.AREA_RECEIVED,
            message="Received area message",
            metadata={'app_id': area_msg.app_id, 'sequence': area_msg.sequence}
        )

        try:
            self.on_area(area_msg)
        except Exception as e:
            self.logger.error(
                event=LogEvent.CALLBACK_ERROR,
                message="Error handling area message",
                exc_info=e
            )

    def _reject(self) -> None:
        with self._stats_lock:
            self._message_count['rejected'] += 1

    def connect(self, timeout: float = 10.0) -> bool:
        """
        Connect to MQTT broker.

        The network loop starts here so the CONNACK can be processed.

        Returns:
            True if connected successfully, False otherwise
        """
        try:
            self.client.connect(self.broker_host, self.broker_port)
            self.client.loop_start()
            self._running = True

            if self._connected.wait(timeout=timeout):
                return True
            else:
                self.logger.error(
                    event=LogEvent.MQTT_CONNECTION_ERROR,
                    message="Connection timeout",
                    metadata={'timeout': timeout}
                )
                return False

        except Exception as e:
            self.logger.error(
                event=LogEvent.MQTT_CONNECTION_ERROR,
                message="Failed to connect to broker",
                exc_info=e,
                metadata={'broker': f"{self.broker_host}:{self.broker_port}"}
            )
            return False

    def start(self) -> None:
        """Log that the subscriber is listening (the loop runs since connect())."""
        if not self._connected.is_set():
            self.logger.warning(
                event=LogEvent.MQTT_CONNECTION_ERROR,
                message="Cannot start: not connected to broker"
            )
            return

        self.logger.info(
            event=LogEvent.MQTT_CONNECTED,
            message="Subscriber started (listening for messages)",
            metadata={'topic': self.topic}
        )

    def stop(self) -> None:
        """Stop network loop and disconnect. Safe to call multiple times."""
        if not self._running:
            return
        self._running = False
        self.client.loop_stop()
        self.client.disconnect()

        self.logger.info(
            event=LogEvent.MQTT_DISCONNECTED,
            message="Subscriber stopped",
            metadata=self.get_stats()
        )

    def get_stats(self) -> dict:
        with self._stats_lock:
            return {
                'areas_received': self._message_count['received'],
                'messages_rejected': self._message_count['rejected'],
                'connected': self._connected.is_set(),
                'running': self._running,
                'topic': self.topic,
                'broker': f"{self.broker_host}:{self.broker_port}"
            }
