"""
Area Publisher
==============

Bounded Context: Area Selection Message Production

Message Flow:
    DrawController → AreaCoordinates → AreaPublisher → MQTT Broker

Example:
    >>> publisher = AreaPublisher(
    ...     broker_host="localhost",
    ...     topic="areasel/areas/moscow_selector",
    ...     app_id="moscow_selector",
    ...     logger=create_logger("publisher")
    ... )
    >>> publisher.connect()
    >>> publisher.publish_selection(area)
"""

import itertools
from typing import Dict, Any, Optional

from areasel_draw.geometry import AreaCoordinates
from areasel_draw.logging import StructuredLogger, LogEvent

from .base import BasePublisher
from ..schemas import AreaSelectedMessage, Timestamp, SCHEMA_VERSION


class AreaPublisher(BasePublisher):
    """
    Publisher for selected areas.

    Attributes:
        Same as BasePublisher, plus:
        app_id: Selector instance identifier stamped on every message
        schema_version: Current schema version for messages
    """

    def __init__(
        self,
        broker_host: str,
        topic: str,
        app_id: str,
        logger: StructuredLogger,
        broker_port: int = 1883,
        client_id: str = "areasel_publisher",
        username: Optional[str] = None,
        password: Optional[str] = None,
        qos: int = 0
    ):
        super().__init__(
            broker_host=broker_host,
            broker_port=broker_port,
            topic=topic,
            client_id=client_id,
            logger=logger,
            username=username,
            password=password,
            qos=qos
        )
        self.app_id = app_id
        self.schema_version = SCHEMA_VERSION
        self._sequence = itertools.count(1)

    def build_message(self, area: AreaCoordinates) -> AreaSelectedMessage:
        """Wrap an area in a message with the next sequence number."""
        return AreaSelectedMessage(
            schema_version=self.schema_version,
            timestamp=Timestamp.now(),
            app_id=self.app_id,
            sequence=next(self._sequence),
            area=area,
        )

    def format_message(self, area_msg: AreaSelectedMessage) -> Dict[str, Any]:
        """
        Format AreaSelectedMessage to JSON-compatible dict.

        Raises:
            ValueError: If area_msg cannot be serialized
        """
        try:
            formatted = area_msg.to_dict()

            self.logger.info(
                event=LogEvent.AREA_SERIALIZED,
                message="Serialized area message",
                metadata={'app_id': area_msg.app_id, 'sequence': area_msg.sequence}
            )

            return formatted

        except Exception as e:
            self.logger.error(
                event=LogEvent.SERIALIZATION_ERROR,
                message="Failed to serialize area message",
                exc_info=e,
                metadata={'sequence': getattr(area_msg, 'sequence', None)}
            )
            raise ValueError(f"Failed to format area message: {e}")

    def publish_area(self, area_msg: AreaSelectedMessage) -> bool:
        """
        Publish an area message.

        Returns:
            True if published successfully, False otherwise
        """
        try:
            message_data = self.format_message(area_msg)
            return self.publish(message_data)

        except Exception as e:
            self.logger.error(
                event=LogEvent.MQTT_PUBLISH_ERROR,
                message="Error publishing area message",
                exc_info=e,
                metadata={'sequence': area_msg.sequence, 'topic': self.topic}
            )
            return False

    def publish_selection(self, area: AreaCoordinates) -> bool:
        """
        Publish a freshly selected area. Usable directly as an area callback.

        Returns:
            True if published successfully, False otherwise
        """
        return self.publish_area(self.build_message(area))
