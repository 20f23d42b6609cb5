"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging across the draw controller,
the presenter and the MQTT sink.

Event Naming Convention:
    <component>.<category>.<action>

    component: draw, area, mqtt, error

Example Log Query (Loki):
    {app="areasel"} | json | event = "error.shape_extraction"
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - draw.*: Controller lifecycle and drawing tool events
    - area.*: Normalized area reporting
    - mqtt.*: MQTT broker interactions
    - error.*: Error conditions
    """

    # ========== Draw Events ==========
    DRAW_ATTACHED = "draw.attached"
    """Overlay group and drawing tool attached to the map surface."""

    DRAW_ATTACH_SKIPPED = "draw.attach.skipped"
    """attach() called on an already attached controller."""

    DRAW_DETACHED = "draw.detached"
    """Controller released every map surface resource."""

    DRAW_SHAPE_CREATED = "draw.shape.created"
    """Drawing tool delivered a newly drawn shape."""

    DRAW_EVENT_IGNORED = "draw.event.ignored"
    """Shape event delivered after teardown and dropped."""

    # ========== Area Events ==========
    AREA_SELECTED = "area.selected"
    """Area coordinates reported to the callback."""

    AREA_PRESENTED = "area.presented"
    """Area coordinates rendered by the presenter."""

    AREA_SERIALIZED = "area.serialized"
    """Area message serialized to JSON."""

    AREA_RECEIVED = "area.received"
    """Area message received by subscriber."""

    # ========== MQTT Events ==========
    MQTT_CONNECTED = "mqtt.connected"
    """MQTT broker connection established."""

    MQTT_DISCONNECTED = "mqtt.disconnected"
    """MQTT broker connection lost."""

    MQTT_PUBLISH_SUCCESS = "mqtt.publish.success"
    """Message successfully published to broker."""

    MQTT_PUBLISH_FAILED = "mqtt.publish.failed"
    """Message publication failed."""

    # ========== Error Events ==========
    TOOL_INITIALIZATION_ERROR = "error.tool_initialization"
    """Overlay group or drawing tool could not be attached."""

    SHAPE_EXTRACTION_ERROR = "error.shape_extraction"
    """Drawn shape could not be normalized into area coordinates."""

    CALLBACK_ERROR = "error.callback"
    """Area callback raised."""

    TEARDOWN_ERROR = "error.teardown"
    """A map surface resource failed to release."""

    SERIALIZATION_ERROR = "error.serialization"
    """Failed to serialize message to JSON."""

    DESERIALIZATION_ERROR = "error.deserialization"
    """Failed to deserialize message from JSON."""

    SCHEMA_VALIDATION_ERROR = "error.schema_validation"
    """Message failed schema validation."""

    MQTT_CONNECTION_ERROR = "error.mqtt_connection"
    """Failed to connect to MQTT broker."""

    MQTT_PUBLISH_ERROR = "error.mqtt_publish"
    """Error during message publication."""
