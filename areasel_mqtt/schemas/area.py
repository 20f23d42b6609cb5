"""
Area Selection Message Schema
=============================

Bounded Context: Area Selection Data Structures

Message Flow:
    DrawController → AreaCoordinates → AreaPublisher → MQTT → AreaSubscriber

Payload:
    {
        "schema_version": "1.0",
        "timestamp": "2025-10-24T15:30:45.123456+00:00",
        "app_id": "moscow_selector",
        "sequence": 3,
        "coordinates": [[10.5, 20.0], [10.5, 20.5], [10.0, 20.5],
                        [10.0, 20.0], [10.5, 20.0]],
        "bounds": {"south": 10.0, "west": 20.0, "north": 10.5, "east": 20.5}
    }

"bounds" is redundant with "coordinates" and only informational; the ring
is what gets validated on the way in.
"""

from dataclasses import dataclass
from typing import Any, Dict

from areasel_draw.geometry import AreaCoordinates

from .common import Timestamp

SCHEMA_VERSION = "1.0"


@dataclass(frozen=True)
class AreaSelectedMessage:
    """
    One selected area, as published over MQTT.

    Attributes:
        schema_version: Message schema version (for evolution)
        timestamp: ISO 8601 timestamp of message creation
        app_id: Identifier of the selector instance
        sequence: 1-based selection counter per publisher
        area: The closed rectangle ring

    Example:
        >>> msg = AreaSelectedMessage(
        ...     schema_version="1.0",
        ...     timestamp=Timestamp.now(),
        ...     app_id="moscow_selector",
        ...     sequence=1,
        ...     area=area
        ... )
    """
    schema_version: str
    timestamp: Timestamp
    app_id: str
    sequence: int
    area: AreaCoordinates

    def __post_init__(self):
        """Validate invariants."""
        if not self.app_id:
            raise ValueError("app_id cannot be empty")
        if self.sequence < 1:
            raise ValueError(f"sequence must be >= 1, got {self.sequence}")
        if not isinstance(self.area, AreaCoordinates):
            raise ValueError(
                f"area must be AreaCoordinates, got {type(self.area).__name__}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'schema_version': self.schema_version,
            'timestamp': self.timestamp.to_dict(),
            'app_id': self.app_id,
            'sequence': self.sequence,
            'coordinates': self.area.to_list(),
            'bounds': self.area.bounds.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AreaSelectedMessage':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            return cls(
                schema_version=str(data['schema_version']),
                timestamp=Timestamp(value=data['timestamp']),
                app_id=str(data['app_id']),
                sequence=int(data['sequence']),
                area=AreaCoordinates.from_list(data['coordinates']),
            )
        except KeyError as e:
            raise ValueError(f"Missing required AreaSelectedMessage field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid AreaSelectedMessage data: {e}")
