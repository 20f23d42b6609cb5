"""
Common Schema Types
==================

Bounded Context: Shared Data Structures

Types:
- Timestamp: ISO 8601 timestamp wrapper
"""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Timestamp:
    """
    Immutable ISO 8601 timestamp wrapper.

    Attributes:
        value: ISO 8601 formatted timestamp string

    Example:
        >>> ts = Timestamp.now()
        >>> ts.value
        '2025-10-24T15:30:45.123456+00:00'
    """
    value: str

    def __post_init__(self):
        """Validate format."""
        if not isinstance(self.value, str):
            raise ValueError(f"Timestamp must be a string, got {type(self.value).__name__}")
        try:
            datetime.fromisoformat(self.value)
        except ValueError as e:
            raise ValueError(f"Invalid ISO timestamp: {self.value}") from e

    @classmethod
    def now(cls) -> 'Timestamp':
        """Create timestamp from current UTC time."""
        return cls(value=datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> str:
        """Serialize to JSON (as string)."""
        return self.value
