"""
Area Selector MQTT Schemas
=========================

Bounded Context: Data Structures

Design:
- Frozen dataclasses (immutability)
- to_dict() for JSON serialization
- from_dict() for deserialization
- Schema versioning for evolution

Public API
----------
    Timestamp: ISO 8601 timestamp wrapper
    AreaSelectedMessage: One selected area
"""

from .common import Timestamp
from .area import AreaSelectedMessage, SCHEMA_VERSION

__all__ = [
    'Timestamp',
    'AreaSelectedMessage',
    'SCHEMA_VERSION',
]
