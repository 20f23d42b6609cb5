"""
Area Selector MQTT Package
==========================

Bounded Context: Forwarding selected areas to other processes

Architecture:
- schemas/: AreaSelectedMessage (+ Timestamp)
- publishers/: BasePublisher, AreaPublisher
- subscriber.py: AreaSubscriber

Example (selector side):
    >>> from areasel_mqtt import AreaPublisher
    >>> from areasel_draw.logging import create_logger
    >>>
    >>> publisher = AreaPublisher(
    ...     broker_host="localhost",
    ...     topic="areasel/areas/moscow_selector",
    ...     app_id="moscow_selector",
    ...     logger=create_logger("publisher")
    ... )
    >>> publisher.connect()
    >>> handle = attach(surface, on_area_selected=publisher.publish_selection)
"""

__version__ = "1.0.0"

from .schemas import AreaSelectedMessage, Timestamp, SCHEMA_VERSION
from .publishers import BasePublisher, AreaPublisher
from .subscriber import AreaSubscriber

__all__ = [
    '__version__',
    'AreaSelectedMessage',
    'Timestamp',
    'SCHEMA_VERSION',
    'BasePublisher',
    'AreaPublisher',
    'AreaSubscriber',
]
