"""
MQTT Publishers
==============

Bounded Context: Message Production

Public API
----------
    BasePublisher: Abstract publisher (for custom publishers)
    AreaPublisher: Selected area publisher
"""

from .base import BasePublisher
from .area import AreaPublisher

__all__ = [
    'BasePublisher',
    'AreaPublisher',
]
