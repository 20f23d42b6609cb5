"""
Structured Logging for the Area Selector
========================================

Bounded Context: Observability

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from areasel_draw.logging import create_logger, LogEvent
    >>> logger = create_logger("controller")
    >>> logger.info(event=LogEvent.DRAW_ATTACHED, message="Drawing tool attached")
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
