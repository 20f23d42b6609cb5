"""
EventBus - draw event publisher for map surfaces

Bounded Context: Map surface event dispatch
Responsibilities:
  - Hand out Subscription tokens (on)
  - Drop subscriptions by token (off, idempotent)
  - Dispatch payloads to subscribers in subscription order (emit)

Dispatch iterates over a snapshot, so a handler that unsubscribes another
one mid-dispatch does not change the current delivery. The unsubscribed
handler must guard itself (the draw controller does).
"""

import itertools
from typing import Any, Callable, Dict, List, Tuple

from areasel_draw.surface import Subscription

Handler = Callable[[Any], None]


class EventBus:
    """
    Token-based publish/subscribe for a single map surface.

    Example:
        bus = EventBus()
        sub = bus.on("shape_created", handler)
        bus.emit("shape_created", shape)
        bus.off(sub)
    """

    def __init__(self):
        self._handlers: Dict[int, Tuple[str, Handler]] = {}
        self._tokens = itertools.count(1)

    def on(self, event_name: str, handler: Handler) -> Subscription:
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {type(handler).__name__}")
        subscription = Subscription(token=next(self._tokens), event_name=event_name)
        self._handlers[subscription.token] = (event_name, handler)
        return subscription

    def off(self, subscription: Subscription) -> None:
        self._handlers.pop(subscription.token, None)

    def handlers(self, event_name: str) -> List[Handler]:
        return [
            handler
            for name, handler in self._handlers.values()
            if name == event_name
        ]

    def emit(self, event_name: str, payload: Any) -> int:
        """
        Deliver payload to every handler of event_name.

        Returns:
            Number of handlers invoked
        """
        snapshot = self.handlers(event_name)
        for handler in snapshot:
            handler(payload)
        return len(snapshot)

    def count(self, event_name: str = None) -> int:
        if event_name is None:
            return len(self._handlers)
        return len(self.handlers(event_name))
