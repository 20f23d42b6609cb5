"""
Headless map surface.

Keeps the layer and control registries a real map would hold, without
rendering anything. Gestures are simulated with draw_rectangle() /
emit_shape(). Used by the test suite and by non-visual pipelines that feed
the draw controller programmatically.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from areasel_draw.geometry import LatLngBounds
from areasel_draw.surface import (
    RECTANGLE,
    SHAPE_CREATED,
    DrawOptions,
    DrawnShape,
    Subscription,
)

from .bus import EventBus


@dataclass(eq=False)
class RectangleShape:
    """A drawn rectangle with known bounds."""

    bounds: LatLngBounds
    layer_type: str = RECTANGLE

    @property
    def layer(self) -> 'RectangleShape':
        return self

    def get_bounds(self) -> LatLngBounds:
        return self.bounds


class InMemoryLayerGroup:
    """Overlay group holding drawn layers in insertion order."""

    def __init__(self, name: str = "drawn_items"):
        self.name = name
        self.layers: List[Any] = []

    def add(self, layer: Any) -> None:
        self.layers.append(layer)

    def clear(self) -> None:
        self.layers.clear()

    def __len__(self) -> int:
        return len(self.layers)


@dataclass(eq=False)
class InMemoryDrawTool:
    """Drawing tool: only remembers its options."""

    options: DrawOptions = field(default_factory=DrawOptions)


class InMemoryMapSurface:
    """
    Map surface with in-memory overlay, tool and listener registries.

    Registration mistakes a real map library would choke on (adding twice,
    removing something never added) raise ValueError here.

    Example:
        surface = InMemoryMapSurface()
        handle = attach(surface, on_area_selected=areas.append)
        surface.draw_rectangle(south=10.0, west=20.0, north=10.5, east=20.5)
        handle.detach()
        assert surface.is_clean()
    """

    def __init__(self):
        self.overlay_layers: List[Any] = []
        self.drawing_tools: List[Any] = []
        self.bus = EventBus()

    # ===== Factories =====

    def create_overlay_group(self) -> InMemoryLayerGroup:
        return InMemoryLayerGroup()

    def create_drawing_tool(self, options: DrawOptions) -> InMemoryDrawTool:
        return InMemoryDrawTool(options=options)

    # ===== Registries =====

    def add_overlay_layer(self, group: Any) -> None:
        if any(layer is group for layer in self.overlay_layers):
            raise ValueError("Overlay layer already on the map")
        self.overlay_layers.append(group)

    def remove_overlay_layer(self, group: Any) -> None:
        self._remove(self.overlay_layers, group, "Overlay layer")

    def add_drawing_tool(self, tool: Any) -> None:
        if any(existing is tool for existing in self.drawing_tools):
            raise ValueError("Drawing tool already on the map")
        self.drawing_tools.append(tool)

    def remove_drawing_tool(self, tool: Any) -> None:
        self._remove(self.drawing_tools, tool, "Drawing tool")

    def on(self, event_name: str, handler: Callable[[DrawnShape], None]) -> Subscription:
        return self.bus.on(event_name, handler)

    def off(self, subscription: Subscription) -> None:
        self.bus.off(subscription)

    @staticmethod
    def _remove(registry: List[Any], item: Any, label: str) -> None:
        for index, existing in enumerate(registry):
            if existing is item:
                del registry[index]
                return
        raise ValueError(f"{label} is not on the map")

    # ===== Gesture simulation =====

    def emit_shape(self, shape: Any) -> int:
        """Deliver a SHAPE_CREATED event. Returns the number of listeners."""
        return self.bus.emit(SHAPE_CREATED, shape)

    def draw_rectangle(
        self,
        south: float,
        west: float,
        north: float,
        east: float
    ) -> RectangleShape:
        """Simulate a completed rectangle drag and return the shape delivered."""
        shape = RectangleShape(
            bounds=LatLngBounds(south=south, west=west, north=north, east=east)
        )
        self.emit_shape(shape)
        return shape

    # ===== Introspection =====

    def listener_count(self, event_name: Optional[str] = SHAPE_CREATED) -> int:
        return self.bus.count(event_name)

    def is_clean(self) -> bool:
        """True when nothing is registered on the surface."""
        return (
            not self.overlay_layers
            and not self.drawing_tools
            and self.bus.count() == 0
        )
