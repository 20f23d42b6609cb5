"""
Map surface contract consumed by the draw controller.

The controller never imports a map library. It talks to a MapSurface, which
owns the library-side registries (layers, controls, event listeners). Every
resource the controller registers here has to be unregistered explicitly.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Protocol, runtime_checkable

from areasel_draw.geometry import LatLngBounds

SHAPE_CREATED = "shape_created"

RECTANGLE = "rectangle"

# Shape kinds a drawing tool may offer; only RECTANGLE is ever enabled
DISABLED_SHAPES = ("polygon", "circle", "marker", "circlemarker", "polyline")

VALID_POSITIONS = {"topleft", "topright", "bottomleft", "bottomright"}


@dataclass(frozen=True)
class ShapeStyle:
    """Stroke and fill of the rectangle while and after it is drawn."""

    color: str = "#3388ff"
    weight: int = 4
    opacity: float = 0.5
    fill_opacity: float = 0.2

    def __post_init__(self):
        if self.weight <= 0:
            raise ValueError(f"weight must be > 0, got {self.weight}")
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"opacity must be in [0.0, 1.0], got {self.opacity}")
        if not 0.0 <= self.fill_opacity <= 1.0:
            raise ValueError(
                f"fill_opacity must be in [0.0, 1.0], got {self.fill_opacity}"
            )

    @classmethod
    def from_leaflet(cls, options: Dict[str, Any]) -> 'ShapeStyle':
        """Inverse of to_leaflet(); missing keys keep their defaults."""
        defaults = cls()
        return cls(
            color=options.get('color', defaults.color),
            weight=options.get('weight', defaults.weight),
            opacity=options.get('opacity', defaults.opacity),
            fill_opacity=options.get('fillOpacity', defaults.fill_opacity),
        )

    def to_leaflet(self) -> Dict[str, Any]:
        """Leaflet path options (camelCase keys)."""
        return {
            'color': self.color,
            'weight': self.weight,
            'opacity': self.opacity,
            'fillOpacity': self.fill_opacity,
        }


@dataclass(frozen=True)
class DrawOptions:
    """Rectangle-only drawing tool options."""

    position: str = "topleft"
    style: ShapeStyle = field(default_factory=ShapeStyle)

    def __post_init__(self):
        if self.position not in VALID_POSITIONS:
            raise ValueError(
                f"Invalid position: {self.position}. "
                f"Must be one of {sorted(VALID_POSITIONS)}"
            )

    @property
    def enabled_shapes(self) -> tuple:
        return (RECTANGLE,)


@dataclass(frozen=True)
class Subscription:
    """Token returned by MapSurface.on(); hand it back to off()."""

    token: int
    event_name: str


@runtime_checkable
class DrawnShape(Protocol):
    """
    Raw shape delivered with a SHAPE_CREATED event.

    Attributes:
        layer_type: Shape kind reported by the tool ("rectangle", "polygon", ...)
        layer: Library object inserted into the overlay group
    """

    layer_type: str
    layer: Any

    def get_bounds(self) -> LatLngBounds:
        """Bounding rectangle. May raise for malformed geometry."""
        ...


@runtime_checkable
class OverlayGroup(Protocol):
    """Container for user-drawn layers rendered above the base map."""

    def add(self, layer: Any) -> None:
        ...

    def clear(self) -> None:
        ...


@runtime_checkable
class MapSurface(Protocol):
    """
    Capability set the draw controller needs from a map.

    Factories keep tool construction on the library side; the six
    registration methods are the only ways the controller mutates the map.
    """

    def create_overlay_group(self) -> OverlayGroup:
        ...

    def create_drawing_tool(self, options: DrawOptions) -> Any:
        ...

    def add_overlay_layer(self, group: OverlayGroup) -> None:
        ...

    def remove_overlay_layer(self, group: OverlayGroup) -> None:
        ...

    def add_drawing_tool(self, tool: Any) -> None:
        ...

    def remove_drawing_tool(self, tool: Any) -> None:
        ...

    def on(self, event_name: str, handler: Callable[[DrawnShape], None]) -> Subscription:
        ...

    def off(self, subscription: Subscription) -> None:
        ...
