"""
ipyleaflet map surface.

Bounded Context: Leaflet adapter for the draw controller
Responsibilities:
  - Build the ipyleaflet Map from MapConfig / TileConfig
  - Overlay groups are ipyleaflet LayerGroup instances
  - Drawing tools are DrawControl instances with only the rectangle enabled
  - Translate DrawControl 'created' callbacks into SHAPE_CREATED events

DrawControl keeps its own copy of every drawn feature. The surface clears
that copy on each creation so the controller's overlay group is the only
place a drawn rectangle lives.
"""

from typing import Any, Callable, Dict, Optional

from ipyleaflet import DrawControl, GeoJSON, LayerGroup, Map, TileLayer
from ipywidgets import Layout

from areasel_draw.geometry import (
    LatLngBounds,
    bounds_from_vertices,
    is_axis_aligned_rectangle,
)
from areasel_draw.surface import (
    DISABLED_SHAPES,
    RECTANGLE,
    SHAPE_CREATED,
    DrawOptions,
    ShapeStyle,
    Subscription,
)

from .bus import EventBus
from .tiles import MapConfig, TileConfig

# GeoJSON geometry type -> drawing tool shape kind
GEOMETRY_KINDS = {
    'Point': 'marker',
    'LineString': 'polyline',
}


class LeafletDrawnShape:
    """
    Shape drawn with a DrawControl, as a GeoJSON feature.

    Attributes:
        geo_json: Feature dict reported by the DrawControl
        layer_type: "rectangle" for axis-aligned 4-corner polygons, otherwise
            the closest drawing tool kind ("polygon", "marker", "polyline")
    """

    def __init__(self, geo_json: Dict[str, Any], style: Optional[ShapeStyle] = None):
        self.geo_json = geo_json
        self.style = style or ShapeStyle()
        self.layer_type = self._classify(geo_json)
        self._layer: Optional[GeoJSON] = None

    @staticmethod
    def _classify(geo_json: Dict[str, Any]) -> str:
        geometry = (geo_json or {}).get('geometry') or {}
        geometry_type = geometry.get('type')
        if geometry_type == 'Polygon':
            rings = geometry.get('coordinates') or [[]]
            if is_axis_aligned_rectangle(rings[0]):
                return RECTANGLE
            return 'polygon'
        return GEOMETRY_KINDS.get(geometry_type, str(geometry_type).lower())

    @property
    def layer(self) -> GeoJSON:
        if self._layer is None:
            self._layer = GeoJSON(data=self.geo_json, style=self.style.to_leaflet())
        return self._layer

    def get_bounds(self) -> LatLngBounds:
        """
        Bounds of the exterior ring.

        Raises:
            ValueError: If the feature has no polygon ring or spans zero area
        """
        try:
            exterior = self.geo_json['geometry']['coordinates'][0]
        except (KeyError, IndexError, TypeError) as e:
            raise ValueError(f"Feature has no polygon ring: {e}")
        return bounds_from_vertices(exterior)


class LeafletMapSurface:
    """
    MapSurface backed by an ipyleaflet Map.

    Example (notebook):
        surface = LeafletMapSurface.from_config(MapConfig(), TileConfig())
        handle = attach(surface, on_area_selected=presenter.show)
        display(surface.map)
    """

    def __init__(self, map_widget: Map, style: Optional[ShapeStyle] = None):
        self.map = map_widget
        self.style = style or ShapeStyle()
        self.bus = EventBus()

    @classmethod
    def from_config(
        cls,
        map_config: MapConfig,
        tile_config: TileConfig,
        style: Optional[ShapeStyle] = None,
    ) -> 'LeafletMapSurface':
        basemap = TileLayer(
            url=tile_config.url,
            attribution=tile_config.attribution,
            name=tile_config.name,
            max_zoom=tile_config.max_zoom,
        )
        map_widget = Map(
            center=tuple(map_config.center),
            zoom=map_config.zoom,
            basemap=basemap,
            box_zoom=map_config.box_zoom,
            scroll_wheel_zoom=map_config.scroll_wheel_zoom,
            layout=Layout(height=map_config.height),
        )
        return cls(map_widget, style=style)

    # ===== Factories =====

    def create_overlay_group(self) -> LayerGroup:
        return LayerGroup(name="Drawn area")

    def create_drawing_tool(self, options: DrawOptions) -> DrawControl:
        disabled = {shape: {} for shape in DISABLED_SHAPES}
        return DrawControl(
            position=options.position,
            rectangle={'shapeOptions': options.style.to_leaflet()},
            edit=False,
            remove=False,
            **disabled,
        )

    # ===== Registries =====

    def add_overlay_layer(self, group: LayerGroup) -> None:
        self.map.add(group)

    def remove_overlay_layer(self, group: LayerGroup) -> None:
        self.map.remove(group)

    def add_drawing_tool(self, tool: DrawControl) -> None:
        """Register the draw callback, then show the tool. Nothing is left behind on failure."""
        tool.on_draw(self._on_draw)
        try:
            self.map.add(tool)
        except Exception:
            tool.on_draw(self._on_draw, remove=True)
            raise

    def remove_drawing_tool(self, tool: DrawControl) -> None:
        tool.on_draw(self._on_draw, remove=True)
        self.map.remove(tool)

    def on(self, event_name: str, handler: Callable[[Any], None]) -> Subscription:
        return self.bus.on(event_name, handler)

    def off(self, subscription: Subscription) -> None:
        self.bus.off(subscription)

    # ===== DrawControl callback =====

    def _on_draw(self, target: DrawControl, action: str, geo_json: Dict[str, Any]) -> None:
        if action != 'created':
            return
        target.clear()
        self.bus.emit(SHAPE_CREATED, LeafletDrawnShape(geo_json, style=self._tool_style(target)))

    def _tool_style(self, tool: DrawControl) -> ShapeStyle:
        shape_options = (tool.rectangle or {}).get('shapeOptions')
        if not shape_options:
            return self.style
        return ShapeStyle.from_leaflet(shape_options)
