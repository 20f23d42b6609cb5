"""
ipyleaflet surface tests (no browser: DrawControl callbacks are invoked directly).

Usage:
    pytest test_leaflet_surface.py
"""

import pytest
from ipyleaflet import DrawControl, LayerGroup

from areasel_app import AreaSelectorApp, AppConfig
from areasel_draw import (
    DrawController,
    DrawOptions,
    LatLngBounds,
    ShapeStyle,
    ToolInitializationFailure,
    attach,
)
from areasel_map import LeafletDrawnShape, LeafletMapSurface, MapConfig, TileConfig


def feature(geometry_type, coordinates):
    return {
        'type': 'Feature',
        'properties': {'style': {}},
        'geometry': {'type': geometry_type, 'coordinates': coordinates},
    }


# Leaflet.draw reports rectangles as a SW, NW, NE, SE, SW (lng, lat) polygon
RECTANGLE_FEATURE = feature('Polygon', [[
    [20.0, 10.0], [20.0, 10.5], [20.5, 10.5], [20.5, 10.0], [20.0, 10.0],
]])

TRIANGLE_FEATURE = feature('Polygon', [[
    [20.0, 10.0], [20.25, 10.5], [20.5, 10.0], [20.0, 10.0],
]])


@pytest.fixture
def surface():
    return LeafletMapSurface.from_config(MapConfig(), TileConfig())


class TestLeafletDrawnShape:
    def test_rectangle(self):
        shape = LeafletDrawnShape(RECTANGLE_FEATURE)

        assert shape.layer_type == "rectangle"
        assert shape.get_bounds() == LatLngBounds(south=10.0, west=20.0, north=10.5, east=20.5)

    def test_layer_is_styled_geojson(self):
        shape = LeafletDrawnShape(RECTANGLE_FEATURE, style=ShapeStyle(color="#ff0000"))

        assert shape.layer is shape.layer
        assert shape.layer.data['geometry'] == RECTANGLE_FEATURE['geometry']
        assert shape.layer.style == ShapeStyle(color="#ff0000").to_leaflet()

    @pytest.mark.parametrize("geo_json,kind", [
        (TRIANGLE_FEATURE, "polygon"),
        (feature('Point', [20.0, 10.0]), "marker"),
        (feature('LineString', [[20.0, 10.0], [20.5, 10.5]]), "polyline"),
    ])
    def test_other_kinds(self, geo_json, kind):
        assert LeafletDrawnShape(geo_json).layer_type == kind

    def test_bounds_without_ring(self):
        with pytest.raises(ValueError):
            LeafletDrawnShape(feature('Point', [20.0, 10.0])).get_bounds()


class TestLeafletMapSurface:
    def test_map_from_config(self, surface):
        assert list(surface.map.center) == [55.751244, 37.618423]
        assert surface.map.zoom == 10
        assert surface.map.box_zoom is False
        assert surface.map.layout.height == "600px"

    def test_rectangle_only_tool(self, surface):
        tool = surface.create_drawing_tool(DrawController(surface, print).options)

        assert tool.position == "topleft"
        assert tool.rectangle == {'shapeOptions': ShapeStyle().to_leaflet()}
        for shape in ("polygon", "circle", "marker", "circlemarker", "polyline"):
            assert getattr(tool, shape) == {}
        assert tool.edit is False
        assert tool.remove is False

    def test_attach_draw_detach(self, surface):
        areas = []
        controller = DrawController(surface, on_area_selected=areas.append)
        handle = controller.attach()
        tool, overlay = controller.tool, controller.overlay

        assert tool in surface.map.controls
        assert overlay in surface.map.layers

        surface._on_draw(tool, 'created', RECTANGLE_FEATURE)
        surface._on_draw(tool, 'created', RECTANGLE_FEATURE)

        assert len(areas) == 2
        assert areas[0].to_list() == [
            [10.5, 20.0], [10.5, 20.5], [10.0, 20.5], [10.0, 20.0], [10.5, 20.0],
        ]
        assert len(overlay.layers) == 1

        handle.detach()

        assert tool not in surface.map.controls
        assert overlay not in surface.map.layers
        assert surface.bus.count() == 0

    def test_drawn_layer_uses_tool_style(self, surface):
        red = ShapeStyle(color="#ff0000", weight=2, opacity=0.8, fill_opacity=0.1)
        controller = DrawController(surface, print, options=DrawOptions(style=red))
        controller.attach()

        surface._on_draw(controller.tool, 'created', RECTANGLE_FEATURE)

        assert controller.overlay.layers[0].style == red.to_leaflet()
        assert surface.style == ShapeStyle()

    def test_creating_a_tool_leaves_surface_untouched(self, surface):
        surface.create_drawing_tool(DrawOptions(style=ShapeStyle(color="#00ff00")))

        assert surface.style == ShapeStyle()
        assert not any(isinstance(control, DrawControl) for control in surface.map.controls)

    def test_failed_tool_add_rolls_back(self, surface, monkeypatch):
        map_add = surface.map.add

        def add(item):
            if isinstance(item, DrawControl):
                raise RuntimeError("control rejected")
            map_add(item)

        monkeypatch.setattr(surface.map, "add", add)
        controller = DrawController(surface, print)
        tools = []
        create_drawing_tool = surface.create_drawing_tool
        monkeypatch.setattr(
            surface,
            "create_drawing_tool",
            lambda options: tools.append(create_drawing_tool(options)) or tools[-1],
        )

        with pytest.raises(ToolInitializationFailure):
            controller.attach()

        tool = tools[0]
        assert tool._draw_callbacks.callbacks == []
        assert tool not in surface.map.controls
        assert not any(isinstance(layer, LayerGroup) for layer in surface.map.layers)
        assert surface.bus.count() == 0

    def test_failed_callback_registration_keeps_tool_off_map(self, surface, monkeypatch):
        class RejectingDrawControl(DrawControl):
            def on_draw(self, callback, remove=False):
                raise RuntimeError("callback registry closed")

        monkeypatch.setattr(surface, "create_drawing_tool", lambda options: RejectingDrawControl())
        controller = DrawController(surface, print)

        with pytest.raises(ToolInitializationFailure):
            controller.attach()

        assert not any(isinstance(control, DrawControl) for control in surface.map.controls)
        assert not any(isinstance(layer, LayerGroup) for layer in surface.map.layers)

    def test_non_created_actions_ignored(self, surface):
        areas = []
        controller = DrawController(surface, on_area_selected=areas.append)
        controller.attach()

        surface._on_draw(controller.tool, 'deleted', RECTANGLE_FEATURE)
        surface._on_draw(controller.tool, 'edited', RECTANGLE_FEATURE)

        assert areas == []
        assert len(controller.overlay.layers) == 0

    def test_polygon_is_not_reported(self, surface):
        areas = []
        controller = DrawController(surface, on_area_selected=areas.append)
        controller.attach()

        surface._on_draw(controller.tool, 'created', TRIANGLE_FEATURE)

        assert areas == []

    def test_module_attach_reuses_controller(self, surface):
        first = attach(surface, print)
        second = attach(surface, print)

        assert first is second
        assert sum(1 for layer in surface.map.layers if layer.name == "Drawn area") == 1
        first.detach()


class TestAreaSelectorApp:
    def test_selection_opens_presenter(self):
        app = AreaSelectorApp(AppConfig())
        handle = app.start()

        assert app.running
        assert app.start() is handle
        assert app.publisher is None

        app.surface._on_draw(app.controller.tool, 'created', RECTANGLE_FEATURE)

        assert app.presenter.is_open
        assert app.presenter.rows[0] == "1. lat: 10.500000  lng: 20.000000"

        app.stop()
        app.stop()

        assert not app.running
        assert not app.presenter.is_open
        assert app.surface.bus.count() == 0

    def test_controller_logs_as_controller(self, caplog):
        app = AreaSelectorApp(AppConfig())

        app.start()

        assert app.controller.logger.component == "controller"
        assert app.logger.component == "app"
        attached = [
            record for record in caplog.records
            if '"draw.attached"' in record.getMessage()
        ]
        assert [record.name for record in attached] == ["areasel.controller"]
        app.stop()
