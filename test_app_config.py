"""
Presenter, application config and CLI tests.

Usage:
    pytest test_app_config.py
"""

import pytest
import yaml

from areasel_app import (
    LABELS,
    AppConfig,
    AreaPresenter,
    MQTTConfig,
    PresenterConfig,
    format_coordinate_rows,
)
from areasel_cli.cli import build_parser, main, show_config
from areasel_draw import AreaCoordinates, LatLngBounds
from areasel_map import MapConfig

EXAMPLE_CONFIG = """
app_id: "moscow_selector"

map_config:
  center: [55.751244, 37.618423]
  zoom: 12

presenter_config:
  locale: "en"
  precision: 4

mqtt_config:
  broker: "mqtt.local"
  port: 1884
  password: "secret"
  username: "selector"
"""


@pytest.fixture
def area():
    return AreaCoordinates.from_bounds(
        LatLngBounds(south=10.0, west=20.0, north=10.5, east=20.5)
    )


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "area_selector.yaml"
    path.write_text(EXAMPLE_CONFIG, encoding="utf-8")
    return path


class TestCoordinateRows:
    def test_rows_follow_ring_order(self, area):
        assert format_coordinate_rows(area) == [
            "1. lat: 10.500000  lng: 20.000000",
            "2. lat: 10.500000  lng: 20.500000",
            "3. lat: 10.000000  lng: 20.500000",
            "4. lat: 10.000000  lng: 20.000000",
            "5. lat: 10.500000  lng: 20.000000",
        ]

    def test_precision(self, area):
        assert format_coordinate_rows(area, precision=2)[1] == "2. lat: 10.50  lng: 20.50"

    def test_no_area(self):
        assert format_coordinate_rows(None) == []


class TestAreaPresenter:
    def test_starts_closed_and_empty(self):
        presenter = AreaPresenter()

        assert not presenter.is_open
        assert presenter.rows == []
        assert "Нет данных" in presenter._rows.value
        assert presenter.widget.layout.display == 'none'

    @pytest.mark.parametrize("locale,label", [
        ("ru", "Выделенная область"),
        ("en", "Selected area"),
    ])
    def test_panel_labelled_for_locale(self, locale, label):
        presenter = AreaPresenter(locale=locale)

        assert presenter.widget.tooltip == label
        assert presenter._close_button.description == LABELS[locale]['close']

    def test_show_opens_with_rows(self, area):
        presenter = AreaPresenter(locale="en")

        presenter.show(area)

        assert presenter.is_open
        assert presenter.area is area
        assert len(presenter.rows) == 5
        assert "1. lat: 10.500000  lng: 20.000000" in presenter._rows.value
        assert presenter.widget.layout.display == 'flex'

    def test_show_replaces_previous_area(self, area):
        presenter = AreaPresenter(locale="en", precision=1)
        other = AreaCoordinates.from_bounds(
            LatLngBounds(south=1.0, west=2.0, north=3.0, east=4.0)
        )

        presenter.show(area)
        presenter.show(other)

        assert presenter.rows[0] == "1. lat: 3.0  lng: 2.0"

    def test_close_button_hides(self, area):
        presenter = AreaPresenter(locale="en")
        presenter.show(area)

        presenter._close_button.click()

        assert not presenter.is_open
        assert presenter.widget.layout.display == 'none'

    def test_unknown_locale(self):
        with pytest.raises(ValueError, match="locale"):
            AreaPresenter(locale="de")


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()

        assert config.app_id == "area_selector"
        assert config.map_config.center == (55.751244, 37.618423)
        assert config.map_config.zoom == 10
        assert config.map_config.box_zoom is False
        assert config.presenter_config.locale == "ru"
        assert config.mqtt_config is None
        assert config.area_topic is None

    def test_from_yaml(self, config_file):
        config = AppConfig.from_yaml(config_file)

        assert config.app_id == "moscow_selector"
        assert config.map_config == MapConfig(center=(55.751244, 37.618423), zoom=12)
        assert config.presenter_config == PresenterConfig(locale="en", precision=4)
        assert config.mqtt_config.broker == "mqtt.local"
        assert config.area_topic == "areasel/areas/moscow_selector"

    def test_dict_round_trip(self, config_file):
        config = AppConfig.from_yaml(config_file)
        assert AppConfig.from_dict(config.to_dict()) == config

    def test_to_dict_without_mqtt(self):
        data = AppConfig().to_dict()
        assert 'mqtt_config' not in data
        assert data['map_config']['center'] == [55.751244, 37.618423]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("map_config: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.from_yaml(path)

    @pytest.mark.parametrize("data", [
        {'app_id': ""},
        {'map_config': {'center': [95.0, 0.0]}},
        {'map_config': {'zoom': 30}},
        {'map_config': {'centre': [0.0, 0.0]}},
        {'tile_config': {'url': "https://tiles.local/static.png"}},
        {'draw_config': {'position': "middle"}},
        {'draw_config': {'fill_opacity': 1.5}},
        {'presenter_config': {'locale': "de"}},
        {'mqtt_config': {'broker': "localhost", 'port': 70000}},
        {'mqtt_config': {'broker': "localhost", 'qos': 3}},
        ["not", "a", "mapping"],
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ValueError):
            AppConfig.from_dict(data)

    def test_topic_template(self):
        mqtt_config = MQTTConfig(broker="localhost", area_topic="maps/{app_id}/selection")
        assert mqtt_config.topic_for("kiosk_1") == "maps/kiosk_1/selection"


class TestCli:
    def test_show_config_masks_password(self, config_file, capsys):
        assert show_config(str(config_file)) == 0

        out = capsys.readouterr().out
        assert "secret" not in out
        assert "# area topic: areasel/areas/moscow_selector" in out

        printed = yaml.safe_load(out)
        assert printed['mqtt_config']['password'] == "***"
        assert printed['app_id'] == "moscow_selector"

    def test_parser(self):
        args = build_parser().parse_args(
            ["--broker", "mqtt.local", "watch", "--topic", "areasel/areas/a", "--precision", "3"]
        )
        assert args.broker == "mqtt.local"
        assert args.port == 1883
        assert args.command == "watch"
        assert args.topic == "areasel/areas/a"
        assert args.precision == 3

    def test_main_without_command_exits(self):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1

    def test_main_reports_missing_config(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["show-config", str(tmp_path / "missing.yaml")])

        assert excinfo.value.code == 1
        assert "Config file not found" in capsys.readouterr().err
