"""
Configuration schema for the area selector application.

Map view, tile layer, drawing style, presenter locale and the optional MQTT
sink. Loaded from YAML and validated at startup.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from areasel_draw.surface import DrawOptions, ShapeStyle
from areasel_map.tiles import MapConfig, TileConfig

from .presenter import LABELS


@dataclass(frozen=True)
class DrawConfig:
    """Rectangle tool placement and style."""

    position: str = "topleft"
    color: str = "#3388ff"
    weight: int = 4
    opacity: float = 0.5
    fill_opacity: float = 0.2

    def __post_init__(self):
        """Validate by building the options once."""
        self.to_options()

    def to_options(self) -> DrawOptions:
        return DrawOptions(
            position=self.position,
            style=ShapeStyle(
                color=self.color,
                weight=self.weight,
                opacity=self.opacity,
                fill_opacity=self.fill_opacity,
            ),
        )


@dataclass(frozen=True)
class PresenterConfig:
    """Coordinate modal settings."""

    locale: str = "ru"
    precision: int = 6

    def __post_init__(self):
        if self.locale not in LABELS:
            raise ValueError(
                f"Invalid locale: {self.locale}. Must be one of {sorted(LABELS)}"
            )
        if not 0 <= self.precision <= 12:
            raise ValueError(f"precision must be in [0, 12], got {self.precision}")


@dataclass(frozen=True)
class MQTTConfig:
    """MQTT broker configuration for the area sink."""

    broker: str
    port: int = 1883
    username: Optional[str] = None
    password: Optional[str] = None
    qos: int = 0

    area_topic: str = "areasel/areas/{app_id}"

    def __post_init__(self):
        if not self.broker:
            raise ValueError("MQTT broker cannot be empty")
        if not 1 <= self.port <= 65535:
            raise ValueError(
                f"MQTT port must be in [1, 65535], got {self.port}"
            )
        if self.qos not in {0, 1, 2}:
            raise ValueError(
                f"MQTT QoS must be 0, 1, or 2, got {self.qos}"
            )

    def topic_for(self, app_id: str) -> str:
        return self.area_topic.format(app_id=app_id)


@dataclass(frozen=True)
class AppConfig:
    """
    Main configuration for the area selector.

    Immutable after construction (frozen dataclass).
    """

    app_id: str = "area_selector"
    map_config: MapConfig = field(default_factory=MapConfig)
    tile_config: TileConfig = field(default_factory=TileConfig)
    draw_config: DrawConfig = field(default_factory=DrawConfig)
    presenter_config: PresenterConfig = field(default_factory=PresenterConfig)
    mqtt_config: Optional[MQTTConfig] = None

    def __post_init__(self):
        if not self.app_id:
            raise ValueError("app_id cannot be empty")

    @property
    def area_topic(self) -> Optional[str]:
        if self.mqtt_config is None:
            return None
        return self.mqtt_config.topic_for(self.app_id)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AppConfig":
        """
        Build configuration from a parsed YAML mapping.

        Raises:
            ValueError: If a section has unknown keys or invalid values
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        try:
            map_data = dict(data.get("map_config") or {})
            if "center" in map_data:
                map_data["center"] = tuple(map_data["center"])
            map_config = MapConfig(**map_data)

            tile_config = TileConfig(**(data.get("tile_config") or {}))
            draw_config = DrawConfig(**(data.get("draw_config") or {}))
            presenter_config = PresenterConfig(**(data.get("presenter_config") or {}))

            mqtt_data = data.get("mqtt_config")
            mqtt_config = MQTTConfig(**mqtt_data) if mqtt_data else None
        except TypeError as e:
            raise ValueError(f"Invalid config section: {e}")

        return cls(
            app_id=data.get("app_id", "area_selector"),
            map_config=map_config,
            tile_config=tile_config,
            draw_config=draw_config,
            presenter_config=presenter_config,
            mqtt_config=mqtt_config,
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            app_id: "moscow_selector"

            map_config:
              center: [55.751244, 37.618423]
              zoom: 10
              box_zoom: false

            tile_config:
              url: "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"

            draw_config:
              position: "topleft"
              color: "#3388ff"

            presenter_config:
              locale: "ru"
              precision: 6

            mqtt_config:
              broker: "localhost"
              port: 1883

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML or its values are invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}")

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict (YAML/JSON friendly)."""
        data = asdict(self)
        data["map_config"]["center"] = list(self.map_config.center)
        if self.mqtt_config is None:
            data.pop("mqtt_config")
        return data
