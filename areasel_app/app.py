"""
AreaSelectorApp - map, draw controller, presenter and MQTT sink wired together

Bounded Context: Application composition
Responsibilities:
  - Build the Leaflet map surface from AppConfig
  - Attach one DrawController for the app's lifetime
  - Route each selected area to the presenter and (optionally) MQTT
  - Release everything on stop()

Usage (notebook / Voila):

    from areasel_app import AreaSelectorApp, AppConfig

    app = AreaSelectorApp(AppConfig.from_yaml("config/area_selector.yaml"))
    app.start()
    display(app.widget)
"""

from typing import Optional

import ipywidgets as widgets

from areasel_draw import AreaCoordinates, ControllerHandle, DrawController
from areasel_draw.logging import LogEvent, StructuredLogger, create_logger
from areasel_map import LeafletMapSurface
from areasel_mqtt import AreaPublisher

from .config import AppConfig
from .presenter import AreaPresenter

APP_TITLE = "Leaflet Area Selector"


class AreaSelectorApp:
    """
    One map with a rectangle tool, a coordinate modal and an optional MQTT sink.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.config = config or AppConfig()
        self.logger = logger or create_logger("app")
        draw_options = self.config.draw_config.to_options()

        self.surface = LeafletMapSurface.from_config(
            self.config.map_config,
            self.config.tile_config,
            style=draw_options.style,
        )
        self.presenter = AreaPresenter(
            locale=self.config.presenter_config.locale,
            precision=self.config.presenter_config.precision,
        )
        self.publisher = self._build_publisher()
        self.controller = DrawController(
            self.surface,
            self.on_area_selected,
            options=draw_options,
        )

        self._handle: Optional[ControllerHandle] = None
        self.widget = widgets.VBox([
            widgets.HTML(value=f"<h1>{APP_TITLE}</h1>"),
            self.surface.map,
            self.presenter.widget,
        ])

    def _build_publisher(self) -> Optional[AreaPublisher]:
        mqtt_config = self.config.mqtt_config
        if mqtt_config is None:
            return None
        return AreaPublisher(
            broker_host=mqtt_config.broker,
            broker_port=mqtt_config.port,
            topic=self.config.area_topic,
            app_id=self.config.app_id,
            logger=create_logger("publisher"),
            client_id=f"areasel_{self.config.app_id}",
            username=mqtt_config.username,
            password=mqtt_config.password,
            qos=mqtt_config.qos,
        )

    @property
    def running(self) -> bool:
        return self._handle is not None and self._handle.attached

    def start(self, connect_timeout: float = 5.0) -> ControllerHandle:
        """
        Attach the drawing tool (and connect the MQTT sink if configured).

        A broker that cannot be reached does not stop drawing; publish
        attempts are logged as failures until it comes up.
        """
        if self.running:
            return self._handle
        self._handle = self.controller.attach()
        if self.publisher is not None and not self.publisher.connect(timeout=connect_timeout):
            self.logger.warning(
                event=LogEvent.MQTT_CONNECTION_ERROR,
                message="MQTT sink unreachable, selections are shown but not published",
                metadata={'topic': self.config.area_topic}
            )
        return self._handle

    def stop(self) -> None:
        """
        Detach the drawing tool and disconnect MQTT. Safe to call repeatedly.

        The controller lifecycle is one-way: a stopped app cannot be started
        again (build a new AreaSelectorApp instead).
        """
        if self._handle is not None:
            self._handle.detach()
        if self.publisher is not None:
            self.publisher.disconnect()
        self.presenter.close()

    def on_area_selected(self, area: AreaCoordinates) -> None:
        self.presenter.show(area)
        if self.publisher is not None:
            self.publisher.publish_selection(area)
