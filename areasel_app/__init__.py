"""
Area Selector Application
=========================

Bounded Context: Notebook / Voila front end.

    areasel_app/
    ├── config.py      # AppConfig (+ DrawConfig, PresenterConfig, MQTTConfig) from YAML
    ├── presenter.py   # AreaPresenter modal, format_coordinate_rows
    └── app.py         # AreaSelectorApp composition
"""

from areasel_app.presenter import AreaPresenter, LABELS, format_coordinate_rows
from areasel_app.config import (
    AppConfig,
    DrawConfig,
    PresenterConfig,
    MQTTConfig,
)
from areasel_app.app import AreaSelectorApp

__all__ = [
    "AreaPresenter",
    "LABELS",
    "format_coordinate_rows",
    "AppConfig",
    "DrawConfig",
    "PresenterConfig",
    "MQTTConfig",
    "AreaSelectorApp",
]
