"""
Coordinate modal for selected areas.

Purely presentational: receives AreaCoordinates, renders one row per ring
point with fixed-precision lat/lng, opens on show() and hides on close().
"""

import html
from typing import Dict, List, Optional

import ipywidgets as widgets

from areasel_draw.geometry import AreaCoordinates
from areasel_draw.logging import LogEvent, StructuredLogger, create_logger

LABELS: Dict[str, Dict[str, str]] = {
    'ru': {
        'content_label': "Выделенная область",
        'title': "Координаты выделенной области",
        'empty': "Нет данных",
        'close': "Закрыть",
    },
    'en': {
        'content_label': "Selected area",
        'title': "Selected area coordinates",
        'empty': "No data",
        'close': "Close",
    },
}


def format_coordinate_rows(area: Optional[AreaCoordinates], precision: int = 6) -> List[str]:
    """
    One display row per ring point.

    Example:
        >>> format_coordinate_rows(area)[0]
        '1. lat: 10.500000  lng: 20.000000'
    """
    if area is None:
        return []
    return [
        f"{index}. lat: {point.lat:.{precision}f}  lng: {point.lng:.{precision}f}"
        for index, point in enumerate(area, start=1)
    ]


class AreaPresenter:
    """
    ipywidgets modal listing the selected area's corners.

    Example:
        presenter = AreaPresenter(locale="en")
        handle = attach(surface, on_area_selected=presenter.show)
        display(presenter.widget)
    """

    def __init__(
        self,
        locale: str = "ru",
        precision: int = 6,
        logger: Optional[StructuredLogger] = None,
    ):
        if locale not in LABELS:
            raise ValueError(
                f"Invalid locale: {locale}. Must be one of {sorted(LABELS)}"
            )
        self.labels = LABELS[locale]
        self.precision = precision
        self.logger = logger or create_logger("presenter")

        self.area: Optional[AreaCoordinates] = None
        self._open = False

        self._title = widgets.HTML(value=f"<h2>{html.escape(self.labels['title'])}</h2>")
        self._rows = widgets.HTML()
        self._close_button = widgets.Button(description=self.labels['close'])
        self._close_button.on_click(lambda _button: self.close())

        self.widget = widgets.VBox(
            [self._title, self._rows, self._close_button],
            layout=widgets.Layout(display='none', border='1px solid #ccc', padding='8px'),
            tooltip=self.labels['content_label'],
        )
        self.widget.add_class("modal")
        self._render()

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def rows(self) -> List[str]:
        return format_coordinate_rows(self.area, self.precision)

    def show(self, area: AreaCoordinates) -> None:
        """Replace the displayed area and open the modal."""
        self.area = area
        self._render()
        self.open()
        self.logger.info(
            event=LogEvent.AREA_PRESENTED,
            message="Area presented",
            metadata={'rows': len(area)}
        )

    def open(self) -> None:
        self._open = True
        self.widget.layout.display = 'flex'

    def close(self) -> None:
        self._open = False
        self.widget.layout.display = 'none'

    def _render(self) -> None:
        rows = self.rows
        if not rows:
            self._rows.value = f"<p>{html.escape(self.labels['empty'])}</p>"
            return
        items = "".join(
            f'<div class="coord-row">{html.escape(row)}</div>' for row in rows
        )
        self._rows.value = f'<div class="coords-list">{items}</div>'
