"""Interactive closing-price line chart.

``PriceChartRenderer`` owns the whole pipeline for one chart:

    renderer = PriceChartRenderer("chart1/data.tsv", figure)
    await renderer.render()          # load -> scales -> axes/line -> hover handlers

The outer pixel size is read from the surface (a matplotlib Figure); the
inner drawing rectangle is that size minus the margins. Scales map into the
inner rectangle with y growing downwards (``[height, 0]``), so the focus
marker position is expressed in the same pixel space as the pointer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from config import settings

from .backends import MatplotlibChartBackend
from .formatting import format_currency
from .price_data import DataPoint, EmptyDatasetError, load_price_series, nearest_point
from .scales import LinearScale, TimeScale, extent, line_path

_logger = logging.getLogger(__name__)

__all__ = ["Margins", "FocusMarker", "PriceChartRenderer", "build_scales"]


@dataclass(frozen=True)
class Margins:
    top: int = settings.MARGIN_TOP
    right: int = settings.MARGIN_RIGHT
    bottom: int = settings.MARGIN_BOTTOM
    left: int = settings.MARGIN_LEFT


@dataclass
class FocusMarker:
    """Transient hover state; (x, y) are inner-rectangle pixels."""

    visible: bool = False
    x: float = 0.0
    y: float = 0.0
    label: str = ""
    point: Optional[DataPoint] = None


def build_scales(data: Sequence[DataPoint], width: float, height: float) -> Tuple[TimeScale, LinearScale]:
    """Scales over the full extent of ``data`` onto ``[0, width]`` / ``[height, 0]``."""
    if not data:
        raise EmptyDatasetError("cannot build scales for an empty dataset")
    dates = [p.date for p in data]
    x = TimeScale((min(dates), max(dates)), (0, width), round=True)
    y = LinearScale(extent(p.close for p in data), (height, 0), round=True)
    return x, y


class PriceChartRenderer:
    def __init__(
        self,
        source: Any,
        surface: Any,
        *,
        margins: Optional[Margins] = None,
        backend: Optional[MatplotlibChartBackend] = None,
    ) -> None:
        self.source = source
        self.surface = surface
        self.margins = margins or Margins()
        self.backend = backend or MatplotlibChartBackend(interactive=False)
        outer_w = round(surface.get_figwidth() * surface.dpi)
        outer_h = round(surface.get_figheight() * surface.dpi)
        self.width = outer_w - self.margins.left - self.margins.right
        self.height = outer_h - self.margins.top - self.margins.bottom
        self.data: Tuple[DataPoint, ...] = ()
        self.x: Optional[TimeScale] = None
        self.y: Optional[LinearScale] = None
        self.path_data = ""
        self.focus = FocusMarker()
        self.ax: Any = None
        self.line: Any = None
        self._focus_artists: Any = None
        self._connections: List[int] = []

    @property
    def drawn(self) -> bool:
        return self.ax is not None

    async def render(self) -> "PriceChartRenderer":
        """Load the source, then draw. A load failure propagates and nothing is drawn."""
        data = await load_price_series(self.source)
        self.draw(data)
        return self

    def draw(self, data: Sequence[DataPoint]) -> None:
        """Build scales, axes, line and focus marker, then wire pointer handlers.

        ``path_data`` is the SVG path form of the drawn line, in the same inner
        rectangle pixels as the scales (y downwards). matplotlib draws that line
        from the raw dates and closes with axes limits equal to the scale domains.
        """
        if self.drawn:
            raise RuntimeError("chart already drawn on this surface")
        if not data:
            raise EmptyDatasetError("cannot draw an empty dataset")
        self.data = tuple(data)
        self.x, self.y = build_scales(self.data, self.width, self.height)
        self.ax = self.backend.create_plot_area(self.surface, self.margins)
        self.backend.draw_axes(self.ax, self.x.domain, self.y.domain, settings.Y_AXIS_LABEL)
        self.path_data = line_path(self.data, self.x, self.y)
        self.line = self.backend.draw_line(
            self.ax, [p.date for p in self.data], [p.close for p in self.data]
        )
        self._focus_artists = self.backend.create_focus_artists(self.ax)
        self._connections = self.backend.connect_pointer_events(
            self.ax,
            self.on_pointer_enter,
            self.on_pointer_leave,
            lambda fx: self.on_pointer_move(fx * self.width),
        )
        _logger.debug(
            "Drew %d points into %dx%d inner rectangle", len(self.data), self.width, self.height
        )

    # --- pointer handlers ----------------------------------------------
    def on_pointer_enter(self) -> None:
        self.focus.visible = True
        self._sync_focus()

    def on_pointer_leave(self) -> None:
        self.focus.visible = False
        self._sync_focus()

    def on_pointer_move(self, pixel_x: float) -> DataPoint:
        """Move the focus marker to the point nearest the pointer column ``pixel_x``."""
        if self.x is None or self.y is None:
            raise RuntimeError("chart not drawn yet")
        found = nearest_point(self.data, self.x.invert(pixel_x))
        self.focus.x = self.x(found.date)
        self.focus.y = self.y(found.close)
        self.focus.label = format_currency(found.close)
        self.focus.point = found
        self._sync_focus()
        return found

    def _sync_focus(self) -> None:
        if self._focus_artists is None:
            return
        fx = self.focus.x / self.width if self.width else 0.5
        fy = 1.0 - self.focus.y / self.height if self.height else 0.5
        self.backend.update_focus(
            self.ax, self._focus_artists, fx, fy, self.focus.label, self.focus.visible
        )
