"""Chart backend implementations.

Only a Matplotlib backend is provided. ``interactive=True`` attaches the
QtAgg canvas (a QWidget); ``interactive=False`` attaches the plain Agg canvas
for export and headless use. Both share one Figure API.
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Any, Callable, List, Sequence, Tuple

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.dates import AutoDateLocator, ConciseDateFormatter
from matplotlib.figure import Figure

from config import settings

from .responsive import apply_responsive_rules
from .types import ChartBackendProtocol


class FocusArtists:
    """Circle + text label making up the on-chart focus marker."""

    __slots__ = ("circle", "label")

    def __init__(self, circle, label) -> None:
        self.circle = circle
        self.label = label


class MatplotlibChartBackend(ChartBackendProtocol):
    def __init__(self, *, interactive: bool = True) -> None:
        self.interactive = interactive

    # --- surface -------------------------------------------------------
    def create_surface(self, width: int, height: int, dpi: int = settings.DEFAULT_DPI) -> Figure:
        fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        if self.interactive:
            # Qt imported lazily so headless use never loads PyQt6
            from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg

            FigureCanvasQTAgg(fig)
        else:
            FigureCanvasAgg(fig)  # attaches itself as fig.canvas
        return fig

    def create_plot_area(self, surface: Figure, margins) -> Any:
        """Add axes covering exactly the inner rectangle (outer size minus margins)."""
        w_px = surface.get_figwidth() * surface.dpi
        h_px = surface.get_figheight() * surface.dpi
        left = margins.left / w_px
        bottom = margins.bottom / h_px
        width = (w_px - margins.left - margins.right) / w_px
        height = (h_px - margins.top - margins.bottom) / h_px
        return surface.add_axes((left, bottom, width, height))

    # --- axes and line -------------------------------------------------
    def draw_axes(self, ax, x_domain: Tuple[Any, Any], y_domain: Tuple[float, float], y_label: str) -> None:
        ax.margins(0)
        x0, x1 = x_domain
        if x0 == x1:
            # degenerate extent: widen symmetrically so the point sits mid-axis like the scale does
            x0, x1 = x0 - timedelta(days=1), x1 + timedelta(days=1)
        ax.set_xlim(x0, x1)
        y0, y1 = y_domain
        if not (math.isnan(y0) or math.isnan(y1)):
            if y0 == y1:
                y0, y1 = y0 - 1, y1 + 1
            ax.set_ylim(y0, y1)
        locator = AutoDateLocator()
        ax.xaxis.set_major_locator(locator)
        ax.xaxis.set_major_formatter(ConciseDateFormatter(locator))
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)
        ax.set_ylabel(y_label)
        apply_responsive_rules(ax.figure)

    def draw_line(self, ax, dates: Sequence[Any], closes: Sequence[float]):
        (line,) = ax.plot(
            list(dates),
            list(closes),
            color=settings.LINE_COLOR,
            linewidth=settings.LINE_WIDTH,
            scalex=False,
            scaley=False,
        )
        return line

    # --- focus marker --------------------------------------------------
    def create_focus_artists(self, ax) -> FocusArtists:
        dpi = ax.figure.dpi
        (circle,) = ax.plot(
            [0.0],
            [0.0],
            marker="o",
            markersize=2 * settings.FOCUS_RADIUS * 72.0 / dpi,  # px diameter -> points
            markerfacecolor="none",
            markeredgecolor=settings.LINE_COLOR,
            transform=ax.transAxes,
            scalex=False,
            scaley=False,
        )
        label = ax.annotate(
            "",
            xy=(0.0, 0.0),
            xycoords="axes fraction",
            xytext=(settings.FOCUS_LABEL_OFFSET, 0),
            textcoords="offset pixels",
            va="center",
        )
        circle.set_visible(False)
        label.set_visible(False)
        return FocusArtists(circle, label)

    def update_focus(self, ax, artists: FocusArtists, fx: float, fy: float, label: str, visible: bool) -> None:
        """Position the marker at axes fraction (fx, fy) and redraw lazily."""
        artists.circle.set_data([fx], [fy])
        artists.label.xy = (fx, fy)
        artists.label.set_text(label)
        artists.circle.set_visible(visible)
        artists.label.set_visible(visible)
        ax.figure.canvas.draw_idle()

    # --- interaction ---------------------------------------------------
    def connect_pointer_events(
        self,
        ax,
        on_enter: Callable[[], None],
        on_leave: Callable[[], None],
        on_move: Callable[[float], None],
    ) -> List[int]:
        """Wire pointer events on ``ax``; ``on_move`` receives the x axes fraction."""
        canvas = ax.figure.canvas

        def _enter(event):
            if event.inaxes is ax:
                on_enter()

        def _leave(event):
            if event.inaxes is ax:
                on_leave()

        def _figure_leave(_event):
            on_leave()

        def _move(event):
            if event.inaxes is not ax:
                return
            fx, _fy = ax.transAxes.inverted().transform((event.x, event.y))
            on_move(float(fx))

        return [
            canvas.mpl_connect("axes_enter_event", _enter),
            canvas.mpl_connect("axes_leave_event", _leave),
            canvas.mpl_connect("figure_leave_event", _figure_leave),
            canvas.mpl_connect("motion_notify_event", _move),
        ]

    # --- export --------------------------------------------------------
    def export_widget(self, canvas, path: str, *, format: str = "png", dpi: int = 120) -> None:
        try:
            fig = canvas.figure  # type: ignore[attr-defined]
        except AttributeError as e:
            raise ValueError("Unsupported canvas type for export") from e
        if format.lower() not in {"png", "svg"}:
            raise ValueError("format must be 'png' or 'svg'")
        fig.savefig(path, format=format.lower(), dpi=dpi if format.lower() == "png" else None)
