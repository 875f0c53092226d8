"""Core charting types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple


@dataclass(frozen=True)
class ChartRequest:
    """Represents a logical chart request.

    Attributes:
        chart_type: Identifier registered in the chart registry (e.g. 'price.line').
        data: Arbitrary payload (dict or list) understood by the chart builder.
        options: Optional rendering hints (size, margins, title).
    """

    chart_type: str
    data: Any
    options: Optional[Dict[str, Any]] = None


@dataclass
class ChartResult:
    """Represents the outcome of building a chart.

    ``widget`` is the matplotlib canvas (a QWidget when the Qt canvas is used).
    """

    widget: Any  # Qt type avoided to keep tests headless
    meta: Dict[str, Any]


class ChartBackendProtocol(Protocol):  # pragma: no cover - structural only
    """Protocol all chart backends must implement."""

    def create_surface(self, width: int, height: int, dpi: int) -> Any:  # Figure
        ...

    def create_plot_area(self, surface: Any, margins: Any) -> Any:  # Axes
        ...

    def draw_axes(
        self, ax: Any, x_domain: Tuple[Any, Any], y_domain: Tuple[float, float], y_label: str
    ) -> None:
        ...

    def draw_line(self, ax: Any, dates: Sequence[Any], closes: Sequence[float]) -> Any:
        ...

    def create_focus_artists(self, ax: Any) -> Any:
        ...

    def update_focus(
        self, ax: Any, artists: Any, fx: float, fy: float, label: str, visible: bool
    ) -> None:
        ...

    def connect_pointer_events(
        self,
        ax: Any,
        on_enter: Callable[[], None],
        on_leave: Callable[[], None],
        on_move: Callable[[float], None],
    ) -> List[int]:
        ...
