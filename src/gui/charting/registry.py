"""Chart registry.

Allows registering logical chart types decoupled from the concrete backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Any
from time import perf_counter

from config import settings

from .types import ChartRequest, ChartResult
from .backends import MatplotlibChartBackend
from .price_chart import Margins, PriceChartRenderer
from .price_data import DataPoint, EmptyDatasetError


@dataclass
class ChartType:
    """Metadata for a registered chart type."""

    chart_type: str
    builder: Callable[[ChartRequest, MatplotlibChartBackend], ChartResult]
    description: str


class ChartRegistry:
    def __init__(self, backend: MatplotlibChartBackend | None = None) -> None:
        self._types: Dict[str, ChartType] = {}
        self._backend = backend or MatplotlibChartBackend(interactive=False)

    def register(self, chart_type: str, builder, description: str) -> None:
        if chart_type in self._types:
            raise ValueError(f"Chart type already registered: {chart_type}")
        self._types[chart_type] = ChartType(chart_type, builder, description)

    def build(self, req: ChartRequest) -> ChartResult:
        """Eagerly build the requested chart and record build duration (ms)."""
        ct = self._types.get(req.chart_type)
        if ct is None:
            raise KeyError(f"Unknown chart type: {req.chart_type}")
        start = perf_counter()
        result = ct.builder(req, self._backend)
        elapsed = (perf_counter() - start) * 1000.0
        # Do not override if builder already set build_ms
        result.meta.setdefault("build_ms", elapsed)
        return result

    def build_lazy(self, req: ChartRequest) -> "LazyChartProxy":
        return LazyChartProxy(self, req)

    def list_types(self) -> Dict[str, str]:
        return {k: v.description for k, v in self._types.items()}


chart_registry = ChartRegistry()


class LazyChartProxy:
    """Proxy object deferring chart construction until first access.

    Access the `widget` property (or call materialize()) to trigger build.
    Subsequent accesses reuse the cached ChartResult.
    """

    __slots__ = ("_registry", "_req", "_result")

    def __init__(self, registry: ChartRegistry, req: ChartRequest) -> None:
        self._registry = registry
        self._req = req
        self._result: ChartResult | None = None

    def materialize(self) -> ChartResult:
        if self._result is None:
            self._result = self._registry.build(self._req)
            self._result.meta.setdefault("lazy", True)
        return self._result

    @property
    def widget(self):  # noqa: D401
        return self.materialize().widget

    @property
    def meta(self) -> Dict[str, Any]:  # allow inspection even before build
        if self._result is None:
            return {"lazy": True, "built": False}
        return self._result.meta


def register_chart_type(chart_type: str, builder, description: str) -> None:
    chart_registry.register(chart_type, builder, description)


# ---------------- Built-in price line chart -----------------------------


def _coerce_point(item) -> DataPoint:
    if isinstance(item, DataPoint):
        return item
    date_value, close = item
    return DataPoint(date_value, float(close))


def _coerce_margins(value) -> Margins:
    if value is None:
        return Margins()
    if isinstance(value, Margins):
        return value
    if isinstance(value, dict):
        return Margins(**value)
    raise TypeError("margins must be a Margins instance or dict")


def _price_line_builder(req: ChartRequest, backend: MatplotlibChartBackend) -> ChartResult:
    data = req.data
    if not isinstance(data, dict):
        raise TypeError("Price line chart expects dict with 'points' key")
    points = data.get("points")
    if not points:
        raise EmptyDatasetError("No points provided")
    opts = req.options or {}
    if opts.get("interactive") and not backend.interactive:
        backend = MatplotlibChartBackend(interactive=True)
    fig = backend.create_surface(
        int(opts.get("width", settings.DEFAULT_WIDTH)),
        int(opts.get("height", settings.DEFAULT_HEIGHT)),
        int(opts.get("dpi", settings.DEFAULT_DPI)),
    )
    renderer = PriceChartRenderer(
        data.get("source"), fig, margins=_coerce_margins(opts.get("margins")), backend=backend
    )
    renderer.draw([_coerce_point(p) for p in points])
    if opts.get("title"):
        renderer.ax.set_title(opts["title"], fontsize=10)
    meta: Dict[str, Any] = {
        "points": len(renderer.data),
        "renderer": renderer,
        "path": renderer.path_data,
    }
    meta.update(getattr(fig, "_rp_responsive", {}))
    return ChartResult(widget=fig.canvas, meta=meta)


register_chart_type("price.line", _price_line_builder, "Closing price line chart with hover readout")
