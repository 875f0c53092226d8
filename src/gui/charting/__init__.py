"""Charting layer for the closing-price chart.

Hides the concrete plotting backend (matplotlib, QtAgg canvas for the GUI,
Agg canvas for export/headless use) behind a small registry API.
"""

from .backends import MatplotlibChartBackend  # noqa: F401
from .price_chart import FocusMarker, Margins, PriceChartRenderer, build_scales  # noqa: F401
from .price_data import (  # noqa: F401
    DataLoadError,
    DataPoint,
    EmptyDatasetError,
    load_price_series,
    nearest_point,
)
from .registry import chart_registry, register_chart_type  # noqa: F401
from .types import ChartRequest, ChartResult  # noqa: F401
