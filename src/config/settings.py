"""Global configuration and constants for the price chart."""

from __future__ import annotations

import os
from typing import Final

DEFAULT_DATA_SOURCE: Final = os.environ.get("PRICECHART_DATA_SOURCE", "chart1/data.tsv")
DEFAULT_USER_AGENT: Final = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/115.0 Safari/537.36"
)
DEFAULT_TIMEOUT: Final = 15  # seconds

# Outer surface size in pixels; the inner drawing rectangle excludes margins
DEFAULT_WIDTH: Final = int(os.environ.get("PRICECHART_WIDTH", "960"))
DEFAULT_HEIGHT: Final = int(os.environ.get("PRICECHART_HEIGHT", "500"))
DEFAULT_DPI: Final = 100

MARGIN_TOP: Final = 20
MARGIN_RIGHT: Final = 20
MARGIN_BOTTOM: Final = 30
MARGIN_LEFT: Final = 50

# Input columns / formats
DATE_COLUMN: Final = "date"
CLOSE_COLUMN: Final = "close"
DATE_FORMAT: Final = "%Y-%m-%d"

# Focus marker
FOCUS_RADIUS: Final = 4.5  # px
FOCUS_LABEL_OFFSET: Final = 9  # px, right of the circle
Y_AXIS_LABEL: Final = "Price ($)"
LINE_COLOR: Final = "steelblue"
LINE_WIDTH: Final = 1.5
