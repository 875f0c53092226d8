"""PriceChartView: Qt widget hosting the interactive price chart.

The chart canvas (matplotlib QtAgg) is built through the chart registry
from an already loaded series, so the widget itself never performs I/O.
"""

from __future__ import annotations

from typing import Optional, Sequence

from PyQt6.QtWidgets import QLabel, QVBoxLayout, QWidget

from config import settings
from gui.charting import ChartRequest, DataPoint, chart_registry
from gui.charting.price_chart import PriceChartRenderer


class PriceChartView(QWidget):
    def __init__(
        self,
        points: Sequence[DataPoint],
        *,
        title: str = "Closing price",
        width: int = settings.DEFAULT_WIDTH,
        height: int = settings.DEFAULT_HEIGHT,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle(title)
        self._title = title
        self.result = chart_registry.build(
            ChartRequest(
                chart_type="price.line",
                data={"points": list(points)},
                options={"width": width, "height": height, "interactive": True},
            )
        )
        self._build_ui()

    def _build_ui(self):
        root = QVBoxLayout(self)
        self.title_label = QLabel(self._title)
        self.title_label.setObjectName("viewTitleLabel")
        root.addWidget(self.title_label)
        root.addWidget(self.result.widget)

    @property
    def renderer(self) -> PriceChartRenderer:
        return self.result.meta["renderer"]


def launch(points: Sequence[DataPoint], *, title: str = "Closing price", width: int | None = None, height: int | None = None) -> int:
    """Show the chart in its own window and run the Qt event loop."""
    import sys
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication(sys.argv)
    view = PriceChartView(
        points,
        title=title,
        width=width or settings.DEFAULT_WIDTH,
        height=height or settings.DEFAULT_HEIGHT,
    )
    view.show()
    return app.exec()
