"""Tests for responsive chart adjustments."""
from __future__ import annotations

from datetime import date, timedelta

import pytest
from matplotlib.figure import Figure

from gui.charting import chart_registry, ChartRequest, DataPoint
from gui.charting.responsive import MAX_XTICKS_DENSE, apply_responsive_rules


def test_wide_chart_keeps_ticks(sample_points):
    result = chart_registry.build(
        ChartRequest(chart_type="price.line", data={"points": sample_points}, options={"width": 960})
    )
    assert result.meta["x_ticks_reduced"] is False
    assert result.meta["width_px"] == pytest.approx(960)


def test_narrow_figure_thins_dense_ticks():
    fig = Figure(figsize=(3, 2), dpi=100)
    ax = fig.add_subplot(111)
    ax.set_xticks(list(range(MAX_XTICKS_DENSE + 6)))
    meta = apply_responsive_rules(fig)
    assert meta["x_ticks_reduced"] is True
    assert len(ax.get_xticks()) == (MAX_XTICKS_DENSE + 6 + 1) // 2
    assert fig._rp_responsive is meta


def test_narrow_price_chart_builds():
    points = [DataPoint(date(2020, 1, 1) + timedelta(days=i), float(i)) for i in range(400)]
    result = chart_registry.build(
        ChartRequest(chart_type="price.line", data={"points": points}, options={"width": 300, "height": 200})
    )
    assert result.meta["width_px"] == pytest.approx(300)
    assert result.widget is not None
