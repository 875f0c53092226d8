"""GUI view layer.

``PriceChartView`` lives in ``gui.views.price_chart_view``; it is not
re-exported here so importing ``gui.views`` does not load PyQt6.
"""
