"""Chart export utilities.

Thin helper wrapping backend export so callers stay decoupled from the
backend's concrete API.
"""
from __future__ import annotations

from core import filesystem

from . import chart_registry


def export_chart(chart_widget, path: str, *, format: str = "png", dpi: int = 120) -> None:
    """Export a chart widget to disk via the backend.

    Args:
        chart_widget: The canvas returned in ChartResult.widget.
        path: Destination file path; missing parent directories are created.
        format: 'png' or 'svg'.
        dpi: Raster resolution for PNG.
    """
    filesystem.ensure_parent_dir(path)
    backend = chart_registry._backend  # type: ignore[attr-defined]
    backend.export_widget(chart_widget, path, format=format, dpi=dpi)
