"""Responsive layout adaptation utilities.

Rule: if the figure is narrower than MIN_DENSE_WIDTH px and an axes carries
more than MAX_XTICKS_DENSE x ticks, keep every second tick.

Metadata is attached to the matplotlib Figure via a private attribute
``_rp_responsive`` so the registry can merge it into ChartResult.meta.
"""

from __future__ import annotations

from typing import Any

MIN_DENSE_WIDTH = 450  # px
MAX_XTICKS_DENSE = 14


def apply_responsive_rules(fig: Any) -> dict[str, Any]:
    width_px = fig.get_figwidth() * fig.dpi
    meta: dict[str, Any] = {"x_ticks_reduced": False, "width_px": width_px}
    if width_px < MIN_DENSE_WIDTH:
        for ax in fig.axes:
            ticks = ax.get_xticks()
            if len(ticks) > MAX_XTICKS_DENSE:
                ax.set_xticks(ticks[::2])
                meta["x_ticks_reduced"] = True
    fig._rp_responsive = meta  # type: ignore[attr-defined]
    return meta
