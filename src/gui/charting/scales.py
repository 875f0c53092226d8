"""Continuous scales and line path generation.

Scales map a data domain onto a pixel range and back:

    x = TimeScale((first_date, last_date), (0, width), round=True)
    x(some_date)        # -> pixel column
    x.invert(pixel)     # -> datetime

A degenerate domain (min == max) maps every value to the middle of the
range. With ``round=True`` outputs are rounded half-up to whole pixels;
``invert`` is never rounded.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Sequence, Tuple

from .price_data import DataPoint, to_days

__all__ = ["LinearScale", "TimeScale", "extent", "line_path"]


def extent(values: Iterable[float]) -> Tuple[float, float]:
    """Return (min, max) ignoring NaN; (nan, nan) when nothing is left."""
    finite = [v for v in values if not math.isnan(v)]
    if not finite:
        return (math.nan, math.nan)
    return (min(finite), max(finite))


def _normalizer(a: float, b: float) -> Callable[[float], float]:
    span = b - a
    if math.isnan(span):
        return lambda v: math.nan
    if span == 0:
        return lambda v: 0.5
    return lambda v: (v - a) / span


def _round_half_up(v: float) -> float:
    return v if math.isnan(v) else float(math.floor(v + 0.5))


class LinearScale:
    def __init__(
        self,
        domain: Tuple[float, float],
        range: Tuple[float, float],
        *,
        round: bool = False,
    ) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))
        self.round = round

    def __call__(self, value: float) -> float:
        t = _normalizer(*self.domain)(float(value))
        r0, r1 = self.range
        out = r0 * (1 - t) + r1 * t
        return _round_half_up(out) if self.round else out

    def invert(self, pixel: float) -> float:
        t = _normalizer(*self.range)(float(pixel))
        d0, d1 = self.domain
        return d0 * (1 - t) + d1 * t

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"{type(self).__name__}(domain={self.domain}, range={self.range}, round={self.round})"


class TimeScale:
    """Linear scale over calendar time (fractional days)."""

    def __init__(
        self,
        domain: Tuple[date, date],
        range: Tuple[float, float],
        *,
        round: bool = False,
    ) -> None:
        self.domain = domain
        self._linear = LinearScale((to_days(domain[0]), to_days(domain[1])), range, round=round)

    @property
    def range(self) -> Tuple[float, float]:
        return self._linear.range

    def __call__(self, value: date) -> float:
        return self._linear(to_days(value))

    def invert(self, pixel: float) -> datetime:
        days = self._linear.invert(pixel)
        whole = math.floor(days)
        return datetime.fromordinal(whole) + timedelta(days=days - whole)


def _fmt(v: float) -> str:
    if math.isnan(v):
        return "NaN"
    return str(int(v)) if float(v).is_integer() else repr(float(v))


def line_path(
    data: Sequence[DataPoint],
    x: Callable[[date], float],
    y: Callable[[float], float],
) -> str:
    """Return SVG path data joining the scaled points with straight segments."""
    parts = []
    for idx, point in enumerate(data):
        cmd = "M" if idx == 0 else "L"
        parts.append(f"{cmd}{_fmt(x(point.date))},{_fmt(y(point.close))}")
    return "".join(parts)
