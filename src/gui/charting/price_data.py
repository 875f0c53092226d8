"""Price series loading and nearest-point lookup.

A price series is an immutable, date-ascending tuple of ``DataPoint``. It is
loaded once from a tab-separated source (local path or http(s) URL) with at
least the columns ``date`` (YYYY-MM-DD) and ``close`` (decimal).

Parsing rules:
 - An unparseable date aborts the load (``DataLoadError``); ordering depends on it.
 - A non-numeric close becomes ``nan`` and is logged; the chart degrades instead of failing.
 - Rows out of date order are stably sorted (with a warning) so bisection stays valid.
"""

from __future__ import annotations

import asyncio
import csv
import io
import logging
import math
import os
from bisect import bisect_left
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence, Tuple

import httpx

from config import settings
from core import async_http, filesystem

_logger = logging.getLogger(__name__)

__all__ = [
    "DataPoint",
    "DataLoadError",
    "EmptyDatasetError",
    "parse_tsv",
    "load_price_series",
    "nearest_point",
    "to_days",
]

_SECONDS_PER_DAY = 86400.0


class DataLoadError(RuntimeError):
    """Raised when the data source is unreachable or malformed."""


class EmptyDatasetError(ValueError):
    """Raised when an operation needs at least one data point."""


@dataclass(frozen=True)
class DataPoint:
    date: date
    close: float


def to_days(value: date) -> float:
    """Return ``value`` as a fractional day number (proleptic ordinal).

    Plain dates map to whole days; datetimes add the elapsed fraction of
    their day, so both can be compared on a single axis.
    """
    days = float(value.toordinal())
    if isinstance(value, datetime):
        seconds = value.hour * 3600 + value.minute * 60 + value.second + value.microsecond / 1e6
        days += seconds / _SECONDS_PER_DAY
    return days


def _point_days(point: DataPoint) -> float:
    return to_days(point.date)


def _parse_close(raw: Optional[str], line_num: int) -> float:
    try:
        return float(raw) if raw is not None else math.nan
    except ValueError:
        _logger.warning("Non-numeric close %r on line %d", raw, line_num)
        return math.nan


def parse_tsv(text: str, *, source: str = "<string>") -> Tuple[DataPoint, ...]:
    """Parse tab-separated ``text`` into a date-ascending tuple of points.

    A leading UTF-8 byte-order mark is ignored.
    """
    reader = csv.DictReader(io.StringIO(text.removeprefix("\ufeff")), delimiter="\t")
    points: list[DataPoint] = []
    try:
        fields = reader.fieldnames or []
        missing = [c for c in (settings.DATE_COLUMN, settings.CLOSE_COLUMN) if c not in fields]
        if missing:
            raise DataLoadError(f"{source}: missing column(s) {', '.join(missing)}")
        for row in reader:
            raw_date = row.get(settings.DATE_COLUMN)
            try:
                parsed = datetime.strptime((raw_date or "").strip(), settings.DATE_FORMAT).date()
            except ValueError as e:
                raise DataLoadError(
                    f"{source}: unparseable date {raw_date!r} on line {reader.line_num}"
                ) from e
            points.append(DataPoint(parsed, _parse_close(row.get(settings.CLOSE_COLUMN), reader.line_num)))
    except csv.Error as e:
        raise DataLoadError(f"{source}: malformed TSV near line {reader.line_num}: {e}") from e
    if any(a.date > b.date for a, b in zip(points, points[1:])):
        _logger.warning("%s: rows not in date order, sorting", source)
        points.sort(key=_point_days)
    return tuple(points)


async def load_price_series(
    source: str | os.PathLike[str],
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple[DataPoint, ...]:
    """Load and parse a price series from a local path or http(s) URL.

    Any failure raises ``DataLoadError``; there is no retry and no partial result.
    """
    src = os.fspath(source)
    if async_http.is_url(src):
        try:
            text = await async_http.fetch(src, client=client)
        except async_http.AsyncHttpError as e:
            raise DataLoadError(f"{src}: {e}") from e
    else:
        try:
            text = await asyncio.to_thread(filesystem.read_text, src)
        except (OSError, UnicodeDecodeError) as e:
            raise DataLoadError(f"{src}: {e}") from e
    points = parse_tsv(text, source=src)
    _logger.info("Loaded %d price points from %s", len(points), src)
    return points


def nearest_point(data: Sequence[DataPoint], pointer: date) -> DataPoint:
    """Return the point whose date is closest to ``pointer``.

    Bisection starts at index 1 so the left candidate always exists. When the
    pointer sits exactly between two points the earlier one wins.
    """
    if not data:
        raise EmptyDatasetError("nearest_point requires at least one data point")
    q = to_days(pointer)
    i = bisect_left(data, q, lo=1, key=_point_days)
    d0 = data[i - 1]
    if i == len(data):
        return d0
    d1 = data[i]
    return d1 if q - _point_days(d0) > _point_days(d1) - q else d0
