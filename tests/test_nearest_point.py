"""Tests for nearest-point lookup used by the hover readout."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from gui.charting.price_data import DataPoint, EmptyDatasetError, nearest_point, to_days


def _brute_force(data, q):
    best = data[0]
    for p in data[1:]:
        if abs(to_days(p.date) - to_days(q)) < abs(to_days(best.date) - to_days(q)):
            best = p
    return best


def test_exact_match_returns_that_point(sample_points):
    for p in sample_points:
        assert nearest_point(sample_points, p.date) is p
        assert nearest_point(sample_points, datetime(p.date.year, p.date.month, p.date.day)) is p


def test_matches_brute_force_inside_domain(sample_points):
    start = datetime(2012, 4, 27)
    # hourly steps over the full extent, skipping exact midpoints (ties checked separately)
    for hour in range(0, 7 * 24 + 1):
        q = start + timedelta(hours=hour, minutes=7)
        if q.date() > sample_points[-1].date:
            break
        assert nearest_point(sample_points, q) == _brute_force(sample_points, q)


def test_tie_goes_to_earlier_point():
    data = (DataPoint(date(2020, 1, 1), 100.0), DataPoint(date(2020, 1, 3), 104.0))
    assert nearest_point(data, date(2020, 1, 2)) == data[0]
    assert nearest_point(data, datetime(2020, 1, 2, 0, 0, 1)) == data[1]


def test_before_first_returns_first(sample_points):
    assert nearest_point(sample_points, date(2000, 1, 1)) == sample_points[0]


def test_after_last_returns_last(sample_points):
    assert nearest_point(sample_points, date(2030, 1, 1)) == sample_points[-1]


def test_single_point():
    only = DataPoint(date(2020, 5, 5), 1.0)
    assert nearest_point([only], date(2019, 1, 1)) is only
    assert nearest_point([only], date(2021, 1, 1)) is only


def test_empty_dataset_raises():
    with pytest.raises(EmptyDatasetError):
        nearest_point([], date(2020, 1, 1))


def test_to_days_fraction():
    assert to_days(datetime(2020, 1, 1, 12)) - to_days(date(2020, 1, 1)) == pytest.approx(0.5)
