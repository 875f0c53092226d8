"""Tests for price series parsing and async loading."""

from __future__ import annotations

import asyncio
import logging
import math
from datetime import date

import httpx
import pytest

from gui.charting.price_data import DataLoadError, DataPoint, load_price_series, parse_tsv


def test_parse_tsv_converts_types():
    points = parse_tsv("date\tclose\n2020-01-01\t100.5\n2020-01-03\t104\n")
    assert points == (
        DataPoint(date(2020, 1, 1), 100.5),
        DataPoint(date(2020, 1, 3), 104.0),
    )
    assert isinstance(points, tuple)


def test_parse_tsv_ignores_extra_columns():
    text = "date\topen\tclose\tvolume\n2020-01-01\t99\t100\t12000\n"
    (point,) = parse_tsv(text)
    assert point.close == 100.0


def test_parse_tsv_header_only_is_empty():
    assert parse_tsv("date\tclose\n") == ()


def test_parse_tsv_missing_column():
    with pytest.raises(DataLoadError) as exc:
        parse_tsv("date\tprice\n2020-01-01\t1\n", source="prices.tsv")
    assert "close" in str(exc.value) and "prices.tsv" in str(exc.value)


def test_parse_tsv_empty_text_is_malformed():
    with pytest.raises(DataLoadError):
        parse_tsv("")


def test_parse_tsv_bad_date_aborts():
    with pytest.raises(DataLoadError) as exc:
        parse_tsv("date\tclose\n2020-01-01\t1\n01/02/2020\t2\n")
    assert "line 3" in str(exc.value)


def test_parse_tsv_non_numeric_close_becomes_nan(caplog):
    with caplog.at_level(logging.WARNING):
        points = parse_tsv("date\tclose\n2020-01-01\tn/a\n2020-01-02\t5\n")
    assert math.isnan(points[0].close)
    assert points[1].close == 5.0
    assert any("Non-numeric close" in r.message for r in caplog.records)


def test_parse_tsv_sorts_out_of_order_rows(caplog):
    with caplog.at_level(logging.WARNING):
        points = parse_tsv("date\tclose\n2020-01-03\t3\n2020-01-01\t1\n2020-01-02\t2\n")
    assert [p.close for p in points] == [1.0, 2.0, 3.0]
    assert any("not in date order" in r.message for r in caplog.records)


def test_load_local_file(tsv_file, sample_points):
    points = asyncio.run(load_price_series(tsv_file))
    assert points == sample_points


def test_load_missing_file(tmp_path):
    with pytest.raises(DataLoadError):
        asyncio.run(load_price_series(tmp_path / "missing.tsv"))


def _run_with_transport(url: str, handler):
    async def _go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await load_price_series(url, client=client)

    return asyncio.run(_go())


def test_load_from_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, text="date\tclose\n2020-01-01\t10\n")

    points = _run_with_transport("https://example.test/data.tsv", handler)
    assert points == (DataPoint(date(2020, 1, 1), 10.0),)
    assert seen == ["https://example.test/data.tsv"]


def test_load_from_url_http_error_is_fatal():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(404, text="not found")

    with pytest.raises(DataLoadError):
        _run_with_transport("https://example.test/missing.tsv", handler)
    # no retry
    assert len(calls) == 1


def test_oversized_field_is_load_error():
    text = "date\tclose\n2020-01-01\t" + "1" * 200_000 + "\n"
    with pytest.raises(DataLoadError, match="malformed TSV"):
        parse_tsv(text)


def test_parse_tsv_ignores_byte_order_mark():
    (point,) = parse_tsv("\ufeffdate\tclose\n2020-01-01\t1\n")
    assert point == DataPoint(date(2020, 1, 1), 1.0)


def test_load_file_with_byte_order_mark(tmp_path):
    path = tmp_path / "bom.tsv"
    path.write_bytes(b"\xef\xbb\xbfdate\tclose\n2020-01-01\t1\n")
    points = asyncio.run(load_price_series(path))
    assert points == (DataPoint(date(2020, 1, 1), 1.0),)
