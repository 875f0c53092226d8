"""Tests for the pricechart command line."""

from __future__ import annotations

import json

import pytest

import main


def test_nearest_prints_point_and_label(tsv_file, capsys):
    code = main.main(["nearest", "--source", str(tsv_file), "--date", "2012-05-03"])
    assert code == 0
    out = json.loads(capsys.readouterr().out)
    # 05-03 is equidistant from 05-02 and 05-04: earlier point wins
    assert out == {"date": "2012-05-02", "close": 585.98, "label": "$585.98"}


def test_export_writes_image(tsv_file, tmp_path, capsys):
    out_path = tmp_path / "out" / "chart.svg"
    code = main.main(
        ["export", "--source", str(tsv_file), "--out", str(out_path), "--format", "svg", "--width", "480"]
    )
    assert code == 0
    assert out_path.exists()
    assert json.loads(capsys.readouterr().out)["points"] == 5


def test_missing_source_exits_with_error(tmp_path, capsys):
    code = main.main(["nearest", "--source", str(tmp_path / "missing.tsv"), "--date", "2020-01-01"])
    assert code == 1
    assert "error:" in capsys.readouterr().err


def test_bad_date_argument_rejected(tsv_file):
    with pytest.raises(SystemExit):
        main.main(["nearest", "--source", str(tsv_file), "--date", "yesterday"])


@pytest.mark.parametrize("command", ["nearest", "export"])
def test_header_only_source_exits_with_error(command, tmp_path, capsys):
    src = tmp_path / "empty.tsv"
    src.write_text("date\tclose\n", encoding="utf-8")
    argv = [command, "--source", str(src)]
    argv += ["--date", "2020-01-01"] if command == "nearest" else ["--out", str(tmp_path / "c.png")]
    assert main.main(argv) == 1
    assert "error:" in capsys.readouterr().err
