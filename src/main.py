"""CLI entry point for the closing-price chart."""

from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime

from config import settings
from gui.charting import (
    ChartRequest,
    DataLoadError,
    EmptyDatasetError,
    chart_registry,
    load_price_series,
    nearest_point,
)
from gui.charting.export import export_chart
from gui.charting.formatting import format_currency

_logger = logging.getLogger(__name__)


def _load(source: str):
    return asyncio.run(load_price_series(source))


def cmd_show(args: argparse.Namespace) -> int:
    from gui.views.price_chart_view import launch  # Qt only needed here

    points = _load(args.source)
    return launch(points, title=args.title, width=args.width, height=args.height)


def cmd_export(args: argparse.Namespace) -> int:
    points = _load(args.source)
    result = chart_registry.build(
        ChartRequest(
            chart_type="price.line",
            data={"points": points, "source": args.source},
            options={"width": args.width, "height": args.height, "title": args.title},
        )
    )
    export_chart(result.widget, args.out, format=args.format, dpi=args.dpi)
    print(json.dumps({"out": args.out, "points": result.meta["points"]}, indent=2))
    return 0


def cmd_nearest(args: argparse.Namespace) -> int:
    points = _load(args.source)
    pointer = args.date
    found = nearest_point(points, pointer)
    print(
        json.dumps(
            {
                "date": found.date.isoformat(),
                "close": found.close,
                "label": format_currency(found.close),
            },
            indent=2,
        )
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pricechart")
    p.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    sub = p.add_subparsers(dest="command", required=True)

    def _add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--source", default=settings.DEFAULT_DATA_SOURCE, help="TSV path or http(s) URL")

    def _add_size(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--width", type=int, default=settings.DEFAULT_WIDTH, help="Outer width (px)")
        sp.add_argument("--height", type=int, default=settings.DEFAULT_HEIGHT, help="Outer height (px)")
        sp.add_argument("--title", default=None, help="Optional chart title")

    show = sub.add_parser("show", help="Open the interactive chart window")
    _add_common(show)
    _add_size(show)
    show.set_defaults(func=cmd_show, title="Closing price")

    export = sub.add_parser("export", help="Render the chart to an image file")
    _add_common(export)
    _add_size(export)
    export.add_argument("--out", required=True, help="Output image path")
    export.add_argument("--format", choices=("png", "svg"), default="png")
    export.add_argument("--dpi", type=int, default=120, help="PNG resolution")
    export.set_defaults(func=cmd_export)

    nearest = sub.add_parser("nearest", help="Print the data point nearest a date")
    _add_common(nearest)
    nearest.add_argument("--date", required=True, type=_parse_date, help="Pointer date (YYYY-MM-DD)")
    nearest.set_defaults(func=cmd_nearest)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except DataLoadError as e:
        _logger.error("Could not load price data: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except EmptyDatasetError as e:
        _logger.error("No price data to chart: %s", e)
        print(f"error: {args.source} contains no data rows", file=sys.stderr)
        return 1


def _parse_date(value: str) -> datetime:
    try:
        return datetime.strptime(value, settings.DATE_FORMAT)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from e


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
