"""Command-line interface for mortgage-charts."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mortgage_charts import __version__
from mortgage_charts.config import get_settings
from mortgage_charts.core.datasource import get_data_source
from mortgage_charts.core.errors import InsufficientData, LoadFailure, UndefinedStatistic

logger = logging.getLogger(__name__)

OUTPUT_FILES = {
    "rates": "interest_rates.html",
    "spread": "spread_vs_delinquency.html",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="mortgage-charts",
        description="Render mortgage interest-rate and spread vs delinquency charts",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=settings.data_path,
        help=f"Merged mortgage CSV (default: {settings.data_path})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=settings.output_dir,
        help=f"Directory for chart HTML files (default: {settings.output_dir})",
    )
    parser.add_argument(
        "--chart",
        choices=["rates", "spread", "all"],
        default="all",
        help="Which chart to render (default: all)",
    )
    parser.add_argument(
        "--min-rows",
        type=int,
        default=settings.min_valid_rows,
        help=f"Minimum complete rows for the spread chart (default: {settings.min_valid_rows})",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the API server",
    )
    parser.add_argument(
        "--host",
        default=settings.api_host,
        help=f"API server host (default: {settings.api_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.api_port,
        help=f"API server port (default: {settings.api_port})",
    )
    return parser


def render_charts(data: Path, output_dir: Path, chart: str, min_rows: int) -> list[Path]:
    """Render the requested charts to HTML files.

    Returns:
        Paths of the files written

    Raises:
        LoadFailure: If the CSV cannot be read
        InsufficientData: If a chart has too few complete rows
        UndefinedStatistic: If the spread statistics are degenerate
    """
    from mortgage_charts.analysis import build_rate_trend_view, build_spread_delinquency_view
    from mortgage_charts.core.datasource import MortgageDataSource
    from mortgage_charts.visualization import create_rate_trend_plot, create_spread_scatter_plot

    raw = MortgageDataSource(data).dataframe
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    if chart in ("rates", "all"):
        rate_view = build_rate_trend_view(raw)
        path = output_dir / OUTPUT_FILES["rates"]
        create_rate_trend_plot(rate_view).write_html(str(path))
        print(f"Rates: {rate_view.n} observations ({rate_view.dropped} dropped) -> {path}")
        written.append(path)

    if chart in ("spread", "all"):
        spread_view = build_spread_delinquency_view(raw, min_rows=min_rows)
        path = output_dir / OUTPUT_FILES["spread"]
        create_spread_scatter_plot(spread_view).write_html(str(path))
        print(f"{spread_view.summary} -> {path}")
        print(f"  {spread_view.significance.interpretation}")
        written.append(path)

    return written


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.serve:
        try:
            import uvicorn

            from mortgage_charts.api.app import app
        except ImportError as e:
            print(f"Error: {e}. Make sure uvicorn is installed.", file=sys.stderr)
            return 1

        # The app reads both values from the shared settings
        settings = get_settings()
        settings.data_path = args.data
        settings.min_valid_rows = args.min_rows
        try:
            get_data_source(args.data, force_new=True)
        except LoadFailure as e:
            logger.warning(f"Could not load {args.data}: {e}")

        uvicorn.run(app, host=args.host, port=args.port)
        return 0

    try:
        render_charts(args.data, args.output_dir, args.chart, args.min_rows)
    except InsufficientData as e:
        print(e.user_message, file=sys.stderr)
        return 1
    except LoadFailure:
        logger.exception("Data load failed")
        print(LoadFailure.user_message, file=sys.stderr)
        return 1
    except UndefinedStatistic as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
