#!/usr/bin/env python3
"""
Main entry point for the civic-forecast CLI.

This module provides the console script entry point for the civic-forecast-cli command.
"""

import os
import sys
import logging
import argparse
from typing import List, Optional

from .. import __version__
from ..datasets.serializer import CivicSeriesSerializer, ForecastReportSerializer
from ..forecasting.forecaster import CivicTrendForecaster
from ..forecasting.report import ForecastReport
from ..visualization.renderers.ascii_renderer import ASCIIRenderer
from ..utils.exceptions import CivicForecastError

LOG_LEVEL_ENV = 'CIVIC_FORECAST_LOG_LEVEL'
DEFAULT_PERIOD_ENV = 'CIVIC_FORECAST_DEFAULT_PERIOD'

OUTPUT_FORMATS = ['table', 'chart', 'summary', 'json', 'csv']


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='civic-forecast-cli',
        description='Civic Forecast CLI - Trend forecasts for per-period trip counts',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  civic-forecast-cli trips.csv                       # Daily forecast, table output
  civic-forecast-cli trips.csv --period w            # Weekly presets (12 ahead, window 8)
  civic-forecast-cli trips.json --format json        # JSON report on stdout
  civic-forecast-cli trips.csv --format csv -o out.csv

Input:
  CSV with a header row containing 'period' and 'count' columns, or JSON
  with 'periods' and 'counts' lists (or a list of {period, count} records).

Environment Variables:
  CIVIC_FORECAST_LOG_LEVEL       - Logging level (default: WARNING)
  CIVIC_FORECAST_DEFAULT_PERIOD  - Default period when --period is omitted (default: d)
        """
    )

    parser.add_argument(
        'input',
        help='Path to a CSV or JSON series file'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--period', '-p',
        default=None,
        help="Reporting granularity: 'd'/'daily', 'w'/'weekly' or 'm'/'monthly'"
    )

    parser.add_argument(
        '--periods-ahead',
        type=int,
        default=None,
        help='Number of periods to forecast (default: granularity preset)'
    )

    parser.add_argument(
        '--window',
        type=int,
        default=None,
        help='Trend window size (default: granularity preset)'
    )

    parser.add_argument(
        '--name',
        default=None,
        help='Series name, e.g. the zip code the counts belong to'
    )

    parser.add_argument(
        '--period-column',
        default='period',
        help="Name of the period column in the input (default: 'period')"
    )

    parser.add_argument(
        '--value-column',
        default='count',
        help="Name of the count column in the input (default: 'count')"
    )

    parser.add_argument(
        '--fill-gaps',
        action='store_true',
        help='Fill missing periods with zero counts before forecasting'
    )

    parser.add_argument(
        '--format', '-f',
        choices=OUTPUT_FORMATS,
        default='table',
        help='Output format (default: table)'
    )

    parser.add_argument(
        '--output', '-o',
        default=None,
        help='Write output to this file instead of stdout'
    )

    parser.add_argument(
        '--log-level',
        default=None,
        help=f'Logging level (default: ${LOG_LEVEL_ENV} or WARNING)'
    )

    return parser


def configure_logging(level: Optional[str] = None) -> int:
    """
    Configure root logging for CLI use.

    Args:
        level: Level name; falls back to the environment, then WARNING

    Returns:
        The numeric level applied
    """
    level_name = (level or os.getenv(LOG_LEVEL_ENV) or 'WARNING').upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    return numeric_level


def render_report(report: ForecastReport, output_format: str) -> str:
    """
    Render a report in one of the CLI output formats.

    Args:
        report: Report to render
        output_format: One of 'table', 'chart', 'summary', 'json', 'csv'

    Returns:
        Rendered text
    """
    if output_format in ('json', 'csv'):
        return ForecastReportSerializer.serialize(report, format=output_format)

    return ASCIIRenderer(report).render(chart_type=output_format)


def run(args: argparse.Namespace) -> int:
    """
    Execute a forecast for parsed CLI arguments.

    Args:
        args: Parsed arguments

    Returns:
        Process exit status
    """
    series = CivicSeriesSerializer.load(
        args.input,
        period_column=args.period_column,
        value_column=args.value_column,
        name=args.name
    )

    period = args.period or os.getenv(DEFAULT_PERIOD_ENV) or 'd'
    forecaster = CivicTrendForecaster(
        series,
        granularity=period,
        periods_ahead=args.periods_ahead,
        window_size=args.window,
        fill_gaps=args.fill_gaps
    )
    report = forecaster.forecast()

    if report.is_empty:
        print("❌ No data available for this series", file=sys.stderr)
        return 1

    output = render_report(report, args.format)

    if args.output:
        directory = os.path.dirname(args.output)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(output)
        print(f"✅ Wrote {len(report.forecast)} forecast periods to {args.output}")
    else:
        print(output)

    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the civic-forecast-cli command.

    This function handles command line arguments, loads the input series,
    runs the forecast and prints or writes the report.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        status = run(args)
    except KeyboardInterrupt:
        print("\n\n👋 Interrupted by user. Goodbye!")
        sys.exit(0)
    except CivicForecastError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(status)


if __name__ == '__main__':
    main()
