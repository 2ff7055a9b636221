#!/usr/bin/env python3
"""
Main CLI for the Stock Correlation Workbench.
Usage:
  python cli.py heatmap [--minutes N | --interval TEXT] [--limit N]
  python cli.py stats TICKER [--minutes N | --interval TEXT]
"""

import os
import sys
import json
import logging
import argparse
from pathlib import Path

from analysis.heatmap_job import (
    HeatmapConfig,
    HeatmapJobError,
    PRESET_INTERVALS,
    analyze_stock,
    parse_interval,
    run_heatmap
)
from ingestion.providers.stock_service_adapter import StockServiceError
from reports.heatmap_formatters import render_heatmap_report


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        description='Price statistics and correlation heatmap for listed stocks',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  python cli.py heatmap
  python cli.py heatmap --minutes 30 --limit 5 --format markdown
  python cli.py heatmap --interval 45 --output ./data/heatmap.json
  python cli.py stats NVDA --minutes 120
  python cli.py stats NVDA --interval 45

Preset intervals (minutes): {', '.join(str(m) for m in PRESET_INTERVALS)}
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command')

    heatmap = subparsers.add_parser('heatmap', help='Correlation matrix across listed stocks')
    _add_window_arguments(heatmap)
    heatmap.add_argument('--limit', type=int,
                         help='Analyze only the first N listed stocks (0 = all, default: 10)')
    heatmap.add_argument('--workers', type=int,
                         help='Concurrent price fetches (default: 8)')
    heatmap.add_argument('--output',
                         help='Write the JSON summary to this path')
    heatmap.add_argument('--format', choices=['json', 'markdown'], default='markdown',
                         help='Stdout format (default: markdown)')
    heatmap.add_argument('--quiet', '-q', action='store_true',
                         help='Minimal output (just success/failure)')

    stats = subparsers.add_parser('stats', help='Average and standard deviation for one stock')
    stats.add_argument('ticker', help='Stock ticker symbol (e.g., NVDA)')
    _add_window_arguments(stats)

    return parser


def _add_window_arguments(subparser: argparse.ArgumentParser) -> None:
    """Preset or custom lookback window, shared by every subcommand."""
    window = subparser.add_mutually_exclusive_group()
    window.add_argument('--minutes', type=int, choices=PRESET_INTERVALS,
                        help='Preset lookback window in minutes (default: 60)')
    window.add_argument('--interval',
                        help='Custom lookback window in minutes (any positive integer)')


def _resolve_minutes(args):
    """
    Lookback window from --interval or --minutes, None when neither is given.

    Raises:
        IntervalError: If --interval is not a positive integer
    """
    if args.interval is not None:
        return parse_interval(args.interval)
    return args.minutes


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if args.command == 'heatmap':
        return _heatmap_command(args)
    elif args.command == 'stats':
        return _stats_command(args)

    parser.print_help()
    return 1


def _heatmap_command(args) -> int:
    try:
        minutes = _resolve_minutes(args)
        config = HeatmapConfig(
            minutes=minutes,
            max_instruments=args.limit,
            fetch_workers=args.workers,
            output_path=Path(args.output) if args.output else None
        )
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        summary = run_heatmap(config)
    except HeatmapJobError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.quiet:
        print(f"Heatmap complete: {len(summary['tickers'])} instruments")
    elif args.format == 'json':
        print(json.dumps(summary, indent=2, default=str))
    else:
        print(render_heatmap_report(summary))

    return 0


def _stats_command(args) -> int:
    try:
        minutes = _resolve_minutes(args)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if minutes is None:
        minutes = int(os.getenv('HEATMAP_DEFAULT_MINUTES', '60'))

    try:
        result = analyze_stock(args.ticker, minutes)
    except StockServiceError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    stats = result['stats']
    print(f"{result['ticker']} - last {result['minutes']} minutes")
    print(f"  Samples:  {stats['count']}")
    print(f"  Average:  ${stats['average']:.2f}")
    print(f"  Std Dev:  {stats['std_dev']:.4f}")
    if stats['count']:
        print(f"  Range:    ${stats['min']:.2f} - ${stats['max']:.2f}")
        print(f"  Latest:   ${stats['latest']:.2f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
