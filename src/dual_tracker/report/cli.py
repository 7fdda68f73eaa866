"""Report CLI — load exported batches from disk and print the analytics as JSON."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

import structlog

from dual_tracker.config.loader import load_config
from dual_tracker.engine import build_report, make_filter_config, normalize_batches
from dual_tracker.errors import ConfigError
from dual_tracker.logging.setup import configure_logging

log = structlog.get_logger("report_cli")

EXIT_INPUT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Dual investment analytics report")
    parser.add_argument("files", nargs="+", help="Exported batch JSON files, oldest first")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    parser.add_argument("--time-window", default=None, help="all|week|month|quarter|year")
    parser.add_argument("--asset", default=None, help="all|<symbol>")
    parser.add_argument("--direction", default=None, help="all|SELL_HIGH|BUY_LOW")
    parser.add_argument("--status", default=None, help="all|ACTIVE|SETTLED")
    parser.add_argument("--sort-by", default="return_rate", choices=["return_rate", "total_return"])
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point — returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        configure_logging(config.logging, component="report")
        filters = make_filter_config(
            config.filters,
            time_window=args.time_window,
            asset=args.asset,
            direction=args.direction,
            status=args.status,
        )
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    batches = []
    for path in args.files:
        try:
            with open(Path(path)) as f:
                batches.append(json.load(f))
        except (OSError, json.JSONDecodeError) as exc:
            log.error("batch_file_unreadable", path=path, error=str(exc))
            return EXIT_INPUT_ERROR

    result = normalize_batches(batches)
    if result.errors:
        log.warning("records_rejected", count=len(result.errors))

    report = build_report(
        result.trades,
        filters,
        now=datetime.now(timezone.utc),
        stable_assets=config.assets.stable_assets,
        sort_by=args.sort_by,
    )
    output = report.to_dict()
    output["rejected"] = [e.to_dict() for e in result.errors]
    output["duplicates"] = result.duplicates
    json.dump(output, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0
