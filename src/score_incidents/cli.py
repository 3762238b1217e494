"""CLI for scoring locations by fire alarms and entrapments."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from build_leaderboard.write_leaderboard import save_leaderboard_csv, write_leaderboard_csv
from common.cli_helpers import parse_date, positive_int, setup_logging
from ingest_reports.errors import PersistenceError
from score_incidents.config import Config, load_config
from score_incidents.score_incidents import log_summary, score_incidents

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FETCH_FAILURES = 1
EXIT_PERSISTENCE_ERROR = 2
EXIT_CONFIG_ERROR = 3


def parse_score_incidents_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for score_incidents.'''

    parser = argparse.ArgumentParser(
        description="Fetch daily incident reports and rank locations by fire alarms and entrapments."
    )
    parser.add_argument("start", type=lambda v: parse_date(v, "start"), help="First report date (YYYY-MM-DD).")
    parser.add_argument(
        "end",
        nargs="?",
        default=None,
        type=lambda v: parse_date(v, "end"),
        help="Last report date, inclusive (default: today).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Config name (test/prod) or path to YAML file. Defaults to $CONFIG_ENV or 'prod'.",
    )
    parser.add_argument("--concurrency", type=positive_int, default=None, help="Parallel report fetches.")
    parser.add_argument("--state-path", default=None, help="Persisted report collection to resume from.")
    parser.add_argument("--output", default=None, help="CSV file for the leaderboard (default: stdout).")
    parser.add_argument("--top-k", type=positive_int, default=None, help="Leaderboard rows to emit.")
    return parser.parse_args(argv)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    '''Apply command-line flags on top of the loaded config.'''

    if args.concurrency is not None:
        config.fetch.concurrency = args.concurrency
    if args.state_path is not None:
        config.state.path = args.state_path
    if args.output is not None:
        config.output.path = args.output
    if args.top_k is not None:
        config.output.top_k = args.top_k
    return config


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    setup_logging()

    args = parse_score_incidents_args(argv)
    try:
        config = apply_overrides(load_config(args.config), args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error("Invalid config %s: %s", args.config or "(default)", e)
        return EXIT_CONFIG_ERROR

    logger.info("Processing reports from %s to %s", args.start, args.end or "today")

    try:
        summary = score_incidents(config, args.start, args.end)
    except PersistenceError as e:
        logger.error("Report state unusable, aborting: %s", e)
        return EXIT_PERSISTENCE_ERROR

    if config.output.path:
        try:
            save_leaderboard_csv(summary.leaderboard, Path(config.output.path))
        except OSError as e:
            logger.error("Failed to write leaderboard to %s: %s", config.output.path, e)
            return EXIT_PERSISTENCE_ERROR
    else:
        write_leaderboard_csv(summary.leaderboard, sys.stdout)

    log_summary(summary)
    return EXIT_OK if summary.ok else EXIT_FETCH_FAILURES


if __name__ == "__main__":
    sys.exit(main())
