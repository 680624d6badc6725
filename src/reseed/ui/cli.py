from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from reseed.app import seed_fixtures
from reseed.config import (
    ConfigurationError,
    configure_logging,
    get_database_config,
    get_seeding_config,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load seed fixtures into the database")
    parser.add_argument(
        "--fixture-path",
        dest="fixture_paths",
        action="append",
        type=Path,
        help="Directory containing seed fixtures; repeatable (defaults to config)",
    )
    parser.add_argument(
        "--filter",
        type=str,
        help="Regular expression matched against fixture file names",
    )
    parser.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        default=None,
        help="Do not report each seeded record",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        config = get_seeding_config()
        if parsed_args.database_uri is None:
            get_database_config()
        if parsed_args.filter is not None:
            re.compile(parsed_args.filter)
    except (ConfigurationError, re.error):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        result = seed_fixtures(
            paths=parsed_args.fixture_paths,
            filter_pattern=parsed_args.filter,
            quiet=parsed_args.quiet,
            database_uri=parsed_args.database_uri,
            config=config,
        )
    except Exception:
        log.exception("Fatal error during seeding")
        sys.exit(1)

    log.info(
        "Seeding finished: files=%s, tables=%s, records=%s",
        result.files,
        len(result.tables),
        result.records,
    )


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
