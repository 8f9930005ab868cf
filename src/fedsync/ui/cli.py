from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from fedsync.app import migrate_database, process_notice_file
from fedsync.config import configure_logging, get_federation_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile federated Update activities")
    subparsers = parser.add_subparsers(dest="command", required=True)

    process = subparsers.add_parser(
        "process",
        help="Process a JSON lines file of signed Update activities",
    )
    process.add_argument(
        "path",
        type=Path,
        help='File with one {"activity": ..., "signer": ...} object per line',
    )
    process.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of activities processed concurrently (defaults to config)",
    )

    subparsers.add_parser("migrate", help="Upgrade the database schema")

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "process":
            if parsed_args.workers is not None and parsed_args.workers < 1:
                raise ValueError("Workers must be a positive integer")
            if not parsed_args.path.is_file():
                raise ValueError(f"No such file: {parsed_args.path}")
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "process":
            federation = get_federation_config()
            if parsed_args.workers is not None:
                federation = replace(federation, workers=parsed_args.workers)
            result = process_notice_file(parsed_args.path, federation=federation)
            if result.failed:
                log.warning("%s Update activities could not be applied", result.failed)
        elif parsed_args.command == "migrate":
            migrate_database()
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error while processing updates")
        sys.exit(1)


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
