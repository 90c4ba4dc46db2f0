"""Command-line entry point: build ledger files for a directory of logs."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import ConfigError, get_settings
from .logging_utils import configure_logging
from .store import IoFailure, LedgerStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledgerlog",
        description="Merge transaction logs into one ledger file per user.",
    )
    parser.add_argument("log_dir", nargs="?", help="directory holding the input logs (default: LEDGER_LOG_DIR)")
    parser.add_argument("--output-dir", help="name of the output directory inside LOG_DIR")
    parser.add_argument("--pattern", help="glob selecting input files")
    parser.add_argument("--workers", type=int, help="number of sources parsed concurrently")
    parser.add_argument("--print", dest="print_user", metavar="USER", help="print USER's ledger after the run")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ConfigError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2

    configure_logging(settings)
    workers = args.workers if args.workers is not None else settings.parse_workers
    if workers <= 0:
        print("--workers must be positive", file=sys.stderr)
        return 2

    store = LedgerStore(
        args.log_dir or settings.log_dir,
        args.output_dir or settings.output_dirname,
        args.pattern or settings.log_pattern,
    )
    try:
        ledgers = store.run(parse_workers=workers)
    except IoFailure as exc:
        logger.error("ledger run failed", extra={"path": exc.path, "error": exc.reason})
        return 1

    if args.print_user:
        ledger = ledgers.get(args.print_user)
        if ledger is None:
            print(f"no ledger for {args.print_user}", file=sys.stderr)
            return 1
        sys.stdout.write(ledger.render())
    return 0
