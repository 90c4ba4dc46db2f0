"""Merge transaction logs into per-user ledgers with running balances."""

from .accounts import Accumulator, UserLedger
from .events import Event, EventKind, parse_line
from .processor import process_sources

__all__ = ["Accumulator", "Event", "EventKind", "UserLedger", "parse_line", "process_sources"]
