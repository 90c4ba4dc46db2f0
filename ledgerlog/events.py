"""Transaction log line grammar and the immutable events it produces."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import datetime
import decimal
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Iterator, Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CENTS = Decimal("0.01")

# amounts of any length stay exact: sums and rounding never truncate digits
AMOUNT_CONTEXT = decimal.Context(prec=decimal.MAX_PREC, Emax=decimal.MAX_EMAX, Emin=decimal.MIN_EMIN)

LINE_PATTERN = re.compile(
    r"\[(?P<timestamp>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\] "
    r"(?P<actor>\S+) "
    r"(?P<verb>balance inquiry|transferred|withdrew) "
    r"(?P<amount>\d+(?:\.\d+)?)"
    r"(?: to (?P<counterpart>\S+))?",
    re.ASCII,
)


class EventKind(str, enum.Enum):
    BALANCE_INQUIRY = "balance inquiry"
    TRANSFER = "transferred"
    WITHDRAWAL = "withdrew"


@dataclass(frozen=True)
class Event:
    timestamp: datetime
    actor: str
    kind: EventKind
    amount: Decimal
    raw_text: str
    counterpart: Optional[str] = None


def parse_line(line: str) -> Optional[Event]:
    """Return the event described by ``line`` or ``None`` when it does not match.

    Non-matching lines, impossible calendar dates and misplaced ``to``
    clauses are all rejected the same way: no event, no error.
    """

    text = line.rstrip("\r\n")
    match = LINE_PATTERN.fullmatch(text)
    if match is None:
        return None

    kind = EventKind(match.group("verb"))
    counterpart = match.group("counterpart")
    if (kind is EventKind.TRANSFER) != (counterpart is not None):
        return None

    try:
        timestamp = datetime.strptime(match.group("timestamp"), TIMESTAMP_FORMAT)
        amount = Decimal(match.group("amount"))
    except (ValueError, InvalidOperation):
        return None

    return Event(
        timestamp=timestamp,
        actor=match.group("actor"),
        kind=kind,
        amount=amount,
        raw_text=text,
        counterpart=counterpart,
    )


def parse_lines(lines: Iterable[str]) -> Iterator[Event]:
    for line in lines:
        event = parse_line(line)
        if event is not None:
            yield event


def format_amount(value: Decimal) -> str:
    """Render ``value`` with exactly two decimals, half-up, ``.`` separator."""

    return format(value.quantize(CENTS, rounding=ROUND_HALF_UP, context=AMOUNT_CONTEXT), "f")


def format_timestamp(value: datetime) -> str:
    return f"{value.year:04d}-{value:%m-%d %H:%M:%S}"
