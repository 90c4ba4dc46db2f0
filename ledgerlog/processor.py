"""Run the parse, merge and accumulate stages as a single batch."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence

from .accounts import Accumulator, Clock, UserLedger
from .merge import merge_events, parse_sources

logger = logging.getLogger(__name__)


def process_sources(
    sources: Iterable[Iterable[str]],
    clock: Optional[Clock] = None,
    parse_workers: int = 1,
) -> Dict[str, UserLedger]:
    """Build every user's ledger from the given line sources.

    All sources are parsed and merged before any balance is touched.
    """

    materialized: Sequence[Iterable[str]] = [list(source) for source in sources]
    events = merge_events(parse_sources(materialized, workers=parse_workers))

    accumulator = Accumulator(clock=clock)
    accumulator.apply_all(events)
    ledgers = accumulator.finalize()

    logger.info(
        "ledgers built",
        extra={"sources": len(materialized), "events": len(events), "users": len(ledgers)},
    )
    return ledgers
