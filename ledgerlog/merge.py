"""Collect parsed events from every source into one chronological sequence."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Iterable, List, Sequence

from .events import Event, parse_lines

logger = logging.getLogger(__name__)


def _merge_key(event: Event) -> tuple:
    # raw text breaks timestamp ties independently of source order
    return (event.timestamp, event.raw_text)


def merge_events(batches: Iterable[Iterable[Event]]) -> List[Event]:
    """Flatten event batches and order them ascending by timestamp."""

    events: List[Event] = []
    for batch in batches:
        events.extend(batch)
    events.sort(key=_merge_key)
    return events


def _parse_source(lines: Iterable[str]) -> List[Event]:
    return list(parse_lines(lines))


def parse_sources(sources: Sequence[Iterable[str]], workers: int = 1) -> List[List[Event]]:
    """Parse each source into its own event batch.

    With ``workers > 1`` sources are parsed concurrently; the call returns
    only once every source has been parsed.
    """

    if workers <= 1 or len(sources) <= 1:
        batches = [_parse_source(source) for source in sources]
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            batches = list(executor.map(_parse_source, sources))
    logger.debug(
        "parsed sources",
        extra={"sources": len(batches), "events": sum(len(batch) for batch in batches)},
    )
    return batches
