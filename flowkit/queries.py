"""Queries that select blocks for lookups, scripts and event ranges."""

from __future__ import annotations

import re
from dataclasses import dataclass

from flowkit.address import EMPTY_ID, hex_to_id

_MAX_UINT64 = 2**64 - 1
_DECIMAL = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class BlockQuery:
    """Selects a block by identifier, by height, or the latest one."""

    id: bytes | None = None
    height: int = 0
    latest: bool = False


LATEST_BLOCK_QUERY = BlockQuery(latest=True)


def block_query(query: str) -> BlockQuery:
    """Build a block query from "latest", a decimal height or a hex block ID."""
    if query == "latest":
        return LATEST_BLOCK_QUERY
    if _DECIMAL.fullmatch(query) and int(query) <= _MAX_UINT64:
        return BlockQuery(height=int(query))
    block_id = hex_to_id(query)
    if block_id != EMPTY_ID:
        return BlockQuery(id=block_id)
    raise ValueError(
        f'invalid query: {query}, valid are: "latest", block height or block ID'
    )


@dataclass(frozen=True)
class ScriptQuery:
    """The block at which a script is executed."""

    latest: bool = False
    id: bytes = EMPTY_ID
    height: int = 0


LATEST_SCRIPT_QUERY = ScriptQuery(latest=True)


@dataclass(frozen=True)
class EventWorker:
    """How many concurrent workers fetch events and how many blocks each request covers."""

    count: int = 1
    blocks_per_worker: int = 250


@dataclass(frozen=True)
class EventRangeQuery:
    """A request for events of one type in an inclusive height range."""

    type: str
    start_height: int
    end_height: int


def make_event_queries(
    events: list[str],
    start_height: int,
    end_height: int,
    block_count: int,
) -> list[EventRangeQuery]:
    """Split the inclusive height range into chunks of `block_count`, one query per event per chunk."""
    if block_count < 1:
        raise ValueError("block count must be at least 1")
    queries: list[EventRangeQuery] = []
    start = start_height
    while start <= end_height:
        suggested_end = start + block_count - 1
        end = min(suggested_end, end_height)
        queries.extend(EventRangeQuery(event, start, end) for event in events)
        start = suggested_end + 1
    return queries