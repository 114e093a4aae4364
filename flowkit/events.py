"""Fetching blocks and events from a gateway, splitting event ranges over worker threads."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Sequence

from flowkit.gateway import Gateway
from flowkit.queries import BlockQuery, EventRangeQuery, EventWorker, make_event_queries

_DEFAULT_WORKER = EventWorker(count=1, blocks_per_worker=250)


def fetch_events(
    gateway: Gateway,
    names: Sequence[str],
    start_height: int,
    end_height: int,
    worker: EventWorker | None = None,
) -> list[Any]:
    """Fetch events of the named types in the inclusive height range.

    The range is split into chunks of ``worker.blocks_per_worker`` blocks and the
    chunks are fetched by ``worker.count`` concurrent threads. Block events are
    returned in query order. The first gateway failure is raised.
    """
    if end_height < start_height:
        raise ValueError(
            f"cannot have end height ({end_height}) of block range "
            f"less that start height ({start_height})"
        )

    if worker is None:
        worker = _DEFAULT_WORKER

    queries = make_event_queries(
        list(names), start_height, end_height, worker.blocks_per_worker
    )
    if worker.count < 1:
        return []

    def run(query: EventRangeQuery) -> list[Any]:
        return list(gateway.get_events(query.type, query.start_height, query.end_height))

    events: list[Any] = []
    with ThreadPoolExecutor(max_workers=worker.count) as pool:
        for block_events in pool.map(run, queries):
            events.extend(block_events)
    return events


def fetch_block(gateway: Gateway, query: BlockQuery) -> Any:
    """Fetch the block selected by the query: the latest, by ID, or by height."""
    try:
        if query.latest:
            block = gateway.get_latest_block()
        elif query.id is not None:
            block = gateway.get_block_by_id(query.id)
        else:
            block = gateway.get_block_by_height(query.height)
    except Exception as exc:
        raise RuntimeError(f"error fetching block: {exc}") from exc

    if block is None:
        raise LookupError("block not found")
    return block