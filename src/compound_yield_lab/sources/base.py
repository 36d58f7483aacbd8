"""Base utilities for CompoundYieldLab event sources."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def record_matches(
    record: Mapping[str, Any],
    event_types: Iterable[str],
    start_time: int,
    end_time: int,
) -> bool:
    """Return ``True`` when a raw record has one of ``event_types`` inside the window.

    Bounds are inclusive.  Records with an unreadable timestamp are kept so the
    parser can report them.
    """

    if record.get("type") not in set(event_types):
        return False
    try:
        ts = int(record["timestamp"])
    except (KeyError, TypeError, ValueError):
        return True
    return start_time <= ts <= end_time


class InMemoryEventSource:
    """Serve raw records held in memory, filtered like an indexer would."""

    def __init__(self, records: Iterable[Mapping[str, Any]] | None = None) -> None:
        self.records: list[dict[str, Any]] = [dict(r) for r in records] if records else []
        self.calls: list[tuple[tuple[str, ...], int, int]] = []

    async def fetch_events(
        self, event_types: Iterable[str], start_time: int, end_time: int
    ) -> list[dict[str, Any]]:
        types = tuple(event_types)
        self.calls.append((types, start_time, end_time))
        return [dict(r) for r in self.records if record_matches(r, types, start_time, end_time)]


__all__ = ["InMemoryEventSource", "record_matches"]
