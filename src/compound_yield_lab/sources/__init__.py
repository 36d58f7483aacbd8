"""Event source adapters used by :mod:`compound_yield_lab`."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from .base import InMemoryEventSource, record_matches
from .graphql import GraphQLEventSource
from .json_file import JSONEventSource


class EventSource(Protocol):
    """Adapter protocol returning raw event records of the given types and window."""

    async def fetch_events(
        self, event_types: Iterable[str], start_time: int, end_time: int
    ) -> list[dict[str, Any]]: ...


__all__ = [
    "EventSource",
    "GraphQLEventSource",
    "InMemoryEventSource",
    "JSONEventSource",
    "record_matches",
]
