"""GraphQL indexer adapter for compounding events."""

from __future__ import annotations

import asyncio
import json
import logging
import re
import urllib.error
import urllib.request
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)

EVENTS_QUERY = (
    "query Events($type: String!, $start: Float!, $end: Float!, $first: Int!, $after: String) "
    "{ events(type: $type, startTime: $start, endTime: $end, first: $first, after: $after) "
    "{ nodes { type timestamp json } pageInfo { hasNextPage endCursor } } }"
)


class GraphQLEventSource:
    """HTTP client for an event indexer exposing a paginated ``events`` query.

    Each node's ``json`` payload is flattened into the raw record together with
    its ``type`` and ``timestamp``.  Responses can be cached per event type and
    window in ``cache_dir``.
    """

    def __init__(
        self,
        url: str,
        *,
        page_size: int = 50,
        cache_dir: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.url = url
        self.page_size = page_size
        self.cache_dir = Path(cache_dir) if cache_dir else None
        self.headers = {"Content-Type": "application/json", **(headers or {})}

    def _post_json(self, payload: dict[str, Any]) -> dict[str, Any]:
        req = urllib.request.Request(
            self.url,
            data=json.dumps(payload).encode(),
            headers=self.headers,
        )
        with urllib.request.urlopen(req) as resp:  # pragma: no cover - network path
            return json.load(resp)

    def _cache_file(self, event_type: str, start_time: int, end_time: int) -> Path | None:
        if not self.cache_dir:
            return None
        safe = re.sub(r"[^A-Za-z0-9_.-]+", "_", event_type)
        return self.cache_dir / f"{safe}_{start_time}_{end_time}.json"

    def _fetch_pages(self, event_type: str, start_time: int, end_time: int) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        cursor: str | None = None
        while True:
            payload = {
                "query": EVENTS_QUERY,
                "variables": {
                    "type": event_type,
                    "start": start_time,
                    "end": end_time,
                    "first": self.page_size,
                    "after": cursor,
                },
            }
            data = self._post_json(payload)
            if data.get("errors"):
                messages = "; ".join(str(e.get("message", e)) for e in data["errors"])
                raise UpstreamFetchError(event_type, messages)
            page = (data.get("data") or {}).get("events") or {}
            for node in page.get("nodes", []):
                record = dict(node.get("json") or {})
                record["type"] = node.get("type", event_type)
                record["timestamp"] = node.get("timestamp")
                records.append(record)
            info = page.get("pageInfo") or {}
            if not info.get("hasNextPage"):
                return records
            cursor = info.get("endCursor")
            if not cursor:
                raise UpstreamFetchError(event_type, "next page announced without a cursor")

    def _load(self, event_type: str, start_time: int, end_time: int) -> list[dict[str, Any]]:
        path = self._cache_file(event_type, start_time, end_time)
        if path and path.exists():
            with path.open() as f:
                return json.load(f)
        records = self._fetch_pages(event_type, start_time, end_time)
        if path:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w") as f:
                json.dump(records, f)
        return records

    async def fetch_events(
        self, event_types: Iterable[str], start_time: int, end_time: int
    ) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        for event_type in event_types:
            try:
                records.extend(
                    await asyncio.to_thread(self._load, event_type, start_time, end_time)
                )
            except UpstreamFetchError:
                raise
            except (urllib.error.URLError, OSError, ValueError) as exc:
                logger.warning("Event query for %s failed: %s", event_type, exc)
                raise UpstreamFetchError(event_type, str(exc)) from exc
        return records


__all__ = ["EVENTS_QUERY", "GraphQLEventSource"]
