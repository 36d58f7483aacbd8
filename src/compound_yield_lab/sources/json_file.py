"""JSON-file backed event source."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .base import InMemoryEventSource

logger = logging.getLogger(__name__)


class JSONEventSource(InMemoryEventSource):
    """Load raw event records from a JSON export.

    The file holds either a list of records or ``{"events": [...]}``.  Each
    record needs a ``type`` key naming its event type.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> list[dict[str, Any]]:
        with self.path.open() as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("events", [])
        if not isinstance(data, list):
            raise ValueError(f"{self.path} does not contain a list of events")
        logger.debug("Loaded %d event records from %s", len(data), self.path)
        return data


__all__ = ["JSONEventSource"]
