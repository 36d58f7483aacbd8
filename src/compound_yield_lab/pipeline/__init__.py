"""Event collection and APR orchestration for CompoundYieldLab."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

import pandas as pd

from ..analytics.apr import AprEngine
from ..core import AprResult, CompoundingEvent, EventBatch, PoolName, PoolRegistry, parse_event
from ..exceptions import UpstreamFetchError
from ..reporting import apr_report
from ..sources import EventSource

logger = logging.getLogger(__name__)


class EventCollector:
    """Fetch compounding events for a set of pools from an :class:`EventSource`."""

    def __init__(self, source: EventSource, registry: PoolRegistry) -> None:
        self.source = source
        self.registry = registry

    async def _fetch_type(
        self, event_type: str, start_time: int, end_time: int
    ) -> list[CompoundingEvent]:
        logger.debug("Querying %s between %s and %s", event_type, start_time, end_time)
        try:
            records = await self.source.fetch_events([event_type], start_time, end_time)
        except UpstreamFetchError:
            raise
        except Exception as exc:
            raise UpstreamFetchError(event_type, str(exc)) from exc
        return [parse_event(record, event_type) for record in records]

    async def collect(
        self,
        pool_names: Iterable[PoolName] | None = None,
        *,
        start_time: int,
        end_time: int,
    ) -> EventBatch:
        """Return the events of ``pool_names`` (all pools when ``None``) in the window.

        Each distinct event type is queried once and all queries run
        concurrently.  If any query fails the remaining ones are cancelled and
        :class:`UpstreamFetchError` is raised; no partial batch is returned.
        """

        if start_time > end_time:
            raise ValueError("start_time must not be after end_time")

        names = list(pool_names) if pool_names is not None else None
        event_types = self.registry.event_types(names)

        tasks = [
            asyncio.ensure_future(self._fetch_type(event_type, start_time, end_time))
            for event_type in event_types
        ]
        try:
            batches = await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            raise

        events = [event for batch in batches for event in batch]
        if names is not None:
            investors = self.registry.investor_ids(names)
            events = [event for event in events if event.investor_id in investors]

        logger.info(
            "Collected %d events from %d event types", len(events), len(event_types)
        )
        return events


class AprPipeline:
    """Collect events and compute pool APRs in one call."""

    def __init__(self, source: EventSource, registry: PoolRegistry) -> None:
        self.registry = registry
        self.collector = EventCollector(source, registry)
        self.engine = AprEngine(registry)

    async def run(
        self,
        pool_names: Iterable[PoolName] | None = None,
        *,
        start_time: int,
        end_time: int,
    ) -> AprResult:
        events = await self.collector.collect(
            pool_names, start_time=start_time, end_time=end_time
        )
        return await self.engine.apr_for_pools(events)

    async def run_report(
        self,
        pool_names: Iterable[PoolName] | None = None,
        *,
        start_time: int,
        end_time: int,
    ) -> pd.DataFrame:
        events = await self.collector.collect(
            pool_names, start_time=start_time, end_time=end_time
        )
        investor_aprs = await self.engine.apr_for_investors(events)
        return apr_report(events, investor_aprs, self.registry)


__all__ = ["AprPipeline", "EventCollector"]
