"""Time-weighted APR of compounding investors and its roll-up to pools."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Iterable, Mapping, Sequence
from typing import Protocol

from ..core import (
    DAYS_PER_YEAR,
    MS_PER_DAY,
    AprResult,
    CompoundingEvent,
    EventRepository,
    InvestorId,
    PoolName,
)
from ..exceptions import EmptyEventSequenceError
from .growth import DualCarry, event_growth

logger = logging.getLogger(__name__)


class InvestorPoolLookup(Protocol):
    """Anything resolving investor ids to pool names, synchronously or not."""

    def investor_pool_map(
        self,
    ) -> Mapping[InvestorId, PoolName] | Awaitable[Mapping[InvestorId, PoolName]]: ...


def annualize(average_daily_growth: float) -> float:
    """Compound a daily growth rate over a year and return it as a percentage."""

    try:
        return ((1 + average_daily_growth) ** DAYS_PER_YEAR - 1) * 100
    except OverflowError:
        logger.warning("APR overflow for average daily growth %r", average_daily_growth)
        return float("inf")


def investor_apr(events: Sequence[CompoundingEvent]) -> float:
    """Compute the APR (in percent) of one investor from its compounding events.

    Each event's growth rate is weighted by the days elapsed since the previous
    event, so the first event never contributes.  The weighted mean daily
    growth is compounded over 365 days and the resulting percentage is then
    multiplied by 365 again; downstream consumers rely on that magnitude.

    Parameters
    ----------
    events:
        Events of a single investor in any order.

    Returns
    -------
    float
        ``0.0`` when all events share one timestamp (e.g. a single event).

    Raises
    ------
    EmptyEventSequenceError
        If ``events`` is empty.
    """

    if not events:
        raise EmptyEventSequenceError("APR requires at least one compounding event")

    ordered = sorted(events, key=lambda e: e.timestamp)
    carry = DualCarry.empty()
    previous_timestamp = ordered[0].timestamp
    total_time_weighted_growth = 0.0
    total_time_span_days = 0.0

    for event in ordered:
        time_diff_days = (event.timestamp - previous_timestamp) / MS_PER_DAY
        growth_rate = event_growth(event, carry)
        total_time_weighted_growth += growth_rate * time_diff_days
        total_time_span_days += time_diff_days
        previous_timestamp = event.timestamp

    apr = 0.0
    if total_time_span_days > 0:
        apr = annualize(total_time_weighted_growth / total_time_span_days)
    return apr * DAYS_PER_YEAR


def group_by_investor(
    events: Iterable[CompoundingEvent],
) -> dict[InvestorId, list[CompoundingEvent]]:
    return EventRepository(events).group_by_investor()


class AprEngine:
    """Compute per-investor APRs concurrently and map them onto pools."""

    def __init__(self, registry: InvestorPoolLookup) -> None:
        self.registry = registry

    @staticmethod
    async def _investor_apr(
        investor_id: InvestorId, events: list[CompoundingEvent]
    ) -> tuple[InvestorId, float]:
        return investor_id, investor_apr(events)

    async def apr_for_investors(
        self, events: Iterable[CompoundingEvent]
    ) -> dict[InvestorId, float]:
        groups = group_by_investor(events)
        results = await asyncio.gather(
            *(self._investor_apr(investor_id, group) for investor_id, group in groups.items())
        )
        return dict(results)

    async def _investor_pool_map(self) -> Mapping[InvestorId, PoolName]:
        mapping = self.registry.investor_pool_map()
        if inspect.isawaitable(mapping):
            mapping = await mapping
        return mapping

    async def apr_for_pools(self, events: Iterable[CompoundingEvent]) -> AprResult:
        """Return ``{pool_name: apr}`` for every pool with resolvable investors.

        Investors are applied in lexical id order; when two investors resolve
        to the same pool the later one wins and a warning is logged.
        """

        investor_pools = await self._investor_pool_map()
        investor_aprs = await self.apr_for_investors(events)

        result: AprResult = {}
        owners: dict[PoolName, InvestorId] = {}
        for investor_id in sorted(investor_aprs):
            pool_name = investor_pools.get(investor_id)
            if not pool_name:
                logger.debug("Investor %s has no known pool; dropped", investor_id)
                continue
            if pool_name in owners:
                logger.warning(
                    "Pool %s resolved from investors %s and %s; keeping %s",
                    pool_name,
                    owners[pool_name],
                    investor_id,
                    investor_id,
                )
            owners[pool_name] = investor_id
            result[pool_name] = investor_aprs[investor_id]
        return result


__all__ = [
    "AprEngine",
    "InvestorPoolLookup",
    "annualize",
    "group_by_investor",
    "investor_apr",
]
