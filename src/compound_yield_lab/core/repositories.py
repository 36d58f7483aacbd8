"""In-memory repositories for CompoundYieldLab data models."""

from __future__ import annotations

import tomllib
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

import pandas as pd

from ..exceptions import UnknownPoolError
from .models import CompoundingEvent, InvestorId, PoolInfo, PoolName


class EventRepository:
    """Lightweight in-memory collection of events with pandas export."""

    def __init__(self, events: Iterable[CompoundingEvent] | None = None) -> None:
        self._events: list[CompoundingEvent] = list(events) if events else []

    def add(self, event: CompoundingEvent) -> None:
        self._events.append(event)

    def extend(self, items: Iterable[CompoundingEvent]) -> None:
        self._events.extend(items)

    def filter_investors(self, investor_ids: Iterable[InvestorId]) -> "EventRepository":
        wanted = set(investor_ids)
        return EventRepository(e for e in self._events if e.investor_id in wanted)

    def group_by_investor(self) -> dict[InvestorId, list[CompoundingEvent]]:
        """Split events per investor, keeping their relative order."""

        groups: dict[InvestorId, list[CompoundingEvent]] = {}
        for event in self._events:
            groups.setdefault(event.investor_id, []).append(event)
        return groups

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([event.to_dict() for event in self._events])

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[CompoundingEvent]:
        return iter(self._events)


class PoolRegistry:
    """Pool metadata keyed by pool name, with the reverse investor lookup.

    Each investor id may belong to one pool only; the constructor rejects
    registries that would make the investor to pool map ambiguous.
    """

    def __init__(self, pools: Iterable[PoolInfo] | None = None) -> None:
        self._pools: dict[PoolName, PoolInfo] = {}
        owners: dict[InvestorId, PoolName] = {}
        for info in pools or ():
            if info.name in self._pools:
                raise ValueError(f"duplicate pool name: {info.name!r}")
            if info.investor_id in owners:
                raise ValueError(
                    f"investor {info.investor_id!r} is registered for both "
                    f"{owners[info.investor_id]!r} and {info.name!r}"
                )
            self._pools[info.name] = info
            owners[info.investor_id] = info.name
        self._owners = owners

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, Any]]) -> "PoolRegistry":
        """Build a registry from ``{pool_name: {investor_id: ..., ...}}`` tables."""

        pools: list[PoolInfo] = []
        for name, entry in raw.items():
            if "investor_id" not in entry:
                raise ValueError(f"pool {name!r} has no investor_id")
            pools.append(
                PoolInfo(
                    name=str(name),
                    investor_id=str(entry["investor_id"]),
                    auto_compounding_event_type=entry.get("auto_compounding_event_type") or None,
                    protocol=str(entry.get("protocol", "")),
                    parent_protocol=str(entry.get("parent_protocol", "")),
                )
            )
        return cls(pools)

    @classmethod
    def from_toml(cls, path: str | Path) -> "PoolRegistry":
        """Load ``[pools.<name>]`` tables from a TOML file."""

        with open(path, "rb") as f:
            data = tomllib.load(f)
        return cls.from_mapping(data.get("pools", {}))

    def __getitem__(self, pool_name: PoolName) -> PoolInfo:
        try:
            return self._pools[pool_name]
        except KeyError:
            raise UnknownPoolError(pool_name) from None

    def __contains__(self, pool_name: object) -> bool:
        return pool_name in self._pools

    def __len__(self) -> int:
        return len(self._pools)

    def __iter__(self) -> Iterator[PoolInfo]:
        return iter(self._pools.values())

    def pool_names(self) -> list[PoolName]:
        return list(self._pools)

    def _select(self, pool_names: Iterable[PoolName] | None) -> list[PoolInfo]:
        if pool_names is None:
            return list(self._pools.values())
        return [self[name] for name in pool_names]

    def event_types(self, pool_names: Iterable[PoolName] | None = None) -> list[str]:
        """Distinct compounding event types of the selected pools, first-seen order.

        Pools without an event type are skipped.  ``None`` selects every pool.
        """

        seen: dict[str, None] = {}
        for info in self._select(pool_names):
            if info.auto_compounding_event_type:
                seen.setdefault(info.auto_compounding_event_type, None)
        return list(seen)

    def investor_ids(self, pool_names: Iterable[PoolName] | None = None) -> set[InvestorId]:
        return {info.investor_id for info in self._select(pool_names)}

    def investor_pool_map(self) -> dict[InvestorId, PoolName]:
        return dict(self._owners)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([info.to_dict() for info in self._pools.values()])


__all__ = ["EventRepository", "PoolRegistry"]
