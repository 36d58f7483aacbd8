"""Immutable data models used throughout CompoundYieldLab."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any, TypeAlias

from ..exceptions import InvalidEventError
from .constants import DUAL_ASSET_FIELDS

InvestorId: TypeAlias = str
PoolName: TypeAlias = str


@dataclass(frozen=True)
class CompoundingEvent:
    """On-chain auto-compounding (or rebalance) record of one investor."""

    investor_id: InvestorId
    timestamp: int  # epoch milliseconds
    event_type: str | None = None

    @property
    def is_dual_asset(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        """Serialise the event to a dictionary suitable for DataFrame creation."""

        data = asdict(self)
        data["shape"] = "dual" if self.is_dual_asset else "single"
        data["timestamp_iso"] = datetime.fromtimestamp(
            self.timestamp / 1000, tz=UTC
        ).isoformat()
        return data


@dataclass(frozen=True)
class SingleAssetEvent(CompoundingEvent):
    """Compounding of a single-token position (lending vaults)."""

    compound_amount: int = 0
    total_amount: int = 0


@dataclass(frozen=True)
class DualAssetEvent(CompoundingEvent):
    """Compounding of a two-token liquidity position."""

    compound_amount_a: int = 0
    compound_amount_b: int = 0
    total_amount_a: int = 0
    total_amount_b: int = 0

    @property
    def is_dual_asset(self) -> bool:
        return True


@dataclass(frozen=True)
class PoolInfo:
    """Registry entry describing a pool and the investor that owns its position."""

    name: PoolName
    investor_id: InvestorId
    auto_compounding_event_type: str | None = None
    protocol: str = ""
    parent_protocol: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


EventBatch: TypeAlias = list[CompoundingEvent]
AprResult: TypeAlias = dict[PoolName, float]


def _amount(record: Mapping[str, Any], field: str) -> int:
    raw = record.get(field)
    if raw is None or isinstance(raw, bool):
        raise InvalidEventError(f"event field {field!r} is missing or not an integer")
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidEventError(f"event field {field!r} is not an integer: {raw!r}") from exc
    if value < 0:
        raise InvalidEventError(f"event field {field!r} is negative: {value}")
    return value


def parse_event(record: Mapping[str, Any], event_type: str | None = None) -> CompoundingEvent:
    """Build the concrete event shape for a raw indexer record.

    Records carrying both ``total_amount_a`` and ``total_amount_b`` are dual-asset
    events; records carrying ``total_amount`` are single-asset events.  The
    record's own ``type`` key, when present, takes precedence over
    ``event_type``.
    """

    investor_id = record.get("investor_id")
    if not investor_id:
        raise InvalidEventError("event record has no investor_id")
    timestamp = _amount(record, "timestamp")
    kind = record.get("type") or event_type

    if all(field in record for field in DUAL_ASSET_FIELDS):
        return DualAssetEvent(
            investor_id=str(investor_id),
            timestamp=timestamp,
            event_type=kind,
            compound_amount_a=_amount(record, "compound_amount_a"),
            compound_amount_b=_amount(record, "compound_amount_b"),
            total_amount_a=_amount(record, "total_amount_a"),
            total_amount_b=_amount(record, "total_amount_b"),
        )
    if "total_amount" in record:
        return SingleAssetEvent(
            investor_id=str(investor_id),
            timestamp=timestamp,
            event_type=kind,
            compound_amount=_amount(record, "compound_amount"),
            total_amount=_amount(record, "total_amount"),
        )
    raise InvalidEventError(
        f"event for investor {investor_id!r} has neither single- nor dual-asset amounts"
    )


__all__ = [
    "AprResult",
    "CompoundingEvent",
    "DualAssetEvent",
    "EventBatch",
    "InvestorId",
    "PoolInfo",
    "PoolName",
    "SingleAssetEvent",
    "parse_event",
]
