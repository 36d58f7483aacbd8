"""Per-event growth rates for compounding events."""

from __future__ import annotations

from dataclasses import dataclass
import math

from ..core import CompoundingEvent, DualAssetEvent, SingleAssetEvent


def safe_ratio(numerator: int, denominator: int) -> float:
    """Return ``numerator / denominator`` as a float, or ``0.0`` when undefined.

    Amounts are converted to floats before dividing.  Division by zero and
    non-finite results count as zero growth.
    """

    try:
        ratio = float(numerator) / float(denominator)
    except (ZeroDivisionError, OverflowError):
        return 0.0
    return ratio if math.isfinite(ratio) else 0.0


@dataclass
class SideCarry:
    """Carry-over state of one token side of a dual-asset position.

    ``last_total`` is the most recent nonzero total amount seen and
    ``pending_compound`` the compound amount accumulated since then.
    """

    last_total: int = 0
    pending_compound: int = 0

    def reset(self, compound: int, total: int) -> float:
        self.pending_compound = compound
        self.last_total = total
        return safe_ratio(compound, total)

    def carry(self, compound: int) -> float:
        self.pending_compound += compound
        return safe_ratio(self.pending_compound, self.last_total)


@dataclass
class DualCarry:
    side_a: SideCarry
    side_b: SideCarry

    @classmethod
    def empty(cls) -> "DualCarry":
        return cls(SideCarry(), SideCarry())


def dual_asset_growth(event: DualAssetEvent, carry: DualCarry) -> float:
    """Mean growth of both token sides, updating ``carry`` in place.

    A snapshot where either total is zero has no usable liquidity figure: its
    compound amounts are added to the pending amounts and divided by the last
    nonzero totals instead.
    """

    if event.total_amount_a != 0 and event.total_amount_b != 0:
        growth_a = carry.side_a.reset(event.compound_amount_a, event.total_amount_a)
        growth_b = carry.side_b.reset(event.compound_amount_b, event.total_amount_b)
    else:
        growth_a = carry.side_a.carry(event.compound_amount_a)
        growth_b = carry.side_b.carry(event.compound_amount_b)
    return (growth_a + growth_b) / 2


def single_asset_growth(event: SingleAssetEvent) -> float:
    return safe_ratio(event.compound_amount, event.total_amount)


def event_growth(event: CompoundingEvent, carry: DualCarry) -> float:
    """Growth rate of a single event, dispatching on its shape."""

    if isinstance(event, DualAssetEvent):
        return dual_asset_growth(event, carry)
    if isinstance(event, SingleAssetEvent):
        return single_asset_growth(event)
    return 0.0


__all__ = [
    "DualCarry",
    "SideCarry",
    "dual_asset_growth",
    "event_growth",
    "safe_ratio",
    "single_asset_growth",
]
