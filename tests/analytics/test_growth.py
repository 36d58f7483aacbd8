from __future__ import annotations

import pytest

from compound_yield_lab.analytics.growth import (
    DualCarry,
    SideCarry,
    dual_asset_growth,
    event_growth,
    safe_ratio,
    single_asset_growth,
)
from compound_yield_lab.core import DualAssetEvent, SingleAssetEvent


def _dual(ca: int, cb: int, ta: int, tb: int, ts: int = 0) -> DualAssetEvent:
    return DualAssetEvent(
        investor_id="0xinv",
        timestamp=ts,
        compound_amount_a=ca,
        compound_amount_b=cb,
        total_amount_a=ta,
        total_amount_b=tb,
    )


@pytest.mark.parametrize(
    ("numerator", "denominator", "expected"),
    [
        (12, 1012, 12 / 1012),
        (5, 0, 0.0),
        (0, 0, 0.0),
        (10**400, 1, 0.0),
    ],
)
def test_safe_ratio(numerator: int, denominator: int, expected: float) -> None:
    assert safe_ratio(numerator, denominator) == expected


def test_single_asset_zero_total_counts_as_no_growth() -> None:
    event = SingleAssetEvent(investor_id="0xinv", timestamp=0, compound_amount=5, total_amount=0)
    assert single_asset_growth(event) == 0.0


def test_side_carry_without_known_total_contributes_nothing() -> None:
    side = SideCarry()
    assert side.carry(5) == 0.0
    assert side.pending_compound == 5
    assert side.last_total == 0

    # a later snapshot with liquidity restarts from its own amounts
    assert side.reset(10, 100) == pytest.approx(0.1)
    assert side.pending_compound == 10
    assert side.last_total == 100


def test_side_carry_accumulates_against_last_nonzero_total() -> None:
    side = SideCarry(last_total=100)
    assert side.carry(5) == pytest.approx(0.05)
    assert side.carry(10) == pytest.approx(0.15)
    assert side.pending_compound == 15
    assert side.last_total == 100


def test_dual_asset_growth_is_mean_of_both_sides() -> None:
    carry = DualCarry.empty()
    growth = dual_asset_growth(_dual(10, 30, 1000, 2000), carry)
    assert growth == pytest.approx((0.01 + 0.015) / 2)
    assert carry.side_a == SideCarry(last_total=1000, pending_compound=10)
    assert carry.side_b == SideCarry(last_total=2000, pending_compound=30)


def test_dual_asset_zero_totals_carry_forward_until_liquidity_returns() -> None:
    carry = DualCarry.empty()
    dual_asset_growth(_dual(10, 20, 1000, 2000), carry)

    first_gap = dual_asset_growth(_dual(5, 5, 0, 0), carry)
    assert first_gap == pytest.approx((15 / 1000 + 25 / 2000) / 2)

    second_gap = dual_asset_growth(_dual(10, 10, 0, 0), carry)
    assert second_gap == pytest.approx((25 / 1000 + 35 / 2000) / 2)
    assert carry.side_a.last_total == 1000

    recovered = dual_asset_growth(_dual(4, 8, 800, 1600), carry)
    assert recovered == pytest.approx((4 / 800 + 8 / 1600) / 2)
    assert carry.side_a == SideCarry(last_total=800, pending_compound=4)


def test_dual_asset_single_zero_total_carries_both_sides() -> None:
    carry = DualCarry.empty()
    dual_asset_growth(_dual(10, 20, 1000, 2000), carry)

    growth = dual_asset_growth(_dual(6, 4, 1200, 0), carry)
    assert growth == pytest.approx((16 / 1000 + 24 / 2000) / 2)
    assert carry.side_a.last_total == 1000


def test_dual_asset_zero_totals_before_any_liquidity() -> None:
    carry = DualCarry.empty()
    assert dual_asset_growth(_dual(5, 5, 0, 0), carry) == 0.0
    assert carry.side_a.pending_compound == 5


def test_event_growth_dispatches_on_shape() -> None:
    carry = DualCarry.empty()
    single = SingleAssetEvent(investor_id="0xinv", timestamp=0, compound_amount=1, total_amount=4)
    assert event_growth(single, carry) == 0.25
    assert event_growth(_dual(1, 1, 2, 4), carry) == pytest.approx(0.375)
