"""Core constants shared across CompoundYieldLab modules."""

from __future__ import annotations

# Event timestamps are epoch milliseconds.
MS_PER_DAY = 1000 * 60 * 60 * 24

# Daily growth is compounded over this many periods, and the resulting rate is
# extrapolated by the same factor once more (see analytics.apr.investor_apr).
DAYS_PER_YEAR = 365

# Fields whose presence marks a two-token (dual-asset) compounding event.
DUAL_ASSET_FIELDS = ("total_amount_a", "total_amount_b")

__all__ = ["DAYS_PER_YEAR", "DUAL_ASSET_FIELDS", "MS_PER_DAY"]
