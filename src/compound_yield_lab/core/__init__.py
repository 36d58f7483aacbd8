"""Core data structures for :mod:`compound_yield_lab`.

This subpackage groups the event models, the pool registry and the event
repository so they can be shared without importing the entire public
interface exposed in :mod:`compound_yield_lab.__init__`.
"""

from __future__ import annotations

from .constants import DAYS_PER_YEAR, MS_PER_DAY
from .models import (
    AprResult,
    CompoundingEvent,
    DualAssetEvent,
    EventBatch,
    InvestorId,
    PoolInfo,
    PoolName,
    SingleAssetEvent,
    parse_event,
)
from .repositories import EventRepository, PoolRegistry

__all__ = [
    "AprResult",
    "CompoundingEvent",
    "DAYS_PER_YEAR",
    "DualAssetEvent",
    "EventBatch",
    "EventRepository",
    "InvestorId",
    "MS_PER_DAY",
    "PoolInfo",
    "PoolName",
    "PoolRegistry",
    "SingleAssetEvent",
    "parse_event",
]
