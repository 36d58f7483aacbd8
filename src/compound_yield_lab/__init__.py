"""
CompoundYieldLab: APR analytics for auto-compounding vault investors.

Design goals:
- Immutable event model (single- and dual-asset compounding events)
- Pluggable event sources (in-memory, JSON export, GraphQL indexer)
- Time-weighted growth reduced to an annualized rate per investor
- Pool-level APR map via a light pool registry
- Pandas reports and matplotlib charts on top
"""

from __future__ import annotations

import logging

from . import analytics, reporting
from .analytics import AprEngine, investor_apr
from .core import (
    AprResult,
    CompoundingEvent,
    DualAssetEvent,
    EventRepository,
    PoolInfo,
    PoolRegistry,
    SingleAssetEvent,
    parse_event,
)
from .exceptions import (
    CompoundYieldError,
    EmptyEventSequenceError,
    InvalidEventError,
    UnknownPoolError,
    UpstreamFetchError,
)
from .pipeline import AprPipeline, EventCollector
from .reporting import apr_report, write_apr_report
from .sources import EventSource, GraphQLEventSource, InMemoryEventSource, JSONEventSource
from .visualization import Visualizer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AprEngine",
    "AprPipeline",
    "AprResult",
    "CompoundYieldError",
    "CompoundingEvent",
    "DualAssetEvent",
    "EmptyEventSequenceError",
    "EventCollector",
    "EventRepository",
    "EventSource",
    "GraphQLEventSource",
    "InMemoryEventSource",
    "InvalidEventError",
    "JSONEventSource",
    "PoolInfo",
    "PoolRegistry",
    "SingleAssetEvent",
    "UnknownPoolError",
    "UpstreamFetchError",
    "Visualizer",
    "analytics",
    "apr_report",
    "investor_apr",
    "parse_event",
    "reporting",
    "write_apr_report",
]
