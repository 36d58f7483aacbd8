"""Exception hierarchy for CompoundYieldLab."""

from __future__ import annotations


class CompoundYieldError(Exception):
    """Base class for all errors raised by :mod:`compound_yield_lab`."""


class UpstreamFetchError(CompoundYieldError):
    """An event query against an :class:`~compound_yield_lab.sources.EventSource` failed.

    A single failed query aborts the whole collection so that APR inputs are
    never silently under-counted.
    """

    def __init__(self, event_type: str, message: str) -> None:
        super().__init__(f"fetching events of type {event_type!r} failed: {message}")
        self.event_type = event_type


class EmptyEventSequenceError(CompoundYieldError, ValueError):
    """APR was requested for an investor without any events."""


class InvalidEventError(CompoundYieldError, ValueError):
    """A raw event record matches neither the single- nor the dual-asset shape."""


class UnknownPoolError(CompoundYieldError, KeyError):
    """A pool name is not present in the registry."""

    def __init__(self, pool_name: str) -> None:
        super().__init__(pool_name)
        self.pool_name = pool_name

    def __str__(self) -> str:
        return f"unknown pool: {self.pool_name!r}"


__all__ = [
    "CompoundYieldError",
    "EmptyEventSequenceError",
    "InvalidEventError",
    "UnknownPoolError",
    "UpstreamFetchError",
]
