"""Visualization helpers for :mod:`compound_yield_lab`."""

from .visualizer import Visualizer

__all__ = ["Visualizer"]
