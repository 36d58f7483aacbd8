"""Analytics subpackage bundling growth-rate and APR helpers."""

from . import apr, growth
from .apr import AprEngine, annualize, group_by_investor, investor_apr

__all__ = [
    "AprEngine",
    "annualize",
    "apr",
    "group_by_investor",
    "growth",
    "investor_apr",
]
