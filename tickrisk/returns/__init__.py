"""tickrisk – Return series package.

This package exposes the tick value type and the per-security
:class:`ReturnSeries` that the risk engine consumes.
"""

from .types import Tick, pct_return
from .series import ReturnSeries

__all__ = [
    "Tick",
    "ReturnSeries",
    "pct_return",
]
