"""tickrisk – top-level package exports.

This module re-exports commonly used engine components for convenience.
"""

from tickrisk.core.errors import DomainError, MemberLookupError, TickriskError
from tickrisk.returns import ReturnSeries, Tick
from tickrisk.risk import RiskEngine, RiskReport
