"""tickrisk – Risk engine core types.

This module defines the per-member record held by
:class:`tickrisk.risk.engine.RiskEngine` and the immutable report it
produces for callers that want more than the bare variance scalar.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from tickrisk.core.types import Identifier
from tickrisk.returns.series import ReturnSeries


@dataclass
class MemberRecord:
    """A security held by the engine.

    Attributes:
        series: Return series for the security, either the caller's own
            object (reference registration) or a private snapshot.
        value: Market value of the holding. Not validated; zero and
            negative values are kept as-is.
        weight: ``value / total_value`` as of the last weight
            recomputation, or ``0.0`` when the total is not positive.
    """

    series: ReturnSeries
    value: float
    weight: float = 0.0

    @property
    def identifier(self) -> Identifier:
        return self.series.identifier


@dataclass(frozen=True)
class RiskReport:
    """Point-in-time risk summary for an engine.

    Attributes:
        identifiers: Member identifiers in covariance-matrix order.
        weights: Mapping from identifier to weight.
        total_value: Sum of member market values.
        variance: Quadratic form ``w^T C w``; identical to
            :meth:`RiskEngine.calculate_risk`.
        volatility: Square root of ``variance``, or ``None`` when the
            variance is negative (the fixed unit diagonal does not
            guarantee a positive semi-definite matrix).
    """

    identifiers: Tuple[Identifier, ...]
    weights: Dict[Identifier, float]
    total_value: float
    variance: float
    volatility: Optional[float]

    @property
    def num_members(self) -> int:
        return len(self.identifiers)
