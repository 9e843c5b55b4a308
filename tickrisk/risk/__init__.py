"""tickrisk – Portfolio Risk Engine package.

This package exposes the member/report types, the covariance model and
the :class:`RiskEngine` that reduces them into a portfolio variance.
"""

from __future__ import annotations

from tickrisk.risk.types import MemberRecord, RiskReport
from tickrisk.risk.covariance import build_covariance_matrix, calculate_covariance
from tickrisk.risk.engine import RiskEngine

__all__ = [
    "MemberRecord",
    "RiskReport",
    "RiskEngine",
    "build_covariance_matrix",
    "calculate_covariance",
]
