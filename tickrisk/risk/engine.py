"""tickrisk – Portfolio Risk Engine.

The :class:`RiskEngine` holds a set of (return series, market value)
members, keeps their relative weights current, and reduces the pairwise
covariance matrix with the weight vector into a scalar portfolio
variance.

Weights are recomputed eagerly on every membership or value change
because each weight depends on the total portfolio value. Risk is
computed lazily and memoised against a content fingerprint of all
members, so repeated queries without intervening changes do not rebuild
the covariance matrix.

Thread safety: each engine owns a re-entrant lock held across every
mutating call and across the cache check-and-update in
:meth:`RiskEngine.calculate_risk`. A :class:`ReturnSeries` registered by
reference is read under its own lock: ``calculate_risk`` copies every
member series once and derives both the cache fingerprint and the
covariance matrix from those copies, so a concurrent ``push`` is either
fully included in a result or left for the next call.
"""

from __future__ import annotations

import math
import threading
from typing import Dict, List, Optional, Union

import numpy as np

from tickrisk.core.config import get_config
from tickrisk.core.errors import DomainError, MemberLookupError
from tickrisk.core.logging import get_logger
from tickrisk.core.types import CovarianceMatrix, Identifier, WeightVector
from tickrisk.returns.series import ReturnSeries
from tickrisk.risk import covariance
from tickrisk.risk.fingerprint import fingerprint_members
from tickrisk.risk.types import MemberRecord, RiskReport


logger = get_logger(__name__)


MemberKey = Union[Identifier, ReturnSeries]


def _identifier_of(member: MemberKey) -> Identifier:
    if isinstance(member, ReturnSeries):
        return member.identifier
    return member


class RiskEngine:
    """Portfolio membership, weights and cached quadratic-form risk.

    Members are kept in insertion order; that order defines both the
    rows/columns of :meth:`create_covariance_matrix` and the entries of
    :meth:`create_weight_vector`.

    Typical usage::

        engine = RiskEngine()
        engine.add_member(intel, 30)
        engine.add_member(apple, 20)
        engine.calculate_risk()  # 600.52

    Attributes:
        total_value: Sum of member market values as of the last weight
            recomputation.
        matrix_builds: Number of covariance matrices constructed so far.
            Cache hits in :meth:`calculate_risk` do not increment it.
    """

    def __init__(self, cache_enabled: Optional[bool] = None) -> None:
        if cache_enabled is None:
            cache_enabled = get_config().risk_engine.cache_enabled

        self.cache_enabled = cache_enabled
        self.total_value: float = 0.0
        self.matrix_builds: int = 0

        self._members: Dict[Identifier, MemberRecord] = {}
        self._cached_fingerprint: Optional[str] = None
        self._cached_risk: float = 0.0
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, member: object) -> bool:
        if not isinstance(member, (str, ReturnSeries)):
            return False
        return self.has_member(member)

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def add_member(self, series: ReturnSeries, value: float) -> None:
        """Register ``series`` by reference with market ``value``.

        Later pushes on ``series`` are visible to this engine. An existing
        member with the same identifier is replaced.
        """

        self._register(series, value)

    def add_member_snapshot(self, series: ReturnSeries, value: float) -> None:
        """Register an independent snapshot of ``series`` with market ``value``.

        The engine stores a copy of the returns and average as they are
        now; later pushes on ``series`` are not visible to this engine. An
        existing member with the same identifier is replaced.
        """

        self._register(series.snapshot(), value)

    def _register(self, series: ReturnSeries, value: float) -> None:
        with self._lock:
            replaced = series.identifier in self._members
            self._members[series.identifier] = MemberRecord(series=series, value=value)
            logger.debug(
                "RiskEngine: %s member %s (value=%s)",
                "replaced" if replaced else "added",
                series.identifier,
                value,
            )
            self.calculate_weights()

    def remove_member(self, member: MemberKey) -> None:
        """Remove a member if present; unknown identifiers are ignored."""

        identifier = _identifier_of(member)
        with self._lock:
            if self._members.pop(identifier, None) is None:
                logger.debug("RiskEngine: remove of unknown member %s ignored", identifier)
            self.calculate_weights()

    def update_value(self, member: MemberKey, value: float) -> None:
        """Overwrite a member's market value.

        The value is not validated: zero and negative values are stored
        and the member is kept.

        Raises:
            MemberLookupError: If the identifier is not a current member.
        """

        identifier = _identifier_of(member)
        with self._lock:
            record = self._members.get(identifier)
            if record is None:
                raise MemberLookupError(identifier)
            record.value = value
            self.calculate_weights()

    def list_identifiers(self) -> List[Identifier]:
        with self._lock:
            return list(self._members)

    def has_member(self, member: MemberKey) -> bool:
        with self._lock:
            return _identifier_of(member) in self._members

    def get_member(self, member: MemberKey) -> MemberRecord:
        """Return the live record for a member.

        Use :meth:`update_value` to change the value so that weights are
        kept in step.

        Raises:
            MemberLookupError: If the identifier is not a current member.
        """

        identifier = _identifier_of(member)
        with self._lock:
            record = self._members.get(identifier)
            if record is None:
                raise MemberLookupError(identifier)
            return record

    # ------------------------------------------------------------------
    # Value and weights
    # ------------------------------------------------------------------

    def calculate_total_value(self) -> float:
        with self._lock:
            self.total_value = sum(record.value for record in self._members.values())
            return self.total_value

    def calculate_weights(self) -> None:
        """Recompute ``total_value`` and every member's weight.

        When the total is zero or negative every weight is set to ``0.0``
        rather than dividing by it.
        """

        with self._lock:
            total = self.calculate_total_value()
            for record in self._members.values():
                record.weight = record.value / total if total > 0 else 0.0
            logger.debug(
                "RiskEngine: recomputed weights for %d members (total_value=%s)",
                len(self._members),
                total,
            )

    def create_weight_vector(self) -> WeightVector:
        with self._lock:
            return np.array([record.weight for record in self._members.values()], dtype=float)

    # ------------------------------------------------------------------
    # Covariance and risk
    # ------------------------------------------------------------------

    @staticmethod
    def calculate_covariance(a: ReturnSeries, b: ReturnSeries) -> float:
        """See :func:`tickrisk.risk.covariance.calculate_covariance`."""

        return covariance.calculate_covariance(a, b)

    def create_covariance_matrix(self) -> CovarianceMatrix:
        with self._lock:
            return self._build_matrix([record.series for record in self._members.values()])

    def _build_matrix(self, series: List[ReturnSeries]) -> CovarianceMatrix:
        matrix = covariance.build_covariance_matrix(series)
        self.matrix_builds += 1
        return matrix

    def _frozen_members(self) -> List[MemberRecord]:
        # Each series is copied under its own lock so the fingerprint and
        # the matrix below describe the same returns even while another
        # thread pushes to a by-reference member.
        return [
            MemberRecord(series=record.series.snapshot(), value=record.value, weight=record.weight)
            for record in self._members.values()
        ]

    def calculate_risk(self) -> float:
        """Return the portfolio variance ``w^T C w``.

        Returns ``0.0`` without any matrix work when ``total_value`` is not
        positive. Otherwise the cached value is returned if the member
        fingerprint is unchanged since the last computation.

        By-reference series are read once, each under its own lock, at the
        start of the call. Ticks pushed after that point are picked up by
        the next call.

        Raises:
            DomainError: If two members overlap on fewer than two returns.
        """

        with self._lock:
            if self.total_value <= 0:
                return 0.0

            frozen = self._frozen_members()

            current: Optional[str] = None
            if self.cache_enabled:
                current = fingerprint_members(frozen)
                if current == self._cached_fingerprint:
                    logger.debug("RiskEngine: risk cache hit")
                    return self._cached_risk

            weights = np.array([record.weight for record in frozen], dtype=float)
            matrix = self._build_matrix([record.series for record in frozen])
            risk = covariance.quadratic_form(weights, matrix)

            self._cached_fingerprint = current
            self._cached_risk = risk
            logger.debug(
                "RiskEngine: computed risk %.6f over %d members", risk, len(self._members)
            )
            return risk

    def calculate_volatility(self) -> float:
        """Return the square root of :meth:`calculate_risk`.

        Raises:
            DomainError: If the variance is negative.
        """

        variance = self.calculate_risk()
        if variance < 0:
            raise DomainError(f"Volatility is undefined for negative variance {variance}")
        return math.sqrt(variance)

    def invalidate_cache(self) -> None:
        with self._lock:
            self._cached_fingerprint = None

    def build_risk_report(self) -> RiskReport:
        """Return a :class:`RiskReport` for the current members."""

        with self._lock:
            variance = self.calculate_risk()
            return RiskReport(
                identifiers=tuple(self._members),
                weights={ident: record.weight for ident, record in self._members.items()},
                total_value=self.total_value,
                variance=variance,
                volatility=math.sqrt(variance) if variance >= 0 else None,
            )
