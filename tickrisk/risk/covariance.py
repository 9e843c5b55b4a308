"""tickrisk – Covariance model between return series.

The risk model uses a simplified covariance: a series compared with
itself (by identity) has covariance exactly ``1``, regardless of its
statistical variance. Distinct series use the Bessel-corrected sample
covariance over their overlapping prefix, centred on each series' stored
``average`` rather than the mean of the overlap.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from tickrisk.core.errors import DomainError
from tickrisk.core.types import CovarianceMatrix
from tickrisk.returns.series import ReturnSeries


def calculate_covariance(a: ReturnSeries, b: ReturnSeries) -> float:
    """Return the model covariance between two series.

    Args:
        a: First series.
        b: Second series.

    Returns:
        ``1.0`` if ``a is b``; otherwise
        ``sum((a_i - a.average) * (b_i - b.average)) / (n - 1)`` over the
        first ``n = min(len(a), len(b))`` returns.

    Raises:
        DomainError: If the series are distinct and overlap on fewer than
            two ticks.
    """

    if a is b:
        return 1.0

    returns_a, average_a = a.state()
    returns_b, average_b = b.state()

    n = min(len(returns_a), len(returns_b))
    if n <= 1:
        raise DomainError(
            f"Covariance of {a.identifier!r} and {b.identifier!r} needs at least "
            f"2 overlapping returns, got {n}"
        )

    diff_a = np.asarray(returns_a[:n], dtype=float) - average_a
    diff_b = np.asarray(returns_b[:n], dtype=float) - average_b
    return float(np.dot(diff_a, diff_b) / (n - 1))


def build_covariance_matrix(series: Sequence[ReturnSeries]) -> CovarianceMatrix:
    """Build the square covariance matrix for ``series`` in the given order.

    Only the upper triangle is computed; the lower triangle is mirrored
    from it, so the result is exactly symmetric with a unit diagonal.
    """

    size = len(series)
    matrix = np.empty((size, size), dtype=float)
    for i in range(size):
        matrix[i, i] = calculate_covariance(series[i], series[i])
        for j in range(i + 1, size):
            cov = calculate_covariance(series[i], series[j])
            matrix[i, j] = cov
            matrix[j, i] = cov
    return matrix


def quadratic_form(weights: np.ndarray, matrix: CovarianceMatrix) -> float:
    """Return the scalar ``w^T C w``."""

    column = weights.reshape(-1, 1)
    return float((column.T @ matrix @ column)[0, 0])
