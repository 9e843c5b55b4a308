"""Tests for the covariance model and matrix construction."""

from __future__ import annotations

import numpy as np
import pytest

from tickrisk.core.errors import DomainError
from tickrisk.returns import ReturnSeries
from tickrisk.risk.covariance import (
    build_covariance_matrix,
    calculate_covariance,
    quadratic_form,
)


def _intel() -> ReturnSeries:
    return ReturnSeries.from_ticks("intel", [(10, 20), (20, 30), (30, 15)])


def _apple() -> ReturnSeries:
    return ReturnSeries.from_ticks("apple", [(10, 20), (20, 30)])


class TestCalculateCovariance:
    def test_overlapping_prefix_sample_covariance(self) -> None:
        """Only the first min(len) returns are used, centred on stored averages."""

        assert calculate_covariance(_intel(), _apple()) == pytest.approx(1250.0)

    def test_symmetric(self) -> None:
        a = ReturnSeries.from_ticks("a", [(10, 12), (12, 11), (11, 15), (15, 14)])
        b = ReturnSeries.from_ticks("b", [(50, 49), (49, 52), (52, 53)])

        assert calculate_covariance(a, b) == calculate_covariance(b, a)

    def test_self_covariance_is_one(self) -> None:
        series = _intel()

        assert calculate_covariance(series, series) == 1.0

    def test_equal_content_distinct_objects_use_formula(self) -> None:
        """Identity, not value equality, selects the unit self-covariance."""

        a = _intel()
        b = _intel()
        returns = np.asarray(a.returns)
        expected = float(np.sum((returns - a.average) ** 2) / (len(returns) - 1))

        assert calculate_covariance(a, b) == pytest.approx(expected)
        assert calculate_covariance(a, b) != 1.0

    def test_single_overlap_raises(self) -> None:
        a = _intel()
        b = ReturnSeries.from_ticks("b", [(10, 11)])

        with pytest.raises(DomainError):
            calculate_covariance(a, b)

    def test_empty_series_raises(self) -> None:
        with pytest.raises(DomainError):
            calculate_covariance(_intel(), ReturnSeries("empty"))


class TestBuildCovarianceMatrix:
    def test_two_by_two(self) -> None:
        matrix = build_covariance_matrix([_intel(), _apple()])

        assert matrix.shape == (2, 2)
        np.testing.assert_allclose(matrix, [[1.0, 1250.0], [1250.0, 1.0]])

    def test_symmetric_with_unit_diagonal(self) -> None:
        series = [
            ReturnSeries.from_ticks("a", [(10, 12), (12, 11), (11, 15)]),
            ReturnSeries.from_ticks("b", [(50, 49), (49, 52), (52, 53)]),
            ReturnSeries.from_ticks("c", [(5, 6), (6, 5), (5, 5), (5, 7)]),
        ]

        matrix = build_covariance_matrix(series)

        assert np.array_equal(matrix, matrix.T)
        assert np.all(np.diag(matrix) == 1.0)

    def test_empty(self) -> None:
        assert build_covariance_matrix([]).shape == (0, 0)


class TestQuadraticForm:
    def test_scalar_reduction(self) -> None:
        weights = np.array([0.6, 0.4])
        matrix = np.array([[1.0, 1250.0], [1250.0, 1.0]])

        assert quadratic_form(weights, matrix) == pytest.approx(600.52)
