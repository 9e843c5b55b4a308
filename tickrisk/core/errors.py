"""
tickrisk: Error Types

This module defines the exception hierarchy raised by the return-series
and risk-engine components.

Key responsibilities:
- Provide a single package-level base exception
- Separate numeric domain failures from membership lookup failures

External dependencies:
- None

Thread safety: Thread-safe (no mutable global state)

Author: tickrisk Team
Created: 2026-10-18
Last Modified: 2026-10-18
Status: Development
Version: v0.1.0
"""

from __future__ import annotations


class TickriskError(Exception):
    """Base class for all tickrisk errors."""


class DomainError(TickriskError, ValueError):
    """Raised when a statistic is undefined for the given input.

    Examples are a tick with a zero opening price, the average of an
    empty return history, a covariance over fewer than two overlapping
    ticks, or the volatility of a negative variance.
    """


class MemberLookupError(TickriskError, LookupError):
    """Raised when an identifier is not a current member of an engine."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Unknown portfolio member: {identifier!r}")
        self.identifier = identifier
