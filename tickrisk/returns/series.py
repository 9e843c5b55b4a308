"""tickrisk – Per-security return series.

:class:`ReturnSeries` accumulates percentage returns computed from price
ticks together with their arithmetic mean. Averaging can be deferred so
that bulk loads compute the mean once after all ticks are appended
instead of after every tick.
"""

from __future__ import annotations

import threading
from typing import Iterable, List, Tuple

from tickrisk.core.errors import DomainError
from tickrisk.core.logging import get_logger
from tickrisk.core.types import Identifier
from tickrisk.returns.types import TickLike, as_tick, pct_return


logger = get_logger(__name__)


class ReturnSeries:
    """Historical percentage returns and their average for one security.

    The ``returns`` history is append-only. ``average`` starts at ``0.0``
    and may lag behind ``returns`` while averaging is deferred; it is
    exact after every call to :meth:`recompute_average`.

    ``identifier`` must be a ``str`` (typically a ticker symbol). The risk
    engine keys members by it, accepts it in place of the series in
    lookups, and hashes its UTF-8 encoding into cache fingerprints.

    Typical usage::

        intel = ReturnSeries("INTC")
        intel.push(10, 20)
        intel.push(20, 30)
        intel.average  # 75.0
    """

    def __init__(self, identifier: Identifier) -> None:
        if not isinstance(identifier, str):
            raise TypeError(
                f"ReturnSeries identifier must be a str, got {type(identifier).__name__}"
            )
        self._identifier = identifier
        self._returns: List[float] = []
        self._average: float = 0.0
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return (
            f"ReturnSeries({self._identifier!r}, n={len(self._returns)}, "
            f"average={self._average!r})"
        )

    def __len__(self) -> int:
        return len(self._returns)

    @property
    def identifier(self) -> Identifier:
        return self._identifier

    @property
    def returns(self) -> Tuple[float, ...]:
        """Immutable view of the return history in ingestion order."""

        return tuple(self._returns)

    @property
    def average(self) -> float:
        return self._average

    def state(self) -> Tuple[Tuple[float, ...], float]:
        """Return ``(returns, average)`` read together under the series lock.

        Readers that need both values use this so a concurrent
        :meth:`push` cannot land between the two reads.
        """

        with self._lock:
            return tuple(self._returns), self._average

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def push(self, open_price: float, close_price: float, defer_average: bool = False) -> None:
        """Append the return of one tick.

        Args:
            open_price: Tick opening price; must be non-zero.
            close_price: Tick closing price.
            defer_average: When ``True`` the average is left untouched and
                the caller is expected to call :meth:`recompute_average`
                once loading is complete.

        Raises:
            DomainError: If ``open_price`` is zero. Nothing is appended.
        """

        value = pct_return(open_price, close_price)
        with self._lock:
            self._returns.append(value)
            if not defer_average:
                self.recompute_average()

    def push_many(self, ticks: Iterable[TickLike]) -> int:
        """Bulk-load ticks and recompute the average once at the end.

        Accepts :class:`Tick` instances or ``(open, close)`` pairs. If a
        tick with a zero opening price is encountered, the ticks before it
        remain appended, the average is not recomputed, and
        :class:`DomainError` propagates.

        Returns:
            Number of ticks ingested.
        """

        count = 0
        with self._lock:
            for raw in ticks:
                tick = as_tick(raw)
                self.push(tick.open, tick.close, defer_average=True)
                count += 1
            if count:
                self.recompute_average()

        logger.debug("ReturnSeries %s: bulk-loaded %d ticks", self._identifier, count)
        return count

    @classmethod
    def from_ticks(cls, identifier: Identifier, ticks: Iterable[TickLike]) -> "ReturnSeries":
        """Build a series for ``identifier`` from an iterable of ticks."""

        series = cls(identifier)
        series.push_many(ticks)
        return series

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def recompute_average(self) -> float:
        """Recompute ``average`` as the arithmetic mean of ``returns``.

        Returns:
            The newly computed average.

        Raises:
            DomainError: If the series has no returns. ``average`` is left
                unchanged.
        """

        with self._lock:
            if not self._returns:
                raise DomainError(
                    f"Average of an empty return history is undefined ({self._identifier!r})"
                )
            self._average = sum(self._returns) / len(self._returns)
            return self._average

    def snapshot(self) -> "ReturnSeries":
        """Return an independent copy frozen at the current state.

        The copy shares the identifier but not the underlying return list,
        so later pushes on either series are not visible in the other.
        """

        with self._lock:
            copy = ReturnSeries(self._identifier)
            copy._returns = list(self._returns)
            copy._average = self._average
            return copy
