"""tickrisk – Return series core types.

This module defines the tick value type fed into
:class:`tickrisk.returns.series.ReturnSeries` and the percentage-return
formula shared by every ingestion path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from tickrisk.core.errors import DomainError


def pct_return(open_price: float, close_price: float) -> float:
    """Return the percentage price change ``(close - open) / open * 100``.

    Raises:
        DomainError: If ``open_price`` is zero.
    """

    if open_price == 0:
        raise DomainError(
            f"Cannot compute a return for a tick with zero opening price (close={close_price})"
        )
    return (close_price - open_price) / open_price * 100


@dataclass(frozen=True)
class Tick:
    """One opening/closing price observation for a security.

    Attributes:
        open: Tick opening price. Must be non-zero for a return to be
            defined.
        close: Tick closing price.
    """

    open: float
    close: float

    @property
    def pct_return(self) -> float:
        return pct_return(self.open, self.close)


TickLike = Union[Tick, Tuple[float, float]]


def as_tick(value: TickLike) -> Tick:
    """Coerce a ``Tick`` or an ``(open, close)`` pair into a :class:`Tick`."""

    if isinstance(value, Tick):
        return value
    open_price, close_price = value
    return Tick(open=float(open_price), close=float(close_price))
