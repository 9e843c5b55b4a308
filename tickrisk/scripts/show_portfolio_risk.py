"""tickrisk – Portfolio risk inspection CLI.

This script loads price ticks from a CSV file, registers the requested
holdings with a :class:`tickrisk.risk.engine.RiskEngine` and prints the
resulting weights, variance and volatility.

The CSV must contain ``ticker``, ``open`` and ``close`` columns. Rows are
ingested in file order, so ticks for a ticker must appear
chronologically.

Example
-------

    python -m tickrisk.scripts.show_portfolio_risk \
        --ticks ticks.csv \
        --holding INTC=30 \
        --holding AAPL=20

"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

import pandas as pd

from tickrisk.core.errors import DomainError
from tickrisk.core.logging import get_logger, setup_logging
from tickrisk.returns.series import ReturnSeries
from tickrisk.risk.engine import RiskEngine
from tickrisk.risk.types import RiskReport


logger = get_logger(__name__)


_REQUIRED_COLUMNS = ("ticker", "open", "close")


def _parse_holding(value: str) -> Tuple[str, float]:
    """Parse a ``TICKER=VALUE`` holding argument."""

    ticker, sep, raw_value = value.partition("=")
    if not sep or not ticker:
        raise argparse.ArgumentTypeError(f"Invalid holding {value!r}, expected TICKER=VALUE")
    try:
        return ticker.strip(), float(raw_value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid market value in holding {value!r}") from exc


def load_series_from_csv(path: Path) -> Dict[str, ReturnSeries]:
    """Build one :class:`ReturnSeries` per ticker found in ``path``."""

    df = pd.read_csv(path)
    missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing required columns {missing}")

    series: Dict[str, ReturnSeries] = {}
    for ticker, group in df.groupby("ticker", sort=False):
        pairs = zip(group["open"].astype(float), group["close"].astype(float))
        series[str(ticker)] = ReturnSeries.from_ticks(str(ticker), pairs)

    logger.info("Loaded %d ticks for %d tickers from %s", len(df), len(series), path)
    return series


def build_report(series: Dict[str, ReturnSeries], holdings: Sequence[Tuple[str, float]]) -> RiskReport:
    engine = RiskEngine()
    for ticker, value in holdings:
        engine.add_member(series[ticker], value)
    return engine.build_risk_report()


def _print_report(report: RiskReport) -> None:
    print("# Portfolio risk")
    print(f"members={report.num_members}")
    print(f"total_value={report.total_value}")
    for ident in report.identifiers:
        print(f"weight[{ident}]={report.weights[ident]:.6f}")
    print(f"variance={report.variance:.6f}")
    if report.volatility is None:
        print("volatility=undefined (negative variance)")
    else:
        print(f"volatility={report.volatility:.6f}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description=(
            "Compute portfolio variance from historical ticks. Market values "
            "must share one currency."
        ),
    )
    parser.add_argument(
        "--ticks",
        type=Path,
        required=True,
        help="CSV file with ticker,open,close columns",
    )
    parser.add_argument(
        "--holding",
        type=_parse_holding,
        action="append",
        required=True,
        help="Holding as TICKER=MARKET_VALUE (repeatable)",
    )

    args = parser.parse_args(argv)
    setup_logging()

    try:
        series = load_series_from_csv(args.ticks)
    except DomainError as exc:
        parser.error(f"{args.ticks}: {exc}")

    unknown = [ticker for ticker, _ in args.holding if ticker not in series]
    if unknown:
        parser.error(f"No ticks found for holdings: {', '.join(unknown)}")

    try:
        report = build_report(series, args.holding)
    except DomainError as exc:
        parser.error(str(exc))

    _print_report(report)


if __name__ == "__main__":  # pragma: no cover - manual CLI entry
    main()
