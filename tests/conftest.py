"""
Shared fixtures for premium_checker tests.

Dates are pinned: NOW is midnight 2025-01-01 in New York, so "Feb 25"
resolves to 2025-02-25, 55 days out.
"""
import datetime as dt
import sys
from pathlib import Path

import pytest


def pytest_configure():
    """Ensure `src/` is on sys.path so tests run without an editable install."""
    root = Path(__file__).resolve().parents[1]
    src = root / "src"
    if src.exists():
        sys.path.insert(0, str(src))


NOW = dt.datetime(2025, 1, 1)
FEB_GROUP = "February 25, 2025 (Monthly)"


def make_result(
    strike: float,
    bid: float,
    exp: str = "2025-02-25",
    current: float = 100.0,
    annualized: float = 20.0,
    ticker: str = "TEST",
):
    from premium_checker.data_models import AnalysisResult

    return AnalysisResult(
        ticker=ticker,
        current_price=current,
        strike_price=strike,
        exp_date=dt.date.fromisoformat(exp),
        exp_date_str=exp,
        days_to_expiration=30,
        bid=bid,
        percentage_from_strike=(strike - current) / current * 100,
        roi=bid / strike * 100,
        annualized_roi=annualized,
    )


class FakeProvider:
    """Quote provider backed by a dict of ticker -> OptionsChainQuote."""

    def __init__(self, quotes, fail=()):
        self.quotes = quotes
        self.fail = set(fail)
        self.calls = []

    def get_option_quote(self, ticker, max_exp_date, kind="put"):
        from premium_checker.data_models import OptionsChainQuote

        self.calls.append((ticker, max_exp_date, kind))
        if ticker in self.fail:
            raise RuntimeError(f"boom: {ticker}")
        return self.quotes.get(ticker, OptionsChainQuote.empty())


@pytest.fixture
def put_chain():
    from premium_checker.data_models import ChainLink

    return [
        ChainLink(expirygroup=FEB_GROUP),
        ChainLink(strike="90.00", p_Bid="1.20", expiryDate="Feb 25"),
        ChainLink(strike="95.00", p_Bid="2.40", expiryDate="Feb 25"),
        ChainLink(strike="100.00", p_Bid="--", expiryDate="Feb 25"),
        ChainLink(strike="105.00", p_Bid="6.00", expiryDate="Feb 25"),
        ChainLink(strike="80.00", p_Bid="0.05", expiryDate="Feb 25"),
    ]


@pytest.fixture
def call_chain():
    from premium_checker.data_models import ChainLink

    return [
        ChainLink(expirygroup=FEB_GROUP),
        ChainLink(strike="100.00", c_Bid="2.00", c_Ask="2.20", expiryDate="Feb 25"),
        ChainLink(strike="103.00", c_Bid="1.00", c_Ask="1.20", expiryDate="Feb 25"),
        ChainLink(strike="107.00", c_Bid="0.50", c_Ask="--", expiryDate="Feb 25"),
    ]
