# src/premium_checker/nasdaq_client.py
from __future__ import annotations

import datetime as dt
import logging
import time
from typing import Optional

import requests

from .data_models import ChainLink, OptionsChainQuote
from .utils import safe_float

logger = logging.getLogger(__name__)

BASE_URL = "https://api.nasdaq.com/api/quote/{ticker}/option-chain"
HEADERS = {
    "accept-language": "*",
    "user-agent": "Mozilla/5.0 (premium-checker)",
}


def parse_last_trade(last_trade: Optional[str]) -> float:
    """'LAST TRADE: $227.48 (AS OF Feb 7, 2025)' -> 227.48; 0.0 if absent."""
    if not last_trade or "$" not in last_trade:
        return 0.0
    price = last_trade.split("$", 1)[1].split("(", 1)[0].strip()
    return safe_float(price) or 0.0


def parse_chain_payload(payload: dict) -> OptionsChainQuote:
    data = (payload or {}).get("data") or {}
    rows = ((data.get("table") or {}).get("rows")) or []
    return OptionsChainQuote(
        rows=[ChainLink.model_validate(r) for r in rows if isinstance(r, dict)],
        current_price=parse_last_trade(data.get("lastTrade")),
    )


class NasdaqClient:
    """Option chains from the public nasdaq.com quote API.

    Any failure (network, JSON, empty table) is logged and returns an
    empty quote so one ticker cannot stop a scan.
    """

    def __init__(self, timeout: float = 15.0, retries: int = 3, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.retries = retries
        self._session = session or requests.Session()

    @staticmethod
    def _sleep_backoff(i: int) -> None:
        time.sleep(0.6 + 0.2 * i)

    def build_params(self, max_exp_date: str, kind: str, today: Optional[dt.date] = None) -> dict:
        today = today or dt.date.today()
        return {
            "assetclass": "stocks",
            "fromdate": today.isoformat(),
            "todate": max_exp_date,
            "excode": "oprac",
            "callput": kind,
            "money": "out",
            "type": "all",
        }

    def get_option_quote(self, ticker: str, max_exp_date: str, kind: str = "put") -> OptionsChainQuote:
        url = BASE_URL.format(ticker=ticker)
        params = self.build_params(max_exp_date, kind)
        logger.info("Fetching %s options for %s up to %s", kind, ticker, max_exp_date)
        for i in range(self.retries):
            try:
                resp = self._session.get(url, params=params, headers=HEADERS, timeout=self.timeout)
                resp.raise_for_status()
                quote = parse_chain_payload(resp.json())
                if not quote.rows:
                    raise ValueError(f"no results for {ticker}!")
                logger.info("current price for %s is %s, got %d rows", ticker, quote.current_price, len(quote.rows))
                return quote
            except (requests.RequestException, ValueError) as e:
                logger.warning("%s: attempt %d/%d failed: %s", ticker, i + 1, self.retries, e)
                if i + 1 < self.retries:
                    self._sleep_backoff(i)
        logger.error("%s: giving up, treating as no candidates", ticker)
        return OptionsChainQuote.empty()
