# src/premium_checker/yahoo_client.py

import datetime as dt
import logging
import time
from typing import List

import pandas as pd
import yfinance as yf

from .data_models import ChainLink, OptionsChainQuote

logger = logging.getLogger(__name__)


def expiry_token(exp: dt.date) -> str:
    return f"{exp:%b} {exp.day}"


def expiry_label(exp: dt.date) -> str:
    return f"{exp:%B} {exp.day}, {exp.year}"


def _quote_str(v) -> str:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return "--"
    return "--" if f != f else f"{f:.2f}"


def chain_frame_to_links(df: pd.DataFrame, exp: dt.date, kind: str) -> List[ChainLink]:
    """Turn one yfinance chain into exchange-style rows ("Feb 25" tokens, full labels)."""
    side = "p" if kind == "put" else "c"
    token, label = expiry_token(exp), expiry_label(exp)
    links = []
    for _, r in df.iterrows():
        links.append(ChainLink.model_validate({
            "strike": _quote_str(r.get("strike")),
            f"{side}_Bid": _quote_str(r.get("bid")),
            f"{side}_Ask": _quote_str(r.get("ask")),
            "expiryDate": token,
            "expirygroup": label,
        }))
    return links


class YahooClient:
    """Thin wrapper around yfinance with a few robustness tweaks.

    - Robust spot price detection from fast_info / info / history
    - Chains are reshaped to the same rows the nasdaq client returns
    """

    # ----------------------------- helpers -----------------------------
    @staticmethod
    def _sleep_backoff(i: int) -> None:
        time.sleep(0.6 + 0.2 * i)

    # --------------------------- public APIs ---------------------------
    def get_expirations(self, tkr: yf.Ticker) -> List[str]:
        """Return available option expirations as ISO date strings."""
        for i in range(3):
            try:
                exps = tkr.options
                if exps:
                    return list(exps)
            except Exception as e:
                logger.warning("%s: expirations attempt %d failed: %s", tkr.ticker, i + 1, e)
                self._sleep_backoff(i)
        return []

    def get_spot_price(self, tkr: yf.Ticker) -> float:
        """Best-effort spot price.

        Priority: fast_info -> info -> 1d history close.
        """
        # 1) fast_info
        try:
            fi = getattr(tkr, "fast_info", None)
            if fi:
                for k in ("last_price", "regularMarketPrice", "previousClose"):
                    v = fi.get(k) if hasattr(fi, "get") else None
                    if v is not None:
                        return float(v)
        except Exception as e:
            logger.debug("%s: fast_info failed: %s", tkr.ticker, e)

        # 2) info (heavier; sometimes None)
        try:
            inf = getattr(tkr, "info", None) or {}
            for k in ("regularMarketPrice", "currentPrice", "previousClose"):
                v = inf.get(k)
                if v is not None:
                    return float(v)
        except Exception as e:
            logger.debug("%s: info failed: %s", tkr.ticker, e)

        # 3) history (reliable but slower)
        for i in range(2):
            try:
                hist = tkr.history(period="1d")
                if isinstance(hist, pd.DataFrame) and not hist.empty and "Close" in hist.columns:
                    return float(hist["Close"].iloc[-1])
            except Exception as e:
                logger.debug("%s: history failed: %s", tkr.ticker, e)
                self._sleep_backoff(i)

        return 0.0

    def get_option_chain(self, tkr: yf.Ticker, exp: str, kind: str = "put") -> pd.DataFrame:
        for i in range(3):
            try:
                oc = tkr.option_chain(exp)
                raw = oc.puts if kind == "put" else oc.calls
                df = raw.copy()
                for col in ["strike", "bid", "ask"]:
                    df[col] = pd.to_numeric(df[col], errors="coerce") if col in df.columns else pd.NA
                return df
            except Exception as e:
                logger.warning("%s %s: chain attempt %d failed: %s", tkr.ticker, exp, i + 1, e)
                self._sleep_backoff(i)
        return pd.DataFrame(columns=["strike", "bid", "ask"])

    def get_option_quote(self, ticker: str, max_exp_date: str, kind: str = "put") -> OptionsChainQuote:
        tkr = yf.Ticker(ticker.upper())
        today = dt.date.today()
        last = dt.date.fromisoformat(max_exp_date)
        exps = [e for e in self.get_expirations(tkr) if today <= dt.date.fromisoformat(e) <= last]
        if not exps:
            logger.error("%s: no expirations up to %s", ticker, max_exp_date)
            return OptionsChainQuote.empty()

        rows: List[ChainLink] = []
        for exp in exps:
            df = self.get_option_chain(tkr, exp, kind=kind)
            rows.extend(chain_frame_to_links(df, dt.date.fromisoformat(exp), kind))
        spot = self.get_spot_price(tkr)
        logger.info("current price for %s is %s, got %d rows", ticker, spot, len(rows))
        return OptionsChainQuote(rows=rows, current_price=spot)
