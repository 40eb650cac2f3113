"""Call credit spread search.

A call credit spread sells a call at the short strike and buys a further
out-of-the-money call at the long strike, same expiry. The long leg is the
first listed strike at or above ``short * (1 + width)``; several widths are
tried and the best annualized ROI per (ticker, short strike, expiry) wins.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .calculations import SETTLEMENT_DAYS, annualized_roi, percentage_from_strike, roi
from .data_models import AnalysisResult, ChainLink
from .expiry import days_until, market_today, resolve_expiry
from .utils import safe_float

logger = logging.getLogger(__name__)

SPREAD_WIDTHS = (0.01, 0.02, 0.03, 0.05, 0.07, 0.10, 0.15, 0.20)
# 没有卖价时，用买价 * 1.1 估算买入腿成本
ASK_FALLBACK_MULTIPLIER = 1.1
_EPS = 1e-9


def long_leg_price(link: ChainLink) -> float:
    ask = safe_float(link.c_ask) or 0.0
    if ask > 0:
        return ask
    return (safe_float(link.c_bid) or 0.0) * ASK_FALLBACK_MULTIPLIER


def _group_by_expiry(chain: Iterable[ChainLink]) -> Dict[str, List[ChainLink]]:
    groups: Dict[str, List[ChainLink]] = {}
    for link in chain:
        if safe_float(link.strike) is None:
            continue
        groups.setdefault(link.expiry_date or "", []).append(link)
    return groups


def evaluate_call_credit_spreads(
    chain: Iterable[ChainLink],
    current_price: float,
    ticker: str,
    expiry_groups: Optional[List[str]],
    spread_width: float,
    min_annualized_roi: float = 15.0,
    settlement_days: int = SETTLEMENT_DAYS,
    now=None,
) -> List[AnalysisResult]:
    """All spreads of one width that clear the annualized-ROI cutoff."""
    if current_price <= 0:
        logger.debug("%s: no current price, skipped", ticker)
        return []
    today = market_today(now)
    results = []
    for token, links in _group_by_expiry(chain).items():
        legs = sorted(links, key=lambda l: safe_float(l.strike))
        exp_date = resolve_expiry(token, expiry_groups, today=today)
        if exp_date is None:
            logger.debug("%s: unresolved expiry %r, %d rows skipped", ticker, token, len(legs))
            continue
        days = days_until(exp_date, now=now)

        for i, short in enumerate(legs[:-1]):
            short_strike = safe_float(short.strike)
            short_bid = safe_float(short.c_bid) or 0.0
            if short_bid <= 0:
                continue

            target = short_strike * (1 + spread_width)
            long = next(
                (l for l in legs[i + 1:] if safe_float(l.strike) >= target - _EPS),
                None,
            )
            if long is None:
                continue

            long_strike = safe_float(long.strike)
            long_ask = long_leg_price(long)
            if long_ask <= 0:
                continue

            net_credit = short_bid - long_ask
            if net_credit <= 0:
                continue
            max_risk = long_strike - short_strike - net_credit
            if max_risk <= 0:
                continue

            spread_roi = roi(net_credit, max_risk)
            ann = annualized_roi(spread_roi / 100.0, days + settlement_days)
            if ann < min_annualized_roi:
                continue

            results.append(AnalysisResult(
                ticker=ticker,
                current_price=current_price,
                strike_price=short_strike,
                exp_date=exp_date,
                exp_date_str=exp_date.isoformat(),
                days_to_expiration=days,
                bid=net_credit,
                percentage_from_strike=percentage_from_strike(short_strike, current_price),
                roi=spread_roi,
                annualized_roi=ann,
                spread_width_percent=spread_width,
                long_strike=long_strike,
                max_risk=max_risk,
            ))
    return results


def dedupe_best(results: Iterable[AnalysisResult], key, score=lambda r: r.annualized_roi) -> List[AnalysisResult]:
    """Keep the best-scoring result per key (annualized ROI by default); first seen wins ties."""
    best: Dict[tuple, AnalysisResult] = {}
    for r in results:
        k = key(r)
        if k not in best or score(best[k]) < score(r):
            best[k] = r
    return list(best.values())


def find_optimal_call_credit_spreads(
    chain: Sequence[ChainLink],
    current_price: float,
    ticker: str,
    expiry_groups: Optional[List[str]],
    min_annualized_roi: float = 15.0,
    widths: Sequence[float] = SPREAD_WIDTHS,
    settlement_days: int = SETTLEMENT_DAYS,
    now=None,
) -> List[AnalysisResult]:
    """Try every width and keep the best spread per (ticker, strike, expiry), best first."""
    chain = list(chain)
    candidates = []
    for width in widths:
        candidates.extend(evaluate_call_credit_spreads(
            chain, current_price, ticker, expiry_groups, width,
            min_annualized_roi=min_annualized_roi,
            settlement_days=settlement_days,
            now=now,
        ))
    unique = dedupe_best(candidates, key=lambda r: (r.ticker, r.strike_price, r.exp_date_str))
    logger.debug("%s: %d spread candidates, %d after dedupe", ticker, len(candidates), len(unique))
    return sorted(unique, key=lambda r: r.annualized_roi, reverse=True)
