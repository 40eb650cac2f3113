"""End-to-end scans: fetch -> threshold -> filter -> evaluate -> cherries -> sort.

Each ticker is evaluated on its own; results are folded together in input
order so a scan is reproducible whether or not tickers run in parallel.
"""
from __future__ import annotations

import datetime as dt
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial, reduce
from typing import Callable, List, Optional, Protocol, Sequence

from .chain_filter import calculate_strike_threshold, filter_options_by_strike_price
from .cherries import filter_cherries
from .config import Settings
from .credit_spread import dedupe_best, find_optimal_call_credit_spreads
from .data_models import AnalysisResult, OptionsChainQuote, TickerInput
from .expiry import market_today, unique_expiry_groups
from .put_evaluator import evaluate_put_options

logger = logging.getLogger(__name__)


class QuoteProvider(Protocol):
    def get_option_quote(self, ticker: str, max_exp_date: str, kind: str = "put") -> OptionsChainQuote:
        ...


def make_provider(settings: Settings) -> QuoteProvider:
    if settings.quote_source == "yahoo":
        from .yahoo_client import YahooClient
        return YahooClient()
    from .nasdaq_client import NasdaqClient
    return NasdaqClient(timeout=settings.request_timeout)


def max_exp_date(days: int, today: Optional[dt.date] = None) -> str:
    today = today or dt.date.today()
    return (today + dt.timedelta(days=days)).isoformat()


def sort_by_annualized_roi(results: Sequence[AnalysisResult]) -> List[AnalysisResult]:
    # stable: ties keep input order
    return sorted(results, key=lambda r: r.annualized_roi, reverse=True)


def evaluate_put_ticker(
    item: TickerInput,
    provider: QuoteProvider,
    settings: Settings,
    now=None,
) -> List[AnalysisResult]:
    last_exp = max_exp_date(settings.put_max_days_to_exp, market_today(now))
    quote = provider.get_option_quote(item.symbol, last_exp, "put")
    if not quote.rows or quote.current_price <= 0:
        logger.warning("%s: no chain or price, skipping", item.symbol)
        return []

    threshold = calculate_strike_threshold(item.strike_threshold, quote.current_price, settings.threshold_mode)
    chain = filter_options_by_strike_price(quote.rows, threshold, "put")
    results = evaluate_put_options(
        chain,
        quote.current_price,
        item.symbol,
        expiry_groups=unique_expiry_groups(quote.rows),
        min_annualized_roi=settings.min_annualized_roi,
        roi_strategy=settings.roi_strategy,
        settlement_days=settings.settlement_days,
        leverage=settings.leverage,
        commission=settings.commission,
        now=now,
    )
    if settings.cherries_only:
        results = filter_cherries(results, mode=settings.cherry_mode)
    logger.info("%s: %d put candidates (max strike %.2f)", item.symbol, len(results), threshold)
    return sort_by_annualized_roi(results)


def evaluate_spread_ticker(
    item: TickerInput,
    provider: QuoteProvider,
    settings: Settings,
    now=None,
) -> List[AnalysisResult]:
    last_exp = max_exp_date(settings.spread_max_days_to_exp, market_today(now))
    quote = provider.get_option_quote(item.symbol, last_exp, "call")
    if not quote.rows or quote.current_price <= 0:
        logger.warning("%s: no chain or price, skipping", item.symbol)
        return []

    threshold = calculate_strike_threshold(item.strike_threshold, quote.current_price, settings.threshold_mode)
    chain = filter_options_by_strike_price(quote.rows, threshold, "call")
    results = find_optimal_call_credit_spreads(
        chain,
        quote.current_price,
        item.symbol,
        unique_expiry_groups(quote.rows),
        min_annualized_roi=settings.min_annualized_roi,
        settlement_days=settings.settlement_days,
        now=now,
    )
    if settings.cherries_only:
        # cherry neighbours are adjacent strikes of one expiry
        by_strike = sorted(results, key=lambda r: (r.exp_date_str, r.strike_price))
        results = sort_by_annualized_roi(filter_cherries(by_strike, mode=settings.cherry_mode))
    logger.info("%s: %d spread candidates (min strike %.2f)", item.symbol, len(results), threshold)
    return results


def _safe(evaluate: Callable[[TickerInput], List[AnalysisResult]], item: TickerInput) -> List[AnalysisResult]:
    try:
        return evaluate(item)
    except Exception:
        logger.exception("%s: evaluation failed", item.symbol)
        return []


def scan(
    inputs: Sequence[TickerInput],
    evaluate: Callable[[TickerInput], List[AnalysisResult]],
    workers: int = 1,
) -> List[AnalysisResult]:
    """Fold per-ticker results; ``workers > 1`` runs tickers on a thread pool."""
    run = partial(_safe, evaluate)
    if workers > 1 and len(inputs) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            per_ticker = list(pool.map(run, inputs))
    else:
        per_ticker = map(run, inputs)
    merged = reduce(lambda acc, rs: acc + rs, per_ticker, [])
    return sort_by_annualized_roi(merged)


def scan_puts(
    inputs: Sequence[TickerInput],
    provider: QuoteProvider,
    settings: Settings,
    now=None,
) -> List[AnalysisResult]:
    evaluate = partial(evaluate_put_ticker, provider=provider, settings=settings, now=now)
    return scan(inputs, evaluate, workers=settings.workers)


def scan_call_credit_spreads(
    inputs: Sequence[TickerInput],
    provider: QuoteProvider,
    settings: Settings,
    best_by_strike: bool = True,
    now=None,
) -> List[AnalysisResult]:
    """Spread scan; by default one row per (ticker, short strike), best simple ROI."""
    evaluate = partial(evaluate_spread_ticker, provider=provider, settings=settings, now=now)
    results = scan(inputs, evaluate, workers=settings.workers)
    if best_by_strike:
        results = sort_by_annualized_roi(
            dedupe_best(results, key=lambda r: (r.ticker, r.strike_price), score=lambda r: r.roi)
        )
    return results
