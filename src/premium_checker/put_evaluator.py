from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .calculations import (
    SETTLEMENT_DAYS,
    RoiStrategy,
    annualized_roi,
    apy,
    leveraged_roi,
    percentage_from_strike,
    roi,
)
from .data_models import AnalysisResult, ChainLink
from .expiry import days_until, market_today, raw_days_until, resolve_expiry
from .utils import safe_float

logger = logging.getLogger(__name__)

MIN_ANN_ROI_PERCENTAGE = 15.0


def evaluate_put_options(
    chain: Iterable[ChainLink],
    current_price: float,
    ticker: str,
    expiry_groups: Optional[List[str]] = None,
    min_annualized_roi: float = MIN_ANN_ROI_PERCENTAGE,
    roi_strategy: RoiStrategy = "compound",
    settlement_days: int = SETTLEMENT_DAYS,
    leverage: float = 1.0,
    commission: float = 0.0,
    now=None,
) -> List[AnalysisResult]:
    """Score put-sale candidates and drop those under the annualized cutoff.

    ``roi_strategy`` picks the annualization:
      * compound  - (1 + premium/strike)^(365/(days+settlement)) - 1
      * apy       - linear premium/strike/day * 365 on the unclamped day
                    count; rows already expired are dropped with a warning
      * leveraged - premium * 365/(days+settlement) / (strike*leverage + commission)

    Result order follows the chain. A non-positive current price yields nothing.
    """
    if current_price <= 0:
        logger.debug("%s: no current price, skipped", ticker)
        return []
    today = market_today(now)
    results = []
    for link in chain:
        premium = safe_float(link.p_bid)
        strike = safe_float(link.strike)
        if premium is None or strike is None or strike <= 0:
            continue

        exp_date = resolve_expiry(link.expiry_date, expiry_groups, today=today)
        if exp_date is None:
            logger.debug("%s: unresolved expiry %r, skipped", ticker, link.expiry_date)
            continue
        days = days_until(exp_date, now=now)

        if roi_strategy == "compound":
            ann = annualized_roi(premium / strike, days + settlement_days)
        elif roi_strategy == "apy":
            try:
                ann = apy(strike, premium, raw_days_until(exp_date, now=now))
            except ValueError as e:
                logger.warning("%s %s %.2f: %s", ticker, exp_date, strike, e)
                continue
        elif roi_strategy == "leveraged":
            ann = leveraged_roi(premium, strike, days, leverage, commission, settlement_days)
        else:
            raise ValueError(f"Unknown ROI strategy: {roi_strategy!r}")

        if ann < min_annualized_roi:
            continue

        results.append(AnalysisResult(
            ticker=ticker,
            current_price=current_price,
            strike_price=strike,
            exp_date=exp_date,
            exp_date_str=exp_date.isoformat(),
            days_to_expiration=days,
            bid=premium,
            percentage_from_strike=percentage_from_strike(strike, current_price),
            roi=roi(premium, strike),
            annualized_roi=ann,
        ))
    return results
