from __future__ import annotations

import math
from typing import Literal

DAYS_IN_YEAR = 365
SETTLEMENT_DAYS = 2

RoiStrategy = Literal["compound", "apy", "leveraged"]


def percentage_from_strike(strike: float, current: float) -> float:
    """Signed distance of the strike from the current price, in percent."""
    return (float(strike) - float(current)) / float(current) * 100.0


def roi(premium: float, capital: float) -> float:
    """Single-period return in percent (premium / strike, or credit / max risk)."""
    return float(premium) / float(capital) * 100.0


def annualized_roi(roi_decimal: float, days_to_collateral_release: int) -> float:
    # 复利年化：(1 + r)^(365/t) - 1，溢出按 inf 计
    try:
        growth = (1.0 + float(roi_decimal)) ** (DAYS_IN_YEAR / float(days_to_collateral_release))
    except OverflowError:
        return math.inf
    return (growth - 1.0) * 100.0


def apy(strike: float, premium: float, days_to_exp: int) -> float:
    """Linear annualization: (premium/strike per day) * 365, in percent.

    Raises:
        ValueError: if days_to_exp is not positive.
    """
    if days_to_exp <= 0:
        raise ValueError("Days to expiration must be greater than zero.")
    gain = float(premium) / float(strike)
    return gain / days_to_exp * DAYS_IN_YEAR * 100.0


def leveraged_roi(
    premium: float,
    target_price: float,
    days_to_exp: int,
    leverage: float = 1.0,
    commission: float = 0.0,
    settlement_days: int = SETTLEMENT_DAYS,
) -> float:
    """Annualized ROI on a leveraged cost basis (target_price * leverage + commission)."""
    cost = float(target_price) * leverage + commission
    times_in_year = DAYS_IN_YEAR / (days_to_exp + settlement_days)
    return (float(premium) * times_in_year) / cost * 100.0
