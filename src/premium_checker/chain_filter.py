from __future__ import annotations

import logging
from typing import Iterable, List, Literal

from .data_models import ChainLink
from .utils import has_quote, safe_float

logger = logging.getLogger(__name__)

OptionKind = Literal["put", "call"]
ThresholdMode = Literal["multiplier", "absolute"]


def calculate_strike_threshold(value: float, current_price: float, mode: ThresholdMode = "multiplier") -> float:
    """Turn a configured threshold into an absolute strike price.

    - multiplier: value is always a fraction/multiple of the current price
      (0.7 -> 70 %, 1.4 -> 140 %).
    - absolute:   value < 1 is a fraction of the current price, anything
      else is a dollar strike.
    """
    value = float(value)
    if mode == "multiplier":
        return current_price * value
    if mode == "absolute":
        return current_price * value if value < 1 else value
    raise ValueError(f"Unknown threshold mode: {mode!r}")


def filter_options_by_strike_price(
    chain: Iterable[ChainLink],
    strike_threshold: float,
    kind: OptionKind,
) -> List[ChainLink]:
    """Puts: strike < threshold with a put bid. Calls: strike > threshold with a call bid."""
    threshold = float(strike_threshold)
    out = []
    for link in chain:
        strike = safe_float(link.strike)
        if strike is None:
            continue
        if kind == "put":
            keep = strike < threshold and has_quote(link.p_bid)
        else:
            keep = strike > threshold and has_quote(link.c_bid)
        if keep:
            out.append(link)
    logger.debug("%s filter @ %.2f kept %d rows", kind, threshold, len(out))
    return out
