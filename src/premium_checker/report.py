from __future__ import annotations

from typing import Sequence

import pandas as pd

from .data_models import AnalysisResult

PUT_COLUMNS = [
    "ticker", "current_price", "strike_price", "exp_date_str", "days_to_expiration",
    "bid", "percentage_from_strike", "roi", "annualized_roi",
]
SPREAD_COLUMNS = [
    "ticker", "current_price", "strike_price", "long_strike", "exp_date_str", "days_to_expiration",
    "bid", "max_risk", "spread_width_percent", "percentage_from_strike", "roi", "annualized_roi",
]


def results_to_frame(results: Sequence[AnalysisResult], spreads: bool = False) -> pd.DataFrame:
    """Report table in the given order; no values are recomputed."""
    cols = SPREAD_COLUMNS if spreads else PUT_COLUMNS
    if not results:
        return pd.DataFrame(columns=cols)
    df = pd.DataFrame([r.model_dump() for r in results])
    return df[cols].reset_index(drop=True)
