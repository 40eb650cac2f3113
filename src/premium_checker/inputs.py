from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from .data_models import TickerInput
from .utils import safe_float

logger = logging.getLogger(__name__)


def parse_ticker_file(path: Union[str, Path]) -> List[TickerInput]:
    """Read ``SYMBOL,THRESHOLD`` lines, e.g. ``AAPL,0.9``.

    Blank lines and rows without a symbol or a non-zero numeric threshold
    are skipped.

    Raises:
        FileNotFoundError: if the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    try:
        df = pd.read_csv(
            path, header=None, names=["symbol", "threshold"], index_col=False,
            dtype=str, keep_default_na=False, skipinitialspace=True, on_bad_lines="skip",
        )
    except pd.errors.EmptyDataError:
        return []

    out = []
    for row in df.itertuples(index=False):
        symbol = row.symbol.strip().upper() if isinstance(row.symbol, str) else ""
        threshold = safe_float(row.threshold)
        if not symbol or not threshold:
            logger.debug("skipping input row %r", tuple(row))
            continue
        out.append(TickerInput(symbol=symbol, strike_threshold=threshold))
    return out


def parse_put_params(path: Union[str, Path] = "data/put.txt") -> List[TickerInput]:
    """Symbols with the max put strike (fraction of current price)."""
    return parse_ticker_file(path)


def parse_credit_spread_params(path: Union[str, Path] = "data/creditspread.txt") -> List[TickerInput]:
    """Symbols with the min short-call strike (e.g. 1.2 = 120 % of current price)."""
    return parse_ticker_file(path)
