from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChainLink(BaseModel):
    """One exchange row of an options chain; all fields are raw strings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    strike: Optional[str] = None
    p_bid: Optional[str] = Field(default=None, alias="p_Bid")
    p_ask: Optional[str] = Field(default=None, alias="p_Ask")
    c_bid: Optional[str] = Field(default=None, alias="c_Bid")
    c_ask: Optional[str] = Field(default=None, alias="c_Ask")
    expiry_date: Optional[str] = Field(default=None, alias="expiryDate")    # "Feb 25"
    expiry_group: Optional[str] = Field(default=None, alias="expirygroup")  # "February 25, 2025 (Monthly)"


class OptionsChainQuote(BaseModel):
    rows: List[ChainLink] = Field(default_factory=list)
    current_price: float = 0.0

    @classmethod
    def empty(cls) -> "OptionsChainQuote":
        return cls(rows=[], current_price=0.0)


class TickerInput(BaseModel):
    symbol: str
    strike_threshold: float


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: str
    current_price: float
    strike_price: float
    exp_date: dt.date
    exp_date_str: str
    days_to_expiration: int = Field(ge=1)
    bid: float                      # 卖出权利金；价差策略为净收权利金
    percentage_from_strike: float
    roi: float                      # 单期收益率（%）
    annualized_roi: float           # 年化收益率（%）
    spread_width_percent: Optional[float] = None
    long_strike: Optional[float] = None
    max_risk: Optional[float] = None
