from __future__ import annotations

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from PREMIUM_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="PREMIUM_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Don't show options expiring more than N days out
    put_max_days_to_exp: int = 45
    spread_max_days_to_exp: int = 200

    min_annualized_roi: float = 15.0  # percent

    cherries_only: bool = False
    cherry_mode: Literal["grouped", "sequential"] = "grouped"

    # multiplier: threshold * price always; absolute: >= 1 is a dollar strike
    threshold_mode: Literal["multiplier", "absolute"] = "multiplier"

    roi_strategy: Literal["compound", "apy", "leveraged"] = "compound"
    leverage: float = 1.0
    commission: float = 0.0
    settlement_days: int = 2

    quote_source: Literal["nasdaq", "yahoo"] = "nasdaq"
    request_timeout: float = 15.0
    workers: int = 1

    log_level: str = "INFO"
    log_file: Optional[str] = None


def load_settings(**overrides) -> Settings:
    return Settings(**overrides)
