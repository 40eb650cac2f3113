"""Expiry resolution for terse exchange date tokens.

The exchange lists each contract with a short token such as ``"Feb 25"``
and, on group header rows, a full label such as
``"February 25, 2025 (Monthly)"``. Tokens carry no year, so they are
matched against the labels seen in the same chain; when a chain has no
labels the year is inferred from today's month.

Day counts are taken in the exchange's timezone (US/Eastern).
"""
from __future__ import annotations

import datetime as dt
import logging
import math
import re
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from .data_models import ChainLink

logger = logging.getLogger(__name__)

MARKET_TZ = "America/New_York"

MONTHS = {
    "Jan": "January",
    "Feb": "February",
    "Mar": "March",
    "Apr": "April",
    "May": "May",
    "Jun": "June",
    "Jul": "July",
    "Aug": "August",
    "Sep": "September",
    "Oct": "October",
    "Nov": "November",
    "Dec": "December",
}
_MONTH_NUM = {abbr: i + 1 for i, abbr in enumerate(MONTHS)}
_FULL_MONTH_NUM = {full: _MONTH_NUM[abbr] for abbr, full in MONTHS.items()}

_LABEL_DATE = re.compile(r"^\s*([A-Za-z]+) (\d{1,2}), (\d{4})")


def _split_token(token: str) -> Optional[Tuple[str, int]]:
    parts = (token or "").split()
    if len(parts) != 2 or parts[0] not in MONTHS:
        return None
    try:
        return parts[0], int(parts[1])
    except ValueError:
        return None


def convert_string_to_date(token: str, today: Optional[dt.date] = None) -> Optional[dt.date]:
    """"Feb 25" -> date; current year unless the month has already passed."""
    parsed = _split_token(token)
    if parsed is None:
        return None
    abbr, day = parsed
    today = today or dt.date.today()
    month = _MONTH_NUM[abbr]
    year = today.year if month >= today.month else today.year + 1
    try:
        return dt.date(year, month, day)
    except ValueError:
        return None


def unique_expiry_groups(chain: Iterable[ChainLink]) -> List[str]:
    """Distinct non-blank expiry-group labels, in first-seen order."""
    seen = {}
    for link in chain:
        label = link.expiry_group
        if label and label.strip():
            seen.setdefault(label, None)
    return list(seen)


def find_expiry_group(token: str, expiry_groups: Iterable[str]) -> Optional[str]:
    """First label starting with "{FullMonth} {Day}" for the token, else None."""
    parsed = _split_token(token)
    if parsed is None:
        return None
    abbr, day = parsed
    # "February 2" 不能匹配 "February 25, ..."
    prefix = re.compile(rf"^{MONTHS[abbr]} {day}(?!\d)")
    return next((g for g in expiry_groups if prefix.match(g)), None)


def expiry_group_date(label: str) -> Optional[dt.date]:
    # 月份名查表，不依赖 locale
    m = _LABEL_DATE.match(label or "")
    if not m or m.group(1) not in _FULL_MONTH_NUM:
        return None
    try:
        return dt.date(int(m.group(3)), _FULL_MONTH_NUM[m.group(1)], int(m.group(2)))
    except ValueError:
        return None


def resolve_expiry(
    token: str,
    expiry_groups: Optional[List[str]] = None,
    today: Optional[dt.date] = None,
) -> Optional[dt.date]:
    """Resolve a terse token to a calendar date.

    With expiry groups the label is authoritative and a miss is a failure;
    without them the year is inferred from ``today``.
    """
    if not expiry_groups:
        return convert_string_to_date(token, today=today)
    label = find_expiry_group(token, expiry_groups)
    if label is None:
        logger.debug("no expiry group for token %r", token)
        return None
    exp = expiry_group_date(label)
    if exp is None:
        # label without a year, e.g. "February 25 (Weekly)"
        exp = convert_string_to_date(token, today=today)
    return exp


def _market_now(now=None) -> pd.Timestamp:
    if now is None:
        return pd.Timestamp.now(tz=MARKET_TZ)
    ts = pd.Timestamp(now)
    if ts.tzinfo is None:
        return ts.tz_localize(MARKET_TZ)
    return ts.tz_convert(MARKET_TZ)


def raw_days_until(exp_date: dt.date, now=None) -> int:
    """Ceiling of days from now to midnight of exp_date (Eastern), unclamped."""
    expiry = pd.Timestamp(exp_date).tz_localize(MARKET_TZ)
    delta = expiry - _market_now(now)
    return math.ceil(delta.total_seconds() / 86400.0)


def days_until(exp_date: dt.date, now=None) -> int:
    # 当天或已过期按 1 天计，避免除以 0
    return max(1, raw_days_until(exp_date, now=now))


def market_today(now=None) -> dt.date:
    return _market_now(now).date()
