from __future__ import annotations

from typing import Optional

# exchange placeholder for "no quote"
NO_QUOTE = "--"


def safe_float(x) -> Optional[float]:
    """Parse exchange numbers like "1,250.00"; None for blanks, "--" and junk."""
    if x is None:
        return None
    if isinstance(x, (int, float)):
        return float(x) if x == x else None
    s = str(x).strip()
    if not s or s == NO_QUOTE:
        return None
    try:
        v = float(s.replace(",", ""))
    except ValueError:
        return None
    # NaN 视为缺失
    return v if v == v else None


def has_quote(x) -> bool:
    return safe_float(x) is not None
