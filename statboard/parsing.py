from __future__ import annotations

import math
import re
from typing import Optional

import pandas as pd


ABSENT_TOKENS = {"", "-", "na"}

_DECIMAL_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$", re.ASCII)


def parse_percent(value: object) -> Optional[float]:
    """Parse a raw cell like ``"42.5%"`` into ``42.5``; ``None`` means no data."""
    if value is None:
        return None
    if not isinstance(value, str) and pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    s = str(value).strip()
    if s.lower() in ABSENT_TOKENS:
        return None
    cleaned = s.replace("%", "", 1)
    if not _DECIMAL_RE.match(cleaned):
        return None
    n = float(cleaned)
    return n if math.isfinite(n) else None


def format_pct(value: object, decimals: int = 1) -> str:
    if value is None or pd.isna(value) or not math.isfinite(float(value)):
        return "—"
    return f"{float(value):.{decimals}f}%"


def format_fraction_pct(value: object, decimals: int = 1) -> str:
    if value is None or pd.isna(value):
        return "—"
    return format_pct(float(value) * 100, decimals)
