# warrant_calc/formatting.py
from __future__ import annotations
import datetime as dt
import pandas as pd


def fmt_pct(x: float, digits: int = 2) -> str:
    return f"{x*100:.{digits}f} %"

def fmt_abs(x: float, digits: int = 2) -> str:
    return f"{x:.{digits}f}"

def fmt_pl(x: float, digits: int = 2) -> str:
    """P/L already expressed in percent."""
    return f"{x:+.{digits}f} %"

def fmt_range(low, high, digits: int = 2) -> str:
    if pd.isna(low) or pd.isna(high):
        return "N/A"
    return f"{low:.{digits}f} - {high:.{digits}f}"

def month_label(month: int, start: dt.date | None = None) -> str:
    start = start or dt.date.today()
    return (pd.Timestamp(start) + pd.DateOffset(months=int(month))).strftime("%b %Y")
