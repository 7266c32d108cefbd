# warrant_calc/tables.py
from __future__ import annotations

import datetime as dt
from dataclasses import asdict
from typing import Iterable

import pandas as pd

from .formatting import fmt_abs, fmt_pct, fmt_pl, fmt_range, month_label
from .types import ImpliedVolResult, ResultRow, WarrantPosition


def results_frame(rows: Iterable[ResultRow]) -> pd.DataFrame:
    """Raw numeric results, one row per (scenario, month)."""
    records = [asdict(r) for r in rows]
    if not records:
        return pd.DataFrame(columns=list(ResultRow.__dataclass_fields__))
    return pd.DataFrame.from_records(records)


def table_results(
    rows: Iterable[ResultRow],
    scenario: str | None = None,
    start: dt.date | None = None,
) -> pd.DataFrame:
    """
    Display table with 2-decimal strings and NO index column displayed.
    """
    df = results_frame(rows)
    if scenario is not None:
        df = df[df["scenario"] == scenario]

    out = pd.DataFrame({
        "Month": [month_label(m, start) for m in df["month"]],
        "Stock Price ($)": [fmt_abs(x) for x in df["stock_price"]],
        "Range ($)": [fmt_range(lo, hi) for lo, hi in zip(df["lower_bound"], df["upper_bound"])],
        "Warrant Price (€)": [fmt_abs(x) for x in df["warrant_price"]],
        "Investment Value (€)": [fmt_abs(x) for x in df["investment_value"]],
        "Value Range (€)": [
            fmt_range(lo, hi) for lo, hi in zip(df["lower_investment_value"], df["upper_investment_value"])
        ],
        "Profit/Loss (%)": [fmt_pl(x) for x in df["profit_loss_pct"]],
    })
    return out.reset_index(drop=True)


def table_summary(rows: Iterable[ResultRow]) -> pd.DataFrame:
    """Final value and P/L per scenario."""
    df = results_frame(rows)
    if df.empty:
        return pd.DataFrame({"Scenario": [], "Final Stock Price": [], "Final Value (€)": [], "Profit/Loss": []})

    last = df.sort_values("month", kind="stable").groupby("scenario", sort=False).tail(1)
    return pd.DataFrame({
        "Scenario": last["scenario"].tolist(),
        "Final Stock Price": [fmt_abs(x) for x in last["stock_price"]],
        "Final Value (€)": [fmt_abs(x) for x in last["investment_value"]],
        "Profit/Loss": [fmt_pl(x) for x in last["profit_loss_pct"]],
    }).reset_index(drop=True)


def table_position(position: WarrantPosition) -> pd.DataFrame:
    rows = [
        ("Warrants bought", f"{position.warrants_bought:.2f}"),
        ("Implied volatility", fmt_pct(position.implied_volatility)),
        ("Risk-free rate", fmt_pct(position.risk_free_rate)),
        ("Exchange rate", f"{position.exchange_rate:.4f}"),
    ]
    return pd.DataFrame(rows, columns=["Metric", "Value"]).reset_index(drop=True)


def table_implied_vol(result: ImpliedVolResult) -> pd.DataFrame:
    rows = [
        ("Implied volatility", fmt_pct(result.volatility)),
        ("Iterations", f"{result.iterations}"),
        ("Status", result.status),
    ]
    return pd.DataFrame(rows, columns=["Metric", "Value"]).reset_index(drop=True)
