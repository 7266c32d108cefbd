# warrant_calc/plots.py
from __future__ import annotations

import datetime as dt
import math
from typing import Iterable

import pandas as pd
import plotly.graph_objects as go

from .constants import (
    INVESTMENT_MAIN_COLOR,
    INVESTMENT_RANGE_COLOR,
    STOCK_MAIN_COLOR,
    STOCK_RANGE_COLOR,
)
from .formatting import month_label
from .tables import results_frame
from .types import ResultRow


def _axis_range(values: pd.Series) -> list[float]:
    v = values.dropna()
    if v.empty:
        return [0.0, 1.0]
    return [math.floor(v.min() * 0.9), math.ceil(v.max() * 1.1)]


def _band_figure(
    df: pd.DataFrame,
    main_col: str,
    upper_col: str,
    lower_col: str,
    main_color: str,
    range_color: str,
    title: str,
    yaxis_title: str,
    prefix: str,
    start: dt.date | None,
) -> go.Figure:
    fig = go.Figure()
    if df.empty:
        return fig

    x = [month_label(m, start) for m in df["month"]]
    has_band = df[upper_col].notna().any()

    if has_band:
        for col, name in [(upper_col, "Upper Range"), (lower_col, "Lower Range")]:
            fig.add_trace(go.Scatter(
                x=x, y=df[col],
                mode="lines",
                name=name,
                line=dict(color=range_color, dash="dot", width=1.5),
            ))

    fig.add_trace(go.Scatter(
        x=x, y=df[main_col],
        mode="lines+markers",
        name=title,
        line=dict(color=main_color, width=2),
    ))

    cols = [main_col] + ([upper_col, lower_col] if has_band else [])
    fig.update_layout(
        title=title,
        xaxis_title="Month",
        yaxis_title=yaxis_title,
        yaxis=dict(range=_axis_range(pd.concat([df[c] for c in cols])), tickprefix=prefix),
        hovermode="x unified",
        paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color="rgba(255,255,255,0.92)"),
        legend=dict(orientation="h", yanchor="bottom", y=-0.3, xanchor="center", x=0.5),
    )
    return fig


def fig_stock_price(rows: Iterable[ResultRow], scenario: str, start: dt.date | None = None) -> go.Figure:
    df = results_frame(rows)
    df = df[df["scenario"] == scenario]
    return _band_figure(
        df, "stock_price", "upper_bound", "lower_bound",
        STOCK_MAIN_COLOR, STOCK_RANGE_COLOR,
        "Stock Price", "Price ($)", "$", start,
    )


def fig_investment_value(rows: Iterable[ResultRow], scenario: str, start: dt.date | None = None) -> go.Figure:
    df = results_frame(rows)
    df = df[df["scenario"] == scenario]
    return _band_figure(
        df, "investment_value", "upper_investment_value", "lower_investment_value",
        INVESTMENT_MAIN_COLOR, INVESTMENT_RANGE_COLOR,
        "Investment Value", "Value (€)", "€", start,
    )


def fig_scenarios_comparison(rows: Iterable[ResultRow], start: dt.date | None = None) -> go.Figure:
    """Investment value of every scenario on one chart."""
    df = results_frame(rows)
    fig = go.Figure()
    for name, sub in df.groupby("scenario", sort=False):
        fig.add_trace(go.Scatter(
            x=[month_label(m, start) for m in sub["month"]],
            y=sub["investment_value"],
            mode="lines",
            name=name,
        ))
    fig.update_layout(
        title="Investment Value by Scenario",
        xaxis_title="Month",
        yaxis_title="Value (€)",
        paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color="rgba(255,255,255,0.92)"),
    )
    return fig
