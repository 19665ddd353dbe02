"""Growth chart — total units and cash pool against month."""

from __future__ import annotations

import plotly.graph_objects as go

from fleet_simulator.models.results import MonthlyRecord

UNITS_COLOR = "#2980b9"
CASH_COLOR = "#27ae60"


def growth_traces(monthly: list[MonthlyRecord]) -> tuple[go.Scatter, go.Scatter]:
    """(total units, cash pool) line traces, without axis assignment."""
    months = [m.month for m in monthly]
    mode = "lines+markers" if len(monthly) <= 24 else "lines"
    units = go.Scatter(
        x=months,
        y=[m.total_units for m in monthly],
        name="Total units",
        mode=mode,
        line=dict(color=UNITS_COLOR, width=2),
    )
    cash = go.Scatter(
        x=months,
        y=[m.cash_pool for m in monthly],
        name="Cash pool",
        mode=mode,
        line=dict(color=CASH_COLOR, width=2, dash="dot"),
    )
    return units, cash


def build_growth_chart(monthly: list[MonthlyRecord], title: str = "Fleet growth") -> go.Figure:
    """Plot total units (left axis) and cash pool (right axis) per month.

    Works for any series length, including a single month.
    """
    units, cash = growth_traces(monthly)

    fig = go.Figure()
    fig.add_trace(units.update(yaxis="y"))
    fig.add_trace(cash.update(yaxis="y2"))
    fig.update_layout(
        title=title,
        xaxis=dict(title="Month", dtick=max(1, len(monthly) // 12)),
        yaxis=dict(title="Units", rangemode="tozero"),
        yaxis2=dict(title="Cash pool", overlaying="y", side="right", rangemode="tozero"),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
        hovermode="x unified",
        margin=dict(l=40, r=40, t=60, b=40),
    )
    return fig
