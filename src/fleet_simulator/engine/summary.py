"""Run summary — scalar KPIs derived from the final day and daily totals."""

from __future__ import annotations

from decimal import Decimal

from fleet_simulator.config.parameters import SimulationParameters
from fleet_simulator.engine.errors import DegenerateInput, EmptyInput
from fleet_simulator.engine.money import to_decimal
from fleet_simulator.models.results import DailyRecord, RunSummary

DAYS_PER_YEAR = 365


def summarize(params: SimulationParameters, daily: list[DailyRecord]) -> RunSummary:
    """Compute the headline metrics of one run.

    The cost basis is the starting fleet only (initial_units × unit_value):
    reinvestment purchases are paid out of earnings, not new external money.
    Returns are simple, not compounded: the annualized figure is the total
    return divided by the horizon in 365-day years.
    """
    if not daily:
        raise EmptyInput("cannot summarize an empty daily series")

    unit_value = to_decimal(params.unit_value)
    total_invested = params.initial_units * unit_value
    if total_invested == 0:
        raise DegenerateInput("initial cost basis is zero; returns are undefined")

    last = daily[-1]
    final_cash = to_decimal(last.cash_pool)
    capital = last.total_units * unit_value + final_cash
    gain = capital - total_invested
    total_return_pct = 100 * gain / total_invested
    years = Decimal(params.horizon_days) / DAYS_PER_YEAR
    total_interest = sum((to_decimal(day.interest) for day in daily), Decimal(0))

    return RunSummary(
        final_units=last.total_units,
        final_cash_pool=last.cash_pool,
        accumulated_capital=float(capital),
        total_invested_initial=float(total_invested),
        total_gain=float(gain),
        total_return_pct=float(total_return_pct),
        annualized_return_pct=float(total_return_pct / years),
        total_interest=float(total_interest),
        days_simulated=params.horizon_days,
        years_simulated=float(years),
    )
