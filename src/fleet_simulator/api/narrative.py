"""Narrative generator — plain-English interpretation of simulation results.

Converts a raw ``SimulationResult`` into structured text that explains how
the fleet grew, what the plan returned, and which assumptions drive it.
"""

from __future__ import annotations

from fleet_simulator.finance.comparison import VariantOutcome, variant_label
from fleet_simulator.models.results import SimulationResult


def _first_purchase_day(result: SimulationResult) -> int | None:
    for day in result.daily:
        if day.new_units > 0:
            return day.day
    return None


def _doubling_month(result: SimulationResult) -> int | None:
    """First month whose end-of-month fleet is at least twice the starting fleet."""
    target = 2 * result.parameters.initial_units
    for m in result.monthly:
        if m.total_units >= target:
            return m.month
    return None


def generate_narrative(result: SimulationResult) -> str:
    """Generate a plain-English narrative from a simulation result.

    Returns a structured text block covering:
      1. Plan summary
      2. Fleet growth
      3. Returns
      4. Recommendations
    """
    p = result.parameters
    s = result.summary

    days_to_fund_unit = (
        p.unit_value / (p.initial_units * p.daily_gross_payment)
        if p.daily_gross_payment > 0 else None
    )
    reinvested_per_unit = (
        p.daily_interest if p.accrual_mode == "interest_only" else p.daily_gross_payment
    )

    sections: list[str] = []

    # ── 1. Plan summary ──
    sections.append("=" * 60)
    sections.append("PLAN SUMMARY")
    sections.append("=" * 60)
    sections.append(
        f"Policy: {variant_label(p)}\n"
        f"Horizon: {p.horizon_days} days ({p.years:.2f} years, {len(result.monthly)} months "
        f"of {p.days_per_month} days)\n"
        f"Starting fleet: {p.initial_units} units at ${p.unit_value:,.0f} each\n"
        f"Daily payment per unit: ${p.daily_gross_payment:,.0f} "
        f"(interest ${p.daily_interest:,.0f} + principal ${p.daily_principal:,.0f})\n"
        f"Reinvested per earning unit per day: ${reinvested_per_unit:,.0f}"
    )

    # ── 2. Fleet growth ──
    first_buy = _first_purchase_day(result)
    doubling = _doubling_month(result)
    sections.append("")
    sections.append("=" * 60)
    sections.append("FLEET GROWTH")
    sections.append("=" * 60)
    sections.append(
        f"Final fleet: {s.final_units} units "
        f"({s.final_units - p.initial_units} bought from reinvested cash)\n"
        f"First reinvestment purchase: "
        f"{f'day {first_buy}' if first_buy else 'NEVER (within horizon)'}\n"
        f"Fleet doubled by: {f'month {doubling}' if doubling else 'NOT within horizon'}\n"
        f"Uninvested cash at end: ${s.final_cash_pool:,.0f}"
    )

    # ── 3. Returns ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("RETURNS")
    sections.append("=" * 60)
    sections.append(
        f"Initial investment: ${s.total_invested_initial:,.0f}\n"
        f"Accumulated capital: ${s.accumulated_capital:,.0f}\n"
        f"Total gain: ${s.total_gain:,.0f}\n"
        f"Total return: {s.total_return_pct:.2f}%\n"
        f"Annualized return (simple): {s.annualized_return_pct:.2f}%\n"
        f"Interest earned over horizon: ${s.total_interest:,.0f}"
    )

    # ── 4. Recommendations ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("RECOMMENDATIONS")
    sections.append("=" * 60)

    recs: list[str] = []
    if first_buy is None:
        recs.append(
            "The cash pool never reaches the price of one unit. "
            "Extend the horizon, start with more units, or reinvest gross payment instead of interest only."
        )
    elif days_to_fund_unit is not None and days_to_fund_unit > p.horizon_days / 2:
        recs.append(
            f"Funding one unit takes about {days_to_fund_unit:,.0f} days of payments, "
            "more than half the horizon. Growth is slow under these assumptions."
        )

    if p.activation_lag:
        recs.append(
            "New units only earn from the month after purchase. "
            "Compare against the no-lag variant to see how much the delay costs."
        )

    if s.total_return_pct < 0:
        recs.append("The plan loses value over the horizon. Review payment and unit value assumptions.")

    if not recs:
        recs.append("No critical issues identified. Run sensitivity analysis to test robustness.")

    for i, rec in enumerate(recs, 1):
        sections.append(f"  {i}. {rec}")

    return "\n".join(sections)


def generate_comparison_narrative(outcomes: list[VariantOutcome]) -> str:
    """Generate a comparison table across ranked policy variants."""
    if not outcomes:
        return "No results to compare."

    sections: list[str] = []
    sections.append("=" * 60)
    sections.append("POLICY VARIANT COMPARISON")
    sections.append("=" * 60)
    sections.append(f"Comparing {len(outcomes)} variants:\n")

    header = f"{'Variant':40s}  {'Units':>6s}  {'Capital':>16s}  {'Return':>9s}  {'Annual':>8s}"
    sections.append(header)
    sections.append("-" * len(header))
    for o in outcomes:
        sections.append(
            f"{o.label:40s}  {o.final_units:>6d}  ${o.accumulated_capital:>15,.0f}  "
            f"{o.total_return_pct:>8.2f}%  {o.annualized_return_pct:>7.2f}%"
        )

    best = outcomes[0]
    worst = outcomes[-1]
    sections.append(f"\nBest option: {best.label} (${best.accumulated_capital:,.0f})")
    if len(outcomes) > 1:
        gap = best.accumulated_capital - worst.accumulated_capital
        sections.append(f"Ends ${gap:,.0f} ahead of {worst.label}.")

    return "\n".join(sections)
