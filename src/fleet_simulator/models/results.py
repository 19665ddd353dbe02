"""Result types — the contract between engine, renderers, API and dashboard.

All records are frozen: once the engine emits them they are read-only
snapshots. Monetary fields are plain floats (the engine computes in
``Decimal`` and converts on emit).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from fleet_simulator.config.parameters import SimulationParameters


# ═══════════════════════════════════════════════════════════════════════════
# Daily record
# ═══════════════════════════════════════════════════════════════════════════

class DailyRecord(BaseModel):
    """One simulated day."""

    model_config = ConfigDict(frozen=True)

    day: int
    """1-indexed day number."""
    month: int
    """ceil(day / days_per_month)."""

    earning_units: int
    """Units whose payment counts towards today's settlement."""

    gross_payment: float
    interest: float
    principal: float

    new_units: int
    """Units bought today out of the cash pool."""

    cash_pool: float
    """Uninvested cash after today's purchase and accrual."""

    total_units: int
    """All units owned at end of day (earning or not)."""

    cumulative_gross_payment: float
    cumulative_investment: float
    """Cost of every reinvestment purchase so far (excludes the initial fleet)."""
    cumulative_net_payment: float
    """cumulative_gross_payment − cumulative_investment."""


# ═══════════════════════════════════════════════════════════════════════════
# Monthly record
# ═══════════════════════════════════════════════════════════════════════════

class MonthlyRecord(BaseModel):
    """One month bucket — the final bucket may hold fewer days."""

    model_config = ConfigDict(frozen=True)

    month: int
    days_in_bucket: int

    avg_earning_units: float
    """Mean of earning_units over the bucket's actual days."""

    # --- Sums over the bucket ---
    gross_payment: float
    interest: float
    principal: float
    new_units: int

    # --- End-of-bucket values (last day) ---
    cash_pool: float
    total_units: int
    cumulative_gross_payment: float
    cumulative_investment: float
    cumulative_net_payment: float


# ═══════════════════════════════════════════════════════════════════════════
# Run summary
# ═══════════════════════════════════════════════════════════════════════════

class RunSummary(BaseModel):
    """Headline KPIs for one full run."""

    model_config = ConfigDict(frozen=True)

    final_units: int
    final_cash_pool: float

    accumulated_capital: float
    """final_units × unit_value + final_cash_pool."""

    total_invested_initial: float
    """initial_units × unit_value. Reinvestment purchases are funded from
    earnings, so they are not part of the external cost basis."""

    total_gain: float
    total_return_pct: float
    annualized_return_pct: float
    """total_return_pct / (horizon_days / 365). Simple, not compounded."""

    total_interest: float
    days_simulated: int
    years_simulated: float


# ═══════════════════════════════════════════════════════════════════════════
# Simulation result (top-level container)
# ═══════════════════════════════════════════════════════════════════════════

class SimulationResult(BaseModel):
    """Complete output of one engine run plus the inputs that produced it."""

    model_config = ConfigDict(frozen=True)

    parameters: SimulationParameters
    daily: list[DailyRecord]
    monthly: list[MonthlyRecord]
    summary: RunSummary
