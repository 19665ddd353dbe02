"""Day-stepping core — the reinvestment loop.

Each day runs in a fixed order:
  month boundary → (purchase) → settlement → accrual → (purchase) → record

Key rules:
  - Purchase: whole units only. new_units = floor(pool / unit_value), the
    remainder stays in the pool.
  - Activation lag: units bought during a month earn nothing until the next
    month starts. The earning count is promoted to the owned count only on
    the first day of a new month.
  - Purchase timing: 'start_of_day' buys from the pool carried over from the
    previous day (before settlement); 'end_of_day' buys right after today's
    accrual, so the recorded pool is always below unit_value.
"""

from __future__ import annotations

import math
from decimal import Decimal

from fleet_simulator.config.parameters import SimulationParameters
from fleet_simulator.engine.errors import InvalidParameter
from fleet_simulator.engine.money import to_decimal
from fleet_simulator.models.results import DailyRecord


def validate_parameters(params: SimulationParameters) -> None:
    """Re-check the ranges the engine relies on.

    ``SimulationParameters`` already enforces these at construction; this
    catches instances built with ``model_construct``.
    """
    if params.horizon_days < 1:
        raise InvalidParameter(f"horizon_days must be >= 1, got {params.horizon_days}")
    if params.days_per_month < 1:
        raise InvalidParameter(f"days_per_month must be >= 1, got {params.days_per_month}")
    if params.unit_value <= 0:
        raise InvalidParameter(f"unit_value must be > 0, got {params.unit_value}")
    if params.initial_units < 1:
        raise InvalidParameter(f"initial_units must be >= 1, got {params.initial_units}")
    for name in ("unit_value", "daily_gross_payment", "daily_interest", "daily_principal"):
        value = getattr(params, name)
        if not math.isfinite(value):
            raise InvalidParameter(f"{name} must be finite, got {value}")
        if value < 0:
            raise InvalidParameter(f"{name} must be >= 0, got {value}")
    if params.daily_interest > params.daily_gross_payment:
        raise InvalidParameter(
            f"daily_interest ({params.daily_interest}) cannot exceed "
            f"daily_gross_payment ({params.daily_gross_payment})"
        )
    if params.accrual_mode not in ("gross_payment", "interest_only"):
        raise InvalidParameter(f"unknown accrual_mode {params.accrual_mode!r}")
    if params.purchase_timing not in ("start_of_day", "end_of_day"):
        raise InvalidParameter(f"unknown purchase_timing {params.purchase_timing!r}")


def _purchase(cash_pool: Decimal, unit_value: Decimal) -> tuple[int, Decimal]:
    """Convert the pool into whole units; returns (units bought, remainder)."""
    units, remainder = divmod(cash_pool, unit_value)
    return int(units), remainder


def run_days(params: SimulationParameters) -> list[DailyRecord]:
    """Simulate ``params.horizon_days`` days and return one record per day.

    Pure function of ``params``: identical input gives an identical list.
    """
    validate_parameters(params)

    unit_value = to_decimal(params.unit_value)
    pay_rate = to_decimal(params.daily_gross_payment)
    interest_rate = to_decimal(params.daily_interest)
    principal_rate = to_decimal(params.daily_principal)
    reinvest_interest_only = params.accrual_mode == "interest_only"
    buy_at_end = params.purchase_timing == "end_of_day"

    total_units = params.initial_units
    earning_units = params.initial_units
    current_month = 1

    cash_pool = Decimal(0)
    cumulative_gross = Decimal(0)
    cumulative_investment = Decimal(0)

    days: list[DailyRecord] = []

    for d in range(1, params.horizon_days + 1):
        # ── 1. Month boundary ────────────────────────────────────────────
        month = -(-d // params.days_per_month)
        if month > current_month:
            earning_units = total_units
            current_month = month

        # ── 2. Start-of-day purchase (yesterday's pool) ──────────────────
        new_units = 0
        if not buy_at_end and cash_pool >= unit_value:
            new_units, cash_pool = _purchase(cash_pool, unit_value)
            total_units += new_units
            cumulative_investment += new_units * unit_value

        if not params.activation_lag:
            earning_units = total_units

        # ── 3. Settlement ────────────────────────────────────────────────
        gross = earning_units * pay_rate
        interest = earning_units * interest_rate
        principal = earning_units * principal_rate

        # ── 4. Accrual ───────────────────────────────────────────────────
        cash_pool += interest if reinvest_interest_only else gross
        cumulative_gross += gross

        # ── 5. End-of-day purchase (today's pool) ────────────────────────
        if buy_at_end and cash_pool >= unit_value:
            new_units, cash_pool = _purchase(cash_pool, unit_value)
            total_units += new_units
            cumulative_investment += new_units * unit_value

        days.append(DailyRecord(
            day=d,
            month=month,
            earning_units=earning_units,
            gross_payment=float(gross),
            interest=float(interest),
            principal=float(principal),
            new_units=new_units,
            cash_pool=float(cash_pool),
            total_units=total_units,
            cumulative_gross_payment=float(cumulative_gross),
            cumulative_investment=float(cumulative_investment),
            cumulative_net_payment=float(cumulative_gross - cumulative_investment),
        ))

    return days
