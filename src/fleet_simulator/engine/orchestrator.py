"""Engine entry point — one forward pass from parameters to results.

    simulate(params)
      → run_days(params)            daily series
      → aggregate_monthly(daily)    monthly series
      → summarize(params, daily)    run summary

Either the full triple is returned or an ``engine.errors`` exception is
raised; there is no partial result.
"""

from __future__ import annotations

import logging

from fleet_simulator.config.parameters import SimulationParameters
from fleet_simulator.engine.daily import run_days
from fleet_simulator.engine.monthly import aggregate_monthly
from fleet_simulator.engine.summary import summarize
from fleet_simulator.models.results import SimulationResult

logger = logging.getLogger(__name__)


def simulate(params: SimulationParameters) -> SimulationResult:
    """Run the full simulation for one parameter set."""
    logger.debug(
        "Simulating %d days (%d-day months, accrual=%s, lag=%s, timing=%s)",
        params.horizon_days, params.days_per_month, params.accrual_mode,
        params.activation_lag, params.purchase_timing,
    )

    daily = run_days(params)
    monthly = aggregate_monthly(daily)
    summary = summarize(params, daily)

    logger.info(
        "Simulation done: %d → %d units, return %.2f%% (%.2f%%/yr)",
        params.initial_units, summary.final_units,
        summary.total_return_pct, summary.annualized_return_pct,
    )

    return SimulationResult(
        parameters=params,
        daily=daily,
        monthly=monthly,
        summary=summary,
    )
