"""Engine — deterministic day-stepped reinvestment simulation."""

from fleet_simulator.engine.errors import (
    DegenerateInput,
    EmptyInput,
    InvalidParameter,
    SimulationError,
)
from fleet_simulator.engine.daily import run_days, validate_parameters
from fleet_simulator.engine.monthly import aggregate_monthly
from fleet_simulator.engine.summary import summarize
from fleet_simulator.engine.orchestrator import simulate

__all__ = [
    "run_days",
    "validate_parameters",
    "aggregate_monthly",
    "summarize",
    "simulate",
    # Errors
    "SimulationError",
    "InvalidParameter",
    "EmptyInput",
    "DegenerateInput",
]
