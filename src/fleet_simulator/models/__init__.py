"""Result models — simulation output contracts."""

from fleet_simulator.models.results import (
    DailyRecord,
    MonthlyRecord,
    RunSummary,
    SimulationResult,
)

__all__ = [
    "DailyRecord",
    "MonthlyRecord",
    "RunSummary",
    "SimulationResult",
]
