"""Configuration models — simulation inputs."""

from fleet_simulator.config.parameters import SimulationParameters
from fleet_simulator.config.loader import load_parameters

__all__ = [
    "SimulationParameters",
    "load_parameters",
]
