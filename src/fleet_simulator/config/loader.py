"""YAML scenario files → ``SimulationParameters``."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from fleet_simulator.config.parameters import SimulationParameters

logger = logging.getLogger(__name__)


def load_parameters(path: str | Path) -> SimulationParameters:
    """Load one scenario file.

    The file holds a flat mapping of ``SimulationParameters`` fields; missing
    fields take their defaults. An empty file yields the default parameters.
    Invalid values raise ``pydantic.ValidationError``.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of parameters, got {type(data).__name__}")
    logger.debug("Loaded scenario %s (%d fields)", path, len(data))
    return SimulationParameters(**data)
