"""Shared test fixtures — small hand-traceable plans plus the original base case."""

from __future__ import annotations

import pytest

from fleet_simulator.config import SimulationParameters


@pytest.fixture
def small_params() -> SimulationParameters:
    """One unit worth 1000 paying 100/day: the pool funds a unit every 10 days."""
    return SimulationParameters(
        unit_value=1_000,
        daily_gross_payment=100,
        daily_interest=40,
        daily_principal=60,
        initial_units=1,
        horizon_days=10,
        days_per_month=10,
        accrual_mode="gross_payment",
        activation_lag=True,
        purchase_timing="start_of_day",
    )


@pytest.fixture
def three_month_params(small_params: SimulationParameters) -> SimulationParameters:
    """Same economics over 25 days: two full 10-day months and a 5-day stub."""
    return small_params.model_copy(update={"horizon_days": 25})


@pytest.fixture
def base_params() -> SimulationParameters:
    """Original plan defaults (matches scenarios/base_case.yaml)."""
    return SimulationParameters()
