"""Serialization tests — result models survive JSON encode/decode.

Result shapes are the contract with the dashboard, the HTTP API and any
external cache, so they must round-trip without loss.
"""

from __future__ import annotations

import json

from fleet_simulator.config import SimulationParameters
from fleet_simulator.engine.orchestrator import simulate
from fleet_simulator.models.results import DailyRecord, SimulationResult


def test_simulation_result_round_trip(three_month_params: SimulationParameters):
    original = simulate(three_month_params)
    restored = SimulationResult.model_validate_json(original.model_dump_json())
    assert restored == original


def test_parameters_round_trip():
    p = SimulationParameters(initial_units=3, accrual_mode="interest_only", purchase_timing="end_of_day")
    assert SimulationParameters.model_validate_json(p.model_dump_json()) == p


def test_json_keys(three_month_params: SimulationParameters):
    data = json.loads(simulate(three_month_params).model_dump_json())
    assert set(data) == {"parameters", "daily", "monthly", "summary"}
    assert set(data["daily"][0]) == set(DailyRecord.model_fields)
    assert data["summary"]["final_units"] == 3
    assert data["monthly"][-1]["days_in_bucket"] == 5
