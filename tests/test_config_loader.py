"""Tests for config/loader.py — YAML scenario files."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from fleet_simulator.config import SimulationParameters, load_parameters

SCENARIOS = Path(__file__).resolve().parent.parent / "scenarios"


def test_base_case_matches_defaults():
    assert load_parameters(SCENARIOS / "base_case.yaml") == SimulationParameters()


def test_interest_only_scenario():
    p = load_parameters(SCENARIOS / "interest_only.yaml")
    assert p.initial_units == 3
    assert p.accrual_mode == "interest_only"
    assert p.unit_value == 6_216_000


def test_partial_file_uses_defaults(tmp_path: Path):
    path = tmp_path / "partial.yaml"
    path.write_text("initial_units: 2\nactivation_lag: false\n", encoding="utf-8")
    p = load_parameters(str(path))
    assert p.initial_units == 2
    assert p.activation_lag is False
    assert p.horizon_days == 1_560


def test_empty_file_gives_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_parameters(path) == SimulationParameters()


def test_non_mapping_rejected(tmp_path: Path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_parameters(path)


def test_invalid_value_rejected(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("horizon_days: 0\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_parameters(path)


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_parameters(tmp_path / "nope.yaml")


def test_misspelled_key_rejected(tmp_path: Path):
    path = tmp_path / "typo.yaml"
    path.write_text("horizon_day: 10\n", encoding="utf-8")
    with pytest.raises(ValidationError, match="horizon_day"):
        load_parameters(path)
