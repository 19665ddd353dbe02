"""Tests for engine/orchestrator.py — full pipeline and run-wide invariants.

Covers:
  - simulate() returns the daily/monthly/summary triple for the given params
  - Fleet never shrinks; earning units never exceed owned units
  - Cash pool stays below one unit after the purchase step
  - Cash conservation: the pool is everything accrued minus everything spent
  - Determinism across repeated runs
"""

from __future__ import annotations

import itertools

import pytest

from fleet_simulator.config import SimulationParameters
from fleet_simulator.engine.errors import InvalidParameter, SimulationError
from fleet_simulator.engine.orchestrator import simulate


POLICIES = [
    {"accrual_mode": accrual, "activation_lag": lag, "purchase_timing": timing}
    for accrual, lag, timing in itertools.product(
        ("gross_payment", "interest_only"), (True, False), ("start_of_day", "end_of_day"),
    )
]


@pytest.fixture(params=POLICIES, ids=lambda p: f"{p['accrual_mode']}-lag{p['activation_lag']}-{p['purchase_timing']}")
def policy_params(request, small_params: SimulationParameters) -> SimulationParameters:
    return small_params.model_copy(update={"horizon_days": 75, **request.param})


# ═══════════════════════════════════════════════════════════════════════════
# Pipeline
# ═══════════════════════════════════════════════════════════════════════════

class TestSimulate:
    """simulate() wires the three engine stages together."""

    def test_result_shape(self, three_month_params: SimulationParameters):
        result = simulate(three_month_params)
        assert result.parameters == three_month_params
        assert len(result.daily) == 25
        assert len(result.monthly) == 3
        assert result.summary.days_simulated == 25

    def test_summary_matches_last_day(self, base_params: SimulationParameters):
        result = simulate(base_params)
        last = result.daily[-1]
        assert result.summary.final_units == last.total_units
        assert result.summary.final_cash_pool == last.cash_pool
        assert result.monthly[-1].total_units == last.total_units

    def test_default_plan_grows(self, base_params: SimulationParameters):
        result = simulate(base_params)
        assert result.summary.final_units > base_params.initial_units
        assert result.summary.total_return_pct > 0

    def test_deterministic(self, base_params: SimulationParameters):
        assert simulate(base_params) == simulate(base_params)

    def test_invalid_input_raises_no_partial_result(self, small_params: SimulationParameters):
        bad = SimulationParameters.model_construct(**{**small_params.model_dump(), "days_per_month": 0})
        with pytest.raises(InvalidParameter):
            simulate(bad)

    def test_errors_share_a_base(self):
        assert issubclass(InvalidParameter, SimulationError)
        assert issubclass(SimulationError, ValueError)


# ═══════════════════════════════════════════════════════════════════════════
# Invariants across every policy combination
# ═══════════════════════════════════════════════════════════════════════════

class TestInvariants:
    """Properties that hold for every accrual mode / lag / timing combination."""

    def test_fleet_never_shrinks(self, policy_params: SimulationParameters):
        days = simulate(policy_params).daily
        previous = policy_params.initial_units
        for d in days:
            assert d.total_units == previous + d.new_units
            assert d.total_units >= previous
            previous = d.total_units

    def test_earning_units_bounded_by_fleet(self, policy_params: SimulationParameters):
        for d in simulate(policy_params).daily:
            assert policy_params.initial_units <= d.earning_units <= d.total_units

    def test_cash_pool_below_one_unit_after_purchase(self, policy_params: SimulationParameters):
        per_unit = (
            policy_params.daily_interest
            if policy_params.accrual_mode == "interest_only"
            else policy_params.daily_gross_payment
        )
        for d in simulate(policy_params).daily:
            assert d.cash_pool >= 0
            if policy_params.purchase_timing == "end_of_day":
                assert d.cash_pool < policy_params.unit_value
            else:
                # Today's accrual lands after the morning purchase
                assert d.cash_pool - d.earning_units * per_unit < policy_params.unit_value

    def test_cash_conservation(self, policy_params: SimulationParameters):
        accrued = 0.0
        for d in simulate(policy_params).daily:
            accrued += d.interest if policy_params.accrual_mode == "interest_only" else d.gross_payment
            assert d.cash_pool == pytest.approx(accrued - d.cumulative_investment)
            assert d.cumulative_net_payment == pytest.approx(
                d.cumulative_gross_payment - d.cumulative_investment
            )

    def test_investment_never_exceeds_payment(self, policy_params: SimulationParameters):
        for d in simulate(policy_params).daily:
            assert d.cumulative_investment <= d.cumulative_gross_payment

    def test_investment_never_exceeds_payment_at_interest_ceiling(self, policy_params: SimulationParameters):
        # Interest equal to the whole payment is the most aggressive valid split
        params = policy_params.model_copy(update={"daily_interest": policy_params.daily_gross_payment})
        for d in simulate(params).daily:
            assert d.cumulative_investment <= d.cumulative_gross_payment

    def test_investment_is_whole_units(self, policy_params: SimulationParameters):
        last = simulate(policy_params).daily[-1]
        bought = last.total_units - policy_params.initial_units
        assert last.cumulative_investment == pytest.approx(bought * policy_params.unit_value)

    def test_month_counts(self, policy_params: SimulationParameters):
        result = simulate(policy_params)
        assert len(result.daily) == 75
        assert len(result.monthly) == 8

    def test_capital_identity(self, policy_params: SimulationParameters):
        s = simulate(policy_params).summary
        assert s.accumulated_capital == pytest.approx(
            s.final_units * policy_params.unit_value + s.final_cash_pool
        )
        assert s.total_gain == pytest.approx(s.accumulated_capital - s.total_invested_initial)
