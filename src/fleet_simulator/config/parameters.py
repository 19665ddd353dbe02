"""Simulation parameters — the single input record of one run."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SimulationParameters(BaseModel):
    """Financial rates, starting fleet, horizon and reinvestment policy.

    Frozen: a parameter set is an immutable snapshot, so it can be shared
    between the engine, the renderers and any external cache. Unknown keys
    and non-finite numbers are rejected rather than ignored.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    # --- Unit economics ---
    unit_value: float = Field(
        default=6_216_000, gt=0,
        description="Cost to acquire one unit (motorcycle).",
    )
    daily_gross_payment: float = Field(
        default=21_000, ge=0,
        description="Gross daily payment received per income-earning unit.",
    )
    daily_interest: float = Field(
        default=7_000, ge=0,
        description="Portion of the daily payment counted as yield.",
    )
    daily_principal: float = Field(
        default=14_000, ge=0,
        description="Portion of the daily payment counted as principal return.",
    )

    # --- Fleet & horizon ---
    initial_units: int = Field(default=1, ge=1, description="Units owned at day 0.")
    horizon_days: int = Field(
        default=1_560, ge=1,
        description="Total days simulated (1560 ≈ 5 years of 26-day months).",
    )
    days_per_month: int = Field(
        default=26, ge=1,
        description="Convention for bucketing days into months.",
    )

    # --- Reinvestment policy ---
    accrual_mode: Literal["gross_payment", "interest_only"] = Field(
        default="gross_payment",
        description="Which daily quantity feeds the purchasing cash pool: "
                    "'gross_payment' = full payment, 'interest_only' = interest portion.",
    )
    activation_lag: bool = Field(
        default=True,
        description="True = units bought during a month earn nothing until the next "
                    "month starts. False = new units earn from the day they are bought.",
    )
    purchase_timing: Literal["start_of_day", "end_of_day"] = Field(
        default="start_of_day",
        description="'start_of_day' = buy from the pool carried over from yesterday, "
                    "before settlement. 'end_of_day' = buy right after today's accrual.",
    )

    @model_validator(mode="after")
    def _interest_within_payment(self):
        # Interest is a portion of the payment; the pool can never outgrow
        # what the fleet actually pays.
        if self.daily_interest > self.daily_gross_payment:
            raise ValueError(
                f"daily_interest ({self.daily_interest}) cannot exceed "
                f"daily_gross_payment ({self.daily_gross_payment})"
            )
        return self

    @property
    def years(self) -> float:
        """Horizon expressed in 365-day years."""
        return self.horizon_days / 365
