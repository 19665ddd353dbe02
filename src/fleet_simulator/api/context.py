"""Context manifest — makes the simulator self-describing for API clients.

Two detail levels:
  - ``compact``: parameter schema + output fields
  - ``full``:    adds the plan model, formulas and interpretation guide
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from fleet_simulator.config.parameters import SimulationParameters
from fleet_simulator.models.results import RunSummary


# ═══════════════════════════════════════════════════════════════════════════
# Public response models
# ═══════════════════════════════════════════════════════════════════════════

class ParameterInfo(BaseModel):
    """One configurable parameter, machine-readable."""
    name: str
    type: str
    default: Any
    description: str
    constraints: dict[str, Any] = Field(default_factory=dict)


class OutputFieldInfo(BaseModel):
    """One output field, machine-readable."""
    name: str
    type: str
    description: str


class SimulatorContext(BaseModel):
    """Self-describing context for API clients."""
    simulator_name: str
    version: str
    description: str
    plan_model: str
    key_formulas: list[dict[str, str]]
    parameters: list[ParameterInfo]
    summary_outputs: list[OutputFieldInfo]
    interpretation_guide: str


# ═══════════════════════════════════════════════════════════════════════════
# Schema extraction from Pydantic models
# ═══════════════════════════════════════════════════════════════════════════

def _extract_params(model_cls: type[BaseModel]) -> list[ParameterInfo]:
    """Extract parameter info from a Pydantic model class."""
    params: list[ParameterInfo] = []
    for name, field_info in model_cls.model_fields.items():
        constraints: dict[str, Any] = {}
        for attr in ("ge", "gt", "le", "lt"):
            meta_val = _get_field_metadata(field_info, attr)
            if meta_val is not None:
                constraints[attr] = meta_val

        type_str = str(field_info.annotation) if field_info.annotation else "Any"
        type_str = type_str.replace("typing.", "").replace("<class '", "").replace("'>", "")

        params.append(ParameterInfo(
            name=name,
            type=type_str,
            default=field_info.default,
            description=field_info.description or "",
            constraints=constraints,
        ))
    return params


def _get_field_metadata(field_info: Any, attr: str) -> Any:
    """Extract one constraint (ge/gt/le/lt) from Pydantic field metadata."""
    for m in getattr(field_info, "metadata", []):
        if hasattr(m, attr):
            return getattr(m, attr)
    return None


def _extract_outputs(model_cls: type[BaseModel]) -> list[OutputFieldInfo]:
    outputs: list[OutputFieldInfo] = []
    for name, field_info in model_cls.model_fields.items():
        type_str = getattr(field_info.annotation, "__name__", str(field_info.annotation))
        outputs.append(OutputFieldInfo(
            name=name,
            type=type_str,
            description=_OUTPUT_DESCRIPTIONS.get(name, ""),
        ))
    return outputs


# ═══════════════════════════════════════════════════════════════════════════
# Context text
# ═══════════════════════════════════════════════════════════════════════════

_PLAN_MODEL = """
A fleet of income-generating units (motorcycles) pays a fixed amount per unit
per day. The payment splits into interest (yield) and principal (return of
capital). Each day, the accrued cash pool buys as many whole units as it can
afford; the remainder carries over. New units grow the income base, so the
fleet compounds.

Policy axes (independent):
  - accrual_mode:    reinvest the gross payment, or only the interest portion
  - activation_lag:  new units start earning next month (True) or immediately
  - purchase_timing: buy from yesterday's pool at start of day, or right after
                     today's accrual at end of day
"""

_KEY_FORMULAS = [
    {
        "name": "Units bought",
        "formula": "floor(cash_pool / unit_value)",
        "meaning": "Whole units only; the remainder stays in the pool",
    },
    {
        "name": "Daily payment",
        "formula": "earning_units × daily_gross_payment",
        "meaning": "Interest and principal follow the same pattern",
    },
    {
        "name": "Accumulated capital",
        "formula": "final_units × unit_value + final_cash_pool",
        "meaning": "Fleet at cost plus uninvested cash at horizon end",
    },
    {
        "name": "Total return %",
        "formula": "100 × (accumulated_capital − initial_units × unit_value) / (initial_units × unit_value)",
        "meaning": "Gain over the starting fleet's cost basis",
    },
    {
        "name": "Annualized return %",
        "formula": "total_return_pct / (horizon_days / 365)",
        "meaning": "Simple (non-compounded) yearly average",
    },
]

_OUTPUT_DESCRIPTIONS = {
    "final_units": "Units owned at horizon end",
    "final_cash_pool": "Uninvested cash at horizon end",
    "accumulated_capital": "final_units × unit_value + final_cash_pool",
    "total_invested_initial": "initial_units × unit_value",
    "total_gain": "accumulated_capital − total_invested_initial",
    "total_return_pct": "Total gain as % of the initial investment",
    "annualized_return_pct": "Total return divided by years simulated",
    "total_interest": "Sum of interest realized over the horizon",
    "days_simulated": "horizon_days",
    "years_simulated": "horizon_days / 365",
}

_INTERPRETATION_GUIDE = """
HOW TO INTERPRET RESULTS:

1. FINAL UNITS: the fleet size the plan reaches. Compare with initial_units.
2. ACCUMULATED CAPITAL: values the fleet at purchase cost, no depreciation.
3. RETURNS: total and annualized returns are simple ratios on the initial
   cost basis. Reinvestment purchases are funded from earnings and are not
   counted as invested capital.
4. ACTIVATION LAG: with the lag on, a unit bought late in a month idles until
   the month ends. Use /simulate/compare to quantify its cost.
5. SENSITIVITY: /simulate/sensitivity ranks which inputs move accumulated
   capital the most.
"""


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def build_context(detail_level: Literal["compact", "full"] = "full") -> SimulatorContext:
    """Build the self-describing context manifest."""
    full = detail_level == "full"
    return SimulatorContext(
        simulator_name="Fleet Reinvestment Simulator",
        version="1.0",
        description=(
            "Projects the growth of a fleet of income-generating units funded by "
            "reinvesting daily cash flow. Produces daily, monthly and summary results."
        ),
        plan_model=_PLAN_MODEL.strip() if full else "",
        key_formulas=_KEY_FORMULAS if full else [],
        parameters=_extract_params(SimulationParameters),
        summary_outputs=_extract_outputs(RunSummary),
        interpretation_guide=_INTERPRETATION_GUIDE.strip() if full else "",
    )


def get_parameter_schema() -> dict:
    """Return the full JSON Schema for SimulationParameters."""
    return SimulationParameters.model_json_schema()


def get_default_parameters() -> dict:
    """Return default SimulationParameters as a JSON-serializable dict."""
    return SimulationParameters().model_dump()
