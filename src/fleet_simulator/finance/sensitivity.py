"""Sensitivity / tornado analysis.

Automated parameter sweeps: vary one input at a time, measure how the
accumulated capital at horizon end moves. Produces tornado chart data
sorted by impact.

Default sweep set:
  - unit_value ± 15%
  - daily_gross_payment ± 10%
  - daily_interest ± 10%
  - initial_units ± 50%
  - days_per_month ± 15%
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fleet_simulator.config.parameters import SimulationParameters
from fleet_simulator.engine.errors import InvalidParameter
from fleet_simulator.engine.orchestrator import simulate


@dataclass(frozen=True)
class TornadoBar:
    """One bar in the tornado chart."""

    param_name: str
    """Human-readable parameter name."""

    param_field: str
    """Field of SimulationParameters (e.g. 'unit_value')."""

    base_value: float
    low_value: float
    high_value: float

    capital_at_low: float
    """Accumulated capital when the field = low_value."""

    capital_at_high: float
    """Accumulated capital when the field = high_value."""

    delta_capital: float
    """abs(capital_at_high − capital_at_low) — total swing width."""


@dataclass
class SensitivityResult:
    """Complete sensitivity analysis output."""

    base_capital: float
    """Accumulated capital of the base parameters."""

    bars: list[TornadoBar] = field(default_factory=list)
    """Tornado bars sorted by delta_capital (descending)."""


DEFAULT_SWEEPS: list[tuple[str, str, float, float]] = [
    ("Unit value", "unit_value", -0.15, 0.15),
    ("Daily gross payment", "daily_gross_payment", -0.10, 0.10),
    ("Daily interest", "daily_interest", -0.10, 0.10),
    ("Initial units", "initial_units", -0.50, 0.50),
    ("Days per month", "days_per_month", -0.15, 0.15),
]


def _with_value(params: SimulationParameters, name: str, value: float) -> SimulationParameters:
    """Return a validated copy of ``params`` with one field replaced.

    Integer fields are rounded and kept at their lower bound of 1 so that
    fractional sweeps never fail validation.
    """
    field_info = SimulationParameters.model_fields[name]
    if field_info.annotation is int:
        value = max(1, round(value))
    return SimulationParameters(**{**params.model_dump(), name: value})


def _check_sweepable(name: str) -> None:
    field_info = SimulationParameters.model_fields.get(name)
    if field_info is None:
        raise InvalidParameter(f"cannot sweep unknown parameter {name!r}")
    if field_info.annotation not in (int, float):
        raise InvalidParameter(f"cannot sweep non-numeric parameter {name!r}")


def _run_capital(params: SimulationParameters) -> float:
    return simulate(params).summary.accumulated_capital


def run_sensitivity(
    params: SimulationParameters,
    sweeps: list[tuple[str, str, float, float]] | None = None,
) -> SensitivityResult:
    """Run one-at-a-time sweeps around ``params``.

    Parameters
    ----------
    params : SimulationParameters
        Base parameters.
    sweeps : list[tuple[name, field, low_pct, high_pct]] | None
        Sweeps to run. None = use DEFAULT_SWEEPS. Fields must be numeric
        SimulationParameters fields; anything else raises InvalidParameter.

    Returns
    -------
    SensitivityResult
        Tornado bars sorted by swing in accumulated capital.
    """
    if sweeps is None:
        sweeps = DEFAULT_SWEEPS

    for _, field_name, _, _ in sweeps:
        _check_sweepable(field_name)

    base_capital = _run_capital(params)
    bars: list[TornadoBar] = []

    for name, field_name, low_pct, high_pct in sweeps:
        base_val = float(getattr(params, field_name))

        low_params = _with_value(params, field_name, base_val * (1 + low_pct))
        high_params = _with_value(params, field_name, base_val * (1 + high_pct))
        low_val = float(getattr(low_params, field_name))
        high_val = float(getattr(high_params, field_name))

        capital_low = _run_capital(low_params)
        capital_high = _run_capital(high_params)

        bars.append(TornadoBar(
            param_name=name,
            param_field=field_name,
            base_value=round(base_val, 4),
            low_value=round(low_val, 4),
            high_value=round(high_val, 4),
            capital_at_low=round(capital_low, 2),
            capital_at_high=round(capital_high, 2),
            delta_capital=round(abs(capital_high - capital_low), 2),
        ))

    bars.sort(key=lambda b: b.delta_capital, reverse=True)

    return SensitivityResult(base_capital=round(base_capital, 2), bars=bars)
