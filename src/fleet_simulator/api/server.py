"""FastAPI server — HTTP access to the fleet reinvestment simulator.

Run with:
    uvicorn fleet_simulator.api.server:app --reload --port 8000

Or:
    python -m fleet_simulator.api.server

Endpoints:
    GET  /context              — self-describing manifest (plan model + schema)
    GET  /schema               — JSON Schema for SimulationParameters
    GET  /parameters/defaults  — default parameters as JSON
    POST /simulate             — run one simulation (partial or full parameters)
    POST /simulate/compare     — compare policy variants on the same economics
    POST /simulate/sensitivity — one-at-a-time sweeps → tornado data
    POST /simulate/narrative   — run + plain-English interpretation
    POST /report/html          — run + static HTML report
    POST /report/pdf           — run + PDF report
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel, Field, ValidationError

from fleet_simulator.api.context import build_context, get_default_parameters, get_parameter_schema
from fleet_simulator.api.narrative import generate_comparison_narrative, generate_narrative
from fleet_simulator.config.parameters import SimulationParameters
from fleet_simulator.engine.errors import SimulationError
from fleet_simulator.engine.orchestrator import simulate
from fleet_simulator.finance.comparison import compare_variants
from fleet_simulator.finance.sensitivity import run_sensitivity
from fleet_simulator.report.export import build_html_report, build_pdf_report, report_filename

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Fleet Reinvestment Simulator API",
    version="1.0",
    description=(
        "Projects fleet growth funded by reinvesting daily cash flow. "
        "Send partial parameters, get daily, monthly and summary results. "
        "Start by calling GET /context to understand the model."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SimulationError)
async def _simulation_error_handler(request: Request, exc: SimulationError) -> JSONResponse:
    logger.warning("Simulation rejected on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


@app.exception_handler(ValidationError)
async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    # Raised when merged parameter overrides fail SimulationParameters validation.
    # Inputs are left out: a rejected Infinity/NaN cannot be encoded as JSON.
    logger.warning("Invalid parameters on %s: %d error(s)", request.url.path, exc.error_count())
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(include_url=False, include_context=False, include_input=False)},
    )


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class SimulateRequest(BaseModel):
    """Request body for /simulate. All fields optional — defaults used for missing."""
    parameters: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full SimulationParameters JSON. Missing fields use defaults. "
                    "Example: {'initial_units': 3, 'accrual_mode': 'interest_only'}",
    )
    include_daily: bool = Field(
        default=False,
        description="Include the full daily series in the response (can be thousands of rows).",
    )


class CompareRequest(BaseModel):
    """Request body for /simulate/compare."""
    parameters: dict[str, Any] = Field(default_factory=dict)
    variants: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Policy overrides to compare. Empty = lag/no-lag × both accrual modes. "
                    "Example: [{'activation_lag': true}, {'activation_lag': false}]",
    )


class SweepParam(BaseModel):
    """One sensitivity sweep: a numeric parameter field and its ± range."""
    field: str = Field(description="Numeric SimulationParameters field, e.g. 'unit_value'.")
    name: str | None = Field(default=None, description="Display name. Defaults to the field name.")
    low_pct: float = Field(default=-0.15, allow_inf_nan=False)
    high_pct: float = Field(default=0.15, allow_inf_nan=False)


class SensitivityRequest(BaseModel):
    """Request body for /simulate/sensitivity."""
    parameters: dict[str, Any] = Field(default_factory=dict)
    sweep_params: list[SweepParam] | None = Field(
        default=None,
        description="Optional override of sweep parameters. "
                    "Format: [{'name': 'Unit value', 'field': 'unit_value', 'low_pct': -0.15, 'high_pct': 0.15}]",
    )


class SimulateResponse(BaseModel):
    """Response from /simulate."""
    result: dict[str, Any]
    narrative: str = ""


class CompareResponse(BaseModel):
    """Response from /simulate/compare."""
    ranking: list[dict[str, Any]]
    comparison_narrative: str


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _build_parameters(overrides: dict[str, Any]) -> SimulationParameters:
    """Build SimulationParameters from partial overrides on top of the defaults.

    Unknown keys are rejected by the model, so a misspelled field never
    silently falls back to its default.
    """
    return SimulationParameters(**{**get_default_parameters(), **overrides})


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and pointer to /context."""
    return {
        "name": "Fleet Reinvestment Simulator API",
        "version": "1.0",
        "start_here": "GET /context?detail_level=full",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/context")
def get_context(
    detail_level: Literal["compact", "full"] = Query(
        default="full",
        description="'compact' for schema only, 'full' for plan model + formulas + guide",
    ),
):
    """Self-describing context manifest."""
    return build_context(detail_level)


@app.get("/schema")
def get_schema():
    """Full JSON Schema for SimulationParameters — types, defaults, constraints."""
    return get_parameter_schema()


@app.get("/parameters/defaults")
def get_defaults():
    """Default SimulationParameters as JSON. Use as a starting point for modifications."""
    return get_default_parameters()


@app.post("/simulate", response_model=SimulateResponse)
def simulate_endpoint(req: SimulateRequest):
    """Run one simulation.

    Send only the parameters you want to change. Returns parameters, monthly
    series and summary (plus the daily series when ``include_daily`` is set)
    and a narrative.
    """
    params = _build_parameters(req.parameters)
    result = simulate(params)
    exclude = None if req.include_daily else {"daily"}
    return SimulateResponse(
        result=result.model_dump(exclude=exclude),
        narrative=generate_narrative(result),
    )


@app.post("/simulate/compare", response_model=CompareResponse)
def simulate_compare(req: CompareRequest):
    """Compare policy variants side by side, ranked by accumulated capital."""
    params = _build_parameters(req.parameters)
    _, outcomes = compare_variants(params, req.variants or None)
    return CompareResponse(
        ranking=[o.model_dump() for o in outcomes],
        comparison_narrative=generate_comparison_narrative(outcomes),
    )


@app.post("/simulate/sensitivity")
def simulate_sensitivity(req: SensitivityRequest):
    """Run one-at-a-time parameter sweeps and rank by accumulated-capital swing."""
    params = _build_parameters(req.parameters)

    sweeps = None
    if req.sweep_params:
        sweeps = [
            (sp.name or sp.field, sp.field, sp.low_pct, sp.high_pct)
            for sp in req.sweep_params
        ]

    sensitivity_result = run_sensitivity(params, sweeps)

    return {
        "base_capital": sensitivity_result.base_capital,
        "tornado_bars": [
            {
                "param_name": bar.param_name,
                "param_field": bar.param_field,
                "base_value": bar.base_value,
                "low_value": bar.low_value,
                "high_value": bar.high_value,
                "capital_at_low": bar.capital_at_low,
                "capital_at_high": bar.capital_at_high,
                "delta_capital": bar.delta_capital,
            }
            for bar in sensitivity_result.bars
        ],
        "interpretation": (
            "Sorted by absolute swing in accumulated capital (largest first). "
            "Parameters at the top are the assumptions that matter most."
        ),
    }


@app.post("/simulate/narrative")
def simulate_with_narrative(req: SimulateRequest):
    """Run a simulation and return only the narrative plus headline metrics."""
    params = _build_parameters(req.parameters)
    result = simulate(params)
    s = result.summary
    return {
        "narrative": generate_narrative(result),
        "headline_metrics": {
            "final_units": s.final_units,
            "accumulated_capital": round(s.accumulated_capital, 2),
            "total_return_pct": round(s.total_return_pct, 2),
            "annualized_return_pct": round(s.annualized_return_pct, 2),
        },
    }


@app.post("/report/html", response_class=HTMLResponse)
def report_html(req: SimulateRequest):
    """Run a simulation and return the static HTML report."""
    params = _build_parameters(req.parameters)
    result = simulate(params)
    return HTMLResponse(build_html_report(params, result.summary, result.monthly))


@app.post("/report/pdf")
def report_pdf(req: SimulateRequest):
    """Run a simulation and return the PDF report as an attachment."""
    params = _build_parameters(req.parameters)
    result = simulate(params)
    return Response(
        content=build_pdf_report(params, result.summary, result.monthly),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(suffix="pdf")}"'},
    )


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "fleet_simulator.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
