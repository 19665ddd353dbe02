"""Fleet Reinvestment Simulator — Streamlit Dashboard.

Layout: sidebar parameter form → main area with three tabs
(Projection | Policy & Sensitivity | Export).
The engine only runs when the form's "Apply" button is pressed; the last
applied parameters live in session state.

Run with:
    streamlit run src/fleet_simulator/dashboard/app.py
"""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from fleet_simulator.api.narrative import generate_comparison_narrative, generate_narrative
from fleet_simulator.config.parameters import SimulationParameters
from fleet_simulator.engine.errors import SimulationError
from fleet_simulator.engine.orchestrator import simulate
from fleet_simulator.finance.comparison import compare_variants
from fleet_simulator.finance.sensitivity import TornadoBar, run_sensitivity
from fleet_simulator.models.results import SimulationResult
from fleet_simulator.report.chart import build_growth_chart
from fleet_simulator.report.export import build_html_report, build_pdf_report, monthly_csv, report_filename
from fleet_simulator.report.table import (
    CURRENCY_CODE,
    DEFAULT_VISIBLE_MONTHS,
    format_currency,
    format_monthly_table,
    monthly_table,
)

# ---------------------------------------------------------------------------
# Defaults — single source of truth for form defaults
# ---------------------------------------------------------------------------
_DEF = SimulationParameters()

_ACCRUAL_MODES = ["gross_payment", "interest_only"]
_ACCRUAL_LABELS = {"gross_payment": "Gross payment", "interest_only": "Interest only"}
_TIMINGS = ["start_of_day", "end_of_day"]
_TIMING_LABELS = {"start_of_day": "Start of day (yesterday's pool)", "end_of_day": "End of day (after accrual)"}

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Fleet Reinvestment Simulator", page_icon="🏍️", layout="wide")

st.markdown("""
<style>
div[data-testid="stMetric"] {
    background: #ffffff;
    border: 1px solid rgba(41,128,185,0.15);
    border-radius: 10px;
    padding: 14px 16px 12px;
    box-shadow: 0 1px 6px rgba(0,0,0,0.06);
}
div[data-testid="stMetric"] label {
    font-size: 0.72rem !important;
    text-transform: uppercase;
    letter-spacing: 0.5px;
}
</style>
""", unsafe_allow_html=True)

st.title("Fleet Reinvestment Simulator")
st.caption(f"Projects fleet growth when daily unit payments are reinvested in new units · amounts in {CURRENCY_CODE}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@st.cache_data(show_spinner="Running simulation…")
def _run_cached(params_json: str) -> SimulationResult:
    """Engine call keyed by the full parameter dump."""
    return simulate(SimulationParameters.model_validate_json(params_json))


@st.cache_data(show_spinner="Rendering PDF…")
def _pdf_cached(params_json: str) -> bytes:
    result = _run_cached(params_json)
    return build_pdf_report(result.parameters, result.summary, result.monthly)


def _render_summary_cards(result: SimulationResult) -> None:
    s = result.summary
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Projected total units", f"{s.final_units}",
              delta=f"+{s.final_units - result.parameters.initial_units}")
    c2.metric("Accumulated capital", format_currency(s.accumulated_capital))
    c3.metric("Annualized return", f"{s.annualized_return_pct:.2f}%")
    c4.metric("Total gain", format_currency(s.total_gain))

    c5, c6, c7, c8 = st.columns(4)
    c5.metric("Initial investment", format_currency(s.total_invested_initial))
    c6.metric("Final cash pool", format_currency(s.final_cash_pool))
    c7.metric("Total return", f"{s.total_return_pct:.2f}%")
    c8.metric("Interest earned", format_currency(s.total_interest))


def _render_monthly_table(result: SimulationResult) -> None:
    n_months = len(result.monthly)
    show_all = False
    if n_months > DEFAULT_VISIBLE_MONTHS:
        show_all = st.toggle(f"Show all ({n_months} months)", value=False)
    max_rows = None if show_all else DEFAULT_VISIBLE_MONTHS
    df = format_monthly_table(monthly_table(result.monthly, max_rows=max_rows))
    st.dataframe(df, use_container_width=True, hide_index=True)


def _tornado_chart(bars: list[TornadoBar]) -> go.Figure:
    """Low/high accumulated capital per swept parameter, largest swing on top."""
    names = [b.param_name for b in reversed(bars)]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        y=names, x=[b.capital_at_low for b in reversed(bars)],
        orientation="h", name="Low", marker_color="#e74c3c",
    ))
    fig.add_trace(go.Bar(
        y=names, x=[b.capital_at_high for b in reversed(bars)],
        orientation="h", name="High", marker_color="#27ae60",
    ))
    fig.update_layout(barmode="group", height=320, margin=dict(l=20, r=20, t=30, b=20),
                      xaxis_title="Accumulated capital")
    return fig


# ---------------------------------------------------------------------------
# SIDEBAR — Parameter form (applied on submit only)
# ---------------------------------------------------------------------------
st.sidebar.header("Plan Parameters")

with st.sidebar.form("parameters"):
    unit_value = st.number_input("Unit value", min_value=1.0, value=float(_DEF.unit_value), step=100_000.0,
                                 format="%.0f", help="Cost to acquire one unit")
    daily_gross = st.number_input("Daily payment per unit", min_value=0.0, value=float(_DEF.daily_gross_payment),
                                  step=1_000.0, format="%.0f")
    c1, c2 = st.columns(2)
    daily_interest = c1.number_input("Daily interest", min_value=0.0, value=float(_DEF.daily_interest),
                                     step=500.0, format="%.0f")
    daily_principal = c2.number_input("Daily principal", min_value=0.0, value=float(_DEF.daily_principal),
                                      step=500.0, format="%.0f")
    initial_units = st.number_input("Initial units", min_value=1, value=_DEF.initial_units, step=1)
    c3, c4 = st.columns(2)
    horizon_days = c3.number_input("Simulation days", min_value=1, value=_DEF.horizon_days, step=30)
    days_per_month = c4.number_input("Days per month", min_value=1, value=_DEF.days_per_month, step=1)
    st.caption(f"≈ {horizon_days / 365:.1f} years")

    accrual_mode = st.selectbox("Cash accrual", _ACCRUAL_MODES, index=_ACCRUAL_MODES.index(_DEF.accrual_mode),
                                format_func=_ACCRUAL_LABELS.get)
    activation_lag = st.checkbox("New units earn from next month", value=_DEF.activation_lag)
    purchase_timing = st.selectbox("Purchase timing", _TIMINGS, index=_TIMINGS.index(_DEF.purchase_timing),
                                   format_func=_TIMING_LABELS.get)

    applied = st.form_submit_button("Apply", type="primary", use_container_width=True)

if applied or "params_json" not in st.session_state:
    try:
        form_params = SimulationParameters(
            unit_value=unit_value,
            daily_gross_payment=daily_gross,
            daily_interest=daily_interest,
            daily_principal=daily_principal,
            initial_units=int(initial_units),
            horizon_days=int(horizon_days),
            days_per_month=int(days_per_month),
            accrual_mode=accrual_mode,
            activation_lag=activation_lag,
            purchase_timing=purchase_timing,
        )
        st.session_state["params_json"] = form_params.model_dump_json()
    except ValueError as exc:
        st.sidebar.error(f"Invalid parameters: {exc}")

if "params_json" not in st.session_state:
    st.stop()

try:
    result = _run_cached(st.session_state["params_json"])
except SimulationError as exc:
    st.error(f"Simulation failed: {exc}")
    st.stop()

params = result.parameters

# ---------------------------------------------------------------------------
# MAIN — tabs
# ---------------------------------------------------------------------------
tab_proj, tab_policy, tab_export = st.tabs(["Projection", "Policy & Sensitivity", "Export"])

with tab_proj:
    _render_summary_cards(result)
    st.plotly_chart(build_growth_chart(result.monthly, title="Total units & cash pool"),
                    use_container_width=True)
    st.subheader("Monthly detail")
    _render_monthly_table(result)
    with st.expander("Show interpretation"):
        st.text(generate_narrative(result))

with tab_policy:
    st.subheader("Policy variants")
    st.caption("Same economics, different reinvestment rules — ranked by accumulated capital")
    if st.button("Compare variants"):
        _, outcomes = compare_variants(params)
        st.dataframe(pd.DataFrame([o.model_dump(exclude={"overrides"}) for o in outcomes]),
                     use_container_width=True, hide_index=True)
        with st.expander("Show comparison"):
            st.text(generate_comparison_narrative(outcomes))

    st.subheader("Sensitivity")
    if st.button("Run sensitivity"):
        try:
            sens = run_sensitivity(params)
        except ValueError as exc:
            # A swept value can leave the valid range (e.g. payment below interest)
            st.error(f"Sensitivity failed: {exc}")
        else:
            st.metric("Base accumulated capital", format_currency(sens.base_capital))
            if sens.bars:
                st.plotly_chart(_tornado_chart(sens.bars), use_container_width=True)

with tab_export:
    st.subheader("Download")
    d1, d2, d3 = st.columns(3)
    with d1:
        st.download_button(
            "📥  Download report (HTML)",
            data=build_html_report(params, result.summary, result.monthly),
            file_name=report_filename(),
            mime="text/html",
            key="dl_report",
        )
    with d2:
        st.download_button(
            "📥  Download monthly series (CSV)",
            data=monthly_csv(result.monthly),
            file_name=report_filename(suffix="csv"),
            mime="text/csv",
            key="dl_csv",
        )
    with d3:
        st.download_button(
            "📥  Download report (PDF)",
            data=_pdf_cached(st.session_state["params_json"]),
            file_name=report_filename(suffix="pdf"),
            mime="application/pdf",
            key="dl_pdf",
        )
