"""Static report export — HTML and PDF documents, CSV of the monthly series.

Exporters only read the snapshots they are given (parameters, summary,
monthly series); they never re-run the engine.

The PDF is a single plotly figure (tables + growth chart) rendered with
kaleido, the same ``write_image``/``to_image`` path plotly uses for PNG/SVG.
"""

from __future__ import annotations

import html
from datetime import date

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from fleet_simulator.config.parameters import SimulationParameters
from fleet_simulator.models.results import MonthlyRecord, RunSummary
from fleet_simulator.report.chart import CASH_COLOR, UNITS_COLOR, build_growth_chart, growth_traces
from fleet_simulator.report.table import (
    CURRENCY_CODE,
    format_currency,
    format_monthly_table,
    monthly_table,
)

REPORT_TITLE = "Fleet Reinvestment Plan"
REPORT_SUBTITLE = "Fleet growth projection from reinvested daily cash flow"

SECTION_TITLES = (
    "1. Input parameters",
    "2. Results summary",
    "3. Growth",
    "4. Monthly detail",
)

_ACCRUAL_LABELS = {
    "gross_payment": "Gross payment",
    "interest_only": "Interest only",
}

_STYLE = """
body { font-family: Helvetica, Arial, sans-serif; color: #2c3e50; margin: 32px; }
h1 { color: #2980b9; text-align: center; margin-bottom: 4px; }
h2 { color: #2980b9; border-bottom: 2px solid #2980b9; padding-bottom: 4px; margin-top: 32px; }
p.subtitle { text-align: center; color: #34495e; margin-top: 0; }
table { border-collapse: collapse; width: 100%; font-size: 0.85rem; }
th { background: #2980b9; color: #fff; padding: 6px 8px; text-align: right; }
td { padding: 4px 8px; text-align: right; border-bottom: 1px solid #ecf0f1; }
th:first-child, td:first-child { text-align: left; }
footer { margin-top: 40px; font-size: 0.75rem; color: #7f8c8d; text-align: center; }
"""

# ── PDF layout (pixels at scale 1) ──
PDF_WIDTH = 900
PDF_MONTHLY_COLUMNS = [
    "Month",
    "Earning units (avg)",
    "Payment received",
    "Interest earned",
    "New units",
    "Cash pool",
    "Total units",
]
_ROW_PX = 24
_CHART_PX = 380
_GAP_PX = 70
_MARGIN_TOP_PX = 110
_MARGIN_BOTTOM_PX = 70

_PARAMS_HEADER = "#2980b9"
_SUMMARY_HEADER = "#16a085"
_MONTHLY_HEADER = "#8e44ad"
_STRIPES = ("#ffffff", "#f4f6f7")


def parameters_table(params: SimulationParameters) -> pd.DataFrame:
    """Input parameters as a two-column (Parameter, Value) frame."""
    rows = [
        ("Currency", CURRENCY_CODE),
        ("Unit value", format_currency(params.unit_value)),
        ("Daily payment per unit", format_currency(params.daily_gross_payment)),
        ("Daily interest per unit", format_currency(params.daily_interest)),
        ("Daily principal per unit", format_currency(params.daily_principal)),
        ("Initial units", str(params.initial_units)),
        ("Simulation days", f"{params.horizon_days} ({params.years:.2f} years)"),
        ("Days per month", str(params.days_per_month)),
        ("Cash accrual", _ACCRUAL_LABELS.get(params.accrual_mode, params.accrual_mode)),
        ("Activation lag", "One month" if params.activation_lag else "None"),
        ("Purchase timing", params.purchase_timing.replace("_", " ")),
    ]
    return pd.DataFrame(rows, columns=["Parameter", "Value"])


def summary_table(summary: RunSummary) -> pd.DataFrame:
    """Run summary as a two-column (Metric, Value) frame."""
    rows = [
        ("Projected total units", str(summary.final_units)),
        ("Final cash pool", format_currency(summary.final_cash_pool)),
        ("Accumulated capital", format_currency(summary.accumulated_capital)),
        ("Initial investment", format_currency(summary.total_invested_initial)),
        ("Total gain", format_currency(summary.total_gain)),
        ("Total return", f"{summary.total_return_pct:.2f}%"),
        ("Annualized return", f"{summary.annualized_return_pct:.2f}%"),
        ("Total interest earned", format_currency(summary.total_interest)),
        ("Days simulated", str(summary.days_simulated)),
        ("Years simulated", f"{summary.years_simulated:.2f}"),
    ]
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def _footer(generated_on: date) -> str:
    return f"Generated on {generated_on.isoformat()} · Amounts in {CURRENCY_CODE}"


# ═══════════════════════════════════════════════════════════════════════════
# HTML
# ═══════════════════════════════════════════════════════════════════════════

def build_html_report(
    params: SimulationParameters,
    summary: RunSummary,
    monthly: list[MonthlyRecord],
    generated_on: date | None = None,
) -> str:
    """Render a self-contained HTML report.

    Sections: input parameters, results summary, growth chart, monthly detail.
    The chart loads plotly.js from its CDN.
    """
    generated_on = generated_on or date.today()
    chart_html = build_growth_chart(monthly).to_html(full_html=False, include_plotlyjs="cdn")
    monthly_html = format_monthly_table(monthly_table(monthly)).to_html(index=False, border=0)
    s1, s2, s3, s4 = SECTION_TITLES

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{html.escape(REPORT_TITLE)}</title>
<style>{_STYLE}</style>
</head>
<body>
<h1>{html.escape(REPORT_TITLE)}</h1>
<p class="subtitle">{html.escape(REPORT_SUBTITLE)} · Amounts in {CURRENCY_CODE}</p>

<h2>{s1}</h2>
{parameters_table(params).to_html(index=False, border=0)}

<h2>{s2}</h2>
{summary_table(summary).to_html(index=False, border=0)}

<h2>{s3}</h2>
{chart_html}

<h2>{s4}</h2>
{monthly_html}

<footer>{html.escape(_footer(generated_on))}</footer>
</body>
</html>
"""


# ═══════════════════════════════════════════════════════════════════════════
# PDF
# ═══════════════════════════════════════════════════════════════════════════

def _table_trace(df: pd.DataFrame, header_color: str) -> go.Table:
    stripes = [_STRIPES[i % 2] for i in range(len(df))]
    return go.Table(
        header=dict(
            values=[f"<b>{col}</b>" for col in df.columns],
            fill_color=header_color,
            font=dict(color="white", size=11),
            align="left",
            height=_ROW_PX,
        ),
        cells=dict(
            values=[df[col].astype(str).tolist() for col in df.columns],
            fill_color=[stripes] * len(df.columns),
            font=dict(size=10),
            align="left",
            height=_ROW_PX,
        ),
    )


def build_report_figure(
    params: SimulationParameters,
    summary: RunSummary,
    monthly: list[MonthlyRecord],
    generated_on: date | None = None,
) -> go.Figure:
    """Lay out the whole report as one plotly figure (one tall page).

    Rows: parameters table, summary table, twin-axis growth chart, monthly
    table. Each table row gets a fixed pixel height, so the page grows with
    the horizon.
    """
    generated_on = generated_on or date.today()
    params_df = parameters_table(params)
    summary_df = summary_table(summary)
    monthly_df = format_monthly_table(monthly_table(monthly))[PDF_MONTHLY_COLUMNS]

    row_px = [
        (len(params_df) + 1) * _ROW_PX,
        (len(summary_df) + 1) * _ROW_PX,
        _CHART_PX,
        (len(monthly_df) + 1) * _ROW_PX,
    ]
    plot_px = sum(row_px) + _GAP_PX * (len(row_px) - 1)
    height = plot_px + _MARGIN_TOP_PX + _MARGIN_BOTTOM_PX

    fig = make_subplots(
        rows=4, cols=1,
        specs=[[{"type": "table"}], [{"type": "table"}], [{"secondary_y": True}], [{"type": "table"}]],
        row_heights=row_px,
        vertical_spacing=_GAP_PX / plot_px,
        subplot_titles=SECTION_TITLES,
    )
    fig.add_trace(_table_trace(params_df, _PARAMS_HEADER), row=1, col=1)
    fig.add_trace(_table_trace(summary_df, _SUMMARY_HEADER), row=2, col=1)

    units, cash = growth_traces(monthly)
    fig.add_trace(units, row=3, col=1, secondary_y=False)
    fig.add_trace(cash, row=3, col=1, secondary_y=True)
    fig.update_xaxes(title_text="Month", dtick=max(1, len(monthly) // 12), row=3, col=1)
    fig.update_yaxes(title_text="Total units", title_font=dict(color=UNITS_COLOR),
                     rangemode="tozero", row=3, col=1, secondary_y=False)
    fig.update_yaxes(title_text=f"Cash pool ({CURRENCY_CODE})", title_font=dict(color=CASH_COLOR),
                     rangemode="tozero", row=3, col=1, secondary_y=True)

    fig.add_trace(_table_trace(monthly_df, _MONTHLY_HEADER), row=4, col=1)

    fig.add_annotation(
        text=_footer(generated_on),
        xref="paper", yref="paper", x=0.5, y=0, yshift=-40,
        showarrow=False, font=dict(size=9, color="#7f8c8d"),
    )
    fig.update_layout(
        title=dict(text=f"<b>{REPORT_TITLE}</b><br><sup>{REPORT_SUBTITLE}</sup>", x=0.5),
        width=PDF_WIDTH,
        height=height,
        showlegend=False,
        margin=dict(l=40, r=40, t=_MARGIN_TOP_PX, b=_MARGIN_BOTTOM_PX),
        paper_bgcolor="white",
        plot_bgcolor="white",
    )
    return fig


def build_pdf_report(
    params: SimulationParameters,
    summary: RunSummary,
    monthly: list[MonthlyRecord],
    generated_on: date | None = None,
) -> bytes:
    """Render the report as PDF bytes (requires kaleido)."""
    fig = build_report_figure(params, summary, monthly, generated_on)
    return fig.to_image(format="pdf", width=PDF_WIDTH, height=fig.layout.height)


# ═══════════════════════════════════════════════════════════════════════════
# File names / CSV
# ═══════════════════════════════════════════════════════════════════════════

def report_filename(generated_on: date | None = None, suffix: str = "html") -> str:
    generated_on = generated_on or date.today()
    return f"fleet_reinvestment_plan_{generated_on.isoformat()}.{suffix}"


def monthly_csv(monthly: list[MonthlyRecord]) -> str:
    """Monthly series as CSV text (raw numeric values, display headers)."""
    return monthly_table(monthly).to_csv(index=False)
