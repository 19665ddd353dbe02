"""Tests for the report package — chart, monthly table and exports."""

from __future__ import annotations

from datetime import date

import pytest

from fleet_simulator.config import SimulationParameters
from fleet_simulator.engine.orchestrator import simulate
from fleet_simulator.report.chart import build_growth_chart
from fleet_simulator.report.export import (
    PDF_MONTHLY_COLUMNS,
    REPORT_TITLE,
    SECTION_TITLES,
    build_html_report,
    build_pdf_report,
    build_report_figure,
    monthly_csv,
    parameters_table,
    report_filename,
    summary_table,
)
from fleet_simulator.report.table import (
    CURRENCY_CODE,
    DEFAULT_VISIBLE_MONTHS,
    MONTHLY_COLUMNS,
    format_currency,
    format_monthly_table,
    monthly_table,
)


# ═══════════════════════════════════════════════════════════════════════════
# Table
# ═══════════════════════════════════════════════════════════════════════════

class TestTable:

    @pytest.mark.parametrize("value, expected", [
        (6_216_000, "$6,216,000"),
        (0, "$0"),
        (999.6, "$1,000"),
        (-1_500.2, "-$1,500"),
    ])
    def test_format_currency(self, value: float, expected: str):
        assert format_currency(value) == expected

    def test_columns_in_order(self, three_month_params: SimulationParameters):
        df = monthly_table(simulate(three_month_params).monthly)
        assert list(df.columns) == list(MONTHLY_COLUMNS)
        assert len(df) == 3
        assert df["Total units"].tolist() == [1, 2, 3]

    def test_default_view_is_capped(self, base_params: SimulationParameters):
        monthly = simulate(base_params).monthly
        assert len(monthly) == 60
        assert len(monthly_table(monthly, max_rows=DEFAULT_VISIBLE_MONTHS)) == 12
        assert len(monthly_table(monthly)) == 60

    def test_cap_larger_than_series(self, three_month_params: SimulationParameters):
        assert len(monthly_table(simulate(three_month_params).monthly, max_rows=12)) == 3

    def test_display_formatting(self, three_month_params: SimulationParameters):
        df = format_monthly_table(monthly_table(simulate(three_month_params).monthly))
        first = df.iloc[0]
        assert first["Month"] == "Month 1"
        assert first["Payment received"] == "$1,000"
        assert first["Cash pool"] == "$1,000"
        assert df.iloc[2]["Earning units (avg)"] == 2


# ═══════════════════════════════════════════════════════════════════════════
# Chart
# ═══════════════════════════════════════════════════════════════════════════

class TestChart:

    def test_two_series_on_twin_axes(self, three_month_params: SimulationParameters):
        fig = build_growth_chart(simulate(three_month_params).monthly)
        names = [t.name for t in fig.data]
        assert names == ["Total units", "Cash pool"]
        assert fig.data[0].yaxis == "y"
        assert fig.data[1].yaxis == "y2"
        assert list(fig.data[0].y) == [1, 2, 3]

    def test_single_month(self, small_params: SimulationParameters):
        monthly = simulate(small_params).monthly
        assert len(monthly) == 1
        fig = build_growth_chart(monthly, title="One month")
        assert list(fig.data[0].x) == [1]
        assert fig.layout.title.text == "One month"


# ═══════════════════════════════════════════════════════════════════════════
# Export
# ═══════════════════════════════════════════════════════════════════════════

class TestExport:

    def test_parameters_table(self, base_params: SimulationParameters):
        df = parameters_table(base_params)
        values = dict(zip(df["Parameter"], df["Value"]))
        assert values["Unit value"] == "$6,216,000"
        assert values["Initial units"] == "1"
        assert values["Cash accrual"] == "Gross payment"
        assert values["Activation lag"] == "One month"
        assert values["Currency"] == CURRENCY_CODE == "COP"

    def test_summary_table(self, three_month_params: SimulationParameters):
        df = summary_table(simulate(three_month_params).summary)
        values = dict(zip(df["Metric"], df["Value"]))
        assert values["Projected total units"] == "3"
        assert values["Accumulated capital"] == "$4,000"
        assert values["Total return"] == "300.00%"

    def test_html_report_sections(self, three_month_params: SimulationParameters):
        result = simulate(three_month_params)
        doc = build_html_report(result.parameters, result.summary, result.monthly,
                                generated_on=date(2026, 1, 2))
        assert doc.startswith("<!DOCTYPE html>")
        assert REPORT_TITLE in doc
        for heading in ("1. Input parameters", "2. Results summary", "3. Growth", "4. Monthly detail"):
            assert heading in doc
        assert "Month 3" in doc
        assert "Generated on 2026-01-02" in doc
        assert "Amounts in COP" in doc

    def test_report_filename(self):
        assert report_filename(date(2026, 1, 2)) == "fleet_reinvestment_plan_2026-01-02.html"
        assert report_filename(date(2026, 1, 2), suffix="csv").endswith(".csv")

    def test_monthly_csv(self, three_month_params: SimulationParameters):
        lines = monthly_csv(simulate(three_month_params).monthly).strip().splitlines()
        assert len(lines) == 4
        assert lines[0].split(",")[0] == "Month"


# ═══════════════════════════════════════════════════════════════════════════
# PDF
# ═══════════════════════════════════════════════════════════════════════════

class TestPdfReport:

    def test_figure_layout(self, three_month_params: SimulationParameters):
        result = simulate(three_month_params)
        fig = build_report_figure(result.parameters, result.summary, result.monthly,
                                  generated_on=date(2026, 1, 2))
        assert [t.type for t in fig.data] == ["table", "table", "scatter", "scatter", "table"]
        texts = [a.text for a in fig.layout.annotations]
        for title in SECTION_TITLES:
            assert title in texts
        assert "Generated on 2026-01-02 · Amounts in COP" in texts
        assert REPORT_TITLE in fig.layout.title.text

    def test_monthly_table_rows(self, three_month_params: SimulationParameters):
        result = simulate(three_month_params)
        fig = build_report_figure(result.parameters, result.summary, result.monthly)
        monthly = fig.data[4]
        assert len(monthly.cells.values) == len(PDF_MONTHLY_COLUMNS)
        assert list(monthly.cells.values[0]) == ["Month 1", "Month 2", "Month 3"]
        assert list(monthly.cells.values[-1]) == ["1", "2", "3"]

    def test_cash_pool_on_secondary_axis(self, three_month_params: SimulationParameters):
        result = simulate(three_month_params)
        fig = build_report_figure(result.parameters, result.summary, result.monthly)
        units, cash = fig.data[2], fig.data[3]
        assert units.name == "Total units"
        assert cash.name == "Cash pool"
        assert units.yaxis != cash.yaxis

    def test_page_grows_with_horizon(self, three_month_params: SimulationParameters, base_params: SimulationParameters):
        short = simulate(three_month_params)
        long = simulate(base_params)
        short_fig = build_report_figure(short.parameters, short.summary, short.monthly)
        long_fig = build_report_figure(long.parameters, long.summary, long.monthly)
        assert long_fig.layout.height > short_fig.layout.height

    def test_pdf_bytes(self, three_month_params: SimulationParameters):
        result = simulate(three_month_params)
        pdf = build_pdf_report(result.parameters, result.summary, result.monthly)
        assert pdf.startswith(b"%PDF")
