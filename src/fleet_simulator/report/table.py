"""Tabular views of the monthly series."""

from __future__ import annotations

import pandas as pd

from fleet_simulator.models.results import MonthlyRecord

DEFAULT_VISIBLE_MONTHS = 12

# ISO 4217 code of every amount shown (whole Colombian pesos)
CURRENCY_CODE = "COP"

# Display label → MonthlyRecord attribute, in column order
MONTHLY_COLUMNS: dict[str, str] = {
    "Month": "month",
    "Total units": "total_units",
    "Earning units (avg)": "avg_earning_units",
    "New units": "new_units",
    "Payment received": "gross_payment",
    "Interest earned": "interest",
    "Principal returned": "principal",
    "Cumulative investment": "cumulative_investment",
    "Cash pool": "cash_pool",
    "Cumulative payment": "cumulative_gross_payment",
    "Cumulative net payment": "cumulative_net_payment",
}

CURRENCY_COLUMNS = [
    "Payment received",
    "Interest earned",
    "Principal returned",
    "Cumulative investment",
    "Cash pool",
    "Cumulative payment",
    "Cumulative net payment",
]


def format_currency(val: float) -> str:
    """Whole-unit currency with thousands separators, e.g. ``$6,216,000``.

    The symbol carries no currency; label tables with ``CURRENCY_CODE``.
    """
    sign = "-" if val < 0 else ""
    return f"{sign}${abs(val):,.0f}"


def monthly_table(monthly: list[MonthlyRecord], max_rows: int | None = None) -> pd.DataFrame:
    """Monthly series as a DataFrame with display column labels.

    ``max_rows`` caps the number of rows (first N months); None shows all.
    Values stay numeric; use ``format_monthly_table`` for display strings.
    """
    rows = monthly if max_rows is None else monthly[:max(max_rows, 0)]
    df = pd.DataFrame(
        [{label: getattr(m, attr) for label, attr in MONTHLY_COLUMNS.items()} for m in rows],
        columns=list(MONTHLY_COLUMNS),
    )
    return df


def format_monthly_table(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of a ``monthly_table`` frame with display strings."""
    out = df.copy()
    out["Month"] = out["Month"].map(lambda m: f"Month {m}")
    out["Earning units (avg)"] = out["Earning units (avg)"].round().astype(int)
    for col in CURRENCY_COLUMNS:
        out[col] = out[col].map(format_currency)
    return out
