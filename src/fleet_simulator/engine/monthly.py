"""Monthly aggregation — fold the daily series into month buckets.

A bucket closes on every day where ``day % days_per_month == 0`` and on the
last simulated day. Every record already carries its month index, so a
bucket is simply a run of consecutive records sharing the same ``month``.
"""

from __future__ import annotations

from decimal import Decimal

from fleet_simulator.engine.errors import EmptyInput
from fleet_simulator.engine.money import to_decimal
from fleet_simulator.models.results import DailyRecord, MonthlyRecord


def _close_bucket(bucket: list[DailyRecord]) -> MonthlyRecord:
    last = bucket[-1]
    n = len(bucket)

    earning_sum = sum(day.earning_units for day in bucket)
    gross = sum((to_decimal(day.gross_payment) for day in bucket), Decimal(0))
    interest = sum((to_decimal(day.interest) for day in bucket), Decimal(0))
    principal = sum((to_decimal(day.principal) for day in bucket), Decimal(0))

    return MonthlyRecord(
        month=last.month,
        days_in_bucket=n,
        # Mean over the days actually present; a short final month is not
        # padded to days_per_month.
        avg_earning_units=float(Decimal(earning_sum) / n),
        gross_payment=float(gross),
        interest=float(interest),
        principal=float(principal),
        new_units=sum(day.new_units for day in bucket),
        cash_pool=last.cash_pool,
        total_units=last.total_units,
        cumulative_gross_payment=last.cumulative_gross_payment,
        cumulative_investment=last.cumulative_investment,
        cumulative_net_payment=last.cumulative_net_payment,
    )


def aggregate_monthly(daily: list[DailyRecord]) -> list[MonthlyRecord]:
    """Return one ``MonthlyRecord`` per month bucket, in order.

    Raises ``EmptyInput`` for an empty daily series.
    """
    if not daily:
        raise EmptyInput("cannot aggregate an empty daily series")

    months: list[MonthlyRecord] = []
    bucket: list[DailyRecord] = []

    for day in daily:
        if bucket and day.month != bucket[-1].month:
            months.append(_close_bucket(bucket))
            bucket = []
        bucket.append(day)

    months.append(_close_bucket(bucket))
    return months
