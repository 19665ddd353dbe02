"""Exact money arithmetic helpers.

Parameter values arrive as floats; converting through ``repr`` keeps the
value the user typed (``0.1`` stays ``Decimal("0.1")``), so the purchase
floor/remainder pair is exact over thousands of daily steps.
"""

from __future__ import annotations

from decimal import Decimal


def to_decimal(value: float | int) -> Decimal:
    return Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
