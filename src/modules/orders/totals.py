"""Money arithmetic for order lines.

All values are ``Decimal``; floats never enter the computation.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from modules.orders.constants import MONEY_QUANTUM

ZERO = Decimal("0.00")


def line_total(quantity: Decimal, unit_price: Decimal) -> Decimal:
    """``quantity * unit_price`` rounded half-up to cents."""
    return (Decimal(quantity) * Decimal(unit_price)).quantize(
        MONEY_QUANTUM, rounding=ROUND_HALF_UP
    )


def order_total(line_totals: Iterable[Decimal]) -> Decimal:
    return sum(line_totals, ZERO).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
