from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Cents = Union[int, float, str, Decimal, None]


def _to_cents(amount: Cents) -> Decimal:
    if amount is None:
        return Decimal(0)
    # Postgres SUM() comes back as Decimal / numeric strings
    return Decimal(str(amount))


def cents_to_dollars(amount: Cents) -> float:
    return float(_to_cents(amount) / 100)


def format_currency(amount: Cents) -> str:
    """Integer cents -> en-US USD display string, e.g. 948128 -> "$9,481.28"."""
    dollars = (_to_cents(amount) / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"
