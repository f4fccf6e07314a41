"""
Money helpers.

All monetary outputs of the quoting engine are rounded to cents with
ROUND_HALF_UP, once, at the end of each derived quantity.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from src.domain.quoting.constants import MONEY_QUANTUM

ZERO = Decimal("0.00")


def round_money(value: Decimal) -> Decimal:
    """
    Round a Decimal amount to 2 decimal places, half up.

    Examples:
        >>> round_money(Decimal("10.005"))
        Decimal('10.01')
        >>> round_money(Decimal("10.004"))
        Decimal('10.00')
    """
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def coerce_decimal(value: Any) -> Any:
    """
    Pydantic "before" hook: floats go through str() to avoid binary artifacts.

    Other types are left for pydantic's own Decimal validation.
    """
    if isinstance(value, float):
        return Decimal(str(value))
    return value
