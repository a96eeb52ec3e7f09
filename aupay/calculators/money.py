"""Decimal helpers shared by the calculators."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated

from pydantic import PlainSerializer

from aupay.calculators.errors import InputError

D = Decimal

# Decimal that serialises to a JSON number rather than a string.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Rate = Money


def as_amount(value: Decimal | int | float | str, name: str = "Amount") -> Decimal:
    """Coerce ``value`` to a finite, non-negative Decimal.

    Floats go through ``str`` so 0.1 stays 0.1.

    Raises:
        InputError: If the value is not a number, not finite, or negative.
    """
    try:
        amount = value if isinstance(value, Decimal) else D(str(value))
    except InvalidOperation as exc:
        raise InputError(f"{name} must be a number, got {value!r}.") from exc
    if not amount.is_finite() or amount < 0:
        raise InputError(f"{name} must be a non-negative finite number.")
    return amount


def round_money(value: Decimal, places: int = 2) -> Decimal:
    """Round half-up to ``places`` decimals (cents by default)."""
    return value.quantize(D(1).scaleb(-places), rounding=ROUND_HALF_UP)
