from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from typing import Any

_CENT = Decimal("0.01")
_HUNDRED = Decimal("100")
_ONE = Decimal("1")


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Tolerant Decimal conversion; unparseable and non-finite values give ``default``."""
    if value is None:
        return default
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            return default
    if not value.is_finite():
        return default
    return value


def quantize(value: Decimal, exp: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """``value.quantize(exp)`` that also works past the default 28-digit precision."""
    with localcontext() as ctx:
        # quantize needs every digit of the result to fit in the context
        ctx.prec = max(ctx.prec, value.adjusted() - exp.as_tuple().exponent + 2)
        return value.quantize(exp, rounding=rounding)


def money(value: Any) -> Decimal:
    """Quantize a currency amount to cents using half-up rounding."""
    return quantize(to_decimal(value), _CENT)


def dollars_to_cents(value: Any) -> int:
    """Convert a dollar amount (float, str or Decimal) to integer cents.

    Goes through ``Decimal(str(value))`` so ``0.29`` becomes 29 cents rather
    than the 28 a float multiplication would truncate to. Non-finite input
    counts as zero.
    """
    return int(quantize(to_decimal(value) * _HUNDRED, _ONE))


def cents_to_dollars(cents: int) -> float:
    return float(quantize(Decimal(int(cents)).scaleb(-2), _CENT))


def to_cents(value: Any) -> int:
    """Coerce an amount already expressed in minor units to ``int`` cents."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return int(quantize(to_decimal(value), _ONE))
