"""Exact decimal arithmetic for competition scores.

All scores are `decimal.Decimal` values. Sums and products are exact
whatever the size of the operands; only division rounds, to a fixed
number of decimal places (ROUND_HALF_UP), so a run is reproducible digit for
digit.
"""

from collections.abc import Iterable
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_DOWN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    InvalidOperation,
)

DEFAULT_DECIMAL_PLACES = 20

ZERO = Decimal(0)
ONE = Decimal(1)
HUNDRED = Decimal(100)

# Never rounds for add, subtract and multiply; must not be used to divide.
_CONTEXT = Context(prec=MAX_PREC, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN)


def to_decimal(value: object) -> Decimal:
    """Convert a JSON scalar to a Decimal.

    Floats go through their shortest repr so `0.1` stays `0.1`. Anything
    that is not a finite number (None, booleans, NaN, text) becomes zero.

    Example:
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal(None)
        Decimal('0')
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
    else:
        return ZERO
    if not result.is_finite():
        return ZERO
    return result


def or_zero(value: Decimal | None) -> Decimal:
    """Undefined-as-zero rule applied at every aggregation boundary."""
    return ZERO if value is None else value


def add_all(values: Iterable[Decimal | None]) -> Decimal:
    total = ZERO
    for value in values:
        total = _CONTEXT.add(total, or_zero(value))
    return total


def sub(a: Decimal, b: Decimal) -> Decimal:
    return _CONTEXT.subtract(a, b)


def mul(*values: Decimal) -> Decimal:
    product = ONE
    for value in values:
        product = _CONTEXT.multiply(product, value)
    return product


def divide(
    numerator: Decimal, denominator: Decimal | int, places: int = DEFAULT_DECIMAL_PLACES
) -> Decimal:
    """Divide and round the quotient to `places` decimal places.

    Raises:
        ZeroDivisionError: If the denominator is zero
    """
    denominator = Decimal(denominator)
    if denominator.is_zero():
        raise ZeroDivisionError("decimal division by zero")
    # Truncate with at least one digit past `places`, then round once.
    integer_digits = max(numerator.adjusted() - denominator.adjusted() + 2, 1)
    truncating = Context(
        prec=integer_digits + places + 2, rounding=ROUND_DOWN, Emax=MAX_EMAX, Emin=MIN_EMIN
    )
    quotient = truncating.divide(numerator, denominator)
    return quotient.quantize(ONE.scaleb(-places), context=_CONTEXT)


def dmax(a: Decimal, b: Decimal) -> Decimal:
    return _CONTEXT.max(a, b)


def render(value: Decimal | None) -> str:
    """Render a score as a plain fixed-point string.

    No exponent, no trailing zeros, and every zero (including None and -0)
    renders as "0".

    Example:
        >>> render(Decimal("1E+2"))
        '100'
        >>> render(Decimal("0.25000"))
        '0.25'
    """
    value = or_zero(value)
    if value.is_zero():
        return "0"
    return format(value.normalize(_CONTEXT), "f")
