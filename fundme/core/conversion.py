"""Price conversion between native amounts and USD.

Pure arithmetic on integers. USD values are scaled by 10**18 so they
share the scale of native amounts and no precision is lost before the
threshold comparison.
"""

from decimal import Decimal, InvalidOperation, localcontext

from .models import NATIVE_UNIT, PriceQuote

USD_SCALE = 10**18

# Enough digits for any uint256 amount.
_PRECISION = 80


def get_usd_value(amount: int, quote: PriceQuote) -> int:
    """Convert a native amount to USD (scaled by 10**18).

    Rounds down, so a contribution is never credited with more USD than
    it is worth.
    """
    return amount * quote.answer // 10**quote.decimals


def minimum_usd_scaled(minimum_usd: int) -> int:
    """Scale a whole-dollar minimum to the USD_SCALE representation."""
    return minimum_usd * USD_SCALE


def minimum_native_amount(minimum_usd: int, quote: PriceQuote) -> int:
    """Smallest native amount whose USD value meets `minimum_usd`.

    Ceiling of the inverse conversion. With a 2000 USD quote and a 50 USD
    minimum this is 0.025 native units.
    """
    threshold = minimum_usd_scaled(minimum_usd)
    numerator = threshold * 10**quote.decimals
    return -(-numerator // quote.answer)


def to_native_units(value: str | int | Decimal) -> int:
    """Parse a decimal amount of native units ("1.5") into wei.

    Raises:
        ValueError: If the value is not a number or has sub-wei precision.
    """
    try:
        parsed = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not parsed.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = parsed * NATIVE_UNIT
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {value!r} has more than 18 decimal places")
    return int(scaled)


def from_native_units(amount: int) -> Decimal:
    """Format a wei amount as a Decimal number of native units."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return Decimal(amount) / NATIVE_UNIT
