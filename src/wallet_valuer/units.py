from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Context, Decimal

# uint256 has 78 digits and int256 has 77, so their product always fits.
DECIMAL_CONTEXT = Context(prec=160, rounding=ROUND_HALF_EVEN)


def to_decimal(value: int, decimals: int) -> Decimal:
    """Convert a fixed-point integer into an exact decimal amount.

    Args:
        value: Integer amount expressed in smallest units (wei, feed units...).
        decimals: Number of decimal places ``value`` carries.

    Returns:
        ``value / 10**decimals`` as a ``Decimal``.

    Notes:
        - The exponent is shifted directly, so no context rounding applies and
          the result is exact for any on-chain integer.
        - ``value`` may be negative (feed answers are ``int256``).
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    sign, digits, exponent = Decimal(int(value)).as_tuple()
    return Decimal((sign, digits, exponent - decimals))


def multiply(left: Decimal, right: Decimal) -> Decimal:
    return DECIMAL_CONTEXT.multiply(left, right)


def add(left: Decimal, right: Decimal) -> Decimal:
    return DECIMAL_CONTEXT.add(left, right)


def format_fixed(value: Decimal, places: int) -> str:
    """Render ``value`` with exactly ``places`` fractional digits (half-even)."""
    quantum = Decimal(1).scaleb(-places)
    return f"{DECIMAL_CONTEXT.quantize(value, quantum):f}"
