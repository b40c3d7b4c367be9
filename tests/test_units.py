from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pytest

from wallet_valuer.units import add, format_fixed, multiply, to_decimal


def test_to_decimal_native_balance():
    assert to_decimal(2_500_000_000_000_000_000, 18) == Decimal("2.5")


def test_to_decimal_feed_answer_keeps_scale():
    price = to_decimal(300_000_000_000, 8)
    assert price == Decimal("3000")
    assert str(price) == "3000.00000000"


def test_to_decimal_zero_for_any_precision():
    for decimals in range(0, 78):
        assert to_decimal(0, decimals) == 0


def test_to_decimal_is_exact_division():
    raws = [1, 7, 999_999, 10**18 + 1, 123456789012345678901234567890, 2**256 - 1]
    for raw in raws:
        for decimals in range(0, 31):
            assert Fraction(to_decimal(raw, decimals)) == Fraction(raw, 10**decimals)


def test_to_decimal_repeated_calls_identical():
    first = to_decimal(123_456_789_123_456_789, 18)
    for _ in range(5):
        assert to_decimal(123_456_789_123_456_789, 18) == first


def test_to_decimal_negative_value():
    assert to_decimal(-150_000_000, 8) == Decimal("-1.5")


def test_to_decimal_rejects_negative_decimals():
    with pytest.raises(ValueError, match="non-negative"):
        to_decimal(1, -1)


def test_multiply_and_add_are_exact_for_uint256():
    amount = to_decimal(2**256 - 1, 18)
    price = to_decimal(2**255 - 1, 8)
    product = multiply(amount, price)
    assert Fraction(product) == Fraction(2**256 - 1, 10**18) * Fraction(
        2**255 - 1, 10**8
    )
    assert Fraction(add(product, product)) == 2 * Fraction(product)


def test_format_fixed_pads_places():
    assert format_fixed(Decimal("7500"), 2) == "7500.00"
    assert format_fixed(to_decimal(0, 18), 6) == "0.000000"


def test_format_fixed_rounds_half_even():
    assert format_fixed(Decimal("0.125"), 2) == "0.12"
    assert format_fixed(Decimal("0.135"), 2) == "0.14"
    assert format_fixed(Decimal("1.0000005"), 6) == "1.000000"


def test_format_fixed_never_uses_exponent():
    assert format_fixed(to_decimal(10**40, 0), 2) == "1" + "0" * 40 + ".00"
