"""Conversion between UI token amounts and on-chain base units.

Conversions are exact: an amount that would need rounding or does not fit
in a u64 raises ConversionError instead of being truncated.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from solmint.config import MAX_DECIMALS, U64_MAX
from solmint.errors import ConversionError

# Digits in U64_MAX; anything longer cannot fit
_U64_DIGITS = len(str(U64_MAX))


def parse_decimal(amount: Decimal | int | float | str) -> Decimal:
    """Read a UI amount as a Decimal, raising ConversionError if it is not a number."""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool):
        raise ConversionError(f"Not a number: {amount!r}")
    try:
        if isinstance(amount, float):
            # repr() keeps the shortest round-tripping form (0.1, not 0.1000000000000000055...)
            return Decimal(repr(amount))
        return Decimal(str(amount).strip())
    except InvalidOperation as exc:
        raise ConversionError(f"Not a number: {amount!r}") from exc


def _check_decimals(decimals: int) -> None:
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ConversionError(f"Decimals must be between 0 and {MAX_DECIMALS}, got {decimals}")


def to_base_units(amount: Decimal | int | float | str, decimals: int) -> int:
    """Scale a UI amount by ``10**decimals`` into an integer base-unit amount.

    Raises ConversionError if the amount is negative or not finite, has more
    fractional digits than ``decimals`` allows, or exceeds the u64 range.

    >>> to_base_units(Decimal("1.5"), 2)
    150
    """
    _check_decimals(decimals)
    value = parse_decimal(amount)
    if not value.is_finite():
        raise ConversionError(f"Amount must be finite, got {value}")
    if value.is_signed() and value != 0:
        raise ConversionError(f"Amount must not be negative, got {value}")

    _, digits, exponent = value.as_tuple()
    digit_text = "".join(map(str, digits))
    coefficient = int(digit_text)
    if coefficient == 0:
        return 0

    trailing_zeros = len(digit_text) - len(digit_text.rstrip("0"))
    if exponent + trailing_zeros < -decimals:
        raise ConversionError(f"Amount {value} has more than {decimals} fractional digits")

    shift = exponent + decimals
    if len(digits) + shift > _U64_DIGITS:
        raise ConversionError(f"Amount {value} overflows u64 at {decimals} decimals")

    if shift >= 0:
        base_units = coefficient * 10**shift
    else:
        # only trailing zeros are dropped here
        base_units = coefficient // 10**-shift

    if base_units > U64_MAX:
        raise ConversionError(f"Amount {value} overflows u64 at {decimals} decimals")
    return base_units


def from_base_units(amount: int, decimals: int) -> Decimal:
    """Inverse of to_base_units: integer base units back to a UI Decimal."""
    _check_decimals(decimals)
    if amount < 0:
        raise ConversionError(f"Base-unit amount must not be negative, got {amount}")
    return Decimal(amount).scaleb(-decimals)
