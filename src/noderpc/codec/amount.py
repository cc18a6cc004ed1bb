"""Exact monetary amounts.

The node reports amounts as JSON numbers in coin units (``0.00000001``)
but the protocol's native number type is an IEEE double, which cannot
represent most decimal fractions. :class:`Amount` therefore stores an
integer count of the smallest unit (1 unit = 10^-8 coin) and converts to
and from :class:`~decimal.Decimal` without ever touching ``float``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from noderpc.protocol.exceptions import DecodeError

AMOUNT_DECIMALS = 8
UNITS_PER_COIN = 10**AMOUNT_DECIMALS

# The node's amount type is a signed 64-bit unit count.
MIN_UNITS = -(2**63)
MAX_UNITS = 2**63 - 1

# Coin values with a larger adjusted exponent are out of range (max ~9.2e10 coins).
_MAX_ADJUSTED = 10

_NUMERIC_STRING = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")


def _units_from_decimal(value: Decimal) -> int:
    """Convert a coin value to units exactly, or raise ValueError."""
    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got {value}")

    sign, digits, raw_exponent = value.as_tuple()
    exponent = int(raw_exponent)
    coefficient = int("".join(map(str, digits))) if digits else 0
    if coefficient == 0:
        return 0
    if value.adjusted() > _MAX_ADJUSTED:
        raise ValueError(f"Amount {value} is out of range")

    shift = exponent + AMOUNT_DECIMALS
    if shift >= 0:
        units = coefficient * 10**shift
    else:
        if -shift > len(digits):
            raise ValueError(f"Amount {value} has more than {AMOUNT_DECIMALS} decimal places")
        units, remainder = divmod(coefficient, 10**-shift)
        if remainder:
            raise ValueError(f"Amount {value} has more than {AMOUNT_DECIMALS} decimal places")

    units = -units if sign else units
    if not MIN_UNITS <= units <= MAX_UNITS:
        raise ValueError(f"Amount {value} is out of range")
    return units


@dataclass(frozen=True, order=True)
class Amount:
    """Immutable monetary quantity held as an integer unit count.

    Attributes:
        units: Number of smallest units (10^-8 coin)

    Example:
        >>> Amount.from_coins("0.00000001")
        Amount(units=1)
        >>> str(Amount(150_000_000))
        '1.50000000'
    """

    units: int

    def __post_init__(self) -> None:
        if isinstance(self.units, bool) or not isinstance(self.units, int):
            raise TypeError(f"Amount units must be int, got {type(self.units).__name__}")
        if not MIN_UNITS <= self.units <= MAX_UNITS:
            raise ValueError(f"Amount of {self.units} units is out of range")

    @classmethod
    def from_coins(cls, value: Decimal | int | str) -> Amount:
        """Build an amount from a coin-denominated value.

        Raises:
            TypeError: *value* is a float or bool
            ValueError: *value* is not numeric, not finite, out of range, or
                finer than the smallest unit
        """
        if isinstance(value, (bool, float)):
            raise TypeError(f"Amounts cannot be built from {type(value).__name__}")
        if isinstance(value, str):
            try:
                value = Decimal(value)
            except InvalidOperation as e:
                raise ValueError(f"Invalid amount: {value!r}") from e
        return cls(_units_from_decimal(Decimal(value)))

    def to_decimal(self) -> Decimal:
        """Return the coin value with exactly eight fractional digits."""
        return Decimal(self.units).scaleb(-AMOUNT_DECIMALS)

    def __str__(self) -> str:
        return format(self.to_decimal(), "f")

    def __add__(self, other: object) -> Amount:
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.units + other.units)

    def __sub__(self, other: object) -> Amount:
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.units - other.units)

    def __neg__(self) -> Amount:
        return Amount(-self.units)

    def __abs__(self) -> Amount:
        return Amount(abs(self.units))

    def __bool__(self) -> bool:
        return self.units != 0

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate_amount,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )


def decode_amount(value: Any) -> Amount:
    """Decode a JSON number or numeric string into an :class:`Amount`.

    Args:
        value: ``int``, ``Decimal`` or numeric ``str`` from a parsed reply

    Returns:
        Exact amount

    Raises:
        DecodeError: Wrong type, malformed string, or not exactly
            representable in units

    Example:
        >>> decode_amount("0.00000001")
        Amount(units=1)
    """
    if isinstance(value, bool) or not isinstance(value, (int, Decimal, str)):
        raise DecodeError(
            f"Expected a number or numeric string for an amount, got {type(value).__name__}"
        )
    if isinstance(value, str):
        if not _NUMERIC_STRING.fullmatch(value):
            raise DecodeError(f"Invalid amount string: {value!r}")
        value = Decimal(value)
    try:
        return Amount(_units_from_decimal(Decimal(value)))
    except ValueError as e:
        raise DecodeError(str(e)) from e


def encode_amount(amount: Amount) -> Decimal:
    """Encode an amount as a fixed-point JSON number.

    The returned decimal always carries eight fractional digits, so the
    serializer writes e.g. ``0.10000000`` and repeated encode/decode
    cycles are idempotent.
    """
    return amount.to_decimal()


def _validate_amount(value: Any) -> Amount:
    if isinstance(value, Amount):
        return value
    try:
        return decode_amount(value)
    except DecodeError as e:
        raise ValueError(e.message) from e
