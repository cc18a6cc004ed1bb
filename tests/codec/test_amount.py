"""Tests for exact monetary amounts."""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import BaseModel, ValidationError

from noderpc.codec.amount import (
    MAX_UNITS,
    MIN_UNITS,
    Amount,
    decode_amount,
    encode_amount,
)
from noderpc.protocol.exceptions import DecodeError
from noderpc.protocol.json_value import parse_json, serialize_json

units = st.integers(min_value=MIN_UNITS, max_value=MAX_UNITS)


class TestAmountConstruction:
    """Tests for building amounts."""

    @pytest.mark.parametrize(
        ("coins", "expected"),
        [
            ("0.00000001", 1),
            ("1", 100_000_000),
            ("1.5", 150_000_000),
            ("-0.5", -50_000_000),
            ("1e-8", 1),
            ("1.000000000", 100_000_000),
            ("21000000", 2_100_000_000_000_000),
            ("92233720368.54775807", MAX_UNITS),
        ],
    )
    def test_from_coins(self, coins: str, expected: int) -> None:
        assert Amount.from_coins(coins) == Amount(expected)

    def test_from_decimal_and_int(self) -> None:
        assert Amount.from_coins(Decimal("0.1")).units == 10_000_000
        assert Amount.from_coins(2).units == 200_000_000

    def test_sub_unit_precision_rejected(self) -> None:
        with pytest.raises(ValueError, match="decimal places"):
            Amount.from_coins("0.000000001")

    @pytest.mark.parametrize("coins", ["92233720368.54775808", "1e11", "-92233720368.54775809"])
    def test_out_of_range_rejected(self, coins: str) -> None:
        with pytest.raises(ValueError, match="out of range"):
            Amount.from_coins(coins)

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(ValueError):
            Amount.from_coins(Decimal("NaN"))
        with pytest.raises(ValueError):
            Amount.from_coins(Decimal("Infinity"))

    def test_float_rejected(self) -> None:
        with pytest.raises(TypeError):
            Amount.from_coins(0.1)  # type: ignore[arg-type]

    def test_garbage_string_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid amount"):
            Amount.from_coins("one coin")

    def test_units_must_be_int(self) -> None:
        with pytest.raises(TypeError):
            Amount(1.0)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            Amount(True)

    def test_units_range(self) -> None:
        Amount(MAX_UNITS)
        Amount(MIN_UNITS)
        with pytest.raises(ValueError):
            Amount(MAX_UNITS + 1)
        with pytest.raises(ValueError):
            Amount(MIN_UNITS - 1)


class TestAmountBehaviour:
    """Tests for formatting, ordering and arithmetic."""

    @pytest.mark.parametrize(
        ("amount", "text"),
        [
            (Amount(150_000_000), "1.50000000"),
            (Amount(-1), "-0.00000001"),
            (Amount(0), "0.00000000"),
            (Amount(2_100_000_000_000_000), "21000000.00000000"),
        ],
    )
    def test_str(self, amount: Amount, text: str) -> None:
        assert str(amount) == text

    def test_to_decimal(self) -> None:
        assert Amount(1).to_decimal() == Decimal("0.00000001")

    def test_ordering_and_equality(self) -> None:
        assert Amount(1) < Amount(2)
        assert Amount(-5) < Amount(0)
        assert Amount(3) == Amount(3)
        assert max(Amount(7), Amount(4)) == Amount(7)

    def test_arithmetic(self) -> None:
        assert Amount(3) + Amount(4) == Amount(7)
        assert Amount(3) - Amount(4) == Amount(-1)
        assert -Amount(3) == Amount(-3)
        assert abs(Amount(-3)) == Amount(3)

    def test_arithmetic_with_other_types_unsupported(self) -> None:
        with pytest.raises(TypeError):
            Amount(3) + 1  # type: ignore[operator]

    def test_overflow_on_addition(self) -> None:
        with pytest.raises(ValueError):
            Amount(MAX_UNITS) + Amount(1)

    def test_truthiness(self) -> None:
        assert not Amount(0)
        assert Amount(1)

    def test_immutable(self) -> None:
        amount = Amount(1)
        with pytest.raises(AttributeError):
            amount.units = 2  # type: ignore[misc]

    def test_hashable(self) -> None:
        assert len({Amount(1), Amount(1), Amount(2)}) == 2


class TestDecodeAmount:
    """Tests for decoding reply values into amounts."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("0.00000001"), 1),
            (Decimal("0.1"), 10_000_000),
            (Decimal("0.00010000"), 10_000),
            (1, 100_000_000),
            (0, 0),
            ("0.5", 50_000_000),
            ("-2", -200_000_000),
        ],
    )
    def test_valid(self, value: object, expected: int) -> None:
        assert decode_amount(value) == Amount(expected)

    @pytest.mark.parametrize(
        "value",
        [
            Decimal("0.123456789"),
            Decimal("1e400"),
            True,
            None,
            0.1,
            [1],
            " 1",
            "1.",
            "NaN",
            "",
        ],
    )
    def test_invalid(self, value: object) -> None:
        with pytest.raises(DecodeError):
            decode_amount(value)

    def test_parsed_reply_values(self) -> None:
        reply = parse_json(b'{"balance": 0.30000000, "fee": 1e-5}')
        assert decode_amount(reply["balance"]) == Amount(30_000_000)
        assert decode_amount(reply["fee"]) == Amount(1_000)


class TestEncodeAmount:
    """Tests for encoding amounts onto the wire."""

    def test_fixed_point_on_the_wire(self) -> None:
        assert serialize_json([encode_amount(Amount(10_000_000))]) == b"[0.10000000]"
        assert serialize_json([encode_amount(Amount(1))]) == b"[0.00000001]"
        assert serialize_json([encode_amount(Amount(-1))]) == b"[-0.00000001]"
        assert serialize_json([encode_amount(Amount(0))]) == b"[0.00000000]"

    def test_encoding_is_idempotent(self) -> None:
        amount = Amount(123_456_789)
        once = serialize_json(encode_amount(amount))
        again = serialize_json(encode_amount(decode_amount(parse_json(once))))
        assert once == again == b"1.23456789"


class _Holder(BaseModel):
    fee: Amount
    change: Amount | None = None


class TestAmountInModels:
    """Tests for amounts as pydantic fields."""

    def test_validates_from_reply_values(self) -> None:
        holder = _Holder.model_validate({"fee": Decimal("0.0001"), "change": 1})
        assert holder.fee == Amount(10_000)
        assert holder.change == Amount(100_000_000)

    def test_accepts_amount_instance(self) -> None:
        assert _Holder(fee=Amount(5)).fee == Amount(5)

    def test_rejects_float(self) -> None:
        with pytest.raises(ValidationError):
            _Holder.model_validate({"fee": 0.1})

    def test_rejects_excess_precision(self) -> None:
        with pytest.raises(ValidationError):
            _Holder.model_validate({"fee": Decimal("0.000000001")})

    def test_json_dump_uses_fixed_point_strings(self) -> None:
        holder = _Holder(fee=Amount(10_000))
        assert holder.model_dump_json() == '{"fee":"0.00010000","change":null}'

    def test_python_dump_keeps_amount(self) -> None:
        assert _Holder(fee=Amount(10_000)).model_dump()["fee"] == Amount(10_000)


@given(units)
def test_decode_inverts_encode(value: int) -> None:
    amount = Amount(value)
    assert decode_amount(encode_amount(amount)) == amount


@given(units)
def test_wire_round_trip(value: int) -> None:
    amount = Amount(value)
    assert decode_amount(parse_json(serialize_json(encode_amount(amount)))) == amount


@given(units)
def test_str_parses_back(value: int) -> None:
    amount = Amount(value)
    assert Amount.from_coins(str(amount)) == amount
