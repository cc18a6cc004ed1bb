"""Typed result decoders.

A decoder is any callable taking the raw ``result`` JSON value and
returning a typed value, raising :class:`DecodeError` when the value does
not have the expected shape. Small decoders compose: ``list_of(decode_str)``
decodes a list of txids, ``optional(model(TxOut))`` a nullable object.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from noderpc.protocol.exceptions import DecodeError

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

Decoder = Callable[[Any], T]


def _type_name(value: Any) -> str:
    return "null" if value is None else type(value).__name__


def identity(value: Any) -> Any:
    """Return the raw JSON value untouched."""
    return value


def decode_int(value: Any) -> int:
    """Decode an integer result, e.g. a block count."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"Expected integer, got {_type_name(value)}")
    return value


def decode_str(value: Any) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"Expected string, got {_type_name(value)}")
    return value


def decode_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise DecodeError(f"Expected boolean, got {_type_name(value)}")
    return value


def decode_decimal(value: Any) -> Decimal:
    """Decode an exact non-monetary number such as a difficulty."""
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise DecodeError(f"Expected number, got {_type_name(value)}")
    return Decimal(value)


def decode_null(value: Any) -> None:
    """Decode the result of a method that returns nothing."""
    if value is not None:
        raise DecodeError(f"Expected null, got {_type_name(value)}")
    return None


def list_of(item: Decoder[T]) -> Decoder[list[T]]:
    """Build a decoder for a JSON array whose elements decode with *item*."""

    def decode(value: Any) -> list[T]:
        if not isinstance(value, list):
            raise DecodeError(f"Expected array, got {_type_name(value)}")
        return [item(element) for element in value]

    return decode


def dict_of(item: Decoder[T]) -> Decoder[dict[str, T]]:
    """Build a decoder for a JSON object whose values decode with *item*."""

    def decode(value: Any) -> dict[str, T]:
        if not isinstance(value, dict):
            raise DecodeError(f"Expected object, got {_type_name(value)}")
        return {key: item(element) for key, element in value.items()}

    return decode


def optional(inner: Decoder[T]) -> Decoder[T | None]:
    """Build a decoder that maps null to None and defers to *inner* otherwise."""

    def decode(value: Any) -> T | None:
        if value is None:
            return None
        return inner(value)

    return decode


def model(cls: type[M]) -> Decoder[M]:
    """Build a decoder validating a JSON object into the pydantic model *cls*.

    Example:
        >>> decode_tip = model(ChainTip)
        >>> decode_tip({"height": 1, "hash": "00..", "branchlen": 0, "status": "active"})
    """

    def decode(value: Any) -> M:
        if not isinstance(value, dict):
            raise DecodeError(f"Expected object for {cls.__name__}, got {_type_name(value)}")
        try:
            return cls.model_validate(value)
        except ValidationError as e:
            raise DecodeError(f"Invalid {cls.__name__}: {e}") from e

    return decode
