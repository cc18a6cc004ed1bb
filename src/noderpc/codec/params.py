"""Encoding typed call arguments into JSON values."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel

from noderpc.codec.amount import Amount, encode_amount
from noderpc.protocol.json_value import JsonValue


def encode_param(value: Any) -> JsonValue:
    """Encode one positional argument with the encoder its type calls for.

    * :class:`Amount` -> fixed-point decimal
    * :class:`~enum.Enum` -> its value
    * pydantic models -> their JSON dict (by alias)
    * lists, tuples and mappings -> encoded element by element
    * JSON scalars -> unchanged

    Raises:
        TypeError: ``float`` (inexact) or any other unsupported type

    Example:
        >>> encode_param(Amount(1))
        Decimal('1E-8')
    """
    if isinstance(value, Enum):
        return encode_param(value.value)
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, Amount):
        return encode_amount(value)
    if isinstance(value, (int, Decimal)):
        return value
    if isinstance(value, float):
        raise TypeError("float parameters are not exact; pass Decimal, int or Amount")
    if isinstance(value, BaseModel):
        return encode_param(value.model_dump(by_alias=True, exclude_none=True))
    if isinstance(value, Mapping):
        encoded: dict[str, JsonValue] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"Parameter object keys must be str, not {type(key).__name__}")
            encoded[key] = encode_param(item)
        return encoded
    if isinstance(value, (list, tuple)):
        return [encode_param(item) for item in value]
    raise TypeError(f"Cannot encode parameter of type {type(value).__name__}")
