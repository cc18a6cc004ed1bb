"""JSON value model.

A JSON document is represented by a closed set of plain Python values:

    null    -> None
    bool    -> bool
    number  -> int (integer literals) or Decimal (fraction or exponent)
    string  -> str
    array   -> list[JsonValue]
    object  -> dict[str, JsonValue]  (insertion order preserved)

Numbers are never routed through ``float``: the parser hands fractional
literals to :class:`~decimal.Decimal` and the serializer writes decimals in
plain fixed-point notation, so a value survives ``parse_json`` and
``serialize_json`` without rounding. Interpreting a number (as an amount,
a count, a fee rate) is left to the typed codecs in ``noderpc.codec``.
"""

from __future__ import annotations

import json
import re
from decimal import Decimal
from typing import TypeAlias

from noderpc.protocol.exceptions import ParseError

JsonScalar: TypeAlias = None | bool | int | Decimal | str
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
JsonArray: TypeAlias = list[JsonValue]

DEFAULT_MAX_DEPTH = 512

# Strings are matched whole so brackets and literals inside them are skipped.
_STRUCTURE = re.compile(r'"(?:[^"\\]|\\.)*"|[\[\]{}]', re.DOTALL)
_NON_STANDARD = re.compile(r'"(?:[^"\\]|\\.)*"|-?(?:NaN|Infinity)', re.DOTALL)


class _NonStandardLiteral(ValueError):
    def __init__(self, literal: str) -> None:
        super().__init__(literal)
        self.literal = literal


def _reject_constant(literal: str) -> None:
    raise _NonStandardLiteral(literal)


def _excess_depth_position(text: str, max_depth: int) -> int | None:
    """Return the offset of the first bracket nested deeper than *max_depth*."""
    depth = 0
    for match in _STRUCTURE.finditer(text):
        token = match.group()
        if token[0] == '"':
            continue
        if token in "[{":
            depth += 1
            if depth > max_depth:
                return match.start()
        else:
            depth -= 1
    return None


def _literal_position(text: str, literal: str) -> int:
    for match in _NON_STANDARD.finditer(text):
        if match.group() == literal:
            return match.start()
    return 0


def parse_json(data: bytes | bytearray | str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> JsonValue:
    """Parse UTF-8 JSON into a :data:`JsonValue` tree.

    Args:
        data: Raw payload (bytes are decoded as UTF-8)
        max_depth: Maximum array/object nesting depth

    Returns:
        Parsed value

    Raises:
        ParseError: Malformed input, with the offending offset

    Example:
        >>> parse_json(b'{"result": 0.1, "id": 1}')
        {'result': Decimal('0.1'), 'id': 1}
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            text = bytes(data).decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(e.start, "Invalid UTF-8 byte sequence") from e
    else:
        text = data

    position = _excess_depth_position(text, max_depth)
    if position is not None:
        raise ParseError(position, f"Maximum nesting depth of {max_depth} exceeded")

    try:
        value: JsonValue = json.loads(
            text,
            parse_float=Decimal,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as e:
        raise ParseError(e.pos, e.msg) from e
    except _NonStandardLiteral as e:
        raise ParseError(
            _literal_position(text, e.literal),
            f"Invalid number literal: {e.literal}",
        ) from e
    except RecursionError as e:
        raise ParseError(0, "Maximum nesting depth exceeded") from e
    return value


def serialize_json(value: JsonValue, *, max_depth: int = DEFAULT_MAX_DEPTH) -> bytes:
    """Serialize a :data:`JsonValue` tree to compact UTF-8 JSON.

    Output is deterministic: object keys keep their construction order,
    separators carry no whitespace, and only the escapes JSON mandates are
    applied to strings. Strings holding lone surrogates, which have no
    UTF-8 form, are written with ``\\uXXXX`` escapes instead.

    Args:
        value: Tree to serialize
        max_depth: Maximum array/object nesting depth

    Raises:
        TypeError: *value* contains something that is not a JSON value
            (including ``float``)
        ValueError: *value* contains a NaN or infinite decimal, or nests
            deeper than *max_depth*

    Example:
        >>> serialize_json({"method": "getbalance", "params": [Decimal("0.5")]})
        b'{"method":"getbalance","params":[0.5]}'
    """
    parts: list[str] = []
    _write(value, parts, max_depth)
    return "".join(parts).encode("utf-8")


def format_decimal(value: Decimal) -> str:
    """Format a finite decimal in plain notation (never exponent form)."""
    if not value.is_finite():
        raise ValueError(f"Non-finite number is not valid JSON: {value}")
    return format(value, "f")


def _quote(text: str) -> str:
    quoted = json.dumps(text, ensure_ascii=False)
    try:
        quoted.encode("utf-8")
    except UnicodeEncodeError:
        return json.dumps(text)
    return quoted


def _check_depth(depth_left: int) -> None:
    if depth_left <= 0:
        raise ValueError("Maximum nesting depth exceeded while serializing")


def _write(value: JsonValue, out: list[str], depth_left: int) -> None:
    if value is None:
        out.append("null")
    elif value is True:
        out.append("true")
    elif value is False:
        out.append("false")
    elif isinstance(value, int):
        out.append(int.__repr__(value))
    elif isinstance(value, Decimal):
        out.append(format_decimal(value))
    elif isinstance(value, str):
        out.append(_quote(value))
    elif isinstance(value, (list, tuple)):
        _check_depth(depth_left)
        out.append("[")
        for index, item in enumerate(value):
            if index:
                out.append(",")
            _write(item, out, depth_left - 1)
        out.append("]")
    elif isinstance(value, dict):
        _check_depth(depth_left)
        out.append("{")
        for index, (key, item) in enumerate(value.items()):
            if not isinstance(key, str):
                raise TypeError(f"JSON object keys must be str, not {type(key).__name__}")
            if index:
                out.append(",")
            out.append(_quote(key))
            out.append(":")
            _write(item, out, depth_left - 1)
        out.append("}")
    elif isinstance(value, float):
        raise TypeError("float is not an exact JSON number; use int or Decimal")
    else:
        raise TypeError(f"Object of type {type(value).__name__} is not a JSON value")
