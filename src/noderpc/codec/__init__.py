"""Value codecs: exact amounts, call arguments and typed results."""

from noderpc.codec.amount import Amount, decode_amount, encode_amount
from noderpc.codec.decoders import (
    Decoder,
    decode_bool,
    decode_decimal,
    decode_int,
    decode_null,
    decode_str,
    dict_of,
    identity,
    list_of,
    model,
    optional,
)
from noderpc.codec.params import encode_param

__all__ = [
    "Amount",
    "decode_amount",
    "encode_amount",
    "encode_param",
    "Decoder",
    "identity",
    "decode_int",
    "decode_str",
    "decode_bool",
    "decode_decimal",
    "decode_null",
    "list_of",
    "dict_of",
    "optional",
    "model",
]
