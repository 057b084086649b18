import datetime
import decimal
import numbers
import uuid
from collections.abc import Mapping
from typing import Any, TypeAlias

UniversalValue: TypeAlias = (
    None
    | bool
    | int
    | float
    | str
    | bytes
    | list["UniversalValue"]
    | dict["UniversalKey", "UniversalValue"]
)
"""
Format-agnostic value every codec decodes into and encodes from.

The set of shapes is closed: null, boolean, integer, float, string, byte
string, ordered sequence and mapping. Codecs that produce richer Python
objects are folded into these shapes by ``to_universal``.
"""

UniversalKey: TypeAlias = None | bool | int | float | str | bytes
"""Mapping keys are restricted to hashable scalar shapes."""


def to_universal(obj: Any) -> UniversalValue:
    """
    Normalise a decoded Python object into the closed UniversalValue shapes.

    - tuples, sets and other sequences become lists
    - ordered or custom mappings become plain dicts
    - bytearray/memoryview become bytes
    - dates, times and UUIDs become their canonical string form
    - non-float reals (Decimal, Fraction) become floats
    - tagged wrappers exposing a ``value`` (CBOR tags) are unwrapped

    Raises TypeError for anything else.
    """
    if obj is None or isinstance(obj, (bool, str, bytes)):
        return obj

    if isinstance(obj, int):
        return int(obj)

    if isinstance(obj, float):
        return obj

    if isinstance(obj, (bytearray, memoryview)):
        return bytes(obj)

    if isinstance(obj, Mapping):
        return {_to_key(k): to_universal(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_universal(x) for x in obj]

    if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
        return obj.isoformat()

    if isinstance(obj, uuid.UUID):
        return str(obj)

    if isinstance(obj, numbers.Integral):
        return int(obj)

    if isinstance(obj, (numbers.Real, decimal.Decimal)):
        return float(obj)

    tag = getattr(obj, "tag", None)
    if isinstance(tag, int) and hasattr(obj, "value"):
        return to_universal(obj.value)

    raise TypeError(f"Unsupported value of type {type(obj).__name__}")


def _to_key(key: Any) -> UniversalKey:
    value = to_universal(key)
    if isinstance(value, (list, dict)):
        # Composite keys have no stable hashable form.
        raise TypeError(f"Unsupported mapping key of type {type(key).__name__}")
    return value


def to_plain_data(value: UniversalValue) -> Any:
    """
    Prepare a value for text formats that cannot carry byte strings or
    non-string keys (JSON, Hjson, TOML).

    Byte strings become lists of integers and mapping keys become strings,
    the way JSON serializers render them.
    """
    if isinstance(value, bytes):
        return list(value)

    if isinstance(value, dict):
        return {_key_to_str(k): to_plain_data(v) for k, v in value.items()}

    if isinstance(value, list):
        return [to_plain_data(x) for x in value]

    return value


def _key_to_str(key: UniversalKey) -> str:
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, bytes):
        return key.decode("utf-8", errors="backslashreplace")
    return str(key)
