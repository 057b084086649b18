import json
from typing import Any

from panser.core.models.value import UniversalValue, to_plain_data


class JsonCodec:
    """
    Compact JSON codec.

    The payload must hold exactly one top-level value; an empty payload is
    a decode error. Byte strings are written as arrays of integers.
    """
    def encode(self, value: UniversalValue) -> bytes:
        text = json.dumps(
            to_plain_data(value),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
        return text.encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return json.loads(data)
