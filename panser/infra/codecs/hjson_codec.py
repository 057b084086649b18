from typing import Any

import hjson

from panser.core.models.value import UniversalValue, to_plain_data


class HjsonCodec:
    """Human JSON codec, written in Hjson's multi-line style."""
    def encode(self, value: UniversalValue) -> bytes:
        return hjson.dumps(to_plain_data(value)).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return hjson.loads(data.decode("utf-8"))
