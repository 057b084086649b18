from typing import Any

import cbor2

from panser.core.models.value import UniversalValue


class CborCodec:
    def encode(self, value: UniversalValue) -> bytes:
        return cbor2.dumps(value)

    def decode(self, data: bytes) -> Any:
        return cbor2.loads(data)
