from typing import Any

import msgpack

from panser.core.models.value import UniversalValue


class MsgPackCodec:
    """
    MsgPack codec.

    - byte strings use the bin family, text uses str
    - any scalar may be a map key
    - timestamps (ext type -1) decode to datetimes
    """
    def encode(self, value: UniversalValue) -> bytes:
        return msgpack.packb(value, use_bin_type=True)

    def decode(self, data: bytes) -> Any:
        return msgpack.unpackb(data, raw=False, strict_map_key=False, timestamp=3)
