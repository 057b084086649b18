import tomllib
from typing import Any

import tomli_w

from panser.core.models.value import UniversalValue, to_plain_data


class TomlCodec:
    """
    TOML codec.

    A TOML document is always a table: encoding anything but a mapping, or
    a value holding null, fails.
    """
    def encode(self, value: UniversalValue) -> bytes:
        if not isinstance(value, dict):
            raise TypeError(f"TOML documents must be tables, not {type(value).__name__}")
        return tomli_w.dumps(to_plain_data(value)).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return tomllib.loads(data.decode("utf-8"))
