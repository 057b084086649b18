from typing import Any

import yaml

from panser.core.models.value import UniversalValue


class YamlCodec:
    """
    YAML codec restricted to the safe loader and dumper.

    Only a single document per frame is accepted. Byte strings round-trip
    through the !!binary tag.
    """
    def encode(self, value: UniversalValue) -> bytes:
        return yaml.safe_dump(value, sort_keys=False, allow_unicode=True).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return yaml.safe_load(data)
