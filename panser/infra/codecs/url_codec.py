from typing import Any
from urllib.parse import parse_qsl, urlencode

from panser.core.models.value import UniversalValue


class UrlCodec:
    """
    application/x-www-form-urlencoded codec.

    Decoding yields a flat mapping of strings (the last occurrence of a
    repeated key wins). Encoding accepts a flat mapping, or a sequence of
    key/value pairs, whose values are scalars; null values are skipped.
    """
    def encode(self, value: UniversalValue) -> bytes:
        if isinstance(value, dict):
            items = list(value.items())
        elif isinstance(value, list) and all(
            isinstance(pair, list) and len(pair) == 2 for pair in value
        ):
            items = [(k, v) for k, v in value]
        else:
            raise TypeError("URL encoding requires a mapping or a list of key/value pairs")

        pairs = [
            (self._scalar(k), self._scalar(v))
            for k, v in items
            if v is not None
        ]
        return urlencode(pairs).encode("ascii")

    def decode(self, data: bytes) -> Any:
        text = data.decode("utf-8").strip()
        return dict(parse_qsl(text, keep_blank_values=True))

    @staticmethod
    def _scalar(value: UniversalValue) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, bytes):
            return value.decode("utf-8")
        if isinstance(value, (str, int, float)):
            return str(value)
        raise TypeError(f"URL encoding cannot represent a nested {type(value).__name__}")
