import io
from typing import Any

from dotenv import dotenv_values


class EnvyCodec:
    """
    Decode-only codec for environment-style ``KEY=value`` listings.

    Keys are lower-cased, so ``DATABASE_URL=...`` becomes ``database_url``.
    A key written without a value maps to null. There is no canonical way
    to flatten arbitrary structured data back into environment variables,
    hence no ``encode``.
    """
    def decode(self, data: bytes) -> Any:
        values = dotenv_values(stream=io.StringIO(data.decode("utf-8")), interpolate=False)
        return {key.lower(): value for key, value in values.items()}
