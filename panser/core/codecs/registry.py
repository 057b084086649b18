import logging
from enum import StrEnum

from panser.core.errors import UnknownFormat, UnsupportedFormatDirection
from panser.core.ports.codec import Decoder, Encoder


class Format(StrEnum):
    """Serialization formats known to the transcoder."""
    bincode = "Bincode"
    cbor = "CBOR"
    envy = "Envy"
    hjson = "Hjson"
    json = "JSON"
    msgpack = "Msgpack"
    pickle = "Pickle"
    toml = "TOML"
    url = "URL"
    yaml = "YAML"

    @classmethod
    def parse(cls, name: str) -> "Format":
        try:
            return cls[name.strip().lower()]
        except KeyError:
            known = ", ".join(f.value for f in cls)
            raise UnknownFormat(f"Unknown format '{name}', expected one of: {known}") from None

    @classmethod
    def from_extension(cls, extension: str) -> "Format | None":
        """Map a file extension (with or without the dot) to a format."""
        ext = extension.lstrip(".").lower()
        ext = _EXTENSION_ALIASES.get(ext, ext)
        try:
            return cls[ext]
        except KeyError:
            return None


_EXTENSION_ALIASES: dict[str, str] = {
    "mp": "msgpack",
    "mpk": "msgpack",
    "pkl": "pickle",
    "yml": "yaml",
    "env": "envy",
}


class CodecRegistry:
    """
    Resolves format names to the codec functions implementing them.

    Each format is backed by one codec object exposing ``decode`` and/or
    ``encode``. A format that cannot be read (or written) simply does not
    define the corresponding method; asking for that direction fails with
    UnsupportedFormatDirection when the pipeline is configured, before any
    frame is read.
    """
    def __init__(self) -> None:
        self._codecs: dict[Format, Decoder | Encoder] = {}
        self._logger = logging.getLogger("core.codecs.registry")

    def register(self, fmt: Format, codec: Decoder | Encoder) -> None:
        if not callable(getattr(codec, "decode", None)) and not callable(getattr(codec, "encode", None)):
            raise TypeError(f"{type(codec).__name__} implements neither decode nor encode")
        self._codecs[fmt] = codec
        self._logger.debug(f"Registered {type(codec).__name__} for {fmt}")

    @property
    def formats(self) -> list[Format]:
        return list(self._codecs)

    def decoder(self, name: str | Format) -> Decoder:
        fmt, codec = self._lookup(name)
        if not callable(getattr(codec, "decode", None)):
            raise UnsupportedFormatDirection(fmt.value, "decoding")
        return codec

    def encoder(self, name: str | Format) -> Encoder:
        fmt, codec = self._lookup(name)
        if not callable(getattr(codec, "encode", None)):
            raise UnsupportedFormatDirection(fmt.value, "encoding")
        return codec

    def can_decode(self, name: str | Format) -> bool:
        _, codec = self._lookup(name)
        return callable(getattr(codec, "decode", None))

    def can_encode(self, name: str | Format) -> bool:
        _, codec = self._lookup(name)
        return callable(getattr(codec, "encode", None))

    def _lookup(self, name: str | Format) -> tuple[Format, Decoder | Encoder]:
        fmt = name if isinstance(name, Format) else Format.parse(name)
        codec = self._codecs.get(fmt)
        if codec is None:
            raise UnknownFormat(f"No codec registered for {fmt}")
        return fmt, codec
