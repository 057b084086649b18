from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from panser.core.errors import ConfigurationError


@dataclass(frozen=True)
class Sized:
    """4-byte big-endian unsigned length prefix before every frame."""
    PREFIX_SIZE: ClassVar[int] = 4
    MAX_LENGTH: ClassVar[int] = 2**32 - 1


@dataclass(frozen=True)
class Delimited:
    """Every frame is terminated by a single sentinel byte."""
    delimiter: int

    def __post_init__(self) -> None:
        if not 0 <= self.delimiter <= 0xFF:
            raise ConfigurationError(f"Delimiter {self.delimiter} is not a byte value")

    @property
    def sentinel(self) -> bytes:
        return bytes((self.delimiter,))


Framing = Sized | Delimited | None
"""
Framing discipline of one side of the pipeline. ``None`` means the whole
stream is a single message.
"""


class Radix(Enum):
    """Numeric notation used to render output bytes as text."""
    BINARY = "binary"
    DECIMAL = "decimal"
    HEXADECIMAL = "hexadecimal"
    OCTAL = "octal"

    @classmethod
    def parse(cls, name: str) -> "Radix":
        radix = _RADIX_ALIASES.get(name.strip().lower())
        if radix is None:
            raise ConfigurationError(
                f"Unknown radix '{name}', expected one of: bin, dec, hex, oct"
            )
        return radix

    def render(self, byte: int) -> str:
        match self:
            case Radix.BINARY:
                return format(byte, "b")
            case Radix.DECIMAL:
                return format(byte, "d")
            case Radix.HEXADECIMAL:
                return format(byte, "02X")
            case Radix.OCTAL:
                return format(byte, "o")


_RADIX_ALIASES: dict[str, Radix] = {
    "b": Radix.BINARY,
    "bin": Radix.BINARY,
    "binary": Radix.BINARY,
    "d": Radix.DECIMAL,
    "dec": Radix.DECIMAL,
    "decimal": Radix.DECIMAL,
    "h": Radix.HEXADECIMAL,
    "hex": Radix.HEXADECIMAL,
    "hexadecimal": Radix.HEXADECIMAL,
    "o": Radix.OCTAL,
    "oct": Radix.OCTAL,
    "octal": Radix.OCTAL,
}
