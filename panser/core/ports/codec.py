from typing import Protocol

from panser.core.models.value import UniversalValue


class Decoder(Protocol):
    """
    Decoding half of a codec.

    Implementations must be pure and must raise (any exception) on malformed
    input rather than return a partial value.
    """

    def decode(self, data: bytes) -> UniversalValue:
        """Decode one frame into a universal value."""


class Encoder(Protocol):
    """Encoding half of a codec."""

    def encode(self, value: UniversalValue) -> bytes:
        """Encode a universal value into one frame."""
