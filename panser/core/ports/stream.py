from typing import Protocol


class ByteSource(Protocol):
    """
    Readable end of the pipeline.

    ``read`` may return fewer bytes than requested, as soon as some are
    available, and returns an empty bytes object once the source is
    exhausted.
    """

    async def read(self, size: int) -> bytes:
        """Return up to ``size`` bytes, or b"" at end of source."""

    async def close(self) -> None:
        """Release the underlying resource."""


class ByteSink(Protocol):
    """
    Writable end of the pipeline.

    Each ``write`` call is a unit: the bytes are fully written and flushed
    before the call returns.
    """

    async def write(self, data: bytes) -> None:
        """Write and flush ``data``."""

    async def close(self) -> None:
        """Flush and release the underlying resource."""
