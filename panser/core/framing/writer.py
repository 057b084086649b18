import logging
import struct

from panser.core.errors import FrameTooLarge, IoError
from panser.core.models.framing import Delimited, Framing, Radix, Sized
from panser.core.ports.stream import ByteSink
from panser.core.transcode.radix import render_radix


class FrameWriter:
    """
    Wraps transcoded payloads in their output envelope and writes them.

    A frame is assembled completely (length prefix, payload, delimiter) and
    handed to the sink in one write, so an interrupted run never leaves a
    partial envelope behind.

    When a radix is configured the length prefix and the payload are written
    as numeric literals; the delimiter and the trailing newline are always
    written as raw bytes so line-oriented consoles keep working.
    """
    def __init__(
        self,
        sink: ByteSink,
        framing: Framing,
        radix: Radix | None = None,
    ) -> None:
        self._sink = sink
        self._framing = framing
        self._radix = radix
        self._delimiter_warned = False
        self._logger = logging.getLogger("core.framing.writer")

    def envelope(self, payload: bytes) -> bytes:
        match self._framing:
            case None:
                return self._render(payload)

            case Sized():
                if len(payload) > Sized.MAX_LENGTH:
                    raise FrameTooLarge(len(payload), Sized.MAX_LENGTH)
                # "!I" = uint32 big-endian (network order)
                return self._render(struct.pack("!I", len(payload)) + payload)

            case Delimited(delimiter=delimiter) as framing:
                if delimiter in payload and not self._delimiter_warned:
                    self._delimiter_warned = True
                    self._logger.warning(
                        f"Output payload contains the delimiter byte 0x{delimiter:02X}, "
                        "downstream readers will split it"
                    )
                return self._render(payload) + framing.sentinel

    async def write(self, payload: bytes) -> None:
        frame = self.envelope(payload)
        await self._write(frame)

    async def write_newline(self) -> None:
        await self._write(b"\n")

    async def _write(self, data: bytes) -> None:
        try:
            await self._sink.write(data)
        except OSError as exc:
            raise IoError(exc) from exc

    def _render(self, data: bytes) -> bytes:
        if self._radix is None:
            return data
        return render_radix(data, self._radix)
