import logging
import struct
from collections.abc import AsyncIterator

from panser.core.errors import FrameTooLarge, FrameTruncation, IoError
from panser.core.models.framing import Delimited, Framing, Sized
from panser.core.ports.stream import ByteSource


class FrameReader:
    """
    Splits a byte source into frames according to a framing discipline.

    Bytes are pulled from the source in chunks and accumulated in an
    internal buffer until a complete frame is available, the same way for
    every discipline:

    - no framing: the whole source is one frame, yielded at end of source
      (even when empty, so an empty input still reaches the codec)
    - sized: each frame begins with a 4-byte big-endian length prefix; end
      of source is only clean on a frame boundary
    - delimited: each frame ends with the sentinel byte, which is removed;
      the sentinel is optional after the last frame

    Iteration is lazy: the source is only read when the buffer does not
    hold a complete frame, so a consumer that stops pulling applies
    backpressure all the way to the source. A reader can be iterated once.
    """
    def __init__(
        self,
        source: ByteSource,
        framing: Framing,
        chunk_size: int = 64 * 1024,
        max_frame_size: int = 64 * 1024 * 1024,
    ) -> None:
        self._source = source
        self._framing = framing
        self._chunk_size = chunk_size
        self._max_frame_size = max_frame_size
        self._buffer = bytearray()
        self._expected_length: int | None = None
        self._scan_from = 0
        self._eof = False
        self._started = False
        self._logger = logging.getLogger("core.framing.reader")

    def __aiter__(self) -> AsyncIterator[bytes]:
        if self._started:
            raise RuntimeError("FrameReader can only be iterated once")
        self._started = True
        return self._frames()

    async def _frames(self) -> AsyncIterator[bytes]:
        match self._framing:
            case None:
                while not self._eof:
                    await self._fill()
                frame = bytes(self._buffer)
                self._buffer.clear()
                self._logger.debug(f"Read unframed input of {len(frame)} bytes")
                yield frame

            case Sized():
                async for frame in self._framed(self._next_sized):
                    yield frame
                self._check_sized_boundary()

            case Delimited(delimiter=delimiter):
                async for frame in self._framed(lambda: self._next_delimited(delimiter)):
                    yield frame
                if self._buffer:
                    # The sentinel is optional on the last message.
                    frame = bytes(self._buffer)
                    self._buffer.clear()
                    self._logger.debug(f"Read final undelimited frame of {len(frame)} bytes")
                    yield frame

    async def _framed(self, next_frame) -> AsyncIterator[bytes]:
        while True:
            frame = next_frame()
            if frame is not None:
                self._logger.debug(f"Read frame of {len(frame)} bytes")
                yield frame
                continue

            if self._eof:
                return

            await self._fill()

    async def _fill(self) -> None:
        try:
            data = await self._source.read(self._chunk_size)
        except OSError as exc:
            raise IoError(exc) from exc

        if data:
            self._buffer.extend(data)
        else:
            self._eof = True

    def _next_sized(self) -> bytes | None:
        if self._expected_length is None:
            if len(self._buffer) < Sized.PREFIX_SIZE:
                return None

            # "!I" = uint32 big-endian (network order)
            self._expected_length = struct.unpack("!I", self._buffer[:Sized.PREFIX_SIZE])[0]
            del self._buffer[:Sized.PREFIX_SIZE]

            if self._expected_length > self._max_frame_size:
                raise FrameTooLarge(self._expected_length, self._max_frame_size)

        if len(self._buffer) < self._expected_length:
            return None

        payload = bytes(self._buffer[:self._expected_length])
        del self._buffer[:self._expected_length]
        self._expected_length = None
        return payload

    def _check_sized_boundary(self) -> None:
        if self._expected_length is not None:
            raise FrameTruncation(self._expected_length, len(self._buffer), "frame body")

        if self._buffer:
            raise FrameTruncation(Sized.PREFIX_SIZE, len(self._buffer), "length prefix")

    def _next_delimited(self, delimiter: int) -> bytes | None:
        index = self._buffer.find(delimiter, self._scan_from)
        if index < 0:
            # Bytes already scanned never need to be searched again.
            self._scan_from = len(self._buffer)
            if self._scan_from > self._max_frame_size:
                raise FrameTooLarge(self._scan_from, self._max_frame_size)
            return None

        if index > self._max_frame_size:
            raise FrameTooLarge(index, self._max_frame_size)

        payload = bytes(self._buffer[:index])
        del self._buffer[:index + 1]
        self._scan_from = 0
        return payload
