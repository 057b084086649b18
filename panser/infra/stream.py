import asyncio
import io
import logging
import os
import select
import stat
from typing import BinaryIO


class FileByteSource:
    """
    Byte source over a regular file (or any blocking binary file object).

    Reads run in a worker thread so the event loop keeps serving the writer
    task. ``read1`` is preferred when available: it returns as soon as some
    bytes are buffered instead of waiting for a full chunk.
    """
    def __init__(self, file: BinaryIO, close_file: bool = True) -> None:
        self._file = file
        self._close_file = close_file
        self._read = getattr(file, "read1", file.read)

    async def read(self, size: int) -> bytes:
        return await asyncio.to_thread(self._read, size)

    async def close(self) -> None:
        if self._close_file and not self._file.closed:
            self._file.close()


class _BlockingRestoreProtocol(asyncio.StreamReaderProtocol):
    """
    StreamReaderProtocol that puts the descriptor back in its original
    blocking mode before the transport closes it.

    The event loop switches the open file description to O_NONBLOCK. On a
    terminal or a socket that description is usually shared with stdout,
    and with the user's shell once the process exits.
    """
    def __init__(self, reader: asyncio.StreamReader, fd: int, blocking: bool) -> None:
        super().__init__(reader)
        self._fd = fd
        self._blocking = blocking
        self.lost = asyncio.Event()

    def connection_lost(self, exc: Exception | None) -> None:
        try:
            os.set_blocking(self._fd, self._blocking)
        except OSError as err:
            logging.getLogger("infra.stream").debug(f"Cannot restore blocking mode: {err}")
        super().connection_lost(exc)
        self.lost.set()


class PipeByteSource:
    """
    Byte source over a pipe, socket or terminal, read without blocking the
    loop through an asyncio StreamReader.

    Interactive input is delivered as soon as it arrives, and a pending
    read can be cancelled cleanly. The descriptor's blocking mode is
    restored when the source reaches its end or is closed.
    """
    def __init__(
        self,
        reader: asyncio.StreamReader,
        transport: asyncio.ReadTransport,
        protocol: _BlockingRestoreProtocol,
    ) -> None:
        self._reader = reader
        self._transport = transport
        self._protocol = protocol

    @classmethod
    async def connect(cls, file: BinaryIO) -> "PipeByteSource":
        loop = asyncio.get_running_loop()
        fd = file.fileno()
        reader = asyncio.StreamReader()
        protocol = _BlockingRestoreProtocol(reader, fd, os.get_blocking(fd))
        transport, _ = await loop.connect_read_pipe(lambda: protocol, file)
        return cls(reader, transport, protocol)

    async def read(self, size: int) -> bytes:
        return await self._reader.read(size)

    async def close(self) -> None:
        self._transport.close()
        await self._protocol.lost.wait()


async def open_byte_source(file: BinaryIO, close_file: bool = True) -> FileByteSource | PipeByteSource:
    """
    Wrap a binary file object in the byte source suited to what it is.

    Pipes, sockets and character devices are read through the event loop;
    regular files and in-memory buffers through a worker thread. A pipe is
    always closed with its source, whatever ``close_file`` says.
    """
    try:
        mode = os.fstat(file.fileno()).st_mode
    except (io.UnsupportedOperation, AttributeError, OSError):
        return FileByteSource(file, close_file)

    if stat.S_ISFIFO(mode) or stat.S_ISSOCK(mode) or stat.S_ISCHR(mode):
        try:
            return await PipeByteSource.connect(file)
        except (ValueError, OSError) as exc:
            logging.getLogger("infra.stream").debug(
                f"Falling back to threaded reads: {exc}"
            )

    return FileByteSource(file, close_file)


class FileByteSink:
    """
    Byte sink over a binary file object (stdout or a file).

    Each write is performed and flushed in a worker thread as one unit, so
    a slow downstream consumer blocks only the writer task, which in turn
    throttles the reader.

    The descriptor may be in non-blocking mode, typically a terminal or a
    socket shared with a stdin read through the event loop. A write is then
    resumed whenever the descriptor becomes writable again, so a frame is
    never left half written.
    """
    def __init__(self, file: BinaryIO, close_file: bool = True) -> None:
        self._file = file
        self._close_file = close_file

    async def write(self, data: bytes) -> None:
        await asyncio.to_thread(self._write_all, data)

    async def close(self) -> None:
        if self._file.closed:
            return
        await asyncio.to_thread(self._flush)
        if self._close_file:
            self._file.close()

    def _write_all(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            try:
                written = self._file.write(view)
            except BlockingIOError as exc:
                written = exc.characters_written
                self._wait_writable()
            # Unbuffered files return None when nothing could be written.
            if written is None:
                self._wait_writable()
                continue
            view = view[written:]
        self._flush()

    def _flush(self) -> None:
        while True:
            try:
                self._file.flush()
                return
            except BlockingIOError:
                self._wait_writable()

    def _wait_writable(self) -> None:
        select.select([], [self._file.fileno()], [])
