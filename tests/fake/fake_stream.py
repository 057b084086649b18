import asyncio


class FakeSource:
    """
    In-memory ByteSource delivering a fixed list of chunks.

    Each ``read`` returns at most the next chunk (split further when the
    requested size is smaller), then b"" forever. ``reads`` counts the
    reads that returned data.
    """

    def __init__(self, *chunks: bytes) -> None:
        self._chunks = [bytes(c) for c in chunks if c]
        self.reads = 0
        self.closed = False

    async def read(self, size: int) -> bytes:
        await asyncio.sleep(0)
        if self.closed:
            raise ValueError("read from a closed source")
        if not self._chunks:
            return b""

        chunk = self._chunks[0]
        data, rest = chunk[:size], chunk[size:]
        if rest:
            self._chunks[0] = rest
        else:
            self._chunks.pop(0)

        self.reads += 1
        return data

    async def close(self) -> None:
        self.closed = True


class BlockingSource:
    """ByteSource that never delivers data, like an idle interactive stdin."""

    def __init__(self) -> None:
        self.closed = False

    async def read(self, size: int) -> bytes:
        await asyncio.Event().wait()
        return b""

    async def close(self) -> None:
        self.closed = True


class FailingSource:
    """ByteSource whose reads fail with an OS error."""

    async def read(self, size: int) -> bytes:
        raise OSError(5, "Input/output error")

    async def close(self) -> None:
        pass


class FakeSink:
    """
    In-memory ByteSink recording every write as a separate unit.

    ``delay`` makes every write slow, ``on_write`` is called with the write
    index before the data is recorded.
    """

    def __init__(self, delay: float = 0.0, on_write=None) -> None:
        self.writes: list[bytes] = []
        self.closed = False
        self._delay = delay
        self._on_write = on_write

    @property
    def buffer(self) -> bytes:
        return b"".join(self.writes)

    async def write(self, data: bytes) -> None:
        if self._on_write is not None:
            self._on_write(len(self.writes))
        await asyncio.sleep(self._delay)
        self.writes.append(bytes(data))

    async def close(self) -> None:
        self.closed = True


class BrokenSink(FakeSink):
    """ByteSink whose downstream reader went away."""

    async def write(self, data: bytes) -> None:
        raise BrokenPipeError(32, "Broken pipe")
