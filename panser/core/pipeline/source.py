import logging
from collections.abc import Iterable

from panser.core.ports.stream import ByteSource


class ConcatByteSource:
    """
    Presents several byte sources as one stream, read in the given order.

    Framing is applied across the concatenation: a frame may start in one
    source and end in the next. Each underlying source is closed as soon as
    it is exhausted.
    """
    def __init__(self, sources: Iterable[ByteSource]) -> None:
        self._sources = list(sources)
        self._index = 0
        self._logger = logging.getLogger("core.pipeline.source")

    async def read(self, size: int) -> bytes:
        while self._index < len(self._sources):
            data = await self._sources[self._index].read(size)
            if data:
                return data

            self._logger.debug(f"Input source #{self._index} exhausted")
            await self._sources[self._index].close()
            self._index += 1

        return b""

    async def close(self) -> None:
        for source in self._sources[self._index:]:
            await source.close()
        self._index = len(self._sources)
