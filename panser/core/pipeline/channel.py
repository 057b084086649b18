import asyncio


class FrameChannel:
    """
    Single-slot hand-off between the frame reader task and the writer task.

    The slot holds at most one frame. ``put`` waits for the slot to be
    free, ``get`` waits for it to be filled, and ``drain`` lets the
    producer wait until its last frame has been taken before it reads the
    next one. Together they bound read-ahead to one frame and preserve
    frame order.

    Once ``close`` is called, ``get`` returns the frame still in the slot,
    if any, then None.
    """

    def __init__(self) -> None:
        self._slot: bytes | None = None
        self._filled = asyncio.Event()
        self._free = asyncio.Event()
        self._free.set()
        self._closed = False

    async def put(self, frame: bytes) -> None:
        if self._closed:
            raise RuntimeError("Cannot put a frame on a closed channel")
        await self._free.wait()
        self._slot = frame
        self._free.clear()
        self._filled.set()

    async def get(self) -> bytes | None:
        await self._filled.wait()
        frame, self._slot = self._slot, None
        if frame is None:
            # Closed and empty: keep waking any further getter.
            return None
        if not self._closed:
            self._filled.clear()
        self._free.set()
        return frame

    async def drain(self) -> None:
        """Block until the slot is free again."""
        await self._free.wait()

    def close(self) -> None:
        self._closed = True
        self._filled.set()
