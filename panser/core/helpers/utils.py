import asyncio
import contextlib
import logging
import signal
import sys
import threading
from types import FrameType
from typing import Generator

SHUTDOWN_SIGNALS = (
    signal.SIGINT,
    signal.SIGTERM,
)

if sys.platform == "win32":
    SHUTDOWN_SIGNALS += (signal.SIGBREAK,)


@contextlib.contextmanager
def setup_signal_handler() -> Generator[asyncio.Event, None, None]:
    """
    Turn shutdown signals into an asyncio.Event for the duration of a run.

    The first signal only sets the event so the pipeline can stop on a frame
    boundary. A second one raises KeyboardInterrupt, which cancels the
    pipeline tasks at once.

    A write already running in a worker thread cannot be interrupted:
    asyncio.run waits for the default executor on shutdown, so when the
    reader of stdout has stalled the process only exits once that write
    completes or the reader goes away (a broken pipe ends it).
    """
    stop_event = asyncio.Event()

    if threading.current_thread() is not threading.main_thread():
        yield stop_event
        return

    received: list[int] = []

    def handle(sig: int, frame: FrameType | None) -> None:
        if received:
            raise KeyboardInterrupt
        received.append(sig)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            stop_event.set()
            return
        # The loop may be blocked in select, the self-pipe write wakes it up.
        loop.call_soon_threadsafe(stop_event.set)

    # Install temporary handlers
    original_handlers = {
        sig: signal.signal(sig, handle)
        for sig in SHUTDOWN_SIGNALS
    }

    try:
        yield stop_event
    finally:
        for sig, old in original_handlers.items():
            signal.signal(sig, old)


def setup_logging(level: str = "WARNING") -> None:
    # stdout carries the data stream, logs always go to stderr.
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
        stream=sys.stderr,
    )
