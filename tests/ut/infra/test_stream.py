import asyncio
import io
import os
import threading

import pytest

from panser.infra.stream import FileByteSink, FileByteSource, PipeByteSource, open_byte_source


async def read_all(source, size: int = 4) -> bytes:
    chunks = []
    while data := await source.read(size):
        chunks.append(data)
    return b"".join(chunks)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_in_memory_file_is_read_in_a_thread():
    source = await open_byte_source(io.BytesIO(b"hello world"))

    assert isinstance(source, FileByteSource)
    assert await read_all(source) == b"hello world"


@pytest.mark.ut
@pytest.mark.asyncio
async def test_regular_file_source(tmp_path):
    path = tmp_path / "input.json"
    path.write_bytes(b'{"a":1}')
    file = open(path, "rb")

    source = await open_byte_source(file)
    data = await read_all(source)
    await source.close()

    assert isinstance(source, FileByteSource)
    assert data == b'{"a":1}'
    assert file.closed


@pytest.mark.ut
@pytest.mark.asyncio
async def test_borrowed_file_stays_open():
    file = io.BytesIO(b"x")
    source = FileByteSource(file, close_file=False)

    await source.close()

    assert not file.closed


@pytest.mark.ut
@pytest.mark.asyncio
async def test_pipe_is_read_through_the_event_loop():
    read_fd, write_fd = os.pipe()
    os.write(write_fd, b"piped data")
    os.close(write_fd)

    source = await open_byte_source(open(read_fd, "rb"))
    try:
        assert isinstance(source, PipeByteSource)
        assert await read_all(source, size=1024) == b"piped data"
    finally:
        await source.close()


@pytest.mark.ut
@pytest.mark.asyncio
async def test_file_sink_writes_and_flushes():
    buffer = io.BytesIO()
    sink = FileByteSink(buffer, close_file=False)

    await sink.write(b"one")
    await sink.write(b"two")
    await sink.close()

    assert buffer.getvalue() == b"onetwo"
    assert not buffer.closed


@pytest.mark.ut
@pytest.mark.asyncio
async def test_file_sink_closes_owned_file(tmp_path):
    file = open(tmp_path / "out.bin", "wb")
    sink = FileByteSink(file)

    await sink.write(b"\x00\x01")
    await sink.close()
    await sink.close()

    assert file.closed
    assert (tmp_path / "out.bin").read_bytes() == b"\x00\x01"


@pytest.mark.ut
@pytest.mark.asyncio
async def test_pipe_end_restores_blocking_mode():
    read_fd, write_fd = os.pipe()
    shared_fd = os.dup(read_fd)
    os.write(write_fd, b"x")
    os.close(write_fd)

    try:
        source = await open_byte_source(open(read_fd, "rb"))
        assert not os.get_blocking(shared_fd)

        assert await read_all(source, size=1024) == b"x"
        await source.close()

        assert os.get_blocking(shared_fd)
    finally:
        os.close(shared_fd)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_terminal_blocking_mode_is_restored_on_close():
    master_fd, slave_fd = os.openpty()
    # stdout of an interactive run shares the terminal's file description
    stdout_fd = os.dup(slave_fd)

    try:
        source = await open_byte_source(open(slave_fd, "rb"))
        assert isinstance(source, PipeByteSource)
        assert not os.get_blocking(stdout_fd)

        os.write(master_fd, b"hello\n")
        assert await asyncio.wait_for(source.read(1024), 5) == b"hello\n"

        await source.close()
        assert os.get_blocking(stdout_fd)
    finally:
        os.close(stdout_fd)
        os.close(master_fd)


@pytest.mark.ut
@pytest.mark.asyncio
async def test_file_sink_writes_whole_frames_on_non_blocking_descriptor():
    read_fd, write_fd = os.pipe()
    os.set_blocking(write_fd, False)
    received = bytearray()

    def drain():
        while chunk := os.read(read_fd, 65536):
            received.extend(chunk)

    reader = threading.Thread(target=drain)
    reader.start()

    # far larger than the pipe buffer
    frame = b"81 A4 " * 100_000
    sink = FileByteSink(open(write_fd, "wb"))
    try:
        await sink.write(frame)
        await sink.close()
        reader.join(5)
    finally:
        os.close(read_fd)

    assert bytes(received) == frame
