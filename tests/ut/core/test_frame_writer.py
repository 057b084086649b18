import logging

import pytest

from tests.fake.fake_stream import BrokenSink

from panser.core.errors import ConfigurationError, FrameTooLarge, IoError
from panser.core.framing.writer import FrameWriter
from panser.core.models.framing import Delimited, Radix, Sized
from panser.core.transcode.radix import render_radix

BOOL_MSGPACK = b"\x81\xa4bool\xc3"


@pytest.mark.ut
@pytest.mark.parametrize(
    "radix,expected",
    [
        (Radix.HEXADECIMAL, b"81 A4 62 6F 6F 6C C3 "),
        (Radix.DECIMAL, b"129 164 98 111 111 108 195 "),
        (Radix.OCTAL, b"201 244 142 157 157 154 303 "),
        (Radix.BINARY, b"10000001 10100100 1100010 1101111 1101111 1101100 11000011 "),
    ],
)
def test_render_radix(radix, expected):
    assert render_radix(BOOL_MSGPACK, radix) == expected


@pytest.mark.ut
def test_render_radix_pads_hex_only():
    assert render_radix(b"\x00\x07", Radix.HEXADECIMAL) == b"00 07 "
    assert render_radix(b"\x00\x07", Radix.BINARY) == b"0 111 "
    assert render_radix(b"", Radix.DECIMAL) == b""


@pytest.mark.ut
@pytest.mark.parametrize(
    "name,radix",
    [("hex", Radix.HEXADECIMAL), ("H", Radix.HEXADECIMAL), ("bin", Radix.BINARY),
     ("decimal", Radix.DECIMAL), ("oct", Radix.OCTAL)],
)
def test_radix_parse(name, radix):
    assert Radix.parse(name) is radix


@pytest.mark.ut
def test_radix_parse_rejects_unknown_name():
    with pytest.raises(ConfigurationError):
        Radix.parse("base64")


@pytest.mark.ut
@pytest.mark.asyncio
async def test_unframed_output_is_the_payload(sink):
    await FrameWriter(sink, None).write(b"payload")

    assert sink.writes == [b"payload"]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_sized_output_has_big_endian_prefix(sink):
    writer = FrameWriter(sink, Sized())
    await writer.write(b"abc")
    await writer.write(b"")

    assert sink.writes == [b"\x00\x00\x00\x03abc", b"\x00\x00\x00\x00"]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_delimited_output_appends_sentinel(sink):
    writer = FrameWriter(sink, Delimited(0x0A))
    await writer.write(b"one")
    await writer.write(b"two")

    assert sink.buffer == b"one\ntwo\n"


@pytest.mark.ut
@pytest.mark.asyncio
async def test_sized_output_in_radix_renders_the_prefix(sink):
    writer = FrameWriter(sink, Sized(), Radix.HEXADECIMAL)
    await writer.write(BOOL_MSGPACK)

    assert sink.buffer == b"00 00 00 07 81 A4 62 6F 6F 6C C3 "


@pytest.mark.ut
@pytest.mark.asyncio
async def test_delimited_output_in_radix_keeps_raw_sentinel(sink):
    writer = FrameWriter(sink, Delimited(0x0A), Radix.DECIMAL)
    await writer.write(b"\x01\x02")
    await writer.write(b"\xff")

    assert sink.buffer == b"1 2 \n255 \n"


@pytest.mark.ut
@pytest.mark.asyncio
async def test_newline_is_never_rendered(sink):
    writer = FrameWriter(sink, None, Radix.BINARY)
    await writer.write(b"\x01")
    await writer.write_newline()

    assert sink.buffer == b"1 \n"


@pytest.mark.ut
@pytest.mark.asyncio
async def test_delimiter_inside_payload_warns_once(sink, caplog):
    writer = FrameWriter(sink, Delimited(0x00))

    with caplog.at_level(logging.WARNING, logger="core.framing.writer"):
        await writer.write(b"a\x00b")
        await writer.write(b"c\x00d")

    assert sink.buffer == b"a\x00b\x00c\x00d\x00"
    warnings = [r for r in caplog.records if r.name == "core.framing.writer"]
    assert len(warnings) == 1
    assert "0x00" in warnings[0].getMessage()


@pytest.mark.ut
def test_sized_envelope_rejects_oversized_payload(sink, monkeypatch):
    monkeypatch.setattr(Sized, "MAX_LENGTH", 3)
    writer = FrameWriter(sink, Sized())

    with pytest.raises(FrameTooLarge) as exc:
        writer.envelope(b"abcd")

    assert exc.value.code == 8


@pytest.mark.ut
@pytest.mark.asyncio
async def test_sink_failure_is_an_io_error():
    writer = FrameWriter(BrokenSink(), Delimited(0x0A))

    with pytest.raises(IoError) as exc:
        await writer.write(b"x")

    assert exc.value.code == 3
    assert "Broken pipe" in exc.value.message
