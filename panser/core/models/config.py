from dataclasses import dataclass

from panser.core.models.framing import Framing, Radix
from panser.core.ports.stream import ByteSink, ByteSource


@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable configuration of one transcoding run.

    It is assembled (and validated) before any byte is read and is owned by
    the Pipeline for the duration of the run.
    """
    sources: tuple[ByteSource, ...]
    """
    Readable byte sources, consumed in order as one concatenated stream.
    """

    sink: ByteSink
    """
    Writable destination of the transcoded frames.
    """

    source_format: str
    """
    Case-insensitive name of the input format, e.g. "json".
    """

    target_format: str
    """
    Case-insensitive name of the output format, e.g. "msgpack".
    """

    input_framing: Framing = None
    """
    How message boundaries are marked in the input stream.
    """

    output_framing: Framing = None
    """
    How message boundaries are marked in the output stream.
    """

    radix: Radix | None = None
    """
    When set, output bytes are written as space-separated numeric literals.
    """

    trailing_newline: bool = False
    """
    Write a single 0x0A byte after the last frame of a successful run.
    """

    chunk_size: int = 64 * 1024  # 64KB
    """
    Maximum number of bytes requested from a source per read.
    """

    max_frame_size: int = 64 * 1024 * 1024  # 64MB
    """
    Largest sized or delimited input frame accepted before the run is aborted.
    Protects against runaway buffering on a corrupt frame boundary.
    """
