import asyncio
import logging

from panser.core.codecs.registry import CodecRegistry, Format
from panser.core.errors import Interrupted, PanserError
from panser.core.framing.reader import FrameReader
from panser.core.framing.writer import FrameWriter
from panser.core.models.config import PipelineConfig
from panser.core.models.state import ErrorCell, PipelineState, RunOutcome
from panser.core.pipeline.channel import FrameChannel
from panser.core.pipeline.source import ConcatByteSource
from panser.core.transcode.transcoder import Transcoder


class Pipeline:
    """
    Orchestrates one transcoding run.

    The run is split into two asyncio tasks connected by a single-slot
    FrameChannel:

    - the producer iterates a FrameReader over the concatenated sources and
      hands each frame over, waiting for the slot to drain before reading
      the next frame
    - the consumer takes frames in order, transcodes them and writes them
      through the FrameWriter, one complete envelope at a time

    A slow sink therefore throttles the reader, and at most one frame is
    read ahead of the one being written.

    Codec directions are resolved when the Pipeline is built, so an
    unsupported format fails before any byte is read. At run time the first
    error reported by either task is kept: a failing writer cancels the
    reader, a failing reader closes the channel so frames it completed
    before the failure are still written. Setting the optional stop event
    cancels the reader the same way and fails the run with Interrupted.

    State: idle -> running -> completed | failed.
    """
    def __init__(self, config: PipelineConfig, registry: CodecRegistry) -> None:
        self._config = config
        source_format = Format.parse(config.source_format)
        target_format = Format.parse(config.target_format)
        self._transcoder = Transcoder(
            decoder=registry.decoder(source_format),
            encoder=registry.encoder(target_format),
            source_format=source_format.value,
            target_format=target_format.value,
        )
        self._state = PipelineState.idle
        self._errors = ErrorCell()
        self._frames_read = 0
        self._frames_written = 0
        self._logger = logging.getLogger("core.pipeline.coordinator")

    @property
    def state(self) -> PipelineState:
        return self._state

    async def run(self, stop_event: asyncio.Event | None = None) -> RunOutcome:
        if self._state is not PipelineState.idle:
            raise RuntimeError(f"Pipeline cannot be run from state {self._state.value}")

        config = self._config
        self._state = PipelineState.running
        self._logger.info(
            f"Transcoding {config.source_format} -> {config.target_format} "
            f"(input framing: {config.input_framing}, output framing: {config.output_framing})"
        )

        source = ConcatByteSource(config.sources)
        reader = FrameReader(
            source,
            config.input_framing,
            chunk_size=config.chunk_size,
            max_frame_size=config.max_frame_size,
        )
        writer = FrameWriter(config.sink, config.output_framing, config.radix)
        channel = FrameChannel()

        producer = asyncio.create_task(self._produce(reader, channel), name="panser-reader")
        consumer = asyncio.create_task(
            self._consume(writer, channel, producer), name="panser-writer"
        )
        watcher = None
        if stop_event is not None:
            watcher = asyncio.create_task(self._watch(stop_event, producer), name="panser-stop")

        try:
            await asyncio.gather(producer, consumer, return_exceptions=True)
        finally:
            if watcher is not None:
                watcher.cancel()
            await self._release(source)

        return self._finish()

    async def _produce(self, reader: FrameReader, channel: FrameChannel) -> None:
        try:
            async for frame in reader:
                self._frames_read += 1
                await channel.put(frame)
                await channel.drain()
            self._logger.debug(f"End of input after {self._frames_read} frame(s)")
        except asyncio.CancelledError:
            self._logger.debug("Reader cancelled")
        except PanserError as exc:
            self._errors.record(exc)
        except Exception as exc:
            self._logger.debug("Unexpected reader failure", exc_info=exc)
            self._errors.record(PanserError(str(exc) or type(exc).__name__))
        finally:
            channel.close()

    async def _consume(
        self,
        writer: FrameWriter,
        channel: FrameChannel,
        producer: asyncio.Task[None],
    ) -> None:
        try:
            while (frame := await channel.get()) is not None:
                payload = self._transcoder.transcode(frame, self._frames_written)
                await writer.write(payload)
                self._frames_written += 1

            if self._config.trailing_newline and self._errors.error is None:
                await writer.write_newline()
        except PanserError as exc:
            self._errors.record(exc)
            producer.cancel()
        except Exception as exc:
            self._logger.debug("Unexpected writer failure", exc_info=exc)
            self._errors.record(PanserError(str(exc) or type(exc).__name__))
            producer.cancel()

    async def _watch(self, stop_event: asyncio.Event, producer: asyncio.Task[None]) -> None:
        await stop_event.wait()
        if self._errors.record(Interrupted()):
            self._logger.info("Stop requested, finishing the frame in flight")
        producer.cancel()

    async def _release(self, source: ConcatByteSource) -> None:
        try:
            await source.close()
        except OSError as exc:
            self._logger.warning(f"Failed to close input: {exc}")

        try:
            await self._config.sink.close()
        except OSError as exc:
            self._logger.warning(f"Failed to close output: {exc}")

    def _finish(self) -> RunOutcome:
        error = self._errors.error
        if error is None:
            self._state = PipelineState.completed
            self._logger.info(f"Completed: {self._frames_written} frame(s) written")
        else:
            self._state = PipelineState.failed
            self._logger.info(f"Failed after {self._frames_written} frame(s): {error.message}")

        return RunOutcome(
            state=self._state,
            error=error,
            frames_read=self._frames_read,
            frames_written=self._frames_written,
        )
