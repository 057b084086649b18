import argparse
import asyncio
import sys
from collections.abc import Sequence
from typing import Any

from panser.bootstrap.config.loader import parse_cli_args
from panser.bootstrap.deps import get_registry, get_settings
from panser.bootstrap.options import resolve_formats, resolve_framing, resolve_radix
from panser.core.errors import Interrupted, IoError, PanserError
from panser.core.helpers.utils import setup_logging, setup_signal_handler
from panser.core.models.config import PipelineConfig
from panser.core.models.state import RunOutcome
from panser.core.pipeline.coordinator import Pipeline
from panser.core.ports.stream import ByteSink, ByteSource
from panser.infra.stream import FileByteSink, open_byte_source

ERROR_COLOR = "\033[38;5;9m"  # bright red
RESET_COLOR = "\033[0m"


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_cli_args(argv)
    settings = get_settings()

    setup_logging(args.log_level or settings.log_level)

    try:
        input_framing, output_framing = resolve_framing(args)
        source_format, target_format = resolve_formats(args, settings)
        radix = resolve_radix(args)

        registry = get_registry()
        # Fail on an unsupported direction before the output file is created.
        registry.decoder(source_format)
        registry.encoder(target_format)

        options = dict(
            source_format=source_format,
            target_format=target_format,
            input_framing=input_framing,
            output_framing=output_framing,
            radix=radix,
            trailing_newline=args.newline,
            chunk_size=settings.chunk_size,
            max_frame_size=settings.max_frame_size,
        )

        with setup_signal_handler() as stop_event:
            outcome = asyncio.run(transcode(args, options, stop_event))
    except PanserError as ex:
        report(ex)
        raise SystemExit(ex.code)
    except KeyboardInterrupt:
        raise SystemExit(Interrupted.code)

    if outcome.error is not None:
        report(outcome.error)
    raise SystemExit(outcome.exit_code)


async def transcode(
    args: argparse.Namespace,
    options: dict[str, Any],
    stop_event: asyncio.Event,
) -> RunOutcome:
    sources = await open_sources(args.files)
    try:
        sink = open_sink(args.output)
    except OSError as exc:
        for source in sources:
            await source.close()
        raise IoError(exc) from exc

    pipeline = Pipeline(
        PipelineConfig(sources=sources, sink=sink, **options),
        get_registry(),
    )
    return await pipeline.run(stop_event)


async def open_sources(files: list[str]) -> tuple[ByteSource, ...]:
    if not files:
        return (await open_byte_source(sys.stdin.buffer, close_file=False),)

    opened = []
    try:
        for path in files:
            opened.append(open(path, "rb"))
    except OSError as exc:
        for file in opened:
            file.close()
        raise IoError(exc) from exc

    return tuple([await open_byte_source(file) for file in opened])


def open_sink(output: str | None) -> ByteSink:
    if output is None:
        return FileByteSink(sys.stdout.buffer, close_file=False)
    return FileByteSink(open(output, "wb"))


def report(error: PanserError) -> None:
    tag = f"Error[{error.code}] ({error.kind})"
    if sys.stderr.isatty():
        tag = f"{ERROR_COLOR}{tag}{RESET_COLOR}"
    print(f"{tag}: {error.message}", file=sys.stderr)


if __name__ == "__main__":
    main()
