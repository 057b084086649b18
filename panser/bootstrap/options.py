import argparse
import logging
from pathlib import Path

from panser.bootstrap.config.settings import PanserSettings
from panser.core.codecs.registry import Format
from panser.core.errors import ConfigurationError
from panser.core.framing.delimiter import parse_delimiter
from panser.core.models.framing import Delimited, Framing, Radix, Sized

logger = logging.getLogger("bootstrap.options")


def resolve_framing(args: argparse.Namespace) -> tuple[Framing, Framing]:
    """
    Turn the framing flags into (input framing, output framing).

    ``--delimited`` and ``--sized`` set both sides and cannot be combined
    with any other framing flag; each side accepts at most one of sized or
    delimited.
    """
    if args.delimited is not None and (
        args.sized or args.sized_input or args.sized_output
        or args.delimited_input is not None or args.delimited_output is not None
    ):
        raise ConfigurationError("--delimited cannot be combined with other framing options")

    if args.sized and (
        args.sized_input or args.sized_output
        or args.delimited_input is not None or args.delimited_output is not None
    ):
        raise ConfigurationError("--sized cannot be combined with other framing options")

    if args.sized_input and args.delimited_input is not None:
        raise ConfigurationError("--sized-input and --delimited-input are mutually exclusive")

    if args.sized_output and args.delimited_output is not None:
        raise ConfigurationError("--sized-output and --delimited-output are mutually exclusive")

    delimited_input = args.delimited_input if args.delimited is None else args.delimited
    delimited_output = args.delimited_output if args.delimited is None else args.delimited

    return (
        _framing(args.sized or args.sized_input, delimited_input),
        _framing(args.sized or args.sized_output, delimited_output),
    )


def _framing(sized: bool, delimiter: str | None) -> Framing:
    if delimiter is not None:
        return Delimited(parse_delimiter(delimiter))
    if sized:
        return Sized()
    return None


def resolve_formats(args: argparse.Namespace, settings: PanserSettings) -> tuple[str, str]:
    """
    Pick (source format, target format).

    Explicit options win; otherwise the first input file's extension and
    the output file's extension are used, then the configured defaults.
    """
    source = args.from_format
    if source is None:
        source = settings.default_from
        if args.files:
            inferred = _infer(args.files[0])
            if inferred is not None:
                source = inferred.name
            extensions = {Path(f).suffix.lower() for f in args.files}
            if len(extensions) > 1:
                logger.warning(
                    f"Input files have different extensions, reading all of them as {source}"
                )

    target = args.to_format
    if target is None:
        target = settings.default_to
        if args.output:
            inferred = _infer(args.output)
            if inferred is not None:
                target = inferred.name

    return Format.parse(source).name, Format.parse(target).name


def _infer(path: str) -> Format | None:
    suffix = Path(path).suffix
    if not suffix:
        return None
    return Format.from_extension(suffix)


def resolve_radix(args: argparse.Namespace) -> Radix | None:
    if args.radix is None:
        return None
    return Radix.parse(args.radix)
