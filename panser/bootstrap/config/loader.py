import argparse
import os
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def get_version() -> str:
    try:
        return version("panser")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="panser",
        description=(
            "Transcode a stream of messages from one serialization format to another.\n\n"
            "Reads FILES (or stdin) and writes to --output (or stdout). Messages can be\n"
            "framed with a 4-byte big-endian length prefix (--sized) or a delimiter\n"
            "byte (--delimited); without framing the whole input is one message."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "files",
        metavar="FILES",
        nargs="*",
        help=(
            "Files to read instead of stdin, concatenated in order.\n"
            "Unless --from is used, the first file's extension selects the input format."
        )
    )

    parser.add_argument(
        "-f", "--from",
        dest="from_format",
        help=(
            "Input format, case insensitive.\n"
            "Values: Bincode, CBOR, Envy, Hjson, JSON, Msgpack, Pickle, TOML, URL, YAML.\n"
            "Default: JSON."
        )
    )

    parser.add_argument(
        "-t", "--to",
        dest="to_format",
        help=(
            "Output format, case insensitive.\n"
            "Values: Bincode, CBOR, Hjson, JSON, Msgpack, Pickle, TOML, URL, YAML.\n"
            "Default: Msgpack, or the --output file's extension."
        )
    )

    parser.add_argument(
        "-o", "--output",
        help="File to write instead of stdout."
    )

    parser.add_argument(
        "-r", "--radix",
        help=(
            "Write every output byte as a numeric literal followed by a space.\n"
            "Values: bin, dec, hex, oct (or b, d, h, o, or the full names).\n"
            "Delimiters are still written as raw bytes.\n\n"
            "Example:\n"
            "  echo '{\"bool\":true}' | panser -r hex\n"
            "  81 A4 62 6F 6F 6C C3"
        )
    )

    parser.add_argument(
        "-d", "--delimited",
        metavar="BYTE",
        help=(
            "Delimit input and output messages with BYTE.\n"
            "BYTE takes a radix suffix: 1010b, 10d, 0Ah and 012o are all a newline.\n"
            "Without a suffix the value is hexadecimal."
        )
    )

    parser.add_argument(
        "--delimited-input",
        metavar="BYTE",
        help="Input messages are delimited with BYTE."
    )

    parser.add_argument(
        "--delimited-output",
        metavar="BYTE",
        help="Append BYTE to every output message."
    )

    parser.add_argument(
        "-s", "--sized",
        action="store_true",
        help="Input and output messages are prefixed with a 4-byte big-endian length."
    )

    parser.add_argument(
        "--sized-input",
        action="store_true",
        help="Input messages are prefixed with a 4-byte big-endian length."
    )

    parser.add_argument(
        "--sized-output",
        action="store_true",
        help="Prefix every output message with its 4-byte big-endian length."
    )

    parser.add_argument(
        "-n", "--newline",
        action="store_true",
        help="Write a newline after the last output message."
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity, written to stderr.\n"
            "Default: WARNING, or PANSER_LOG_LEVEL."
        ),
    )

    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {get_version()}"
    )

    return parser


def parse_cli_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def get_configfile() -> Path | None:
    # Priority: ENV > default file in current working directory
    raw = os.getenv("PANSERCONFIG")

    if raw is None:
        file = Path.cwd() / "panser.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Fix or unset the PANSERCONFIG environment variable"
        )

    return file
