class PanserError(Exception):
    """
    Base class for every failure surfaced to the user.

    Each subclass carries a stable numeric ``code`` that doubles as the
    process exit status, and a short ``kind`` label used when the error is
    printed. The message must stay human readable: internal tracebacks are
    only ever sent to the debug log.
    """
    code: int = 2
    kind: str = "Generic"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(PanserError):
    kind = "Configuration"


class DelimiterParseError(ConfigurationError):
    code = 4
    kind = "Delimiter"


class UnknownFormat(ConfigurationError):
    kind = "Format"


class UnsupportedFormatDirection(ConfigurationError):
    code = 5
    kind = "Format direction"

    def __init__(self, format_name: str, direction: str) -> None:
        self.format_name = format_name
        self.direction = direction
        super().__init__(f"{format_name} does not support {direction}")


class IoError(PanserError):
    code = 3
    kind = "IO"

    def __init__(self, cause: OSError) -> None:
        self.cause = cause
        message = cause.strerror or str(cause)
        if cause.filename is not None:
            message = f"{message}: '{cause.filename}'"
        super().__init__(message)


class FrameTruncation(PanserError):
    code = 6
    kind = "Truncated frame"

    def __init__(self, expected: int, received: int, where: str) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"End of input inside the {where}: expected {expected} byte(s), got {received}"
        )


class FrameTooLarge(PanserError):
    code = 8
    kind = "Frame size"

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Frame of {size} bytes exceeds the limit of {limit} bytes")


class TranscodeError(PanserError):
    """Frame-scoped codec failure, raised by the Transcoder."""
    direction: str = ""

    def __init__(self, format_name: str, frame_index: int, cause: BaseException) -> None:
        self.format_name = format_name
        self.frame_index = frame_index
        self.cause = cause
        detail = str(cause) or type(cause).__name__
        super().__init__(
            f"Frame #{frame_index}: {format_name} {self.direction} failed: {detail}"
        )


class DecodeError(TranscodeError):
    code = 1
    kind = "Decode"
    direction = "decoding"


class EncodeError(TranscodeError):
    code = 7
    kind = "Encode"
    direction = "encoding"


class Interrupted(PanserError):
    code = 130
    kind = "Interrupted"

    def __init__(self) -> None:
        super().__init__("Stopped before the end of the input")
