import string

from panser.core.errors import DelimiterParseError

_RADIX_SUFFIXES: dict[str, tuple[int, str]] = {
    "b": (2, "01"),
    "d": (10, string.digits),
    "h": (16, string.hexdigits),
    "o": (8, string.octdigits),
}


def parse_delimiter(token: str) -> int:
    """
    Convert a human-written byte notation into a byte value.

    The token is a run of digits with an optional, case-insensitive radix
    suffix: ``1010b`` (binary), ``10d`` (decimal), ``0Ah`` (hexadecimal) or
    ``012o`` (octal) all denote the ASCII newline. Without a suffix the
    digits are read as hexadecimal. A trailing ``b`` or ``d`` is always a
    suffix, so ``0Bh`` must be used for the hexadecimal value 0x0B.
    """
    text = token.strip()
    if not text:
        raise DelimiterParseError("Delimiter must not be empty")

    suffix = text[-1].lower()
    if suffix in _RADIX_SUFFIXES:
        digits = text[:-1]
        base, alphabet = _RADIX_SUFFIXES[suffix]
    else:
        digits = text
        base, alphabet = _RADIX_SUFFIXES["h"]

    if not digits or any(c not in alphabet for c in digits):
        raise DelimiterParseError(
            f"Invalid delimiter '{token}': expected base-{base} digits"
        )

    value = int(digits, base)
    if value > 0xFF:
        raise DelimiterParseError(
            f"Invalid delimiter '{token}': {value} does not fit in a byte"
        )

    return value
