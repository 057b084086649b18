from panser.core.models.framing import Radix


def render_radix(data: bytes, radix: Radix) -> bytes:
    """
    Render bytes as ASCII numeric literals, one per byte.

    Every literal is followed by a single space so that consecutive frames
    written back to back stay separated:

        >>> render_radix(b"\\x81\\xa4", Radix.HEXADECIMAL)
        b'81 A4 '
    """
    return "".join(f"{radix.render(byte)} " for byte in data).encode("ascii")
