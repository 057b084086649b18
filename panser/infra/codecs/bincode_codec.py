import struct

from panser.core.models.value import UniversalValue


class BincodeCodec:
    """
    Encode-only Bincode codec (fixed-width integers, little-endian).

    Layout per shape:

        null          -> nothing
        bool          -> u8 (0 or 1)
        int           -> i64, or u64 above the i64 range
        float         -> f64
        str / bytes   -> u64 length || raw bytes
        list          -> u64 length || items
        dict          -> u64 length || (key || value)*

    Bincode is not self-describing: without a schema the shapes above can
    not be told apart again, so there is no ``decode``.
    """
    I64_MIN: int = -(2**63)
    I64_MAX: int = 2**63 - 1
    U64_MAX: int = 2**64 - 1

    def encode(self, value: UniversalValue) -> bytes:
        out = bytearray()
        self._write(out, value)
        return bytes(out)

    def _write(self, out: bytearray, value: UniversalValue) -> None:
        if value is None:
            return

        if isinstance(value, bool):
            out += struct.pack("<B", int(value))
        elif isinstance(value, int):
            if self.I64_MIN <= value <= self.I64_MAX:
                out += struct.pack("<q", value)
            elif self.I64_MAX < value <= self.U64_MAX:
                out += struct.pack("<Q", value)
            else:
                raise OverflowError(f"integer {value} does not fit in 64 bits")
        elif isinstance(value, float):
            out += struct.pack("<d", value)
        elif isinstance(value, str):
            self._write_bytes(out, value.encode("utf-8"))
        elif isinstance(value, bytes):
            self._write_bytes(out, value)
        elif isinstance(value, list):
            out += struct.pack("<Q", len(value))
            for item in value:
                self._write(out, item)
        elif isinstance(value, dict):
            out += struct.pack("<Q", len(value))
            for key, item in value.items():
                self._write(out, key)
                self._write(out, item)
        else:
            raise TypeError(f"Bincode cannot encode {type(value).__name__}")

    @staticmethod
    def _write_bytes(out: bytearray, data: bytes) -> None:
        out += struct.pack("<Q", len(data))
        out += data
