import io
import pickle
from typing import Any

from panser.core.models.value import UniversalValue


class _DataUnpickler(pickle.Unpickler):
    """Unpickler limited to builtin data: it never resolves a global."""
    def find_class(self, module: str, name: str) -> Any:
        raise pickle.UnpicklingError(f"global '{module}.{name}' is forbidden")


class PickleCodec:
    """
    Pickle codec for plain data.

    Payloads are written with protocol 3, readable by any Python 3. Loading
    refuses every class or function reference, so untrusted input can only
    produce builtin containers and scalars.
    """
    PROTOCOL: int = 3

    def encode(self, value: UniversalValue) -> bytes:
        return pickle.dumps(value, protocol=self.PROTOCOL)

    def decode(self, data: bytes) -> Any:
        return _DataUnpickler(io.BytesIO(data)).load()
