import logging

from panser.core.errors import DecodeError, EncodeError
from panser.core.models.value import to_universal
from panser.core.ports.codec import Decoder, Encoder


class Transcoder:
    """
    Converts one frame from the source format to the target format.

    The frame is decoded into a universal value, normalised, then encoded.
    Any exception raised by a codec is scoped to the frame: it is wrapped in
    a DecodeError or EncodeError carrying the frame index and format name,
    and the traceback is only logged at debug level.
    """
    def __init__(
        self,
        decoder: Decoder,
        encoder: Encoder,
        source_format: str,
        target_format: str,
    ) -> None:
        self._decoder = decoder
        self._encoder = encoder
        self._source_format = source_format
        self._target_format = target_format
        self._logger = logging.getLogger("core.transcode.transcoder")

    def transcode(self, frame: bytes, index: int) -> bytes:
        try:
            value = to_universal(self._decoder.decode(frame))
        except Exception as exc:
            self._logger.debug(f"Frame #{index} failed to decode", exc_info=exc)
            raise DecodeError(self._source_format, index, exc) from exc

        try:
            return self._encoder.encode(value)
        except Exception as exc:
            self._logger.debug(f"Frame #{index} failed to encode", exc_info=exc)
            raise EncodeError(self._target_format, index, exc) from exc
