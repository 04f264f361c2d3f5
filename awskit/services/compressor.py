# services/compressor.py
import zlib
from typing import Optional

from awskit.core.exceptions import CodecError

NO_COMPRESSION = zlib.Z_NO_COMPRESSION
DEFAULT_COMPRESSION = zlib.Z_DEFAULT_COMPRESSION


class DeflateCompressor:
    """
    zlib-framed deflate compression.

    Every payload goes through the same frame, even at NO_COMPRESSION, so
    decompress never has to guess whether a body was compressed.
    """

    def compress(self, data: bytes, level: Optional[int] = None) -> bytes:
        return zlib.compress(data, DEFAULT_COMPRESSION if level is None else level)

    def decompress(self, data: bytes) -> bytes:
        try:
            return zlib.decompress(data)
        except (zlib.error, TypeError) as e:
            raise CodecError(f"Failed to decompress payload: {e}") from e

    @property
    def encoding(self) -> str:
        return "deflate"
