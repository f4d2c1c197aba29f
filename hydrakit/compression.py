"""Decompression of zlib data into a bounded output buffer."""

from __future__ import annotations

import zlib

_Z_DATA_ERROR = -3
_Z_BUF_ERROR = -5


class CompressionError(RuntimeError):
    """Raised when input cannot be decompressed."""

    def __init__(self, code: int) -> None:
        super().__init__(f"Failed to decompress input. ({code})")
        self.code = code


def decompress(data: bytes, output_size: int) -> bytes:
    """Decompress zlib ``data`` that must fit in ``output_size`` bytes."""
    if output_size < 0:
        raise ValueError("output_size must not be negative")
    stream = zlib.decompressobj()
    try:
        # A limit of zero means "unlimited" to zlib, so probe with one byte.
        output = stream.decompress(data, output_size or 1)
    except zlib.error as exc:
        raise CompressionError(_Z_DATA_ERROR) from exc
    if len(output) > output_size or stream.unconsumed_tail:
        raise CompressionError(_Z_BUF_ERROR)
    if not stream.eof:
        code = _Z_BUF_ERROR if len(output) == output_size else _Z_DATA_ERROR
        raise CompressionError(code)
    return output