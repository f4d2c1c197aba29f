import zlib

import pytest

from hydrakit.compression import CompressionError, decompress

PAYLOAD = b"hydrakit compression payload " * 20


def test_round_trip_exact_size():
    assert decompress(zlib.compress(PAYLOAD), len(PAYLOAD)) == PAYLOAD


def test_round_trip_with_spare_room():
    assert decompress(zlib.compress(PAYLOAD), len(PAYLOAD) + 100) == PAYLOAD


def test_empty_payload():
    assert decompress(zlib.compress(b""), 0) == b""


def test_output_too_small():
    with pytest.raises(CompressionError, match="Failed to decompress input"):
        decompress(zlib.compress(PAYLOAD), len(PAYLOAD) - 1)


def test_zero_size_for_nonempty_payload():
    with pytest.raises(CompressionError):
        decompress(zlib.compress(PAYLOAD), 0)


def test_corrupt_input():
    with pytest.raises(CompressionError, match="Failed to decompress input"):
        decompress(b"not zlib data at all", 1000)


def test_truncated_input():
    compressed = zlib.compress(PAYLOAD)
    with pytest.raises(CompressionError):
        decompress(compressed[: len(compressed) // 2], len(PAYLOAD) * 2)


def test_error_codes_differ_between_failures():
    with pytest.raises(CompressionError) as small:
        decompress(zlib.compress(PAYLOAD), 1)
    with pytest.raises(CompressionError) as corrupt:
        decompress(b"garbage", 100)
    assert small.value.code != corrupt.value.code
    assert str(small.value.code) in str(small.value)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        decompress(zlib.compress(PAYLOAD), -1)