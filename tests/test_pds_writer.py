import struct

import pytest

from threadio.pds_common import Compression
from threadio.pds_reading import uncompress_buffer
from threadio.pds_writer import compress_bytes, compress_words


def pack(words):
    return struct.pack(f"<{len(words)}I", *words)


def test_no_compression_words_are_copied_between_padding():
    words, size = compress_words(2, 1, Compression.NONE, 0, [1, 2, 3])
    assert words == [0, 0, 1, 2, 3, 0]
    assert size == 4 * len([1, 2, 3])


@pytest.mark.parametrize("algorithm", [Compression.LZ4, Compression.ZSTD])
def test_compressed_words_round_trip(algorithm):
    original = list(range(100)) * 3
    packed, size = compress_words(1, 2, algorithm, 3, original)
    assert packed[0] == 0
    assert packed[-2:] == [0, 0]
    assert len(packed) == 1 + (size + 3) // 4 + 2
    data = pack(packed[1:-2])[:size]
    assert uncompress_buffer(algorithm, data, len(original) * 4) == pack(original)


@pytest.mark.parametrize("algorithm", [Compression.LZ4, Compression.ZSTD])
def test_repetitive_words_shrink(algorithm):
    original = [7] * 1000
    _, size = compress_words(0, 0, algorithm, 3, original)
    assert size < len(original) * 4


@pytest.mark.parametrize("algorithm", [Compression.LZ4, Compression.ZSTD])
def test_last_compressed_word_is_zero_filled(algorithm):
    original = list(range(37))
    packed, size = compress_words(0, 0, algorithm, 3, original)
    raw = pack(packed)
    assert raw[size:] == b"\0" * (len(raw) - size)


def test_no_compression_bytes_are_padded():
    assert compress_bytes(2, 1, Compression.NONE, 0, b"abc") == b"\0\0abc\0"


@pytest.mark.parametrize("algorithm", [Compression.LZ4, Compression.ZSTD])
def test_compressed_bytes_round_trip(algorithm):
    original = b"some event data " * 50
    result = compress_bytes(3, 2, algorithm, 3, original)
    assert result[:3] == b"\0\0\0"
    assert result[-2:] == b"\0\0"
    assert uncompress_buffer(algorithm, result[3:-2], len(original)) == original


def test_negative_padding_is_rejected():
    with pytest.raises(ValueError):
        compress_bytes(-1, 0, Compression.NONE, 0, b"x")
    with pytest.raises(ValueError):
        compress_words(0, -1, Compression.NONE, 0, [1])