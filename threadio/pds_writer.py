"""Compression of event and product buffers for the PDS file format."""

from __future__ import annotations

import struct
from typing import Sequence

import lz4.block
import zstandard

from threadio.pds_common import Compression


def _bytes_to_words(n_bytes: int) -> int:
    return -(-n_bytes // 4)


def _pack_words(words: Sequence[int]) -> bytes:
    return struct.pack(f"<{len(words)}I", *words)


def _unpack_words(data: bytes) -> list[int]:
    return list(struct.unpack(f"<{len(data) // 4}I", data))


def _compress(algorithm: Compression, level: int, data: bytes) -> bytes:
    if algorithm is Compression.LZ4:
        return lz4.block.compress(data, mode="default", store_size=False)
    if algorithm is Compression.ZSTD:
        return zstandard.ZstdCompressor(level=level).compress(data)
    return bytes(data)


def _check_padding(lead_padding: int, trailing_padding: int) -> None:
    if lead_padding < 0 or trailing_padding < 0:
        raise ValueError("padding must not be negative")


def compress_words(
    lead_padding: int,
    trailing_padding: int,
    algorithm: Compression,
    level: int,
    words: Sequence[int],
) -> tuple[list[int], int]:
    """Compress 32-bit ``words``.

    Returns the compressed data as words, preceded by ``lead_padding`` and
    followed by ``trailing_padding`` zero words, together with the size of
    the compressed data in bytes. The last compressed word is zero filled.
    """
    _check_padding(lead_padding, trailing_padding)
    compressed = _compress(algorithm, level, _pack_words(words))
    padded = compressed + b"\0" * (-len(compressed) % 4)
    result = [0] * lead_padding + _unpack_words(padded) + [0] * trailing_padding
    return result, len(compressed)


def compress_bytes(
    lead_padding: int,
    trailing_padding: int,
    algorithm: Compression,
    level: int,
    data: bytes,
) -> bytes:
    """Compress ``data``, surrounded by the given numbers of zero bytes."""
    _check_padding(lead_padding, trailing_padding)
    compressed = _compress(algorithm, level, bytes(data))
    return b"\0" * lead_padding + compressed + b"\0" * trailing_padding