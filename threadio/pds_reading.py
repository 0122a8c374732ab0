"""Reading of PDS files: file header, event buffers and data products."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass
from itertools import pairwise
from typing import Any, BinaryIO, Optional, Protocol, Sequence

import lz4.block
import zstandard

from threadio.identifiers import EventIdentifier
from threadio.pds_common import Compression, Serialization
from threadio.products import DataProductRetriever

MAGIC_BASE = 3141592 * 256
EVENT_HEADER_SIZE_IN_WORDS = 5

_RUN_WORD = 1
_LUMI_WORD = 2
_EVENT_HIGH_WORD = 3
_EVENT_LOW_WORD = 4


class PDSFormatError(ValueError):
    """The data does not follow the PDS file format."""


class _Deserializer(Protocol):
    def deserialize(self, data: bytes, address: Any) -> int: ...


@dataclass(frozen=True)
class ProductInfo:
    name: str
    class_index: int
    class_name: str


@dataclass(frozen=True)
class FileHeader:
    products: list[ProductInfo]
    compression: Compression
    serialization: Serialization


def _bytes_to_words(n_bytes: int) -> int:
    return -(-n_bytes // 4)


def _pack_words(words: Sequence[int]) -> bytes:
    return struct.pack(f"<{len(words)}I", *words)


def _unpack_words(data: bytes) -> list[int]:
    return list(struct.unpack(f"<{len(data) // 4}I", data))


def read_word(stream: BinaryIO) -> int:
    """Read one 32-bit word; raise PDSFormatError if the stream ends."""
    word = read_word_no_check(stream)
    if word is None:
        raise PDSFormatError("stream ended while reading a word")
    return word


def read_word_no_check(stream: BinaryIO) -> Optional[int]:
    """Read one 32-bit word, or return None if the stream ends first."""
    data = stream.read(4)
    if len(data) < 4:
        return None
    return struct.unpack("<I", data)[0]


def read_words(stream: BinaryIO, count: int) -> list[int]:
    """Read ``count`` 32-bit words; raise PDSFormatError if the stream ends."""
    data = stream.read(4 * count)
    if len(data) != 4 * count:
        raise PDSFormatError(f"stream ended while reading {count} words")
    return _unpack_words(data)


def _which_compression(word: int) -> Compression:
    first = chr(word & 0xFF)
    if first == "N":
        return Compression.NONE
    if first == "L":
        return Compression.LZ4
    if first == "Z":
        return Compression.ZSTD
    raise PDSFormatError(f"unknown compression tag {first!r}")


class _HeaderCursor:
    def __init__(self, words: list[int]) -> None:
        self._words = words
        self._raw = _pack_words(words)
        self.pos = 0

    def word(self) -> int:
        if self.pos >= len(self._words):
            raise PDSFormatError("file header ended early")
        value = self._words[self.pos]
        self.pos += 1
        return value

    def strings(self) -> list[str]:
        n_words = self.word()
        if n_words == 0:
            return []
        if self.pos + n_words > len(self._words):
            raise PDSFormatError("string array runs past the file header")
        chunk = self._raw[self.pos * 4 : (self.pos + n_words) * 4]
        self.pos += n_words
        result = []
        for piece in chunk.split(b"\0"):
            if not piece:
                break
            result.append(piece.decode())
        return result

    def c_string(self) -> str:
        if self.pos >= len(self._words):
            raise PDSFormatError("file header ended early")
        start = self.pos * 4
        end = self._raw.find(b"\0", start)
        if end < 0:
            raise PDSFormatError("unterminated product name")
        self.pos += _bytes_to_words(end - start + 1)
        return self._raw[start:end].decode()

    def products(self, class_names: list[str]) -> list[ProductInfo]:
        products = []
        for _ in range(self.word()):
            class_index = self.word()
            name = self.c_string()
            if class_index >= len(class_names):
                raise PDSFormatError(f"product {name!r} has unknown class index {class_index}")
            products.append(ProductInfo(name, class_index, class_names[class_index]))
        return products


def read_file_header(stream: BinaryIO) -> FileHeader:
    """Read the preamble and product description at the start of a file."""
    preamble = read_words(stream, 4)
    magic = preamble[0]
    if magic not in (MAGIC_BASE + 1, MAGIC_BASE + 2):
        raise PDSFormatError("not a PDS file")
    serialization = Serialization.ROOT if magic == MAGIC_BASE + 1 else Serialization.ROOT_UNROLLED
    compression = _which_compression(preamble[2])
    buffer_size = preamble[3]

    # one word past the buffer repeats its size as a cross-check
    words = read_words(stream, buffer_size + 1)
    cursor = _HeaderCursor(words)
    cursor.strings()  # record names
    types = cursor.strings()
    cursor.strings()  # non top level types
    products = cursor.products(types)
    if cursor.pos != len(words) - 1:
        raise PDSFormatError("file header has unexpected trailing data")
    if words[-1] != buffer_size:
        raise PDSFormatError("file header cross-check failed")
    return FileHeader(products, compression, serialization)


def read_compressed_event_buffer(stream: BinaryIO) -> Optional[tuple[EventIdentifier, list[int]]]:
    """Read the next event's identifier and its (still compressed) buffer.

    Returns None at the end of the stream. The returned buffer excludes the
    trailing cross-check word, which is verified here.
    """
    data = stream.read((EVENT_HEADER_SIZE_IN_WORDS + 1) * 4)
    if len(data) < (EVENT_HEADER_SIZE_IN_WORDS + 1) * 4:
        return None
    header = _unpack_words(data)
    buffer_size = header[EVENT_HEADER_SIZE_IN_WORDS]
    event = (header[_EVENT_HIGH_WORD] << 32) + header[_EVENT_LOW_WORD]
    event_id = EventIdentifier(header[_RUN_WORD], header[_LUMI_WORD], event)
    words = read_words(stream, buffer_size + 1)
    if words[buffer_size] != buffer_size:
        raise PDSFormatError("event buffer cross-check failed")
    return event_id, words[:buffer_size]


def _decompress(compression: Compression, data: bytes, size: int) -> bytes:
    if compression is Compression.LZ4:
        try:
            return lz4.block.decompress(data, uncompressed_size=size)
        except lz4.block.LZ4BlockError as exc:
            raise PDSFormatError("LZ4 failed to decompress") from exc
    try:
        return zstandard.ZstdDecompressor().decompress(data, max_output_size=size)
    except zstandard.ZstdError as exc:
        raise PDSFormatError("ZSTD failed to decompress") from exc


def uncompress_event_buffer(compression: Compression, words: Sequence[int]) -> list[int]:
    """Uncompress an event buffer as returned by read_compressed_event_buffer.

    The first word holds four times the uncompressed size in words plus the
    number of bytes used in the last compressed word (0 meaning all four).
    """
    if not words:
        raise PDSFormatError("empty event buffer")
    uncompressed_words = words[0] // 4
    bytes_in_last_word = words[0] % 4
    if compression is Compression.NONE:
        if len(words) != uncompressed_words + 1:
            raise PDSFormatError("uncompressed event buffer has the wrong size")
        return list(words[1:])
    n_bytes = (len(words) - 1) * 4
    if bytes_in_last_word:
        n_bytes -= 4 - bytes_in_last_word
    data = _pack_words(words[1:])[:n_bytes]
    expected = uncompressed_words * 4
    result = _decompress(compression, data, expected)
    result = result[:expected].ljust(expected, b"\0")
    return _unpack_words(result)


def deserialize_data_products(
    words: Sequence[int],
    data_products: Sequence[DataProductRetriever],
    deserializers: Sequence[_Deserializer],
) -> None:
    """Deserialize (index, size in words, data) records into their products."""
    raw = _pack_words(words)
    end = len(words)
    pos = 0
    while pos < end:
        if pos + 2 > end:
            raise PDSFormatError("truncated product record")
        index, stored_size = words[pos], words[pos + 1]
        pos += 2
        if pos + stored_size > end:
            raise PDSFormatError("product data runs past the event buffer")
        product = data_products[index]
        chunk = raw[pos * 4 : (pos + stored_size) * 4]
        product.size = deserializers[index].deserialize(chunk, product.address)
        pos += stored_size


def uncompress_buffer(compression: Compression, data: bytes, uncompressed_size: int) -> bytes:
    """Uncompress ``data`` to exactly ``uncompressed_size`` bytes."""
    if compression is Compression.NONE:
        if len(data) != uncompressed_size:
            raise PDSFormatError("uncompressed buffer has the wrong size")
        return bytes(data)
    result = _decompress(compression, bytes(data), uncompressed_size)
    if compression is Compression.LZ4 and len(result) != uncompressed_size:
        raise PDSFormatError(
            f"LZ4 decompressed {len(result)} bytes, expected {uncompressed_size}"
        )
    return result[:uncompressed_size].ljust(uncompressed_size, b"\0")


def deserialize_data_products_with_table(
    data: bytes,
    table: Sequence[int],
    data_products: Sequence[DataProductRetriever],
    deserializers: Sequence[_Deserializer],
) -> None:
    """Deserialize products whose byte offsets in ``data`` are listed in ``table``.

    Consecutive offsets bound one product each; an empty range means the
    product is absent.
    """
    pos = 0
    for product_index, (start, following) in enumerate(pairwise(table)):
        if pos >= len(data):
            break
        stored_size = following - start
        if stored_size:
            product = data_products[product_index]
            chunk = data[pos : pos + stored_size]
            product.size = deserializers[product_index].deserialize(chunk, product.address)
            pos = following
    if pos != len(data):
        raise PDSFormatError("offset table does not cover the whole buffer")


def skip_to_next_event(stream: BinaryIO) -> bool:
    """Skip over one event; return False if the stream had no more events."""
    stream.seek(EVENT_HEADER_SIZE_IN_WORDS * 4, io.SEEK_CUR)
    buffer_size = read_word_no_check(stream)
    if buffer_size is None:
        return False
    stream.seek(buffer_size * 4, io.SEEK_CUR)
    if read_word(stream) != buffer_size:
        raise PDSFormatError("event buffer cross-check failed")
    return True