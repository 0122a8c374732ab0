"""Compression and serialization choices shared by the PDS reader and writer."""

from __future__ import annotations

import enum
from typing import Optional


class Compression(enum.Enum):
    NONE = 0
    LZ4 = 1
    ZSTD = 2


class Serialization(enum.Enum):
    ROOT = 0
    ROOT_UNROLLED = 1


_COMPRESSION_NAMES = {
    Compression.NONE: "None",
    Compression.LZ4: "LZ4",
    Compression.ZSTD: "ZSTD",
}


def compression_name(compression: Compression) -> str:
    """Name of ``compression``; the first four characters differ for each."""
    return _COMPRESSION_NAMES[compression]


def to_compression(name: str) -> Optional[Compression]:
    """Compression for ``name``; None when the name is not recognised."""
    if name in ("", "None"):
        return Compression.NONE
    if name == "LZ4":
        return Compression.LZ4
    if name == "ZSTD":
        return Compression.ZSTD
    return None


def to_serialization(name: str) -> Optional[Serialization]:
    """Serialization for ``name``; None when the name is not recognised."""
    if name in ("", "ROOT"):
        return Serialization.ROOT
    if name in ("ROOTUnrolled", "Unrolled"):
        return Serialization.ROOT_UNROLLED
    return None