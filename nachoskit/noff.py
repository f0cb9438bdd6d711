"""Nachos object code format (NOFF) headers.

A NOFF file starts with a header that records, for each segment, where
it lives in the file and where it belongs in the virtual address space.
The header is always stored little-endian, one 32-bit word per field.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass, field

NOFF_MAGIC = 0xBADFAD

_WORD = struct.Struct("<I")
_SEGMENT = struct.Struct("<3I")
_MASK = 0xFFFFFFFF


@dataclass
class Segment:
    """One segment: its virtual address, file offset and size."""

    virtual_addr: int = 0
    in_file_addr: int = 0
    size: int = 0


@dataclass
class NoffHeader:
    """The NOFF header; ``readonly_data`` is present only in the rdata layout."""

    magic: int = NOFF_MAGIC
    code: Segment = field(default_factory=Segment)
    init_data: Segment = field(default_factory=Segment)
    uninit_data: Segment = field(default_factory=Segment)
    readonly_data: Segment | None = None

    @property
    def has_readonly_data(self) -> bool:
        return self.readonly_data is not None

    def segments(self) -> Iterator[Segment]:
        """Yield the segments in the order they are stored in the file."""
        yield self.code
        yield self.init_data
        if self.readonly_data is not None:
            yield self.readonly_data
        yield self.uninit_data


def header_size(rdata: bool = False) -> int:
    """Size in bytes of a NOFF header, with or without a read-only segment."""
    return _WORD.size + _SEGMENT.size * (4 if rdata else 3)


def pack_header(header: NoffHeader) -> bytes:
    """Encode a header as little-endian bytes."""
    parts = [_WORD.pack(header.magic & _MASK)]
    parts.extend(
        _SEGMENT.pack(
            segment.virtual_addr & _MASK,
            segment.in_file_addr & _MASK,
            segment.size & _MASK,
        )
        for segment in header.segments()
    )
    return b"".join(parts)


def unpack_header(data: bytes, rdata: bool = False) -> NoffHeader:
    """Decode a header from the start of ``data``."""
    size = header_size(rdata)
    if len(data) < size:
        raise ValueError(f"NOFF header needs {size} bytes, got {len(data)}")
    (magic,) = _WORD.unpack_from(data, 0)
    segments = [Segment(*fields) for fields in _SEGMENT.iter_unpack(data[_WORD.size:size])]
    if rdata:
        code, init_data, readonly_data, uninit_data = segments
    else:
        code, init_data, uninit_data = segments
        readonly_data = None
    return NoffHeader(
        magic=magic,
        code=code,
        init_data=init_data,
        uninit_data=uninit_data,
        readonly_data=readonly_data,
    )