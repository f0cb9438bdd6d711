"""Reading the headers of little-endian MIPS COFF executables."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

MIPSEL_MAGIC = 0x0162
OMAGIC = 0o407
SOMAGIC = 0x0701

_FILE_HEADER = struct.Struct("<HHIIIHH")
_AOUT_HEADER = struct.Struct("<hh13I")
_SECTION_HEADER = struct.Struct("<8s6IHHI")

FILE_HEADER_SIZE = _FILE_HEADER.size
AOUT_HEADER_SIZE = _AOUT_HEADER.size
SECTION_HEADER_SIZE = _SECTION_HEADER.size


class CoffError(Exception):
    """Raised when a COFF file cannot be read."""


@dataclass(frozen=True)
class FileHeader:
    magic: int
    section_count: int
    timestamp: int
    symbol_pointer: int
    symbol_count: int
    optional_header_size: int
    flags: int


@dataclass(frozen=True)
class AoutHeader:
    magic: int
    version_stamp: int
    text_size: int
    data_size: int
    bss_size: int
    entry: int
    text_start: int
    data_start: int
    bss_start: int
    gpr_mask: int
    cpr_mask: tuple[int, int, int, int]
    gp_value: int


@dataclass(frozen=True)
class SectionHeader:
    name: str
    physical_addr: int
    virtual_addr: int
    size: int
    data_pointer: int
    relocation_pointer: int
    line_number_pointer: int
    relocation_count: int
    line_number_count: int
    flags: int


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise CoffError("File is too short")
    return data


def _decode_name(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


def read_file_header(stream: BinaryIO) -> FileHeader:
    """Read the COFF file header from the stream's current position."""
    return FileHeader(*_FILE_HEADER.unpack(_read_exact(stream, FILE_HEADER_SIZE)))


def read_aout_header(stream: BinaryIO) -> AoutHeader:
    """Read the a.out system header that follows the file header."""
    fields = _AOUT_HEADER.unpack(_read_exact(stream, AOUT_HEADER_SIZE))
    return AoutHeader(*fields[:10], cpr_mask=tuple(fields[10:14]), gp_value=fields[14])


def read_section_headers(stream: BinaryIO, count: int) -> list[SectionHeader]:
    """Read ``count`` consecutive section headers."""
    if count < 0:
        raise ValueError("section count cannot be negative")
    raw = _read_exact(stream, SECTION_HEADER_SIZE * count)
    return [
        SectionHeader(_decode_name(name), *rest)
        for name, *rest in _SECTION_HEADER.iter_unpack(raw)
    ]