"""Convert a MIPS COFF executable into a NOFF executable."""

from __future__ import annotations

import argparse
import io
import sys
from collections.abc import Callable
from pathlib import Path

from .coff import (
    MIPSEL_MAGIC,
    OMAGIC,
    CoffError,
    SectionHeader,
    read_aout_header,
    read_file_header,
    read_section_headers,
)
from .noff import NoffHeader, Segment, header_size, pack_header


class ConversionError(Exception):
    """Raised when a COFF file cannot be converted."""


def _read_sections(data: bytes) -> list[SectionHeader]:
    stream = io.BytesIO(data)
    try:
        file_header = read_file_header(stream)
        if file_header.magic != MIPSEL_MAGIC:
            raise ConversionError("File is not a MIPSEL COFF file")
        if read_aout_header(stream).magic != OMAGIC:
            raise ConversionError("File is not a OMAGIC file")
        return read_section_headers(stream, file_header.section_count)
    except CoffError as exc:
        raise ConversionError(str(exc)) from exc


def _convert(
    data: bytes, rdata: bool, report: Callable[[str], object]
) -> tuple[NoffHeader, bytes]:
    sections = _read_sections(data)
    report(f"numsections {len(sections)} ")

    header = NoffHeader(readonly_data=Segment() if rdata else None)
    copied = {".text": header.code, ".data": header.init_data}
    if header.readonly_data is not None:
        copied[".rdata"] = header.readonly_data

    body = bytearray()
    position = header_size(rdata)
    report(f"Loading {len(sections)} sections:")
    for section in sections:
        report(
            f'\t"{section.name}", filepos 0x{section.data_pointer:x}, '
            f"mempos 0x{section.physical_addr:x}, size 0x{section.size:x}"
        )
        if section.size == 0:
            continue
        target = copied.get(section.name)
        if target is not None:
            chunk = data[section.data_pointer:section.data_pointer + section.size]
            if len(chunk) != section.size:
                raise ConversionError("File is too short")
            target.virtual_addr = section.physical_addr
            target.in_file_addr = position
            target.size = section.size
            body += chunk
            position += section.size
        elif section.name == ".bss":
            bss = header.uninit_data
            if bss.size:
                if section.physical_addr == bss.virtual_addr + bss.size:
                    raise ConversionError("Can't handle both bss and sbss")
                bss.size += section.size
            else:
                bss.virtual_addr = section.physical_addr
                bss.size = section.size
        else:
            raise ConversionError(f"Unknown segment type: {section.name}")

    return header, pack_header(header) + bytes(body)


def coff_to_noff(data: bytes, rdata: bool = False) -> bytes:
    """Return the NOFF image built from the COFF image ``data``."""
    return _convert(data, rdata, lambda _line: None)[1]


def convert_file(coff_path, noff_path, rdata: bool = False) -> NoffHeader:
    """Convert a COFF file on disk, printing the section table as it goes.

    On a conversion error the output file is removed.
    """
    data = Path(coff_path).read_bytes()
    try:
        header, image = _convert(data, rdata, print)
    except ConversionError:
        Path(noff_path).unlink(missing_ok=True)
        raise
    Path(noff_path).write_bytes(image)
    return header


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="coff2noff", description="Convert a MIPS COFF executable to NOFF."
    )
    parser.add_argument("coff_file", help="input COFF executable")
    parser.add_argument("noff_file", help="output NOFF executable")
    parser.add_argument(
        "--rdata",
        action="store_true",
        help="keep .rdata as a separate read-only segment",
    )
    args = parser.parse_args(argv)
    try:
        convert_file(args.coff_file, args.noff_file, args.rdata)
    except ConversionError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"{exc.filename}: {exc.strerror}", file=sys.stderr)
        return 1
    return 0