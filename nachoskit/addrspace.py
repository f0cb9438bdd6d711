"""User address spaces: page tables over a shared physical memory.

An address space is filled from a NOFF image. Every virtual page gets its
own physical frame, taken from the first free slot of the frame table,
and the code and data segments are copied in page by page through the
page table.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .noff import NOFF_MAGIC, NoffHeader, Segment, header_size, unpack_header

USER_STACK_SIZE = 1024
DEFAULT_PAGE_SIZE = 128
DEFAULT_NUM_FRAMES = 128

INITIAL_PC = 0
INITIAL_NEXT_PC = 4
STACK_MARGIN = 16


class AddressError(Exception):
    """The virtual address lies outside the address space."""


class ReadOnlyError(Exception):
    """A write was attempted on a read-only page."""


class BusError(Exception):
    """A page table entry points past the end of physical memory."""


class MemoryLimitError(Exception):
    """There are not enough physical frames for the request."""


@dataclass
class TranslationEntry:
    """One page table entry mapping a virtual page to a physical frame."""

    virtual_page: int
    physical_page: int = 0
    valid: bool = False
    read_only: bool = False
    use: bool = False
    dirty: bool = False


class PhysicalMemory:
    """Main memory split into frames, with a table of which are in use."""

    def __init__(
        self, num_frames: int = DEFAULT_NUM_FRAMES, page_size: int = DEFAULT_PAGE_SIZE
    ) -> None:
        if num_frames <= 0 or page_size <= 0:
            raise ValueError("frame count and page size must be positive")
        self.num_frames = num_frames
        self.page_size = page_size
        self.data = bytearray(num_frames * page_size)
        self._in_use = [False] * num_frames

    @property
    def size(self) -> int:
        return len(self.data)

    def allocate_frame(self) -> int:
        """Claim the lowest free frame, zero it and return its number."""
        try:
            frame = self._in_use.index(False)
        except ValueError:
            raise MemoryLimitError("no free physical frame") from None
        self._in_use[frame] = True
        start = frame * self.page_size
        self.data[start:start + self.page_size] = bytes(self.page_size)
        return frame

    def free_frame(self, frame: int) -> None:
        """Mark a frame as available again."""
        if not 0 <= frame < self.num_frames:
            raise ValueError(f"no such frame: {frame}")
        self._in_use[frame] = False

    def free_frames(self) -> list[int]:
        """Return the numbers of all frames not in use, in ascending order."""
        return [frame for frame, used in enumerate(self._in_use) if not used]


class AddrSpace:
    """The address space of one user program."""

    def __init__(self, memory: PhysicalMemory, rdata: bool = False) -> None:
        self.memory = memory
        self.rdata = rdata
        self.page_table: list[TranslationEntry] = []

    @property
    def num_pages(self) -> int:
        return len(self.page_table)

    @property
    def size(self) -> int:
        return self.num_pages * self.memory.page_size

    def _read_header(self, image: bytes) -> NoffHeader:
        header = unpack_header(image, self.rdata)
        if header.magic == NOFF_MAGIC:
            return header
        raw = bytes(image[:header_size(self.rdata)])
        count = len(raw) // 4
        words = struct.unpack(f">{count}I", raw)
        swapped = unpack_header(struct.pack(f"<{count}I", *words), self.rdata)
        if swapped.magic != NOFF_MAGIC:
            raise ValueError("image is not a NOFF executable")
        return swapped

    def load(self, image: bytes) -> NoffHeader:
        """Map pages for the NOFF ``image`` and copy its segments into memory.

        Returns the decoded header. Raises MemoryLimitError when the program
        needs more pages than physical memory can supply.
        """
        header = self._read_header(image)
        page_size = self.memory.page_size
        size = sum(segment.size for segment in header.segments()) + USER_STACK_SIZE
        num_pages = -(-size // page_size)
        if num_pages > self.memory.num_frames:
            raise MemoryLimitError(
                f"program needs {num_pages} pages, memory has {self.memory.num_frames}"
            )

        self.release()
        frames: list[int] = []
        try:
            for _ in range(num_pages):
                frames.append(self.memory.allocate_frame())
        except MemoryLimitError:
            for frame in frames:
                self.memory.free_frame(frame)
            raise
        self.page_table = [
            TranslationEntry(virtual_page=vpn, physical_page=frame, valid=True)
            for vpn, frame in enumerate(frames)
        ]

        for segment in (header.code, header.init_data, header.readonly_data):
            if segment is not None and segment.size > 0:
                self._copy_segment(image, segment)
        return header

    def _copy_segment(self, image: bytes, segment: Segment) -> None:
        if segment.in_file_addr + segment.size > len(image):
            raise ValueError("segment extends past the end of the image")
        page_size = self.memory.page_size
        vaddr = segment.virtual_addr
        offset = segment.in_file_addr
        remaining = segment.size
        while remaining:
            paddr = self.translate(vaddr, writing=True)
            count = min(remaining, page_size - vaddr % page_size)
            self.memory.data[paddr:paddr + count] = image[offset:offset + count]
            vaddr += count
            offset += count
            remaining -= count

    def translate(self, vaddr: int, writing: bool = False) -> int:
        """Return the physical address for ``vaddr``, setting use and dirty bits."""
        page_size = self.memory.page_size
        if vaddr < 0:
            raise AddressError(f"negative virtual address {vaddr}")
        vpn, offset = divmod(vaddr, page_size)
        if vpn >= self.num_pages:
            raise AddressError(f"virtual address {vaddr:#x} outside address space")
        entry = self.page_table[vpn]
        if writing and entry.read_only:
            raise ReadOnlyError(f"write to read-only page {vpn}")
        if entry.physical_page >= self.memory.num_frames:
            raise BusError(f"illegal physical page {entry.physical_page}")
        entry.use = True
        if writing:
            entry.dirty = True
        return entry.physical_page * page_size + offset

    def initial_registers(self) -> dict[str, int]:
        """Register values for starting the program; all others start at zero."""
        return {
            "pc": INITIAL_PC,
            "next_pc": INITIAL_NEXT_PC,
            "stack": self.size - STACK_MARGIN,
        }

    def release(self) -> None:
        """Return every mapped frame to physical memory and drop the page table."""
        for entry in self.page_table:
            if entry.valid:
                self.memory.free_frame(entry.physical_page)
        self.page_table = []