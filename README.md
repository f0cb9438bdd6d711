# nachoskit

Building blocks of a small teaching operating-system kernel, written as a
plain Python library with no third-party dependencies.

- **NOFF executables**: `nachoskit.noff` describes the Nachos Object File
  Format header (`NoffHeader`, `Segment`) and converts it to and from its
  little-endian on-disk form with `pack_header` and `unpack_header`.
  `header_size(rdata)` gives the header length with or without the extra
  read-only data segment.
- **COFF input**: `nachoskit.coff` reads MIPS COFF file, a.out and section
  headers (`read_file_header`, `read_aout_header`, `read_section_headers`)
  from a binary stream, raising `CoffError` when the stream is too short.
- **Conversion**: `nachoskit.convert.coff_to_noff` turns the bytes of a
  MIPSEL OMAGIC COFF executable into a NOFF image. `.text` and `.data` (and
  `.rdata` when `rdata=True`) are copied, `.bss` only sets the size of the
  uninitialised segment, and empty sections are skipped. `convert_file`
  does the same between files, printing the section table, and raises
  `ConversionError` on failure after removing the output file.
- **Address spaces**: `nachoskit.addrspace` provides `PhysicalMemory`, a
  byte array split into frames with a frame table (`allocate_frame`,
  `free_frame`, `free_frames`), and `AddrSpace`, which loads a NOFF image
  into the lowest free frames, copies its segments in page by page,
  translates virtual addresses with `translate(vaddr, writing)`, reports the
  start-up register values with `initial_registers()` and gives its frames
  back with `release()`. Faults are raised as `AddressError`,
  `ReadOnlyError`, `BusError` and `MemoryLimitError`.
- **Threads and scheduling**: `nachoskit.scheduler` offers a `Thread`
  record with a `ThreadStatus`, and a FIFO `Scheduler` with `ready_to_run`,
  `find_next_to_run` and `describe`.
- **Command lines**: `nachoskit.options` picks kernel and driver flags out
  of an argument list (`parse_kernel_args` into `KernelOptions`,
  `parse_main_args` into `MainOptions`), raising `OptionError` when a flag
  lacks its value; `kernel_usage()` and `main_usage()` return the usage
  text.

## Installation

```
pip install .
```

## Converting an executable

```
coff2noff program.coff program.noff
coff2noff --rdata program.coff program.noff
```

The command lists the sections it finds and writes the NOFF file. With
`--rdata` the `.rdata` section is kept as a separate read-only segment. A
file that is not a MIPSEL OMAGIC COFF executable, is too short, or holds an
unknown section is rejected with exit status 1, and no output file is left
behind.

## Using the library

```python
from nachoskit.convert import coff_to_noff
from nachoskit.noff import unpack_header
from nachoskit.addrspace import PhysicalMemory, AddrSpace

with open("program.coff", "rb") as f:
    image = coff_to_noff(f.read(), rdata=False)

header = unpack_header(image, rdata=False)
print(header.code.size, header.init_data.size)

memory = PhysicalMemory()          # 128 frames of 128 bytes
space = AddrSpace(memory)
space.load(image)
physical = space.translate(0, writing=False)
print(space.initial_registers())
space.release()
```

```python
from nachoskit.scheduler import Scheduler, Thread

scheduler = Scheduler()
scheduler.ready_to_run(Thread("first", 1))
scheduler.ready_to_run(Thread("second", 2))
print(scheduler.find_next_to_run().name)   # first
```

## What the package does not do

This is a set of data structures, not a running kernel. There is no MIPS
machine simulator, so loaded programs are never executed; `Scheduler` keeps
the ready list but performs no context switches; there are no semaphores,
locks, condition variables or system-call handlers; and there is no
simulated disk, file system, console or network. `nachoskit.options` only
parses arguments; there is no `nachos` command that acts on them.

## Running the tests

```
pip install .[test]
pytest
```