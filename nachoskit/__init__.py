"""Teaching-kernel building blocks: NOFF executables, COFF conversion, address spaces, scheduling and options."""

__version__ = "0.1.0"

__all__ = [
    "addrspace",
    "coff",
    "convert",
    "noff",
    "options",
    "scheduler",
]