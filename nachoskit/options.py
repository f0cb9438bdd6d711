"""Command-line options for the kernel and for its driver.

The kernel and the driver each scan the whole argument list and pick out
the flags they understand, ignoring everything else, so the same list can
be handed to both. Arguments are given without the program name.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

MAX_EXEC_FILES = 9
"""Most user programs that can be queued with ``-e``."""

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)


class OptionError(ValueError):
    """Raised when a flag is missing the value it requires."""


@dataclass(frozen=True)
class KernelOptions:
    """Settings the kernel takes from the command line."""

    random_slice: bool = False
    random_seed: int | None = None
    debug_user_prog: bool = False
    exec_files: tuple[str, ...] = ()
    console_in: str | None = None
    console_out: str | None = None
    format_disk: bool = False
    reliability: float = 1.0
    host_name: int = 0
    show_usage: bool = False


@dataclass(frozen=True)
class MainOptions:
    """Settings the driver takes from the command line."""

    debug_flags: str = ""
    show_copyright: bool = False
    user_prog: str | None = None
    thread_test: bool = False
    console_test: bool = False
    network_test: bool = False
    copy_unix_file: str | None = None
    copy_nachos_file: str | None = None
    print_file: str | None = None
    remove_file: str | None = None
    list_directory: bool = False
    dump_filesystem: bool = False
    show_usage: bool = False


def _to_int(text: str) -> int:
    """Read a leading integer the lenient way: no digits reads as 0."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _to_float(text: str) -> float:
    """Read a leading number the lenient way: no number reads as 0.0."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _value(args: Iterator[str], flag: str) -> str:
    try:
        return next(args)
    except StopIteration:
        raise OptionError(f"option {flag} requires an argument") from None


def parse_kernel_args(argv: Sequence[str]) -> KernelOptions:
    """Pick the kernel's settings out of ``argv``, ignoring other arguments."""
    random_slice = False
    random_seed: int | None = None
    debug_user_prog = False
    exec_files: list[str] = []
    console_in: str | None = None
    console_out: str | None = None
    format_disk = False
    reliability = 1.0
    host_name = 0
    show_usage = False

    args = iter(argv)
    for arg in args:
        if arg == "-rs":
            random_seed = _to_int(_value(args, arg))
            random_slice = True
        elif arg == "-s":
            debug_user_prog = True
        elif arg == "-e":
            name = _value(args, arg)
            if len(exec_files) >= MAX_EXEC_FILES:
                raise OptionError(f"at most {MAX_EXEC_FILES} programs can be given with -e")
            exec_files.append(name)
        elif arg == "-ci":
            console_in = _value(args, arg)
        elif arg == "-co":
            console_out = _value(args, arg)
        elif arg == "-f":
            format_disk = True
        elif arg == "-n":
            reliability = _to_float(_value(args, arg))
        elif arg == "-m":
            host_name = _to_int(_value(args, arg))
        elif arg == "-u":
            show_usage = True

    return KernelOptions(
        random_slice=random_slice,
        random_seed=random_seed,
        debug_user_prog=debug_user_prog,
        exec_files=tuple(exec_files),
        console_in=console_in,
        console_out=console_out,
        format_disk=format_disk,
        reliability=reliability,
        host_name=host_name,
        show_usage=show_usage,
    )


def parse_main_args(argv: Sequence[str]) -> MainOptions:
    """Pick the driver's settings out of ``argv``, ignoring other arguments."""
    debug_flags = ""
    show_copyright = False
    user_prog: str | None = None
    thread_test = console_test = network_test = False
    copy_unix_file: str | None = None
    copy_nachos_file: str | None = None
    print_file: str | None = None
    remove_file: str | None = None
    list_directory = dump_filesystem = False
    show_usage = False

    args = iter(argv)
    for arg in args:
        if arg == "-d":
            debug_flags = _value(args, arg)
        elif arg == "-z":
            show_copyright = True
        elif arg == "-x":
            user_prog = _value(args, arg)
        elif arg == "-K":
            thread_test = True
        elif arg == "-C":
            console_test = True
        elif arg == "-N":
            network_test = True
        elif arg == "-cp":
            copy_unix_file = _value(args, arg)
            copy_nachos_file = _value(args, arg)
        elif arg == "-p":
            print_file = _value(args, arg)
        elif arg == "-r":
            remove_file = _value(args, arg)
        elif arg == "-l":
            list_directory = True
        elif arg == "-D":
            dump_filesystem = True
        elif arg == "-u":
            show_usage = True

    return MainOptions(
        debug_flags=debug_flags,
        show_copyright=show_copyright,
        user_prog=user_prog,
        thread_test=thread_test,
        console_test=console_test,
        network_test=network_test,
        copy_unix_file=copy_unix_file,
        copy_nachos_file=copy_nachos_file,
        print_file=print_file,
        remove_file=remove_file,
        list_directory=list_directory,
        dump_filesystem=dump_filesystem,
        show_usage=show_usage,
    )


def kernel_usage() -> str:
    """Usage lines for the flags the kernel understands."""
    return (
        "Partial usage: nachos [-rs randomSeed]\n"
        "Partial usage: nachos [-s]\n"
        "Partial usage: nachos [-ci consoleIn] [-co consoleOut]\n"
        "Partial usage: nachos [-nf]\n"
        "Partial usage: nachos [-n #] [-m #]\n"
    )


def main_usage() -> str:
    """Usage lines for the flags the driver understands."""
    return (
        "Partial usage: nachos [-z -d debugFlags]\n"
        "Partial usage: nachos [-x programName]\n"
        "Partial usage: nachos [-K] [-C] [-N]\n"
        "Partial usage: nachos [-cp UnixFile NachosFile]\n"
        "Partial usage: nachos [-p fileName] [-r fileName]\n"
        "Partial usage: nachos [-l] [-D]\n"
    )