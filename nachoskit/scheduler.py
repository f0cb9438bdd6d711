"""Threads and the FIFO ready queue that picks which one runs next."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

STACK_SIZE = 8 * 1024
"""Size of a thread's private execution stack, in words."""

MACHINE_STATE_SIZE = 75
"""Number of kernel register slots saved for a thread on a context switch."""


class ThreadStatus(enum.Enum):
    """Life-cycle states of a thread."""

    JUST_CREATED = enum.auto()
    RUNNING = enum.auto()
    READY = enum.auto()
    BLOCKED = enum.auto()
    ZOMBIE = enum.auto()


@dataclass(eq=False)
class Thread:
    """A thread control block.

    ``space`` is the user address space the thread runs in, or ``None`` for
    a thread that only runs kernel code.
    """

    name: str
    thread_id: int
    status: ThreadStatus = ThreadStatus.JUST_CREATED
    space: Any = None

    def __str__(self) -> str:
        return self.name


class Scheduler:
    """The ready list: threads that can run but are not running.

    Threads are dispatched strictly first in, first out, with no priorities.
    """

    def __init__(self) -> None:
        self._ready: deque[Thread] = deque()

    def __len__(self) -> int:
        return len(self._ready)

    def __iter__(self) -> Iterator[Thread]:
        return iter(self._ready)

    def ready_to_run(self, thread: Thread) -> None:
        """Mark ``thread`` ready and put it at the back of the ready list."""
        thread.status = ThreadStatus.READY
        self._ready.append(thread)

    def find_next_to_run(self) -> Thread | None:
        """Remove and return the thread at the front, or ``None`` if none is ready."""
        if not self._ready:
            return None
        return self._ready.popleft()

    def describe(self) -> str:
        """Return the ready list contents, for debugging."""
        return "Ready list contents:\n" + "".join(thread.name for thread in self._ready)