"""Tracking of allocations and releases to find leaks and duplicate frees.

An AllocationTracker hands out blocks, remembers where each one was
requested, and on termination reports every block that was never freed.
A fixed number of entries is available. Running out of them is a fatal
error.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntFlag
from typing import TextIO

from .errors import abort_if

_FILE_NAME_LIMIT = 31


class TraceFlags(IntFlag):
    """What the tracker writes to its report stream."""

    SILENT = 0
    ALLOCS = 1 << 0
    FREES = 1 << 1
    DUP_FREES = 1 << 2
    LEAKS = 1 << 3
    TRACE = ALLOCS | FREES
    ERRORS = DUP_FREES | LEAKS
    FULL = TRACE | ERRORS


@dataclass
class _Trace:
    number: int
    line: int
    block: bytearray
    size: int
    file: str


def _basename(path: str) -> str:
    """Return the last component of a path with either separator style."""
    cut = max(path.rfind("/"), path.rfind("\\"))
    return path[cut + 1:]


def _address(block: object) -> str:
    return f"{id(block):#x}"


class AllocationTracker:
    """Hands out byte blocks and keeps a table of those not yet freed.

    The tracker is active from construction until terminate() is called.
    Once terminated, allocations and frees pass through untracked.
    """

    def __init__(
        self,
        capacity: int,
        flags: int = TraceFlags.ERRORS,
        report: TextIO | None = None,
        pool_name: str = "user",
    ) -> None:
        self._capacity = capacity
        self._table: list[_Trace | None] = [None] * capacity
        self._flags = TraceFlags(flags)
        self._report = report
        self._pool_name = pool_name
        self._odometer = 0
        self._high = 0
        self._active = True

    def __enter__(self) -> AllocationTracker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._active:
            self.terminate()

    @property
    def active(self) -> bool:
        """Whether allocations are currently being tracked."""
        return self._active

    @property
    def odometer(self) -> int:
        """Number of tracked allocations made so far."""
        return self._odometer

    @property
    def outstanding(self) -> int:
        """Number of tracked blocks not yet freed."""
        return sum(1 for entry in self._table if entry is not None)

    def _write(self, text: str) -> None:
        stream = self._report if self._report is not None else sys.stderr
        stream.write(text)

    def allocate(self, size: int, file: str, line: int) -> bytearray:
        """Return a new block of *size* bytes, recording *file* and *line*."""
        if not self._active:
            return bytearray(size)

        self._odometer += 1
        abort_if(self._high >= self._capacity, "txballoc trace table is full")

        slot = next(
            (i for i, entry in enumerate(self._table) if entry is None), None
        )
        abort_if(slot is None, "txballoc no free entry in trace table")
        assert slot is not None

        self._high = max(self._high, slot)
        block = bytearray(size)
        entry = _Trace(
            number=self._odometer,
            line=line,
            block=block,
            size=size,
            file=_basename(file)[:_FILE_NAME_LIMIT],
        )
        self._table[slot] = entry

        if self._flags & TraceFlags.ALLOCS:
            self._write(
                f"alloc: {entry.number:5d} {_address(block)} len {entry.size} "
                f"for {entry.file} {entry.line}\n"
            )
        return block

    def allocate_zeroed(
        self, count: int, size: int, file: str, line: int
    ) -> bytearray:
        """Return a zero filled block of *count* cells of *size* bytes each."""
        return self.allocate(count * size, file, line)

    def free(self, block: object, file: str, line: int) -> bool:
        """Release *block*; return whether it was found in the trace table.

        A block that is not in the table (never tracked, or already freed)
        is reported when error reporting is enabled and otherwise ignored.
        """
        if not self._active:
            return False

        slot = next(
            (
                i
                for i, entry in enumerate(self._table)
                if entry is not None and entry.block is block
            ),
            None,
        )
        if slot is None:
            if self._flags & TraceFlags.ERRORS:
                self._write(
                    f"error: {self._odometer:5d} {_address(block)} for "
                    f"{_basename(file)} {line} -- free not in trace, dup free?\n"
                )
            return False

        entry = self._table[slot]
        assert entry is not None
        if self._flags & TraceFlags.FREES:
            self._write(
                f"free : {entry.number:5d} {_address(block)} len {entry.size} "
                f"for {_basename(file)} {line}\n"
            )
        self._table[slot] = None
        return True

    def terminate(self) -> int:
        """Stop tracking, report leaked blocks, and return how many leaked."""
        abort_if(not self._active, "txballoc terminate called when not active")
        self._active = False

        leaks = [entry for entry in self._table if entry is not None]
        if self._flags & TraceFlags.FULL:
            self._write("\n***txballoc termination memory leak report***\n")
            self._write(f"{self._pool_name} pool\n")
            for ordinal, entry in enumerate(leaks, start=1):
                self._write(
                    f"{ordinal} @ {entry.number:5d} {_address(entry.block)} "
                    f"len {entry.size} {entry.file} {entry.line}\n"
                )
            total = sum(entry.size for entry in leaks)
            self._write(
                "\ntxballoc termination summary:\n"
                f"[high {self._high + 1}][odometer {self._odometer}]"
                f"[leaked {len(leaks)}][size {total}]\n"
            )

        self._table = []
        self._high = 0
        self._odometer = 0
        self._capacity = 0
        self._flags = TraceFlags.SILENT
        return len(leaks)