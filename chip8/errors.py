"""Exception hierarchy for the CHIP-8 interpreter.

Every error raised by the core is fatal for the current run: nothing is
retried or skipped inside ``tick()``. The driving loop decides how to stop
and what to report.
"""

from __future__ import annotations

from typing import Optional


class Chip8Error(Exception):
    """Base class for all interpreter faults."""


class RomLoadError(Chip8Error):
    """The ROM byte source could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not load ROM '{path}': {reason}")
        self.path = path


class MemoryAccessError(Chip8Error):
    """An address outside 0x000-0xFFF was read or written."""

    def __init__(self, address: int, *, write: bool = False) -> None:
        kind = "write" if write else "read"
        super().__init__(f"Memory {kind} out of range: 0x{address:04X}")
        self.address = address
        self.write = write


class StackError(Chip8Error):
    """Call stack misuse."""


class StackOverflowError(StackError):
    def __init__(self, depth: int, address: Optional[int] = None) -> None:
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Call stack overflow (depth {depth}){where}")
        self.depth = depth
        self.address = address


class StackUnderflowError(StackError):
    def __init__(self, address: Optional[int] = None) -> None:
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Return with empty call stack{where}")
        self.address = address


class UnknownOpcodeError(Chip8Error):
    """The fetched word matches no instruction pattern."""

    def __init__(self, opcode: int, address: int) -> None:
        super().__init__(f"Unimplemented opcode 0x{opcode:04X} at 0x{address:03X}")
        self.opcode = opcode
        self.address = address


class KeypadIndexError(Chip8Error):
    """A key index outside 0x0-0xF was used."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Key index out of range: 0x{index:X}")
        self.index = index


__all__ = [
    "Chip8Error",
    "RomLoadError",
    "MemoryAccessError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnknownOpcodeError",
    "KeypadIndexError",
]
