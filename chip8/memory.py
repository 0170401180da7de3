"""CHIP-8 memory image: glyph table, program window and byte access."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .constants import FONT_START, MAX_PROGRAM_SIZE, MEMORY_SIZE, PROGRAM_START
from .errors import MemoryAccessError, RomLoadError
from .font import FONTSET

logger = logging.getLogger(__name__)


def read_rom(path: Union[str, Path]) -> bytes:
    """Read a ROM image from disk.

    Raises ``RomLoadError`` when the file cannot be read. Contents are not
    validated; bad opcodes surface at run time.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise RomLoadError(str(path), exc.strerror or str(exc)) from exc
    logger.debug("Read %d bytes from %s", len(data), path)
    return data


class Chip8Memory:
    """Flat 4 KiB memory with the glyph table pre-loaded at 0x000.

    Direct bytearray access; every address is bounds-checked and an
    out-of-range access raises ``MemoryAccessError`` instead of wrapping.
    """

    def __init__(self) -> None:
        self.data = bytearray(MEMORY_SIZE)
        self.data[FONT_START : FONT_START + len(FONTSET)] = FONTSET

    def __len__(self) -> int:
        return len(self.data)

    def read_byte(self, address: int) -> int:
        if not (0 <= address < MEMORY_SIZE):
            raise MemoryAccessError(address)
        return self.data[address]

    def write_byte(self, address: int, value: int) -> None:
        if not (0 <= address < MEMORY_SIZE):
            raise MemoryAccessError(address, write=True)
        self.data[address] = value & 0xFF

    def read_word(self, address: int) -> int:
        """Read a big-endian 16-bit word (first byte is the high byte)."""
        return (self.read_byte(address) << 8) | self.read_byte(address + 1)

    def read_block(self, address: int, size: int) -> bytes:
        if size < 0 or address < 0 or address + size > MEMORY_SIZE:
            raise MemoryAccessError(address + max(size, 0))
        return bytes(self.data[address : address + size])

    def load_program(self, program: bytes) -> int:
        """Copy ``program`` to 0x200, truncating anything past the end of memory.

        Bytes after the copied image are left untouched. Returns the number of
        bytes actually copied.
        """
        size = min(len(program), MAX_PROGRAM_SIZE)
        if size < len(program):
            logger.warning(
                "ROM is %d bytes; truncated to %d", len(program), MAX_PROGRAM_SIZE
            )
        self.data[PROGRAM_START : PROGRAM_START + size] = program[:size]
        return size


__all__ = ["Chip8Memory", "read_rom"]
