from __future__ import annotations

from pathlib import Path

import pytest

from chip8.constants import MAX_PROGRAM_SIZE, MEMORY_SIZE, PROGRAM_START
from chip8.errors import MemoryAccessError, RomLoadError
from chip8.font import FONTSET, glyph_address, glyph_bitmap
from chip8.memory import Chip8Memory, read_rom


def test_glyphs_preloaded_and_rest_zero() -> None:
    memory = Chip8Memory()
    assert len(memory) == MEMORY_SIZE
    assert bytes(memory.data[: len(FONTSET)]) == FONTSET
    assert len(FONTSET) == 80
    assert not any(memory.data[len(FONTSET) :])


def test_glyph_addresses_are_five_bytes_apart() -> None:
    assert glyph_address(0x0) == 0
    assert glyph_address(0xA) == 50
    assert glyph_bitmap(0x1)[0] == [0, 0, 1, 0]
    with pytest.raises(ValueError):
        glyph_address(16)


def test_read_word_is_big_endian() -> None:
    memory = Chip8Memory()
    memory.write_byte(0x300, 0xA2)
    memory.write_byte(0x301, 0xF0)
    assert memory.read_word(0x300) == 0xA2F0


def test_write_masks_to_byte() -> None:
    memory = Chip8Memory()
    memory.write_byte(0x300, 0x1FF)
    assert memory.read_byte(0x300) == 0xFF


@pytest.mark.parametrize("address", [-1, MEMORY_SIZE, 0xFFFF])
def test_out_of_range_access_raises(address: int) -> None:
    memory = Chip8Memory()
    with pytest.raises(MemoryAccessError):
        memory.read_byte(address)
    with pytest.raises(MemoryAccessError) as excinfo:
        memory.write_byte(address, 0)
    assert excinfo.value.write


def test_read_word_at_last_byte_raises() -> None:
    with pytest.raises(MemoryAccessError):
        Chip8Memory().read_word(MEMORY_SIZE - 1)


def test_load_program_places_image_at_0x200() -> None:
    memory = Chip8Memory()
    assert memory.load_program(b"\x12\x34\x56") == 3
    assert memory.read_block(PROGRAM_START, 4) == b"\x12\x34\x56\x00"


def test_load_program_truncates_silently() -> None:
    memory = Chip8Memory()
    program = bytes((i * 7) & 0xFF for i in range(MAX_PROGRAM_SIZE + 100))
    assert memory.load_program(program) == MAX_PROGRAM_SIZE
    assert memory.read_byte(MEMORY_SIZE - 1) == program[MAX_PROGRAM_SIZE - 1]


def test_shorter_load_leaves_trailing_bytes() -> None:
    memory = Chip8Memory()
    memory.load_program(b"\xAA\xBB\xCC")
    memory.load_program(b"\x11")
    assert memory.read_block(PROGRAM_START, 3) == b"\x11\xBB\xCC"


def test_read_rom_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "game.ch8"
    path.write_bytes(b"\x00\xE0\x12\x00")
    assert read_rom(path) == b"\x00\xE0\x12\x00"


def test_read_rom_missing_file(tmp_path: Path) -> None:
    with pytest.raises(RomLoadError) as excinfo:
        read_rom(tmp_path / "missing.ch8")
    assert "missing.ch8" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OSError)
