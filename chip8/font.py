"""Built-in hex-digit glyph set."""

from __future__ import annotations

from typing import List

from .constants import FONT_START

GLYPH_HEIGHT = 5
GLYPH_COUNT = 16

# One row per byte, high nibble only; glyph ``c`` starts at ``c * 5``.
FONTSET = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)


def glyph_address(digit: int) -> int:
    """Return the memory address of the glyph for a hex digit."""
    if not (0 <= digit < GLYPH_COUNT):
        raise ValueError(f"Glyph index out of range: {digit}")
    return FONT_START + digit * GLYPH_HEIGHT


def glyph_rows(digit: int) -> bytes:
    """Return the five sprite rows of a glyph."""
    offset = glyph_address(digit) - FONT_START
    return FONTSET[offset : offset + GLYPH_HEIGHT]


def glyph_bitmap(digit: int) -> List[List[int]]:
    """Decode a glyph into a 5x4 bitmap (1 = pixel on)."""
    return [[(row >> (7 - bit)) & 1 for bit in range(4)] for row in glyph_rows(digit)]


__all__ = ["FONTSET", "GLYPH_HEIGHT", "GLYPH_COUNT", "glyph_address", "glyph_rows", "glyph_bitmap"]
