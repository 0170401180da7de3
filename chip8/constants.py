"""Shared architecture constants for the CHIP-8 interpreter.

This module centralizes the fixed machine dimensions used by the memory
image, the interpreter core, the display and the tests.
"""

# Total addressable memory: 4 KiB, addresses 0x000-0xFFF.
MEMORY_SIZE = 0x1000

# Programs are loaded (and execution starts) at this address. Everything
# below it historically belonged to the interpreter itself; only the glyph
# table at 0x000 is used here.
PROGRAM_START = 0x200

# Largest ROM image that fits between PROGRAM_START and the end of memory.
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START  # 3584 bytes

# Where the built-in hex-digit glyphs live.
FONT_START = 0x000

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF

STACK_DEPTH = 16

NUM_KEYS = 16

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# Sprites are always one byte (eight pixels) wide.
SPRITE_WIDTH = 8

BYTE_MASK = 0xFF
WORD_MASK = 0xFFFF

# Logical clock used by the driving loop. The interpreter itself has no
# notion of wall-clock time; one tick also decrements both timers once.
CLOCK_HZ = 500
CLOCK_PERIOD = 1.0 / CLOCK_HZ
