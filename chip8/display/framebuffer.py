"""64x32 monochrome framebuffer with XOR sprite drawing."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from ..constants import DISPLAY_HEIGHT, DISPLAY_WIDTH, SPRITE_WIDTH

_BIT_OFFSETS = np.arange(SPRITE_WIDTH)


class Framebuffer:
    """Boolean pixel grid, row-major, with a per-cycle dirty flag.

    ``pixels[y, x]`` is True when the pixel is lit. The array is allocated
    once and only ever mutated in place.
    """

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=bool)
        self.dirty = False

    def begin_cycle(self) -> None:
        """Reset the dirty flag; called at the start of every tick."""
        self.dirty = False

    def clear(self) -> None:
        """Turn every pixel off. Always marks the buffer dirty."""
        self.pixels.fill(False)
        self.dirty = True

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR an 8-pixel-wide sprite onto the grid at (x, y).

        Coordinates wrap around both edges. Returns True if any lit pixel
        was turned off (collision).
        """
        collision = False
        columns = (x + _BIT_OFFSETS) % self.width
        for offset, row in enumerate(rows):
            bits = np.unpackbits(np.array([row & 0xFF], dtype=np.uint8)).astype(bool)
            if not bits.any():
                continue
            line = (y + offset) % self.height
            targets = columns[bits]
            current = self.pixels[line, targets]
            if current.any():
                collision = True
            self.pixels[line, targets] = ~current
            self.dirty = True
        return collision

    def get_pixel(self, x: int, y: int) -> bool:
        if 0 <= x < self.width and 0 <= y < self.height:
            return bool(self.pixels[y, x])
        return False

    def set_pixel(self, x: int, y: int, value: bool) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y, x] = bool(value)
            self.dirty = True

    def view(self) -> np.ndarray:
        """Read-only view of the live buffer, valid until the next tick."""
        view = self.pixels.view()
        view.flags.writeable = False
        return view

    def get_display_buffer(self) -> np.ndarray:
        """Detached copy of the current pixels."""
        return self.pixels.copy()

    def lit_count(self) -> int:
        return int(np.count_nonzero(self.pixels))


__all__ = ["Framebuffer"]
