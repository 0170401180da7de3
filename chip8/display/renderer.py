"""Rasterize the framebuffer to Pillow images or plain text."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image

RGB = Tuple[int, int, int]

DEFAULT_FOREGROUND: RGB = (224, 224, 255)
DEFAULT_BACKGROUND: RGB = (26, 26, 34)


class DisplayRenderer:
    """Renders a boolean pixel grid to an RGB image."""

    def __init__(
        self,
        scale: int = 8,
        fg_color: RGB = DEFAULT_FOREGROUND,
        bg_color: RGB = DEFAULT_BACKGROUND,
    ):
        if scale < 1:
            raise ValueError(f"scale must be positive, got {scale}")
        self.scale = scale
        self.fg_color = fg_color
        self.bg_color = bg_color

    def render(self, pixels: np.ndarray) -> Image.Image:
        """Render ``pixels`` (height x width booleans) to a scaled image."""
        mask = np.asarray(pixels, dtype=bool)
        height, width = mask.shape
        rgb = np.empty((height, width, 3), dtype=np.uint8)
        rgb[...] = self.bg_color
        rgb[mask] = self.fg_color
        image = Image.fromarray(rgb)
        if self.scale > 1:
            image = image.resize((width * self.scale, height * self.scale), Image.NEAREST)
        return image

    def save(self, pixels: np.ndarray, path: Union[str, Path]) -> Path:
        path = Path(path)
        self.render(pixels).save(path)
        return path


def render_text(pixels: np.ndarray, on: str = "#", off: str = ".") -> str:
    """Render the grid as one text line per pixel row."""
    mask = np.asarray(pixels, dtype=bool)
    return "\n".join("".join(on if lit else off for lit in row) for row in mask)


__all__ = ["DisplayRenderer", "render_text", "DEFAULT_FOREGROUND", "DEFAULT_BACKGROUND"]
