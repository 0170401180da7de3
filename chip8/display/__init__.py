"""Display subsystem for the CHIP-8 interpreter."""

from .framebuffer import Framebuffer
from .renderer import DEFAULT_BACKGROUND, DEFAULT_FOREGROUND, DisplayRenderer, render_text

__all__ = [
    "Framebuffer",
    "DisplayRenderer",
    "render_text",
    "DEFAULT_FOREGROUND",
    "DEFAULT_BACKGROUND",
]
