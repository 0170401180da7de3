"""Host configuration for the headless CHIP-8 runner."""

from dataclasses import dataclass, field
from typing import Dict, Tuple
import json
from pathlib import Path

from ..constants import NUM_KEYS
from ..display.renderer import DEFAULT_BACKGROUND, DEFAULT_FOREGROUND
from ..keyboard import DEFAULT_KEY_MAP


def _color_to_str(color: Tuple[int, int, int]) -> str:
    return "#{:02X}{:02X}{:02X}".format(*color)


def _color_from_value(value) -> Tuple[int, int, int]:
    if isinstance(value, str):
        text = value.lstrip("#")
        if len(text) != 6:
            raise ValueError(f"Invalid colour {value!r}")
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
    r, g, b = value
    return (int(r), int(g), int(b))


def _validate_key_map(key_map: Dict[str, int]) -> Dict[str, int]:
    validated: Dict[str, int] = {}
    for key, index in key_map.items():
        if isinstance(index, str):
            index = int(index, 16)
        if not (0 <= index < NUM_KEYS):
            raise ValueError(f"Key {key!r} maps to invalid keypad index {index}")
        validated[key.lower()] = index
    return validated


@dataclass
class RunnerConfig:
    """Rendering and input settings for a run.

    The logical clock rate is fixed (see ``constants.CLOCK_HZ``) and is
    deliberately not part of this configuration.
    """
    name: str = "CHIP-8"
    scale: int = 8
    foreground: Tuple[int, int, int] = DEFAULT_FOREGROUND
    background: Tuple[int, int, int] = DEFAULT_BACKGROUND
    key_map: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEY_MAP))

    def __post_init__(self):
        if self.scale < 1:
            raise ValueError(f"scale must be positive, got {self.scale}")
        self.foreground = _color_from_value(self.foreground)
        self.background = _color_from_value(self.background)
        self.key_map = _validate_key_map(self.key_map)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "scale": self.scale,
            "foreground": _color_to_str(self.foreground),
            "background": _color_to_str(self.background),
            "key_map": {key: f"0x{index:X}" for key, index in self.key_map.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'RunnerConfig':
        return cls(
            name=data.get("name", "CHIP-8"),
            scale=int(data.get("scale", 8)),
            foreground=data.get("foreground", DEFAULT_FOREGROUND),
            background=data.get("background", DEFAULT_BACKGROUND),
            key_map=data.get("key_map", dict(DEFAULT_KEY_MAP)),
        )

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> 'RunnerConfig':
        """Load configuration from JSON file."""
        with open(Path(path), 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)
