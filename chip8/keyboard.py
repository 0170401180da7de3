"""Hex keypad state and the host keyboard mapping."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple

from .constants import NUM_KEYS
from .errors import KeypadIndexError

# Conventional layout: the 4x4 block under 1-4 on a QWERTY keyboard.
#
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
DEFAULT_KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


def _check_index(index: int) -> int:
    if not (0 <= index < NUM_KEYS):
        raise KeypadIndexError(index)
    return index


class Keypad:
    """Sixteen independent key flags.

    Only the host mutates these, between ticks; the interpreter reads them.
    """

    def __init__(self, key_map: Optional[Mapping[str, int]] = None) -> None:
        self._states: List[bool] = [False] * NUM_KEYS
        self.key_map: Dict[str, int] = dict(key_map or DEFAULT_KEY_MAP)

    def press(self, index: int) -> None:
        self._states[_check_index(index)] = True

    def release(self, index: int) -> None:
        self._states[_check_index(index)] = False

    def set(self, index: int, pressed: bool) -> None:
        self._states[_check_index(index)] = bool(pressed)

    def release_all(self) -> None:
        self._states = [False] * NUM_KEYS

    def is_pressed(self, index: int) -> bool:
        return self._states[_check_index(index)]

    def first_pressed(self) -> Optional[int]:
        """Lowest-numbered pressed key, or None."""
        for index, pressed in enumerate(self._states):
            if pressed:
                return index
        return None

    def pressed_keys(self) -> Tuple[int, ...]:
        return tuple(i for i, pressed in enumerate(self._states) if pressed)

    @property
    def states(self) -> Tuple[bool, ...]:
        return tuple(self._states)

    def resolve(self, key: str) -> int:
        """Translate a host key name (or a hex digit) to a keypad index.

        Host key names from ``key_map`` win over hex digits, so with the
        default map "1" is keypad 0x1 either way but "c" is keypad 0xB.
        """
        lowered = key.strip().lower()
        if lowered in self.key_map:
            return self.key_map[lowered]
        if lowered.startswith("0x"):
            lowered = lowered[2:]
        try:
            return _check_index(int(lowered, 16))
        except ValueError:
            raise KeyError(f"Unknown key {key!r}") from None

    def press_host_key(self, key: str) -> bool:
        """Press the keypad key bound to a host key; False if unbound."""
        index = self.key_map.get(key.lower())
        if index is None:
            return False
        self.press(index)
        return True

    def release_host_key(self, key: str) -> bool:
        index = self.key_map.get(key.lower())
        if index is None:
            return False
        self.release(index)
        return True


__all__ = ["DEFAULT_KEY_MAP", "Keypad"]
