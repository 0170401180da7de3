"""Headless driving loop for the CHIP-8 interpreter."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

import numpy as np

from .errors import KeypadIndexError
from .interpreter import Chip8
from .keyboard import Keypad
from .scheduler import TickClock

logger = logging.getLogger(__name__)

FrameCallback = Callable[[int, np.ndarray], None]


@dataclass(frozen=True)
class KeyPress:
    """A scripted key press: held from tick ``start`` until tick ``end``."""

    key: int
    start: int
    end: Optional[int] = None

    @classmethod
    def parse(cls, text: str, keypad: Optional[Keypad] = None) -> "KeyPress":
        """Parse ``KEY:START[:END]``; KEY is a host key or a hex digit."""
        parts = text.split(":")
        if len(parts) not in (2, 3):
            raise ValueError(f"Expected KEY:START[:END], got {text!r}")
        try:
            key = (keypad or Keypad()).resolve(parts[0])
        except (KeyError, KeypadIndexError) as exc:
            raise ValueError(str(exc)) from None
        start = int(parts[1])
        end = int(parts[2]) if len(parts) == 3 and parts[2] else None
        if start < 0 or (end is not None and end <= start):
            raise ValueError(f"Invalid press window in {text!r}")
        return cls(key=key, start=start, end=end)


@dataclass
class RunStats:
    ticks: int = 0
    frames: int = 0
    elapsed: float = 0.0

    @property
    def ticks_per_second(self) -> float:
        return self.ticks / self.elapsed if self.elapsed > 0 else 0.0


def _apply_presses(machine: Chip8, presses: Iterable[KeyPress], tick: int) -> None:
    for press in presses:
        if press.start == tick:
            machine.press_key(press.key)
        elif press.end is not None and press.end == tick:
            machine.release_key(press.key)


def run_emulator(
    rom: Union[str, Path, bytes],
    num_steps: int = 5000,
    *,
    realtime: bool = False,
    presses: Iterable[KeyPress] = (),
    on_frame: Optional[FrameCallback] = None,
    machine: Optional[Chip8] = None,
    clock: Optional[TickClock] = None,
    now: Callable[[], float] = time.perf_counter,
    sleep: Callable[[float], None] = time.sleep,
) -> tuple[Chip8, RunStats]:
    """Load ``rom`` and run it for ``num_steps`` ticks.

    Args:
        rom: ROM path or raw image bytes
        num_steps: Number of ticks to execute
        realtime: Pace ticks at the fixed logical clock rate instead of
            running as fast as possible
        presses: Scripted key presses, keyed by tick number
        on_frame: Called with (tick, copy of the display) after every tick
            that changed the display

    Returns:
        The machine after the run, and run statistics. Interpreter faults
        propagate to the caller unchanged.
    """
    machine = machine or Chip8()
    if isinstance(rom, (bytes, bytearray)):
        machine.load(bytes(rom))
    else:
        machine.load_file(rom)

    presses = list(presses)
    clock = clock or TickClock()
    stats = RunStats()
    started = now()

    while stats.ticks < num_steps:
        if realtime:
            current = now()
            if not clock.due(current):
                sleep(clock.time_until_due(current))
                continue

        _apply_presses(machine, presses, stats.ticks)
        result = machine.tick()
        stats.ticks += 1
        if result.vram_updated:
            stats.frames += 1
            if on_frame is not None:
                on_frame(stats.ticks, result.vram.copy())

    stats.elapsed = now() - started
    logger.info(
        "Ran %d ticks (%d display updates) in %.3fs, %.0f ticks/s",
        stats.ticks,
        stats.frames,
        stats.elapsed,
        stats.ticks_per_second,
    )
    return machine, stats


__all__ = ["KeyPress", "RunStats", "run_emulator"]
