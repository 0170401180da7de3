"""Immutable snapshots of the interpreter state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .interpreter import Chip8


@dataclass(frozen=True)
class CPUState:
    """Register file, index register, program counter and call stack."""

    registers: Tuple[int, ...]
    index: int
    pc: int
    stack: Tuple[int, ...]
    tick_count: int


@dataclass(frozen=True)
class TimerState:
    delay: int
    sound: int


@dataclass(frozen=True)
class MachineState:
    """Composite snapshot of one machine between ticks."""

    cpu: CPUState
    timers: TimerState
    memory: bytes
    keys: Tuple[bool, ...]
    display: Tuple[Tuple[bool, ...], ...]

    def register(self, index: int) -> int:
        return self.cpu.registers[index]

    def lit_pixels(self) -> int:
        return sum(sum(row) for row in self.display)


def capture_state(machine: Chip8) -> MachineState:
    """Capture the current machine state as a canonical snapshot."""

    cpu = CPUState(
        registers=machine.registers,
        index=machine.index_register,
        pc=machine.program_counter,
        stack=machine.stack,
        tick_count=machine.tick_count,
    )
    timers = TimerState(delay=machine.delay_timer, sound=machine.sound_timer)
    display = tuple(tuple(bool(p) for p in row) for row in machine.display.pixels)
    return MachineState(
        cpu=cpu,
        timers=timers,
        memory=bytes(machine.memory.data),
        keys=machine.keypad.states,
        display=display,
    )


__all__ = ["CPUState", "TimerState", "MachineState", "capture_state"]
