"""CHIP-8 interpreter package."""

from .errors import (
    Chip8Error,
    KeypadIndexError,
    MemoryAccessError,
    RomLoadError,
    StackError,
    StackOverflowError,
    StackUnderflowError,
    UnknownOpcodeError,
)
from .interpreter import Chip8, Opcode, PCAction, TickResult
from .state_model import CPUState, MachineState, TimerState, capture_state

__all__ = [
    "Chip8",
    "Opcode",
    "PCAction",
    "TickResult",
    "CPUState",
    "TimerState",
    "MachineState",
    "capture_state",
    "Chip8Error",
    "RomLoadError",
    "MemoryAccessError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnknownOpcodeError",
    "KeypadIndexError",
]
