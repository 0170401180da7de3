"""CHIP-8 interpreter core.

A cycle-step interpreter: every ``tick()`` fetches one big-endian opcode at
the program counter, decodes it into nibbles, dispatches on the high nibble
and then decrements the two timers once. The core never looks at wall-clock
time; pacing belongs to the driving loop (see ``run_chip8``).
"""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from .config import TraceConfig, load_trace_config
from .constants import (
    BYTE_MASK,
    FLAG_REGISTER,
    NUM_REGISTERS,
    PROGRAM_START,
    STACK_DEPTH,
    WORD_MASK,
)
from .display import Framebuffer
from .errors import StackOverflowError, StackUnderflowError, UnknownOpcodeError
from .font import glyph_address
from .keyboard import Keypad
from .memory import Chip8Memory, read_rom

logger = logging.getLogger(__name__)


class PCAction(enum.Enum):
    """What to do with the program counter after an instruction."""

    NEXT = enum.auto()  # +2
    SKIP = enum.auto()  # +4, conditional skip taken
    HOLD = enum.auto()  # already set (jump/call/return) or retry (key wait)


_PC_STEP = {PCAction.NEXT: 2, PCAction.SKIP: 4, PCAction.HOLD: 0}


@dataclass(frozen=True)
class Opcode:
    """One fetched instruction word split into its fields."""

    word: int
    address: int = PROGRAM_START

    @property
    def family(self) -> int:
        return (self.word >> 12) & 0xF

    @property
    def x(self) -> int:
        return (self.word >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.word >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.word & 0xF

    @property
    def nn(self) -> int:
        return self.word & 0xFF

    @property
    def nnn(self) -> int:
        return self.word & 0xFFF

    @property
    def nibbles(self) -> Tuple[int, int, int, int]:
        return (self.family, self.x, self.y, self.n)

    def __str__(self) -> str:
        return f"{self.word:04X}"


@dataclass(frozen=True)
class TickResult:
    """Display buffer after a tick and whether the tick changed it.

    ``vram`` is a read-only view of the live buffer; copy it if it has to
    outlive the next ``tick()``.
    """

    vram: np.ndarray
    vram_updated: bool


Handler = Callable[[Opcode], PCAction]


class Chip8:
    """The whole machine: memory, registers, stack, timers, display, keys.

    State is created once and mutated in place by ``tick()``. Hosts touch it
    only through ``load``, the key methods and the read accessors.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        trace: Optional[TraceConfig] = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._trace = (trace or load_trace_config()).opcodes
        self.keypad = Keypad()
        self._program = b""
        self._families: Dict[int, Handler] = {
            0x0: self._op_system,
            0x1: self._op_jump,
            0x2: self._op_call,
            0x3: self._op_skip_eq_imm,
            0x4: self._op_skip_ne_imm,
            0x5: self._op_skip_eq_reg,
            0x6: self._op_load_imm,
            0x7: self._op_add_imm,
            0x8: self._op_alu,
            0x9: self._op_skip_ne_reg,
            0xA: self._op_load_index,
            0xB: self._op_jump_offset,
            0xC: self._op_random,
            0xD: self._op_draw,
            0xE: self._op_key_skip,
            0xF: self._op_misc,
        }
        self._alu: Dict[int, Callable[[int, int], None]] = {
            0x0: self._alu_assign,
            0x1: self._alu_or,
            0x2: self._alu_and,
            0x3: self._alu_xor,
            0x4: self._alu_add,
            0x5: self._alu_sub,
            0x6: self._alu_shr,
            0x7: self._alu_subn,
            0xE: self._alu_shl,
        }
        self._misc: Dict[int, Callable[[int], PCAction]] = {
            0x07: self._misc_read_delay,
            0x0A: self._misc_wait_key,
            0x15: self._misc_set_delay,
            0x18: self._misc_set_sound,
            0x1E: self._misc_add_index,
            0x29: self._misc_glyph,
            0x33: self._misc_bcd,
            0x55: self._misc_store_registers,
            0x65: self._misc_load_registers,
        }
        self._init_state()

    def _init_state(self) -> None:
        self.memory = Chip8Memory()
        self.v = bytearray(NUM_REGISTERS)
        self.i = 0
        self.pc = PROGRAM_START
        self._stack: List[int] = []
        self.delay_timer = 0
        self.sound_timer = 0
        self.display = Framebuffer()
        self.keypad.release_all()
        self.tick_count = 0

    # ------------------------------------------------------------------
    # Loading and lifecycle
    # ------------------------------------------------------------------

    def load(self, program: bytes) -> int:
        """Copy a ROM image to 0x200; returns the number of bytes used."""
        self._program = bytes(program)
        size = self.memory.load_program(self._program)
        logger.info("Loaded %d-byte program at 0x%03X", size, PROGRAM_START)
        return size

    def load_file(self, path: Union[str, Path]) -> int:
        """Read a ROM from disk and load it. Raises ``RomLoadError``."""
        return self.load(read_rom(path))

    def reset(self) -> None:
        """Return to power-on state with the last loaded program in memory."""
        self._init_state()
        if self._program:
            self.memory.load_program(self._program)
        logger.debug("Machine reset")

    # ------------------------------------------------------------------
    # Host-facing accessors
    # ------------------------------------------------------------------

    @property
    def registers(self) -> Tuple[int, ...]:
        return tuple(self.v)

    @property
    def index_register(self) -> int:
        return self.i

    @property
    def program_counter(self) -> int:
        return self.pc

    @property
    def stack(self) -> Tuple[int, ...]:
        return tuple(self._stack)

    @property
    def sound_active(self) -> bool:
        """True while the host should be sounding the buzzer."""
        return self.sound_timer > 0

    def press_key(self, index: int) -> None:
        self.keypad.press(index)

    def release_key(self, index: int) -> None:
        self.keypad.release(index)

    def set_key(self, index: int, pressed: bool) -> None:
        self.keypad.set(index, pressed)

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    def tick(self) -> TickResult:
        """Execute one instruction, then one timer step."""
        self.display.begin_cycle()

        opcode = self.fetch()
        if self._trace:
            logger.debug("0x%03X: %s", opcode.address, opcode)
        action = self.execute(opcode)
        self.pc = (self.pc + _PC_STEP[action]) & WORD_MASK

        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

        self.tick_count += 1
        return TickResult(vram=self.display.view(), vram_updated=self.display.dirty)

    def fetch(self) -> Opcode:
        return Opcode(self.memory.read_word(self.pc), self.pc)

    def execute(self, opcode: Opcode) -> PCAction:
        return self._families[opcode.family](opcode)

    def _unknown(self, opcode: Opcode) -> PCAction:
        raise UnknownOpcodeError(opcode.word, opcode.address)

    def _set_flag(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value

    def _push(self, address: int) -> None:
        if len(self._stack) >= STACK_DEPTH:
            raise StackOverflowError(len(self._stack) + 1, self.pc)
        self._stack.append(address)

    def _pop(self) -> int:
        if not self._stack:
            raise StackUnderflowError(self.pc)
        return self._stack.pop()

    # ------------------------------------------------------------------
    # Instruction families
    # ------------------------------------------------------------------

    def _op_system(self, op: Opcode) -> PCAction:
        if op.word == 0x00E0:
            self.display.clear()
            return PCAction.NEXT
        if op.word == 0x00EE:
            self.pc = self._pop()
            return PCAction.HOLD
        return self._unknown(op)

    def _op_jump(self, op: Opcode) -> PCAction:
        self.pc = op.nnn
        return PCAction.HOLD

    def _op_call(self, op: Opcode) -> PCAction:
        self._push((self.pc + 2) & WORD_MASK)
        self.pc = op.nnn
        return PCAction.HOLD

    def _op_skip_eq_imm(self, op: Opcode) -> PCAction:
        return PCAction.SKIP if self.v[op.x] == op.nn else PCAction.NEXT

    def _op_skip_ne_imm(self, op: Opcode) -> PCAction:
        return PCAction.SKIP if self.v[op.x] != op.nn else PCAction.NEXT

    def _op_skip_eq_reg(self, op: Opcode) -> PCAction:
        if op.n != 0x0:
            return self._unknown(op)
        return PCAction.SKIP if self.v[op.x] == self.v[op.y] else PCAction.NEXT

    def _op_skip_ne_reg(self, op: Opcode) -> PCAction:
        if op.n != 0x0:
            return self._unknown(op)
        return PCAction.SKIP if self.v[op.x] != self.v[op.y] else PCAction.NEXT

    def _op_load_imm(self, op: Opcode) -> PCAction:
        self.v[op.x] = op.nn
        return PCAction.NEXT

    def _op_add_imm(self, op: Opcode) -> PCAction:
        # No carry flag, unlike 8xy4.
        self.v[op.x] = (self.v[op.x] + op.nn) & BYTE_MASK
        return PCAction.NEXT

    def _op_alu(self, op: Opcode) -> PCAction:
        handler = self._alu.get(op.n)
        if handler is None:
            return self._unknown(op)
        handler(op.x, op.y)
        return PCAction.NEXT

    def _op_load_index(self, op: Opcode) -> PCAction:
        self.i = op.nnn
        return PCAction.NEXT

    def _op_jump_offset(self, op: Opcode) -> PCAction:
        self.pc = op.nnn + self.v[0x0]
        return PCAction.HOLD

    def _op_random(self, op: Opcode) -> PCAction:
        self.v[op.x] = self._rng.getrandbits(8) & op.nn
        return PCAction.NEXT

    def _op_draw(self, op: Opcode) -> PCAction:
        rows = self.memory.read_block(self.i, op.n) if op.n else b""
        collision = self.display.draw_sprite(self.v[op.x], self.v[op.y], rows)
        self._set_flag(1 if collision else 0)
        return PCAction.NEXT

    def _op_key_skip(self, op: Opcode) -> PCAction:
        if op.nn == 0x9E:
            pressed = self.keypad.is_pressed(self.v[op.x])
            return PCAction.SKIP if pressed else PCAction.NEXT
        if op.nn == 0xA1:
            pressed = self.keypad.is_pressed(self.v[op.x])
            return PCAction.NEXT if pressed else PCAction.SKIP
        return self._unknown(op)

    def _op_misc(self, op: Opcode) -> PCAction:
        handler = self._misc.get(op.nn)
        if handler is None:
            return self._unknown(op)
        return handler(op.x)

    # ------------------------------------------------------------------
    # 8xyN register-register operations. The flag is always written last,
    # so VF as destination ends up holding the flag.
    # ------------------------------------------------------------------

    def _alu_assign(self, x: int, y: int) -> None:
        self.v[x] = self.v[y]

    def _alu_or(self, x: int, y: int) -> None:
        self.v[x] |= self.v[y]

    def _alu_and(self, x: int, y: int) -> None:
        self.v[x] &= self.v[y]

    def _alu_xor(self, x: int, y: int) -> None:
        self.v[x] ^= self.v[y]

    def _alu_add(self, x: int, y: int) -> None:
        total = self.v[x] + self.v[y]
        self.v[x] = total & BYTE_MASK
        self._set_flag(1 if total > BYTE_MASK else 0)

    def _alu_sub(self, x: int, y: int) -> None:
        a, b = self.v[x], self.v[y]
        self.v[x] = (a - b) & BYTE_MASK
        self._set_flag(1 if a >= b else 0)

    def _alu_subn(self, x: int, y: int) -> None:
        a, b = self.v[x], self.v[y]
        self.v[x] = (b - a) & BYTE_MASK
        self._set_flag(1 if b >= a else 0)

    def _alu_shr(self, x: int, y: int) -> None:
        value = self.v[x]
        self.v[x] = value >> 1
        self._set_flag(value & 0x1)

    def _alu_shl(self, x: int, y: int) -> None:
        value = self.v[x]
        self.v[x] = (value << 1) & BYTE_MASK
        self._set_flag((value >> 7) & 0x1)

    # ------------------------------------------------------------------
    # FxNN
    # ------------------------------------------------------------------

    def _misc_read_delay(self, x: int) -> PCAction:
        self.v[x] = self.delay_timer
        return PCAction.NEXT

    def _misc_wait_key(self, x: int) -> PCAction:
        key = self.keypad.first_pressed()
        if key is None:
            return PCAction.HOLD
        self.v[x] = key
        return PCAction.NEXT

    def _misc_set_delay(self, x: int) -> PCAction:
        self.delay_timer = self.v[x]
        return PCAction.NEXT

    def _misc_set_sound(self, x: int) -> PCAction:
        self.sound_timer = self.v[x]
        return PCAction.NEXT

    def _misc_add_index(self, x: int) -> PCAction:
        self.i = (self.i + self.v[x]) & WORD_MASK
        return PCAction.NEXT

    def _misc_glyph(self, x: int) -> PCAction:
        self.i = glyph_address(self.v[x] & 0xF)
        return PCAction.NEXT

    def _misc_bcd(self, x: int) -> PCAction:
        value = self.v[x]
        self.memory.write_byte(self.i, value // 100)
        self.memory.write_byte(self.i + 1, (value // 10) % 10)
        self.memory.write_byte(self.i + 2, value % 10)
        return PCAction.NEXT

    def _misc_store_registers(self, x: int) -> PCAction:
        for index in range(x + 1):
            self.memory.write_byte(self.i + index, self.v[index])
        return PCAction.NEXT

    def _misc_load_registers(self, x: int) -> PCAction:
        for index in range(x + 1):
            self.v[index] = self.memory.read_byte(self.i + index)
        return PCAction.NEXT


__all__ = ["Chip8", "Opcode", "PCAction", "TickResult"]
