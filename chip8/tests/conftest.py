"""Shared pytest fixtures for CHIP-8 interpreter tests."""

from __future__ import annotations

import random
from typing import Callable

import pytest

from chip8.config import TraceConfig
from chip8.interpreter import Chip8


def assemble(*words: int) -> bytes:
    return b"".join(word.to_bytes(2, "big") for word in words)


class FixedRandom(random.Random):
    """Random source that always yields the same byte."""

    def __init__(self, value: int) -> None:
        super().__init__(0)
        self.value = value

    def getrandbits(self, k: int) -> int:
        return self.value & ((1 << k) - 1)


@pytest.fixture
def machine() -> Chip8:
    return Chip8(rng=random.Random(0x5EED), trace=TraceConfig(opcodes=False))


@pytest.fixture
def load_program(machine: Chip8) -> Callable[..., Chip8]:
    def _load(*words: int) -> Chip8:
        machine.load(assemble(*words))
        return machine

    return _load


@pytest.fixture
def rom_bytes() -> Callable[..., bytes]:
    return assemble


@pytest.fixture
def fixed_random() -> Callable[[int], random.Random]:
    return FixedRandom
