"""Opcode tracing switch, read from the ``CHIP8_TRACE`` environment variable.

Any value other than ``0``, ``false``, ``off`` or an empty string turns on a
DEBUG log line per executed opcode.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

_FALSE_VALUES = {"0", "false", "off", ""}


@dataclass(frozen=True)
class TraceConfig:
    opcodes: bool


def load_trace_config() -> TraceConfig:
    raw = os.getenv("CHIP8_TRACE")
    enabled = raw is not None and raw.strip().casefold() not in _FALSE_VALUES
    return TraceConfig(opcodes=enabled)


__all__ = ["TraceConfig", "load_trace_config"]
