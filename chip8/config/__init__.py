"""Configuration system for the CHIP-8 interpreter."""

from .runner_config import RunnerConfig
from .trace import TraceConfig, load_trace_config

__all__ = ["RunnerConfig", "TraceConfig", "load_trace_config"]
