#!/usr/bin/env python3
"""Command-line runner for CHIP-8 ROMs."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .config import RunnerConfig
from .display import DisplayRenderer, render_text
from .errors import Chip8Error
from .interpreter import Chip8
from .run_chip8 import KeyPress, run_emulator

logger = logging.getLogger("chip8")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Headless CHIP-8 interpreter")
    parser.add_argument("rom", type=str, help="Path to the ROM image")
    parser.add_argument(
        "--steps", type=int, default=5000, help="Number of ticks to execute"
    )
    parser.add_argument(
        "--realtime",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Pace ticks at the logical clock rate (default: run flat out)",
    )
    parser.add_argument(
        "--press",
        action="append",
        default=[],
        metavar="KEY:START[:END]",
        help="Hold KEY from tick START until tick END (repeatable)",
    )
    parser.add_argument(
        "--save-frame", type=str, help="Save the final display as a PNG"
    )
    parser.add_argument(
        "--print-frame", action="store_true", help="Print the final display as text"
    )
    parser.add_argument("--scale", type=int, help="Pixel scale for --save-frame")
    parser.add_argument("--config", type=str, help="JSON runner configuration")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (set CHIP8_TRACE=1 to log every opcode)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = RunnerConfig.load(args.config) if args.config else RunnerConfig()
        if args.scale is not None:
            config = replace(config, scale=args.scale)
    except (OSError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    machine = Chip8()
    machine.keypad.key_map = dict(config.key_map)
    try:
        presses = [KeyPress.parse(text, machine.keypad) for text in args.press]
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    try:
        machine, stats = run_emulator(
            args.rom,
            num_steps=args.steps,
            realtime=args.realtime,
            presses=presses,
            machine=machine,
        )
    except Chip8Error as exc:
        logger.error("Emulation stopped after %d ticks: %s", machine.tick_count, exc)
        return 1

    print(
        f"{config.name}: {stats.ticks} ticks, {stats.frames} display updates, "
        f"PC=0x{machine.program_counter:03X}"
    )

    pixels = machine.display.get_display_buffer()
    if args.print_frame:
        print(render_text(pixels))
    if args.save_frame:
        renderer = DisplayRenderer(
            scale=config.scale, fg_color=config.foreground, bg_color=config.background
        )
        path = renderer.save(pixels, args.save_frame)
        print(f"Saved frame to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
