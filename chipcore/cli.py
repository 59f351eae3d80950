"""Headless command-line driver: run a ROM for a number of cycles."""

import argparse
import sys
from typing import Optional, Sequence

from chipcore.entropy import JaxRandomBytes
from chipcore.errors import BoundsError
from chipcore.logging import get_logger, set_log_level, progress
from chipcore.processor import Processor
from chipcore.rendering import display_to_text, save_png

logger = get_logger("chipcore.cli")


def parse_keys(value: str) -> list[int]:
    """Parse a comma separated list of hex key digits, e.g. ``"5,a"``."""
    if not value:
        return []
    try:
        keys = [int(token, 16) for token in value.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Keys must be hex digits, got '{value}'")
    for key in keys:
        if not 0 <= key <= 0xF:
            raise argparse.ArgumentTypeError(f"Key {key:#x} is outside 0-F")
    return keys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run a CHIP-8 program headlessly and show the final frame"
    )
    parser.add_argument("rom", help="the ROM file to load")
    parser.add_argument(
        "-c", "--cycles", type=int, default=600,
        help="number of cycles to run (default is 600)")
    parser.add_argument(
        "--seed", type=int, default=0,
        help="seed for the random byte source (default is 0)")
    parser.add_argument(
        "--keys", type=parse_keys, default=[],
        help="hex keys held down for the whole run, e.g. '5,a'")
    parser.add_argument(
        "--halt-on-error", action="store_true",
        help="stop at the first unknown instruction")
    parser.add_argument(
        "--png", default=None,
        help="write the final frame to this PNG file")
    parser.add_argument(
        "--scale", type=int, default=8,
        help="upscaling factor for the PNG (default is 8)")
    parser.add_argument(
        "--color-scheme", default="classic",
        help="colour scheme for the PNG (default is classic)")
    parser.add_argument(
        "--no-text", action="store_true",
        help="do not print the final frame to stdout")
    parser.add_argument(
        "--progress", action="store_true",
        help="show a progress bar")
    parser.add_argument(
        "--log-level", default="WARNING",
        help="DEBUG, INFO, WARNING, ERROR or CRITICAL (default is WARNING)")
    return parser


def run(processor: Processor, cycles: int, halt_on_error: bool = False, show_progress: bool = False) -> int:
    """Tick ``processor`` up to ``cycles`` times. Returns the cycles executed."""
    executed = 0
    for _ in progress(range(cycles), total=cycles, enabled=show_progress):
        result = processor.tick()
        executed += 1
        if not result.success and halt_on_error:
            logger.warning(f"Halting after {executed} cycles on opcode {result.opcode:#06X}")
            break
    return executed


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    set_log_level(args.log_level)

    processor = Processor(random_byte=JaxRandomBytes(args.seed))
    processor.load_rom(args.rom)
    for key in args.keys:
        processor.key_down(key)

    try:
        executed = run(processor, args.cycles, args.halt_on_error, args.progress)
    except BoundsError as error:
        logger.critical(f"{error} (pc={processor.pc:#05X})")
        return 1
    logger.info(f"Ran {executed} cycles, pc={processor.pc:#05X}")

    if not args.no_text:
        print(display_to_text(processor.display))
    if args.png:
        save_png(processor.display, args.png, args.scale, args.color_scheme)
        logger.info(f"Saved frame to {args.png}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
