"""Interactive pygame front end for the CHIP-8 processor."""

import argparse
import sys
from typing import Optional, Sequence

import pygame

from chipcore.entropy import JaxRandomBytes
from chipcore.errors import BoundsError
from chipcore.logging import get_logger, set_log_level
from chipcore.processor import Processor
from chipcore.rendering import create_color_scheme

logger = get_logger("chipcore.player")

# Modern key mapping
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

CLEAR_SCREEN = 0x00E0


def handle_key_event(processor: Processor, event) -> bool:
    """Forward a pygame key event to the keypad. Returns True if it was a CHIP-8 key."""
    key = KEY_MAP.get(getattr(event, "key", None))
    if key is None:
        return False
    if event.type == pygame.KEYDOWN:
        processor.key_down(key)
    elif event.type == pygame.KEYUP:
        processor.key_up(key)
    else:
        return False
    return True


class Screen:
    """Window that mirrors the processor display, redrawing only changed cells."""

    def __init__(self, width: int, height: int, scale: int = 10, color_scheme: str = "classic"):
        self.scale = scale
        self.on_color, self.off_color = create_color_scheme(color_scheme)
        self.surface = pygame.display.set_mode((width * scale, height * scale))

    def _cell(self, row: int, col: int, on: bool):
        rect = pygame.Rect(col * self.scale, row * self.scale, self.scale, self.scale)
        pygame.draw.rect(self.surface, self.on_color if on else self.off_color, rect)

    def redraw(self, processor: Processor):
        self.surface.fill(self.off_color)
        frame = processor.display.frame()
        for row, col in zip(*frame.nonzero()):
            self._cell(int(row), int(col), True)

    def apply(self, result):
        if result.opcode == CLEAR_SCREEN:
            self.surface.fill(self.off_color)
        elif result.draw is not None:
            for update in result.draw.updates:
                self._cell(update.row, update.col, update.on)


def play(rom: str, ipf: int = 10, fps: int = 60, scale: int = 10, color_scheme: str = "classic", seed: int = 0) -> int:
    """Run ``rom`` in a window until it is closed or a bounds error occurs."""
    pygame.init()
    pygame.display.set_caption(f"chipcore - {rom}")

    processor = Processor(random_byte=JaxRandomBytes(seed))
    processor.load_rom(rom)
    screen = Screen(processor.display.width, processor.display.height, scale, color_scheme)
    screen.redraw(processor)
    clock = pygame.time.Clock()

    paused = False
    running = True
    exit_code = 0
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_p:
                paused = not paused
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_F5:
                processor.load_rom(rom)
                screen.redraw(processor)
                logger.info("Reset")
            else:
                handle_key_event(processor, event)

        if not paused:
            try:
                for _ in range(ipf):
                    result = processor.tick()
                    screen.apply(result)
            except BoundsError as error:
                logger.critical(f"{error} (pc={processor.pc:#05X})")
                paused = True
                exit_code = 1

        pygame.display.flip()
        clock.tick(fps)

    pygame.quit()
    return exit_code


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Play a CHIP-8 ROM in a window")
    parser.add_argument("rom", help="the ROM file to load on startup")
    parser.add_argument(
        "-s", "--scale", type=int, default=10,
        help="the scale factor to apply to the display (default is 10)")
    parser.add_argument(
        "--ipf", type=int, default=10,
        help="instructions per frame (default is 10)")
    parser.add_argument(
        "--fps", type=int, default=60,
        help="frames per second (default is 60)")
    parser.add_argument("--color-scheme", default="classic")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    set_log_level(args.log_level)
    return play(args.rom, args.ipf, args.fps, args.scale, args.color_scheme, args.seed)


if __name__ == "__main__":
    sys.exit(main())
