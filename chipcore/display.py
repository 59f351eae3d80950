"""CHIP-8 display: pixel buffer and sprite blitting."""

from typing import NamedTuple, Sequence

import jax.numpy as jnp
import numpy as np
from flax.struct import PyTreeNode, field

from chipcore.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH

# Column offsets and bit shifts for one sprite row, most significant bit first
_BIT_OFFSETS = jnp.arange(SPRITE_WIDTH)
_BIT_SHIFTS = jnp.arange(SPRITE_WIDTH - 1, -1, -1)


class PixelUpdate(NamedTuple):
    """Final state of a cell touched by a sprite."""
    row: int
    col: int
    on: bool


class DrawResult(NamedTuple):
    """Outcome of a sprite blit."""
    collision: bool
    updates: tuple[PixelUpdate, ...]


class Display(PyTreeNode):
    """Monochrome pixel buffer indexed as ``pixels[row, col]``."""
    pixels: jnp.ndarray = field(
        default_factory=lambda: jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_)
    )

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    def _check_bounds(self, row: int, col: int):
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(
                f"Pixel ({row}, {col}) outside {self.height}x{self.width} display"
            )

    def clear(self) -> "Display":
        """Turn every pixel off."""
        return self.replace(pixels=jnp.zeros_like(self.pixels))

    def get_pixel(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return bool(self.pixels[row, col])

    def set_pixel(self, row: int, col: int, on: bool) -> "Display":
        self._check_bounds(row, col)
        return self.replace(pixels=self.pixels.at[row, col].set(bool(on)))

    def frame(self) -> np.ndarray:
        """Copy of the whole buffer as a numpy boolean array."""
        return np.asarray(self.pixels, dtype=np.bool_)

    def draw(self, x: int, y: int, sprite_rows: Sequence[int]) -> tuple["Display", DrawResult]:
        """XOR a sprite onto the buffer at column ``x``, row ``y``.

        Each byte of ``sprite_rows`` is one row of eight pixels, most
        significant bit on the left. Rows and columns that run past an edge
        wrap around to the opposite edge.

        Returns the new display together with a ``DrawResult``. ``collision``
        is true when at least one lit pixel was switched off. ``updates``
        holds the final value of every cell the sprite touched, so a renderer
        can redraw just those cells.
        """
        pixels = self.pixels
        collision = False
        touched = {}

        for offset, row_byte in enumerate(sprite_rows):
            row_byte = int(row_byte) & 0xFF
            if not row_byte:
                continue
            row = (int(y) + offset) % self.height
            cols = (int(x) + _BIT_OFFSETS) % self.width
            sprite_bits = ((row_byte >> _BIT_SHIFTS) & 1).astype(jnp.bool_)

            previous = pixels[row, cols]
            collision = collision or bool(jnp.any(previous & sprite_bits))
            updated = previous ^ sprite_bits
            pixels = pixels.at[row, cols].set(updated)

            for bit, (col, on) in enumerate(zip(np.asarray(cols), np.asarray(updated))):
                if (row_byte >> (SPRITE_WIDTH - 1 - bit)) & 1:
                    touched[(row, int(col))] = bool(on)

        updates = tuple(PixelUpdate(row, col, on) for (row, col), on in touched.items())
        return self.replace(pixels=pixels), DrawResult(collision, updates)


def create_display(width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> Display:
    """Create a blank display of the given size."""
    if width < SPRITE_WIDTH or height < 1:
        raise ValueError(
            f"Display must be at least {SPRITE_WIDTH} pixels wide and 1 pixel high, "
            f"got {width}x{height}"
        )
    return Display(pixels=jnp.zeros((height, width), dtype=jnp.bool_))
