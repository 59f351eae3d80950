"""Bounds-checked memory access."""

from typing import Sequence

import jax.numpy as jnp

from chipcore.errors import MemoryBoundsError


def check_range(memory: jnp.ndarray, address: int, length: int = 1):
    """Raise if ``length`` bytes starting at ``address`` are not all addressable."""
    if address < 0 or length < 0 or address + length > memory.shape[0]:
        raise MemoryBoundsError(address, length)


def read(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    check_range(memory, address, length)
    return memory[address:address + length]


def write(memory: jnp.ndarray, address: int, data: Sequence[int]) -> jnp.ndarray:
    data = jnp.asarray(list(data), dtype=jnp.uint8)
    check_range(memory, address, data.shape[0])
    return memory.at[address:address + data.shape[0]].set(data)
