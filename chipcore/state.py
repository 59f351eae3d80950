"""CHIP-8 processor state structures."""

from typing import Optional

import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chipcore.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, STACK_SIZE, NUM_REGISTERS, NUM_KEYS,
)
from chipcore.display import Display, DrawResult, create_display
from chipcore.entropy import RandomByteSource, JaxRandomBytes


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class ProcessorState(PyTreeNode):
    """Main CHIP-8 processor state."""
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: int = PROGRAM_START
    I: int = 0
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    stack: StackState = field(default_factory=StackState)
    delay_timer: int = 0
    sound_timer: int = 0
    display: Display = field(default_factory=create_display)
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    current_key: Optional[int] = None
    last_draw: Optional[DrawResult] = None
    random_byte: RandomByteSource = field(pytree_node=False, default=None)


def load_font(memory: jnp.ndarray) -> jnp.ndarray:
    """Write the built-in font table into memory."""
    return memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)


def create_state(random_byte: Optional[RandomByteSource] = None, display: Optional[Display] = None) -> ProcessorState:
    """Create initial processor state with font data loaded."""
    state = ProcessorState(
        display=display if display is not None else create_display(),
        random_byte=random_byte if random_byte is not None else JaxRandomBytes(),
    )
    return state.replace(memory=load_font(state.memory))
