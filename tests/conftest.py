"""Test configuration and fixtures for CHIP-8 core tests."""

import pytest
import jax.numpy as jnp
from chipcore import create_state, execute, Processor, PROGRAM_START, OPCODE_SIZE

NEXT_PC = PROGRAM_START + OPCODE_SIZE
SKIPPED_PC = PROGRAM_START + 2 * OPCODE_SIZE


@pytest.fixture
def fresh_state():
    """Provide a fresh processor state with a fixed random byte."""
    return create_state(random_byte=lambda: 0xA5)


@pytest.fixture
def processor():
    """Provide a fresh processor with a fixed random byte."""
    return Processor(random_byte=lambda: 0xA5)


def run(state, *instructions):
    """Execute each instruction in turn and return the final state."""
    for instruction in instructions:
        state, result = execute(state, instruction)
        assert result.success, f"0x{instruction:04X} failed to decode"
    return state


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=3)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )
