"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp

from chipcore.constants import FONT_START, FONT_CHAR_SIZE, FLAG_REGISTER, ADDRESS_MASK
from chipcore.state import ProcessorState
from chipcore.decode import DecodedInstruction
from chipcore.errors import DecodeError
from chipcore.program_counter import ProgramCounter, NEXT, BLOCK
from chipcore import memory


def execute_get_delay_timer(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer)), NEXT


def execute_set_delay_timer(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=int(state.V[instruction.x])), NEXT


def execute_set_sound_timer(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=int(state.V[instruction.x])), NEXT


def execute_add_to_index(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """FX1E - Add VX to I register."""
    new_i = state.I + int(state.V[instruction.x])
    overflow_flag = int(new_i > ADDRESS_MASK)
    return state.replace(
        I=new_i & ADDRESS_MASK,
        V=state.V.at[FLAG_REGISTER].set(overflow_flag)
    ), NEXT


def execute_wait_for_key(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """FX0A - Wait for key press (blocking)."""
    if state.current_key is None:
        return state, BLOCK
    return state.replace(V=state.V.at[instruction.x].set(state.current_key)), NEXT


def execute_font_character(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    return state.replace(I=FONT_START + digit * FONT_CHAR_SIZE), NEXT


def execute_bcd_conversion(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=memory.write(state.memory, state.I, digits)), NEXT


def execute_store_registers(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    new_memory = memory.write(state.memory, state.I, state.V[:count])
    return state.replace(memory=new_memory), NEXT


def execute_load_registers(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    values = memory.read(state.memory, state.I, count)
    return state.replace(V=state.V.at[:count].set(values.astype(jnp.uint8))), NEXT


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn)
    if handler is None:
        raise DecodeError(instruction.raw)
    return handler(state, instruction)
