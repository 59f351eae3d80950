"""CHIP-8 control flow instructions."""

from chipcore.constants import OPCODE_SIZE
from chipcore.state import ProcessorState
from chipcore.decode import DecodedInstruction
from chipcore.errors import DecodeError
from chipcore.program_counter import ProgramCounter, Jump, skip_if
from chipcore.stack import push


def execute_jump(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """1NNN - Jump to address NNN."""
    return state, Jump(address=instruction.nnn)


def execute_call(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc + OPCODE_SIZE))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn, require_zero_n: bool = False):
    """Factory for skip instructions."""
    def skip_instruction(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
        if require_zero_n and instruction.n != 0:
            raise DecodeError(instruction.raw)
        return state, skip_if(condition_fn(state, instruction))
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y]),
    require_zero_n=True,
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y]),
    require_zero_n=True,
)


def execute_jump_with_offset(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """BNNN - Jump to address NNN + V0."""
    return state, Jump(address=instruction.nnn + int(state.V[0]))


def _key_pressed(state: ProcessorState, instruction: DecodedInstruction) -> bool:
    key_index = int(state.V[instruction.x]) & 0xF
    return bool(state.keypad[key_index])


execute_skip_if_key = make_skip_instruction(_key_pressed)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: not _key_pressed(state, inst)
)


def execute_key_instruction(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """EX9E/EXA1 - Skip if key pressed/not pressed."""
    if instruction.nn == 0x9E:
        return execute_skip_if_key(state, instruction)
    if instruction.nn == 0xA1:
        return execute_skip_if_not_key(state, instruction)
    raise DecodeError(instruction.raw)
