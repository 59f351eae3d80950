"""CHIP-8 memory and register operations."""

from chipcore.state import ProcessorState
from chipcore.decode import DecodedInstruction
from chipcore.program_counter import ProgramCounter, NEXT


def execute_set(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.nn)), NEXT


def execute_add(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """7XNN - Add NN to VX. Wraps at 256 and leaves VF alone."""
    result = (int(state.V[instruction.x]) + instruction.nn) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(result)), NEXT


def execute_set_index(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """ANNN - Set I = NNN."""
    return state.replace(I=instruction.nnn), NEXT


def execute_random(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """CXNN - Set VX = random & NN."""
    random_value = int(state.random_byte()) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(random_value & instruction.nn)), NEXT
