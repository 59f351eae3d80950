"""CHIP-8 system instructions (0x0xxx)."""

from chipcore.state import ProcessorState
from chipcore.decode import DecodedInstruction
from chipcore.errors import DecodeError
from chipcore.program_counter import ProgramCounter, NEXT, Jump
from chipcore.stack import pop


def execute_clear_screen(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """00E0 - Clear display."""
    return state.replace(display=state.display.clear()), NEXT


def execute_return(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack), Jump(address=address)


SYSTEM_INSTRUCTIONS = {
    0x00E0: execute_clear_screen,
    0x00EE: execute_return,
}


def execute_system_instruction(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """Dispatch system instructions."""
    handler = SYSTEM_INSTRUCTIONS.get(instruction.raw)
    if handler is None:
        # 0NNN machine-code calls are not supported
        raise DecodeError(instruction.raw)
    return handler(state, instruction)
