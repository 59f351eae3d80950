"""CHIP-8 display operations."""

from chipcore.constants import FLAG_REGISTER
from chipcore.state import ProcessorState
from chipcore.decode import DecodedInstruction
from chipcore.program_counter import ProgramCounter, NEXT
from chipcore import memory


def execute_display(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """DXYN - Draw sprite at (VX, VY) with height N."""
    sprite = memory.read(state.memory, state.I, instruction.n)
    display, result = state.display.draw(
        int(state.V[instruction.x]), int(state.V[instruction.y]), [int(b) for b in sprite]
    )
    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(int(result.collision)),
        last_draw=result,
    ), NEXT
