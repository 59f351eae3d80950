"""CHIP-8 ALU operations (8xxx)."""

from typing import Optional

from chipcore.constants import FLAG_REGISTER
from chipcore.state import ProcessorState
from chipcore.decode import DecodedInstruction
from chipcore.errors import DecodeError
from chipcore.program_counter import ProgramCounter, NEXT


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    carry = int(result > 0xFF)
    return result & 0xFF, carry


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, set borrow flag."""
    no_borrow = int(vx >= vy)
    result = (vx - vy) & 0xFF
    return result, no_borrow


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1."""
    shifted_bit = vx & 1
    result = vx >> 1
    return result, shifted_bit


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, set borrow flag."""
    no_borrow = int(vy >= vx)
    result = (vy - vx) & 0xFF
    return result, no_borrow


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1."""
    shifted_bit = (vx & 0x80) >> 7
    result = (vx << 1) & 0xFF
    return result, shifted_bit


ALU_OPERATIONS = {
    0x0: alu_set,
    0x1: alu_or,
    0x2: alu_and,
    0x3: alu_xor,
    0x4: alu_add,
    0x5: alu_sub_xy,
    0x6: alu_shift_right,
    0x7: alu_sub_yx,
    0xE: alu_shift_left,
}


def execute_alu_operation(state: ProcessorState, instruction: DecodedInstruction) -> tuple[ProcessorState, ProgramCounter]:
    """8XYN - ALU operations dispatcher."""
    operation = ALU_OPERATIONS.get(instruction.n)
    if operation is None:
        raise DecodeError(instruction.raw)

    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])
    result, flag = operation(vx, vy)

    # The flag is written last so it wins when X is VF
    new_V = state.V.at[instruction.x].set(result)
    if flag is not None:
        new_V = new_V.at[FLAG_REGISTER].set(flag)
    return state.replace(V=new_V), NEXT
