"""Main CHIP-8 execution engine."""

from typing import NamedTuple, Optional, Sequence, Union

from chipcore.constants import PROGRAM_START, NUM_KEYS, MAX_PROGRAM_SIZE
from chipcore.state import ProcessorState, load_font
from chipcore.decode import decode
from chipcore.display import DrawResult
from chipcore.errors import DecodeError, MemoryBoundsError
from chipcore.keys import Key
from chipcore.program_counter import NEXT, advance
from chipcore.instructions.system import execute_system_instruction
from chipcore.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_key_instruction
)
from chipcore.instructions.alu import execute_alu_operation
from chipcore.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipcore.instructions.display import execute_display
from chipcore.instructions.misc import execute_misc_instruction
from chipcore.logging import get_logger
from chipcore import memory

logger = get_logger("chipcore.emulator")

INSTRUCTION_TABLE = [
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_key_instruction,
    execute_misc_instruction,
]


class ExecutionResult(NamedTuple):
    """What happened when one instruction word was executed."""
    success: bool
    opcode: int
    draw: Optional[DrawResult] = None


def fetch(state: ProcessorState) -> int:
    """Fetch the instruction word at pc. Does not move pc."""
    high, low = memory.read(state.memory, state.pc, 2)
    return (int(high) << 8) | int(low)


def execute(state: ProcessorState, instruction: int) -> tuple[ProcessorState, ExecutionResult]:
    """Execute single CHIP-8 instruction.

    The handler picked by the top nibble mutates the state and chooses how pc
    moves; the move is applied here. An unknown word leaves the state alone
    apart from advancing pc to the next instruction.

    Raises:
        BoundsError: the instruction overflowed the stack or touched memory
            outside the address space. The passed-in state is unchanged.
    """
    decoded_instruction = decode(instruction)
    state = state.replace(last_draw=None)

    try:
        new_state, pc_change = INSTRUCTION_TABLE[decoded_instruction.opcode](state, decoded_instruction)
    except DecodeError as error:
        logger.error(f"{error} at pc={state.pc:#05X}")
        return state.replace(pc=advance(state.pc, NEXT)), ExecutionResult(False, decoded_instruction.raw)

    new_state = new_state.replace(pc=advance(state.pc, pc_change))
    return new_state, ExecutionResult(True, decoded_instruction.raw, new_state.last_draw)


def tick_timers(state: ProcessorState) -> ProcessorState:
    """Count both timers down by one, stopping at zero."""
    return state.replace(
        delay_timer=max(state.delay_timer - 1, 0),
        sound_timer=max(state.sound_timer - 1, 0),
    )


def tick(state: ProcessorState) -> tuple[ProcessorState, ExecutionResult]:
    """Run one cycle: timers first, then fetch and execute."""
    state = tick_timers(state)
    return execute(state, fetch(state))


def reset(state: ProcessorState) -> ProcessorState:
    """Return the power-on state, keeping the random source and key state."""
    display = state.display.clear()
    cleared = ProcessorState(
        display=display,
        keypad=state.keypad,
        current_key=state.current_key,
        random_byte=state.random_byte,
    )
    return cleared.replace(memory=load_font(cleared.memory))


def load_program(state: ProcessorState, data: Sequence[int]) -> ProcessorState:
    """Reset and copy ``data`` into memory at the program start address."""
    data = list(data)
    if len(data) > MAX_PROGRAM_SIZE:
        raise MemoryBoundsError(PROGRAM_START, len(data))
    state = reset(state)
    return state.replace(memory=memory.write(state.memory, PROGRAM_START, data))


def load_rom(state: ProcessorState, filename: str) -> ProcessorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)


def _key_index(key: Union[int, Key]) -> int:
    index = int(key)
    if not 0 <= index < NUM_KEYS:
        raise ValueError(f"Key must be in range 0x0-0xF, got {key!r}")
    return index


def key_down(state: ProcessorState, key: Union[int, Key]) -> ProcessorState:
    """Mark ``key`` as held and remember it as the current key."""
    index = _key_index(key)
    return state.replace(keypad=state.keypad.at[index].set(True), current_key=index)


def key_up(state: ProcessorState, key: Union[int, Key]) -> ProcessorState:
    """Release ``key``; forget the current key only if it is this one."""
    index = _key_index(key)
    current_key = None if state.current_key == index else state.current_key
    return state.replace(keypad=state.keypad.at[index].set(False), current_key=current_key)


def should_beep(state: ProcessorState) -> bool:
    return state.sound_timer > 0
