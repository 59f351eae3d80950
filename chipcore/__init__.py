"""CHIP-8 virtual machine core."""

from chipcore.state import ProcessorState, StackState, create_state
from chipcore.emulator import (
    ExecutionResult, execute, fetch, tick, reset, load_program, load_rom,
    key_down, key_up, should_beep,
)
from chipcore.decode import DecodedInstruction, decode
from chipcore.display import Display, DrawResult, PixelUpdate, create_display
from chipcore.processor import Processor
from chipcore.keys import Key
from chipcore.entropy import JaxRandomBytes
from chipcore.errors import (
    Chip8Error, DecodeError, BoundsError, StackOverflowError, StackUnderflowError, MemoryBoundsError,
)
from chipcore.constants import *

__all__ = [
    "ProcessorState",
    "StackState",
    "create_state",
    "ExecutionResult",
    "fetch",
    "execute",
    "tick",
    "reset",
    "load_program",
    "load_rom",
    "key_down",
    "key_up",
    "should_beep",
    "DecodedInstruction",
    "decode",
    "Display",
    "DrawResult",
    "PixelUpdate",
    "create_display",
    "Processor",
    "Key",
    "JaxRandomBytes",
    "Chip8Error",
    "DecodeError",
    "BoundsError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryBoundsError",
    "PROGRAM_START",
    "FONT_START",
    "OPCODE_SIZE",
    "MEMORY_SIZE",
    "STACK_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
