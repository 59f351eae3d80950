"""Stateful CHIP-8 processor built on the functional core."""

from typing import Optional, Sequence, Union

import numpy as np

from chipcore import emulator, memory
from chipcore.display import Display
from chipcore.emulator import ExecutionResult
from chipcore.entropy import RandomByteSource
from chipcore.keys import Key
from chipcore.logging import get_logger
from chipcore.state import ProcessorState, create_state

logger = get_logger("chipcore.processor")


class Processor:
    """A CHIP-8 machine that a driver steps with ``tick()``.

    The processor keeps one immutable ``ProcessorState`` and swaps it for the
    next one after every operation. When an operation raises (stack overflow,
    out-of-range memory access) the swap never happens, so the machine is
    left exactly as it was before the failing instruction.

    Args:
        random_byte: Zero-argument callable returning a byte, used by CXNN.
            Defaults to a seeded ``jax.random`` source.
        display: Optional pre-sized display to draw on.
    """

    def __init__(self, random_byte: Optional[RandomByteSource] = None, display: Optional[Display] = None):
        self.state: ProcessorState = create_state(random_byte, display)

    @property
    def pc(self) -> int:
        return self.state.pc

    @pc.setter
    def pc(self, address: int):
        self.state = self.state.replace(pc=int(address))

    @property
    def i(self) -> int:
        return self.state.I

    @i.setter
    def i(self, address: int):
        self.state = self.state.replace(I=int(address))

    @property
    def sp(self) -> int:
        return self.state.stack.pointer

    @property
    def display(self) -> Display:
        return self.state.display

    @property
    def delay_timer(self) -> int:
        return self.state.delay_timer

    @property
    def sound_timer(self) -> int:
        return self.state.sound_timer

    @property
    def current_key(self) -> Optional[Key]:
        key = self.state.current_key
        return None if key is None else Key(key)

    def registers(self) -> np.ndarray:
        return np.asarray(self.state.V)

    def register(self, index: int) -> int:
        return int(self.state.V[index])

    def memory(self) -> np.ndarray:
        return np.asarray(self.state.memory)

    def stack(self) -> list[int]:
        """Return addresses currently on the stack, oldest first."""
        return [int(address) for address in self.state.stack.data[:self.sp]]

    def fetch(self) -> int:
        return emulator.fetch(self.state)

    def execute(self, opcode: int) -> ExecutionResult:
        self.state, result = emulator.execute(self.state, opcode)
        return result

    def tick(self) -> ExecutionResult:
        """Run one cycle: count the timers down, then fetch and execute."""
        self.state, result = emulator.tick(self.state)
        return result

    def reset(self):
        self.state = emulator.reset(self.state)
        logger.debug("Processor reset")

    def load(self, data: Sequence[int]) -> int:
        """Reset and load a program at 0x200. Returns the number of bytes copied."""
        data = bytes(int(b) for b in data)
        self.state = emulator.load_program(self.state, data)
        logger.info(f"Loaded {len(data)} bytes into memory")
        return len(data)

    def load_rom(self, filename: str) -> int:
        with open(filename, 'rb') as f:
            return self.load(f.read())

    def key_down(self, key: Union[int, Key]):
        self.state = emulator.key_down(self.state, key)

    def key_up(self, key: Union[int, Key]):
        self.state = emulator.key_up(self.state, key)

    def should_beep(self) -> bool:
        return emulator.should_beep(self.state)

    def set_register(self, index: int, value: int):
        """Poke a general register, for debuggers and tests."""
        self.state = self.state.replace(V=self.state.V.at[index].set(int(value) & 0xFF))

    def write_memory(self, address: int, data: Sequence[int]):
        """Poke bytes into memory without resetting, for debuggers and tests."""
        self.state = self.state.replace(memory=memory.write(self.state.memory, address, data))
