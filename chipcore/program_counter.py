"""Program counter transitions chosen by instruction handlers."""

import enum
from typing import Union

from chex import dataclass

from chipcore.constants import OPCODE_SIZE


class Step(enum.Enum):
    """Relative program counter moves."""
    NEXT = OPCODE_SIZE       # Move to the following instruction
    SKIP = 2 * OPCODE_SIZE   # Step over the following instruction
    BLOCK = 0                # Run the same instruction again next cycle


NEXT = Step.NEXT
SKIP = Step.SKIP
BLOCK = Step.BLOCK


@dataclass(frozen=True)
class Jump:
    """Absolute program counter move."""
    address: int


ProgramCounter = Union[Step, Jump]


def skip_if(condition) -> Step:
    return SKIP if condition else NEXT


def advance(pc: int, outcome: ProgramCounter) -> int:
    """Apply a transition to the current program counter."""
    if isinstance(outcome, Jump):
        return int(outcome.address)
    return pc + outcome.value
