"""Exceptions raised by the CHIP-8 core."""


class Chip8Error(Exception):
    """Base class for every error raised by chipcore."""


class DecodeError(Chip8Error):
    """The instruction word matches no known pattern."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Unknown opcode: {opcode:#06X}")


class BoundsError(Chip8Error):
    """A stack or memory access fell outside its fixed range."""


class StackOverflowError(BoundsError):
    """CALL issued with every stack slot already in use."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Stack overflow while calling {address:#05X}")


class StackUnderflowError(BoundsError):
    """RET issued with an empty stack."""

    def __init__(self):
        super().__init__("Stack underflow: return without a matching call")


class MemoryBoundsError(BoundsError):
    """Memory read or write outside the addressable range."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        super().__init__(
            f"Memory access out of bounds: {length} byte(s) at {address:#06X}"
        )
