"""Errors raised by the CHIP-8 engine.

Every error is detected before a new state is produced, so the state passed in
by the caller is still valid after catching one.
"""


class Chip8Error(Exception):
    """Base class for all engine errors."""


class UnsupportedInstructionError(Chip8Error):
    """Instruction has no defined behavior in this interpreter."""

    def __init__(self, instruction: int, address: int):
        self.instruction = instruction
        self.address = address
        super().__init__(f"Unsupported instruction 0x{instruction:04X} at 0x{address:03X}")


class StackOverflowError(Chip8Error):
    """CALL with every stack slot in use."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Stack overflow: all {capacity} return slots in use")


class StackUnderflowError(Chip8Error):
    """RET with nothing on the stack."""

    def __init__(self):
        super().__init__("Stack underflow: return with empty stack")


class MemoryAccessError(Chip8Error):
    """Access outside the addressable memory range."""

    def __init__(self, address: int, reason: str):
        self.address = address
        self.reason = reason
        super().__init__(f"Invalid memory access at 0x{address:X}: {reason}")


class ProgramTooLargeError(Chip8Error):
    """Program does not fit between the load address and the end of memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"Program of {size} bytes exceeds capacity of {capacity} bytes")
