"""CHIP-8 interpreter core."""

from chip8core.state import EmulatorState, StackState, create_state
from chip8core.emulator import (
    execute, fetch, step, load_rom, reset, decrement_timers, set_key, sound_active, framebuffer,
)
from chip8core.decode import DecodedInstruction, decode
from chip8core.errors import (
    Chip8Error, UnsupportedInstructionError, StackOverflowError, StackUnderflowError,
    MemoryAccessError, ProgramTooLargeError,
)
from chip8core.interpreter import Interpreter
from chip8core.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "load_rom",
    "reset",
    "decrement_timers",
    "set_key",
    "sound_active",
    "framebuffer",
    "DecodedInstruction",
    "decode",
    "Interpreter",
    "Chip8Error",
    "UnsupportedInstructionError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
    "ProgramTooLargeError",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
]
