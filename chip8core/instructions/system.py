"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chip8core.state import EmulatorState
from chip8core.decode import DecodedInstruction
from chip8core.errors import UnsupportedInstructionError
from chip8core.stack import pop


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """0000 - No operation."""
    return state


def unsupported(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Reject an instruction outside the implemented set."""
    raise UnsupportedInstructionError(instruction.raw, int(state.pc) - 2)


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)


SYSTEM_INSTRUCTIONS = {
    0x0000: no_op,
    0x00E0: execute_clear_screen,
    0x00EE: execute_return,
}


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions."""
    handler = SYSTEM_INSTRUCTIONS.get(instruction.raw, unsupported)
    return handler(state, instruction)
