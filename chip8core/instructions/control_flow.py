"""CHIP-8 control flow instructions."""

import jax.lax
import jax.numpy as jnp
from chip8core.state import EmulatorState
from chip8core.decode import DecodedInstruction
from chip8core.stack import push
from chip8core.instructions.system import unsupported


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.asarray(instruction.nnn, dtype=jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn, require_zero_n: bool = False):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if require_zero_n and instruction.n != 0:
            return unsupported(state, instruction)
        condition = condition_fn(state, instruction)
        return jax.lax.cond(
            condition,
            lambda s: s.replace(pc=s.pc + 2),
            lambda s: s,
            state
        )
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == state.V[inst.y],
    require_zero_n=True,
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != state.V[inst.y],
    require_zero_n=True,
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    # Not masked to 12 bits; fetch rejects targets past the end of memory
    jump_address = instruction.nnn + jnp.astype(state.V[0], jnp.uint16)
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))
