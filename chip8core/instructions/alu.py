"""CHIP-8 ALU operations (8xxx).

Each helper takes the two operand values and returns ``(result, flag)``.
A flag of ``None`` leaves VF untouched. Helpers are plain ``jax.numpy``
expressions and broadcast over operand arrays.
"""

import jax.numpy as jnp
from chip8core.state import EmulatorState
from chip8core.decode import DecodedInstruction
from chip8core.constants import FLAG_REGISTER
from chip8core.instructions.system import unsupported


def alu_set(vx, vy):
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx, vy):
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx, vy):
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx, vy):
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx, vy):
    """8XY4 - Add: VX += VY, VF = carry."""
    total = jnp.astype(vx, jnp.int32) + jnp.astype(vy, jnp.int32)
    carry = jnp.astype(total > 0xFF, jnp.uint8)
    return jnp.astype(total & 0xFF, jnp.uint8), carry


def alu_sub_xy(vx, vy):
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    not_borrow = jnp.astype(vx >= vy, jnp.uint8)
    difference = (jnp.astype(vx, jnp.int32) - jnp.astype(vy, jnp.int32)) & 0xFF
    return jnp.astype(difference, jnp.uint8), not_borrow


def alu_shift_right(vx, vy):
    """8XY6 - Shift right: VX >>= 1, VF = old LSB."""
    shifted_bit = jnp.astype(vx & 1, jnp.uint8)
    return jnp.astype(vx >> 1, jnp.uint8), shifted_bit


def alu_sub_yx(vx, vy):
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    return alu_sub_xy(vy, vx)


def alu_shift_left(vx, vy):
    """8XYE - Shift left: VX <<= 1, VF = old MSB."""
    shifted_bit = jnp.astype((vx & 0x80) >> 7, jnp.uint8)
    result = (jnp.astype(vx, jnp.int32) << 1) & 0xFF
    return jnp.astype(result, jnp.uint8), shifted_bit


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


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    operation = ALU_OPERATIONS.get(instruction.n)
    if operation is None:
        return unsupported(state, instruction)

    result, flag = operation(state.V[instruction.x], state.V[instruction.y])

    new_V = state.V.at[instruction.x].set(result)
    if flag is not None:
        new_V = new_V.at[FLAG_REGISTER].set(flag)
    return state.replace(V=new_V)
