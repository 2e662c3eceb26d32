"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8core.state import EmulatorState
from chip8core.decode import DecodedInstruction
from chip8core.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH, MEMORY_SIZE, FLAG_REGISTER
from chip8core.errors import MemoryAccessError

# Bit shift per sprite column, most significant bit first
_column_shifts = jnp.arange(SPRITE_WIDTH - 1, -1, -1)
_column_offsets = jnp.arange(SPRITE_WIDTH)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - XOR an 8xN sprite from memory[I] onto the display at (VX, VY).

    Coordinates wrap on each axis independently. VF is set when any lit pixel
    is turned off.
    """
    height = instruction.n
    start = int(state.I)
    if start + height > MEMORY_SIZE:
        raise MemoryAccessError(start + height - 1, "sprite data past end of memory")

    sprite_bytes = state.memory[start + jnp.arange(height)]
    sprite = ((sprite_bytes[:, None] >> _column_shifts[None, :]) & 1).astype(jnp.bool_)

    rows = (jnp.astype(state.V[instruction.y], jnp.int32) + jnp.arange(height)) % SCREEN_HEIGHT
    cols = (jnp.astype(state.V[instruction.x], jnp.int32) + _column_offsets) % SCREEN_WIDTH
    region = state.display[rows[:, None], cols[None, :]]

    collision = jnp.any(region & sprite)
    display = state.display.at[rows[:, None], cols[None, :]].set(region ^ sprite)

    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )
