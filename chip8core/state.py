"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8core.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT,
    STACK_SIZE, NUM_REGISTERS, NUM_KEYS,
)


@dataclass(frozen=True)
class StackState:
    """Fixed-capacity return address stack."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Complete CHIP-8 machine state.

    The display is row-major: ``display[y, x]`` is the pixel in row ``y``,
    column ``x``.
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))


def create_state(rng: jax.Array = None) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    state = EmulatorState(rng)
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))
