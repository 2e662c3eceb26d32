"""Test configuration and fixtures for CHIP-8 emulator tests."""

import jax
import jax.numpy as jnp
import pytest
from chip8core import create_state, load_rom


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state(jax.random.PRNGKey(0))


@pytest.fixture
def program_state(fresh_state):
    """Factory loading program bytes into a fresh state."""
    def _load(program):
        return load_rom(fresh_state, bytes(program))
    return _load


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=0x10)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)
