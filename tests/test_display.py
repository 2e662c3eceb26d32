"""Tests for display operations (DXYN)."""

import jax.numpy as jnp
import pytest
from chip8core import execute, MemoryAccessError
from conftest import setup_sprite_in_memory


def draw_at(state, x, y, sprite, address=0x300):
    """Put a sprite in memory and point V0, V1 and I at it."""
    state = setup_sprite_in_memory(state, address, sprite)
    state = execute(state, 0x6000 | x)
    state = execute(state, 0x6100 | y)
    return execute(state, 0xA000 | address)


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        state = draw_at(fresh_state, 10, 5, [0xC0, 0xC0])  # 2x2 box

        state = execute(state, 0xD012)

        assert state.display[5, 10]
        assert state.display[5, 11]
        assert state.display[6, 10]
        assert state.display[6, 11]
        assert not state.display[5, 12]
        assert jnp.sum(state.display) == 4
        assert state.V[15] == 0

    def test_collision_detection(self, fresh_state):
        """Test collision flag when sprite overlaps existing pixels."""
        state = draw_at(fresh_state, 20, 10, [0x80])

        state = execute(state, 0xD011)
        assert state.display[10, 20]
        assert state.V[15] == 0

        state = execute(state, 0xD011)
        assert not state.display[10, 20]
        assert state.V[15] == 1

    def test_double_draw_restores_display(self, fresh_state):
        """Drawing twice is self-inverse, even over existing pixels."""
        state = fresh_state.replace(display=fresh_state.display.at[3, 3].set(True).at[8, 9].set(True))
        state = draw_at(state, 2, 2, [0xF0, 0x90, 0xF0, 0x90, 0xF0])
        before = state.display

        state = execute(state, 0xD015)
        state = execute(state, 0xD015)

        assert jnp.array_equal(state.display, before)
        assert state.V[15] == 1

    def test_draw_does_not_clear_background(self, fresh_state):
        """Zero bits in the sprite leave lit pixels lit."""
        state = fresh_state.replace(display=fresh_state.display.at[0, 1].set(True))
        state = draw_at(state, 0, 0, [0x80])

        state = execute(state, 0xD011)

        assert state.display[0, 0]
        assert state.display[0, 1]
        assert state.V[15] == 0


class TestScreenWrapping:
    """Test sprite wrapping at the screen edges."""

    def test_right_edge_wraps(self, fresh_state):
        """A row drawn at x=63 continues at column 0."""
        state = draw_at(fresh_state, 63, 0, [0xFF])

        state = execute(state, 0xD011)

        assert state.display[0, 63]
        for column in range(7):
            assert state.display[0, column]
        assert jnp.sum(state.display) == 8

    def test_bottom_edge_wraps(self, fresh_state):
        """Rows past the bottom continue at row 0."""
        state = draw_at(fresh_state, 0, 30, [0x80, 0x80, 0x80])

        state = execute(state, 0xD013)

        assert state.display[30, 0]
        assert state.display[31, 0]
        assert state.display[0, 0]

    def test_coordinate_wrapping(self, fresh_state):
        """Starting coordinates are reduced modulo the screen size."""
        state = draw_at(fresh_state, 70, 37, [0x80])

        state = execute(state, 0xD011)

        assert state.display[5, 6]


class TestSpriteVariations:
    """Test different sprite configurations."""

    def test_different_sprite_heights(self, fresh_state):
        """Only N rows are drawn."""
        state = draw_at(fresh_state, 10, 8, [0x80, 0x40, 0x20, 0x10, 0x08])

        state = execute(state, 0xD013)

        assert state.display[8, 10]
        assert state.display[9, 11]
        assert state.display[10, 12]
        assert not state.display[11, 13]

    def test_zero_height_sprite(self, fresh_state):
        """N=0 draws nothing and clears VF."""
        state = draw_at(fresh_state, 1, 1, [0xFF])
        state = execute(state, 0x6F01)

        state = execute(state, 0xD010)

        assert jnp.sum(state.display) == 0
        assert state.V[15] == 0

    def test_font_sprite(self, fresh_state):
        """The built-in "0" glyph at address 0 draws a 4x5 outline."""
        state = execute(fresh_state, 0xA000)

        state = execute(state, 0xD015)

        assert jnp.sum(state.display) == 14

    def test_sprite_past_end_of_memory(self, fresh_state):
        """Reading sprite rows beyond memory is an error."""
        state = execute(fresh_state, 0xAFFE)

        with pytest.raises(MemoryAccessError):
            execute(state, 0xD013)

    def test_sprite_at_end_of_memory(self, fresh_state):
        """The last bytes of memory are readable."""
        state = execute(fresh_state, 0xAFFE)
        state = execute(state, 0xD012)
        assert state.V[15] == 0
