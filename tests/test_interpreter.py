"""Tests for the Interpreter owning handle."""

import io

import pytest
from chip8core import Interpreter, UnsupportedInstructionError, ProgramTooLargeError
from chip8core.logging import ConsoleLogger


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def interpreter(log_stream):
    logger = ConsoleLogger(log_level="DEBUG", stream=log_stream, show_timestamps=False)
    return Interpreter(seed=1, logger=logger)


def test_run_program(interpreter):
    interpreter.load(bytes([0x00, 0xE0, 0x60, 0x05, 0x70, 0x03, 0x12, 0x06]))
    interpreter.run(3)
    assert interpreter.state.V[0] == 8
    assert interpreter.step() == 0x1206
    assert interpreter.state.pc == 0x206


def test_error_keeps_state_and_logs(interpreter, log_stream):
    interpreter.load(bytes([0x60, 0x07, 0xF0, 0x0A]))
    interpreter.step()
    before = interpreter.state

    with pytest.raises(UnsupportedInstructionError):
        interpreter.step()

    assert interpreter.state is before
    assert interpreter.state.pc == 0x202
    output = log_stream.getvalue()
    assert "0xF00A" in output
    assert "V0=07" in output


def test_load_too_large(interpreter):
    with pytest.raises(ProgramTooLargeError):
        interpreter.load(bytes(4000))
    assert interpreter.state.memory[0x200] == 0


def test_reset(interpreter):
    interpreter.load(bytes([0x60, 0x07]))
    interpreter.step()
    interpreter.reset()
    assert interpreter.state.pc == 0x200
    assert interpreter.state.V[0] == 0
    assert interpreter.state.memory[0x200] == 0


def test_timers_and_sound(interpreter, log_stream):
    interpreter._state = interpreter.state.replace(sound_timer=interpreter.state.sound_timer + 2)
    assert interpreter.sound_active
    assert interpreter.tick_timers() is False
    assert interpreter.tick_timers() is True
    assert interpreter.tick_timers() is False
    assert not interpreter.sound_active
    assert "Sound timer expired" in log_stream.getvalue()


def test_keys_and_framebuffer(interpreter):
    interpreter.set_key(3, True)
    assert interpreter.state.keypad[3]
    interpreter.load(bytes([0xD0, 0x15]))  # draw font "0" at (0, 0)
    interpreter.step()
    frame = interpreter.framebuffer
    assert frame.shape == (32, 64)
    assert frame[0, :4].all()
