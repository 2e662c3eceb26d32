"""Owning handle around the functional CHIP-8 engine."""

from typing import Optional

import jax
import numpy as np

from chip8core.state import EmulatorState, create_state
from chip8core.emulator import (
    fetch, execute, load_rom, reset, decrement_timers, set_key, sound_active, framebuffer,
)
from chip8core.errors import Chip8Error
from chip8core.logging import ConsoleLogger, format_state


class Interpreter:
    """Single CHIP-8 machine with an in-place API for host applications.

    The host drives two independent cadences: ``step``/``run`` at its chosen
    instruction rate and ``tick_timers`` at 60 Hz. Engine errors are logged and
    re-raised; the held state stays as it was before the failing call.
    """

    def __init__(
        self,
        seed: int = 0,
        log_level: str = "INFO",
        logger: Optional[ConsoleLogger] = None,
    ):
        """Create a powered-on machine.

        Args:
            seed: Seed for the random key consumed by CXNN
            log_level: Level for the default console logger
            logger: Logger to use instead of the default one
        """
        self.seed = seed
        self.logger = logger or ConsoleLogger(name="chip8core", log_level=log_level)
        self._state = create_state(jax.random.PRNGKey(seed))
        self.logger.debug(f"Initialized machine with seed {seed}")

    @property
    def state(self) -> EmulatorState:
        """Current machine state."""
        return self._state

    @property
    def framebuffer(self) -> np.ndarray:
        """Display as a (32, 64) boolean array, True for lit pixels."""
        return framebuffer(self._state)

    @property
    def sound_active(self) -> bool:
        """Whether the sound timer is still running."""
        return sound_active(self._state)

    def reset(self):
        """Return to power-on state, discarding program and display."""
        self._state = reset(self._state)
        self.logger.debug("Machine reset")

    def load(self, rom: bytes):
        """Copy a program into memory at 0x200.

        Args:
            rom: Raw CHIP-8 machine code

        Raises:
            ProgramTooLargeError: If the program does not fit in memory
        """
        self._state = self._guarded(load_rom, self._state, rom)
        self.logger.info(f"Loaded program of {len(rom)} bytes")

    def step(self) -> int:
        """Execute one instruction and return it.

        Raises:
            Chip8Error: If the instruction cannot be fetched or executed
        """
        state, instruction = self._guarded(fetch, self._state)
        self._state = self._guarded(execute, state, instruction, previous=self._state)
        return int(instruction)

    def run(self, steps: int):
        """Execute ``steps`` instructions, stopping at the first error."""
        for _ in range(steps):
            self.step()

    def tick_timers(self) -> bool:
        """Apply one 60 Hz timer tick.

        Returns:
            True on the tick where the sound timer reaches zero
        """
        self._state, stop_audio = decrement_timers(self._state)
        if stop_audio:
            self.logger.debug("Sound timer expired")
        return stop_audio

    def set_key(self, key: int, pressed: bool):
        """Update the state of hex key ``key`` (0-15)."""
        self._state = set_key(self._state, key, pressed)

    def _guarded(self, fn, *args, previous: Optional[EmulatorState] = None):
        try:
            return fn(*args)
        except Chip8Error as error:
            self.logger.error(f"{error} | {format_state(previous if previous is not None else self._state)}")
            raise
