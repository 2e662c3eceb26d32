"""Main CHIP-8 emulator execution engine."""

import jax.numpy as jnp
import numpy as np

from chip8core.state import EmulatorState, create_state
from chip8core.decode import DecodedInstruction, decode
from chip8core.constants import PROGRAM_START, PROGRAM_CAPACITY, MEMORY_SIZE, NUM_KEYS
from chip8core.errors import MemoryAccessError, ProgramTooLargeError
from chip8core.instructions.system import execute_system_instruction, unsupported
from chip8core.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
)
from chip8core.instructions.alu import execute_alu_operation
from chip8core.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8core.instructions.display import execute_display

# Indexed by the opcode nibble. Key (E) and misc (F) families are not part of
# the implemented instruction set.
INSTRUCTION_TABLE = (
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    unsupported,
    unsupported,
)


def dispatch(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Run an already decoded instruction."""
    return INSTRUCTION_TABLE[instruction.opcode](state, instruction)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Raises a ``Chip8Error`` subclass without producing a new state when the
    instruction cannot run.
    """
    return dispatch(state, decode(instruction))


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory."""
    pc = int(state.pc)
    if pc < PROGRAM_START:
        raise MemoryAccessError(pc, "program counter below program area")
    if pc + 1 >= MEMORY_SIZE:
        raise MemoryAccessError(pc, "program counter past end of memory")
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def step(state: EmulatorState) -> EmulatorState:
    """Fetch and execute one instruction."""
    state, instruction = fetch(state)
    return execute(state, instruction)


def load_rom(state: EmulatorState, rom: bytes) -> EmulatorState:
    """Load raw program bytes into CHIP-8 memory starting at 0x200."""
    rom_data = np.frombuffer(bytes(rom), dtype=np.uint8)
    if rom_data.size > PROGRAM_CAPACITY:
        raise ProgramTooLargeError(int(rom_data.size), PROGRAM_CAPACITY)
    rom_array = jnp.asarray(rom_data, dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + rom_data.size].set(rom_array)
    return state.replace(memory=new_memory)


def reset(state: EmulatorState) -> EmulatorState:
    """Return a power-on state, keeping only the random key stream."""
    return create_state(state.rng)


def decrement_timers(state: EmulatorState) -> tuple[EmulatorState, bool]:
    """Advance both timers by one 60 Hz tick.

    Returns the new state and whether the sound timer just went from 1 to 0,
    which is the edge on which the host stops its tone.
    """
    stop_audio = bool(state.sound_timer == 1)
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    ), stop_audio


def set_key(state: EmulatorState, key: int, pressed: bool) -> EmulatorState:
    """Record a host key press or release."""
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key index must be in [0, {NUM_KEYS}), got {key}")
    return state.replace(keypad=state.keypad.at[key].set(bool(pressed)))


def sound_active(state: EmulatorState) -> bool:
    """Whether the host should currently be playing a tone."""
    return bool(state.sound_timer > 0)


def framebuffer(state: EmulatorState) -> np.ndarray:
    """Copy of the display as a (height, width) boolean array."""
    return np.array(state.display, dtype=np.bool_)
