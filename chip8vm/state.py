"""CHIP-8 emulator state definitions."""

from typing import Union

import jax
import jax.numpy as jnp
from flax.struct import dataclass, field, PyTreeNode

from chip8vm.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, SCREEN_HEIGHT, STACK_SIZE, NUM_KEYS, NUM_REGISTERS
)


def _zeros(shape, dtype):
    return field(default_factory=lambda: jnp.zeros(shape, dtype=dtype))


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = _zeros(STACK_SIZE, jnp.uint16)
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    ``display`` holds one 64-bit mask per screen row, the most significant
    bit being the leftmost column.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = _zeros(MEMORY_SIZE, jnp.uint8)
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = _zeros(SCREEN_HEIGHT, jnp.uint64)
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = _zeros((), jnp.uint8)
    sound_timer: jnp.ndarray = _zeros((), jnp.uint8)
    keypad: jnp.ndarray = _zeros(NUM_KEYS, jnp.bool_)
    V: jnp.ndarray = _zeros(NUM_REGISTERS, jnp.uint8)
    I: jnp.ndarray = _zeros((), jnp.uint16)


def create_state(rng: Union[int, jax.Array] = 0) -> EmulatorState:
    """Create initial emulator state with font data loaded.

    Args:
        rng: Seed or PRNG key for the random-byte instruction
    """
    if isinstance(rng, int):
        rng = jax.random.PRNGKey(rng)
    state = EmulatorState(rng)
    font = jnp.asarray(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))
