"""Tests for emulator state construction."""

import jax
import jax.numpy as jnp
from chip8vm import EmulatorState, create_state, FONT_DATA, MEMORY_SIZE, PROGRAM_START, STACK_SIZE
from chip8vm.state import StackState


def test_create_state_defaults():
    """Every field starts zeroed except the PC and the font."""
    state = create_state()

    assert state.pc == PROGRAM_START
    assert state.memory.shape == (MEMORY_SIZE,)
    assert state.display.shape == (32,)
    assert state.display.dtype == jnp.uint64
    assert state.I == 0
    assert not state.V.any()
    assert not state.keypad.any()
    assert state.delay_timer == 0 and state.sound_timer == 0
    assert state.stack.pointer == 0
    assert state.stack.data.shape == (STACK_SIZE,)


def test_create_state_loads_font():
    state = create_state()

    assert jnp.array_equal(state.memory[:len(FONT_DATA)], jnp.asarray(FONT_DATA, dtype=jnp.uint8))
    assert not state.memory[len(FONT_DATA):].any()


def test_default_fields_are_built_per_instance():
    """Two bare states get their own default arrays and stack."""
    first = EmulatorState(jax.random.PRNGKey(0))
    second = EmulatorState(jax.random.PRNGKey(1))

    assert first.memory is not second.memory
    assert first.stack is not second.stack
    assert StackState().data is not StackState().data
