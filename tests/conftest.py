"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program(*instructions):
    """Assemble 16-bit instruction words into big-endian ROM bytes."""
    return b"".join(instruction.to_bytes(2, "big") for instruction in instructions)


def released_keys():
    """Keypad with every key up."""
    return [False] * 16
