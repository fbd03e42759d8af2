"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.instructions.misc import read_memory

# N is a nibble, so a sprite spans at most 15 rows.
MAX_SPRITE_HEIGHT = 15
sprite_rows = jnp.arange(MAX_SPRITE_HEIGHT, dtype=jnp.int32)


def position_sprite_rows(sprite_bytes: jnp.ndarray, x: jnp.ndarray) -> jnp.ndarray:
    """Place 8-bit sprite rows at column ``x`` of 64-bit display rows.

    Bits pushed past the last column wrap around to column 0.
    """
    rows = jnp.astype(sprite_bytes, jnp.uint64) << (SCREEN_WIDTH - 8)
    shift = jnp.astype(x, jnp.uint64) % SCREEN_WIDTH
    return (rows >> shift) | (rows << ((SCREEN_WIDTH - shift) % SCREEN_WIDTH))


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    sprite_x = state.V[instruction.x] % SCREEN_WIDTH
    sprite_y = jnp.astype(state.V[instruction.y] % SCREEN_HEIGHT, jnp.int32)

    # Rows at or past N XOR with zero and leave the display untouched.
    in_sprite = sprite_rows < instruction.n
    sprite_bytes = jnp.where(in_sprite, read_memory(state, state.I, MAX_SPRITE_HEIGHT), 0)
    sprite = position_sprite_rows(sprite_bytes, sprite_x)
    target_rows = (sprite_y + sprite_rows) % SCREEN_HEIGHT

    previous = state.display[target_rows]
    updated = previous ^ sprite
    collision = jnp.any((previous & ~updated) != 0)

    return state.replace(
        display=state.display.at[target_rows].set(updated),
        V=state.V.at[15].set(jnp.astype(collision, jnp.uint8))
    )
