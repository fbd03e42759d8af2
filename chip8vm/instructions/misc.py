"""CHIP-8 miscellaneous instructions (Fxxx).

I is a 16-bit register that is never masked to 12 bits, so the memory
transfers below may address past the end of memory: such reads yield 0 and
such writes are dropped.
"""

import jax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import FONT_START, FONT_CHAR_SIZE, NUM_REGISTERS


def read_memory(state: EmulatorState, address: jnp.ndarray, length: int) -> jnp.ndarray:
    """Read ``length`` bytes starting at ``address``."""
    indices = jnp.astype(address, jnp.int32) + jnp.arange(length, dtype=jnp.int32)
    return state.memory.at[indices].get(mode="fill", fill_value=0)


def write_memory(state: EmulatorState, address: jnp.ndarray, values: jnp.ndarray) -> jnp.ndarray:
    """Return memory with ``values`` written starting at ``address``."""
    indices = jnp.astype(address, jnp.int32) + jnp.arange(len(values), dtype=jnp.int32)
    return state.memory.at[indices].set(jnp.astype(values, jnp.uint8), mode="drop")


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Without a pressed key the program counter is rewound so the
    instruction runs again on the next cycle.
    """
    def key_pressed_action(state):
        pressed_key = jnp.argmax(state.keypad)
        return state.replace(V=state.V.at[instruction.x].set(jnp.astype(pressed_key, jnp.uint8)))

    def wait_action(state):
        return state.replace(pc=state.pc - 2)

    return jax.lax.cond(jnp.any(state.keypad), key_pressed_action, wait_action, state)


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register (16-bit wraparound, VF untouched)."""
    return state.replace(I=state.I + jnp.astype(state.V[instruction.x], jnp.uint16))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + jnp.astype(state.V[instruction.x], jnp.uint16) * FONT_CHAR_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = state.V[instruction.x]
    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)
    return state.replace(memory=write_memory(state, state.I, digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    current_memory_values = read_memory(state, state.I, NUM_REGISTERS)
    new_memory_values = jnp.where(register_mask, state.V, current_memory_values)
    return state.replace(memory=write_memory(state, state.I, new_memory_values))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    memory_values = read_memory(state, state.I, NUM_REGISTERS)
    return state.replace(V=jnp.where(register_mask, memory_values, state.V))
