"""Main CHIP-8 emulator execution engine."""

import jax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import Opcode, decode
from chip8vm.constants import MEMORY_SIZE, PROGRAM_START
from chip8vm.errors import FetchFault, LoadError
from chip8vm.logging import logger
from chip8vm.stack import check_push, check_pop
from chip8vm.instructions.system import no_op, execute_clear_screen, execute_return
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed
)
from chip8vm.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor, execute_alu_add,
    execute_alu_sub_xy, execute_alu_shift_right, execute_alu_sub_yx, execute_alu_shift_left
)
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)


HANDLERS = {
    Opcode.CLS: execute_clear_screen,
    Opcode.RET: execute_return,
    Opcode.SYS: no_op,
    Opcode.JP: execute_jump,
    Opcode.CALL: execute_call,
    Opcode.SE_BYTE: execute_skip_if_equal_immediate,
    Opcode.SNE_BYTE: execute_skip_if_not_equal_immediate,
    Opcode.SE_REG: execute_skip_if_equal_register,
    Opcode.LD_BYTE: execute_set,
    Opcode.ADD_BYTE: execute_add,
    Opcode.LD_REG: execute_alu_set,
    Opcode.OR: execute_alu_or,
    Opcode.AND: execute_alu_and,
    Opcode.XOR: execute_alu_xor,
    Opcode.ADD_REG: execute_alu_add,
    Opcode.SUB: execute_alu_sub_xy,
    Opcode.SHR: execute_alu_shift_right,
    Opcode.SUBN: execute_alu_sub_yx,
    Opcode.SHL: execute_alu_shift_left,
    Opcode.SNE_REG: execute_skip_if_not_equal_register,
    Opcode.LD_I: execute_set_index,
    Opcode.JP_V0: execute_jump_with_offset,
    Opcode.RND: execute_random,
    Opcode.DRW: execute_display,
    Opcode.SKP: execute_skip_if_key_pressed,
    Opcode.SKNP: execute_skip_if_key_not_pressed,
    Opcode.LD_VX_DT: execute_get_delay_timer,
    Opcode.LD_VX_KEY: execute_wait_for_key,
    Opcode.LD_DT_VX: execute_set_delay_timer,
    Opcode.LD_ST_VX: execute_set_sound_timer,
    Opcode.ADD_I: execute_add_to_index,
    Opcode.LD_DIGIT: execute_font_character,
    Opcode.BCD: execute_bcd_conversion,
    Opcode.STORE: execute_store_registers,
    Opcode.LOAD: execute_load_registers,
}


# Handlers are compiled once per form. Operands are traced, so every word of
# a form shares one compilation.
COMPILED_HANDLERS = {form: jax.jit(handler) for form, handler in HANDLERS.items()}

# Faults that depend on concrete state are raised on the host before dispatch.
STACK_GUARDS = {
    Opcode.CALL: check_push,
    Opcode.RET: check_pop,
}


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)
    guard = STACK_GUARDS.get(decoded_instruction.form)
    if guard is not None:
        guard(state.stack)
    return COMPILED_HANDLERS[decoded_instruction.form](state, decoded_instruction)


def _pack_u16(high: jnp.ndarray, low: jnp.ndarray) -> jnp.ndarray:
    """Pack two bytes into a 16-bit word."""
    return (jnp.astype(high, jnp.uint16) << 8) | jnp.astype(low, jnp.uint16)


@jax.jit
def _read_word(memory: jnp.ndarray, pc: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    high = memory[pc]
    low = memory.at[pc + 1].get(mode="fill", fill_value=0)
    return _pack_u16(high, low), pc + 2


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory.

    Only a program counter at (or past) the end of memory faults; a word
    straddling the last byte reads its missing low byte as 0.
    """
    pc = int(state.pc)
    if pc >= MEMORY_SIZE:
        raise FetchFault(pc)
    instruction, next_pc = _read_word(state.memory, state.pc)
    return state.replace(pc=next_pc), int(instruction)


def load_rom(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    capacity = MEMORY_SIZE - PROGRAM_START
    if len(rom_data) >= capacity:
        raise LoadError(len(rom_data), capacity)
    rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    logger.debug(f"Loaded {len(rom_data)} byte ROM at 0x{PROGRAM_START:03X}")
    return state.replace(memory=new_memory)


def load_rom_file(state: EmulatorState, filename: str) -> EmulatorState:
    """Load a ROM file into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_rom(state, rom_data)
