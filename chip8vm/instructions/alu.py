"""CHIP-8 ALU operations (8xxx)."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction


def alu_set(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY0 - Set: VX = VY."""
    return vy


def alu_or(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy


def alu_and(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy


def alu_xor(vx: jnp.ndarray, vy: jnp.ndarray) -> jnp.ndarray:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy


def alu_add(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    carry = jnp.astype(result < vy, jnp.uint8)
    return result, carry


def alu_sub_xy(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XY5 - Subtract: VX -= VY, set NOT borrow flag."""
    not_borrow = jnp.astype(vx >= vy, jnp.uint8)
    return vx - vy, not_borrow


def alu_shift_right(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XY6 - Shift right: VX >>= 1."""
    shifted_bit = vx & 1
    return vx >> 1, shifted_bit


def alu_sub_yx(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XY7 - Subtract: VX = VY - VX, set NOT borrow flag."""
    not_borrow = jnp.astype(vy >= vx, jnp.uint8)
    return vy - vx, not_borrow


def alu_shift_left(vx: jnp.ndarray, vy: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """8XYE - Shift left: VX <<= 1."""
    shifted_bit = vx >> 7
    return vx << 1, shifted_bit


def make_alu_instruction(operation_fn):
    """Factory for ALU instructions that leave VF alone."""
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        result = operation_fn(state.V[instruction.x], state.V[instruction.y])
        return state.replace(V=state.V.at[instruction.x].set(result))
    return alu_instruction


def make_flag_alu_instruction(operation_fn):
    """Factory for ALU instructions that set VF.

    VF is written after VX, so the flag wins when X is F.
    """
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        result, vf = operation_fn(state.V[instruction.x], state.V[instruction.y])
        new_V = state.V.at[instruction.x].set(result)
        new_V = new_V.at[15].set(vf)
        return state.replace(V=new_V)
    return alu_instruction


execute_alu_set = make_alu_instruction(alu_set)
execute_alu_or = make_alu_instruction(alu_or)
execute_alu_and = make_alu_instruction(alu_and)
execute_alu_xor = make_alu_instruction(alu_xor)
execute_alu_add = make_flag_alu_instruction(alu_add)
execute_alu_sub_xy = make_flag_alu_instruction(alu_sub_xy)
execute_alu_shift_right = make_flag_alu_instruction(alu_shift_right)
execute_alu_sub_yx = make_flag_alu_instruction(alu_sub_yx)
execute_alu_shift_left = make_flag_alu_instruction(alu_shift_left)
