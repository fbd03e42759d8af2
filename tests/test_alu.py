"""Tests for ALU operations (8xxx)."""

import pytest
from chip8vm import execute, UnsupportedOpcode


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x42))
        state = state.replace(V=state.V.at[2].set(0x99))

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0xF0))
        state = state.replace(V=state.V.at[2].set(0x0F))

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0xF0))
        state = state.replace(V=state.V.at[2].set(0xF1))

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_basic(self, fresh_state):
        """8XY3 - XOR operation."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0xFF))
        state = state.replace(V=state.V.at[2].set(0xF0))

        state = execute(state, 0x8123)  # V1 ^= V2

        assert state.V[1] == 0x0F

    def test_bitwise_operations_leave_vf(self, fresh_state):
        """8XY1/2/3 - VF is not a flag for bitwise operations."""
        for instruction in (0x8121, 0x8122, 0x8123):
            state = fresh_state.replace(V=fresh_state.V.at[15].set(0x42).at[1].set(0x0F).at[2].set(0xF0))
            state = execute(state, instruction)
            assert state.V[15] == 0x42


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_no_carry(self, fresh_state):
        """8XY4 - Add without carry."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(1))
        state = state.replace(V=state.V.at[2].set(3))

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 4
        assert state.V[15] == 0

    def test_alu_add_with_carry(self, fresh_state):
        """8XY4 - Add with carry."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(3))
        state = state.replace(V=state.V.at[2].set(0xFF))

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 2  # 258 wraps to 2
        assert state.V[15] == 1  # Carry set

    def test_alu_add_clears_stale_flag(self, fresh_state):
        """8XY4 - VF is recomputed, never accumulated."""
        state = fresh_state.replace(V=fresh_state.V.at[15].set(1).at[1].set(0x10).at[2].set(0x20))

        state = execute(state, 0x8124)

        assert state.V[1] == 0x30
        assert state.V[15] == 0

    def test_alu_sub_xy_no_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, no borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x30))
        state = state.replace(V=state.V.at[2].set(0x10))

        state = execute(state, 0x8125)  # V1 -= V2

        assert state.V[1] == 0x20
        assert state.V[15] == 1  # No borrow (VX >= VY)

    def test_alu_sub_xy_equal_operands(self, fresh_state):
        """8XY5 - Equal operands count as no borrow."""
        state = fresh_state.replace(V=fresh_state.V.at[1].set(0x30).at[2].set(0x30))

        state = execute(state, 0x8125)

        assert state.V[1] == 0
        assert state.V[15] == 1

    def test_alu_sub_xy_with_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, with borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[3].set(0x10))
        state = state.replace(V=state.V.at[4].set(0x30))

        state = execute(state, 0x8345)  # V3 -= V4

        assert state.V[3] == 0xE0  # 16 - 48 = -32 → 224
        assert state.V[15] == 0  # Borrow (VX < VY)

    def test_alu_sub_yx_no_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, no borrow."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x10))
        state = state.replace(V=state.V.at[2].set(0x30))

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0x20  # 48 - 16 = 32
        assert state.V[15] == 1  # No borrow (VY >= VX)

    def test_alu_sub_yx_with_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, with borrow."""
        state = fresh_state.replace(V=fresh_state.V.at[1].set(0x30).at[2].set(0x10))

        state = execute(state, 0x8127)

        assert state.V[1] == 0xE0
        assert state.V[15] == 0


class TestALUShifts:
    """Test shift operations."""

    def test_shift_right_even(self, fresh_state):
        """8XY6 - Shift right, even number."""
        state = fresh_state.replace(V=fresh_state.V.at[1].set(0x04))
        state = state.replace(V=state.V.at[2].set(0xFF))  # Should be ignored

        state = execute(state, 0x8126)  # V1 >>= 1

        assert state.V[1] == 0x02
        assert state.V[15] == 0  # LSB was 0

    def test_shift_right_odd(self, fresh_state):
        """8XY6 - Shift right, odd number."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x05))

        state = execute(state, 0x8346)  # V3 >>= 1

        assert state.V[3] == 0x02
        assert state.V[15] == 1  # LSB was 1

    def test_shift_left_overflow(self, fresh_state):
        """8XYE - Shift left, with overflow."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x81))  # 10000001
        state = state.replace(V=state.V.at[4].set(0xFF))  # Should be ignored

        state = execute(state, 0x834E)  # V3 <<= 1

        assert state.V[3] == 0x02  # 129 << 1 = 258 → 2
        assert state.V[15] == 1  # MSB was 1

    def test_shift_left_no_overflow(self, fresh_state):
        """8XYE - Shift left, MSB clear."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x41))

        state = execute(state, 0x834E)

        assert state.V[3] == 0x82
        assert state.V[15] == 0


class TestALUEdgeCases:
    """Test edge cases and comprehensive scenarios."""

    def test_alu_undefined_operations(self, fresh_state):
        """Undefined 8XYN forms are unsupported."""
        for op in [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF]:
            with pytest.raises(UnsupportedOpcode) as excinfo:
                execute(fresh_state, 0x8120 | op)
            assert excinfo.value.opcode == 0x8120 | op

    def test_alu_self_operations(self, fresh_state):
        """Test operations where VX and VY are the same register."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0xAA))

        # V5 ^= V5 (should become 0)
        state = execute(state, 0x8553)
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        # Reset and test self ADD
        state = state.replace(V=state.V.at[5].set(0x80))
        state = execute(state, 0x8554)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_register_operations(self, fresh_state):
        """Test that operations on VF work correctly."""
        state = fresh_state
        state = state.replace(V=state.V.at[15].set(0x42))  # VF = 0x42
        state = state.replace(V=state.V.at[1].set(0x10))

        state = execute(state, 0x81F4)  # V1 += VF
        assert state.V[1] == 0x52, "Addition with VF as source failed"
        assert state.V[15] == 0, "VF should be overwritten by operation result"

    def test_flag_wins_when_target_is_vf(self, fresh_state):
        """8FY5 - The flag is written after the result."""
        state = fresh_state.replace(V=fresh_state.V.at[15].set(0x30).at[1].set(0x10))

        state = execute(state, 0x8F15)  # VF -= V1

        assert state.V[15] == 1
