"""Tests for fetch, decode and ROM loading."""

import pytest
import jax.numpy as jnp
from chip8vm import (
    decode, fetch, execute, load_rom, load_rom_file, Opcode,
    FetchFault, LoadError, UnsupportedOpcode, MEMORY_SIZE, PROGRAM_START, FONT_DATA
)


class TestFetch:
    """Test instruction fetch."""

    def test_fetch_big_endian(self, fresh_state):
        """The high byte comes first."""
        memory = fresh_state.memory.at[0x200].set(0x12).at[0x201].set(0x34)
        state, instruction = fetch(fresh_state.replace(memory=memory))

        assert instruction == 0x1234
        assert state.pc == 0x202

    def test_fetch_at_arbitrary_pc(self, fresh_state):
        memory = fresh_state.memory.at[0xABC].set(0xDE).at[0xABD].set(0xAD)
        state = fresh_state.replace(memory=memory, pc=jnp.asarray(0xABC, dtype=jnp.uint16))
        state, instruction = fetch(state)

        assert instruction == 0xDEAD
        assert state.pc == 0xABE

    def test_fetch_at_end_of_memory_faults(self, fresh_state):
        state = fresh_state.replace(pc=jnp.asarray(MEMORY_SIZE, dtype=jnp.uint16))
        with pytest.raises(FetchFault) as excinfo:
            fetch(state)
        assert excinfo.value.pc == MEMORY_SIZE

    def test_fetch_at_last_byte_is_allowed(self, fresh_state):
        """The missing low byte reads as zero."""
        memory = fresh_state.memory.at[MEMORY_SIZE - 1].set(0xAB)
        state = fresh_state.replace(memory=memory, pc=jnp.asarray(MEMORY_SIZE - 1, dtype=jnp.uint16))
        state, instruction = fetch(state)

        assert instruction == 0xAB00
        assert state.pc == MEMORY_SIZE + 1


class TestDecode:
    """Test instruction decoding."""

    def test_operands(self):
        decoded = decode(0xD12F)
        assert decoded.form is Opcode.DRW
        assert (decoded.x, decoded.y, decoded.n) == (0x1, 0x2, 0xF)
        assert decoded.nn == 0x2F
        assert decoded.nnn == 0x12F

    def test_exact_forms_before_prefix(self):
        """00E0 and 00EE are not mistaken for 0NNN."""
        assert decode(0x00E0).form is Opcode.CLS
        assert decode(0x00EE).form is Opcode.RET
        assert decode(0x00E1).form is Opcode.SYS
        assert decode(0x0000).form is Opcode.SYS

    @pytest.mark.parametrize("instruction, form", [
        (0x1ABC, Opcode.JP), (0x2ABC, Opcode.CALL), (0x3A12, Opcode.SE_BYTE),
        (0x4A12, Opcode.SNE_BYTE), (0x5AB0, Opcode.SE_REG), (0x6A12, Opcode.LD_BYTE),
        (0x7A12, Opcode.ADD_BYTE), (0x8AB0, Opcode.LD_REG), (0x8AB1, Opcode.OR),
        (0x8AB2, Opcode.AND), (0x8AB3, Opcode.XOR), (0x8AB4, Opcode.ADD_REG),
        (0x8AB5, Opcode.SUB), (0x8AB6, Opcode.SHR), (0x8AB7, Opcode.SUBN),
        (0x8ABE, Opcode.SHL), (0x9AB0, Opcode.SNE_REG), (0xAABC, Opcode.LD_I),
        (0xBABC, Opcode.JP_V0), (0xCA12, Opcode.RND), (0xDAB5, Opcode.DRW),
        (0xEA9E, Opcode.SKP), (0xEAA1, Opcode.SKNP), (0xFA07, Opcode.LD_VX_DT),
        (0xFA0A, Opcode.LD_VX_KEY), (0xFA15, Opcode.LD_DT_VX), (0xFA18, Opcode.LD_ST_VX),
        (0xFA1E, Opcode.ADD_I), (0xFA29, Opcode.LD_DIGIT), (0xFA33, Opcode.BCD),
        (0xFA55, Opcode.STORE), (0xFA65, Opcode.LOAD),
    ])
    def test_every_form(self, instruction, form):
        assert decode(instruction).form is form

    @pytest.mark.parametrize("instruction", [0x5AB1, 0x9AB1, 0x8AB8, 0xEA9F, 0xFA00, 0xFAFF])
    def test_unsupported(self, instruction):
        with pytest.raises(UnsupportedOpcode) as excinfo:
            decode(instruction)
        assert excinfo.value.opcode == instruction
        assert f"0x{instruction:04X}" in str(excinfo.value)


class TestLoadRom:
    """Test ROM loading."""

    def test_load_copies_at_program_start(self, fresh_state):
        state = load_rom(fresh_state, b"\x60\x05\x70\x03")

        assert list(state.memory[PROGRAM_START:PROGRAM_START + 4]) == [0x60, 0x05, 0x70, 0x03]
        assert state.memory[PROGRAM_START + 4] == 0
        assert list(state.memory[:len(FONT_DATA)]) == FONT_DATA
        assert state.pc == PROGRAM_START

    def test_largest_rom_fits(self, fresh_state):
        capacity = MEMORY_SIZE - PROGRAM_START
        rom = bytes(i % 256 for i in range(capacity - 1))
        state = load_rom(fresh_state, rom)

        assert bytes(int(b) for b in state.memory[PROGRAM_START:MEMORY_SIZE - 1]) == rom

    def test_rom_filling_remaining_memory_is_rejected(self, fresh_state):
        capacity = MEMORY_SIZE - PROGRAM_START
        with pytest.raises(LoadError) as excinfo:
            load_rom(fresh_state, bytes(capacity))
        assert excinfo.value.size == capacity

    def test_empty_rom(self, fresh_state):
        state = load_rom(fresh_state, b"")
        assert jnp.array_equal(state.memory, fresh_state.memory)

    def test_load_rom_file(self, fresh_state, tmp_path):
        rom_path = tmp_path / "test.ch8"
        rom_path.write_bytes(b"\x12\x00")
        state = load_rom_file(fresh_state, str(rom_path))

        assert state.memory[PROGRAM_START] == 0x12
        assert state.memory[PROGRAM_START + 1] == 0x00


def test_execute_unsupported_opcode(fresh_state):
    with pytest.raises(UnsupportedOpcode):
        execute(fresh_state, 0xFFFF)
