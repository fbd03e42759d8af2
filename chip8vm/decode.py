"""CHIP-8 instruction decoding."""

from enum import Enum
from functools import lru_cache

from flax.struct import PyTreeNode, field

from chip8vm.errors import UnsupportedOpcode


class Opcode(Enum):
    """CHIP-8 instruction forms as (mask, value) pairs.

    Members are listed in matching order: exact full-word forms come before
    the wider prefix forms that would also match them.
    """
    CLS = (0xFFFF, 0x00E0)          # 00E0
    RET = (0xFFFF, 0x00EE)          # 00EE
    SYS = (0xF000, 0x0000)          # 0nnn
    JP = (0xF000, 0x1000)           # 1nnn
    CALL = (0xF000, 0x2000)         # 2nnn
    SE_BYTE = (0xF000, 0x3000)      # 3xkk
    SNE_BYTE = (0xF000, 0x4000)     # 4xkk
    SE_REG = (0xF00F, 0x5000)       # 5xy0
    LD_BYTE = (0xF000, 0x6000)      # 6xkk
    ADD_BYTE = (0xF000, 0x7000)     # 7xkk
    LD_REG = (0xF00F, 0x8000)       # 8xy0
    OR = (0xF00F, 0x8001)           # 8xy1
    AND = (0xF00F, 0x8002)          # 8xy2
    XOR = (0xF00F, 0x8003)          # 8xy3
    ADD_REG = (0xF00F, 0x8004)      # 8xy4
    SUB = (0xF00F, 0x8005)          # 8xy5
    SHR = (0xF00F, 0x8006)          # 8xy6
    SUBN = (0xF00F, 0x8007)         # 8xy7
    SHL = (0xF00F, 0x800E)          # 8xyE
    SNE_REG = (0xF00F, 0x9000)      # 9xy0
    LD_I = (0xF000, 0xA000)         # Annn
    JP_V0 = (0xF000, 0xB000)        # Bnnn
    RND = (0xF000, 0xC000)          # Cxkk
    DRW = (0xF000, 0xD000)          # Dxyn
    SKP = (0xF0FF, 0xE09E)          # Ex9E
    SKNP = (0xF0FF, 0xE0A1)         # ExA1
    LD_VX_DT = (0xF0FF, 0xF007)     # Fx07
    LD_VX_KEY = (0xF0FF, 0xF00A)    # Fx0A
    LD_DT_VX = (0xF0FF, 0xF015)     # Fx15
    LD_ST_VX = (0xF0FF, 0xF018)     # Fx18
    ADD_I = (0xF0FF, 0xF01E)        # Fx1E
    LD_DIGIT = (0xF0FF, 0xF029)     # Fx29
    BCD = (0xF0FF, 0xF033)          # Fx33
    STORE = (0xF0FF, 0xF055)        # Fx55
    LOAD = (0xF0FF, 0xF065)         # Fx65

    @property
    def mask(self) -> int:
        return self.value[0]

    @property
    def pattern(self) -> int:
        return self.value[1]

    def matches(self, instruction: int) -> bool:
        """Check whether an instruction word belongs to this form."""
        return instruction & self.mask == self.pattern

    @classmethod
    def classify(cls, instruction: int) -> "Opcode":
        """Return the first form matching the instruction word."""
        for form in cls:
            if form.matches(instruction):
                return form
        raise UnsupportedOpcode(instruction)


class DecodedInstruction(PyTreeNode):
    """Decoded CHIP-8 instruction with extracted operands.

    ``form`` is static pytree metadata; the operands are traced leaves.
    """
    raw: int
    form: Opcode = field(pytree_node=False)
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


@lru_cache(maxsize=None)
def _decode_word(instruction: int) -> DecodedInstruction:
    return DecodedInstruction(
        raw=instruction,
        form=Opcode.classify(instruction),
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    return _decode_word(int(instruction))
