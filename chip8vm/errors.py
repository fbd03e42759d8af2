"""CHIP-8 emulator errors."""


class Chip8Error(Exception):
    """Base class for all emulator errors."""


class LoadError(Chip8Error):
    """ROM does not fit in the memory left after the program start."""

    def __init__(self, size: int, capacity: int):
        super().__init__(f"the ROM cannot fit in memory ({size} bytes, capacity {capacity})")
        self.size = size
        self.capacity = capacity


class FrameFault(Chip8Error):
    """Fault raised while running a frame.

    The frame driver attaches the emulator state as of the failing cycle
    to ``state`` before re-raising.
    """

    state = None


class FetchFault(FrameFault):
    """Program counter is outside of memory."""

    def __init__(self, pc: int):
        super().__init__(f"segmentation fault: pc=0x{pc:04X}")
        self.pc = pc


class StackUnderflow(FrameFault):
    """Return with an empty stack."""

    def __init__(self):
        super().__init__("stack underflow")


class StackOverflow(FrameFault):
    """Call with a full stack."""

    def __init__(self):
        super().__init__("stack overflow")


class UnsupportedOpcode(FrameFault):
    """Instruction word matching no known opcode form."""

    def __init__(self, opcode: int):
        super().__init__(f"opcode not supported: 0x{opcode:04X}")
        self.opcode = opcode
