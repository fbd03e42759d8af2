"""CHIP-8 machine constants."""

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
FONT_START = 0x000
FONT_CHAR_SIZE = 5

NUM_REGISTERS = 16
NUM_KEYS = 16
STACK_SIZE = 16

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# Timing
FRAMES_PER_SECOND = 60
CYCLES_PER_SECOND = 600
CYCLES_PER_FRAME = CYCLES_PER_SECOND // FRAMES_PER_SECOND

# Audio
SAMPLING_RATE = 44100
SAMPLES_PER_FRAME = SAMPLING_RATE // FRAMES_PER_SECOND
TONE_FREQUENCY = 480.0

# Packed 0xRRGGBB pixel colors
PIXEL_ON_COLOR = 0xF2F4F3
PIXEL_OFF_COLOR = 0x00171F

FONT_DATA = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
]

__all__ = [
    "MEMORY_SIZE",
    "PROGRAM_START",
    "FONT_START",
    "FONT_CHAR_SIZE",
    "FONT_DATA",
    "NUM_REGISTERS",
    "NUM_KEYS",
    "STACK_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "FRAMES_PER_SECOND",
    "CYCLES_PER_SECOND",
    "CYCLES_PER_FRAME",
    "SAMPLING_RATE",
    "SAMPLES_PER_FRAME",
    "TONE_FREQUENCY",
    "PIXEL_ON_COLOR",
    "PIXEL_OFF_COLOR",
]
