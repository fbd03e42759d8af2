"""CHIP-8 virtual machine package."""

import jax

# Display rows are 64-bit masks.
jax.config.update("jax_enable_x64", True)

from chip8vm.constants import *
from chip8vm.errors import (
    Chip8Error, LoadError, FrameFault, FetchFault, StackUnderflow, StackOverflow, UnsupportedOpcode
)
from chip8vm.config import FrameConfig, DEFAULT_CONFIG
from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.decode import Opcode, DecodedInstruction, decode
from chip8vm.emulator import execute, fetch, load_rom, load_rom_file
from chip8vm.frame import run_cycle, decay_timers, step_frame
from chip8vm.rendering import map_pixels, chip8_display_to_rgb, create_color_scheme
from chip8vm.audio import map_audio

__all__ = [
    "Chip8Error",
    "LoadError",
    "FrameFault",
    "FetchFault",
    "StackUnderflow",
    "StackOverflow",
    "UnsupportedOpcode",
    "FrameConfig",
    "DEFAULT_CONFIG",
    "EmulatorState",
    "StackState",
    "create_state",
    "Opcode",
    "DecodedInstruction",
    "decode",
    "fetch",
    "execute",
    "load_rom",
    "load_rom_file",
    "run_cycle",
    "decay_timers",
    "step_frame",
    "map_pixels",
    "map_audio",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
