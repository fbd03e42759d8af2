"""
Command line front-end: headless runner and pygame window.
"""

import argparse
import sys
import time

import numpy as np

from chip8vm.config import DEFAULT_CONFIG
from chip8vm.constants import NUM_KEYS, SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.errors import Chip8Error
from chip8vm.state import create_state
from chip8vm.emulator import load_rom_file
from chip8vm.frame import step_frame
from chip8vm.logging import logger, set_log_level, frames_with_progress
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme, save_screenshot


def build_key_map(pygame):
    """Modern key mapping: host key -> CHIP-8 key index."""
    return {
        pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
        pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
        pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
        pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
        pygame.K_UP: 0x2, pygame.K_DOWN: 0x8, pygame.K_LEFT: 0x4, pygame.K_RIGHT: 0x6,
        pygame.K_SPACE: 0x5,
    }


def run_headless(rom_filename, frames, config, seed=0, screenshot=None, scale=8, color_scheme="default"):
    """Run ``frames`` frames with every key released.

    Returns:
        The final emulator state
    """
    state = load_rom_file(create_state(seed), rom_filename)
    keypad = np.zeros(NUM_KEYS, dtype=np.bool_)
    audible_frames = 0

    for _ in frames_with_progress(frames, desc=f"Running {rom_filename}"):
        state, _, audio = step_frame(state, keypad, config)
        audible_frames += bool(np.any(audio))

    logger.info(f"Ran {frames} frames, sound on for {audible_frames}")

    if screenshot:
        save_screenshot(state.display, screenshot, scale, color_scheme)
        logger.info(f"Screenshot saved: {screenshot}")

    return state


def run_window(rom_filename, config, seed=0, scale=8, color_scheme="default"):
    """Main emulator loop in a pygame window."""
    import pygame

    pygame.mixer.pre_init(frequency=config.sampling_rate, size=-16, channels=2)
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
    pygame.display.set_caption(f"CHIP-8 - {rom_filename}")
    clock = pygame.time.Clock()
    channel = pygame.mixer.Channel(0) if pygame.mixer.get_init() else None

    key_map = build_key_map(pygame)
    on_color, off_color = create_color_scheme(color_scheme)
    state = load_rom_file(create_state(seed), rom_filename)
    keypad = np.zeros(NUM_KEYS, dtype=np.bool_)
    logger.info(f"Loaded: {rom_filename}")

    running = True
    try:
        while running:
            clock.tick(config.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in key_map:
                        keypad[key_map[event.key]] = event.type == pygame.KEYDOWN

            state, _, audio = step_frame(state, keypad, config)

            rgb = chip8_display_to_rgb(state.display, scale, on_color, off_color)
            surface = pygame.surfarray.make_surface(rgb.swapaxes(0, 1))
            screen.blit(surface, (0, 0))
            pygame.display.flip()

            if channel is not None and np.any(audio):
                channel.queue(pygame.sndarray.make_sound(audio.reshape(-1, 2)))
    finally:
        pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="CHIP-8 virtual machine")
    parser.add_argument("rom", help="path to a CHIP-8 ROM file")
    parser.add_argument("--headless", action="store_true", help="run without a window")
    parser.add_argument("--frames", type=int, default=600, help="frames to run in headless mode")
    parser.add_argument("--screenshot", default=None, help="PNG file to write after a headless run")
    parser.add_argument("--scale", type=int, default=8, help="pixel upscaling factor")
    parser.add_argument("--color-scheme", default="default", help="display color scheme")
    parser.add_argument("--cycles-per-frame", type=int, default=None, help="instructions per frame")
    parser.add_argument("--seed", type=int, default=0, help="seed for the random-byte instruction")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    set_log_level(args.log_level)

    config = DEFAULT_CONFIG
    if args.cycles_per_frame is not None:
        config = config.replace(cycles_per_frame=args.cycles_per_frame)

    start = time.time()
    try:
        if args.headless:
            run_headless(args.rom, args.frames, config, args.seed, args.screenshot, args.scale, args.color_scheme)
        else:
            run_window(args.rom, config, args.seed, args.scale, args.color_scheme)
    except (Chip8Error, OSError) as e:
        logger.error(f"system errored: {e}")
        return 1

    logger.info(f"Finished in {time.time() - start:.1f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
