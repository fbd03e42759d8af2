"""Frame driver: runs instruction cycles, decays timers and maps outputs."""

from typing import Sequence, Union

import jax
import jax.numpy as jnp
import numpy as np

from chip8vm.state import EmulatorState
from chip8vm.emulator import fetch, execute
from chip8vm.config import FrameConfig, DEFAULT_CONFIG
from chip8vm.constants import NUM_KEYS
from chip8vm.errors import FrameFault
from chip8vm.logging import logger
from chip8vm.rendering import map_pixels
from chip8vm.audio import map_audio


def run_cycle(state: EmulatorState) -> EmulatorState:
    """Fetch and execute one instruction.

    A raised FrameFault carries the state as of the failing cycle: the
    state before the fetch for a fetch fault, after it otherwise.
    """
    current = state
    try:
        current, instruction = fetch(current)
        return execute(current, instruction)
    except FrameFault as fault:
        fault.state = current
        raise


@jax.jit
def decay_timers(state: EmulatorState) -> EmulatorState:
    """Decrement the delay and sound timers by one, floored at zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def _as_keypad(keypad: Union[Sequence[bool], jnp.ndarray]) -> jnp.ndarray:
    keypad = jnp.asarray(keypad, dtype=jnp.bool_)
    if keypad.shape != (NUM_KEYS,):
        raise ValueError(f"Expected keypad of shape ({NUM_KEYS},), got {keypad.shape}")
    return keypad


def step_frame(
    state: EmulatorState,
    keypad: Union[Sequence[bool], jnp.ndarray],
    config: FrameConfig = DEFAULT_CONFIG,
) -> tuple[EmulatorState, np.ndarray, np.ndarray]:
    """Run one frame of emulation.

    Args:
        state: Current emulator state
        keypad: 16 key states, indexed by hex key id, held for the whole frame
        config: Frame timing and audio settings

    Returns:
        Tuple of (new state, packed RGB pixel buffer, interleaved stereo PCM block)

    Raises:
        FrameFault: When a cycle faults. The frame stops there and the
            fault's ``state`` holds the emulator state as of that cycle.
    """
    state = state.replace(keypad=_as_keypad(keypad))
    sound_on = int(state.sound_timer) > 0

    for _ in range(config.cycles_per_frame):
        try:
            state = run_cycle(state)
        except FrameFault as fault:
            logger.error(f"Frame aborted: {fault}")
            raise

    state = decay_timers(state)
    return state, map_pixels(state.display), map_audio(sound_on, config)
