"""Sound timer to PCM audio mapping."""

from functools import lru_cache

import numpy as np

from chip8vm.config import FrameConfig, DEFAULT_CONFIG


@lru_cache(maxsize=8)
def _tone_block(samples: int, sampling_rate: int, tone_frequency: float) -> np.ndarray:
    """Interleaved stereo sine block; the phase starts one step in."""
    delta_phase = 2 * np.pi * tone_frequency / sampling_rate
    phase = delta_phase * np.arange(1, samples + 1)
    mono = (np.sin(phase) * np.iinfo(np.int16).max).astype(np.int16)
    block = np.repeat(mono, 2)
    block.flags.writeable = False
    return block


def map_audio(sound_on: bool, config: FrameConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Produce one frame of interleaved stereo 16-bit PCM.

    A constant tone while the sound timer is active, silence otherwise. The
    block length is ``2 * config.samples_per_frame`` either way.
    """
    samples = config.samples_per_frame
    if not sound_on:
        return np.zeros(samples * 2, dtype=np.int16)
    return _tone_block(samples, config.sampling_rate, float(config.tone_frequency)).copy()
