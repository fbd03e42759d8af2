"""Frame timing and audio configuration."""

from chex import dataclass

from chip8vm.constants import CYCLES_PER_FRAME, FRAMES_PER_SECOND, SAMPLING_RATE, TONE_FREQUENCY


@dataclass(frozen=True)
class FrameConfig:
    """Per-frame execution and audio settings.

    Attributes:
        cycles_per_frame: Instructions executed per emulated frame
        fps: Emulated frames per second
        sampling_rate: Audio sampling rate in Hz
        tone_frequency: Frequency of the sound-timer beep in Hz
    """
    cycles_per_frame: int = CYCLES_PER_FRAME
    fps: int = FRAMES_PER_SECOND
    sampling_rate: int = SAMPLING_RATE
    tone_frequency: float = TONE_FREQUENCY

    @property
    def samples_per_frame(self) -> int:
        """Audio samples (per channel) produced by one frame."""
        return self.sampling_rate // self.fps


DEFAULT_CONFIG = FrameConfig()
