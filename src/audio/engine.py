"""Sine tone synthesis with an exponentially decaying gain envelope."""

import logging
from typing import Optional

import numpy as np

from .config import AudioConfig

_ENVELOPE_FLOOR = 0.01


class AudioError(Exception):
    """Raised when tone synthesis or playback fails."""

    pass


class ToneSynthesizer:
    def __init__(
        self,
        config: AudioConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger(__name__)

    @property
    def sample_rate_hz(self) -> int:
        return self._config.sample_rate_hz

    def synthesize(self, frequency_hz: float, duration_seconds: float) -> np.ndarray:
        if frequency_hz <= 0:
            raise AudioError(f"Tone frequency must be positive, got: {frequency_hz}")
        if duration_seconds <= 0:
            raise AudioError(f"Tone duration must be positive, got: {duration_seconds}")

        sample_rate_hz = self._config.sample_rate_hz
        sample_count = max(1, int(round(duration_seconds * sample_rate_hz)))
        t = np.arange(sample_count, dtype=np.float64) / sample_rate_hz

        volume = self._config.volume
        floor = min(_ENVELOPE_FLOOR, volume)
        envelope = volume * np.power(floor / volume, t / duration_seconds)
        wav = np.sin(2.0 * np.pi * frequency_hz * t) * envelope

        self._logger.debug(
            "Synthesized %d samples at %.0f Hz", sample_count, frequency_hz
        )
        return wav.astype(np.float32)
