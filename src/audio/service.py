"""Fire-and-forget tone playback used as the interval cue emitter."""

import concurrent.futures
import logging
from typing import Optional, Protocol

import numpy as np

from .engine import AudioError, ToneSynthesizer


class AudioOutput(Protocol):
    def play(self, wav: np.ndarray, sample_rate_hz: int) -> None:
        ...


class ToneService:
    """Synthesizes and plays tones on worker threads; never raises to callers."""
    def __init__(
        self,
        synthesizer: ToneSynthesizer,
        output: AudioOutput,
        max_workers: int = 4,
        logger: Optional[logging.Logger] = None,
    ):
        self._synthesizer = synthesizer
        self._output = output
        self._logger = logger or logging.getLogger(__name__)
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="tone",
        )

    def play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        try:
            self._executor.submit(self._play, frequency_hz, duration_seconds)
        except RuntimeError as error:
            # Raised after shutdown().
            self._logger.warning("Tone playback unavailable: %s", error)

    def shutdown(self, wait: bool = False) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=not wait)

    def _play(self, frequency_hz: float, duration_seconds: float) -> None:
        try:
            wav = self._synthesizer.synthesize(frequency_hz, duration_seconds)
            self._output.play(wav, self._synthesizer.sample_rate_hz)
        except AudioError as error:
            self._logger.warning("Tone playback failed: %s", error)
        except Exception as error:
            self._logger.error("Unexpected tone playback error: %s", error, exc_info=True)
