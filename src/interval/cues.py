"""Audio cue sequences played at interval phase boundaries."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .constants import CUE_TONE_GAP_MS, END_CUE_TONES, START_CUE_TONES
from .scheduler import Scheduler


class ToneEmitter(Protocol):
    """Fire-and-forget tone output; implementations must not raise."""
    def play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        ...


class SilentToneEmitter:
    """Tone emitter for muted sessions."""
    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("audio")

    def play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        self._logger.debug(
            "Muted tone: %.0f Hz for %.2fs", frequency_hz, duration_seconds
        )


class CuePlayer:
    """Plays the two-tone start and end cues through a tone emitter."""
    def __init__(
        self,
        emitter: ToneEmitter,
        scheduler: Scheduler,
        logger: Optional[logging.Logger] = None,
    ):
        self._emitter = emitter
        self._scheduler = scheduler
        self._logger = logger or logging.getLogger("interval.cues")

    def play_start_cue(self) -> None:
        self._play_pair(START_CUE_TONES)

    def play_end_cue(self) -> None:
        self._play_pair(END_CUE_TONES)

    def _play_pair(self, tones: tuple[tuple[float, float], tuple[float, float]]) -> None:
        (first_hz, first_seconds), (second_hz, second_seconds) = tones
        self._play_tone(first_hz, first_seconds)
        self._scheduler.schedule_once(
            CUE_TONE_GAP_MS,
            lambda: self._play_tone(second_hz, second_seconds),
        )

    def _play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        try:
            self._emitter.play_tone(frequency_hz, duration_seconds)
        except Exception as error:
            self._logger.warning(
                "Tone %.0f Hz could not be played: %s", frequency_hz, error
            )
