"""Sounddevice-backed audio playback for synthesized tones."""

import logging
import threading
from typing import Optional

import numpy as np
import sounddevice as sd

from .engine import AudioError

# Extra wait beyond the tone length before playback counts as stuck.
_FINISH_GRACE_SECONDS = 1.0


class SoundDeviceAudioOutput:
    """Plays short mono tones through a selected sounddevice output."""
    def __init__(
        self,
        output_device_index: Optional[int] = None,
        blocksize: int = 1024,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._blocksize = blocksize
        self._logger = logger or logging.getLogger(__name__)

    def play(self, wav: np.ndarray, sample_rate_hz: int) -> None:
        if wav.ndim != 1:
            raise AudioError("Expected mono PCM array for playback")
        if len(wav) == 0:
            raise AudioError("Cannot play empty audio buffer")

        samples = np.clip(np.asarray(wav, dtype=np.float32), -1.0, 1.0)
        finished = threading.Event()
        pos = 0

        def callback(outdata, frames, time_info, status):
            nonlocal pos
            if status:
                self._logger.warning("Sounddevice status: %s", status)

            chunk = samples[pos : pos + frames]
            outdata[: len(chunk), 0] = chunk
            if len(chunk) < frames:
                outdata[len(chunk) :, 0] = 0
                raise sd.CallbackStop()
            pos += frames

        timeout = len(samples) / sample_rate_hz + _FINISH_GRACE_SECONDS
        try:
            with sd.OutputStream(
                channels=1,
                samplerate=sample_rate_hz,
                blocksize=self._blocksize,
                dtype="float32",
                callback=callback,
                finished_callback=finished.set,
                device=self._output_device_index,
            ):
                if not finished.wait(timeout):
                    self._logger.warning(
                        "Tone playback did not finish within %.2fs", timeout
                    )
        except Exception as error:
            raise AudioError(f"Audio playback failed: {error}") from error
