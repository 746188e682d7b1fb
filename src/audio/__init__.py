"""Public exports for tone synthesis and playback components."""

from .config import AudioConfig, AudioConfigurationError
from .engine import AudioError, ToneSynthesizer
from .output import SoundDeviceAudioOutput
from .service import ToneService

__all__ = [
    "AudioConfig",
    "AudioConfigurationError",
    "AudioError",
    "SoundDeviceAudioOutput",
    "ToneService",
    "ToneSynthesizer",
]
