"""Configuration model for tone playback."""

from dataclasses import dataclass
from typing import Optional


class AudioConfigurationError(Exception):
    """Raised when audio configuration is invalid."""


@dataclass(frozen=True)
class AudioConfig:
    """Validated tone synthesis and output-device settings."""
    enabled: bool = True
    output_device_index: Optional[int] = None
    sample_rate_hz: int = 44100
    volume: float = 0.3
    blocksize: int = 1024

    def __post_init__(self) -> None:
        if self.sample_rate_hz <= 0:
            raise AudioConfigurationError(
                f"audio.sample_rate_hz must be positive, got: {self.sample_rate_hz}"
            )
        if not 0.0 < self.volume <= 1.0:
            raise AudioConfigurationError(
                f"audio.volume must be in (0, 1], got: {self.volume}"
            )
        if self.blocksize <= 0:
            raise AudioConfigurationError(
                f"audio.blocksize must be positive, got: {self.blocksize}"
            )

    @classmethod
    def from_settings(cls, settings) -> "AudioConfig":
        return cls(
            enabled=bool(settings.enabled),
            output_device_index=settings.output_device,
            sample_rate_hz=settings.sample_rate_hz,
            volume=settings.volume,
            blocksize=settings.blocksize,
        )
