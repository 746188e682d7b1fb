"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"
CONFIG_FILE_ENV_VAR = "INTERVAL_TIMER_CONFIG"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class LoggingSettings:
    """Root log level loaded from `[logging]`."""
    level: str = "INFO"


@dataclass(frozen=True)
class AudioSettings:
    """Tone playback settings loaded from `[audio]`."""
    enabled: bool = True
    output_device: Optional[int] = None
    sample_rate_hz: int = 44100
    volume: float = 0.3
    blocksize: int = 1024


@dataclass(frozen=True)
class DisplaySettings:
    """Console rendering settings loaded from `[display]`."""
    progress_bar_width: int = 30


@dataclass(frozen=True)
class AppConfig:
    """Top-level immutable application configuration."""
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    audio: AudioSettings = field(default_factory=AudioSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    source_file: str = ""
