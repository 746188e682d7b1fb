import logging
import sys
from typing import Optional

from app_config import AppConfig, AppConfigurationError, load_app_config
from audio import (
    AudioConfig,
    AudioConfigurationError,
    SoundDeviceAudioOutput,
    ToneService,
    ToneSynthesizer,
)
from interval import SilentToneEmitter, ToneEmitter
from runtime import IntervalRuntime, RuntimeBootstrap
from runtime.ui import ConsoleDisplay
from workouts import DEFAULT_REGISTRY


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("interval_timer")


def build_tone_emitter(
    app_config: AppConfig,
    logger: logging.Logger,
) -> tuple[ToneEmitter, Optional[ToneService]]:
    """Create the cue emitter; muted sessions get a silent emitter."""
    audio_config = AudioConfig.from_settings(app_config.audio)
    if not audio_config.enabled:
        logger.info("Audio cues disabled by configuration.")
        return SilentToneEmitter(logger=logging.getLogger("audio")), None

    audio_logger = logging.getLogger("audio")
    service = ToneService(
        synthesizer=ToneSynthesizer(audio_config, logger=audio_logger),
        output=SoundDeviceAudioOutput(
            output_device_index=audio_config.output_device_index,
            blocksize=audio_config.blocksize,
            logger=audio_logger,
        ),
        logger=audio_logger,
    )
    return service, service


def main() -> int:
    """Run the interactive interval workout timer."""
    try:
        app_config = load_app_config()
    except AppConfigurationError as error:
        setup_logging()
        logging.getLogger("interval_timer").error("Configuration error: %s", error)
        return 1

    logger = setup_logging(level=getattr(logging, app_config.logging.level))
    if app_config.source_file:
        logger.info("Loaded configuration from %s", app_config.source_file)

    try:
        tone_emitter, tone_service = build_tone_emitter(app_config, logger)
    except AudioConfigurationError as error:
        logger.error("Audio configuration error: %s", error)
        return 1

    runtime = IntervalRuntime(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            registry=DEFAULT_REGISTRY,
            tone_emitter=tone_emitter,
            display=ConsoleDisplay(
                sys.stdout,
                progress_bar_width=app_config.display.progress_bar_width,
            ),
            input_stream=sys.stdin,
        )
    )
    try:
        return runtime.run()
    finally:
        if tone_service is not None:
            tone_service.shutdown()


if __name__ == "__main__":
    sys.exit(main())
