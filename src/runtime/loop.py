"""Runtime orchestration loop for console commands, ticks, and cue timing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Optional, TextIO

from interval import (
    CuePlayer,
    IntervalTimer,
    InvalidStateError,
    LoopScheduler,
    ToneEmitter,
)
from workouts import OutOfRangeError, WorkoutRegistry

from .commands import (
    COMMAND_HELP,
    COMMAND_INVALID,
    COMMAND_LIST,
    COMMAND_PAUSE,
    COMMAND_QUIT,
    COMMAND_RESET,
    COMMAND_SELECT,
    COMMAND_START,
    COMMAND_STATUS,
    CommandEvent,
    CommandReader,
)
from .messages import HELP_TEXT
from .ticks import TickDependencies, TickProcessor
from .ui import DisplayLike

_MAX_WAIT_SECONDS = 0.25


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    registry: WorkoutRegistry
    tone_emitter: ToneEmitter
    display: DisplayLike
    input_stream: Optional[TextIO] = None


@dataclass
class RuntimeResources:
    """Mutable runtime resources created for the event loop lifecycle."""
    event_queue: Queue[CommandEvent]
    scheduler: LoopScheduler
    reader: Optional[CommandReader] = None


class IntervalRuntime:
    """Single control thread that owns the timer, its scheduler, and command intake."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._display = bootstrap.display

        scheduler = LoopScheduler(logger=logging.getLogger("scheduler"))
        self._resources = RuntimeResources(event_queue=Queue(), scheduler=scheduler)
        self._tick_processor = TickProcessor(
            TickDependencies(display=self._display, logger=self._logger)
        )
        self._timer = IntervalTimer(
            registry=bootstrap.registry,
            cues=CuePlayer(
                bootstrap.tone_emitter,
                scheduler,
                logger=logging.getLogger("interval.cues"),
            ),
            scheduler=scheduler,
            on_tick=self._tick_processor.handle_tick,
            logger=logging.getLogger("interval"),
        )

    @property
    def timer(self) -> IntervalTimer:
        return self._timer

    @property
    def scheduler(self) -> LoopScheduler:
        return self._resources.scheduler

    def run(self) -> int:
        self._show_menu()
        self._display.show_message(HELP_TEXT)
        self._display.show_status(self._timer.snapshot())

        try:
            if self._bootstrap.input_stream is not None:
                self._resources.reader = CommandReader(
                    self._bootstrap.input_stream,
                    self._resources.event_queue,
                    logger=logging.getLogger("runtime.commands"),
                )
                self._resources.reader.start()

            while True:
                self._resources.scheduler.run_due()

                event = self._poll_event()
                if event is None:
                    continue

                exit_code = self.handle_command(event)
                if exit_code is not None:
                    return exit_code

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def handle_command(self, event: CommandEvent) -> Optional[int]:
        """Apply one command to the timer; return an exit code to stop the loop."""
        timer = self._timer
        try:
            if event.name == COMMAND_START:
                self._display.show_status(timer.start())
            elif event.name == COMMAND_PAUSE:
                self._display.show_status(timer.pause())
            elif event.name == COMMAND_RESET:
                self._display.show_status(timer.reset())
            elif event.name == COMMAND_SELECT:
                position = event.position if event.position is not None else 0
                snapshot = timer.select_template(position - 1)
                self._display.show_message(f"Selected {snapshot.template_name}")
                self._display.show_status(snapshot)
            elif event.name == COMMAND_LIST:
                self._show_menu()
            elif event.name == COMMAND_STATUS:
                self._display.show_status(timer.snapshot())
            elif event.name == COMMAND_HELP:
                self._display.show_message(HELP_TEXT)
            elif event.name == COMMAND_QUIT:
                self._logger.info("Quit requested (%s)", event.raw or event.name)
                return 0
            elif event.name == COMMAND_INVALID:
                self._display.show_error(f"Unknown command: {event.raw!r}. Type 'help'.")
            else:
                self._logger.warning("Ignoring unknown command type: %s", event.name)
        except InvalidStateError as error:
            self._logger.warning("Rejected %s: %s", event.name, error)
            self._display.show_error(f"{error}. Pause or reset first.")
        except OutOfRangeError as error:
            self._logger.warning("Rejected %s: %s", event.name, error)
            self._display.show_error(
                f"No workout #{event.position}. Choose 1-{self._bootstrap.registry.count()}."
            )
        return None

    def _show_menu(self) -> None:
        self._display.show_menu(
            self._bootstrap.registry,
            self._timer.snapshot().template_index,
        )

    def _poll_event(self) -> Optional[CommandEvent]:
        wait = self._resources.scheduler.seconds_until_next()
        timeout = _MAX_WAIT_SECONDS if wait is None else min(wait, _MAX_WAIT_SECONDS)
        try:
            return self._resources.event_queue.get(timeout=timeout)
        except Empty:
            return None

    def _shutdown(self) -> None:
        self._logger.info("Stopping interval timer...")
        self._timer.pause()
        self._resources.scheduler.cancel_all()
