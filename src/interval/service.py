"""In-memory interval workout state machine with scheduler-driven ticks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from workouts import WorkoutRegistry, WorkoutTemplate

from .constants import (
    DEFERRED_START_CUE_DELAY_MS,
    PHASE_ACTION,
    PHASE_BREAK,
    STATUS_COMPLETE,
    STATUS_IDLE,
    STATUS_PAUSED,
    STATUS_RUNNING,
    TICK_INTERVAL_MS,
)
from .cues import CuePlayer
from .errors import InvalidStateError
from .scheduler import CancelHandle, Scheduler

IntervalPhase = Literal["action", "break"]
IntervalStatus = Literal["idle", "running", "paused", "complete"]


@dataclass(frozen=True)
class IntervalSnapshot:
    """Immutable view of the timer state consumed by the presentation layer."""
    template_index: int
    template_name: str
    sets: int
    action_seconds: int
    break_seconds: int
    phase: IntervalPhase
    current_set: int
    remaining_seconds: int
    running: bool
    has_started: bool

    @property
    def phase_duration_seconds(self) -> int:
        if self.phase == PHASE_BREAK:
            return self.break_seconds
        return self.action_seconds

    @property
    def progress_fraction(self) -> float:
        duration = self.phase_duration_seconds
        if duration <= 0:
            return 1.0
        fraction = (duration - self.remaining_seconds) / duration
        return max(0.0, min(1.0, fraction))

    @property
    def is_complete(self) -> bool:
        return (
            not self.running
            and not self.has_started
            and self.phase == PHASE_ACTION
            and self.current_set == self.sets
            and self.remaining_seconds == 0
        )

    @property
    def status(self) -> IntervalStatus:
        if self.running:
            return STATUS_RUNNING
        if self.has_started:
            return STATUS_PAUSED
        if self.is_complete:
            return STATUS_COMPLETE
        return STATUS_IDLE


@dataclass(frozen=True)
class IntervalTick:
    """Result of one processed tick while the timer is running."""
    snapshot: IntervalSnapshot
    transitioned: bool = False
    completed: bool = False
    ended_phase: Optional[IntervalPhase] = None


TickListener = Callable[[IntervalTick], None]


class IntervalTimer:
    """Action/break state machine for the selected workout template.

    All operations are expected on one control thread. While running, a
    repeating scheduler entry calls `tick()` once per second; the entry is
    released whenever the timer stops or the template changes.
    """

    def __init__(
        self,
        *,
        registry: WorkoutRegistry,
        cues: CuePlayer,
        scheduler: Scheduler,
        on_tick: Optional[TickListener] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._registry = registry
        self._cues = cues
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._logger = logger or logging.getLogger("interval")

        self._tick_handle: Optional[CancelHandle] = None
        self._deferred_cues: list[CancelHandle] = []
        self._generation = 0

        self._template_index = 0
        self._template: WorkoutTemplate = registry.get(0)
        self._phase: IntervalPhase = PHASE_ACTION
        self._current_set = 1
        self._remaining_seconds = self._template.action_seconds
        self._running = False
        self._has_started = False

    @property
    def template(self) -> WorkoutTemplate:
        return self._template

    def snapshot(self) -> IntervalSnapshot:
        return IntervalSnapshot(
            template_index=self._template_index,
            template_name=self._template.name,
            sets=self._template.sets,
            action_seconds=self._template.action_seconds,
            break_seconds=self._template.break_seconds,
            phase=self._phase,
            current_set=self._current_set,
            remaining_seconds=self._remaining_seconds,
            running=self._running,
            has_started=self._has_started,
        )

    def select_template(self, index: int) -> IntervalSnapshot:
        if self._running:
            raise InvalidStateError("Cannot switch workout template while the timer is running")

        template = self._registry.get(index)
        self._template_index = index
        self._template = template
        self._rewind()
        self._logger.info(
            "Workout selected: %s (sets=%d action=%ds break=%ds)",
            template.name,
            template.sets,
            template.action_seconds,
            template.break_seconds,
        )
        return self.snapshot()

    def start(self) -> IntervalSnapshot:
        if self._running:
            return self.snapshot()

        if not self._has_started:
            self._has_started = True
            self._cues.play_start_cue()
            self._logger.info(
                "Workout started: %s set=%d/%d",
                self._template.name,
                self._current_set,
                self._template.sets,
            )
        else:
            self._logger.info(
                "Workout resumed: %s phase=%s remaining=%ss",
                self._template.name,
                self._phase,
                self._remaining_seconds,
            )

        self._running = True
        self._tick_handle = self._scheduler.schedule_repeating(
            TICK_INTERVAL_MS,
            self._handle_scheduled_tick,
        )
        return self.snapshot()

    def pause(self) -> IntervalSnapshot:
        if not self._running:
            return self.snapshot()

        self._stop_ticking()
        self._logger.info(
            "Workout paused: phase=%s set=%d remaining=%ss",
            self._phase,
            self._current_set,
            self._remaining_seconds,
        )
        return self.snapshot()

    def reset(self) -> IntervalSnapshot:
        self._rewind()
        self._logger.info("Workout reset: %s", self._template.name)
        return self.snapshot()

    def tick(self) -> Optional[IntervalTick]:
        if not self._running:
            return None

        if self._remaining_seconds > 1:
            self._remaining_seconds -= 1
            return IntervalTick(snapshot=self.snapshot())

        ended_phase = self._phase
        self._cues.play_end_cue()

        if ended_phase == PHASE_ACTION:
            if self._current_set < self._template.sets:
                self._phase = PHASE_BREAK
                self._remaining_seconds = self._template.break_seconds
                self._schedule_start_cue()
                self._logger.info(
                    "Break started: set=%d/%d duration=%ss",
                    self._current_set,
                    self._template.sets,
                    self._remaining_seconds,
                )
                return IntervalTick(
                    snapshot=self.snapshot(),
                    transitioned=True,
                    ended_phase=ended_phase,
                )

            self._stop_ticking()
            self._has_started = False
            self._remaining_seconds = 0
            self._logger.info(
                "Workout completed: %s (%d sets)",
                self._template.name,
                self._template.sets,
            )
            return IntervalTick(
                snapshot=self.snapshot(),
                transitioned=True,
                completed=True,
                ended_phase=ended_phase,
            )

        self._phase = PHASE_ACTION
        self._current_set += 1
        self._remaining_seconds = self._template.action_seconds
        self._schedule_start_cue()
        self._logger.info(
            "Action started: set=%d/%d duration=%ss",
            self._current_set,
            self._template.sets,
            self._remaining_seconds,
        )
        return IntervalTick(
            snapshot=self.snapshot(),
            transitioned=True,
            ended_phase=ended_phase,
        )

    def _handle_scheduled_tick(self) -> None:
        tick = self.tick()
        if tick is not None and self._on_tick is not None:
            self._on_tick(tick)

    def _schedule_start_cue(self) -> None:
        generation = self._generation

        def play_if_current() -> None:
            if generation != self._generation:
                self._logger.debug("Dropping stale start cue")
                return
            self._cues.play_start_cue()

        self._deferred_cues = [handle for handle in self._deferred_cues if not handle.cancelled]
        self._deferred_cues.append(
            self._scheduler.schedule_once(DEFERRED_START_CUE_DELAY_MS, play_if_current)
        )

    def _rewind(self) -> None:
        self._stop_ticking()
        self._cancel_deferred_cues()
        self._phase = PHASE_ACTION
        self._current_set = 1
        self._remaining_seconds = self._template.action_seconds
        self._has_started = False

    def _stop_ticking(self) -> None:
        self._running = False
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _cancel_deferred_cues(self) -> None:
        self._generation += 1
        for handle in self._deferred_cues:
            handle.cancel()
        self._deferred_cues = []
