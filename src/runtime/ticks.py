"""Tick handler that renders countdown updates and phase announcements."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from interval import IntervalTick

from .messages import phase_started_text, workout_completed_text
from .ui import DisplayLike


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing interval tick events."""
    display: DisplayLike
    logger: logging.Logger


class TickProcessor:
    """Handles tick side effects such as status output and announcements."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_tick(self, tick: IntervalTick) -> None:
        deps = self._dependencies
        snapshot = tick.snapshot
        if tick.completed:
            deps.display.show_status(snapshot)
            deps.display.show_message(workout_completed_text(snapshot))
            deps.logger.debug("Completion announced for %s", snapshot.template_name)
            return

        if tick.transitioned:
            deps.display.show_message(phase_started_text(snapshot))

        deps.display.show_status(snapshot)
