from __future__ import annotations

import sys
from typing import Optional, Protocol, TextIO

from interval import IntervalSnapshot
from workouts import WorkoutRegistry

from .messages import status_line, template_menu_lines


class DisplayLike(Protocol):
    def show_status(self, snapshot: IntervalSnapshot) -> None:
        ...

    def show_message(self, text: str) -> None:
        ...

    def show_error(self, text: str) -> None:
        ...

    def show_menu(self, registry: WorkoutRegistry, selected_index: int) -> None:
        ...


class ConsoleDisplay:
    """Writes interval status lines and menus to a text stream."""
    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        progress_bar_width: int = 30,
    ):
        self._stream = stream or sys.stdout
        self._progress_bar_width = progress_bar_width

    def show_status(self, snapshot: IntervalSnapshot) -> None:
        self._write(status_line(snapshot, bar_width=self._progress_bar_width))

    def show_message(self, text: str) -> None:
        self._write(text)

    def show_error(self, text: str) -> None:
        self._write(f"! {text}")

    def show_menu(self, registry: WorkoutRegistry, selected_index: int) -> None:
        for line in template_menu_lines(registry, selected_index):
            self._write(line)

    def _write(self, line: str) -> None:
        self._stream.write(line + "\n")
        self._stream.flush()
