"""Console command parsing and the stdin reader thread feeding the runtime loop."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from queue import Queue
from typing import Optional, TextIO

COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_RESET = "reset"
COMMAND_SELECT = "select"
COMMAND_LIST = "list"
COMMAND_STATUS = "status"
COMMAND_HELP = "help"
COMMAND_QUIT = "quit"
COMMAND_INVALID = "invalid"

_ALIASES: dict[str, str] = {
    "start": COMMAND_START,
    "s": COMMAND_START,
    "pause": COMMAND_PAUSE,
    "p": COMMAND_PAUSE,
    "reset": COMMAND_RESET,
    "r": COMMAND_RESET,
    "select": COMMAND_SELECT,
    "list": COMMAND_LIST,
    "l": COMMAND_LIST,
    "status": COMMAND_STATUS,
    "help": COMMAND_HELP,
    "h": COMMAND_HELP,
    "?": COMMAND_HELP,
    "quit": COMMAND_QUIT,
    "q": COMMAND_QUIT,
    "exit": COMMAND_QUIT,
}


@dataclass(frozen=True)
class CommandEvent:
    """One parsed console command; `position` is the 1-based menu entry for select."""
    name: str
    position: Optional[int] = None
    raw: str = ""


def parse_command(line: str) -> Optional[CommandEvent]:
    """Parse one input line; blank lines yield None."""
    text = " ".join(line.split()).lower()
    if not text:
        return None

    position = _parse_position(text)
    if position is not None:
        return CommandEvent(name=COMMAND_SELECT, position=position, raw=text)

    head, _, rest = text.partition(" ")
    name = _ALIASES.get(head)
    if name is None:
        return CommandEvent(name=COMMAND_INVALID, raw=text)

    if name == COMMAND_SELECT:
        position = _parse_position(rest)
        if position is None:
            return CommandEvent(name=COMMAND_INVALID, raw=text)
        return CommandEvent(name=COMMAND_SELECT, position=position, raw=text)

    if rest:
        return CommandEvent(name=COMMAND_INVALID, raw=text)
    return CommandEvent(name=name, raw=text)


def _parse_position(text: str) -> Optional[int]:
    # isdigit() also accepts superscripts, which int() rejects.
    if not text.isdecimal():
        return None
    try:
        return int(text)
    except ValueError:
        return None


class CommandReader:
    """Reads command lines on a daemon thread and pushes events to a queue."""

    def __init__(
        self,
        stream: TextIO,
        queue: Queue,
        logger: Optional[logging.Logger] = None,
    ):
        self._stream = stream
        self._queue = queue
        self._logger = logger or logging.getLogger(__name__)
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            self._logger.warning("Command reader is already running")
            return
        self._thread = threading.Thread(
            target=self._run, daemon=True, name="command-reader"
        )
        self._thread.start()

    def _run(self) -> None:
        try:
            for line in self._stream:
                event = parse_command(line)
                if event is not None:
                    self._queue.put(event)
        except Exception as error:
            self._logger.error("Command input failed: %s", error, exc_info=True)
        finally:
            # EOF ends the session.
            self._queue.put(CommandEvent(name=COMMAND_QUIT, raw="<eof>"))
