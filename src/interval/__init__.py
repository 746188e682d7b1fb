from .cues import CuePlayer, SilentToneEmitter, ToneEmitter
from .errors import IntervalError, InvalidStateError
from .scheduler import CancelHandle, LoopScheduler, Scheduler
from .service import (
    IntervalPhase,
    IntervalSnapshot,
    IntervalStatus,
    IntervalTick,
    IntervalTimer,
    TickListener,
)

__all__ = [
    "CancelHandle",
    "CuePlayer",
    "IntervalError",
    "IntervalPhase",
    "IntervalSnapshot",
    "IntervalStatus",
    "IntervalTick",
    "IntervalTimer",
    "InvalidStateError",
    "LoopScheduler",
    "Scheduler",
    "SilentToneEmitter",
    "TickListener",
    "ToneEmitter",
]
