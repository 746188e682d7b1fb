"""Phase, status, and cue timing constants used by the interval state machine."""

from __future__ import annotations

PHASE_ACTION = "action"
PHASE_BREAK = "break"

STATUS_IDLE = "idle"
STATUS_RUNNING = "running"
STATUS_PAUSED = "paused"
STATUS_COMPLETE = "complete"

TICK_INTERVAL_MS = 1000

# Tone pairs as (frequency_hz, duration_seconds).
START_CUE_TONES: tuple[tuple[float, float], tuple[float, float]] = (
    (880.0, 0.15),
    (1046.0, 0.15),
)
END_CUE_TONES: tuple[tuple[float, float], tuple[float, float]] = (
    (659.0, 0.15),
    (523.0, 0.3),
)
CUE_TONE_GAP_MS = 150
DEFERRED_START_CUE_DELAY_MS = 100
