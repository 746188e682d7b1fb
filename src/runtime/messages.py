"""Status and help text builders for the console presentation."""

from __future__ import annotations

from interval import IntervalSnapshot
from interval.constants import (
    PHASE_BREAK,
    STATUS_COMPLETE,
    STATUS_IDLE,
    STATUS_PAUSED,
    STATUS_RUNNING,
)
from workouts import WorkoutRegistry

HELP_TEXT = (
    "Commands: start (s), pause (p), reset (r), select N or N, "
    "list (l), status, help (h), quit (q)"
)


def format_time(seconds: int) -> str:
    """Format a duration in seconds as `M:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{remainder:02d}"


def phase_label(phase: str) -> str:
    return "BREAK" if phase == PHASE_BREAK else "ACTION"


def progress_bar(fraction: float, width: int) -> str:
    clamped = max(0.0, min(1.0, fraction))
    filled = int(round(clamped * width))
    return "[" + "#" * filled + "." * (width - filled) + "]"


def status_text(snapshot: IntervalSnapshot) -> str:
    status = snapshot.status
    if status == STATUS_RUNNING:
        return "running"
    if status == STATUS_PAUSED:
        return "paused"
    if status == STATUS_COMPLETE:
        return "complete"
    if status == STATUS_IDLE:
        return "ready"
    return status


def status_line(snapshot: IntervalSnapshot, *, bar_width: int) -> str:
    """Render the countdown, phase, set counter and progress for one snapshot."""
    percent = int(round(snapshot.progress_fraction * 100))
    return (
        f"{format_time(snapshot.remaining_seconds):>6}  "
        f"{phase_label(snapshot.phase):<6}  "
        f"Set {snapshot.current_set} of {snapshot.sets}  "
        f"{progress_bar(snapshot.progress_fraction, bar_width)} {percent:3d}%  "
        f"({status_text(snapshot)})"
    )


def phase_started_text(snapshot: IntervalSnapshot) -> str:
    return (
        f"{phase_label(snapshot.phase)} - Set {snapshot.current_set} of {snapshot.sets} "
        f"({format_time(snapshot.phase_duration_seconds)})"
    )


def workout_completed_text(snapshot: IntervalSnapshot) -> str:
    return f"Workout complete: {snapshot.template_name} ({snapshot.sets} sets). Well done!"


def template_menu_lines(registry: WorkoutRegistry, selected_index: int) -> list[str]:
    lines: list[str] = []
    for index, template in enumerate(registry):
        marker = "*" if index == selected_index else " "
        lines.append(
            f"{marker} {index + 1}) {template.name}: {template.sets} sets, "
            f"{template.action_seconds}s action / {template.break_seconds}s break "
            f"({format_time(template.total_seconds)} total)"
        )
    return lines
