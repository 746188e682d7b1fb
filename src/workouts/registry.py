"""Built-in interval workout templates and their read-only registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import OutOfRangeError, TemplateDefinitionError


@dataclass(frozen=True)
class WorkoutTemplate:
    """Named set count and phase durations for one interval workout."""
    name: str
    sets: int
    action_seconds: int
    break_seconds: int

    @property
    def total_seconds(self) -> int:
        # The final set has no trailing break.
        return self.sets * self.action_seconds + (self.sets - 1) * self.break_seconds


TEMPLATES: tuple[WorkoutTemplate, ...] = (
    WorkoutTemplate(name="HIIT Workout", sets=4, action_seconds=20, break_seconds=10),
    WorkoutTemplate(name="Tabata", sets=8, action_seconds=20, break_seconds=10),
    WorkoutTemplate(name="Boxing Rounds", sets=5, action_seconds=180, break_seconds=60),
    WorkoutTemplate(name="Quick Burst", sets=10, action_seconds=45, break_seconds=15),
    WorkoutTemplate(name="Endurance", sets=6, action_seconds=90, break_seconds=30),
)


class WorkoutRegistry:
    """Immutable, ordered list of workout templates addressed by index."""

    def __init__(self, templates: Iterable[WorkoutTemplate]):
        entries = tuple(templates)
        if not entries:
            raise TemplateDefinitionError("Workout registry needs at least one template")

        seen: set[str] = set()
        for template in entries:
            _validate_template(template)
            if template.name in seen:
                raise TemplateDefinitionError(
                    f"Duplicate workout template name: {template.name!r}"
                )
            seen.add(template.name)

        self._templates = entries

    def get(self, index: int) -> WorkoutTemplate:
        if not 0 <= index < len(self._templates):
            raise OutOfRangeError(
                f"Workout template index must be in [0, {len(self._templates)}), got: {index}"
            )
        return self._templates[index]

    def count(self) -> int:
        return len(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[WorkoutTemplate]:
        return iter(self._templates)


def _validate_template(template: WorkoutTemplate) -> None:
    if not template.name.strip():
        raise TemplateDefinitionError("Workout template name cannot be empty")
    if template.sets < 1:
        raise TemplateDefinitionError(
            f"{template.name}: sets must be at least 1, got: {template.sets}"
        )
    if template.action_seconds < 1:
        raise TemplateDefinitionError(
            f"{template.name}: action_seconds must be at least 1, "
            f"got: {template.action_seconds}"
        )
    if template.break_seconds < 0:
        raise TemplateDefinitionError(
            f"{template.name}: break_seconds cannot be negative, "
            f"got: {template.break_seconds}"
        )


DEFAULT_REGISTRY = WorkoutRegistry(TEMPLATES)
