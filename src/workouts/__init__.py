"""Public exports for the static workout template registry."""

from .errors import OutOfRangeError, TemplateDefinitionError, WorkoutError
from .registry import DEFAULT_REGISTRY, TEMPLATES, WorkoutRegistry, WorkoutTemplate

__all__ = [
    "DEFAULT_REGISTRY",
    "OutOfRangeError",
    "TEMPLATES",
    "TemplateDefinitionError",
    "WorkoutError",
    "WorkoutRegistry",
    "WorkoutTemplate",
]
