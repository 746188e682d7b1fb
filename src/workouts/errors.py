class WorkoutError(Exception):
    """Base exception for workout registry lookups."""


class OutOfRangeError(WorkoutError):
    """Raised when a registry index falls outside the template list."""


class TemplateDefinitionError(WorkoutError):
    """Raised when a built-in workout template is malformed."""
