"""Runtime engine exports."""

from .loop import IntervalRuntime, RuntimeBootstrap

__all__ = ["IntervalRuntime", "RuntimeBootstrap"]
