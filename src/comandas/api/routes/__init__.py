"""Route group exports."""

from . import groups, health, logistics

__all__ = ["groups", "health", "logistics"]
