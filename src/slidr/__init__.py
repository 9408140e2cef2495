"""slidr — wire a container's children into a navigable, animated grid of slides."""

from .core.slides import Axis, Direction, available_transitions
from .core.state import Slidr, SlidrSettings
from .core.registry import SlidrRegistry
from .core.surface import Container, Document, Element, MemorySurface
from .core.timers import AsyncioScheduler, ManualScheduler


def transitions() -> list[str]:
    """Names of the transitions slidr knows about."""
    return available_transitions()


__all__ = [
    "Axis",
    "Direction",
    "Slidr",
    "SlidrSettings",
    "SlidrRegistry",
    "Container",
    "Document",
    "Element",
    "MemorySurface",
    "AsyncioScheduler",
    "ManualScheduler",
    "transitions",
]
