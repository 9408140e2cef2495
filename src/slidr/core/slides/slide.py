"""Slide node model and the compass directions that connect slides."""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class Direction(str, Enum):
    """One of the four compass directions a slide can link to."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def offset(self) -> tuple[int, int]:
        """Unit (dx, dy) step on the breadcrumb grid."""
        return _OFFSETS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    @classmethod
    def coerce(cls, value: "Direction | str | None") -> Optional["Direction"]:
        if value is None or isinstance(value, Direction):
            return value
        return cls(value.lower())


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Order matters: breadcrumb traversal visits neighbors in this order.
_OFFSETS = {
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.DOWN: (0, -1),
}

TRAVERSAL_ORDER: tuple[Direction, ...] = tuple(_OFFSETS)


class Axis(str, Enum):
    """Axis a chain of slides is laid out along.

    horizontal: slides are linked left <-> right
    vertical:   slides are linked up <-> down
    """
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def prev(self) -> Direction:
        return Direction.LEFT if self is Axis.HORIZONTAL else Direction.UP

    @property
    def next(self) -> Direction:
        return Direction.RIGHT if self is Axis.HORIZONTAL else Direction.DOWN

    @classmethod
    def coerce(cls, value: "Axis | str") -> "Axis":
        if isinstance(value, Axis):
            return value
        value = value.lower()
        if value == "h":
            return cls.HORIZONTAL
        if value == "v":
            return cls.VERTICAL
        return cls(value)


class SlideNode(BaseModel):
    """A single slide in the graph.

    `target` is the host's presentation element; the graph only refers to it
    and never serializes it.
    """
    id: str
    target: Any = Field(default=None, exclude=True)
    up: Optional[str] = None
    down: Optional[str] = None
    left: Optional[str] = None
    right: Optional[str] = None
    transitions: dict[Direction, str] = Field(default_factory=dict)
    initialized: bool = False

    def neighbor(self, direction: Direction) -> Optional[str]:
        return getattr(self, direction.value)

    def set_neighbor(self, direction: Direction, slide_id: Optional[str]):
        setattr(self, direction.value, slide_id)

    def transition(self, direction: Direction) -> Optional[str]:
        return self.transitions.get(direction)

    @property
    def neighbors(self) -> dict[Direction, str]:
        """Defined neighbors only."""
        return {
            d: self.neighbor(d)
            for d in TRAVERSAL_ORDER
            if self.neighbor(d) is not None
        }
