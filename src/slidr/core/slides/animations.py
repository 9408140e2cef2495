"""Declarative transition, keyframe, and timing models.

Pure data that a rendering surface translates to its own animation calls.
Each transition family is a tagged variant of TransitionFamily.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Optional
from pydantic import BaseModel, Field

from .slide import Direction

if TYPE_CHECKING:
    from ..surface import RenderingSurface


class TransitionKind(str, Enum):
    """Whether a slide is entering or leaving the viewport."""
    ENTER = "in"
    LEAVE = "out"


class TransitionName(str, Enum):
    CUBE = "cube"
    FADE = "fade"
    LINEAR = "linear"
    NONE = "none"


class Keyframe(BaseModel):
    """A single keyframe: property values at a percentage of the animation.

    Only the fields a family sets are meaningful; the rest stay None.
    """
    percent: int
    opacity: Optional[float] = None

    # translate, in px
    translate_x: Optional[float] = None
    translate_y: Optional[float] = None
    translate_z: Optional[float] = None

    # rotate, in degrees
    rotate_x: Optional[float] = None
    rotate_y: Optional[float] = None


class KeyframeSpec(BaseModel):
    """A named keyframe set."""
    name: str
    keyframes: list[Keyframe] = Field(default_factory=list)

    def at(self, percent: int) -> Optional[Keyframe]:
        for k in self.keyframes:
            if k.percent == percent:
                return k
        return None


class TimingDescriptor(BaseModel):
    """How long and with which easing a keyframe set plays."""
    name: str = "none"
    duration: float = 0.0  # seconds
    easing: str = "ease-out"
    delay: float = 0.0

    @property
    def is_none(self) -> bool:
        return self.name == "none"

    def to_css(self) -> str:
        if self.is_none:
            return "none"
        return f"{self.name} {self.duration:g}s {self.easing} {self.delay:g}s"


class Animation(BaseModel):
    """Everything a rendering surface needs to play one enter/leave transition."""
    slide_id: Optional[str] = None
    kind: TransitionKind
    direction: Optional[Direction] = None
    transition: str = TransitionName.NONE.value
    timing: TimingDescriptor = Field(default_factory=TimingDescriptor)
    keyframes: Optional[KeyframeSpec] = None
    style: dict[str, str] = Field(default_factory=dict)


# ── Transition families ─────────────────────────────────────────────────

class TransitionFamily(ABC):
    """Common capability interface of a transition effect."""
    tag: TransitionName
    required: tuple[str, ...] = ()
    duration: float = 0.0
    easing: str = "ease-out"
    init_style: dict[str, str] = {}
    positional = False  # keyframes depend on direction and element size

    def supports(self, surface: "RenderingSurface") -> bool:
        if not self.required:
            return True
        return surface.supports(*self.required)

    def keyframe_name(self, slidr_id: str, kind: TransitionKind,
                      direction: Optional[Direction]) -> str:
        parts = [slidr_id, self.tag.value, kind.value]
        if direction is not None:
            parts.append(direction.value)
        return "-".join(parts)

    def timing(self, name: str) -> TimingDescriptor:
        return TimingDescriptor(name=name, duration=self.duration, easing=self.easing)

    @abstractmethod
    def keyframes(self, kind: TransitionKind, direction: Optional[Direction],
                  size: float, opacity: float) -> Optional[list[Keyframe]]:
        """Keyframes for moving `size` px in `direction`, or None if direction-less."""

    def keyframe_spec(self, slidr_id: str, kind: TransitionKind,
                      direction: Optional[Direction], size: float = 0.0,
                      opacity: float = 0.0) -> Optional[KeyframeSpec]:
        frames = self.keyframes(kind, direction, size, opacity)
        if frames is None:
            return None
        return KeyframeSpec(
            name=self.keyframe_name(slidr_id, kind, direction),
            keyframes=frames,
        )


class NoTransition(TransitionFamily):
    tag = TransitionName.NONE

    def timing(self, name: str) -> TimingDescriptor:
        return TimingDescriptor()

    def keyframes(self, kind, direction, size, opacity):
        return None


class FadeTransition(TransitionFamily):
    """Cross-fade. Shared keyframes, no positional semantics."""
    tag = TransitionName.FADE
    required = ("animation", "opacity")
    duration = 0.4

    def keyframe_name(self, slidr_id, kind, direction):
        return f"slidr-fade-{kind.value}"

    def keyframes(self, kind, direction, size, opacity):
        start, end = (0.0, 1.0) if kind is TransitionKind.ENTER else (1.0, 0.0)
        return [Keyframe(percent=0, opacity=start), Keyframe(percent=100, opacity=end)]


def _sign(direction: Direction) -> int:
    return 1 if direction in (Direction.RIGHT, Direction.DOWN) else -1


class LinearTransition(TransitionFamily):
    """Slide in/out along the navigation axis by the element's size."""
    tag = TransitionName.LINEAR
    positional = True
    required = ("transform", "opacity")
    duration = 0.6

    def keyframes(self, kind, direction, size, opacity):
        if direction is None:
            return None
        entering = kind is TransitionKind.ENTER
        if entering:
            t_start, t_end = _sign(direction) * size, 0.0
            o_start, o_end = opacity, 1.0
        else:
            t_start, t_end = 0.0, -_sign(direction) * size
            o_start, o_end = 1.0, opacity
        field = "translate_y" if direction.is_vertical else "translate_x"

        def frame(percent, translate, alpha=None):
            return Keyframe(percent=percent, opacity=alpha, **{field: translate})

        # Stops 1/2 and 98/99 hold the slide invisible at its resting place
        # so nothing flashes before or after the move.
        return [
            frame(0, t_end if entering else t_start, 0.0 if entering else o_start),
            frame(1, t_start, 0.0 if entering else o_start),
            frame(2, t_start, o_start),
            frame(98, t_end, o_end),
            frame(99, t_end, o_end if entering else 0.0),
            frame(100, t_end if entering else t_start),
        ]


class CubeTransition(TransitionFamily):
    """Rotate about the perpendicular axis as if on the face of a cube."""
    tag = TransitionName.CUBE
    positional = True
    required = ("animation", "backface-visibility", "transform-style", "transform", "opacity")
    duration = 1.0
    easing = "cubic-bezier(0.15, 0.9, 0.25, 1)"
    init_style = {"backface-visibility": "hidden", "transform-style": "preserve-3d"}

    def keyframes(self, kind, direction, size, opacity):
        if direction is None:
            return None
        # Entering from the right starts rotated +90deg about Y; up/down rotate about X.
        if direction.is_vertical:
            field = "rotate_x"
            angle = 90.0 if direction is Direction.UP else -90.0
        else:
            field = "rotate_y"
            angle = 90.0 if direction is Direction.RIGHT else -90.0
        if kind is TransitionKind.ENTER:
            r_start, r_end, o_start, o_end = angle, 0.0, opacity, 1.0
        else:
            r_start, r_end, o_start, o_end = 0.0, -angle, 1.0, opacity
        depth = size / 2
        return [
            Keyframe(percent=0, opacity=o_start, translate_z=depth, **{field: r_start}),
            Keyframe(percent=100, opacity=o_end, translate_z=depth, **{field: r_end}),
        ]


TRANSITIONS: dict[TransitionName, TransitionFamily] = {
    TransitionName.CUBE: CubeTransition(),
    TransitionName.FADE: FadeTransition(),
    TransitionName.LINEAR: LinearTransition(),
    TransitionName.NONE: NoTransition(),
}


def available_transitions() -> list[str]:
    return [name.value for name in TRANSITIONS]


def get_family(name: Optional[str]) -> Optional[TransitionFamily]:
    try:
        return TRANSITIONS[TransitionName(name)]
    except ValueError:
        return None
