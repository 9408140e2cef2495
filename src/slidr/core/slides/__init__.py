"""Slides package — public API re-exports."""

from .slide import Direction, Axis, SlideNode
from .collection import SlideGraph
from .animations import (
    Keyframe,
    KeyframeSpec,
    TimingDescriptor,
    Animation,
    TransitionKind,
    TransitionName,
    TransitionFamily,
    TRANSITIONS,
    available_transitions,
    get_family,
)
from .styles import PresentationStyle

__all__ = [
    "Direction",
    "Axis",
    "SlideNode",
    "SlideGraph",
    "Keyframe",
    "KeyframeSpec",
    "TimingDescriptor",
    "Animation",
    "TransitionKind",
    "TransitionName",
    "TransitionFamily",
    "TRANSITIONS",
    "available_transitions",
    "get_family",
    "PresentationStyle",
]
