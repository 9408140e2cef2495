"""Presentation style models for slides, the container, and the breadcrumb grid."""

from typing import Optional
from pydantic import BaseModel

from .animations import TransitionFamily, TransitionKind


class PresentationStyle(BaseModel):
    """Style properties applied to a presentation element.

    Field names are snake_case; to_properties() returns the hyphenated
    property names a surface expects. None means "leave as is".
    """
    display: Optional[str] = None
    visibility: Optional[str] = None
    position: Optional[str] = None
    overflow: Optional[str] = None
    opacity: Optional[str] = None
    z_index: Optional[str] = None
    pointer_events: Optional[str] = None

    # cube
    backface_visibility: Optional[str] = None
    transform_style: Optional[str] = None

    def to_properties(self) -> dict[str, str]:
        return {
            name.replace("_", "-"): value
            for name, value in self.model_dump(exclude_none=True).items()
        }

    @classmethod
    def from_properties(cls, props: dict[str, str]) -> "PresentationStyle":
        return cls(**{k.replace("-", "_"): v for k, v in props.items()})


def slide_init_style(family: TransitionFamily, first_time: bool,
                     current_display: Optional[str] = None) -> PresentationStyle:
    """Style applied when a slide is (re)initialised for a transition family.

    The first initialisation also hides the slide and takes it out of flow;
    the family's own init properties win over those defaults.
    """
    props = dict(family.init_style)
    if first_time:
        defaults = {
            "display": "block" if current_display in (None, "none") else current_display,
            "visibility": "visible",
            "position": "absolute",
            "opacity": "0",
            "z-index": "0",
            "pointer-events": "none",
        }
        for key, value in defaults.items():
            props.setdefault(key, value)
    return PresentationStyle.from_properties(props)


def end_style(kind: TransitionKind, z_index: Optional[str] = None,
              pointer_events: Optional[str] = None) -> PresentationStyle:
    """Resting style once an enter/leave transition has finished."""
    entering = kind is TransitionKind.ENTER
    return PresentationStyle(
        opacity="1" if entering else "0",
        z_index=z_index or ("1" if entering else "0"),
        pointer_events=pointer_events or ("auto" if entering else "none"),
    )


def container_style(clipping: bool, display: Optional[str] = None,
                    position: Optional[str] = None,
                    overflow: Optional[str] = None) -> PresentationStyle:
    """Style the container gets when the deck starts."""
    return PresentationStyle(
        visibility="visible",
        opacity="1",
        display=display if display == "inline-block" else "table",
        position="relative" if position in (None, "static") else position,
        overflow="hidden" if clipping else overflow,
    )


# The grid fades above slides and never takes pointer events itself.
BREADCRUMB_Z_INDEX = "2"
BREADCRUMB_POINTER_EVENTS = "none"
