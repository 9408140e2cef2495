"""Transition orchestration: which effect plays when a slide enters or leaves."""

import logging
from typing import TYPE_CHECKING, Any, Optional

from .slides.animations import (
    TRANSITIONS,
    Animation,
    TransitionKind,
    TransitionName,
    available_transitions,
    get_family,
)
from .slides.collection import SlideGraph
from .slides.slide import Direction
from .slides.styles import end_style, slide_init_style

if TYPE_CHECKING:
    from .breadcrumbs import BreadcrumbLayout
    from .surface import RenderingSurface

logger = logging.getLogger("Slidr.core.transitions")


class TransitionOrchestrator:
    """Resolves per-edge transitions and hands animations to the surface.

    Unsupported or unknown transitions degrade to "none"; navigation is
    never blocked by a missing animation capability.
    """

    def __init__(self, slidr_id: str, graph: SlideGraph, surface: "RenderingSurface",
                 breadcrumbs: Optional["BreadcrumbLayout"] = None, fading: bool = True):
        self.slidr_id = slidr_id
        self.graph = graph
        self.surface = surface
        self.breadcrumbs = breadcrumbs
        self.fading = fading

    @staticmethod
    def available() -> list[str]:
        return available_transitions()

    def supported(self, name: Optional[str]) -> bool:
        family = get_family(name)
        return family is not None and family.supports(self.surface)

    def validate(self, name: Optional[str]) -> str:
        """Return `name` if it can play here, otherwise "none"."""
        if self.supported(name):
            return get_family(name).tag.value
        if name is not None and name != TransitionName.NONE.value:
            logger.debug(f"Transition '{name}' unavailable; using 'none'")
        return TransitionName.NONE.value

    def resolve(self, slide_id: Optional[str], kind: TransitionKind,
                direction: Optional[Direction]) -> Optional[str]:
        """Transition recorded for a slide leaving toward / entering from `direction`.

        A slide entered moving right comes in from its left side, so enter
        lookups read the opposite direction's entry.
        """
        if direction is None:
            return None
        if kind is TransitionKind.ENTER:
            direction = direction.opposite
        return self.graph.get_transition(slide_id, direction)

    def initialize(self, slide_id: str, name: Optional[str]):
        """Apply the presentation style a slide needs before it can animate."""
        node = self.graph.get(slide_id)
        if node is None:
            return
        name = self.validate(name)
        family = TRANSITIONS[TransitionName(name)]
        style = slide_init_style(
            family,
            first_time=not node.initialized,
            current_display=self.surface.computed_style(node.target, "display"),
        )
        self.surface.init_presentation(node.target, name, style)
        node.initialized = True

    def request(self, slide_id: str, kind: TransitionKind, direction: Optional[Direction],
                transition: Optional[str] = None) -> Optional[Animation]:
        """Play the enter/leave transition for a slide and flip its breadcrumb."""
        if self.graph.get(slide_id) is None:
            return None
        name = transition or self.resolve(slide_id, kind, direction)
        name = self.validate(name)
        if self.breadcrumbs is not None:
            self.breadcrumbs.set_active(slide_id, kind is TransitionKind.ENTER)
        return self.animate(slide_id, name, kind, direction)

    def build_animation(self, slide_id: Optional[str], target: Any, name: str,
                        kind: TransitionKind, direction: Optional[Direction],
                        z_index: Optional[str] = None,
                        pointer_events: Optional[str] = None) -> Animation:
        family = TRANSITIONS[TransitionName(self.validate(name))]
        keyframes = None
        if family.positional and direction is not None:
            size = self.surface.measure(target, "height" if direction.is_vertical else "width")
            opacity = 0.0 if self.fading else 1.0
            keyframes = family.keyframe_spec(self.slidr_id, kind, direction, size, opacity)
        elif not family.positional:
            keyframes = family.keyframe_spec(self.slidr_id, kind, direction)
        keyframe_name = keyframes.name if keyframes else family.keyframe_name(self.slidr_id, kind, direction)
        return Animation(
            slide_id=slide_id,
            kind=kind,
            direction=direction,
            transition=family.tag.value,
            timing=family.timing(keyframe_name),
            keyframes=keyframes,
            style=end_style(kind, z_index, pointer_events).to_properties(),
        )

    def animate(self, slide_id: str, name: str, kind: TransitionKind,
                direction: Optional[Direction]) -> Animation:
        target = self.graph.get(slide_id).target
        animation = self.build_animation(slide_id, target, name, kind, direction)
        logger.debug(
            f"{slide_id}: {animation.transition} {kind.value}"
            f"{' ' + direction.value if direction else ''}"
        )
        self.surface.animate(target, animation)
        return animation
