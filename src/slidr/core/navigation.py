"""Navigation between slides: directional steps and direct jumps."""

import logging
from typing import Optional

from .slides.animations import TransitionKind
from .slides.collection import SlideGraph
from .slides.slide import Direction
from .transitions import TransitionOrchestrator

logger = logging.getLogger("Slidr.core.navigation")


class Navigator:
    """Tracks the current slide and sequences leave/enter requests."""

    def __init__(self, graph: SlideGraph, orchestrator: TransitionOrchestrator):
        self.graph = graph
        self.orchestrator = orchestrator
        self.current: Optional[str] = None

    def target(self, direction: Direction | str) -> Optional[str]:
        return self.graph.get_neighbor(self.current, Direction.coerce(direction))

    def can_step(self, direction: Direction | str) -> bool:
        return self.target(direction) is not None

    def step(self, direction: Direction | str) -> bool:
        direction = Direction.coerce(direction)
        target = self.target(direction)
        if target is None:
            return False
        return self.jump(target, direction, direction)

    def jump(self, target: Optional[str], out_direction: Optional[Direction | str] = None,
             in_direction: Optional[Direction | str] = None,
             out_transition: Optional[str] = None,
             in_transition: Optional[str] = None) -> bool:
        """Leave the current slide, then enter `target`.

        The leave request goes out before `current` moves and the enter
        request after, so a surface sees them in that order.
        """
        if self.current is None or target is None or target not in self.graph:
            return False
        out_direction = Direction.coerce(out_direction)
        in_direction = Direction.coerce(in_direction)
        previous = self.current
        self.orchestrator.request(previous, TransitionKind.LEAVE, out_direction, out_transition)
        self.current = target
        self.orchestrator.request(target, TransitionKind.ENTER, in_direction, in_transition)
        logger.debug(f"Moved {previous} -> {target}")
        return True
