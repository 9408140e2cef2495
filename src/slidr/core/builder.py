"""Chain builder: turns ordered slide ids into validated adjacency edges."""

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence

from .slides.collection import SlideGraph
from .slides.slide import Axis, Direction
from .transitions import TransitionOrchestrator

if TYPE_CHECKING:
    from .breadcrumbs import BreadcrumbLayout
    from .surface import CandidateSource

logger = logging.getLogger("Slidr.core.builder")


class ChainBuilder:
    """Validates and commits chains of slides along one axis.

    A chain either commits every edge or none of them. Conflicts with
    existing edges reject the whole chain unless `overwrite` is set;
    unknown slide ids always reject it.
    """

    def __init__(self, graph: SlideGraph, orchestrator: TransitionOrchestrator,
                 candidates: "CandidateSource",
                 breadcrumbs: Optional["BreadcrumbLayout"] = None):
        self.graph = graph
        self.orchestrator = orchestrator
        self.candidates = candidates
        self.breadcrumbs = breadcrumbs

    def check_ids(self, ids: Sequence[str], valid: dict[str, Any]) -> list[str]:
        if not ids or isinstance(ids, str) or not isinstance(ids, Sequence):
            return ["expected a non-empty list of slide ids"]
        return [
            f"unknown slide '{slide_id}'"
            for slide_id in ids
            if not isinstance(slide_id, str) or slide_id not in valid
        ]

    def find_contradictions(self, ids: Sequence[str], axis: Axis) -> list[str]:
        """Reasons the chain disagrees with itself, e.g. one slide given two predecessors.

        Such a chain can never commit every edge it declares, so overwrite
        does not waive these.
        """
        planned: dict[tuple[str, Direction], str] = {}
        contradictions = []
        for i, current in enumerate(ids):
            links = (
                (axis.prev, ids[i - 1] if i > 0 else None),
                (axis.next, ids[i + 1] if i + 1 < len(ids) else None),
            )
            for direction, neighbor in links:
                if neighbor is None:
                    continue
                earlier = planned.setdefault((current, direction), neighbor)
                if earlier != neighbor:
                    contradictions.append(
                        f"'{current}' would get {direction.value} neighbors "
                        f"'{earlier}' and '{neighbor}'"
                    )
        return list(dict.fromkeys(contradictions))

    def find_conflicts(self, ids: Sequence[str], axis: Axis, transition: str) -> list[str]:
        """Reasons the chain would override existing edges or transitions."""
        graph = self.graph
        prev, nxt = axis.prev, axis.next
        conflicts = []
        for i, current in enumerate(ids):
            new_prev = ids[i - 1] if i > 0 else None
            new_next = ids[i + 1] if i + 1 < len(ids) else None

            # new_next already hangs off a different predecessor
            prev_of_next = graph.get_neighbor(new_next, prev)
            if prev_of_next is not None and prev_of_next != current:
                conflicts.append(
                    f"'{new_next}' already has {prev.value} neighbor '{prev_of_next}'"
                )

            if current not in graph:
                continue
            old_prev = graph.get_neighbor(current, prev)
            old_next = graph.get_neighbor(current, nxt)
            if old_next and new_next and old_next != new_next:
                conflicts.append(f"'{current}' already has {nxt.value} neighbor '{old_next}'")
            if old_prev and new_prev and old_prev != new_prev:
                conflicts.append(f"'{current}' already has {prev.value} neighbor '{old_prev}'")
            for direction, neighbor in ((prev, new_prev), (nxt, new_next)):
                old_trans = graph.get_transition(current, direction)
                if neighbor and old_trans and old_trans != transition:
                    conflicts.append(
                        f"'{current}' {direction.value} transition is '{old_trans}', not '{transition}'"
                    )
        # A slide can appear in both directions of a pair; keep the first report.
        return list(dict.fromkeys(conflicts))

    def validate(self, ids: Sequence[str], axis: Axis | str, transition: Optional[str]) -> list[str]:
        axis = Axis.coerce(axis)
        transition = self.orchestrator.validate(transition)
        problems = self.check_ids(ids, self.candidates.list_candidates())
        if problems:
            return problems
        return self.find_contradictions(ids, axis) + self.find_conflicts(ids, axis, transition)

    def add_chain(self, ids: Sequence[str], axis: Axis | str, transition: Optional[str],
                  overwrite: bool = False) -> bool:
        axis = Axis.coerce(axis)
        transition = self.orchestrator.validate(transition)
        valid = self.candidates.list_candidates()

        problems = self.check_ids(ids, valid)
        if not problems:
            problems = self.find_contradictions(ids, axis)
        if not problems and not overwrite:
            problems = self.find_conflicts(ids, axis, transition)
        if problems:
            logger.warning(f"Error adding [{axis.value}] slides {list(ids) if ids else ids}: "
                           + "; ".join(problems))
            return False

        self._commit(ids, axis, transition, valid)
        if self.breadcrumbs is not None:
            self.breadcrumbs.rebuild(self.graph)
        logger.info(f"Added [{axis.value}] slides {list(ids)} with '{transition}'")
        return True

    def _commit(self, ids: Sequence[str], axis: Axis, transition: str, valid: dict[str, Any]):
        for i, current in enumerate(ids):
            self.graph.ensure(current, valid[current])
            if i > 0:
                self._link(current, axis.prev, ids[i - 1], transition)
            if i + 1 < len(ids):
                self._link(current, axis.next, ids[i + 1], transition)
            self.orchestrator.initialize(current, transition)

    def _link(self, slide_id: str, direction: Direction, other: str, transition: str):
        old = self.graph.get_neighbor(slide_id, direction)
        if old is not None and old != other and self.graph.get_neighbor(old, direction.opposite) == slide_id:
            # overwritten edge: drop the displaced slide's back-pointer
            self.graph.set_neighbor(old, direction.opposite, None)
            self.graph.set_transition(old, direction.opposite, None)
        self.graph.set_neighbor(slide_id, direction, other)
        self.graph.set_transition(slide_id, direction, transition)
