"""Slide graph store: slides keyed by id with directional adjacency."""

from typing import Any, Optional
from pydantic import BaseModel, Field

from .slide import Direction, SlideNode


class SlideGraph(BaseModel):
    """Slides and their per-direction neighbors and transitions.

    Pure storage. Validation lives in ChainBuilder; nothing here checks
    that edges stay symmetric.
    """
    slides: dict[str, SlideNode] = Field(default_factory=dict)
    start: Optional[str] = None

    def __contains__(self, slide_id: object) -> bool:
        return slide_id in self.slides

    def __len__(self) -> int:
        return len(self.slides)

    def get(self, slide_id: Optional[str]) -> Optional[SlideNode]:
        if slide_id is None:
            return None
        return self.slides.get(slide_id)

    def ids(self) -> list[str]:
        return list(self.slides)

    def ensure(self, slide_id: str, target: Any = None) -> SlideNode:
        """Return the slide, creating it on first reference."""
        node = self.slides.get(slide_id)
        if node is None:
            node = SlideNode(id=slide_id)
            self.slides[slide_id] = node
            if self.start is None:
                self.start = slide_id
        if target is not None:
            node.target = target
        return node

    def get_neighbor(self, slide_id: Optional[str], direction: Optional[Direction]) -> Optional[str]:
        node = self.get(slide_id)
        if node is None or direction is None:
            return None
        return node.neighbor(direction)

    def get_transition(self, slide_id: Optional[str], direction: Optional[Direction]) -> Optional[str]:
        node = self.get(slide_id)
        if node is None or direction is None:
            return None
        return node.transition(direction)

    def set_neighbor(self, slide_id: str, direction: Direction, other: Optional[str]):
        self.slides[slide_id].set_neighbor(direction, other)

    def set_transition(self, slide_id: str, direction: Direction, name: Optional[str]):
        node = self.slides[slide_id]
        if name is None:
            node.transitions.pop(direction, None)
        else:
            node.transitions[direction] = name

    def snapshot(self) -> str:
        """JSON dump of the whole graph (element handles excluded)."""
        return self.model_dump_json()

    def to_summary(self) -> list[dict]:
        return [
            {
                "id": s.id,
                "neighbors": {d.value: n for d, n in s.neighbors.items()},
                "transitions": {d.value: t for d, t in s.transitions.items()},
                "initialized": s.initialized,
                "is_start": s.id == self.start,
            }
            for s in self.slides.values()
        ]
