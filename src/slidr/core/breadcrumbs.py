"""Breadcrumb grid layout.

Every slide reachable from the start slide gets an integer (x, y) grid
position: right is +x, up is +y. Positions are shifted so the lowest x and
y are 0, giving a rows x columns grid of markers with the origin at the
bottom-left.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional
from pydantic import BaseModel

from .slides.animations import TransitionKind
from .slides.collection import SlideGraph
from .slides.slide import Direction, TRAVERSAL_ORDER

if TYPE_CHECKING:
    from .state import Slidr
    from .surface import MarkerSurface
    from .transitions import TransitionOrchestrator

logger = logging.getLogger("Slidr.core.breadcrumbs")


class ClickRoute(BaseModel):
    """Directions and transition overrides for a marker click."""
    out_direction: Optional[Direction] = None
    in_direction: Optional[Direction] = None
    out_transition: Optional[str] = None
    in_transition: Optional[str] = None


class BreadcrumbLayout:
    """Grid coordinates of reachable slides plus the markers rendered for them."""

    def __init__(self, markers: Optional["MarkerSurface"] = None):
        self.markers_surface = markers
        self.coordinates: dict[str, tuple[int, int]] = {}
        self.rows = 0
        self.columns = 0
        self.markers: dict[str, Any] = {}

    def rebuild(self, graph: SlideGraph, start: Optional[str] = None) -> dict[str, tuple[int, int]]:
        """Recompute every coordinate from scratch, walking the graph from `start`."""
        start = start if start is not None else graph.start
        coords: dict[str, tuple[int, int]] = {}
        if graph.get(start) is None:
            self.coordinates, self.rows, self.columns = coords, 0, 0
            return coords

        # Depth-first in TRAVERSAL_ORDER; an explicit stack keeps long chains
        # clear of the recursion limit.
        coords[start] = (0, 0)
        stack = [(start, iter(TRAVERSAL_ORDER))]
        while stack:
            slide_id, directions = stack[-1]
            for direction in directions:
                neighbor = graph.get_neighbor(slide_id, direction)
                if neighbor is None or neighbor in coords or neighbor not in graph:
                    continue
                x, y = coords[slide_id]
                dx, dy = direction.offset
                coords[neighbor] = (x + dx, y + dy)
                stack.append((neighbor, iter(TRAVERSAL_ORDER)))
                break
            else:
                stack.pop()

        xs = [x for x, _ in coords.values()]
        ys = [y for _, y in coords.values()]
        min_x, min_y = min(xs), min(ys)
        self.coordinates = {s: (x - min_x, y - min_y) for s, (x, y) in coords.items()}
        self.columns = max(xs) - min_x + 1
        self.rows = max(ys) - min_y + 1
        logger.debug(f"Laid out {len(coords)} slides on a {self.rows}x{self.columns} grid")
        return self.coordinates

    @property
    def placements(self) -> dict[tuple[int, int], str]:
        return {xy: slide_id for slide_id, xy in self.coordinates.items()}

    def position(self, slide_id: Optional[str]) -> Optional[tuple[int, int]]:
        if slide_id is None:
            return None
        return self.coordinates.get(slide_id)

    def render(self, active: Optional[str]) -> dict[str, Any]:
        """Hand the grid to the marker surface; one marker per placed slide."""
        if self.markers_surface is None:
            return {}
        self.markers = self.markers_surface.render_grid(
            self.rows, self.columns, self.placements, active,
        )
        return self.markers

    def set_active(self, slide_id: Optional[str], active: bool):
        if self.markers_surface is None or slide_id not in self.markers:
            return
        self.markers_surface.set_marker_active(slide_id, active)

    def resolve_click(self, current: str, target: str,
                      orchestrator: "TransitionOrchestrator") -> Optional[ClickRoute]:
        """Pick the directions to use when jumping from `current` to `target`.

        An axis is usable when `current` can leave toward it and `target`
        can be entered from it. Horizontal is tried first. With neither
        usable both legs fall back to a plain fade.
        """
        cur, nxt = self.position(current), self.position(target)
        if cur is None or nxt is None:
            return None
        hdir = Direction.RIGHT if cur[0] < nxt[0] else Direction.LEFT if cur[0] > nxt[0] else None
        vdir = Direction.UP if cur[1] < nxt[1] else Direction.DOWN if cur[1] > nxt[1] else None
        for direction in (hdir, vdir):
            if direction is None:
                continue
            if (orchestrator.resolve(current, TransitionKind.LEAVE, direction)
                    and orchestrator.resolve(target, TransitionKind.ENTER, direction)):
                return ClickRoute(out_direction=direction, in_direction=direction)
        return ClickRoute(out_transition="fade", in_transition="fade")


class CrumbClickHandler:
    """Marker click listener bound to one deck."""

    def __init__(self, slidr: "Slidr"):
        self.slidr = slidr
        self._registered = False

    @property
    def registered(self) -> bool:
        return self._registered

    def register(self):
        markers = self.slidr.markers
        if markers is None or self._registered:
            return
        markers.add_click_listener(self)
        self._registered = True

    def unregister(self):
        if not self._registered:
            return
        self.slidr.markers.remove_click_listener(self)
        self._registered = False

    def __call__(self, slide_id: str) -> bool:
        logger.debug(f"Breadcrumb click on '{slide_id}' in '{self.slidr.id}'")
        return self.slidr.jump_to(slide_id)
