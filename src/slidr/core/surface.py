"""Collaborator interfaces the core talks to, and an in-memory host.

The core never touches presentation elements directly. It finds slides
through a CandidateSource, animates them through a RenderingSurface and
draws breadcrumbs through a MarkerSurface. The in-memory implementations
below record every call so decks can be driven headless.
"""

import logging
from typing import Any, Callable, Optional, Protocol
from pydantic import BaseModel, Field

from .slides.animations import Animation
from .slides.styles import PresentationStyle

logger = logging.getLogger("Slidr.core.surface")

ClickCallback = Callable[[str], Any]


class CandidateSource(Protocol):
    def list_candidates(self) -> dict[str, Any]:
        """Direct children that can become slides, keyed by slide id."""
        ...


class RenderingSurface(Protocol):
    def supports(self, *properties: str) -> bool: ...

    def computed_style(self, target: Any, prop: str) -> Optional[str]: ...

    def apply_style(self, target: Any, style: PresentationStyle) -> None: ...

    def init_presentation(self, target: Any, transition: str, style: PresentationStyle) -> None: ...

    def animate(self, target: Any, animation: Animation) -> None: ...

    def measure(self, target: Any, dimension: str) -> float: ...

    def set_container_size(self, width: Optional[float], height: Optional[float]) -> None: ...

    def is_attached(self) -> bool: ...

    def is_hidden(self) -> bool: ...


class MarkerSurface(Protocol):
    def render_grid(self, rows: int, columns: int,
                    placements: dict[tuple[int, int], str],
                    active: Optional[str]) -> dict[str, Any]: ...

    def set_marker_active(self, slide_id: str, active: bool) -> None: ...

    def set_grid_visible(self, visible: bool, animation: Animation) -> None: ...

    def add_click_listener(self, callback: ClickCallback) -> None: ...

    def remove_click_listener(self, callback: ClickCallback) -> None: ...


class HostDocument(Protocol):
    def get_container(self, host_id: str) -> Optional[Any]: ...


# ── In-memory host ──────────────────────────────────────────────────────

class Element(BaseModel):
    """A presentation element. `slidr_id` marks it as a slide candidate."""
    slidr_id: Optional[str] = None
    width: float = 0.0
    height: float = 0.0
    style: dict[str, str] = Field(default_factory=dict)


class Container(BaseModel):
    """The element a deck is built in."""
    id: str
    children: list[Element] = Field(default_factory=list)
    style: dict[str, str] = Field(default_factory=dict)
    width: Optional[float] = None
    height: Optional[float] = None
    attached: bool = True

    def list_candidates(self) -> dict[str, Element]:
        found: dict[str, Element] = {}
        for child in self.children:
            if child.slidr_id and child.slidr_id not in found:
                found[child.slidr_id] = child
        return found

    def candidate_ids(self) -> list[str]:
        return list(self.list_candidates())

    def add_slide(self, slidr_id: str, width: float = 0.0, height: float = 0.0) -> Element:
        element = Element(slidr_id=slidr_id, width=width, height=height)
        self.children.append(element)
        return element


class Document(BaseModel):
    """Host id -> container lookup."""
    containers: dict[str, Container] = Field(default_factory=dict)

    def get_container(self, host_id: str) -> Optional[Container]:
        return self.containers.get(host_id)

    def add_container(self, container: Container) -> Container:
        self.containers[container.id] = container
        return container


class Marker(BaseModel):
    """One breadcrumb dot."""
    slide_id: str
    x: int
    y: int
    active: bool = False


class MemorySurface:
    """Rendering and marker surface that applies styles to in-memory elements
    and keeps a log of what was asked of it.

    `supported` limits the style properties reported as available; None
    means everything is supported.
    """

    def __init__(self, container: Container, supported: Optional[set[str]] = None):
        self.container = container
        self.supported = supported
        self.animations: list[Animation] = []
        self.initialized: list[tuple[Optional[str], str]] = []
        self.markers: dict[str, Marker] = {}
        self.grid: list[list[Optional[str]]] = []  # top row first
        self.grid_visible = False
        self.grid_animations: list[Animation] = []
        self._click_listeners: list[ClickCallback] = []

    # rendering

    def supports(self, *properties: str) -> bool:
        if self.supported is None:
            return True
        return all(p in self.supported for p in properties)

    def _element(self, target: Any) -> Any:
        return self.container if target is None else target

    def computed_style(self, target: Any, prop: str) -> Optional[str]:
        return self._element(target).style.get(prop)

    def apply_style(self, target: Any, style: PresentationStyle) -> None:
        self._element(target).style.update(style.to_properties())

    def init_presentation(self, target: Any, transition: str, style: PresentationStyle) -> None:
        self.apply_style(target, style)
        self.initialized.append((getattr(target, "slidr_id", None), transition))

    def animate(self, target: Any, animation: Animation) -> None:
        element = self._element(target)
        element.style.update(animation.style)
        element.style["animation"] = animation.timing.to_css()
        self.animations.append(animation)

    def measure(self, target: Any, dimension: str) -> float:
        if dimension not in ("width", "height"):
            raise ValueError(f"Unknown dimension: {dimension}")
        return getattr(self._element(target), dimension) or 0.0

    def set_container_size(self, width: Optional[float], height: Optional[float]) -> None:
        self.container.width = width
        self.container.height = height

    def is_attached(self) -> bool:
        return self.container.attached

    def is_hidden(self) -> bool:
        return self.container.style.get("visibility") == "hidden"

    # markers

    def render_grid(self, rows: int, columns: int,
                    placements: dict[tuple[int, int], str],
                    active: Optional[str]) -> dict[str, Marker]:
        self.markers = {}
        self.grid = []
        for y in range(rows - 1, -1, -1):
            row: list[Optional[str]] = []
            for x in range(columns):
                slide_id = placements.get((x, y))
                if slide_id is not None:
                    self.markers[slide_id] = Marker(
                        slide_id=slide_id, x=x, y=y, active=slide_id == active,
                    )
                row.append(slide_id)
            self.grid.append(row)
        return dict(self.markers)

    def set_marker_active(self, slide_id: str, active: bool) -> None:
        marker = self.markers.get(slide_id)
        if marker is not None:
            marker.active = active

    def set_grid_visible(self, visible: bool, animation: Animation) -> None:
        self.grid_visible = visible
        self.grid_animations.append(animation)

    def add_click_listener(self, callback: ClickCallback) -> None:
        if callback not in self._click_listeners:
            self._click_listeners.append(callback)

    def remove_click_listener(self, callback: ClickCallback) -> None:
        if callback in self._click_listeners:
            self._click_listeners.remove(callback)

    def click(self, slide_id: str) -> None:
        """Simulate a click on the marker for `slide_id`."""
        if slide_id not in self.markers:
            logger.debug(f"Click on missing marker '{slide_id}' ignored")
            return
        for callback in list(self._click_listeners):
            callback(slide_id)

    @property
    def active_markers(self) -> list[str]:
        return [m.slide_id for m in self.markers.values() if m.active]
