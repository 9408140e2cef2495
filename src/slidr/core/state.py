"""Deck state and lifecycle: settings, start/stop, auto-advance, public API."""

import logging
from typing import Any, Optional, Sequence
from pydantic import BaseModel, field_validator

from .breadcrumbs import BreadcrumbLayout, ClickRoute, CrumbClickHandler
from .builder import ChainBuilder
from .navigation import Navigator
from .slides.animations import TransitionKind, TransitionName, available_transitions
from .slides.collection import SlideGraph
from .slides.slide import Axis, Direction
from .slides.styles import BREADCRUMB_POINTER_EVENTS, BREADCRUMB_Z_INDEX, container_style
from .surface import CandidateSource, MarkerSurface, RenderingSurface
from .timers import ManualScheduler, ResizeWatcher, Scheduler, TimerHandle
from .transitions import TransitionOrchestrator

logger = logging.getLogger("Slidr.core.state")

DEFAULT_AUTO_DIRECTION = Direction.RIGHT
DEFAULT_AUTO_INTERVAL_MS = 5000

# The first slide always fades in, whatever transition its chain uses.
DISPLAY_TRANSITION = TransitionName.FADE.value


class SlidrSettings(BaseModel):
    """Per-deck settings.

    transition:  default transition for add(), see available_transitions()
    direction:   default axis for add(), horizontal (h) or vertical (v)
    fading:      whether linear/cube transitions fade while moving
    clipping:    clip transitions at the container's borders
    breadcrumbs: show the breadcrumb grid on start()
    """
    transition: str = TransitionName.NONE.value
    direction: Axis = Axis.HORIZONTAL
    fading: bool = True
    clipping: bool = False
    breadcrumbs: bool = False

    @field_validator("direction", mode="before")
    @classmethod
    def _coerce_axis(cls, value: Any) -> Axis:
        return Axis.coerce(value)

    @field_validator("transition")
    @classmethod
    def _known_transition(cls, value: str) -> str:
        if value not in available_transitions():
            logger.warning(f"Unknown transition '{value}', defaulting to 'none'")
            return TransitionName.NONE.value
        return value


class Slidr:
    """One deck of slides built inside one container.

    Created through SlidrRegistry.create(); all state is owned by the
    instance and torn down by close().
    """

    def __init__(self, id: str, container: CandidateSource, surface: RenderingSurface,
                 markers: Optional[MarkerSurface] = None,
                 settings: Optional[SlidrSettings] = None,
                 scheduler: Optional[Scheduler] = None):
        self.id = id
        self.container = container
        self.surface = surface
        self.markers = markers
        self.settings = settings or SlidrSettings()
        self.scheduler = scheduler or ManualScheduler()

        self.graph = SlideGraph()
        self.breadcrumbs = BreadcrumbLayout(markers)
        self.orchestrator = TransitionOrchestrator(
            id, self.graph, surface, self.breadcrumbs, fading=self.settings.fading,
        )
        self.builder = ChainBuilder(self.graph, self.orchestrator, container, self.breadcrumbs)
        self.navigator = Navigator(self.graph, self.orchestrator)

        self.started = False
        self.displayed = False
        self.breadcrumbs_visible = False
        self._auto: Optional[TimerHandle] = None
        self._click_handler = CrumbClickHandler(self)
        self._resize_watcher = ResizeWatcher(self)

    @property
    def current(self) -> Optional[str]:
        return self.navigator.current

    @property
    def start_slide(self) -> Optional[str]:
        return self.graph.start

    @property
    def auto_running(self) -> bool:
        return self._auto is not None and self._auto.active

    # ── Building ────────────────────────────────────────────────────────

    def add(self, ids: Sequence[str], direction: Axis | str | None = None,
            transition: Optional[str] = None, overwrite: bool = False) -> bool:
        """Chain `ids` along `direction`. Returns False if the chain was rejected."""
        axis = Axis.coerce(direction) if direction is not None else self.settings.direction
        added = self.builder.add_chain(
            ids, axis, transition or self.settings.transition, overwrite,
        )
        if added and self.started:
            if not self.displayed:
                self._display()
            else:
                self.breadcrumbs.render(self.current)
        return added

    # ── Lifecycle ───────────────────────────────────────────────────────

    def start(self, start_at: Optional[str] = None) -> bool:
        """Show the deck. Does nothing if it already started.

        With no slides added yet, every candidate in the container is
        chained using the default transition and direction.
        """
        if self.started:
            return False
        surface = self.surface
        surface.apply_style(None, container_style(
            self.settings.clipping,
            display=surface.computed_style(None, "display"),
            position=surface.computed_style(None, "position"),
            overflow=surface.computed_style(None, "overflow"),
        ))
        if self.graph.start is None:
            self.add(list(self.container.list_candidates()))
        if start_at is not None and start_at in self.graph:
            self.graph.start = start_at
        self._display()
        self._click_handler.register()
        self._resize_watcher.register(self.scheduler)
        self.started = True
        logger.info(f"Slidr '{self.id}' started at '{self.current}'")
        return True

    def _display(self):
        start = self.graph.start
        if self.displayed or self.graph.get(start) is None:
            return
        self.navigator.current = start
        self.breadcrumbs.rebuild(self.graph, start)
        self.breadcrumbs.render(start)
        self.orchestrator.initialize(start, DISPLAY_TRANSITION)
        self.orchestrator.animate(start, self.orchestrator.validate(DISPLAY_TRANSITION),
                                  TransitionKind.ENTER, None)
        self.displayed = True
        if self.settings.breadcrumbs:
            self.toggle_breadcrumbs(True)

    def close(self):
        """Cancel timers and detach handlers."""
        self.stop()
        self._click_handler.unregister()
        self._resize_watcher.unregister()

    # ── Navigation ──────────────────────────────────────────────────────

    def can_step(self, direction: Direction | str) -> bool:
        return self.started and self.navigator.can_step(direction)

    def step(self, direction: Direction | str) -> bool:
        if not self.started:
            return False
        return self.navigator.step(direction)

    def jump_to(self, slide_id: str) -> bool:
        """Go straight to a slide, choosing directions from the breadcrumb grid."""
        if not self.started or slide_id == self.current or slide_id not in self.graph:
            return False
        route = self.breadcrumbs.resolve_click(self.current, slide_id, self.orchestrator)
        if route is None:
            route = ClickRoute(out_transition="fade", in_transition="fade")
        return self.navigator.jump(
            slide_id,
            route.out_direction,
            route.in_direction,
            route.out_transition,
            route.in_transition,
        )

    # ── Auto-advance ────────────────────────────────────────────────────

    def auto(self, direction: Direction | str = DEFAULT_AUTO_DIRECTION,
             interval_ms: Optional[int] = DEFAULT_AUTO_INTERVAL_MS,
             start_at: Optional[str] = None) -> bool:
        """Step in `direction` every `interval_ms`, replacing any running timer.

        A zero or missing interval means the default of 5 seconds.
        """
        self.start(start_at)
        if not self.started:
            return False
        direction = Direction.coerce(direction)
        interval_ms = interval_ms or DEFAULT_AUTO_INTERVAL_MS
        self.stop()
        self._auto = self.scheduler.call_every(interval_ms, lambda: self.step(direction))
        logger.info(f"Slidr '{self.id}' auto-advancing {direction.value} every {interval_ms}ms")
        return True

    def stop(self) -> bool:
        if not self.started or self._auto is None:
            return False
        self._auto.cancel()
        self._auto = None
        return True

    # ── Breadcrumbs ─────────────────────────────────────────────────────

    def toggle_breadcrumbs(self, visible: Optional[bool] = None) -> bool:
        if self.markers is None or not self.displayed:
            return False
        if visible is None:
            visible = not self.breadcrumbs_visible
        kind = TransitionKind.ENTER if visible else TransitionKind.LEAVE
        animation = self.orchestrator.build_animation(
            None, None, DISPLAY_TRANSITION, kind, None,
            z_index=BREADCRUMB_Z_INDEX, pointer_events=BREADCRUMB_POINTER_EVENTS,
        )
        self.markers.set_grid_visible(visible, animation)
        self.breadcrumbs_visible = visible
        return True

    def to_summary(self) -> dict:
        return {
            "id": self.id,
            "started": self.started,
            "displayed": self.displayed,
            "start": self.start_slide,
            "current": self.current,
            "auto_running": self.auto_running,
            "breadcrumbs_visible": self.breadcrumbs_visible,
            "grid": {"rows": self.breadcrumbs.rows, "columns": self.breadcrumbs.columns},
            "coordinates": {s: list(xy) for s, xy in self.breadcrumbs.coordinates.items()},
            "slides": self.graph.to_summary(),
            "settings": self.settings.model_dump(mode="json"),
        }
