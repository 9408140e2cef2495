"""Factory and table of live decks, keyed by host container id."""

import logging
from typing import Any, Callable, Optional

from .state import Slidr, SlidrSettings
from .surface import HostDocument, MemorySurface, RenderingSurface
from .timers import Scheduler

logger = logging.getLogger("Slidr.core.registry")


SurfaceFactory = Callable[[Any], RenderingSurface]


class SlidrRegistry:
    """Creates decks inside a host document and owns them until discarded.

    A host id holds at most one deck. Creating a second deck for a live id
    is refused rather than handing back the existing one; use get() to
    look a deck up.
    """

    def __init__(self, document: HostDocument,
                 surface_factory: SurfaceFactory = MemorySurface,
                 scheduler: Optional[Scheduler] = None):
        self.document = document
        self.surface_factory = surface_factory
        self.scheduler = scheduler
        self._instances: dict[str, Slidr] = {}

    def __contains__(self, host_id: object) -> bool:
        return host_id in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def create(self, host_id: str, settings: SlidrSettings | dict | None = None,
               scheduler: Optional[Scheduler] = None) -> Optional[Slidr]:
        """Build a deck in the container `host_id`, or None if there is no such container."""
        container = self.document.get_container(host_id)
        if container is None:
            logger.warning(f"Could not find element with id: {host_id}.")
            return None
        if host_id in self._instances:
            logger.warning(f"A slidr already exists for '{host_id}'; discard it first.")
            return None
        if isinstance(settings, dict):
            settings = SlidrSettings(**settings)

        surface = self.surface_factory(container)
        markers = surface if hasattr(surface, "render_grid") else None
        slidr = Slidr(
            host_id,
            container,
            surface,
            markers=markers,
            settings=settings,
            scheduler=scheduler or self.scheduler,
        )
        self._instances[host_id] = slidr
        logger.info(f"Created slidr '{host_id}'")
        return slidr

    def get(self, host_id: str) -> Optional[Slidr]:
        return self._instances.get(host_id)

    def discard(self, host_id: str) -> bool:
        slidr = self._instances.pop(host_id, None)
        if slidr is None:
            return False
        slidr.close()
        logger.info(f"Discarded slidr '{host_id}'")
        return True

    def ids(self) -> list[str]:
        return list(self._instances)
