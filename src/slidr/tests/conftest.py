"""Shared fixtures: an in-memory container, surface, and deck factory."""

import pytest

from slidr.core.state import Slidr, SlidrSettings
from slidr.core.surface import Container, MemorySurface
from slidr.core.timers import ManualScheduler


def make_container(*slide_ids: str, host_id: str = "deck",
                   width: float = 400.0, height: float = 300.0) -> Container:
    container = Container(id=host_id)
    for slide_id in slide_ids:
        container.add_slide(slide_id, width=width, height=height)
    return container


@pytest.fixture
def container():
    return make_container("A", "B", "C", "D", "E")


@pytest.fixture
def surface(container):
    return MemorySurface(container)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_deck(container, surface, scheduler):
    """Build a deck over the shared container; settings as keyword args."""
    def _make(**settings) -> Slidr:
        return Slidr(
            container.id,
            container,
            surface,
            markers=surface,
            settings=SlidrSettings(**settings),
            scheduler=scheduler,
        )
    return _make


@pytest.fixture
def deck(make_deck):
    return make_deck()
