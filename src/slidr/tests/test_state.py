"""Tests for slidr.core.state — settings, start, auto-advance, breadcrumbs toggle."""

import logging

import pytest
from pydantic import ValidationError

from slidr.core.slides import Axis, Direction, TransitionKind
from slidr.core.state import Slidr, SlidrSettings
from slidr.core.surface import Container, MemorySurface

from conftest import make_container


# ── Settings ────────────────────────────────────────────────────────────

class TestSettings:
    def test_defaults(self):
        s = SlidrSettings()
        assert s.transition == "none"
        assert s.direction is Axis.HORIZONTAL
        assert s.fading is True
        assert s.clipping is False
        assert s.breadcrumbs is False

    def test_axis_alias(self):
        assert SlidrSettings(direction="v").direction is Axis.VERTICAL

    def test_bad_axis(self):
        with pytest.raises(ValidationError):
            SlidrSettings(direction="diagonal")

    def test_unknown_transition_defaults_to_none(self, caplog):
        with caplog.at_level(logging.WARNING, logger="Slidr.core.state"):
            s = SlidrSettings(transition="spin")
        assert s.transition == "none"
        assert "Unknown transition 'spin'" in caplog.text


# ── start() ─────────────────────────────────────────────────────────────

class TestStart:
    def test_start_is_idempotent(self, deck, surface):
        deck.add(["A", "B"], "h", "fade")
        assert deck.start() is True
        count = len(surface.animations)
        assert deck.start() is False
        assert len(surface.animations) == count

    def test_start_discovers_candidates(self, make_deck):
        deck = make_deck(transition="fade")
        deck.start()
        assert deck.graph.ids() == ["A", "B", "C", "D", "E"]
        assert deck.current == "A"
        assert deck.graph.get_neighbor("D", Direction.RIGHT) == "E"
        assert deck.graph.get_transition("A", Direction.RIGHT) == "fade"

    def test_start_discovers_vertically(self, make_deck):
        deck = make_deck(direction="vertical")
        deck.start()
        assert deck.graph.get_neighbor("A", Direction.DOWN) == "B"

    def test_start_keeps_explicit_chains(self, deck):
        deck.add(["B", "C"], "h")
        deck.start()
        assert "A" not in deck.graph
        assert deck.current == "B"

    def test_start_at(self, deck):
        deck.add(["A", "B", "C"], "h")
        deck.start("C")
        assert deck.current == "C"
        assert deck.start_slide == "C"

    def test_start_at_unknown_ignored(self, deck):
        deck.add(["A", "B"], "h")
        deck.start("Z")
        assert deck.current == "A"

    def test_first_slide_fades_in(self, deck, surface):
        deck.add(["A", "B"], "h", "cube")
        deck.start()
        first = surface.animations[-1]
        assert (first.slide_id, first.kind, first.direction) == ("A", TransitionKind.ENTER, None)
        assert first.transition == "fade"
        assert first.timing.to_css() == "slidr-fade-in 0.4s ease-out 0s"

    def test_container_style(self, make_deck, container):
        container.style["position"] = "absolute"
        deck = make_deck(clipping=True)
        deck.start()
        assert container.style["display"] == "table"
        assert container.style["position"] == "absolute"
        assert container.style["overflow"] == "hidden"
        assert container.style["visibility"] == "visible"

    def test_empty_container_starts_without_display(self, scheduler):
        container = Container(id="empty")
        surface = MemorySurface(container)
        deck = Slidr("empty", container, surface, markers=surface, scheduler=scheduler)
        assert deck.start() is True
        assert deck.displayed is False
        assert deck.current is None

    def test_add_after_empty_start_displays(self, scheduler):
        container = Container(id="late")
        surface = MemorySurface(container)
        deck = Slidr("late", container, surface, markers=surface, scheduler=scheduler)
        deck.start()
        container.add_slide("A", 100, 100)
        container.add_slide("B", 100, 100)
        assert deck.add(["A", "B"], "h")
        assert deck.displayed is True
        assert deck.current == "A"

    def test_resize_follows_current_slide(self, scheduler):
        container = make_container("A", "B", host_id="sized")
        container.children[1].width = 640
        surface = MemorySurface(container)
        deck = Slidr("sized", container, surface, scheduler=scheduler)
        deck.add(["A", "B"], "h")
        deck.start()
        assert (container.width, container.height) == (400, 300)
        deck.step("right")
        scheduler.advance(250)
        assert container.width == 640

    def test_summary(self, deck):
        deck.add(["A", "B"], "h", "fade")
        deck.start()
        summary = deck.to_summary()
        assert summary["current"] == "A"
        assert summary["started"] is True
        assert summary["grid"] == {"rows": 1, "columns": 2}
        assert summary["coordinates"] == {"A": [0, 0], "B": [1, 0]}
        assert summary["settings"]["direction"] == "horizontal"


# ── Auto-advance ────────────────────────────────────────────────────────

class TestAuto:
    def test_auto_steps_on_interval(self, deck, scheduler):
        deck.add(["A", "B", "C"], "h", "fade")
        assert deck.auto() is True
        assert deck.auto_running
        scheduler.advance(4999)
        assert deck.current == "A"
        scheduler.advance(1)
        assert deck.current == "B"
        scheduler.advance(5000)
        assert deck.current == "C"

    @pytest.mark.parametrize("interval", [0, None])
    def test_auto_missing_interval_uses_default(self, deck, scheduler, interval):
        deck.add(["A", "B"], "h")
        assert deck.auto("right", interval) is True
        scheduler.advance(4999)
        assert deck.current == "A"
        scheduler.advance(1)
        assert deck.current == "B"

    def test_auto_at_end_keeps_running(self, deck, scheduler):
        deck.add(["A", "B"], "h")
        deck.auto("right", 1000)
        scheduler.advance(3000)
        assert deck.current == "B"
        assert deck.auto_running

    def test_auto_replaces_timer(self, deck, scheduler):
        deck.add(["A", "B", "C"], "h")
        deck.add(["A", "D"], "v")
        deck.auto("right", 1000)
        deck.auto("down", 1000)
        scheduler.advance(1000)
        assert deck.current == "D"

    def test_auto_start_at(self, deck, scheduler):
        deck.add(["A", "B", "C"], "h")
        deck.auto("left", 1000, start_at="C")
        assert deck.current == "C"
        scheduler.advance(1000)
        assert deck.current == "B"

    def test_stop(self, deck, scheduler):
        deck.add(["A", "B", "C"], "h")
        deck.auto("right", 1000)
        assert deck.stop() is True
        assert deck.stop() is False
        scheduler.advance(5000)
        assert deck.current == "A"
        assert not deck.auto_running

    def test_stop_before_start(self, deck):
        assert deck.stop() is False

    def test_close_cancels_everything(self, deck, scheduler):
        deck.add(["A", "B"], "h")
        deck.auto("right", 1000)
        deck.close()
        assert scheduler.pending == 0
        scheduler.advance(2000)
        assert deck.current == "A"

    def test_bad_direction(self, deck):
        deck.add(["A", "B"], "h")
        with pytest.raises(ValueError):
            deck.auto("sideways")


# ── Breadcrumbs toggle ──────────────────────────────────────────────────

class TestToggleBreadcrumbs:
    def test_toggle(self, deck, surface):
        deck.add(["A", "B"], "h")
        deck.start()
        assert deck.toggle_breadcrumbs() is True
        assert surface.grid_visible is True
        shown = surface.grid_animations[-1]
        assert shown.kind is TransitionKind.ENTER
        assert shown.style == {"opacity": "1", "z-index": "2", "pointer-events": "none"}
        assert shown.timing.to_css() == "slidr-fade-in 0.4s ease-out 0s"

        deck.toggle_breadcrumbs()
        assert surface.grid_visible is False
        assert surface.grid_animations[-1].style["opacity"] == "0"

    def test_explicit_visibility(self, deck, surface):
        deck.add(["A", "B"], "h")
        deck.start()
        deck.toggle_breadcrumbs(True)
        deck.toggle_breadcrumbs(True)
        assert deck.breadcrumbs_visible is True

    def test_before_display(self, deck):
        assert deck.toggle_breadcrumbs() is False

    def test_without_markers(self, container, scheduler):
        deck = Slidr("deck", container, MemorySurface(container), scheduler=scheduler)
        deck.add(["A", "B"], "h")
        deck.start()
        assert deck.toggle_breadcrumbs() is False

    def test_setting_shows_on_start(self, make_deck, surface):
        deck = make_deck(breadcrumbs=True)
        deck.add(["A", "B"], "h")
        deck.start()
        assert deck.breadcrumbs_visible is True
        assert surface.grid_visible is True
