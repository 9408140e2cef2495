"""Tests for slidr.core.navigation — directional steps and jumps."""

import pytest

from slidr.core.slides import Direction, TransitionKind


def moves(surface):
    """(slide, kind, direction, transition) for every recorded animation."""
    return [
        (a.slide_id, a.kind, a.direction, a.transition)
        for a in surface.animations
    ]


class TestStep:
    def test_step_without_neighbor(self, deck, surface):
        deck.add(["A", "B"], "h", "fade")
        deck.start()
        before = len(surface.animations)
        assert deck.can_step("left") is False
        assert deck.step("left") is False
        assert deck.current == "A"
        assert len(surface.animations) == before

    def test_step_right_then_left(self, deck, surface):
        deck.add(["A", "B"], "h", "linear")
        deck.start()
        surface.animations.clear()

        assert deck.can_step(Direction.RIGHT)
        assert deck.step("right") is True
        assert deck.current == "B"
        assert deck.step("left") is True
        assert deck.current == "A"
        assert moves(surface) == [
            ("A", TransitionKind.LEAVE, Direction.RIGHT, "linear"),
            ("B", TransitionKind.ENTER, Direction.RIGHT, "linear"),
            ("B", TransitionKind.LEAVE, Direction.LEFT, "linear"),
            ("A", TransitionKind.ENTER, Direction.LEFT, "linear"),
        ]

    def test_step_uses_each_edge_transition(self, deck, surface):
        deck.add(["A", "B"], "h", "fade")
        deck.add(["A", "C"], "v", "cube")
        deck.start()
        surface.animations.clear()

        deck.step("down")
        assert deck.current == "C"
        assert [a.transition for a in surface.animations] == ["cube", "cube"]

    def test_step_before_start(self, deck):
        deck.add(["A", "B"], "h")
        assert deck.can_step("right") is False
        assert deck.step("right") is False
        assert deck.current is None

    def test_round_trip_returns_home(self, deck):
        deck.add(["A", "B", "C"], "h", "fade")
        deck.add(["C", "D"], "v", "fade")
        deck.start()
        for direction in ("right", "right", "down", "up", "left", "left"):
            assert deck.step(direction)
        assert deck.current == "A"


class TestJump:
    def test_leave_precedes_enter(self, deck, surface):
        deck.add(["A", "B", "C"], "h", "fade")
        deck.start()
        surface.animations.clear()

        assert deck.navigator.jump("C", "right", "right") is True
        assert [(a.slide_id, a.kind) for a in surface.animations] == [
            ("A", TransitionKind.LEAVE),
            ("C", TransitionKind.ENTER),
        ]
        assert deck.current == "C"

    @pytest.mark.parametrize("axis,d", [("h", Direction.RIGHT), ("v", Direction.DOWN)])
    def test_round_trip_with_opposite_directions(self, deck, surface, axis, d):
        deck.add(["A", "B"], axis, "linear")
        deck.start()
        surface.animations.clear()
        before = deck.current

        assert deck.navigator.jump("B", d, d.opposite) is True
        assert deck.current == "B"
        assert deck.navigator.jump(before, d.opposite, d) is True
        assert deck.current == before
        assert [(a.slide_id, a.kind, a.direction) for a in surface.animations] == [
            ("A", TransitionKind.LEAVE, d),
            ("B", TransitionKind.ENTER, d.opposite),
            ("B", TransitionKind.LEAVE, d.opposite),
            ("A", TransitionKind.ENTER, d),
        ]

    def test_overrides_win(self, deck, surface):
        deck.add(["A", "B"], "h", "cube")
        deck.start()
        surface.animations.clear()

        deck.navigator.jump("B", "right", "right", "fade", "linear")
        assert [a.transition for a in surface.animations] == ["fade", "linear"]

    def test_enter_without_edge_plays_none(self, deck, surface):
        deck.add(["A", "B"], "h", "fade")
        deck.add(["C", "D"], "h", "fade")
        deck.start()
        surface.animations.clear()

        # C has no left neighbor, so entering moving right finds no transition
        deck.navigator.jump("C", "right", "right")
        assert [a.transition for a in surface.animations] == ["fade", "none"]

    def test_unknown_target(self, deck):
        deck.add(["A", "B"], "h")
        deck.start()
        assert deck.navigator.jump("Z") is False
        assert deck.navigator.jump(None) is False
        assert deck.current == "A"

    def test_no_current(self, deck):
        deck.add(["A", "B"], "h")
        assert deck.navigator.jump("B") is False
