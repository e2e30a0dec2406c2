"""Tests for the flip animator state machine."""

import pytest

from countdown.animator import AnimationPhase, FlipAnimator, ReentryPolicy
from countdown.delta import TimeUnit
from countdown.digits import DIGIT_SLOTS, DigitChange, DigitSlot, Position

MINUTE_ONES = DigitSlot(TimeUnit.MINUTE, Position.ONES)


def make_animator(presenter, policy=ReentryPolicy.OVERLAP, char="5"):
    handles = {
        slot: presenter.build_digit_cell(slot.unit, slot.position, char)
        for slot in DIGIT_SLOTS
    }
    return FlipAnimator(presenter, handles, policy)


def cell(presenter, slot):
    return presenter.cells[(slot.unit, slot.position)]


class TestFlipCycle:
    """One change walks a slot through both halves and back to idle."""

    def test_starts_idle(self, presenter):
        animator = make_animator(presenter)
        assert animator.is_idle()
        assert all(phase is AnimationPhase.IDLE for phase in animator.phases().values())

    def test_change_starts_top_flip_with_departing_char(self, presenter):
        animator = make_animator(presenter)
        animator.apply(DigitChange(MINUTE_ONES, "4"))

        assert animator.phase(MINUTE_ONES) is AnimationPhase.FLIPPING_TOP_HALF
        assert ("top_flip", TimeUnit.MINUTE, Position.ONES, "5") in presenter.calls
        # New character waits behind the top flap; bottom still shows the old one
        assert cell(presenter, MINUTE_ONES).top == "4"
        assert cell(presenter, MINUTE_ONES).bottom == "5"

    def test_top_completion_starts_bottom_flip(self, presenter):
        animator = make_animator(presenter)
        animator.apply(DigitChange(MINUTE_ONES, "4"))
        presenter.complete_next()

        assert animator.phase(MINUTE_ONES) is AnimationPhase.FLIPPING_BOTTOM_HALF
        assert presenter.calls[-1] == ("bottom_flip", TimeUnit.MINUTE, Position.ONES, "4")
        assert cell(presenter, MINUTE_ONES).bottom == "5"

    def test_bottom_completion_commits_and_idles(self, presenter):
        animator = make_animator(presenter)
        animator.apply(DigitChange(MINUTE_ONES, "4"))
        presenter.complete_next()
        presenter.complete_next()

        assert animator.phase(MINUTE_ONES) is AnimationPhase.IDLE
        assert cell(presenter, MINUTE_ONES).bottom == "4"
        assert presenter.calls[-1] == ("bottom", TimeUnit.MINUTE, Position.ONES, "4")
        assert animator.is_idle()

    def test_other_slots_untouched(self, presenter):
        animator = make_animator(presenter)
        animator.apply(DigitChange(MINUTE_ONES, "4"))
        presenter.complete_all()

        touched = {(call[1], call[2]) for call in presenter.calls}
        assert touched == {(TimeUnit.MINUTE, Position.ONES)}

    def test_call_order(self, presenter):
        make_animator(presenter).apply(DigitChange(MINUTE_ONES, "4"))
        presenter.complete_all()
        assert [call[0] for call in presenter.calls] == ["static", "top_flip", "bottom_flip", "bottom"]


class TestOverlapPolicy:
    """Reference behaviour: a second change starts another cycle on top of the first."""

    def test_second_cycle_departs_from_latest_static_char(self, presenter):
        animator = make_animator(presenter)
        animator.apply(DigitChange(MINUTE_ONES, "4"))
        animator.apply(DigitChange(MINUTE_ONES, "3"))

        top_flips = [call for call in presenter.calls if call[0] == "top_flip"]
        assert top_flips == [
            ("top_flip", TimeUnit.MINUTE, Position.ONES, "5"),
            ("top_flip", TimeUnit.MINUTE, Position.ONES, "4"),
        ]
        assert cell(presenter, MINUTE_ONES).top == "3"

    def test_every_cycle_finishes(self, presenter):
        animator = make_animator(presenter)
        animator.apply(DigitChange(MINUTE_ONES, "4"))
        animator.apply(DigitChange(MINUTE_ONES, "3"))
        presenter.complete_all()

        bottoms = [call[3] for call in presenter.calls if call[0] == "bottom"]
        assert bottoms == ["4", "3"]
        assert cell(presenter, MINUTE_ONES).bottom == "3"
        assert animator.phase(MINUTE_ONES) is AnimationPhase.IDLE

    def test_stale_completion_does_not_reset_phase(self, presenter):
        animator = make_animator(presenter)
        animator.apply(DigitChange(MINUTE_ONES, "4"))
        animator.apply(DigitChange(MINUTE_ONES, "3"))
        # Finish the first cycle only
        presenter.complete_next()   # first top
        presenter.complete_next()   # second top
        presenter.complete_next()   # first bottom

        assert cell(presenter, MINUTE_ONES).bottom == "4"
        assert animator.phase(MINUTE_ONES) is AnimationPhase.FLIPPING_BOTTOM_HALF


class TestRestartPolicy:
    """Hardened behaviour: the newest cycle supersedes the running one."""

    def test_superseded_cycle_is_dropped(self, presenter):
        animator = make_animator(presenter, ReentryPolicy.RESTART)
        animator.apply(DigitChange(MINUTE_ONES, "4"))
        animator.apply(DigitChange(MINUTE_ONES, "3"))
        presenter.complete_all()

        bottom_flips = [call[3] for call in presenter.calls if call[0] == "bottom_flip"]
        bottoms = [call[3] for call in presenter.calls if call[0] == "bottom"]
        assert bottom_flips == ["3"]
        assert bottoms == ["3"]
        assert animator.phase(MINUTE_ONES) is AnimationPhase.IDLE

    def test_policy_from_string(self, presenter):
        assert make_animator(presenter, "restart").policy is ReentryPolicy.RESTART

    def test_unknown_policy(self, presenter):
        with pytest.raises(ValueError):
            make_animator(presenter, "queue")
