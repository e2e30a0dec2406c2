"""
Flip Animator
Drives the two-phase flip of each digit cell in response to digit changes
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping

from .digits import DigitChange, DigitSlot
from .presenter import DigitPresenter


class AnimationPhase(str, Enum):
    IDLE = "idle"
    FLIPPING_TOP_HALF = "flipping_top_half"
    FLIPPING_BOTTOM_HALF = "flipping_bottom_half"


class ReentryPolicy(str, Enum):
    """What happens when a cell changes again while it is still flipping"""
    # Start another cycle on top of the running one; every cycle finishes
    OVERLAP = "overlap"
    # The newest cycle wins; continuations of older cycles are dropped
    RESTART = "restart"


@dataclass
class _SlotAnimation:
    handle: Any
    phase: AnimationPhase = AnimationPhase.IDLE
    generation: int = 0


class FlipAnimator:
    """Per-slot state machine: IDLE -> FLIPPING_TOP_HALF -> FLIPPING_BOTTOM_HALF -> IDLE"""

    def __init__(self, presenter: DigitPresenter, handles: Mapping[DigitSlot, Any],
                 policy: ReentryPolicy = ReentryPolicy.OVERLAP):
        self.presenter = presenter
        self.policy = ReentryPolicy(policy)
        self._slots: Dict[DigitSlot, _SlotAnimation] = {
            slot: _SlotAnimation(handle) for slot, handle in handles.items()
        }

    def apply(self, change: DigitChange) -> None:
        """Start flipping ``change.slot`` to ``change.char``"""
        anim = self._slots[change.slot]
        if anim.phase is not AnimationPhase.IDLE:
            logging.debug(f"Digit {change.slot.unit.value}/{change.slot.position.name.lower()} "
                          f"changed mid-flip ({self.policy.value})")

        anim.generation += 1
        generation = anim.generation

        departing = self.presenter.get_static_char(anim.handle)
        # The new character sits behind the top flap until it has folded down
        self.presenter.set_static_char(anim.handle, change.char)
        anim.phase = AnimationPhase.FLIPPING_TOP_HALF
        self.presenter.begin_top_flip(
            anim.handle, departing,
            lambda: self._on_top_complete(change, generation),
        )

    def _superseded(self, anim: _SlotAnimation, generation: int) -> bool:
        return self.policy is ReentryPolicy.RESTART and generation != anim.generation

    def _on_top_complete(self, change: DigitChange, generation: int) -> None:
        anim = self._slots[change.slot]
        if self._superseded(anim, generation):
            return
        if generation == anim.generation:
            anim.phase = AnimationPhase.FLIPPING_BOTTOM_HALF
        self.presenter.begin_bottom_flip(
            anim.handle, change.char,
            lambda: self._on_bottom_complete(change, generation),
        )

    def _on_bottom_complete(self, change: DigitChange, generation: int) -> None:
        anim = self._slots[change.slot]
        if self._superseded(anim, generation):
            return
        self.presenter.set_bottom_char(anim.handle, change.char)
        if generation == anim.generation:
            anim.phase = AnimationPhase.IDLE

    def phase(self, slot: DigitSlot) -> AnimationPhase:
        return self._slots[slot].phase

    def phases(self) -> Dict[DigitSlot, AnimationPhase]:
        return {slot: anim.phase for slot, anim in self._slots.items()}

    def is_idle(self) -> bool:
        return all(anim.phase is AnimationPhase.IDLE for anim in self._slots.values())
