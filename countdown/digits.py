"""
Digit State and Diff Engine
Turns a Delta into per-unit digit strings and detects which cells changed
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import List

from .delta import TIME_UNITS, Delta, TimeUnit


class Position(IntEnum):
    TENS = 0
    ONES = 1


POSITIONS = (Position.TENS, Position.ONES)


@dataclass(frozen=True)
class DigitSlot:
    """One character cell on the board"""
    unit: TimeUnit
    position: Position


DIGIT_SLOTS = tuple(DigitSlot(unit, position) for unit in TIME_UNITS for position in POSITIONS)


@dataclass(frozen=True)
class DigitChange:
    """A slot whose character differs from the previous state"""
    slot: DigitSlot
    char: str


@dataclass(frozen=True)
class DigitState:
    """Zero-padded digit string for every unit"""
    day: str
    hour: str
    minute: str

    def digits(self, unit: TimeUnit) -> str:
        return getattr(self, unit.value)

    def char_at(self, slot: DigitSlot) -> str:
        # Counts above 99 only fit their leading two characters on the board
        return self.digits(slot.unit)[slot.position]

    def as_dict(self) -> dict:
        return {unit.value: self.digits(unit) for unit in TIME_UNITS}


def _pad(count: int) -> str:
    return f"{count:02d}"


def render_digits(delta: Delta) -> DigitState:
    """Zero-pad every unit of the delta to (at least) two characters"""
    return DigitState(
        day=_pad(delta.day),
        hour=_pad(delta.hour),
        minute=_pad(delta.minute),
    )


def diff_digits(previous: DigitState, current: DigitState) -> List[DigitChange]:
    """
    Compare two states cell by cell.

    Returns one change per differing slot, ordered by unit (day, hour,
    minute) and then by position (tens, ones). Identical states produce an
    empty list, which is what keeps quiet ticks from animating anything.
    """
    changes = []
    for slot in DIGIT_SLOTS:
        new_char = current.char_at(slot)
        if previous.char_at(slot) != new_char:
            changes.append(DigitChange(slot, new_char))
    return changes
