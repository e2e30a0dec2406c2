"""
Accessibility summary for screen readers
"""

from typing import Sequence

from .delta import TIME_UNITS, Delta


def build_summary(delta: Delta, labels: Sequence[str], separator: str = " ") -> str:
    """Return e.g. ``"3 Days 4 Hours 5 Minutes"`` with labels used verbatim"""
    return separator.join(f"{delta[unit]} {label}" for unit, label in zip(TIME_UNITS, labels))
