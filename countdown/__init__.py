"""
Countdown core for the flip-clock board
Time delta math, digit diffing, flip animation and the tick scheduler
"""

from .accessibility import build_summary
from .animator import AnimationPhase, FlipAnimator, ReentryPolicy
from .block import (
    AlreadyPassedError,
    CountdownBlock,
    CountdownConfigError,
    InvalidDateError,
    InvalidTimeFormatError,
    parse_block,
)
from .delta import TIME_UNITS, Delta, TimeUnit, compute_delta
from .digits import DIGIT_SLOTS, DigitChange, DigitSlot, DigitState, Position, diff_digits, render_digits
from .presenter import DigitPresenter
from .scheduler import AsyncioTicker, CountdownScheduler, CountdownStatus, PeriodicTask, Ticker

__all__ = [
    'AlreadyPassedError', 'AnimationPhase', 'AsyncioTicker', 'CountdownBlock', 'CountdownConfigError',
    'CountdownScheduler', 'CountdownStatus', 'DIGIT_SLOTS', 'Delta', 'DigitChange', 'DigitPresenter',
    'DigitSlot', 'DigitState', 'FlipAnimator', 'InvalidDateError', 'InvalidTimeFormatError',
    'PeriodicTask', 'Position', 'ReentryPolicy', 'TIME_UNITS', 'Ticker', 'TimeUnit',
    'build_summary', 'compute_delta', 'diff_digits', 'parse_block', 'render_digits',
]
