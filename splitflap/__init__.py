"""
Splitflap Countdown Board
Pillow presentation layer for the flip-clock countdown
"""

from .digit import SplitflapDigit
from .clock import SplitflapCountdownBoard
from .renderer import SplitflapCountdownRenderer

__all__ = ['SplitflapDigit', 'SplitflapCountdownBoard', 'SplitflapCountdownRenderer']
