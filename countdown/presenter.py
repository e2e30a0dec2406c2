"""
Presenter Interface

The part of the presentation layer the countdown core talks to. A presenter
owns the digit cells; the core only keeps the opaque handles it returns.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence

from .delta import TimeUnit
from .digits import Position


class DigitPresenter(ABC):
    """Builds and mutates the six digit cells of one countdown"""

    @abstractmethod
    def build_digit_cell(self, unit: TimeUnit, position: Position, initial_char: str) -> Any:
        """Create a cell showing ``initial_char`` and return its handle"""
        pass

    @abstractmethod
    def set_static_char(self, handle: Any, char: str) -> None:
        """Set the static top character (hidden behind the top flap while flipping)"""
        pass

    @abstractmethod
    def get_static_char(self, handle: Any) -> str:
        pass

    @abstractmethod
    def set_bottom_char(self, handle: Any, char: str) -> None:
        """Commit the static bottom character"""
        pass

    @abstractmethod
    def begin_top_flip(self, handle: Any, from_char: str, on_complete: Callable[[], None]) -> None:
        """
        Rotate the top flap, showing ``from_char``, from 0 to -90 degrees.

        ``on_complete`` must be invoked exactly once, after the rotation ends.
        """
        pass

    @abstractmethod
    def begin_bottom_flip(self, handle: Any, to_char: str, on_complete: Callable[[], None]) -> None:
        """
        Rotate the bottom flap, showing ``to_char``, from 90 to 0 degrees.

        ``on_complete`` must be invoked exactly once, after the rotation ends.
        """
        pass

    def set_summary(self, text: str) -> None:
        """Publish the accessibility summary"""
        pass

    def set_labels(self, labels: Sequence[str]) -> None:
        pass

    def set_caption(self, caption: Optional[str]) -> None:
        pass

    def retire(self) -> None:
        """Called once when the countdown is removed from the host"""
        pass
