"""
SplitflapCountdownBoard - Day/hour/minute splitflap board
Builds the six digit cells and runs the timed flap rotations the animator asks for
"""

import asyncio
import time
from typing import Callable, Dict, Optional, Sequence, Tuple
from PIL import Image, ImageDraw

from config import FLIP_DURATION, LABEL_FONT_PATH
from countdown.delta import TIME_UNITS, TimeUnit
from countdown.digits import POSITIONS, Position
from countdown.presenter import DigitPresenter

from .digit import Flap, SplitflapDigit, load_font


CallLater = Callable[[float, Callable[[], None]], object]


class SplitflapCountdownBoard(DigitPresenter):
    """Manages the three two-digit groups of a countdown"""

    def __init__(self, digit_width: int, digit_height: int, font_size: int, spacing: int = 10,
                 flip_duration: float = FLIP_DURATION,
                 call_later: Optional[CallLater] = None,
                 time_source: Callable[[], float] = time.monotonic):
        self.digit_width = digit_width
        self.digit_height = digit_height
        self.font_size = font_size
        self.spacing = spacing
        self.flip_duration = flip_duration
        self.time_source = time_source
        self._call_later = call_later

        self.cells: Dict[Tuple[TimeUnit, Position], SplitflapDigit] = {}
        self.labels: Tuple[str, ...] = ("", "", "")
        self.caption: Optional[str] = None
        self.summary = ""
        self.retired = False

        # Labels sit under each group
        self.label_font_size = max(10, font_size // 4)
        self.label_font = load_font(LABEL_FONT_PATH, self.label_font_size)
        self.label_height = int(self.label_font_size * 1.6)

        self.group_width = 2 * digit_width + spacing
        self.group_gap = spacing * 3
        self.total_width = 3 * self.group_width + 2 * self.group_gap
        self.total_height = digit_height + self.label_height

    # --- DigitPresenter ---

    def build_digit_cell(self, unit: TimeUnit, position: Position, initial_char: str) -> SplitflapDigit:
        cell = SplitflapDigit(self.digit_width, self.digit_height, self.font_size, initial_char)
        self.cells[(unit, position)] = cell
        return cell

    def set_static_char(self, handle: SplitflapDigit, char: str) -> None:
        handle.top_char = char

    def get_static_char(self, handle: SplitflapDigit) -> str:
        return handle.top_char

    def set_bottom_char(self, handle: SplitflapDigit, char: str) -> None:
        handle.bottom_char = char

    def begin_top_flip(self, handle: SplitflapDigit, from_char: str, on_complete: Callable[[], None]) -> None:
        flap = handle.start_top_flip(from_char, self.flip_duration, self.time_source())
        self._complete_later(handle, flap, on_complete)

    def begin_bottom_flip(self, handle: SplitflapDigit, to_char: str, on_complete: Callable[[], None]) -> None:
        flap = handle.start_bottom_flip(to_char, self.flip_duration, self.time_source())
        self._complete_later(handle, flap, on_complete)

    def set_summary(self, text: str) -> None:
        self.summary = text

    def set_labels(self, labels: Sequence[str]) -> None:
        self.labels = tuple(labels)

    def set_caption(self, caption: Optional[str]) -> None:
        self.caption = caption

    def retire(self) -> None:
        self.retired = True

    # --- Timing ---

    def _complete_later(self, handle: SplitflapDigit, flap: Flap, on_complete: Callable[[], None]) -> None:
        def complete():
            handle.finish_flap(flap)
            on_complete()

        if self._call_later is not None:
            self._call_later(self.flip_duration, complete)
        else:
            asyncio.get_running_loop().call_later(self.flip_duration, complete)

    # --- Rendering ---

    def get_display_size(self) -> Tuple[int, int]:
        """Get the total size needed for the board"""
        return (self.total_width, self.total_height)

    def render(self, background_color: Tuple[int, int, int] = (20, 20, 30)) -> Image.Image:
        """Render the three digit groups with their labels"""
        img = Image.new('RGB', (self.total_width, self.total_height), background_color)
        draw = ImageDraw.Draw(img)
        now = self.time_source()

        group_x = 0
        for index, unit in enumerate(TIME_UNITS):
            x = group_x
            for position in POSITIONS:
                cell = self.cells.get((unit, position))
                if cell is not None:
                    img.paste(cell.render(now), (x, 0))
                x += self.digit_width + self.spacing

            label = self.labels[index] if index < len(self.labels) else ""
            if label:
                bbox = draw.textbbox((0, 0), label, font=self.label_font)
                label_x = group_x + (self.group_width - (bbox[2] - bbox[0])) // 2
                label_y = self.digit_height + (self.label_height - (bbox[3] - bbox[1])) // 2 - bbox[1]
                draw.text((label_x, label_y), label, fill=(180, 180, 180), font=self.label_font)

            group_x += self.group_width + self.group_gap

        return img

    def get_displayed_digits(self) -> str:
        """Static top characters as DD:HH:MM"""
        groups = []
        for unit in TIME_UNITS:
            groups.append("".join(
                self.cells[(unit, position)].top_char if (unit, position) in self.cells else "0"
                for position in POSITIONS
            ))
        return ":".join(groups)

    def is_any_animation_active(self) -> bool:
        """Check if any digit is currently flipping"""
        return any(cell.is_animation_active() for cell in self.cells.values())
