"""
SplitflapCountdownRenderer - Full frame for one countdown
Composes the caption and the splitflap board on a fixed-size canvas
"""

import io
from typing import Optional, Tuple
from PIL import Image, ImageDraw

from config import CAPTION_FONT_PATH, FLIP_DURATION

from .clock import CallLater, SplitflapCountdownBoard
from .digit import load_font


class SplitflapCountdownRenderer:
    """Renders a complete countdown frame"""

    def __init__(self, width: int, height: int, flip_duration: float = FLIP_DURATION,
                 call_later: Optional[CallLater] = None, time_source=None):
        self.width = width
        self.height = height

        # Calculate responsive sizing
        self.font_scale = min(width / 1920, height / 1080)
        self.caption_font_size = max(12, int(64 * self.font_scale))

        board_kwargs = {}
        if time_source is not None:
            board_kwargs["time_source"] = time_source
        self.board = SplitflapCountdownBoard(
            digit_width=max(8, int(120 * self.font_scale)),
            digit_height=max(12, int(160 * self.font_scale)),
            font_size=max(8, int(100 * self.font_scale)),
            spacing=max(2, int(15 * self.font_scale)),
            flip_duration=flip_duration,
            call_later=call_later,
            **board_kwargs,
        )

        # Colors
        self.bg_color = (20, 20, 30)
        self.caption_color = (100, 150, 255)
        self.glow_color = (50, 50, 50)

        self.caption_font = load_font(CAPTION_FONT_PATH, self.caption_font_size)

        # Cache for the static caption layer
        self._background_template: Optional[Image.Image] = None
        self._template_caption: Optional[str] = None

    def _board_position(self) -> Tuple[int, int]:
        board_width, board_height = self.board.get_display_size()
        x = (self.width - board_width) // 2
        if self.board.caption:
            # Leave the upper third for the caption
            y = max(int(self.height / 3), (self.height - board_height) // 2)
        else:
            y = (self.height - board_height) // 2
        return x, y

    def _create_background_template(self) -> Image.Image:
        """Static background with the caption, rebuilt when the caption changes"""
        caption = self.board.caption
        if self._background_template is not None and self._template_caption == caption:
            return self._background_template.copy()

        img = Image.new('RGB', (self.width, self.height), self.bg_color)
        if caption:
            draw = ImageDraw.Draw(img)
            bbox = draw.textbbox((0, 0), caption, font=self.caption_font)
            caption_x = (self.width - (bbox[2] - bbox[0])) // 2
            caption_y = max(int(self.height * 0.12), int(self.height / 3 * 0.6))

            glow_offset = max(1, int(2 * self.font_scale))
            for offset in [(glow_offset, glow_offset), (-glow_offset, glow_offset),
                           (glow_offset, -glow_offset), (-glow_offset, -glow_offset)]:
                draw.text((caption_x + offset[0], caption_y + offset[1]),
                          caption, fill=self.glow_color, font=self.caption_font)
            draw.text((caption_x, caption_y), caption, fill=self.caption_color, font=self.caption_font)

        self._background_template = img
        self._template_caption = caption
        return img.copy()

    def render(self) -> Image.Image:
        """Render the frame with the board in its current animation state"""
        img = self._create_background_template()
        img.paste(self.board.render(self.bg_color), self._board_position())
        return img

    def render_png(self) -> bytes:
        buffer = io.BytesIO()
        # compress_level=1 favours encode speed over size
        self.render().save(buffer, format="PNG", compress_level=1)
        return buffer.getvalue()

    def is_animating(self) -> bool:
        return self.board.is_any_animation_active()
