"""
SplitflapDigit - One character cell of the countdown board
Holds the static top/bottom halves and the two transient flaps of a flip
"""

import math
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from PIL import Image, ImageDraw, ImageFont

from config import DIGIT_FONT_PATH


def load_font(path: str, size: int):
    """Load a TrueType font, falling back to Pillow's bundled font"""
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        logging.warning(f"Font not found: {path}, using default font")
        return ImageFont.load_default()


@dataclass
class Rotation:
    """Linear rotation about the horizontal axis"""
    start_angle: float
    end_angle: float
    duration: float
    started_at: float

    def progress(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        return min(1.0, max(0.0, (now - self.started_at) / self.duration))

    def angle(self, now: float) -> float:
        return self.start_angle + (self.end_angle - self.start_angle) * self.progress(now)


@dataclass
class Flap:
    """A transient half-card that is rotating"""
    char: str
    rotation: Rotation


class SplitflapDigit:
    """Handles state and drawing for a single splitflap digit cell"""

    def __init__(self, width: int, height: int, font_size: int, initial_char: str = "0"):
        self.width = width
        self.height = height
        self.half_height = height // 2
        self.font_size = font_size

        # Static halves
        self.top_char = initial_char
        self.bottom_char = initial_char

        # Transient flaps, present only while flipping
        self.flip_top: Optional[Flap] = None
        self.flip_bottom: Optional[Flap] = None

        # Colors
        self.bg_color = (45, 45, 55)
        self.text_color = (255, 255, 255)
        self.shadow_color = (20, 20, 25)
        self.highlight_color = (70, 70, 80)

        self.font = load_font(DIGIT_FONT_PATH, font_size)
        self._faces: Dict[str, Image.Image] = {}

    def start_top_flip(self, from_char: str, duration: float, now: float) -> Flap:
        """Fold the departing character's top half down from 0 to -90 degrees"""
        self.flip_top = Flap(from_char, Rotation(0.0, -90.0, duration, now))
        return self.flip_top

    def start_bottom_flip(self, to_char: str, duration: float, now: float) -> Flap:
        """Unfold the arriving character's bottom half from 90 to 0 degrees"""
        self.flip_bottom = Flap(to_char, Rotation(90.0, 0.0, duration, now))
        return self.flip_bottom

    def finish_flap(self, flap: Flap) -> None:
        """Drop a flap once its rotation is over (ignored if a newer flap replaced it)"""
        if self.flip_top is flap:
            self.flip_top = None
        elif self.flip_bottom is flap:
            self.flip_bottom = None

    def is_animation_active(self) -> bool:
        return self.flip_top is not None or self.flip_bottom is not None

    def _face(self, char: str) -> Image.Image:
        """Full static card for a character, cached per character"""
        face = self._faces.get(char)
        if face is not None:
            return face

        face = Image.new('RGB', (self.width, self.height), self.bg_color)
        draw = ImageDraw.Draw(face)

        # Subtle vertical gradient
        for y in range(self.height):
            intensity = 45 + int(10 * (y / self.height))
            draw.line([(0, y), (self.width, y)], fill=(intensity, intensity, intensity + 10))

        draw.rectangle([0, 0, self.width - 1, self.height - 1], outline=self.shadow_color, width=2)
        draw.rectangle([2, 2, self.width - 3, self.height - 3], outline=self.highlight_color, width=1)

        bbox = draw.textbbox((0, 0), char, font=self.font)
        text_x = (self.width - (bbox[2] - bbox[0])) // 2 - bbox[0]
        text_y = (self.height - (bbox[3] - bbox[1])) // 2 - bbox[1]
        draw.text((text_x + 1, text_y + 1), char, fill=self.shadow_color, font=self.font)
        draw.text((text_x, text_y), char, fill=self.text_color, font=self.font)

        self._faces[char] = face
        return face

    def _half(self, char: str, is_top: bool) -> Image.Image:
        face = self._face(char)
        if is_top:
            return face.crop((0, 0, self.width, self.half_height))
        return face.crop((0, self.half_height, self.width, self.height))

    def _fold(self, flap: Flap, is_top: bool, now: float) -> Tuple[Optional[Image.Image], int]:
        """Half-card squashed by the cosine of its angle, plus its paste row"""
        scale = abs(math.cos(math.radians(flap.rotation.angle(now))))
        folded_height = int(self.half_height * scale)
        if folded_height <= 0:
            return None, 0
        half = self._half(flap.char, is_top).resize((self.width, folded_height), Image.Resampling.LANCZOS)
        # Both flaps hinge on the center line
        y = self.half_height - folded_height if is_top else self.half_height
        return half, y

    def render(self, now: float) -> Image.Image:
        """Render the cell as it looks at time ``now``"""
        img = Image.new('RGB', (self.width, self.height), self.bg_color)
        img.paste(self._half(self.top_char, True), (0, 0))
        img.paste(self._half(self.bottom_char, False), (0, self.half_height))

        if self.flip_top is not None:
            flap_img, y = self._fold(self.flip_top, True, now)
            if flap_img is not None:
                img.paste(flap_img, (0, y))

        if self.flip_bottom is not None:
            flap_img, y = self._fold(self.flip_bottom, False, now)
            if flap_img is not None:
                img.paste(flap_img, (0, y))

        # Split line
        draw = ImageDraw.Draw(img)
        draw.line([(0, self.half_height), (self.width, self.half_height)], fill=self.shadow_color, width=2)
        return img
