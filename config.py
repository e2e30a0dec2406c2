"""
Flip-Clock Countdown Configuration

Central configuration file for all constants and settings.
"""
import os

# Countdown timing
TICK_INTERVAL = float(os.getenv("COUNTDOWN_TICK_INTERVAL", "1.0"))  # seconds
FLIP_DURATION = float(os.getenv("COUNTDOWN_FLIP_DURATION", "0.5"))  # seconds per half flip

# "overlap" keeps the reference behaviour, "restart" lets the newest flip win
FLIP_REENTRY_POLICY = os.getenv("COUNTDOWN_FLIP_REENTRY_POLICY", "overlap")

# Frame size of rendered boards
CANVAS_WIDTH = int(os.getenv("COUNTDOWN_CANVAS_WIDTH", "1280"))
CANVAS_HEIGHT = int(os.getenv("COUNTDOWN_CANVAS_HEIGHT", "720"))

# Fonts
DIGIT_FONT_PATH = os.getenv("COUNTDOWN_DIGIT_FONT", "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf")
LABEL_FONT_PATH = os.getenv("COUNTDOWN_LABEL_FONT", "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf")
CAPTION_FONT_PATH = os.getenv("COUNTDOWN_CAPTION_FONT", "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf")

# Host block file, mounted at startup
COUNTDOWN_BLOCKS_PATH = os.getenv(
    "COUNTDOWN_BLOCKS_PATH",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "countdowns.yaml"),
)

# Server Configuration
DEFAULT_PORT = 8000
PRODUCTION_PORT = 80
