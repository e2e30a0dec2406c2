"""
Countdown Manager for the Flip-Clock service
Mounts countdown blocks, keeps their boards ticking and retires them on expiry.
"""

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from itertools import count
from typing import Any, Callable, Dict, List, Optional

import yaml

from config import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    FLIP_DURATION,
    FLIP_REENTRY_POLICY,
    TICK_INTERVAL,
)
from countdown.animator import ReentryPolicy
from countdown.block import CountdownConfigError, local_now, parse_block
from countdown.scheduler import AsyncioTicker, CountdownScheduler, Ticker
from splitflap.clock import CallLater
from splitflap.renderer import SplitflapCountdownRenderer


class DuplicateCountdownError(Exception):
    """A countdown with the same id is already mounted"""


@dataclass
class MountedCountdown:
    countdown_id: str
    scheduler: CountdownScheduler
    renderer: SplitflapCountdownRenderer
    periodic: Any = None


class CountdownManager:
    """Owns every mounted countdown and the diagnostics of rejected blocks"""

    def __init__(self, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT,
                 tick_interval: float = TICK_INTERVAL,
                 flip_duration: float = FLIP_DURATION,
                 policy: str = FLIP_REENTRY_POLICY,
                 clock: Callable[[], datetime] = local_now,
                 ticker: Optional[Ticker] = None,
                 call_later: Optional[CallLater] = None):
        self.width = width
        self.height = height
        self.tick_interval = tick_interval
        self.flip_duration = flip_duration
        self.policy = ReentryPolicy(policy)
        self.clock = clock
        self.ticker = ticker or AsyncioTicker()
        self.call_later = call_later

        self.countdowns: Dict[str, MountedCountdown] = {}
        self.diagnostics: Dict[str, str] = {}
        self.expired: List[str] = []
        self._ids = count(1)

    def _generate_id(self) -> str:
        while True:
            countdown_id = f"countdown-{next(self._ids)}"
            if countdown_id not in self.countdowns:
                return countdown_id

    def mount(self, end_at: Optional[str], labels, caption: Optional[str] = None,
              countdown_id: Optional[str] = None, start: bool = True) -> MountedCountdown:
        """
        Validate a block and, if it passes, build its board and start ticking.

        Raises:
            CountdownConfigError: the block was rejected; nothing is mounted
            DuplicateCountdownError: ``countdown_id`` is already in use
        """
        countdown_id = countdown_id or self._generate_id()
        if countdown_id in self.countdowns:
            raise DuplicateCountdownError(f"Countdown already mounted: {countdown_id}")

        try:
            block = parse_block(end_at, labels, caption, clock=self.clock)
        except CountdownConfigError as e:
            logging.warning(f"could not create countdown-timer {countdown_id}: {e.diagnostic} ({e})")
            self.diagnostics[countdown_id] = e.diagnostic
            raise

        self.diagnostics.pop(countdown_id, None)

        renderer = SplitflapCountdownRenderer(
            self.width, self.height,
            flip_duration=self.flip_duration,
            call_later=self.call_later,
        )
        scheduler = CountdownScheduler(
            block, renderer.board,
            clock=self.clock,
            tick_interval=self.tick_interval,
            policy=self.policy,
            on_expire=lambda _scheduler: self._retire(countdown_id),
        )
        mounted = MountedCountdown(countdown_id, scheduler, renderer)
        self.countdowns[countdown_id] = mounted
        logging.info(f"Mounted countdown {countdown_id} to {block.target.isoformat()}: {scheduler.summary}")

        if start:
            mounted.periodic = scheduler.start(self.ticker)
        return mounted

    def _retire(self, countdown_id: str) -> None:
        mounted = self.countdowns.pop(countdown_id, None)
        if mounted is None:
            return
        mounted.renderer.board.retire()
        self.expired.append(countdown_id)
        logging.info(f"Countdown {countdown_id} expired and was removed")

    def remove(self, countdown_id: str) -> bool:
        """Stop and unmount a countdown before it expires"""
        mounted = self.countdowns.pop(countdown_id, None)
        if mounted is None:
            return False
        mounted.scheduler.cancel()
        mounted.renderer.board.retire()
        logging.info(f"Removed countdown {countdown_id}")
        return True

    def stop_all(self) -> None:
        for countdown_id in list(self.countdowns):
            self.remove(countdown_id)

    def get(self, countdown_id: str) -> Optional[MountedCountdown]:
        return self.countdowns.get(countdown_id)

    def load_blocks(self, path: str) -> int:
        """Mount every block of a YAML block file; returns how many were mounted"""
        if not os.path.exists(path):
            logging.info(f"No countdown blocks file at {path}")
            return 0

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Error loading countdown blocks from {path}: {e}")
            return 0

        if isinstance(data, dict):
            data = data.get("countdowns")
        if not isinstance(data, list):
            logging.warning(f"Countdown blocks file {path} has no list of blocks")
            return 0

        mounted = 0
        for raw in data:
            if not isinstance(raw, dict):
                logging.warning(f"Skipping malformed countdown block: {raw!r}")
                continue
            end_at = raw.get("end_at")
            # YAML turns unquoted timestamps into datetime objects
            if isinstance(end_at, (datetime, date)):
                end_at = end_at.isoformat()
            countdown_id = raw.get("id")
            try:
                self.mount(end_at, raw.get("labels"), raw.get("caption"),
                           countdown_id=str(countdown_id) if countdown_id is not None else None)
                mounted += 1
            except CountdownConfigError:
                continue
            except DuplicateCountdownError as e:
                logging.warning(str(e))

        logging.info(f"Mounted {mounted} countdown(s) from {path}")
        return mounted

    def status(self, countdown_id: str) -> Optional[Dict[str, Any]]:
        mounted = self.countdowns.get(countdown_id)
        if mounted is None:
            return None
        scheduler = mounted.scheduler
        board = mounted.renderer.board
        return {
            "id": countdown_id,
            "status": scheduler.status.value,
            "target": scheduler.target.isoformat(),
            "caption": scheduler.block.caption,
            "labels": list(scheduler.labels),
            "remaining": scheduler.delta.as_dict(),
            "digits": scheduler.digits.as_dict(),
            "display": board.get_displayed_digits(),
            "summary": board.summary,
            "phases": {
                f"{slot.unit.value}_{slot.position.name.lower()}": phase.value
                for slot, phase in scheduler.animator.phases().items()
            },
            "animating": board.is_any_animation_active(),
        }

    def list_status(self) -> Dict[str, Any]:
        return {
            "countdowns": [self.status(countdown_id) for countdown_id in self.countdowns],
            "diagnostics": dict(self.diagnostics),
            "expired": list(self.expired),
        }

    def render_frame(self, countdown_id: str) -> Optional[bytes]:
        mounted = self.countdowns.get(countdown_id)
        if mounted is None:
            return None
        return mounted.renderer.render_png()
