"""
Countdown Scheduler

Periodic driver for a single countdown. Each tick samples the clock, stops
the countdown for good once the target is reached, and otherwise pushes the
changed digits through the flip animator.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from .accessibility import build_summary
from .animator import FlipAnimator, ReentryPolicy
from .block import CountdownBlock, local_now
from .delta import Delta, compute_delta
from .digits import DIGIT_SLOTS, DigitChange, DigitState, diff_digits, render_digits
from .presenter import DigitPresenter


DEFAULT_TICK_INTERVAL = 1.0  # seconds


class CountdownStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


class PeriodicTask:
    """Cancellable handle for a callback repeated on the running event loop"""

    def __init__(self, interval: float, callback: Callable[[], object], name: Optional[str] = None):
        self.interval = interval
        self.callback = callback
        self.cancelled = False
        self._task = asyncio.create_task(self._run(), name=name)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.callback()
            except Exception as e:
                logging.error(f"Countdown tick failed: {e}")

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        self._task.cancel()

    def done(self) -> bool:
        return self._task.done()


class Ticker(ABC):
    """Source of periodic callbacks"""

    @abstractmethod
    def schedule(self, interval: float, callback: Callable[[], object]):
        """Call ``callback`` every ``interval`` seconds; return a handle with ``cancel()``"""
        pass


class AsyncioTicker(Ticker):
    """Ticks on the running asyncio loop"""

    def schedule(self, interval: float, callback: Callable[[], object]) -> PeriodicTask:
        return PeriodicTask(interval, callback, name="countdown-tick")


class CountdownScheduler:
    """Owns the target instant and the canonical digit state of one countdown"""

    def __init__(self, block: CountdownBlock, presenter: DigitPresenter,
                 clock: Callable[[], datetime] = local_now,
                 tick_interval: float = DEFAULT_TICK_INTERVAL,
                 policy: ReentryPolicy = ReentryPolicy.OVERLAP,
                 on_expire: Optional[Callable[["CountdownScheduler"], None]] = None):
        self.block = block
        self.target = block.target
        self.labels = block.labels
        self.presenter = presenter
        self.clock = clock
        self.tick_interval = tick_interval
        self.on_expire = on_expire

        self.status = CountdownStatus.ACTIVE
        self.tick_count = 0
        self._periodic = None

        self.delta: Delta = compute_delta(self.target, self.clock())
        self.digits: DigitState = render_digits(self.delta)
        if self.delta.day > 99:
            logging.warning(f"Countdown to {self.target.isoformat()} has {self.delta.day} days, "
                            f"only two day digits are shown")

        presenter.set_caption(block.caption)
        presenter.set_labels(block.labels)
        handles = {
            slot: presenter.build_digit_cell(slot.unit, slot.position, self.digits.char_at(slot))
            for slot in DIGIT_SLOTS
        }
        self.animator = FlipAnimator(presenter, handles, policy)

        self.summary = build_summary(self.delta, self.labels)
        presenter.set_summary(self.summary)

    @property
    def is_active(self) -> bool:
        return self.status is CountdownStatus.ACTIVE

    def start(self, ticker: Ticker):
        """Begin ticking and return the periodic handle"""
        if not self.is_active:
            raise RuntimeError("Countdown has already expired")
        if self._periodic is None:
            self._periodic = ticker.schedule(self.tick_interval, self.tick)
        return self._periodic

    def tick(self) -> List[DigitChange]:
        """Run one evaluation cycle; returns the digit changes that were animated"""
        if not self.is_active:
            return []
        self.tick_count += 1

        now = self.clock()
        if now >= self.target:
            self._expire()
            return []

        delta = compute_delta(self.target, now)
        digits = render_digits(delta)
        changes = diff_digits(self.digits, digits)
        for change in changes:
            self.animator.apply(change)
        self.delta = delta
        self.digits = digits

        summary = build_summary(delta, self.labels)
        if summary != self.summary:
            self.summary = summary
            self.presenter.set_summary(summary)

        return changes

    def cancel(self) -> None:
        """Stop ticking without expiring (host removal or shutdown)"""
        self._release_periodic()

    def _expire(self) -> None:
        self.status = CountdownStatus.EXPIRED
        self._release_periodic()
        logging.info(f"Countdown reached its target {self.target.isoformat()}")
        if self.on_expire:
            self.on_expire(self)

    def _release_periodic(self) -> None:
        periodic, self._periodic = self._periodic, None
        if periodic is not None:
            periodic.cancel()
