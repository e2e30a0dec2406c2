"""Shared fakes and fixtures for countdown tests."""

from datetime import datetime, timedelta, timezone

import pytest

from countdown.presenter import DigitPresenter
from countdown.scheduler import Ticker

NOW = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)
        return self.now


class ManualHandle:
    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.cancel_count = 0

    @property
    def cancelled(self):
        return self.cancel_count > 0

    def cancel(self):
        self.cancel_count += 1


class ManualTicker(Ticker):
    """Ticker whose periods elapse only when fire() is called."""

    def __init__(self):
        self.handles = []

    def schedule(self, interval, callback):
        handle = ManualHandle(interval, callback)
        self.handles.append(handle)
        return handle

    def fire(self):
        for handle in list(self.handles):
            if not handle.cancelled:
                handle.callback()


class FakeCell:
    def __init__(self, unit, position, char):
        self.unit = unit
        self.position = position
        self.top = char
        self.bottom = char


class RecordingPresenter(DigitPresenter):
    """Presenter that records every call and holds flip completions until released."""

    def __init__(self):
        self.cells = {}
        self.calls = []
        self.pending = []
        self.summaries = []
        self.labels = None
        self.caption = None
        self.retired = False

    def build_digit_cell(self, unit, position, initial_char):
        cell = FakeCell(unit, position, initial_char)
        self.cells[(unit, position)] = cell
        return cell

    def set_static_char(self, handle, char):
        handle.top = char
        self.calls.append(("static", handle.unit, handle.position, char))

    def get_static_char(self, handle):
        return handle.top

    def set_bottom_char(self, handle, char):
        handle.bottom = char
        self.calls.append(("bottom", handle.unit, handle.position, char))

    def begin_top_flip(self, handle, from_char, on_complete):
        self.calls.append(("top_flip", handle.unit, handle.position, from_char))
        self.pending.append(on_complete)

    def begin_bottom_flip(self, handle, to_char, on_complete):
        self.calls.append(("bottom_flip", handle.unit, handle.position, to_char))
        self.pending.append(on_complete)

    def set_summary(self, text):
        self.summaries.append(text)

    def set_labels(self, labels):
        self.labels = tuple(labels)

    def set_caption(self, caption):
        self.caption = caption

    def retire(self):
        self.retired = True

    def complete_next(self):
        self.pending.pop(0)()

    def complete_all(self):
        while self.pending:
            self.complete_next()


class FakeCallLater:
    """Collects call_later requests so tests decide when flips finish."""

    def __init__(self):
        self.scheduled = []

    def __call__(self, delay, callback):
        self.scheduled.append((delay, callback))

    def run_all(self):
        while self.scheduled:
            _, callback = self.scheduled.pop(0)
            callback()


class FakeMonotonic:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ticker():
    return ManualTicker()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def call_later():
    return FakeCallLater()


@pytest.fixture
def monotonic():
    return FakeMonotonic()
