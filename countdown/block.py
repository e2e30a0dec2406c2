"""
Countdown Block Validation

Checks the host-supplied block (target date, caption, unit labels) once,
before anything is rendered. Every failure is a configuration error that
aborts construction and carries a short diagnostic for the host to log.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, Tuple, Union


LABEL_DELIMITER = "|"

# Tried after datetime.fromisoformat() gives up
FALLBACK_DATE_FORMATS = (
    "%B %d, %Y %H:%M:%S",
    "%B %d, %Y %H:%M",
    "%B %d, %Y",
    "%b %d, %Y %H:%M:%S",
    "%b %d, %Y %H:%M",
    "%b %d, %Y",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
)


class CountdownConfigError(ValueError):
    """Base class for blocks that cannot be turned into a countdown"""
    diagnostic = "invalid countdown"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.diagnostic)


class InvalidDateError(CountdownConfigError):
    diagnostic = "invalid date"


class AlreadyPassedError(CountdownConfigError):
    diagnostic = "already passed"


class InvalidTimeFormatError(CountdownConfigError):
    diagnostic = "invalid time format"


@dataclass(frozen=True)
class CountdownBlock:
    """A validated countdown definition"""
    target: datetime
    labels: Tuple[str, str, str]
    caption: Optional[str] = None


def local_now() -> datetime:
    return datetime.now().astimezone()


def _with_local_tz(parsed: datetime) -> datetime:
    if parsed.tzinfo is not None:
        return parsed
    try:
        return parsed.astimezone()
    except (OverflowError, ValueError):
        # Local offset cannot be applied at the ends of the datetime range
        return parsed.replace(tzinfo=timezone.utc)


def parse_target(text: Optional[str]) -> datetime:
    """Parse a target date string into an aware datetime (naive means local time)"""
    if not isinstance(text, str):
        raise InvalidDateError(f"invalid date: {text!r}")
    text = text.strip()
    if not text:
        raise InvalidDateError()

    return _with_local_tz(_parse_date_text(text))


def _parse_date_text(text: str) -> datetime:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    for fmt in FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    raise InvalidDateError(f"invalid date: {text!r}")


def parse_labels(labels: Union[str, Sequence[str], None]) -> Tuple[str, str, str]:
    """Split the delimited label list; exactly one label per unit is required"""
    if isinstance(labels, str):
        parts = labels.strip().split(LABEL_DELIMITER)
    elif isinstance(labels, (list, tuple)):
        parts = list(labels)
    else:
        raise InvalidTimeFormatError(f"invalid time format: labels must be text, got {labels!r}")
    if not all(isinstance(part, str) for part in parts):
        raise InvalidTimeFormatError(f"invalid time format: labels must be text, got {parts!r}")
    if len(parts) != 3:
        raise InvalidTimeFormatError(f"invalid time format: expected 3 labels, got {len(parts)}")
    return parts[0], parts[1], parts[2]


def parse_block(end_at: Optional[str],
                labels: Union[str, Sequence[str], None],
                caption: Optional[str] = None,
                clock: Callable[[], datetime] = local_now) -> CountdownBlock:
    """
    Validate a raw block.

    Checks run in a fixed order: the date must parse, must lie strictly in
    the future, and exactly three labels must be present.

    Raises:
        InvalidDateError, AlreadyPassedError, InvalidTimeFormatError
    """
    target = parse_target(end_at)

    if target <= clock():
        raise AlreadyPassedError(f"already passed: {target.isoformat()}")

    parsed_labels = parse_labels(labels)

    caption = str(caption).strip() if caption is not None else None
    return CountdownBlock(target=target, labels=parsed_labels, caption=caption or None)
