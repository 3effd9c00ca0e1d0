"""Duration value object"""

import logging
import re
from dataclasses import dataclass
from datetime import timedelta

from jsonutil.domain.exceptions import MalformedDurationTextError, UnrecognizedUnitError

logger = logging.getLogger(__name__)

# A year is always 365d, a week 7d and a day 24h.
UNIT_FACTORS: dict[str, int] = {
    "y": 1000 * 60 * 60 * 24 * 365,
    "w": 1000 * 60 * 60 * 24 * 7,
    "d": 1000 * 60 * 60 * 24,
    "h": 1000 * 60 * 60,
    "m": 1000 * 60,
    "s": 1000,
    "ms": 1,
}

# Tried in this order when formatting; "ms" is the fallback.
FORMAT_UNITS = ("y", "w", "d", "h", "m", "s")

DURATION_REGEX = r"^([0-9]+)(y|w|d|h|m|s|ms)$"
DURATION_PATTERN = re.compile(DURATION_REGEX)


@dataclass(frozen=True, order=True)
class Duration:
    """Elapsed time stored as a whole number of milliseconds"""

    milliseconds: int

    def __post_init__(self) -> None:
        """Validate duration"""
        if isinstance(self.milliseconds, bool) or not isinstance(self.milliseconds, int):
            raise TypeError(
                f"Duration milliseconds must be an int, got {type(self.milliseconds).__name__}"
            )
        if self.milliseconds < 0:
            raise ValueError("Duration cannot be negative")
        # Raises OverflowError past the range of a native timedelta
        timedelta(milliseconds=self.milliseconds)

    @classmethod
    def parse(cls, text: str) -> "Duration":
        """Create duration from compact text, e.g. 90s or 2h"""
        return parse_duration(text)

    @classmethod
    def from_timedelta(cls, value: timedelta) -> "Duration":
        """Create duration from a timedelta, dropping sub-millisecond precision"""
        return cls(value // timedelta(milliseconds=1))

    def to_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.milliseconds)

    @property
    def seconds(self) -> float:
        """Get duration in seconds"""
        return self.milliseconds / 1000.0

    @property
    def minutes(self) -> float:
        """Get duration in minutes"""
        return self.seconds / 60.0

    def __int__(self) -> int:
        return self.milliseconds

    def __str__(self) -> str:
        return format_duration(self)

    def __add__(self, other: object) -> "Duration":
        """Add two durations"""
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.milliseconds + other.milliseconds)

    def __sub__(self, other: object) -> "Duration":
        """Subtract two durations"""
        if not isinstance(other, Duration):
            return NotImplemented
        result_ms = self.milliseconds - other.milliseconds
        if result_ms < 0:
            raise ValueError("Cannot subtract larger duration from smaller one")
        return Duration(result_ms)


def parse_duration(text: str) -> Duration:
    """Parse a duration string into a Duration.

    Accepts a run of ASCII digits directly followed by one of the units
    y, w, d, h, m, s or ms, e.g. "90s", "2h", "1500ms". No whitespace, sign,
    fraction or unit combinations are allowed.

    Raises:
        MalformedDurationTextError: If the text does not match the grammar.
        UnrecognizedUnitError: If the unit has no factor in UNIT_FACTORS.
        OverflowError: If the result does not fit in a timedelta.
    """
    if not isinstance(text, str):
        raise MalformedDurationTextError(text)

    match = DURATION_PATTERN.fullmatch(text)
    if match is None:
        raise MalformedDurationTextError(text)

    count = int(match.group(1))
    unit = match.group(2)
    factor = UNIT_FACTORS.get(unit)
    if factor is None:
        raise UnrecognizedUnitError(unit)

    duration = Duration(count * factor)
    logger.debug(f"Parsed duration {text!r} as {duration.milliseconds}ms")
    return duration


def format_duration(duration: Duration) -> str:
    """Render a Duration using the largest unit that divides it exactly.

    Units are tried from years down to seconds, falling back to
    milliseconds, so parse_duration(format_duration(d)) == d always holds.
    Zero is divisible by every unit and renders as "0y".
    """
    ms = duration.milliseconds
    unit = "ms"
    for candidate in FORMAT_UNITS:
        if ms % UNIT_FACTORS[candidate] == 0:
            unit = candidate
            break
    return f"{ms // UNIT_FACTORS[unit]}{unit}"
