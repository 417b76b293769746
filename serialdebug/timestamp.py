"""Millisecond wall clock that wraps at 24 hours and renders as HH:MM:SS:mmm."""

from __future__ import annotations

from dataclasses import dataclass

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
DAY_MILLISECONDS = 24 * _MS_PER_HOUR


@dataclass
class Timestamp:
    """Time of day in milliseconds, advanced one millisecond per tick."""

    milliseconds: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.milliseconds < DAY_MILLISECONDS:
            raise ValueError(
                f"milliseconds must be in [0, {DAY_MILLISECONDS}), got {self.milliseconds}"
            )

    def tick(self) -> None:
        """Advance by one millisecond, rolling over from 23:59:59:999 to midnight."""
        self.milliseconds = (self.milliseconds + 1) % DAY_MILLISECONDS

    def __str__(self) -> str:
        hours, rest = divmod(self.milliseconds, _MS_PER_HOUR)
        minutes, rest = divmod(rest, _MS_PER_MINUTE)
        seconds, millis = divmod(rest, _MS_PER_SECOND)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}:{millis:03d}"