from __future__ import annotations
"""
TimeSource v1

Single authoritative "what time is it" for the clock face.

Modes:
- LIVE: wall clock hour/minute; the second is derived from the monotonic
  millisecond counter (ms/1000 mod 60) so the seconds marker sweeps instead of
  stepping. That value can briefly disagree with the wall clock second.
- MANUAL: a stored time set by typing, the roulette, or set_random_time().
  Integer seconds only; nothing moves while paused on a manual time.

This module is engine-level; UI may call set_manual_time/set_live, but it does
not depend on UI.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import random as _random
import time as _time

LIVE = "LIVE"
MANUAL = "MANUAL"
MODES = (LIVE, MANUAL)


@dataclass(frozen=True)
class TimeValue:
    hour: int
    minute: int
    second: float   # fractional only when LIVE

    @property
    def seconds_float(self) -> float:
        return float(self.second)

    @property
    def minute_float(self) -> float:
        return float(self.minute) + self.seconds_float / 60.0

    @property
    def hour12_float(self) -> float:
        return float(int(self.hour) % 12) + self.minute_float / 60.0

    def formatted(self) -> str:
        return f"{int(self.hour):02d}:{int(self.minute):02d}:{int(self.second):02d}"


def clamp_int(v, lo: int, hi: int) -> int:
    """Truncate toward zero, then clamp into [lo, hi]."""
    try:
        i = int(v)
    except (TypeError, ValueError, OverflowError):
        i = lo
    return max(lo, min(hi, i))


def monotonic_ms() -> float:
    return _time.perf_counter() * 1000.0


class TimeSourceV1:
    def __init__(self, *, rng: Optional[_random.Random] = None, manual: Optional[TimeValue] = None):
        self.mode = LIVE
        self.rng = rng if rng is not None else _random.Random()
        self.manual = manual if manual is not None else TimeValue(12, 0, 0)
        # wall clock integer time of the last LIVE resolve, for display
        self._wall = TimeValue(0, 0, 0)

    @property
    def is_live(self) -> bool:
        return self.mode == LIVE

    def set_live(self) -> None:
        self.mode = LIVE

    def set_manual_time(self, h, m, s) -> TimeValue:
        self.manual = TimeValue(clamp_int(h, 0, 23), clamp_int(m, 0, 59), clamp_int(s, 0, 59))
        self.mode = MANUAL
        return self.manual

    def set_random_time(self) -> TimeValue:
        return self.set_manual_time(
            self.rng.randrange(0, 24),
            self.rng.randrange(0, 60),
            self.rng.randrange(0, 60),
        )

    def resolve(self, now_wall: Optional[datetime] = None, now_ms: Optional[float] = None) -> TimeValue:
        """Current time value for this frame."""
        if self.mode == MANUAL:
            return self.manual

        if now_wall is None:
            now_wall = datetime.now()
        if now_ms is None:
            now_ms = monotonic_ms()

        self._wall = TimeValue(int(now_wall.hour), int(now_wall.minute), int(now_wall.second))
        frac = (float(now_ms) / 1000.0) % 60.0
        return TimeValue(int(now_wall.hour), int(now_wall.minute), frac)

    def display_value(self) -> TimeValue:
        """Integer time shown in the controls box."""
        return self.manual if self.mode == MANUAL else self._wall
