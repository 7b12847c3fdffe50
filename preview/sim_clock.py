from __future__ import annotations
"""Frame clock.

Turns incoming host timestamps (milliseconds from a monotonic counter) into
per-frame elapsed time for ClockEngine.tick. Also keeps the absolute timestamp
so roulette scheduling and the LIVE fractional second read the same clock.
"""


class FrameClock:
    def __init__(self, start_ms: float | None = None):
        self.now_ms = 0.0 if start_ms is None else float(start_ms)
        self._last_ms = None if start_ms is None else float(start_ms)
        self.frame = 0

    def reset(self):
        self.now_ms = 0.0
        self._last_ms = None
        self.frame = 0

    def step_to(self, t_ms: float) -> float:
        """Advance to timestamp t_ms. Returns elapsed ms since the previous call."""
        t_ms = float(t_ms)
        self.frame += 1
        if self._last_ms is None:
            self._last_ms = t_ms
            self.now_ms = t_ms
            return 0.0
        # Backwards time (clock swap, test reset): treat as a zero-length frame
        if t_ms < self._last_ms:
            self._last_ms = t_ms
            self.now_ms = t_ms
            return 0.0
        dt = t_ms - self._last_ms
        self._last_ms = t_ms
        self.now_ms = t_ms
        return dt
