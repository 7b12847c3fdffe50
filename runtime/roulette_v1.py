from __future__ import annotations

"""Time roulette (roulette V1).

A three-state machine that keeps throwing random times at a time source:

    OFF --toggle--> SPIN --toggle--> BRAKE --toggle--> OFF
                                       |
                                       +--interval >= SLOW_STOP--> OFF

SPIN ticks every FAST ms. BRAKE multiplies the interval by BRAKE_MULT on every
tick until it crosses SLOW_STOP. Scheduling is a comparison against absolute
millisecond timestamps evaluated once per frame; nothing here blocks.
"""

from dataclasses import dataclass
from typing import Callable, Optional

OFF = "off"
SPIN = "spin"
BRAKE = "brake"
STATES = (OFF, SPIN, BRAKE)

ROULETTE_FAST = 90.0        # ms
ROULETTE_SLOW_STOP = 950.0  # ms
ROULETTE_BRAKE_MULT = 1.18

_LABELS = {OFF: "OFF", SPIN: "ON", BRAKE: "BRAKE"}


@dataclass
class RouletteSnapshot:
    state: str
    interval_ms: float
    next_tick_at: Optional[float]
    ticks: int

    @property
    def label(self) -> str:
        return _LABELS.get(self.state, "OFF")

    @property
    def active(self) -> bool:
        return self.state != OFF


class RouletteController:
    """Randomised time generator with spin and brake phases.

    `on_tick` is called on every due tick (normally TimeSource.set_random_time).
    `on_start` runs when the roulette leaves OFF (cancel typing, force MANUAL).
    """

    def __init__(
        self,
        on_tick: Callable[[], None],
        *,
        on_start: Optional[Callable[[], None]] = None,
        fast_ms: float = ROULETTE_FAST,
        slow_stop_ms: float = ROULETTE_SLOW_STOP,
        brake_mult: float = ROULETTE_BRAKE_MULT,
    ):
        self.on_tick = on_tick
        self.on_start = on_start
        self.fast_ms = float(fast_ms)
        self.slow_stop_ms = float(slow_stop_ms)
        self.brake_mult = float(brake_mult) if float(brake_mult) > 1.0 else ROULETTE_BRAKE_MULT

        self.state = OFF
        self.interval_ms = self.fast_ms
        self.next_tick_at: Optional[float] = None
        self.ticks = 0

    @property
    def active(self) -> bool:
        return self.state != OFF

    def start(self, now_ms: float) -> None:
        if self.on_start is not None:
            self.on_start()
        self.state = SPIN
        self.interval_ms = self.fast_ms
        self.next_tick_at = float(now_ms)

    def begin_brake(self, now_ms: float) -> None:
        self.state = BRAKE
        self.next_tick_at = float(now_ms) + self.interval_ms

    def stop(self) -> None:
        self.state = OFF
        self.next_tick_at = None

    def toggle(self, now_ms: float) -> str:
        """Advance OFF -> SPIN -> BRAKE -> OFF. Returns the new state."""
        if self.state == OFF:
            self.start(now_ms)
        elif self.state == SPIN:
            self.begin_brake(now_ms)
        else:
            # emergency stop while braking
            self.stop()
        return self.state

    def step(self, now_ms: float) -> bool:
        """Fire at most one due tick. Returns True when a tick fired."""
        if self.state == OFF or self.next_tick_at is None:
            return False
        now = float(now_ms)
        if now < self.next_tick_at:
            return False

        self.on_tick()
        self.ticks += 1

        if self.state == SPIN:
            self.interval_ms = self.fast_ms
            self.next_tick_at = now + self.interval_ms
        elif self.state == BRAKE:
            self.interval_ms *= self.brake_mult
            self.next_tick_at = now + self.interval_ms
            if self.interval_ms >= self.slow_stop_ms:
                self.stop()
        return True

    def snapshot(self) -> RouletteSnapshot:
        return RouletteSnapshot(
            state=str(self.state),
            interval_ms=float(self.interval_ms),
            next_tick_at=None if self.next_tick_at is None else float(self.next_tick_at),
            ticks=int(self.ticks),
        )
