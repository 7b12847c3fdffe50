from __future__ import annotations

"""Phase scheduler (phase V1).

Cross-fades the two render modes over a fixed cycle. The cycle is described
as an ordered list of timed phases (like a looping timed phase machine), each
with start/end alpha for geometry and triangle content:

    geo_fade_out  1.5 s   geo 255 -> 0     tri 0
    tri_hold     10.0 s   geo 0            tri 255
    tri_fade_out  1.5 s   geo 0            tri 255 -> 0
    geo_fade_in   1.5 s   geo 0 -> 255     tri 0
    geo_hold      8.5 s   geo 255          tri 0

A manual lock pins the alphas (GEO or TRI) while the cycle clock keeps
running, so unlocking resumes wherever the live cycle is. The alpha jump on
unlock is expected.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import math

AUTO = "auto"
GEO = "geo"
TRI = "tri"
MODES = (AUTO, GEO, TRI)

ALPHA_MAX = 255


@dataclass(frozen=True)
class PhaseWindowV1:
    name: str
    start: float
    end: float
    geo: Tuple[int, int]   # (alpha at start, alpha at end)
    tri: Tuple[int, int]

    def fraction(self, cycle_time: float) -> float:
        span = self.end - self.start
        if span <= 0.0:
            return 0.0
        return (float(cycle_time) - self.start) / span


# (name, duration_s, geo ramp, tri ramp)
DEFAULT_PHASES: Sequence[Tuple[str, float, Tuple[int, int], Tuple[int, int]]] = (
    ("geo_fade_out", 1.5, (255, 0), (0, 0)),
    ("tri_hold", 10.0, (0, 0), (255, 255)),
    ("tri_fade_out", 1.5, (0, 0), (255, 0)),
    ("geo_fade_in", 1.5, (0, 255), (0, 0)),
    ("geo_hold", 8.5, (255, 255), (0, 0)),
)


def make_windows_v1(phases: Sequence[Tuple[str, float, Tuple[int, int], Tuple[int, int]]] = DEFAULT_PHASES) -> List[PhaseWindowV1]:
    """Lay phases end to end starting at 0."""
    out: List[PhaseWindowV1] = []
    t = 0.0
    for name, dur, geo, tri in phases:
        d = max(0.0, float(dur))
        out.append(PhaseWindowV1(name=str(name), start=t, end=t + d, geo=tuple(geo), tri=tuple(tri)))
        t += d
    return out


def cycle_length(windows: Sequence[PhaseWindowV1]) -> float:
    return windows[-1].end if windows else 0.0


def _ramp(a: int, b: int, f: float) -> int:
    if a == b:
        return int(a)
    return int(math.floor(a + (b - a) * f))


def window_at(windows: Sequence[PhaseWindowV1], cycle_time: float) -> PhaseWindowV1:
    for w in windows:
        if cycle_time < w.end:
            return w
    return windows[-1]


def alphas_at(cycle_time: float, windows: Optional[Sequence[PhaseWindowV1]] = None) -> Tuple[int, int]:
    """(geo_alpha, tri_alpha) for a position inside the cycle."""
    ws = windows if windows else _DEFAULT_WINDOWS
    w = window_at(ws, float(cycle_time))
    f = max(0.0, min(1.0, w.fraction(cycle_time)))
    return _ramp(w.geo[0], w.geo[1], f), _ramp(w.tri[0], w.tri[1], f)


_DEFAULT_WINDOWS = make_windows_v1()


@dataclass
class PhaseState:
    cycle_time: float
    window: str
    geo_alpha: int
    tri_alpha: int
    mode: str
    manual: bool

    @property
    def label(self) -> str:
        if self.manual:
            return f"MANUAL ({self.mode.upper()})"
        return "AUTO"

    @property
    def negative(self) -> bool:
        return self.tri_alpha > 0


class PhaseScheduler:
    def __init__(self, windows: Optional[Sequence[PhaseWindowV1]] = None):
        self.windows: List[PhaseWindowV1] = list(windows) if windows else list(_DEFAULT_WINDOWS)
        self.length = cycle_length(self.windows)
        self.accumulated = 0.0
        self.mode = AUTO
        self.manual_enabled = False

    @property
    def cycle_time(self) -> float:
        if self.length <= 0.0:
            return 0.0
        return self.accumulated % self.length

    # ---- lock control ----

    def select(self, mode: str) -> None:
        """GEO/TRI lock the alphas; AUTO releases the lock."""
        if mode not in MODES:
            raise ValueError(f"unknown phase mode: {mode!r}")
        if mode == AUTO:
            self.manual_enabled = False
            self.mode = AUTO
        else:
            self.manual_enabled = True
            self.mode = mode

    def toggle_manual(self) -> None:
        self.manual_enabled = not self.manual_enabled
        self.mode = GEO if self.manual_enabled else AUTO

    def reset_mode(self) -> None:
        self.manual_enabled = False
        self.mode = AUTO

    # ---- per frame ----

    def advance(self, dt_s: float) -> PhaseState:
        dt = float(dt_s)
        if dt > 0.0:
            self.accumulated += dt
        return self.state()

    def state(self) -> PhaseState:
        ct = self.cycle_time
        w = window_at(self.windows, ct)

        if self.manual_enabled and self.mode == AUTO:
            # a lock without a pinned mode means nothing to pin
            self.manual_enabled = False

        if not self.manual_enabled:
            geo, tri = alphas_at(ct, self.windows)
        elif self.mode == TRI:
            geo, tri = 0, ALPHA_MAX
        else:
            geo, tri = ALPHA_MAX, 0

        return PhaseState(
            cycle_time=ct,
            window=w.name,
            geo_alpha=int(geo),
            tri_alpha=int(tri),
            mode=str(self.mode),
            manual=bool(self.manual_enabled),
        )
