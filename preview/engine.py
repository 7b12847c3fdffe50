from __future__ import annotations
"""Clock engine.

One call per rendered frame:

    frame = engine.tick(elapsed_ms, (w, h), events, keys, now_ms=..., now_wall=...)

`events` are ready-made InputEvents; `keys` are raw (text, key) presses
mapped one by one against the typing state they meet.

Strict order inside a tick: input events -> key presses -> roulette ->
time source -> phase scheduler -> viewport transform -> geometry -> overlay.
The returned FrameState is plain data; renderers read it and never write
back.

All clocks are injectable so headless runs and tests replay exactly.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple
import random as _random

from app.input_controller import InputController, InputEvent
from app.log_buffer import log
from app.settings import Settings
from app.time_entry import TimeEntry
from preview import overlay as _overlay
from preview.time_source_v1 import TimeSourceV1, TimeValue, monotonic_ms
from preview.viewport import Transform, Viewport
from runtime.geometry_v1 import MarkersV1, compute_markers
from runtime.phase_scheduler_v1 import PhaseScheduler, PhaseState, make_windows_v1
from runtime.roulette_v1 import RouletteController, RouletteSnapshot


@dataclass
class FrameState:
    frame: int
    now_ms: float
    time: TimeValue
    time_mode: str
    shown_time: str
    phase: PhaseState
    roulette: RouletteSnapshot
    transform: Transform
    markers: MarkersV1
    typing: bool
    typing_buffer: str
    hint: bool
    overlay: _overlay.OverlayState
    ascii_top: List[Tuple[int, int, int]] = field(default_factory=list)
    ascii_bottom: List[Tuple[int, int, int]] = field(default_factory=list)

    @property
    def geo_alpha(self) -> int:
        return self.phase.geo_alpha

    @property
    def tri_alpha(self) -> int:
        return self.phase.tri_alpha

    @property
    def time_label(self) -> str:
        return self.time_mode

    @property
    def angles(self) -> Tuple[float, float, float]:
        return self.markers.angles


class ClockEngine:
    def __init__(self, settings: Optional[Settings] = None, *, seed: Optional[int] = None):
        self.settings = settings if settings is not None else Settings()
        s = self.settings.values

        if seed is None and int(s.get("rng_seed") or 0) > 0:
            seed = int(s["rng_seed"])
        self.rng = _random.Random(seed)
        self.deco_rng = _random.Random(None if seed is None else seed + 1)

        self.time_source = TimeSourceV1(rng=self.rng)
        self.phase = PhaseScheduler(make_windows_v1(self.settings.phases()))
        self.entry = TimeEntry()
        self.roulette = RouletteController(
            self.time_source.set_random_time,
            fast_ms=s["roulette_fast_ms"],
            slow_stop_ms=s["roulette_slow_stop_ms"],
            brake_mult=s["roulette_brake_mult"],
        )
        self.input = InputController(self.time_source, self.roulette, self.phase, self.entry)
        self.roulette.on_start = self.input.cancel_typing
        self.viewport = Viewport()
        self.frame = 0
        self.last: Optional[FrameState] = None

    def tick(
        self,
        elapsed_ms: float,
        viewport: Tuple[int, int],
        events: Optional[Iterable[InputEvent]] = None,
        keys: Optional[Iterable[Tuple[str, Optional[str]]]] = None,
        *,
        now_ms: Optional[float] = None,
        now_wall: Optional[datetime] = None,
    ) -> FrameState:
        now = monotonic_ms() if now_ms is None else float(now_ms)
        self.frame += 1

        self.input.handle_all(events, now)
        self.input.handle_keys(keys, now)
        if self.roulette.step(now) and not self.roulette.active:
            log("roulette stopped (brake)")
        self.phase.advance(max(0.0, float(elapsed_ms)) / 1000.0)

        self.last = self.compute(viewport, now_ms=now, now_wall=now_wall)
        return self.last

    def compute(self, viewport: Tuple[int, int], *, now_ms: float, now_wall: Optional[datetime] = None) -> FrameState:
        """Derive the frame from current state. Does not advance the phase clock,
        the roulette or the time RNG; it does draw decorative digits from
        deco_rng and lets a LIVE resolve record the wall-clock time shown in
        the controls box."""
        wall = now_wall if now_wall is not None else datetime.now()
        tv = self.time_source.resolve(wall, now_ms)
        ph = self.phase.state()
        tr = self.viewport.update(viewport[0], viewport[1])
        mk = compute_markers(tv.seconds_float, tv.minute_float, tv.hour12_float, float(now_ms) * 0.001)

        ov = _overlay.OverlayState(
            day_text=_overlay.day_text(wall.date() if isinstance(wall, datetime) else date.today()),
            calc=_overlay.calculating_text(ph.cycle_time, self.frame, ph.tri_alpha),
            loading_filled=_overlay.loading_filled(ph.cycle_time),
            grid=_overlay.grid_band(),
            anchors=_overlay.box_anchors(tr, self.viewport.w),
            caret=_overlay.caret_visible(now_ms),
            readout=_overlay.point_readout(mk.hour, mk.minute, mk.second),
        )
        top: List[Tuple[int, int, int]] = []
        bottom: List[Tuple[int, int, int]] = []
        if ph.tri_alpha > 0:
            bottom = _overlay.ascii_digits(self.deco_rng)
            top = _overlay.ascii_digits(self.deco_rng)

        return FrameState(
            frame=self.frame,
            now_ms=float(now_ms),
            time=tv,
            time_mode=self.time_source.mode,
            shown_time=self.time_source.display_value().formatted(),
            phase=ph,
            roulette=self.roulette.snapshot(),
            transform=tr,
            markers=mk,
            typing=self.entry.active,
            typing_buffer=self.entry.buffer,
            hint=self.entry.hint_visible(now_ms),
            overlay=ov,
            ascii_top=top,
            ascii_bottom=bottom,
        )
