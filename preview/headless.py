from __future__ import annotations
"""Headless clock runner for regression tests.

Runs the clock engine without any Qt, on a fixed clock and viewport, and
produces a stable hash of the logical frame state (alphas, markers, angles,
transform, status strings). Decorative digits and wall-clock day text are left
out of the hash.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple
import hashlib
import json

from app.input_controller import InputEvent
from preview.engine import ClockEngine, FrameState

DEFAULT_WALL = datetime(2025, 3, 14, 9, 26, 53)


def frame_digest_fields(fs: FrameState) -> dict:
    mk = fs.markers
    tr = fs.transform
    return {
        "time": [fs.time.hour, fs.time.minute, round(fs.time.second, 6)],
        "mode": fs.time_mode,
        "geo": fs.geo_alpha,
        "tri": fs.tri_alpha,
        "phase": fs.phase.label,
        "roulette": fs.roulette.label,
        "h": [round(mk.hour[0], 4), round(mk.hour[1], 4)],
        "m": [round(mk.minute[0], 4), round(mk.minute[1], 4)],
        "s": [round(mk.second[0], 4), round(mk.second[1], 4)],
        "angles": [round(a, 4) for a in mk.angles],
        "transform": [round(tr.scale, 6), round(tr.offset_x, 4), round(tr.offset_y, 4)],
        "typing": [fs.typing, fs.typing_buffer],
    }


def run_headless(
    frames: int = 60,
    fps: float = 30.0,
    viewport: Tuple[int, int] = (1080, 1460),
    *,
    events: Optional[Dict[int, Iterable[InputEvent]]] = None,
    seed: int = 1,
    wall: datetime = DEFAULT_WALL,
    start_ms: float = 0.0,
) -> str:
    """sha256 over `frames` ticks. `events` maps frame index -> events for that frame."""
    eng = ClockEngine(seed=seed)
    dt = 1000.0 / max(1.0, float(fps))
    h = hashlib.sha256()
    now = float(start_ms)
    for i in range(int(frames)):
        fs = eng.tick(dt if i else 0.0, viewport, (events or {}).get(i), now_ms=now, now_wall=wall)
        h.update(json.dumps(frame_digest_fields(fs), sort_keys=True).encode("utf-8"))
        now += dt
    return h.hexdigest()


@dataclass
class HeadlessResult:
    sha256: str
    frames: int
    fps: float


def run_and_write(out_json: Path, frames: int = 60, fps: float = 30.0) -> HeadlessResult:
    sha = run_headless(frames=frames, fps=fps)
    res = HeadlessResult(sha256=sha, frames=int(frames), fps=float(fps))
    Path(out_json).write_text(json.dumps(res.__dict__, indent=2), encoding="utf-8")
    return res
