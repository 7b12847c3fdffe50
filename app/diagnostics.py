from __future__ import annotations
import sys, platform, json
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Last frame seen by the host; set by the Qt window each tick.
_last_frame = None

def note_frame(frame) -> None:
    global _last_frame
    _last_frame = frame

def frame_summary(frame) -> dict:
    if frame is None:
        return {}
    try:
        mk = frame.markers
        return {
            "frame": frame.frame,
            "time": frame.time.formatted(),
            "time_mode": frame.time_mode,
            "phase": frame.phase.label,
            "cycle_time": round(frame.phase.cycle_time, 3),
            "alphas": [frame.geo_alpha, frame.tri_alpha],
            "roulette": frame.roulette.label,
            "typing": frame.typing,
            "markers": {
                "hour": [round(mk.hour[0], 2), round(mk.hour[1], 2)],
                "minute": [round(mk.minute[0], 2), round(mk.minute[1], 2)],
                "second": [round(mk.second[0], 2), round(mk.second[1], 2)],
            },
            "angles": [round(a, 2) for a in mk.angles],
            "transform": [frame.transform.scale, frame.transform.offset_x, frame.transform.offset_y],
        }
    except Exception as e:
        return {"error": repr(e)}

def gather() -> dict:
    try:
        from app.build_id import get_build_id
        build = get_build_id(ROOT)
    except Exception:
        build = "(unknown)"
    return {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "project_root": str(ROOT),
        "build_id": build,
        "last_frame": frame_summary(_last_frame),
    }

def as_text() -> str:
    d = gather()
    return json.dumps(d, indent=2)
