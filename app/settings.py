from __future__ import annotations

"""Runtime settings.

All tweakable knobs live in SETTINGS (single source of truth), in the same
type/default/min/max shape as a parameter registry. A JSON file can override
any of them; everything else keeps its default.

Lookup order for the file:
  1) explicit path argument
  2) $MATH_OF_TIME_SETTINGS
  3) <root>/user_data/settings.json

Loading never raises for bad content. Problems come back as SettingsIssue
records and the offending keys keep their defaults.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import json
import os

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_PATH = ROOT / "user_data" / "settings.json"
ENV_VAR = "MATH_OF_TIME_SETTINGS"

SETTINGS: dict[str, dict] = {
    # Phase cycle (seconds)
    "phase_geo_fade_out": {"type": "float", "default": 1.5, "min": 0.0, "max": 60.0},
    "phase_tri_hold":     {"type": "float", "default": 10.0, "min": 0.0, "max": 600.0},
    "phase_tri_fade_out": {"type": "float", "default": 1.5, "min": 0.0, "max": 60.0},
    "phase_geo_fade_in":  {"type": "float", "default": 1.5, "min": 0.0, "max": 60.0},
    "phase_geo_hold":     {"type": "float", "default": 8.5, "min": 0.0, "max": 600.0},

    # Roulette (ms)
    "roulette_fast_ms":      {"type": "float", "default": 90.0, "min": 10.0, "max": 5000.0},
    "roulette_slow_stop_ms": {"type": "float", "default": 950.0, "min": 20.0, "max": 60000.0},
    "roulette_brake_mult":   {"type": "float", "default": 1.18, "min": 1.01, "max": 4.0},

    # Host
    "fps":           {"type": "int",  "default": 60, "min": 1, "max": 240},
    "window_w":      {"type": "int",  "default": 1180, "min": 320, "max": 16384},
    "window_h":      {"type": "int",  "default": 900, "min": 240, "max": 16384},
    "negative_fx":   {"type": "bool", "default": True},
    "show_info_box": {"type": "bool", "default": True},
    "rng_seed":      {"type": "int",  "default": 0, "min": 0, "max": 2147483647},  # 0 = unseeded
}


@dataclass(frozen=True)
class SettingsIssue:
    key: str
    note: str


@dataclass
class Settings:
    values: Dict[str, Any] = field(default_factory=lambda: defaults())

    def __getattr__(self, name: str) -> Any:
        vals = self.__dict__.get("values") or {}
        if name in vals:
            return vals[name]
        raise AttributeError(name)

    def phases(self) -> List[Tuple[str, float, Tuple[int, int], Tuple[int, int]]]:
        """Default phase ramps with durations taken from the phase_* keys."""
        from runtime.phase_scheduler_v1 import DEFAULT_PHASES

        return [
            (name, float(self.values.get("phase_" + name, dur)), geo, tri)
            for name, dur, geo, tri in DEFAULT_PHASES
        ]


def defaults() -> Dict[str, Any]:
    return {k: entry.get("default") for k, entry in SETTINGS.items()}


def coerce(key: str, value: Any) -> Tuple[Any, Optional[str]]:
    """Clamp/convert a value for `key`. Returns (value, note_or_None)."""
    entry = SETTINGS[key]
    kind = entry.get("type")
    try:
        if kind == "bool":
            if isinstance(value, bool):
                return value, None
            if isinstance(value, (int, float)):
                return bool(value), None
            if isinstance(value, str) and value.strip().lower() in ("true", "false", "1", "0", "yes", "no"):
                return value.strip().lower() in ("true", "1", "yes"), None
            return entry["default"], f"not a bool: {value!r}"
        if isinstance(value, bool):
            return entry["default"], f"not a number: {value!r}"
        v = int(value) if kind == "int" else float(value)
    except (TypeError, ValueError, OverflowError):
        return entry["default"], f"not a number: {value!r}"
    if v != v:  # NaN
        return entry["default"], "NaN"
    lo = entry.get("min")
    hi = entry.get("max")
    note = None
    if lo is not None and v < lo:
        v, note = type(v)(lo), f"clamped to min {lo}"
    if hi is not None and v > hi:
        v, note = type(v)(hi), f"clamped to max {hi}"
    return v, note


def settings_from_dict(data: Any) -> Tuple[Settings, List[SettingsIssue]]:
    issues: List[SettingsIssue] = []
    vals = defaults()
    if not isinstance(data, dict):
        issues.append(SettingsIssue("<root>", f"expected an object, got {type(data).__name__}"))
        return Settings(vals), issues
    for k, raw in data.items():
        if k not in SETTINGS:
            issues.append(SettingsIssue(str(k), "unknown key ignored"))
            continue
        v, note = coerce(k, raw)
        vals[k] = v
        if note:
            issues.append(SettingsIssue(k, note))
    return Settings(vals), issues


def resolve_path(path: Optional[Path] = None) -> Path:
    if path is not None:
        return Path(path)
    env = os.environ.get(ENV_VAR, "").strip()
    if env:
        return Path(env)
    return DEFAULT_PATH


def load_settings(path: Optional[Path] = None) -> Tuple[Settings, List[SettingsIssue]]:
    p = resolve_path(path)
    if not p.exists():
        return Settings(defaults()), []
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        return Settings(defaults()), [SettingsIssue("<file>", f"{p}: {e}")]
    return settings_from_dict(data)


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    p = resolve_path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(settings.values, indent=2, sort_keys=True), encoding="utf-8")
    return p
