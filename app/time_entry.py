from __future__ import annotations

"""Typed time entry.

The user types `H:M` or `H:M:S` (digits and colons only, at most 8 chars) and
submits. A failed submit keeps the buffer and restarts a short hint window.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import re

MAX_CHARS = 8
HINT_MS = 900.0
HINT_TEXT = "format: HH:MM or HH:MM:SS"
ALLOWED = set("0123456789:")

_FIELD_RE = re.compile(r"\s*([+-]?[0-9]+)")


def _parse_field(s: str) -> Optional[int]:
    # leading signed ASCII integer prefix ("05" -> 5, "7x" -> 7, "+5" -> 5)
    m = _FIELD_RE.match(s)
    if m is None:
        return None
    return int(m.group(1))


def parse_time_string(text: str) -> Optional[Tuple[int, int, int]]:
    """Parse `H:M[:S]`. Returns (h, m, s) or None when invalid or out of range."""
    if text is None:
        return None
    parts = str(text).strip().split(":")
    if len(parts) < 2 or len(parts) > 3:
        return None
    vals = [_parse_field(p) for p in parts]
    if any(v is None for v in vals):
        return None
    h, m = vals[0], vals[1]
    s = vals[2] if len(vals) == 3 else 0
    if not (0 <= h <= 23):
        return None
    if not (0 <= m <= 59):
        return None
    if not (0 <= s <= 59):
        return None
    return (h, m, s)


@dataclass
class TimeEntry:
    active: bool = False
    buffer: str = ""
    hint_stamp_ms: float = 0.0

    def open(self, now_ms: float) -> None:
        self.active = True
        self.buffer = ""
        self.hint_stamp_ms = float(now_ms)

    def close(self) -> None:
        self.active = False
        self.buffer = ""

    def cancel(self) -> None:
        self.close()
        self.hint_stamp_ms = 0.0

    def type_char(self, ch: str) -> bool:
        if ch not in ALLOWED or len(ch) != 1:
            return False
        if len(self.buffer) >= MAX_CHARS:
            return False
        self.buffer += ch
        return True

    def backspace(self) -> None:
        self.buffer = self.buffer[:-1]

    def submit(self, now_ms: float) -> Optional[Tuple[int, int, int]]:
        parsed = parse_time_string(self.buffer)
        if parsed is None:
            self.hint_stamp_ms = float(now_ms)
            return None
        self.close()
        return parsed

    def hint_visible(self, now_ms: float) -> bool:
        if not self.active or not self.buffer:
            return False
        if parse_time_string(self.buffer) is not None:
            return False
        return (float(now_ms) - self.hint_stamp_ms) < HINT_MS
