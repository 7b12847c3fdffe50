"""Build identity.

Read from BUILD_ID.txt next to the top-level packages; printed in the startup
banner, diagnostics and crash reports. No Qt imports here.
"""

from __future__ import annotations

from pathlib import Path


DEFAULT_BUILD_ID = "MATH_OF_TIME_DEV"
BUILD_FILE = "BUILD_ID.txt"


def find_root(start: Path) -> Path:
    """Nearest ancestor of *start* (max 6 levels) holding BUILD_ID.txt, else *start*."""
    start = Path(start).resolve()
    if start.is_file():
        start = start.parent
    for cur in [start, *start.parents][:6]:
        if (cur / BUILD_FILE).is_file():
            return cur
    return start


def get_build_id(start: Path) -> str:
    p = find_root(start) / BUILD_FILE
    try:
        txt = p.read_text(encoding="utf-8").strip()
    except OSError:
        return DEFAULT_BUILD_ID
    return txt or DEFAULT_BUILD_ID
