from __future__ import annotations
"""Overlay derivations.

Everything the renderer needs beyond markers and alphas, still as plain data:
day text, the triangle-phase "calculating time…" typewriter and loading bar,
the Y-windowed grid band, the two decorative digit blocks and the screen-space
anchors for the controls and info boxes.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence, Tuple
import math
import random as _random

from preview.viewport import DESIGN_H, DESIGN_W, Transform

# Decorative digit blocks (design coords)
ASCII_PX = 14
ASCII_COLS = 20
ASCII_ROWS = 10

GRID_SIZE = 28
GRID_MARGIN = 70

INFO_BOX_X = 170.0
INFO_BOX_Y = 70.0
INFO_BOX_W = 100.0
INFO_BOX_H = 260.0

DAY_TEXT_POS = (735.0, -180.0)

CALC_TEXT = "calculating time…"
CALC_POS = (310.0, 200.0)
CALC_GAP_Y = 18.0
CALC_ROWS = 3
LOADING_POS = (310.0, 265.0)
LOADING_BOXES = 4

TRI_START = 1.5   # cycle time where the triangle content takes over

ASCII_MASK: Tuple[Tuple[int, ...], ...] = (
    (1,) * 20,
    (0,) * 20,
    (1,) * 20,
    (0,) * 20,
    (1,) * 20,
    (1,) + (0,) * 18 + (1,),
    (1,) * 20,
    (0,) * 20,
    (1,) * 20,
    (0,) * 20,
)


def days_in_month(year: int, month: int) -> int:
    dm = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
    leap = (year % 4 == 0 and year % 100 != 0) or (year % 400 == 0)
    if leap:
        dm[1] = 29
    return dm[int(month) - 1]


def day_text(today: Optional[date] = None) -> str:
    d = today or date.today()
    return f"day {d.day} of {days_in_month(d.year, d.month)}"


def _lerp(v: float, a0: float, a1: float, b0: float, b1: float) -> float:
    if a1 == a0:
        return b0
    return b0 + (b1 - b0) * ((v - a0) / (a1 - a0))


@dataclass
class CalcText:
    text: str
    alpha: float   # already scaled by tri alpha
    rows: int = CALC_ROWS


def calculating_text(cycle_time: float, frame: int, tri_alpha: int, full: str = CALC_TEXT) -> CalcText:
    """Typewriter in, blink, typewriter out, then blank."""
    n = len(full)
    p = float(cycle_time) - TRI_START
    if p < 2.0:
        letters = int(math.floor(_lerp(p, 0.0, 2.0, 1.0, n)))
        msg, alpha = full[:max(0, letters)], 255.0
    elif p < 7.0:
        blink = math.sin(frame * 0.15)
        msg, alpha = full, _lerp(blink, -1.0, 1.0, 60.0, 255.0)
    elif p < 9.0:
        f = _lerp(p, 7.0, 9.0, 1.0, 0.0)
        letters = int(math.floor(_lerp(f, 0.0, 1.0, 1.0, n)))
        msg, alpha = full[:max(0, letters)], 255.0
    else:
        msg, alpha = "", 0.0
    return CalcText(text=msg, alpha=alpha * (tri_alpha / 255.0))


def loading_filled(cycle_time: float) -> int:
    p = max(0.0, min(8.0, float(cycle_time) - TRI_START))
    return int(math.floor(p / 2.0))


@dataclass(frozen=True)
class GridBand:
    x0: float
    x1: float
    y0: float
    y1: float
    size: int = GRID_SIZE

    def xs(self) -> List[float]:
        out = []
        x = self.x0
        while x <= self.x1:
            out.append(x)
            x += self.size
        return out

    def ys(self) -> List[float]:
        out = []
        y = self.y0
        while y <= self.y1:
            out.append(y)
            y += self.size
        return out


def top_ascii_origin() -> Tuple[float, float]:
    # right edge aligned with the seconds ellipse (cx 620 + 130)
    return (620.0 + 130.0 - ASCII_COLS * ASCII_PX, INFO_BOX_Y - 150.0)


def bottom_ascii_origin() -> Tuple[float, float]:
    return (INFO_BOX_X, DESIGN_H / 2.0 - (ASCII_ROWS * ASCII_PX) / 2.0)


def grid_band() -> GridBand:
    top_bottom = top_ascii_origin()[1] + ASCII_ROWS * ASCII_PX
    bottom_top = bottom_ascii_origin()[1]
    return GridBand(
        x0=float(GRID_MARGIN),
        x1=DESIGN_W - GRID_MARGIN,
        y0=max(float(GRID_MARGIN), top_bottom),
        y1=min(DESIGN_H - GRID_MARGIN, bottom_top),
    )


def ascii_digits(rng: _random.Random, mask: Sequence[Sequence[int]] = ASCII_MASK) -> List[Tuple[int, int, int]]:
    """(row, col, digit) for every set cell of the mask."""
    out = []
    for r, row in enumerate(mask):
        for c, on in enumerate(row):
            if on:
                out.append((r, c, rng.randrange(0, 10)))
    return out


@dataclass
class BoxAnchors:
    controls_x: float
    controls_y: float
    controls_max_w: float
    info_right: float
    info_top: float
    info_h: float


def box_anchors(tr: Transform, viewport_w: float, min_w: float = 240.0, right_margin: float = 24.0) -> BoxAnchors:
    """Screen-space anchors: controls box starts at the grid's right/top edge,
    info box ends at the grid's left edge and reaches down to the bottom digit block."""
    gx_right, gy_top = tr.design_to_screen(DESIGN_W - GRID_MARGIN, GRID_MARGIN)
    gx_left, _ = tr.design_to_screen(GRID_MARGIN, GRID_MARGIN)
    _, y_bottom = tr.design_to_screen(0.0, bottom_ascii_origin()[1])
    return BoxAnchors(
        controls_x=gx_right,
        controls_y=gy_top,
        controls_max_w=max(min_w, float(viewport_w) - gx_right - right_margin),
        info_right=gx_left,
        info_top=gy_top,
        info_h=max(140.0, y_bottom - gy_top),
    )


def caret_visible(now_ms: float) -> bool:
    return (math.sin(float(now_ms) * 0.012) + 1.0) * 0.5 > 0.5


@dataclass
class OverlayState:
    day_text: str
    calc: CalcText
    loading_filled: int
    grid: GridBand
    anchors: BoxAnchors
    caret: bool
    readout: List[Tuple[str, int, int]] = field(default_factory=list)


def point_readout(hour, minute, second) -> List[Tuple[str, int, int]]:
    return [
        ("Point (h)", int(math.floor(hour[0])), int(math.floor(hour[1]))),
        ("Point (min)", int(math.floor(minute[0])), int(math.floor(minute[1]))),
        ("Point (sec)", int(math.floor(second[0])), int(math.floor(second[1]))),
    ]
