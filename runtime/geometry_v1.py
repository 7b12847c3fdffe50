from __future__ import annotations

"""Clock geometry (geometry V1).

Maps a time value onto the three clock instruments in logical (design)
coordinates:

- hour shape: a quadrilateral deformed by three slow oscillators; the hour
  marker sits at an arclength proportional to the 12h value
- minute ruler: a fixed vertical segment
- seconds dial: a fixed ellipse, 12 o'clock = 0 s

and measures the triangle spanned by the three markers.

Pure functions only; callers pass the oscillator time `t` explicitly so frames
can be replayed.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
import math

from runtime.polyline_v1 import Point, lerp_point, perimeter, point_at_arclength, points_at_fractions

# Layout (design coords)
HOUR_CENTER: Point = (450.0, 620.0)
HOUR_TILT_DEG = -8.0
HOUR_SIZE_BASE = 180.0

RULER_X = 735.0
RULER_TOP = 140.0
RULER_BOTTOM = 740.0

SEC_CENTER: Point = (620.0, 420.0)
SEC_RX = 130.0   # 260 wide
SEC_RY = 260.0   # 520 tall

LABEL_TOLERANCE = 0.5


@dataclass(frozen=True)
class OscillatorsV1:
    tri: float
    kite: float
    rect: float


@dataclass(frozen=True)
class HourLabelV1:
    label: int
    pos: Point         # logical space
    local: Point       # hour-shape local space
    active: bool


@dataclass(frozen=True)
class TickV1:
    index: int
    inner: Point
    outer: Point
    major: bool
    label_pos: Point
    angle: float = 0.0


@dataclass
class MarkersV1:
    hour: Point
    minute: Point
    second: Point
    angle_hour: float
    angle_minute: float
    angle_second: float
    hour_local: Point = (0.0, 0.0)
    hour_shape: List[Point] = field(default_factory=list)         # logical space
    hour_shape_local: List[Point] = field(default_factory=list)
    hour_labels: List[HourLabelV1] = field(default_factory=list)
    perimeter: float = 0.0

    @property
    def angles(self) -> Tuple[float, float, float]:
        return (self.angle_hour, self.angle_minute, self.angle_second)

    @property
    def triangle(self) -> Tuple[Point, Point, Point]:
        return (self.hour, self.second, self.minute)


def oscillators(t: float) -> OscillatorsV1:
    t = float(t)
    return OscillatorsV1(
        tri=(math.sin(t * 0.5) + 1.0) * 0.5,
        kite=(math.sin(t * 0.8 + math.pi / 3.0) + 1.0) * 0.5,
        rect=(math.sin(t * 0.6 + math.pi / 5.0) + 1.0) * 0.5,
    )


def hour_shape_local(t: float, size: float = HOUR_SIZE_BASE) -> List[Point]:
    """Four vertices of the hour shape around its own centre, edge ordered."""
    osc = oscillators(t)
    s = float(size)
    pts = [[-s, -s], [s, -s], [s, s], [-s, s]]

    for i in range(4):
        if i % 2 == 0:
            pts[i][0] *= 1.0 + osc.rect * 0.3
        else:
            pts[i][1] *= 1.0 + osc.rect * 0.2

    pts[0][0] -= osc.kite * 50.0
    pts[2][0] += osc.kite * 50.0
    pts[1][1] -= osc.kite * 30.0
    pts[3][1] += osc.kite * 30.0

    # collapse the top edge toward its midpoint -> triangle silhouette
    mid = lerp_point((pts[0][0], pts[0][1]), (pts[1][0], pts[1][1]), 0.5)
    f = osc.tri * 0.9
    for i in (0, 1):
        x, y = lerp_point((pts[i][0], pts[i][1]), mid, f)
        pts[i][0], pts[i][1] = x, y

    return [(p[0], p[1]) for p in pts]


def local_to_logical(p: Point, center: Point = HOUR_CENTER, tilt_deg: float = HOUR_TILT_DEG) -> Point:
    r = math.radians(tilt_deg)
    cr = math.cos(r)
    sr = math.sin(r)
    return (center[0] + cr * p[0] - sr * p[1], center[1] + sr * p[0] + cr * p[1])


def hour_marker_local(shape: Sequence[Point], hour12: float) -> Point:
    per = perimeter(shape)
    return point_at_arclength(shape, ((float(hour12) % 12.0) / 12.0) * per)


def hour_labels(shape: Sequence[Point], hour12: float) -> List[HourLabelV1]:
    h = float(hour12) % 12.0
    out: List[HourLabelV1] = []
    for i, local in enumerate(points_at_fractions(shape, 12)):
        disp = 12 if i == 0 else i
        out.append(HourLabelV1(
            label=disp,
            pos=local_to_logical(local),
            local=local,
            active=abs(h - disp) < LABEL_TOLERANCE,
        ))
    return out


def minute_marker(minute_float: float, x: float = RULER_X, top: float = RULER_TOP, bottom: float = RULER_BOTTOM) -> Point:
    f = (float(minute_float) % 60.0) / 60.0
    return (float(x), top + (bottom - top) * f)


def second_angle(seconds_float: float) -> float:
    return 2.0 * math.pi * (float(seconds_float) / 60.0) - math.pi / 2.0


def second_marker(seconds_float: float, center: Point = SEC_CENTER, rx: float = SEC_RX, ry: float = SEC_RY) -> Point:
    a = second_angle(seconds_float)
    return (center[0] + math.cos(a) * rx, center[1] + math.sin(a) * ry)


def angle_at_point(p: Point, a: Point, b: Point) -> float:
    """Angle in degrees at `p` between the rays p->a and p->b.

    Coincident points give 0.
    """
    v1x, v1y = a[0] - p[0], a[1] - p[1]
    v2x, v2y = b[0] - p[0], b[1] - p[1]
    m1 = math.hypot(v1x, v1y)
    m2 = math.hypot(v2x, v2y)
    if m1 == 0.0 or m2 == 0.0:
        return 0.0
    dot = (v1x / m1) * (v2x / m2) + (v1y / m1) * (v2y / m2)
    dot = max(-1.0, min(1.0, dot))
    return math.degrees(math.acos(dot))


def triangle_angles(h: Point, m: Point, s: Point) -> Tuple[float, float, float]:
    return (
        angle_at_point(h, s, m),
        angle_at_point(m, h, s),
        angle_at_point(s, h, m),
    )


def ruler_ticks(x: float = RULER_X, top: float = RULER_TOP, bottom: float = RULER_BOTTOM) -> List[TickV1]:
    out: List[TickV1] = []
    for i in range(60):
        y = top + (bottom - top) * (i / 59.0)
        major = (i % 5 == 0)
        ln = 14.0 if major else 7.0
        out.append(TickV1(index=i, inner=(x - ln, y), outer=(x, y), major=major, label_pos=(x - 18.0, y)))
    return out


def dial_ticks(center: Point = SEC_CENTER, rx: float = SEC_RX, ry: float = SEC_RY) -> List[TickV1]:
    out: List[TickV1] = []
    cx, cy = center
    for i in range(60):
        a = 2.0 * math.pi * (i / 60.0) - math.pi / 2.0
        major = (i % 5 == 0)
        inset = 14.0 if major else 7.0
        ca, sa = math.cos(a), math.sin(a)
        out.append(TickV1(
            index=i,
            inner=(cx + ca * (rx - inset), cy + sa * (ry - inset)),
            outer=(cx + ca * rx, cy + sa * ry),
            major=major,
            label_pos=(cx + ca * (rx + 18.0), cy + sa * (ry + 18.0)),
            angle=a,
        ))
    return out


def compute_markers(seconds_float: float, minute_float: float, hour12_float: float, t: float) -> MarkersV1:
    """Markers, angles and hour-shape geometry for one frame."""
    shape = hour_shape_local(t)
    hl = hour_marker_local(shape, hour12_float)
    h = local_to_logical(hl)
    m = minute_marker(minute_float)
    s = second_marker(seconds_float)
    ah, am, as_ = triangle_angles(h, m, s)
    return MarkersV1(
        hour=h,
        minute=m,
        second=s,
        angle_hour=ah,
        angle_minute=am,
        angle_second=as_,
        hour_local=hl,
        hour_shape=[local_to_logical(p) for p in shape],
        hour_shape_local=shape,
        hour_labels=hour_labels(shape, hour12_float),
        perimeter=perimeter(shape),
    )
