from __future__ import annotations

"""Polyline arclength primitive (polyline V1).

Walks an ordered list of vertices by distance. Used for the hour marker and
for the twelve hour labels on the deforming hour shape, but nothing here knows
about clocks.

    edges = polyline_edges(pts, closed=True)
    x, y = point_at_arclength(pts, 0.25 * perimeter(pts), closed=True)
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple
import math

Point = Tuple[float, float]


@dataclass(frozen=True)
class EdgeV1:
    a: Point
    b: Point
    length: float
    start: float   # cumulative distance at a

    @property
    def end(self) -> float:
        return self.start + self.length


def lerp_point(a: Point, b: Point, f: float) -> Point:
    return (a[0] + (b[0] - a[0]) * f, a[1] + (b[1] - a[1]) * f)


def polyline_edges(points: Sequence[Point], closed: bool = True) -> List[EdgeV1]:
    """Ordered edges with cumulative start distances."""
    n = len(points)
    if n < 2:
        return []
    count = n if closed else n - 1
    out: List[EdgeV1] = []
    travelled = 0.0
    for i in range(count):
        a = (float(points[i][0]), float(points[i][1]))
        j = (i + 1) % n
        b = (float(points[j][0]), float(points[j][1]))
        d = math.hypot(b[0] - a[0], b[1] - a[1])
        out.append(EdgeV1(a=a, b=b, length=d, start=travelled))
        travelled += d
    return out


def perimeter(points: Sequence[Point], closed: bool = True) -> float:
    return sum(e.length for e in polyline_edges(points, closed=closed))


def _point_on_edges(edges: Sequence[EdgeV1], distance: float) -> Point:
    for e in edges:
        if distance <= e.end:
            if e.length <= 0.0:
                return e.a
            return lerp_point(e.a, e.b, (distance - e.start) / e.length)
    # past the end (float overshoot): stay on the last vertex
    return edges[-1].b


def point_at_arclength(points: Sequence[Point], distance: float, closed: bool = True) -> Point:
    """Point located `distance` along the polyline from its first vertex.

    Closed polylines wrap the distance modulo the perimeter; open polylines
    clamp it to [0, length]. Zero-length edges are skipped over.
    """
    edges = polyline_edges(points, closed=closed)
    if not edges:
        if points:
            return (float(points[0][0]), float(points[0][1]))
        return (0.0, 0.0)
    total = edges[-1].end
    d = float(distance)
    if total <= 0.0:
        return edges[0].a
    if closed:
        if d < 0.0 or d > total:
            d = d % total
    else:
        d = max(0.0, min(total, d))
    return _point_on_edges(edges, d)


def points_at_fractions(points: Sequence[Point], count: int, closed: bool = True) -> List[Point]:
    """`count` points evenly spaced by arclength, the first at vertex 0."""
    edges = polyline_edges(points, closed=closed)
    if count <= 0 or not edges:
        return []
    total = edges[-1].end
    step = total / float(count) if closed else total / float(max(1, count - 1))
    return [_point_on_edges(edges, i * step) if total > 0.0 else edges[0].a for i in range(count)]
