from __future__ import annotations

from .polyline_v1 import EdgeV1, perimeter, point_at_arclength, points_at_fractions, polyline_edges
from .geometry_v1 import (
    HourLabelV1,
    MarkersV1,
    OscillatorsV1,
    TickV1,
    angle_at_point,
    compute_markers,
    triangle_angles,
)
from .roulette_v1 import RouletteController, RouletteSnapshot
from .phase_scheduler_v1 import PhaseScheduler, PhaseState, PhaseWindowV1, alphas_at, make_windows_v1
