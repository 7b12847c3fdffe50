from __future__ import annotations

from dataclasses import dataclass

# Design space
DESIGN_W = 1080.0
DESIGN_H = 1920.0

# Content bounds (design coords): day text on top, lowest drawn element at the bottom
CONTENT_TOP_BASE = -180.0
CONTENT_BOTTOM_BASE = 1120.0
CONTENT_PAD = 80.0   # symmetric => equal top/bottom margin

CONTENT_MIN_Y = CONTENT_TOP_BASE - CONTENT_PAD
CONTENT_MAX_Y = CONTENT_BOTTOM_BASE + CONTENT_PAD


@dataclass(frozen=True)
class Transform:
    scale: float
    offset_x: float
    offset_y: float
    content_min_y: float = CONTENT_MIN_Y

    @property
    def origin_x(self) -> float:
        return self.offset_x

    @property
    def origin_y(self) -> float:
        # logical y == content_min_y lands on the top of the centred band
        return self.offset_y - self.content_min_y * self.scale

    def design_to_screen(self, x, y):
        return (self.origin_x + x * self.scale, self.origin_y + y * self.scale)

    def screen_to_design(self, x, y):
        return ((x - self.origin_x) / self.scale, (y - self.origin_y) / self.scale)


class Viewport:
    """Letterboxes the fixed design canvas into the current drawable area.

    scale = min(w / design_w, h / content_h); uniform, aspect preserved.
    """

    def __init__(self, design_w: float = DESIGN_W, content_min_y: float = CONTENT_MIN_Y, content_max_y: float = CONTENT_MAX_Y):
        self.design_w = float(design_w)
        self.content_min_y = float(content_min_y)
        self.content_max_y = float(content_max_y)
        self.w = 1
        self.h = 1
        self.transform = self.compute(self.w, self.h)

    @property
    def content_h(self) -> float:
        return self.content_max_y - self.content_min_y

    def set_size(self, w, h):
        self.w = max(1, int(w))
        self.h = max(1, int(h))

    def compute(self, w, h) -> Transform:
        w = max(1.0, float(w))
        h = max(1.0, float(h))
        ch = self.content_h
        scale = min(w / self.design_w, h / ch)
        off_x = (w - self.design_w * scale) / 2.0
        off_y = (h - ch * scale) / 2.0
        return Transform(scale=scale, offset_x=off_x, offset_y=off_y, content_min_y=self.content_min_y)

    def update(self, w=None, h=None) -> Transform:
        """Recompute for this frame (optionally after a resize)."""
        if w is not None and h is not None:
            self.set_size(w, h)
        self.transform = self.compute(self.w, self.h)
        return self.transform
