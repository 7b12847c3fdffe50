from __future__ import annotations

"""QPainter renderer.

Draws one FrameState. Reads only; all state lives in the engine.

Layering:
  design space (scaled, letterboxed): grid, hour shape, dial, ruler, triangle,
      angles, point readout, triangle-phase digits/typewriter/loading bar,
      day text
  negative pass: inverted copy of the frame at tri alpha
  screen space: controls box (right of grid), info box (left of grid)
"""

import math

from PyQt6 import QtCore, QtGui

from app.help_texts import INFO, controls_lines, split_highlight
from preview import overlay as ov
from runtime import geometry_v1 as geo

BG = 245
MARKER = QtGui.QColor(10, 40, 160)
TRIANGLE = QtGui.QColor(200, 0, 0, 76)

MONO = "monospace"
SANS = "Helvetica"

_AL = QtCore.Qt.AlignmentFlag
_BIG = 4000.0


def _c(v: int, a: float) -> QtGui.QColor:
    return QtGui.QColor(v, v, v, max(0, min(255, int(a))))


def _pen(p: QtGui.QPainter, color: QtGui.QColor | None, width: float = 1.0) -> None:
    if color is None:
        p.setPen(QtCore.Qt.PenStyle.NoPen)
        return
    pen = QtGui.QPen(color)
    pen.setWidthF(width)
    p.setPen(pen)


def _font(p: QtGui.QPainter, family: str, size: float, bold: bool = False) -> None:
    f = QtGui.QFont(family)
    f.setPointSizeF(max(1.0, size))
    f.setBold(bold)
    if family == MONO:
        f.setStyleHint(QtGui.QFont.StyleHint.Monospace)
    p.setFont(f)


def _text(p: QtGui.QPainter, x: float, y: float, s: str, h: str = "center", v: str = "center") -> None:
    """Draw s anchored at (x, y) with horizontal/vertical anchor alignment."""
    if h == "left":
        rx, ha = x, _AL.AlignLeft
    elif h == "right":
        rx, ha = x - _BIG, _AL.AlignRight
    else:
        rx, ha = x - _BIG / 2, _AL.AlignHCenter
    if v == "top":
        ry, va = y, _AL.AlignTop
    elif v == "bottom":
        ry, va = y - _BIG, _AL.AlignBottom
    else:
        ry, va = y - _BIG / 2, _AL.AlignVCenter
    p.drawText(QtCore.QRectF(rx, ry, _BIG, _BIG), ha | va, s)


def _dot(p: QtGui.QPainter, pt, d: float) -> None:
    _pen(p, None)
    p.setBrush(MARKER)
    p.drawEllipse(QtCore.QPointF(pt[0], pt[1]), d / 2.0, d / 2.0)
    p.setBrush(QtCore.Qt.BrushStyle.NoBrush)


def wrap_lines(fm: QtGui.QFontMetricsF, text: str, width: float) -> list[str]:
    if not text:
        return [""]
    if fm.horizontalAdvance(text) <= width:
        return [text]
    out: list[str] = []
    cur = ""
    for w in text.split(" "):
        test = f"{cur} {w}" if cur else w
        if fm.horizontalAdvance(test) <= width:
            cur = test
        else:
            if cur:
                out.append(cur)
            cur = w
    if cur:
        out.append(cur)
    return out


class ClockRenderer:
    def __init__(self, *, negative_fx: bool = True, show_info_box: bool = True):
        self.negative_fx = bool(negative_fx)
        self.show_info_box = bool(show_info_box)
        self.controls_w = 330.0

    # ---- entry ----

    def paint(self, p: QtGui.QPainter, frame, w: int, h: int) -> None:
        img = QtGui.QImage(max(1, w), max(1, h), QtGui.QImage.Format.Format_ARGB32_Premultiplied)
        img.fill(QtGui.QColor(BG, BG, BG))
        ip = QtGui.QPainter(img)
        try:
            ip.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
            self.draw_design(ip, frame)
        finally:
            ip.end()

        p.drawImage(0, 0, img)
        if frame.tri_alpha > 0 and self.negative_fx:
            neg = img.copy()
            neg.invertPixels()
            p.setOpacity(frame.tri_alpha / 255.0)
            p.drawImage(0, 0, neg)
            p.setOpacity(1.0)

        p.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        self.draw_controls_box(p, frame, w)
        if self.show_info_box:
            self.draw_info_box(p, frame)

    # ---- design space ----

    def draw_design(self, p: QtGui.QPainter, frame) -> None:
        tr = frame.transform
        p.save()
        p.translate(tr.origin_x, tr.origin_y)
        p.scale(tr.scale, tr.scale)

        ga = frame.geo_alpha
        ta = frame.tri_alpha
        if ta > 0:
            self._grid(p, frame.overlay.grid, ta)
        self._hour_shape(p, frame, ga)
        self._dial(p, frame, ga)
        self._ruler(p, frame, ga)
        self._triangle(p, frame)
        self._readout(p, frame)
        if ta > 0:
            self._tri_content(p, frame, ta)

        _font(p, MONO, 12)
        _pen(p, _c(0, 255))
        _text(p, ov.DAY_TEXT_POS[0], ov.DAY_TEXT_POS[1], frame.overlay.day_text, "right", "center")
        p.restore()

    def _grid(self, p, band, ta: int) -> None:
        _pen(p, _c(0, 18 * (ta / 255.0)), 1.0)
        for x in band.xs():
            p.drawLine(QtCore.QLineF(x, band.y0, x, band.y1))
        for y in band.ys():
            p.drawLine(QtCore.QLineF(band.x0, y, band.x1, y))

    def _hour_shape(self, p, frame, ga: int) -> None:
        mk = frame.markers
        _pen(p, _c(0, 85 * (ga / 255.0)), 1.8)
        p.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        p.drawPolygon(QtGui.QPolygonF([QtCore.QPointF(x, y) for x, y in mk.hour_shape]))

        for lab in mk.hour_labels:
            if lab.active:
                _font(p, MONO, 26)
                _pen(p, _c(0, ga))
            else:
                _font(p, SANS, 13)
                _pen(p, _c(0, 140 * (ga / 255.0)))
            _text(p, lab.pos[0], lab.pos[1], str(lab.label))
        _dot(p, mk.hour, 18)

    def _dial(self, p, frame, ga: int) -> None:
        cx, cy = geo.SEC_CENTER
        _pen(p, _c(0, 90 * (ga / 255.0)), 1.4)
        p.drawEllipse(QtCore.QPointF(cx, cy), geo.SEC_RX, geo.SEC_RY)
        _font(p, SANS, 10)
        for t in geo.dial_ticks():
            _pen(p, _c(0, 70 * (ga / 255.0)), 1.4)
            p.drawLine(QtCore.QLineF(t.inner[0], t.inner[1], t.outer[0], t.outer[1]))
            if t.major:
                _pen(p, _c(0, 130 * (ga / 255.0)))
                p.save()
                p.translate(t.label_pos[0], t.label_pos[1])
                p.rotate(math.degrees(t.angle + math.pi / 2.0))
                _text(p, 0.0, 0.0, f"{t.index:02d}")
                p.restore()
        _dot(p, frame.markers.second, 8)

    def _ruler(self, p, frame, ga: int) -> None:
        _pen(p, _c(0, 100 * (ga / 255.0)), 1.4)
        p.drawLine(QtCore.QLineF(geo.RULER_X, geo.RULER_TOP, geo.RULER_X, geo.RULER_BOTTOM))
        _font(p, SANS, 10)
        for t in geo.ruler_ticks():
            _pen(p, _c(0, 70 * (ga / 255.0)), 1.4)
            p.drawLine(QtCore.QLineF(t.inner[0], t.inner[1], t.outer[0], t.outer[1]))
            if t.major:
                _pen(p, _c(0, 140 * (ga / 255.0)))
                _text(p, t.label_pos[0], t.label_pos[1], f"{t.index:02d}", "right", "center")
        _dot(p, frame.markers.minute, 13)

    def _triangle(self, p, frame) -> None:
        mk = frame.markers
        h, s, m = mk.hour, mk.second, mk.minute
        _pen(p, TRIANGLE, 1.8)
        p.drawLine(QtCore.QLineF(h[0], h[1], s[0], s[1]))
        p.drawLine(QtCore.QLineF(s[0], s[1], m[0], m[1]))
        p.drawLine(QtCore.QLineF(m[0], m[1], h[0], h[1]))

        _font(p, MONO, 10)
        _pen(p, _c(0, 255))
        _text(p, h[0], h[1] + 18, f"{mk.angle_hour:.1f}°", "center", "top")
        _text(p, m[0], m[1] + 18, f"{mk.angle_minute:.1f}°", "center", "top")
        _text(p, s[0], s[1] - 12, f"{mk.angle_second:.1f}°", "center", "bottom")

    def _readout(self, p, frame) -> None:
        _pen(p, _c(0, 255), 1.2)
        p.drawRect(QtCore.QRectF(ov.INFO_BOX_X, ov.INFO_BOX_Y, ov.INFO_BOX_W, ov.INFO_BOX_H))
        _font(p, MONO, 10)
        tx = ov.INFO_BOX_X + 25
        ty = ov.INFO_BOX_Y + 25
        for i, (title, x, y) in enumerate(frame.overlay.readout):
            base = ty + i * 80
            _text(p, tx, base, title, "left", "top")
            _text(p, tx, base + 20, f"X: {x}", "left", "top")
            _text(p, tx, base + 40, f"Y: {y}", "left", "top")

    def _tri_content(self, p, frame, ta: int) -> None:
        _font(p, MONO, ov.ASCII_PX * 0.9)
        _pen(p, _c(0, ta))
        for (ox, oy), cells in ((ov.bottom_ascii_origin(), frame.ascii_bottom), (ov.top_ascii_origin(), frame.ascii_top)):
            for r, c, d in cells:
                _text(p, ox + c * ov.ASCII_PX, oy + r * ov.ASCII_PX, str(d), "left", "top")

        calc = frame.overlay.calc
        _font(p, MONO, 12)
        _pen(p, _c(0, calc.alpha))
        bx, by = ov.CALC_POS
        for i in range(calc.rows):
            _text(p, bx, by + ov.CALC_GAP_Y * i, calc.text, "left", "center")

        full_w = QtGui.QFontMetricsF(p.font()).horizontalAdvance(ov.CALC_TEXT)
        box_w = full_w / float(ov.LOADING_BOXES)
        lx, ly = ov.LOADING_POS
        for i in range(ov.LOADING_BOXES):
            rect = QtCore.QRectF(lx + i * box_w, ly, box_w - 2.0, 10.0)
            if i < frame.overlay.loading_filled:
                p.fillRect(rect, _c(0, ta))
            _pen(p, _c(0, 180 * (ta / 255.0)), 1.0)
            p.drawRect(rect)

    # ---- screen space ----

    def _box_colors(self, frame):
        neg = frame.tri_alpha > 0 and self.negative_fx
        fg = 255 if neg else 0
        return fg, (210 if neg else 190), (150 if neg else 140)

    def draw_controls_box(self, p: QtGui.QPainter, frame, w: int) -> None:
        fg, fg_a, stroke_a = self._box_colors(frame)
        anc = frame.overlay.anchors
        pad, lh = 18.0, 16.0
        _font(p, MONO, 12)
        fm = QtGui.QFontMetricsF(p.font())

        wrap_w = anc.controls_max_w - pad * 2
        lines: list[str] = []
        for raw in controls_lines(frame):
            lines.extend(wrap_lines(fm, raw, wrap_w) if raw else [""])

        desired = 240.0
        for ln in lines:
            desired = max(desired, fm.horizontalAdvance(ln) + pad * 2)
        box_w = min(desired, anc.controls_max_w)
        box_h = pad * 2 + len(lines) * lh
        self.controls_w = box_w

        _pen(p, _c(fg, stroke_a), 1.0)
        p.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        p.drawRect(QtCore.QRectF(anc.controls_x, anc.controls_y, box_w, box_h))
        _pen(p, _c(fg, fg_a))
        for i, ln in enumerate(lines):
            _text(p, anc.controls_x + pad, anc.controls_y + pad + i * lh, ln, "left", "top")

    def draw_info_box(self, p: QtGui.QPainter, frame) -> None:
        fg, fg_a, stroke_a = self._box_colors(frame)
        anc = frame.overlay.anchors
        pad, lh = 18.0, 16.0
        box_w = self.controls_w
        box_h = anc.info_h
        x = anc.info_right - box_w
        y = anc.info_top

        _pen(p, _c(fg, stroke_a), 1.0)
        p.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        p.drawRect(QtCore.QRectF(x, y, box_w, box_h))

        meta = INFO["meta"]
        meta_step = lh * 1.5
        meta_y = y + box_h - pad - len(meta) * meta_step
        body_bottom = meta_y - 22.0
        wrap_w = box_w - pad * 2

        _pen(p, _c(fg, fg_a))
        cursor = y + pad

        def block(text: str, bold: bool) -> None:
            nonlocal cursor
            _font(p, MONO, 12, bold)
            fm = QtGui.QFontMetricsF(p.font())
            for ln in wrap_lines(fm, text, wrap_w):
                if cursor + lh > body_bottom:
                    break
                _text(p, x + pad, cursor, ln, "left", "top")
                cursor += lh

        block(INFO["title"], True)
        cursor += lh
        for i, para in enumerate(INFO["paras"]):
            if i:
                cursor += lh
            for part, bold in split_highlight(para, INFO["highlight"]):
                block(part, bold)

        _font(p, MONO, 12, True)
        for i, (k, v) in enumerate(meta):
            ry = meta_y + i * meta_step
            _text(p, x + pad, ry, k, "left", "top")
            _text(p, x + box_w * 0.5, ry, v, "left", "top")
