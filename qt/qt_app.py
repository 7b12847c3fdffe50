"""Qt application."""

from __future__ import annotations

# Timeless UI title (versions belong in release tags/changelog, not runtime code).
APP_TITLE = "Math of Time"

import sys
from pathlib import Path

from PyQt6 import QtCore, QtGui, QtWidgets

from app import diagnostics
from app.build_id import get_build_id as _get_build_id
from app.input_controller import event_for_key
from app.log_buffer import log
from app.settings import Settings, load_settings
from preview.engine import ClockEngine
from preview.sim_clock import FrameClock
from preview.time_source_v1 import monotonic_ms
from qt.renderer import ClockRenderer

BUILD_ID = _get_build_id(Path(__file__).resolve().parents[1])


def _install_global_excepthook(app_name: str = "Math of Time"):
    """Write a crash report and show a fatal error dialog instead of silently closing."""
    from app.crash_reporter import write_report

    def _hook(exctype, value, tb):
        try:
            import traceback as _tb
            msg = "".join(_tb.format_exception(exctype, value, tb))
        except Exception:
            msg = f"{exctype.__name__}: {value}"
        try:
            sys.stderr.write(msg + "\n")
        except Exception:
            pass
        try:
            rp = write_report(exctype, value, tb)
            sys.stderr.write(f"[MathOfTime] Crash report written: {rp}\n")
        except Exception:
            pass
        # Best-effort UI dialog
        try:
            if QtWidgets.QApplication.instance() is not None:
                QtWidgets.QMessageBox.critical(
                    None,
                    f"{app_name} - Fatal Error",
                    "An unexpected error occurred.\n\n" + msg[-4000:],
                )
        except Exception:
            pass

    sys.excepthook = _hook


_NAMED_KEYS = {
    QtCore.Qt.Key.Key_Return.value: "enter",
    QtCore.Qt.Key.Key_Enter.value: "enter",
    QtCore.Qt.Key.Key_Escape.value: "escape",
    QtCore.Qt.Key.Key_Backspace.value: "backspace",
    QtCore.Qt.Key.Key_Space.value: "space",
}


class ClockWindow(QtWidgets.QWidget):
    """Hosts the engine: one tick per timer shot, keys queued between ticks."""

    def __init__(self, settings: Settings | None = None):
        super().__init__()
        self.settings = settings if settings is not None else Settings()
        s = self.settings.values

        self.engine = ClockEngine(self.settings)
        self.renderer = ClockRenderer(negative_fx=s["negative_fx"], show_info_box=s["show_info_box"])
        self.clock = FrameClock()
        self._pending = []
        self._frame = None

        self.setWindowTitle(APP_TITLE)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(480, 360)
        self.resize(int(s["window_w"]), int(s["window_h"]))

        self._timer = QtCore.QTimer(self)
        self._timer.setTimerType(QtCore.Qt.TimerType.PreciseTimer)
        self._timer.setInterval(max(1, int(1000 / int(s["fps"]))))
        self._timer.timeout.connect(self._on_tick)
        self._timer.start()

    def _on_tick(self):
        now = monotonic_ms()
        elapsed = self.clock.step_to(now)
        keys, self._pending = self._pending, []
        self._frame = self.engine.tick(elapsed, (self.width(), self.height()), keys=keys, now_ms=now)
        diagnostics.note_frame(self._frame)
        self.update()

    def keyPressEvent(self, e: QtGui.QKeyEvent):
        text, key = e.text(), _NAMED_KEYS.get(int(e.key()))
        # mapped at tick time; typing may open earlier in the same frame
        if event_for_key(text, key, typing=False) is None and event_for_key(text, key, typing=True) is None:
            super().keyPressEvent(e)
            return
        self._pending.append((text, key))
        e.accept()

    def paintEvent(self, e: QtGui.QPaintEvent):
        if self._frame is None:
            return
        p = QtGui.QPainter(self)
        try:
            self.renderer.paint(p, self._frame, self.width(), self.height())
        finally:
            p.end()


def run_qt(settings: Settings | None = None) -> None:
    if settings is None:
        settings, issues = load_settings()
        for it in issues:
            log(f"settings: {it.key}: {it.note}")
    app = QtWidgets.QApplication(sys.argv)
    _install_global_excepthook(APP_TITLE)
    win = ClockWindow(settings)
    win.show()
    log(f"started build={BUILD_ID} fps={settings.values['fps']}")
    app.exec()
