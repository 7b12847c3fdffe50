"""Selftests for app.log_buffer / app.crash_reporter / app.diagnostics

Run:
  python -m selftest.test_crash_reporter
"""

from pathlib import Path
import json
import sys
import tempfile

from app import diagnostics, log_buffer
from app.build_id import DEFAULT_BUILD_ID, get_build_id
from app.crash_reporter import render_report, write_report
from preview.engine import ClockEngine
from preview.headless import DEFAULT_WALL
import math_of_time


def test_log_buffer_tail():
    log_buffer.set_echo(False)
    log_buffer.clear()
    log_buffer.log("hello")
    log_buffer.log("world")
    assert log_buffer.tail(1) == [f"{log_buffer.PREFIX} world\n"]
    assert len(log_buffer.tail(10)) == 2
    assert log_buffer.tail(0) == []


def test_build_id():
    root = Path(__file__).resolve().parents[1]
    assert get_build_id(root) == "MATH_OF_TIME_QT_1"
    with tempfile.TemporaryDirectory() as td:
        assert get_build_id(Path(td)) == DEFAULT_BUILD_ID


def test_diagnostics_include_last_frame():
    log_buffer.set_echo(False)
    eng = ClockEngine(seed=2)
    fs = eng.tick(0.0, (1080, 1460), now_ms=0.0, now_wall=DEFAULT_WALL)
    diagnostics.note_frame(fs)
    d = json.loads(diagnostics.as_text())
    assert d["last_frame"]["frame"] == 1
    assert d["last_frame"]["time_mode"] == "LIVE"
    assert d["build_id"] == "MATH_OF_TIME_QT_1"


def test_write_report():
    log_buffer.set_echo(False)
    log_buffer.clear()
    log_buffer.log("before the crash")
    try:
        1 / 0
    except ZeroDivisionError:
        exc_type, exc, tb = sys.exc_info()
    text = render_report(exc_type, exc, tb)
    assert text.startswith("MATH OF TIME CRASH REPORT")
    with tempfile.TemporaryDirectory() as td:
        p = write_report(exc_type, exc, tb, outdir=Path(td) / "reports")
        body = p.read_text(encoding="utf-8")
        assert "before the crash" in body
        assert "ZeroDivisionError" in body
        assert "--- diagnostics ---" in body


def test_launcher_fatal_path_writes_report():
    log_buffer.set_echo(False)
    log_buffer.clear()

    def boom():
        raise RuntimeError("window exploded")

    with tempfile.TemporaryDirectory() as td:
        outdir = Path(td) / "reports"
        try:
            math_of_time.main(boom, report_dir=outdir)
        except RuntimeError as e:
            assert str(e) == "window exploded"
        else:
            raise AssertionError("expected the fatal error to propagate")
        reports = list(outdir.glob("crash_*.txt"))
        assert len(reports) == 1
        body = reports[0].read_text(encoding="utf-8")
        assert "RuntimeError: window exploded" in body
        assert "startup run_root=" in body
        assert any("Crash report written: " in ln for ln in log_buffer.tail(5))


def test_launcher_clean_run_writes_nothing():
    log_buffer.set_echo(False)
    calls = []
    with tempfile.TemporaryDirectory() as td:
        outdir = Path(td) / "reports"
        math_of_time.main(lambda: calls.append(1), report_dir=outdir)
        assert calls == [1]
        assert not outdir.exists()


def main():
    test_log_buffer_tail()
    test_build_id()
    test_diagnostics_include_last_frame()
    test_write_report()
    test_launcher_fatal_path_writes_report()
    test_launcher_clean_run_writes_nothing()
    print("OK: crash_reporter selftests passed")


if __name__ == "__main__":
    main()
