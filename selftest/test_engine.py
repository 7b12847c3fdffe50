"""Selftests for preview.engine / preview.headless

Run:
  python -m selftest.test_engine
"""

from datetime import datetime
from pathlib import Path
import json
import tempfile

from app import log_buffer
from app.input_controller import phase_select, roulette_toggle, time_entry_char, time_entry_toggle
from app.help_texts import controls_lines
from preview.engine import ClockEngine
from preview.headless import DEFAULT_WALL, frame_digest_fields, run_and_write, run_headless
from preview.sim_clock import FrameClock
from runtime.phase_scheduler_v1 import TRI

VP = (1080, 1460)


def _quiet():
    log_buffer.set_echo(False)


def test_first_frame_live():
    _quiet()
    eng = ClockEngine(seed=3)
    fs = eng.tick(0.0, VP, now_ms=125_500.0, now_wall=datetime(2025, 6, 1, 14, 30, 10))
    assert fs.frame == 1
    assert fs.time_mode == "LIVE"
    assert (fs.time.hour, fs.time.minute) == (14, 30)
    assert abs(fs.time.second - 5.5) < 1e-9
    assert fs.shown_time == "14:30:10"
    assert (fs.geo_alpha, fs.tri_alpha) == (255, 0)
    assert fs.roulette.label == "OFF" and fs.phase.label == "AUTO"
    assert fs.transform.scale == 1.0
    assert fs.overlay.day_text == "day 1 of 30"
    assert fs.ascii_top == [] and fs.ascii_bottom == []
    assert abs(sum(fs.angles) - 180.0) < 1e-3


def test_phase_advances_with_elapsed_ms():
    _quiet()
    eng = ClockEngine(seed=3)
    eng.tick(0.0, VP, now_ms=0.0, now_wall=DEFAULT_WALL)
    fs = eng.tick(6000.0, VP, now_ms=6000.0, now_wall=DEFAULT_WALL)
    assert fs.tri_alpha == 255 and fs.geo_alpha == 0
    assert fs.phase.negative
    assert len(fs.ascii_top) == 102 and len(fs.ascii_bottom) == 102
    # negative elapsed never rewinds
    fs = eng.tick(-500.0, VP, now_ms=6010.0, now_wall=DEFAULT_WALL)
    assert abs(fs.phase.cycle_time - 6.0) < 1e-9


def test_roulette_event_forces_manual():
    _quiet()
    eng = ClockEngine(seed=3)
    eng.tick(0.0, VP, [time_entry_toggle(), time_entry_char("1")], now_ms=0.0, now_wall=DEFAULT_WALL)
    assert eng.entry.active
    fs = eng.tick(16.0, VP, [roulette_toggle()], now_ms=16.0, now_wall=DEFAULT_WALL)
    assert fs.time_mode == "MANUAL"
    assert fs.roulette.label == "ON"
    assert fs.roulette.ticks == 1
    assert not fs.typing


def test_roulette_brakes_to_a_stop():
    _quiet()
    eng = ClockEngine(seed=3)
    now = 0.0
    eng.tick(0.0, VP, [roulette_toggle()], now_ms=now, now_wall=DEFAULT_WALL)
    for _ in range(10):
        now += 16.0
        eng.tick(16.0, VP, now_ms=now, now_wall=DEFAULT_WALL)
    eng.tick(16.0, VP, [roulette_toggle()], now_ms=now + 16.0, now_wall=DEFAULT_WALL)
    now += 16.0
    fs = None
    for _ in range(2000):
        now += 16.0
        fs = eng.tick(16.0, VP, now_ms=now, now_wall=DEFAULT_WALL)
        if fs.roulette.label == "OFF":
            break
    assert fs is not None and fs.roulette.label == "OFF"
    assert fs.time_mode == "MANUAL"


def test_same_seed_same_frames():
    _quiet()
    a = ClockEngine(seed=11)
    b = ClockEngine(seed=11)
    evs = {3: [roulette_toggle()], 40: [roulette_toggle()], 70: [phase_select(TRI)]}
    now = 0.0
    for i in range(120):
        fa = a.tick(33.0, VP, evs.get(i), now_ms=now, now_wall=DEFAULT_WALL)
        fb = b.tick(33.0, VP, evs.get(i), now_ms=now, now_wall=DEFAULT_WALL)
        assert frame_digest_fields(fa) == frame_digest_fields(fb)
        assert fa.ascii_top == fb.ascii_top
        now += 33.0


def test_headless_hash_stable():
    _quiet()
    h1 = run_headless(frames=45, fps=30)
    h2 = run_headless(frames=45, fps=30)
    assert h1 == h2 and len(h1) == 64
    h3 = run_headless(frames=45, fps=30, events={5: [phase_select(TRI)]})
    assert h3 != h1
    with tempfile.TemporaryDirectory() as td:
        p = Path(td) / "headless.json"
        res = run_and_write(p, frames=10)
        data = json.loads(p.read_text(encoding="utf-8"))
        assert data["sha256"] == res.sha256 and data["frames"] == 10


def test_frame_clock():
    fc = FrameClock()
    assert fc.step_to(1000.0) == 0.0
    assert fc.step_to(1016.5) == 16.5
    assert fc.step_to(900.0) == 0.0
    assert fc.step_to(950.0) == 50.0
    assert fc.frame == 4 and fc.now_ms == 950.0
    fc.reset()
    assert fc.step_to(5.0) == 0.0


def test_controls_lines_follow_frame():
    _quiet()
    eng = ClockEngine(seed=3)
    fs = eng.tick(0.0, VP, [time_entry_toggle(), time_entry_char("9")], now_ms=0.0, now_wall=DEFAULT_WALL)
    lines = controls_lines(fs)
    assert lines[0] == "Controls"
    assert "Roulette: OFF" in lines and "Phase:    AUTO" in lines
    assert any(ln.startswith("INPUT: 9") for ln in lines)
    assert lines[2] == "Time:     LIVE   [09:26:53]"


def test_key_presses_in_one_frame():
    _quiet()
    eng = ClockEngine(seed=3)
    fs = eng.tick(0.0, VP, keys=[("T", None), ("1", None), ("2", None)], now_ms=0.0, now_wall=DEFAULT_WALL)
    assert fs.typing and fs.typing_buffer == "12"
    assert fs.phase.label == "AUTO"
    fs = eng.tick(16.0, VP, keys=[(":", None), ("0", None), ("5", None), ("\r", "enter")],
                  now_ms=16.0, now_wall=DEFAULT_WALL)
    assert not fs.typing
    assert fs.time_mode == "MANUAL" and fs.shown_time == "12:05:00"


def test_compute_leaves_clocks_alone():
    _quiet()
    eng = ClockEngine(seed=3)
    eng.tick(2000.0, VP, now_ms=2000.0, now_wall=DEFAULT_WALL)
    cycle = eng.phase.cycle_time
    later = datetime(2025, 3, 14, 9, 27, 1)
    fs = eng.compute(VP, now_ms=9000.0, now_wall=later)
    assert eng.phase.cycle_time == cycle and fs.frame == 1
    assert eng.roulette.state == "off"
    # a LIVE resolve records the wall time it was given
    assert fs.shown_time == "09:27:01"


def main():
    test_first_frame_live()
    test_phase_advances_with_elapsed_ms()
    test_roulette_event_forces_manual()
    test_roulette_brakes_to_a_stop()
    test_same_seed_same_frames()
    test_headless_hash_stable()
    test_frame_clock()
    test_controls_lines_follow_frame()
    test_key_presses_in_one_frame()
    test_compute_leaves_clocks_alone()
    print("OK: engine selftests passed")


if __name__ == "__main__":
    main()
