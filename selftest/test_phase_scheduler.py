"""Selftests for runtime.phase_scheduler_v1

Run:
  python -m selftest.test_phase_scheduler
"""

from runtime.phase_scheduler_v1 import (
    AUTO,
    GEO,
    TRI,
    PhaseScheduler,
    alphas_at,
    cycle_length,
    make_windows_v1,
    window_at,
)


def test_default_cycle_is_23s():
    ws = make_windows_v1()
    assert [w.name for w in ws] == ["geo_fade_out", "tri_hold", "tri_fade_out", "geo_fade_in", "geo_hold"]
    assert cycle_length(ws) == 23.0


def test_alpha_table():
    assert alphas_at(0.0) == (255, 0)
    assert alphas_at(0.75) == (127, 0)
    assert alphas_at(1.5) == (0, 255)
    assert alphas_at(6.0) == (0, 255)
    assert alphas_at(12.25) == (0, 127)
    assert alphas_at(13.75) == (127, 0)
    assert alphas_at(20.0) == (255, 0)
    assert alphas_at(22.999) == (255, 0)


def test_alphas_bounded_and_continuous_within_windows():
    ws = make_windows_v1()
    prev = None
    for i in range(2300):
        t = i * 0.01
        g, tr = alphas_at(t)
        name = window_at(ws, t).name
        assert 0 <= g <= 255 and 0 <= tr <= 255
        if prev is not None and prev[2] == name:
            # 10 ms steps over a 1.5 s ramp move well under 3 units
            assert abs(g - prev[0]) <= 3 and abs(tr - prev[1]) <= 3, t
        prev = (g, tr, name)


def test_advance_wraps():
    ps = PhaseScheduler()
    st = ps.advance(29.0)
    assert abs(st.cycle_time - 6.0) < 1e-9
    assert (st.geo_alpha, st.tri_alpha) == (0, 255)
    assert st.window == "tri_hold"
    # negative dt is ignored
    ps.advance(-5.0)
    assert abs(ps.cycle_time - 6.0) < 1e-9


def test_lock_pins_alphas_while_clock_runs():
    ps = PhaseScheduler()
    ps.select(GEO)
    st = ps.advance(29.0)
    assert (st.geo_alpha, st.tri_alpha) == (255, 0)
    assert st.manual and st.label == "MANUAL (GEO)"
    ps.select(TRI)
    st = ps.state()
    assert (st.geo_alpha, st.tri_alpha) == (0, 255)
    assert st.negative
    # release jumps straight to where the live cycle is
    ps.select(AUTO)
    st = ps.state()
    assert not st.manual and st.label == "AUTO"
    assert (st.geo_alpha, st.tri_alpha) == alphas_at(6.0)


def test_toggle_manual():
    ps = PhaseScheduler()
    ps.toggle_manual()
    assert ps.manual_enabled and ps.mode == GEO
    ps.toggle_manual()
    assert not ps.manual_enabled and ps.mode == AUTO


def test_lock_without_pinned_mode_falls_back():
    ps = PhaseScheduler()
    ps.manual_enabled = True
    st = ps.state()
    assert not st.manual


def test_unknown_mode_rejected():
    ps = PhaseScheduler()
    try:
        ps.select("sideways")
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError")


def test_custom_windows():
    ws = make_windows_v1([("a", 1.0, (255, 255), (0, 0)), ("b", 1.0, (0, 0), (255, 255))])
    ps = PhaseScheduler(ws)
    assert ps.length == 2.0
    st = ps.advance(1.5)
    assert (st.geo_alpha, st.tri_alpha) == (0, 255)


def main():
    test_default_cycle_is_23s()
    test_alpha_table()
    test_alphas_bounded_and_continuous_within_windows()
    test_advance_wraps()
    test_lock_pins_alphas_while_clock_runs()
    test_toggle_manual()
    test_lock_without_pinned_mode_falls_back()
    test_unknown_mode_rejected()
    test_custom_windows()
    print("OK: phase_scheduler selftests passed")


if __name__ == "__main__":
    main()
