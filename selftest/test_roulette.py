"""Selftests for runtime.roulette_v1

Run:
  python -m selftest.test_roulette
"""

from runtime.roulette_v1 import BRAKE, OFF, SPIN, ROULETTE_FAST, ROULETTE_SLOW_STOP, RouletteController


def _counter():
    hits = []
    return hits, (lambda: hits.append(1))


def test_spin_interval_constant():
    hits, tick = _counter()
    rc = RouletteController(tick)
    assert rc.toggle(0.0) == SPIN
    assert rc.step(0.0)
    assert not rc.step(50.0)
    t = 0.0
    for _ in range(20):
        t = rc.next_tick_at
        assert rc.step(t)
        assert rc.interval_ms == ROULETTE_FAST
    assert len(hits) == 21
    assert rc.snapshot().label == "ON"


def test_brake_grows_then_stops():
    hits, tick = _counter()
    rc = RouletteController(tick)
    rc.toggle(0.0)
    rc.step(0.0)
    assert rc.toggle(10.0) == BRAKE
    assert rc.snapshot().label == "BRAKE"
    prev = rc.interval_ms
    for _ in range(100):
        if rc.state == OFF:
            break
        assert rc.step(rc.next_tick_at)
        assert rc.interval_ms > prev
        prev = rc.interval_ms
    assert rc.state == OFF
    assert rc.next_tick_at is None
    assert rc.interval_ms >= ROULETTE_SLOW_STOP
    # no ticks once stopped
    n = len(hits)
    assert not rc.step(1e9)
    assert len(hits) == n


def test_toggle_while_braking_stops():
    _, tick = _counter()
    rc = RouletteController(tick)
    rc.toggle(0.0)
    rc.toggle(1.0)
    assert rc.toggle(2.0) == OFF
    assert rc.next_tick_at is None
    assert not rc.snapshot().active


def test_on_start_called_only_when_leaving_off():
    calls = []
    rc = RouletteController(lambda: None, on_start=lambda: calls.append(1))
    rc.toggle(0.0)
    rc.toggle(1.0)
    rc.toggle(2.0)
    assert calls == [1]
    rc.toggle(3.0)
    assert calls == [1, 1]


def test_restart_resets_interval():
    rc = RouletteController(lambda: None)
    rc.toggle(0.0)
    rc.toggle(0.0)
    while rc.state != OFF:
        rc.step(rc.next_tick_at)
    rc.toggle(5000.0)
    assert rc.interval_ms == ROULETTE_FAST and rc.next_tick_at == 5000.0


def main():
    test_spin_interval_constant()
    test_brake_grows_then_stops()
    test_toggle_while_braking_stops()
    test_on_start_called_only_when_leaving_off()
    test_restart_resets_interval()
    print("OK: roulette selftests passed")


if __name__ == "__main__":
    main()
