from __future__ import annotations

"""Minimal selftest runner.

Repository sanity checks that should always pass, Qt or not: every package
compiles, and the headless pipeline produces the same hash twice and a
different one when an input event changes the outcome.

Run:
  python -m selftest.runner
"""

from pathlib import Path
import compileall


def _fail(msg: str) -> None:
    raise SystemExit("SELFTEST FAILED: " + msg)


PACKAGES = ("app", "preview", "runtime", "qt", "selftest")


def test_compileall() -> None:
    root = Path(__file__).resolve().parents[1]
    for name in PACKAGES:
        if not compileall.compile_dir(str(root / name), quiet=1):
            _fail(f"compileall failed: {name}")
    if not compileall.compile_file(str(root / "math_of_time.py"), quiet=1):
        _fail("compileall failed: math_of_time.py")


def test_headless_pipeline_lock() -> None:
    """Lock the tick order (input -> roulette -> phase -> geometry) on a fixed clock."""
    try:
        from app import log_buffer
        from app.input_controller import phase_select, roulette_toggle
        from preview.headless import run_headless
        from runtime.phase_scheduler_v1 import GEO
    except Exception as e:
        _fail("imports failed for headless pipeline lock: " + repr(e))

    log_buffer.set_echo(False)
    a = run_headless(frames=90, fps=30.0)
    b = run_headless(frames=90, fps=30.0)
    if a != b:
        _fail(f"headless hash not repeatable: {a} vs {b}")

    spun = run_headless(frames=90, fps=30.0, events={10: [roulette_toggle()]})
    if spun == a:
        _fail("roulette event did not change the headless hash")

    # GEO lock during the opening fade-out pins geo at 255
    held = run_headless(frames=20, fps=30.0, events={0: [phase_select(GEO)]})
    free = run_headless(frames=20, fps=30.0)
    if held == free:
        _fail("phase lock did not show up in the headless hash")


def main() -> None:
    test_compileall()
    test_headless_pipeline_lock()
    print("OK: selftest.runner passed.")


if __name__ == "__main__":
    main()
