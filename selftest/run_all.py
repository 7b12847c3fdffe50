"""Run all selftests.

Usage:
  python -m selftest.run_all
"""

import importlib


TEST_MODULES = [
    'selftest.test_polyline',
    'selftest.test_geometry',
    'selftest.test_time_source',
    'selftest.test_time_entry',
    'selftest.test_roulette',
    'selftest.test_phase_scheduler',
    'selftest.test_viewport',
    'selftest.test_overlay',
    'selftest.test_input_controller',
    'selftest.test_settings',
    'selftest.test_engine',
    'selftest.test_crash_reporter',
]


def main():
    failures = []
    for modname in TEST_MODULES:
        try:
            m = importlib.import_module(modname)
            # If module provides main(), call it; else do nothing.
            if hasattr(m, "main") and callable(getattr(m, "main")):
                m.main()
        except Exception as e:
            failures.append((modname, e))

    if failures:
        print("\nFAILED:")
        for modname, e in failures:
            print(f"- {modname}: {e!r}")
        raise SystemExit(1)

    print("\nOK: all selftests passed")


if __name__ == "__main__":
    main()
