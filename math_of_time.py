"""Math of Time launcher.

    python math_of_time.py

Prints the startup banner and opens the Qt window. A fatal error escaping the
window writes the same crash report as the Qt excepthook before re-raising.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from app.build_id import get_build_id
from app.crash_reporter import write_report
from app.log_buffer import log

ROOT = Path(__file__).resolve().parent


def report_fatal(exc: BaseException, outdir: Optional[Path] = None) -> Path:
    rp = write_report(type(exc), exc, exc.__traceback__, outdir=outdir)
    log(f"Crash report written: {rp}")
    return rp


def _run_qt() -> None:
    from qt.qt_app import run_qt

    run_qt()


def main(run: Optional[Callable[[], None]] = None, *, report_dir: Optional[Path] = None) -> None:
    log(f"startup run_root={ROOT} build_id={get_build_id(ROOT)}")
    try:
        (run or _run_qt)()
    except Exception as e:
        report_fatal(e, report_dir)
        raise


if __name__ == "__main__":
    main()
