from __future__ import annotations
import sys, time, traceback
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
REPORT_DIR = ROOT / "out" / "crash_reports"

def _now_stamp() -> str:
    return time.strftime("%Y%m%d_%H%M%S", time.localtime())

def render_report(exc_type, exc, tb) -> str:
    # diagnostics (best effort: includes the last frame state)
    try:
        from app.diagnostics import as_text as _diag
        diag = _diag()
    except Exception:
        diag = "(diagnostics unavailable)\n"

    try:
        from app.log_buffer import tail
        log_tail = "".join(tail(250))
    except Exception:
        log_tail = "(log unavailable)\n"

    trace = "".join(traceback.format_exception(exc_type, exc, tb))
    return (
        "MATH OF TIME CRASH REPORT\n"
        f"timestamp={_now_stamp()}\n"
        f"argv={sys.argv}\n"
        "\n--- diagnostics ---\n"
        + diag +
        "\n--- recent log ---\n"
        + log_tail +
        "\n--- traceback ---\n"
        + trace
    )

def write_report(exc_type, exc, tb, outdir: Path | None = None) -> Path:
    outdir = Path(outdir) if outdir is not None else REPORT_DIR
    outdir.mkdir(parents=True, exist_ok=True)
    p = outdir / f"crash_{_now_stamp()}.txt"
    p.write_text(render_report(exc_type, exc, tb), encoding="utf-8", errors="ignore")
    return p

