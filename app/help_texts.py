from __future__ import annotations

from app.time_entry import HINT_TEXT

CONTROLS = [
    "T   type time (HH:MM or HH:MM:SS)",
    "    Enter apply",
    "Z   toggle roulette (slow brake)",
    "R   reset to live",
    "Space  auto/manual phase",
    "1 geo   2 triangle   3 auto",
]

INFO = {
    "title": "MATH OF TIME",
    "paras": [
        "MATH OF TIME is an alternative clock system that visualizes the hidden mathematics behind everyday time perception.",
        "Instead of showing fixed numbers, it translates real time into shifting geometry, movement, rhythm, and sound. "
        "Each moment generates its own geometric configuration, with a constantly transforming triangle forming a unique signature of the present.",
        "Programmed in Processing and expanded through an audiovisual composition, the work explores how time, though mathematical "
        "and measurable, becomes deeply personal through perception, attention, and experience.",
    ],
    "highlight": "Each moment generates its own geometric configuration.",
    "meta": [
        ("YEAR", "2025"),
        ("SUPERVISION", "PROF. NINA JURIC"),
        ("PROGRAMM", "PROCESSING"),
    ],
}


def controls_lines(frame) -> list[str]:
    """Raw (unwrapped) lines for the controls box of one FrameState."""
    lines = [
        "Controls",
        "",
        f"Time:     {frame.time_label}   [{frame.shown_time}]",
        f"Phase:    {frame.phase.label}",
        f"Roulette: {frame.roulette.label}",
        "",
    ]
    lines.extend(CONTROLS)
    if frame.typing:
        lines.append("")
        caret = "_" if frame.overlay.caret else " "
        lines.append(f"INPUT: {frame.typing_buffer}{caret}")
        if frame.hint:
            lines.append(HINT_TEXT)
    return lines


def split_highlight(para: str, highlight: str) -> list[tuple[str, bool]]:
    """Split a paragraph around its highlighted sentence -> [(text, bold)]."""
    idx = para.find(highlight)
    if idx < 0:
        return [(para, False)]
    out = []
    before = para[:idx].strip()
    after = para[idx + len(highlight):].strip()
    if before:
        out.append((before, False))
    out.append((highlight, True))
    if after:
        out.append((after, False))
    return out
