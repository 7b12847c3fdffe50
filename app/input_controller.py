from __future__ import annotations

"""Input dispatch.

Translates host events into state transitions on the time source, roulette and
phase scheduler. Typing and an active roulette are mutually exclusive:
starting either cancels the other.

Events are plain (kind, value) records so hosts (Qt window, headless runs,
tests) can feed the same stream.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from app.log_buffer import log
from app.time_entry import TimeEntry
from preview.time_source_v1 import MANUAL, TimeSourceV1
from runtime.phase_scheduler_v1 import AUTO, GEO, TRI, PhaseScheduler
from runtime.roulette_v1 import RouletteController

RESET = "reset"
ROULETTE_TOGGLE = "roulette_toggle"
PHASE_SELECT = "phase_select"
PHASE_AUTO_TOGGLE = "phase_auto_toggle"
TIME_ENTRY_TOGGLE = "time_entry_toggle"
TIME_ENTRY_CHAR = "time_entry_char"
KINDS = (RESET, ROULETTE_TOGGLE, PHASE_SELECT, PHASE_AUTO_TOGGLE, TIME_ENTRY_TOGGLE, TIME_ENTRY_CHAR)

# time_entry_char control values
BACKSPACE = "backspace"
SUBMIT = "submit"
CANCEL = "cancel"


@dataclass(frozen=True)
class InputEvent:
    kind: str
    value: Optional[str] = None


def reset() -> InputEvent:
    return InputEvent(RESET)


def roulette_toggle() -> InputEvent:
    return InputEvent(ROULETTE_TOGGLE)


def phase_select(mode: str) -> InputEvent:
    return InputEvent(PHASE_SELECT, mode)


def phase_auto_toggle() -> InputEvent:
    return InputEvent(PHASE_AUTO_TOGGLE)


def time_entry_toggle() -> InputEvent:
    return InputEvent(TIME_ENTRY_TOGGLE)


def time_entry_char(ch: str) -> InputEvent:
    return InputEvent(TIME_ENTRY_CHAR, ch)


def event_for_key(text: str, key: Optional[str] = None, *, typing: bool = False) -> Optional[InputEvent]:
    """Map a key press to an event.

    `text` is the produced character (may be empty), `key` a symbolic name for
    non-printing keys: "enter", "escape", "backspace", "space".
    While typing, digits go to the entry buffer instead of the phase keys.
    """
    t = (text or "")
    k = (key or "").lower()

    if t in ("r", "R"):
        return reset()
    if t in ("z", "Z"):
        return roulette_toggle()
    if t in ("t", "T"):
        return time_entry_toggle()

    if typing:
        if k == "escape":
            return time_entry_char(CANCEL)
        if k in ("enter", "return"):
            return time_entry_char(SUBMIT)
        if k == "backspace":
            return time_entry_char(BACKSPACE)
        if len(t) == 1 and (t.isdigit() or t == ":"):
            return time_entry_char(t)

    if k == "space" or t == " ":
        return phase_auto_toggle()
    if t == "1":
        return phase_select(GEO)
    if t == "2":
        return phase_select(TRI)
    if t == "3":
        return phase_select(AUTO)
    return None


class InputController:
    def __init__(self, time_source: TimeSourceV1, roulette: RouletteController, phase: PhaseScheduler, entry: Optional[TimeEntry] = None):
        self.time_source = time_source
        self.roulette = roulette
        self.phase = phase
        self.entry = entry if entry is not None else TimeEntry()

    @property
    def typing(self) -> bool:
        return self.entry.active

    def cancel_typing(self) -> None:
        """Hook for the roulette start: drop any pending entry and force MANUAL."""
        self.entry.cancel()
        self.time_source.mode = MANUAL

    def handle_all(self, events: Optional[Iterable[InputEvent]], now_ms: float) -> None:
        for ev in events or ():
            self.handle(ev, now_ms)

    def handle_keys(self, keys: Optional[Iterable[Tuple[str, Optional[str]]]], now_ms: float) -> None:
        """Map raw (text, key) presses one at a time, so a press that opens
        typing changes how the presses after it in the same frame map."""
        for text, key in keys or ():
            ev = event_for_key(text, key, typing=self.typing)
            if ev is not None:
                self.handle(ev, now_ms)

    def handle(self, ev: InputEvent, now_ms: float) -> None:
        kind = ev.kind
        if kind == RESET:
            self.roulette.stop()
            self.entry.close()
            self.time_source.set_live()
            self.phase.reset_mode()
            log("reset to live")
        elif kind == ROULETTE_TOGGLE:
            state = self.roulette.toggle(now_ms)
            log(f"roulette -> {state}")
        elif kind == PHASE_SELECT:
            self.phase.select(str(ev.value))
            log(f"phase -> {self.phase.mode}")
        elif kind == PHASE_AUTO_TOGGLE:
            self.phase.toggle_manual()
            log(f"phase lock {'on' if self.phase.manual_enabled else 'off'} ({self.phase.mode})")
        elif kind == TIME_ENTRY_TOGGLE:
            self.roulette.stop()
            if self.entry.active:
                self.entry.active = False
            else:
                self.entry.open(now_ms)
        elif kind == TIME_ENTRY_CHAR:
            self._handle_char(str(ev.value or ""), now_ms)
        else:
            raise ValueError(f"unknown input event: {kind!r}")

    def _handle_char(self, ch: str, now_ms: float) -> None:
        if not self.entry.active:
            return
        if ch == CANCEL:
            self.entry.close()
        elif ch == SUBMIT:
            buf = self.entry.buffer
            parsed = self.entry.submit(now_ms)
            if parsed is None:
                log(f"time entry rejected: {buf!r}")
                return
            self.roulette.stop()
            tv = self.time_source.set_manual_time(*parsed)
            log(f"manual time {tv.formatted()}")
        elif ch == BACKSPACE:
            self.entry.backspace()
        else:
            self.entry.type_char(ch)
