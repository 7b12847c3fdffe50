from __future__ import annotations
from collections import deque
from typing import Deque, List

PREFIX = "[MathOfTime]"

_MAX = 400
_buf: Deque[str] = deque(maxlen=_MAX)
_echo = True

def push(line: str) -> None:
    try:
        _buf.append(str(line))
    except Exception:
        pass

def log(msg: str) -> None:
    """Print an operator-facing line and keep it for crash reports."""
    line = f"{PREFIX} {msg}"
    push(line + "\n")
    if _echo:
        try:
            print(line)
        except Exception:
            pass

def set_echo(enabled: bool) -> None:
    global _echo
    _echo = bool(enabled)

def tail(n: int = 200) -> List[str]:
    try:
        if n <= 0:
            return []
        return list(_buf)[-n:]
    except Exception:
        return []

def clear() -> None:
    _buf.clear()
