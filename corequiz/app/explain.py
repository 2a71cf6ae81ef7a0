from __future__ import annotations

"""Explain mode: one-line JSON traces of draws, grading and store writes.

Off by default; `corequiz --explain` switches it on for the process.
"""

import json
from typing import Any, Dict

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    data = payload or {}
    try:
        line = json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        print(f"[EXPLAIN] {event}")
        return
    print(f"[EXPLAIN] {event} :: {line}")
