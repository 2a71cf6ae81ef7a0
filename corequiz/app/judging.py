from __future__ import annotations

"""Answer judging shared by the play session and the single-quiz test."""


def judge(expected: str, given: str) -> bool:
    """Trimmed, case-insensitive exact match of ``given`` against ``expected``."""
    return given.strip().upper() == expected.upper()
