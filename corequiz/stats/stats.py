from __future__ import annotations

"""Session summary formatting."""

from typing import Any


def format_summary(result: Any) -> str:
    """Return the end-of-game line for a SessionResult."""
    return f"End of game. Score: {result.final_score}/{result.total}"


def format_progress(score: int, remaining: int) -> str:
    return f"Correct! Score: {score} ({remaining} left)"
