from __future__ import annotations

"""Error taxonomy shared by the store, the shell and the quiz flows."""


class QuizError(Exception):
    """Base class for recoverable quiz errors (abort the current command only)."""


class InvalidId(QuizError, ValueError):
    """The supplied identifier is missing or not an integer."""


class QuizNotFound(QuizError, LookupError):
    def __init__(self, quiz_id: int) -> None:
        super().__init__(f"No quiz with id {quiz_id}.")
        self.quiz_id = quiz_id


class ChannelClosed(QuizError):
    """The interaction channel ended while waiting for input."""
