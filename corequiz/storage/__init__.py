from .schema import COLUMNS, DTYPES, DEFAULT_QUIZZES, Quiz, QuizRow
from .store import QuizStore, SUPPORTED_SUFFIXES, validate_records

__all__ = [
    "COLUMNS",
    "DTYPES",
    "DEFAULT_QUIZZES",
    "Quiz",
    "QuizRow",
    "QuizStore",
    "SUPPORTED_SUFFIXES",
    "validate_records",
]
