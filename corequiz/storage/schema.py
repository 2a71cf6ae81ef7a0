from __future__ import annotations

"""Schema constants, the Quiz record and the Pydantic row model for the quiz table."""

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

# --- Constants ---

COLUMNS = ["id", "question", "answer"]

DTYPES = {
    "id": "UInt32",
    "question": "string",
    "answer": "string",
}

DEFAULT_QUIZZES = [
    {"question": "Capital de Italia", "answer": "Roma"},
    {"question": "Capital de Francia", "answer": "París"},
    {"question": "Capital de España", "answer": "Madrid"},
    {"question": "Capital de Portugal", "answer": "Lisboa"},
]


@dataclass(frozen=True)
class Quiz:
    """A question/answer pair with a stable identifier."""

    id: int
    question: str
    answer: str


# --- Pydantic models ---

class QuizRow(BaseModel):
    id: int = Field(ge=1, le=4294967295)
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)

    @field_validator("question", "answer", mode="before")
    @classmethod
    def _strip(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    def to_quiz(self) -> Quiz:
        return Quiz(id=self.id, question=self.question, answer=self.answer)
