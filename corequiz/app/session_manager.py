from __future__ import annotations

"""Session Manager: plays every quiz once in random order until a miss.

The session is a sequential coroutine. The only suspension point is the
channel's ``ask``; a session owns its pool and score and shares nothing with
other sessions, so several can run on one event loop without locking.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol

from ..errors import ChannelClosed, QuizNotFound
from ..storage.schema import Quiz
from ..stats.stats import format_progress, format_summary
from ..util.randomness import RandomSource, draw_without_replacement
from .channel import Channel
from .explain import trace as xtrace
from .judging import judge


class QuizSource(Protocol):
    def count(self) -> int: ...

    def all_ids(self) -> List[int]: ...

    def get_by_id(self, quiz_id: int) -> Quiz: ...


class Outcome(str, Enum):
    IN_PROGRESS = "in_progress"
    WON_ALL_CORRECT = "won_all_correct"
    LOST_ON_WRONG_ANSWER = "lost_on_wrong_answer"


@dataclass
class SessionState:
    remaining: List[int]
    score: int = 0
    outcome: Outcome = Outcome.IN_PROGRESS
    asked: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class SessionResult:
    final_score: int
    outcome: Outcome
    total: int
    asked: tuple[int, ...] = ()


class PlaySession:
    """One play-through over a snapshot of the store's ids.

    Args:
        store: source of quiz records; only read, never written.
        channel: where questions are asked and progress is reported.
        rng: anything with ``random() -> float``; defaults to the ``random`` module.
    """

    def __init__(self, store: QuizSource, channel: Channel, rng: Optional[RandomSource] = None) -> None:
        self.store = store
        self.channel = channel
        self.rng = rng if rng is not None else random
        self.state = SessionState(remaining=list(store.all_ids()))
        self.total = len(self.state.remaining)

    @property
    def finished(self) -> bool:
        return self.state.outcome is not Outcome.IN_PROGRESS

    def draw(self) -> int:
        quiz_id = draw_without_replacement(self.state.remaining, self.rng)
        self.state.asked.append(quiz_id)
        xtrace("quiz_drawn", {"id": quiz_id, "remaining": len(self.state.remaining)})
        return quiz_id

    async def step(self) -> None:
        """Ask one question, or end the session when the pool is empty."""
        if self.finished:
            raise RuntimeError("Session already finished")
        if not self.state.remaining:
            self.state.outcome = Outcome.WON_ALL_CORRECT
            return

        quiz = self.store.get_by_id(self.draw())
        answer = await self.channel.ask(f"{quiz.question}?")
        is_correct = judge(quiz.answer, answer)
        xtrace("graded", {"id": quiz.id, "answer": answer, "correct": is_correct})
        if is_correct:
            self.state.score += 1
            self.channel.notify(format_progress(self.state.score, len(self.state.remaining)))
        else:
            self.state.outcome = Outcome.LOST_ON_WRONG_ANSWER
            self.channel.notify("Incorrect.")

    def result(self) -> SessionResult:
        return SessionResult(
            final_score=self.state.score,
            outcome=self.state.outcome,
            total=self.total,
            asked=tuple(self.state.asked),
        )

    async def run(self) -> SessionResult:
        """Play until the pool is exhausted or an answer is wrong.

        Raises:
            QuizNotFound: a drawn id no longer resolves; the session is abandoned.
            ChannelClosed: the channel ended while a question was pending; the
                pending question is neither credited nor penalized.
        """
        xtrace("session_started", {"total": self.total})
        try:
            while not self.finished:
                await self.step()
        except (QuizNotFound, ChannelClosed) as e:
            xtrace("session_aborted", {"reason": type(e).__name__, "score": self.state.score})
            raise

        if self.state.outcome is Outcome.WON_ALL_CORRECT:
            self.channel.notify("Nothing left to ask.")
        result = self.result()
        self.channel.notify(format_summary(result))
        xtrace("session_ended", {"score": result.final_score, "outcome": result.outcome.value})
        return result


async def play(store: QuizSource, channel: Channel, rng: Optional[RandomSource] = None) -> SessionResult:
    return await PlaySession(store, channel, rng).run()
