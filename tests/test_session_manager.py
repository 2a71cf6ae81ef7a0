import asyncio
import random
import unittest

from corequiz.app.session_manager import Outcome, PlaySession, play
from corequiz.errors import ChannelClosed, QuizNotFound
from corequiz.storage import DEFAULT_QUIZZES, QuizStore

from fakes import CountingStore, FixedRandom, OracleChannel, ScriptedChannel


def _two_capitals() -> QuizStore:
    store = QuizStore(None, seed_defaults=False)
    store.add("Capital de Italia", "Roma")
    store.add("Capital de Francia", "París")
    return store


ALL_RIGHT = {q["question"]: q["answer"] for q in DEFAULT_QUIZZES}


class PlaySessionTests(unittest.IsolatedAsyncioTestCase):
    async def test_all_correct_wins_with_full_score(self) -> None:
        channel = ScriptedChannel(["roma", "parís"])
        result = await play(_two_capitals(), channel, FixedRandom(0.0))
        self.assertEqual(result.final_score, 2)
        self.assertEqual(result.outcome, Outcome.WON_ALL_CORRECT)
        self.assertEqual(channel.prompts, ["Capital de Italia?", "Capital de Francia?"])
        self.assertEqual(channel.messages[-2:], ["Nothing left to ask.", "End of game. Score: 2/2"])

    async def test_first_miss_loses(self) -> None:
        channel = ScriptedChannel(["roma", "berlin"])
        result = await play(_two_capitals(), channel, FixedRandom(0.0))
        self.assertEqual(result.final_score, 1)
        self.assertEqual(result.outcome, Outcome.LOST_ON_WRONG_ANSWER)
        self.assertIn("Incorrect.", channel.messages)
        self.assertEqual(channel.messages[-1], "End of game. Score: 1/2")

    async def test_miss_stops_even_with_quizzes_left(self) -> None:
        store = QuizStore(None)
        channel = ScriptedChannel(["wrong"])
        session = PlaySession(store, channel, random.Random(3))
        result = await session.run()
        self.assertEqual(result.final_score, 0)
        self.assertEqual(result.outcome, Outcome.LOST_ON_WRONG_ANSWER)
        self.assertEqual(len(channel.prompts), 1)
        self.assertEqual(len(session.state.remaining), store.count() - 1)

    async def test_empty_pool_wins_without_asking(self) -> None:
        channel = ScriptedChannel()
        result = await play(QuizStore(None, seed_defaults=False), channel)
        self.assertEqual((result.final_score, result.outcome), (0, Outcome.WON_ALL_CORRECT))
        self.assertEqual(channel.prompts, [])

    async def test_every_quiz_is_asked_exactly_once(self) -> None:
        store = QuizStore(None)
        for seed in range(20):
            channel = OracleChannel(ALL_RIGHT)
            session = PlaySession(store, channel, random.Random(seed))
            result = await session.run()
            self.assertEqual(sorted(result.asked), store.all_ids())
            self.assertEqual(result.final_score, store.count())
            self.assertEqual(session.state.remaining, [])
            self.assertEqual(len(channel.prompts), store.count())

    async def test_order_varies_with_the_random_source(self) -> None:
        store = QuizStore(None)
        orders = set()
        for seed in range(30):
            result = await play(store, OracleChannel(ALL_RIGHT), random.Random(seed))
            orders.add(result.asked)
        self.assertGreater(len(orders), 1)

    async def test_missing_quiz_aborts_session(self) -> None:
        store = QuizStore(None)
        channel = ScriptedChannel(["Roma"])
        session = PlaySession(store, channel, FixedRandom(0.0))
        store.delete(2)
        with self.assertRaises(QuizNotFound):
            await session.run()
        self.assertEqual(session.state.score, 1)
        self.assertEqual(session.state.outcome, Outcome.IN_PROGRESS)
        self.assertNotIn("End of game. Score: 1/4", channel.messages)

    async def test_closed_channel_aborts_silently(self) -> None:
        store = CountingStore(_two_capitals())
        channel = ScriptedChannel(["Roma"])
        session = PlaySession(store, channel, FixedRandom(0.0))
        with self.assertRaises(ChannelClosed):
            await session.run()
        self.assertEqual(session.state.score, 1)
        self.assertEqual(session.state.outcome, Outcome.IN_PROGRESS)
        self.assertEqual(store.lookups, [1, 2])
        self.assertFalse(any(m.startswith("End of game") for m in channel.messages))

    async def test_store_is_not_mutated(self) -> None:
        store = _two_capitals()
        before = store.get_all()
        await play(store, ScriptedChannel(["roma", "nope"]), FixedRandom(0.0))
        self.assertEqual(store.get_all(), before)

    async def test_step_after_finish_is_an_error(self) -> None:
        session = PlaySession(QuizStore(None, seed_defaults=False), ScriptedChannel())
        await session.run()
        with self.assertRaises(RuntimeError):
            await session.step()

    async def test_concurrent_sessions_keep_separate_state(self) -> None:
        store = QuizStore(None)
        winner = PlaySession(store, OracleChannel(ALL_RIGHT, yield_on_ask=True), random.Random(1))
        loser = PlaySession(store, ScriptedChannel(["Roma", "x"], yield_on_ask=True), FixedRandom(0.0))
        won, lost = await asyncio.gather(winner.run(), loser.run())
        self.assertEqual((won.final_score, won.outcome), (4, Outcome.WON_ALL_CORRECT))
        self.assertEqual((lost.final_score, lost.outcome), (1, Outcome.LOST_ON_WRONG_ANSWER))
        self.assertEqual(lost.asked, (1, 2))


if __name__ == "__main__":
    unittest.main()
