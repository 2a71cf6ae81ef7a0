import os
import random
import unittest
from unittest import mock

from corequiz.util.randomness import draw_index, draw_without_replacement, seed_if_needed

from fakes import FixedRandom


class DrawTests(unittest.TestCase):
    def test_index_scales_random_to_pool(self) -> None:
        self.assertEqual(draw_index(FixedRandom(0.0), 4), 0)
        self.assertEqual(draw_index(FixedRandom(0.5), 4), 2)
        self.assertEqual(draw_index(FixedRandom(0.9999999), 4), 3)

    def test_empty_pool_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            draw_index(FixedRandom(0.0), 0)

    def test_draw_removes_the_element(self) -> None:
        pool = [10, 20, 30]
        self.assertEqual(draw_without_replacement(pool, FixedRandom(0.4)), 20)
        self.assertEqual(pool, [10, 30])

    def test_draining_a_pool_yields_each_element_once(self) -> None:
        rng = random.Random(7)
        pool = list(range(50))
        drawn = [draw_without_replacement(pool, rng) for _ in range(50)]
        self.assertEqual(sorted(drawn), list(range(50)))
        self.assertEqual(pool, [])


class SeedTests(unittest.TestCase):
    def test_seed_env_makes_draws_repeatable(self) -> None:
        with mock.patch.dict(os.environ, {"SEED": "42"}):
            seed_if_needed()
            first = [random.random() for _ in range(3)]
            seed_if_needed()
            second = [random.random() for _ in range(3)]
        self.assertEqual(first, second)

    def test_non_integer_seed_is_ignored(self) -> None:
        with mock.patch.dict(os.environ, {"SEED": "abc"}):
            seed_if_needed()


if __name__ == "__main__":
    unittest.main()
