from __future__ import annotations

"""Randomness helpers for seeding and uniform draws without replacement."""

import os
import random
from typing import List, Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float: ...


def seed_if_needed() -> None:
    """Seed the global RNG if the SEED env var is set."""
    seed = os.environ.get("SEED")
    if seed is None:
        return
    try:
        s = int(seed)
    except ValueError:
        return
    random.seed(s)


def draw_index(rng: RandomSource, size: int) -> int:
    """Uniform index in ``range(size)``; ``size`` must be positive."""
    if size <= 0:
        raise ValueError("Cannot draw from an empty pool")
    # random() < 1.0, the min() guards float rounding on huge pools
    return min(int(rng.random() * size), size - 1)


def draw_without_replacement(pool: List[T], rng: RandomSource) -> T:
    """Remove and return one element of ``pool`` chosen uniformly at random."""
    return pool.pop(draw_index(rng, len(pool)))
