from __future__ import annotations

from typing import Callable, TypeVar

from calendar_synth.java_random import JavaRandom
from calendar_synth.seed import rng

T = TypeVar("T")

# Ordinal slots for values derived from one per-day seed.
RAIN_CHANCE_STAGE = 0
IS_RAINING_STAGE = 1
TEMP_STAGE = 2
PREFER_COLDER_STAGE = 3
RANDOMIZED_STAGE = 4
EVENT_STAGE = 7


def sample_at_stage(seed: int, stage: int, draw: Callable[[JavaRandom], T]) -> T:
    """
    Draw `stage + 1` values from a fresh generator and return the last one.

    Stage k is therefore the (k+1)-th draw of a single generator seeded with
    `seed`. Stages are not range checked; a larger stage only burns more draws.
    """
    r = rng(seed)
    out = draw(r)
    for _ in range(stage):
        out = draw(r)
    return out


def random_int(seed: int, stage: int, min_value: int, max_value: int) -> int:
    span = max_value - min_value
    return min_value + sample_at_stage(seed, stage, lambda r: r.next_int(span))


def boolean_from_percentage(seed: int, stage: int, percentage: int) -> bool:
    return sample_at_stage(seed, stage, lambda r: r.next_int(100)) < percentage
