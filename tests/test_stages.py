"""Stage sampling: one seed, several independent-looking values."""

import pytest

from calendar_synth.java_random import JavaRandom
from calendar_synth.stages import (
    EVENT_STAGE,
    IS_RAINING_STAGE,
    RAIN_CHANCE_STAGE,
    boolean_from_percentage,
    random_int,
    sample_at_stage,
)


def test_stage_k_is_the_k_plus_first_draw():
    seed = 42
    r = JavaRandom(seed)
    stream = [r.next_int(100) for _ in range(8)]
    staged = [sample_at_stage(seed, stage, lambda g: g.next_int(100)) for stage in range(8)]
    assert staged == stream
    assert staged[:7] == [30, 63, 48, 84, 70, 25, 5]


def test_each_call_uses_a_fresh_generator():
    draw = lambda g: g.next_int(100)  # noqa: E731
    assert sample_at_stage(0, 2, draw) == sample_at_stage(0, 2, draw) == 29


def test_negative_stage_acts_like_stage_zero():
    draw = lambda g: g.next_int(100)  # noqa: E731
    assert sample_at_stage(0, -3, draw) == sample_at_stage(0, RAIN_CHANCE_STAGE, draw) == 60


def test_stage_beyond_reserved_slots_is_allowed():
    r = JavaRandom(42)
    stream = [r.next_int(100) for _ in range(EVENT_STAGE + 3)]
    assert sample_at_stage(42, EVENT_STAGE + 2, lambda g: g.next_int(100)) == stream[-1]


def test_random_int_offsets_by_min():
    assert random_int(7, 2, -10, 30) == -5
    for stage in range(7):
        assert -10 <= random_int(123, stage, -10, 30) < 30


def test_random_int_empty_range_fails_fast():
    with pytest.raises(ValueError):
        random_int(1, 0, 5, 5)


def test_boolean_from_percentage():
    # seed 42 stage 1 draws 63
    assert boolean_from_percentage(42, IS_RAINING_STAGE, 64) is True
    assert boolean_from_percentage(42, IS_RAINING_STAGE, 63) is False
    assert boolean_from_percentage(42, IS_RAINING_STAGE, 0) is False
    assert boolean_from_percentage(42, IS_RAINING_STAGE, 100) is True
