from __future__ import annotations

from calendar_synth.java_random import JavaRandom, to_int64

# 64-bit golden ratio, spreads consecutive event ids across the generator state
GOLDEN_RATIO_64 = 0x9E3779B97F4A7C15


def day_seed(total_days: int) -> int:
    # weather draws are keyed on the absolute in-game day
    return int(total_days)


def event_seed(event_id: int) -> int:
    return to_int64(event_id) ^ to_int64(GOLDEN_RATIO_64)


def rng(seed: int) -> JavaRandom:
    return JavaRandom(seed)
