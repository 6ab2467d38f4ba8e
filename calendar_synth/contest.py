"""
Farming contest schedule.

A contest event spans 3 in-game days. The crops for an event come from a
Fisher-Yates shuffle of CROP_TYPES driven by a JavaRandom seeded with
`event_id ^ GOLDEN_RATIO_64`, so the member order of CropType is part of the
contract and must not change.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import List, Optional, Sequence, Tuple, TypeVar

from calendar_synth.java_random import JavaRandom
from calendar_synth.seed import event_seed, rng
from calendar_synth.world_calendar import Calendar

T = TypeVar("T")

DAYS_PER_EVENT = 3
CROPS_PER_EVENT = 3


class CropType(str, Enum):
    WHEAT = "WHEAT"
    SUGAR_CANE = "SUGAR_CANE"
    CARROT = "CARROT"
    POTATO = "POTATO"
    MELON = "MELON"
    PUMPKIN = "PUMPKIN"
    COCOA_BEANS = "COCOA_BEANS"
    CACTUS = "CACTUS"
    MUSHROOM = "MUSHROOM"
    BEETROOT = "BEETROOT"


CROP_TYPES: Tuple[CropType, ...] = tuple(CropType)


def shuffle_with_random(items: Sequence[T], r: JavaRandom) -> List[T]:
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = r.next_int(i + 1)
        out[i], out[j] = out[j], out[i]
    return out


def event_id(total_days: Optional[float] = None, calendar: Optional[Calendar] = None) -> int:
    if total_days is None:
        total_days = (calendar or Calendar()).as_days()
    return math.floor(total_days) // DAYS_PER_EVENT


def event_day_range(eid: int) -> Tuple[int, int]:
    first = eid * DAYS_PER_EVENT
    return first, first + DAYS_PER_EVENT - 1


def crops(eid: Optional[int] = None, calendar: Optional[Calendar] = None) -> List[CropType]:
    if eid is None:
        eid = event_id(calendar=calendar)
    shuffled = shuffle_with_random(CROP_TYPES, rng(event_seed(int(eid))))
    return shuffled[: min(CROPS_PER_EVENT, len(shuffled))]
