"""
In-game calendar: wall clock -> in-game time -> day / season / year and weather.

Every function below takes `t`, the in-game time in seconds since the start of
times (already scaled by the time multiplier). `Calendar` binds those functions
to a clock so callers can ask for "now".
"""

from __future__ import annotations

import math
import operator
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Tuple

from calendar_synth.seed import day_seed
from calendar_synth.stages import IS_RAINING_STAGE, boolean_from_percentage

START_OF_TIMES = 1648800000  # unix seconds
TIME_MULTIPLIER = 72
SEASON_LENGTH = 93  # days
YEAR_LENGTH = 4  # seasons

SEASON_SPRING = 0
SEASON_SUMMER = 1
SEASON_AUTUMN = 2
SEASON_WINTER = 3

SEASONS = (SEASON_SPRING, SEASON_SUMMER, SEASON_AUTUMN, SEASON_WINTER)
SEASON_KEYS = ("spring", "summer", "autumn", "winter")


class InvalidSeason(ValueError):
    def __init__(self, season):
        super().__init__(f"Season out of index: {season!r}")
        self.season = season


def _check_season(season: int) -> int:
    # any integral index (pandas hands back numpy ints), but never a bool
    if isinstance(season, bool):
        raise InvalidSeason(season)
    try:
        index = operator.index(season)
    except TypeError:
        raise InvalidSeason(season) from None
    if index not in SEASONS:
        raise InvalidSeason(season)
    return index


@dataclass(frozen=True)
class SeasonNames:
    spring: str = "Spring"
    summer: str = "Summer"
    autumn: str = "Autumn"
    winter: str = "Winter"

    def name_for(self, season: int) -> str:
        return getattr(self, SEASON_KEYS[_check_season(season)])

    def with_name(self, season: int, name: str) -> "SeasonNames":
        return replace(self, **{SEASON_KEYS[_check_season(season)]: str(name)})


@dataclass(frozen=True)
class RainChance:
    # percent per day
    spring: int = 4
    summer: int = 2
    autumn: int = 6
    winter: int = 8

    def __post_init__(self):
        for key in SEASON_KEYS:
            v = getattr(self, key)
            if not 0 <= v <= 100:
                raise ValueError(f"rain_chance.{key} must be within 0..100, got {v}")

    def for_season(self, season: int) -> int:
        return getattr(self, SEASON_KEYS[_check_season(season)])


@dataclass(frozen=True)
class CalendarSettings:
    start_of_times: int = START_OF_TIMES
    time_multiplier: int = TIME_MULTIPLIER
    season_names: SeasonNames = field(default_factory=SeasonNames)
    rain_chance: RainChance = field(default_factory=RainChance)


DEFAULT_SETTINGS = CalendarSettings()


def ingame_ticks(time_ms: float) -> float:
    # remainder keeps the sign of the dividend
    return math.fmod(time_ms / 50 - 6000, 24000)


def as_minutes(t: float) -> int:
    return math.floor(t / 60)


def as_hours(t: float) -> int:
    return math.floor(as_minutes(t) / 60)


def as_days(t: float) -> int:
    return math.floor(as_hours(t) / 24)


def as_seasons(t: float) -> int:
    return math.floor(as_days(t) / SEASON_LENGTH)


def as_years(t: float) -> int:
    return math.floor(as_seasons(t) / YEAR_LENGTH)


def current_minute(t: float) -> int:
    return as_minutes(t) % 60


def current_hour(t: float) -> int:
    return as_hours(t) % 24


def current_day(t: float) -> int:
    return as_days(t) % SEASON_LENGTH + 1


def current_season(t: float) -> int:
    return as_seasons(t) % YEAR_LENGTH


def current_year(t: float) -> int:
    return as_years(t) + 1


def flat_minutes(t: float) -> int:
    minute = current_minute(t)
    return minute - minute % 10


def day_fields(total_days: int) -> Tuple[int, int, int]:
    """(year, season, day_of_season) for an absolute in-game day, all 1-based except season."""
    seasons = total_days // SEASON_LENGTH
    return seasons // YEAR_LENGTH + 1, seasons % YEAR_LENGTH, total_days % SEASON_LENGTH + 1


def rain_chance(t: float, chances: RainChance = DEFAULT_SETTINGS.rain_chance) -> int:
    return chances.for_season(current_season(t))


def is_raining_on_day(total_days: int, chance: int) -> bool:
    return boolean_from_percentage(day_seed(total_days), IS_RAINING_STAGE, chance)


def is_raining(t: float, chances: RainChance = DEFAULT_SETTINGS.rain_chance) -> bool:
    return is_raining_on_day(as_days(t), rain_chance(t, chances))


def is_snowing(t: float, chances: RainChance = DEFAULT_SETTINGS.rain_chance) -> bool:
    return current_season(t) == SEASON_WINTER and is_raining(t, chances)


class Calendar:
    """Calendar view of the wall clock."""

    def __init__(
        self,
        settings: CalendarSettings | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        self._clock = clock

    def epoch_time(self) -> int:
        return math.floor(self._clock()) - self.settings.start_of_times

    def epoch_time_ms(self) -> int:
        return math.floor(self._clock() * 1000) - self.settings.start_of_times * 1000

    def skyblock_time(self) -> int:
        return self.epoch_time() * self.settings.time_multiplier

    def skyblock_time_ms(self) -> int:
        return self.epoch_time_ms() * self.settings.time_multiplier

    def ingame_ticks(self) -> float:
        return ingame_ticks(self.skyblock_time_ms())

    def flat_minutes(self) -> int:
        return flat_minutes(self.skyblock_time())

    def as_minutes(self) -> int:
        return as_minutes(self.skyblock_time())

    def as_hours(self) -> int:
        return as_hours(self.skyblock_time())

    def as_days(self) -> int:
        return as_days(self.skyblock_time())

    def as_seasons(self) -> int:
        return as_seasons(self.skyblock_time())

    def as_years(self) -> int:
        return as_years(self.skyblock_time())

    def current_minute(self) -> int:
        return current_minute(self.skyblock_time())

    def current_hour(self) -> int:
        return current_hour(self.skyblock_time())

    def current_day(self) -> int:
        return current_day(self.skyblock_time())

    def current_season(self) -> int:
        return current_season(self.skyblock_time())

    def current_season_name(self) -> str:
        return self.settings.season_names.name_for(self.current_season())

    def current_year(self) -> int:
        return current_year(self.skyblock_time())

    def rain_chance(self) -> int:
        return rain_chance(self.skyblock_time(), self.settings.rain_chance)

    def is_raining(self) -> bool:
        return is_raining(self.skyblock_time(), self.settings.rain_chance)

    def is_snowing(self) -> bool:
        return is_snowing(self.skyblock_time(), self.settings.rain_chance)

    def snapshot(self) -> dict:
        t = self.skyblock_time()
        chances = self.settings.rain_chance
        season = current_season(t)
        return {
            "skyblock_time": t,
            "total_days": as_days(t),
            "year": current_year(t),
            "season": season,
            "season_name": self.settings.season_names.name_for(season),
            "day_of_season": current_day(t),
            "hour": current_hour(t),
            "minute": flat_minutes(t),
            "rain_chance": rain_chance(t, chances),
            "is_raining": is_raining(t, chances),
            "is_snowing": is_snowing(t, chances),
        }
