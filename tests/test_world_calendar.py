"""In-game calendar arithmetic, weather and season naming."""

import pytest
import numpy as np

from calendar_synth.world_calendar import (
    SEASON_AUTUMN,
    SEASON_LENGTH,
    SEASON_SPRING,
    SEASON_SUMMER,
    SEASON_WINTER,
    START_OF_TIMES,
    Calendar,
    CalendarSettings,
    InvalidSeason,
    RainChance,
    SeasonNames,
    as_days,
    current_day,
    current_hour,
    current_minute,
    current_season,
    current_year,
    day_fields,
    flat_minutes,
    ingame_ticks,
    is_raining,
    is_raining_on_day,
    is_snowing,
    rain_chance,
)

DAY = 24 * 60 * 60  # in-game seconds


def _clock_at(ingame_seconds):
    # 72 in-game seconds per real second
    return lambda: START_OF_TIMES + ingame_seconds / 72


def test_time_breakdown():
    t = 100 * DAY + 5 * 3600 + 37 * 60 + 12
    assert as_days(t) == 100
    assert current_hour(t) == 5
    assert current_minute(t) == 37
    assert flat_minutes(t) == 30
    assert current_day(t) == 100 - SEASON_LENGTH + 1
    assert current_season(t) == SEASON_SUMMER
    assert current_year(t) == 1


def test_year_rolls_over_after_four_seasons():
    t = 4 * SEASON_LENGTH * DAY
    assert current_year(t) == 2
    assert current_season(t) == SEASON_SPRING
    assert current_day(t) == 1


def test_day_fields_matches_time_functions():
    for total_days in (0, 92, 93, 279, 371, 372, 1000):
        t = total_days * DAY
        assert day_fields(total_days) == (current_year(t), current_season(t), current_day(t))


def test_ingame_ticks():
    assert ingame_ticks(300_000) == 0
    assert ingame_ticks(0) == -6000
    assert ingame_ticks(50 * 30_000) == 0


def test_rain_chance_by_season():
    chances = [rain_chance(s * SEASON_LENGTH * DAY) for s in range(4)]
    assert chances == [4, 2, 6, 8]


def test_rain_days_in_first_spring():
    rainy = [d for d in range(40) if is_raining(d * DAY)]
    assert rainy == [13, 34]


def test_rain_days_in_first_year():
    chances = RainChance()
    rainy = [
        d for d in range(4 * SEASON_LENGTH)
        if is_raining_on_day(d, chances.for_season(day_fields(d)[1]))
    ]
    assert rainy == [
        13, 34, 49, 65, 209, 222, 225, 238, 253,
        268, 304, 313, 317, 320, 329, 333, 348, 369,
    ]


def test_snow_only_in_winter():
    assert is_snowing(304 * DAY) is True
    assert is_snowing(13 * DAY) is False
    assert is_raining(13 * DAY) is True
    assert is_snowing(305 * DAY) is False


def test_raining_is_constant_through_the_day():
    assert is_raining(13 * DAY) == is_raining(13 * DAY + DAY - 1)


def test_rain_chance_is_configurable():
    never = RainChance(spring=0, summer=0, autumn=0, winter=0)
    always = RainChance(spring=100, summer=100, autumn=100, winter=100)
    assert not any(is_raining(d * DAY, never) for d in range(50))
    assert all(is_raining(d * DAY, always) for d in range(50))


def test_rain_chance_validation():
    with pytest.raises(ValueError):
        RainChance(spring=101)
    with pytest.raises(ValueError):
        RainChance(winter=-1)


def test_season_names_are_values_not_globals():
    names = SeasonNames()
    renamed = names.with_name(SEASON_AUTUMN, "Harvest")
    assert names.name_for(SEASON_AUTUMN) == "Autumn"
    assert renamed.name_for(SEASON_AUTUMN) == "Harvest"
    assert renamed.name_for(SEASON_WINTER) == "Winter"


@pytest.mark.parametrize("season", [-1, 4, 99, "spring", None, True])
def test_invalid_season(season):
    with pytest.raises(InvalidSeason):
        SeasonNames().with_name(season, "x")
    with pytest.raises(InvalidSeason):
        SeasonNames().name_for(season)


def test_numpy_season_indexes_are_accepted():
    names = SeasonNames()
    chances = RainChance()
    for season in range(4):
        assert names.name_for(np.int64(season)) == names.name_for(season)
        assert chances.for_season(np.int64(season)) == chances.for_season(season)
    assert names.with_name(np.int32(SEASON_AUTUMN), "Harvest").autumn == "Harvest"
    with pytest.raises(InvalidSeason):
        names.name_for(np.int64(4))


def test_times_before_start_of_times_use_floor_arithmetic():
    # one in-game second before the start: last day of winter in year 0
    t = -1
    assert as_days(t) == -1
    assert current_minute(t) == 59
    assert current_hour(t) == 23
    assert current_season(t) == SEASON_WINTER
    assert current_day(t) == SEASON_LENGTH
    assert current_year(t) == 0
    assert rain_chance(t) == 8
    cal = Calendar(clock=lambda: START_OF_TIMES - 1)
    assert cal.current_season_name() == "Winter"


def test_invalid_season_is_a_value_error():
    assert issubclass(InvalidSeason, ValueError)


def test_calendar_reads_the_clock():
    cal = Calendar(clock=_clock_at(304 * DAY + 6 * 3600))
    assert cal.as_days() == 304
    assert cal.current_season() == SEASON_WINTER
    assert cal.current_season_name() == "Winter"
    assert cal.current_day() == 304 - 3 * SEASON_LENGTH + 1
    assert cal.current_hour() == 6
    assert cal.current_year() == 1
    assert cal.rain_chance() == 8
    assert cal.is_raining() is True
    assert cal.is_snowing() is True


def test_calendar_epoch_and_multiplier():
    cal = Calendar(clock=lambda: START_OF_TIMES + 10.75)
    assert cal.epoch_time() == 10
    assert cal.epoch_time_ms() == 10_750
    assert cal.skyblock_time() == 720
    assert cal.skyblock_time_ms() == 774_000
    assert cal.as_minutes() == 12


def test_calendar_uses_settings():
    settings = CalendarSettings(
        start_of_times=0,
        time_multiplier=1,
        season_names=SeasonNames().with_name(SEASON_SPRING, "Early Spring"),
    )
    cal = Calendar(settings, clock=lambda: 13 * DAY)
    assert cal.as_days() == 13
    assert cal.current_season_name() == "Early Spring"


def test_snapshot():
    cal = Calendar(clock=_clock_at(13 * DAY + 3600 + 24 * 60))
    state = cal.snapshot()
    assert state["total_days"] == 13
    assert state["season_name"] == "Spring"
    assert state["day_of_season"] == 14
    assert state["hour"] == 1
    assert state["minute"] == 20
    assert state["is_raining"] is True
    assert state["is_snowing"] is False
