from __future__ import annotations

from typing import Callable, Dict

import pandas as pd

from calendar_synth.config import ScenarioConfig
from calendar_synth.contest import crops, event_day_range, event_id
from calendar_synth.registry import get_table_specs
from calendar_synth.schema_utils import conform_to_columns
from calendar_synth.world_calendar import SEASON_WINTER, day_fields, is_raining_on_day


def build_calendar_days(cfg: ScenarioConfig) -> pd.DataFrame:
    rows = []
    for total_days in range(cfg.window.start_day, cfg.window.end_day + 1):
        year, season, day_of_season = day_fields(total_days)
        chance = cfg.rain_chance.for_season(season)
        raining = is_raining_on_day(total_days, chance)

        rows.append({
            "total_days": total_days,
            "year": year,
            "season": season,
            "season_name": cfg.season_names.name_for(season),
            "day_of_season": day_of_season,
            "rain_chance": chance,
            "is_raining": raining,
            "is_snowing": season == SEASON_WINTER and raining,
            "event_id": event_id(total_days),
        })

    df = pd.DataFrame(rows)
    return conform_to_columns(df, get_table_specs()["calendar_day"].columns)


def build_farming_contests(days: pd.DataFrame) -> pd.DataFrame:
    rows = []
    for eid in sorted(days["event_id"].unique()):
        eid = int(eid)
        first_day, last_day = event_day_range(eid)
        row = {"event_id": eid, "first_day": first_day, "last_day": last_day}
        for i, crop in enumerate(crops(eid), start=1):
            row[f"crop_{i}"] = crop.value
        rows.append(row)

    df = pd.DataFrame(rows)
    return conform_to_columns(df, get_table_specs()["farming_contest"].columns)


# table name -> builder(cfg, frames built so far)
BUILDERS: Dict[str, Callable[[ScenarioConfig, Dict[str, pd.DataFrame]], pd.DataFrame]] = {
    "calendar_day": lambda cfg, frames: build_calendar_days(cfg),
    "farming_contest": lambda cfg, frames: build_farming_contests(frames["calendar_day"]),
}
