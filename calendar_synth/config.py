from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import yaml

from calendar_synth.world_calendar import CalendarSettings, RainChance, SeasonNames

OUTPUT_FORMATS = ("csv", "xlsx")

@dataclass
class EpochConfig:
    start_of_times: int = 1648800000   # unix seconds
    time_multiplier: int = 72          # in-game seconds per real second

    def __post_init__(self):
        if self.time_multiplier < 1:
            raise ValueError(f"epoch.time_multiplier must be >= 1, got {self.time_multiplier}")

@dataclass
class WindowConfig:
    start_day: int = 0     # absolute in-game day
    days: int = 372        # one in-game year

    def __post_init__(self):
        if self.start_day < 0:
            raise ValueError(f"window.start_day must be >= 0, got {self.start_day}")
        if self.days <= 0:
            raise ValueError(f"window.days must be positive, got {self.days}")

    @property
    def end_day(self) -> int:
        # inclusive
        return self.start_day + self.days - 1

@dataclass
class OutputConfig:
    format: str = "csv"   # csv | xlsx

    def __post_init__(self):
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(f"output.format must be one of {OUTPUT_FORMATS}, got {self.format!r}")

@dataclass
class ScenarioConfig:
    run_name: str = "run"
    epoch: EpochConfig = field(default_factory=EpochConfig)
    season_names: SeasonNames = field(default_factory=SeasonNames)
    rain_chance: RainChance = field(default_factory=RainChance)
    window: WindowConfig = field(default_factory=WindowConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @property
    def calendar_settings(self) -> CalendarSettings:
        return CalendarSettings(
            start_of_times=self.epoch.start_of_times,
            time_multiplier=self.epoch.time_multiplier,
            season_names=self.season_names,
            rain_chance=self.rain_chance,
        )

def config_from_dict(raw: Optional[dict]) -> ScenarioConfig:
    raw = raw or {}
    return ScenarioConfig(
        run_name=raw.get("run_name", "run"),
        epoch=EpochConfig(**(raw.get("epoch") or {})),
        season_names=SeasonNames(**(raw.get("season_names") or {})),
        rain_chance=RainChance(**(raw.get("rain_chance") or {})),
        window=WindowConfig(**(raw.get("window") or {})),
        output=OutputConfig(**(raw.get("output") or {})),
    )

def load_config(path: str) -> ScenarioConfig:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    return config_from_dict(raw)
