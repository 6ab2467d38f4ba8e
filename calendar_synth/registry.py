from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class TableSpec:
    table: str
    depends_on: List[str]
    columns: List[str]
    grain: str


def get_table_specs() -> Dict[str, TableSpec]:
    """
    Registry of supported tables + generation ordering.

    Add new tables here as you implement new builders.
    """
    specs = [
        TableSpec(
            table="calendar_day",
            depends_on=[],
            columns=[
                "total_days",
                "year",
                "season",
                "season_name",
                "day_of_season",
                "rain_chance",
                "is_raining",
                "is_snowing",
                "event_id",
            ],
            grain="1 row per in-game day",
        ),
        TableSpec(
            table="farming_contest",
            depends_on=["calendar_day"],
            columns=["event_id", "first_day", "last_day", "crop_1", "crop_2", "crop_3"],
            grain="1 row per contest event touched by the window",
        ),
    ]
    return {s.table: s for s in specs}


def toposort_tables(requested: List[str]) -> List[str]:
    specs = get_table_specs()

    ordered: List[str] = []
    visiting = set()

    def visit(t: str):
        if t in ordered:
            return
        if t in visiting:
            raise RuntimeError(f"Dependency cycle detected at {t}")
        if t not in specs:
            raise RuntimeError(f"Table not registered: {t}")
        visiting.add(t)
        for dep in specs[t].depends_on:
            visit(dep)
        visiting.remove(t)
        ordered.append(t)

    for t in requested:
        visit(t)

    return ordered
