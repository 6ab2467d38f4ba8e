from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List

import pandas as pd

from calendar_synth.config import ScenarioConfig
from calendar_synth.contest import CROP_TYPES, CROPS_PER_EVENT, DAYS_PER_EVENT
from calendar_synth.world_calendar import SEASON_KEYS, SEASON_WINTER


def _check_bounds(value: float, target: float, tolerance: float) -> bool:
    lower = max(0.0, target - tolerance)
    upper = min(1.0, target + tolerance)
    return lower <= value <= upper


def run_health_checks(tables: Dict[str, pd.DataFrame], cfg: ScenarioConfig) -> Dict[str, object]:
    checks: List[Dict[str, object]] = []

    def add_check(check_id: str, severity: str, passed: bool, details: Dict[str, object]) -> None:
        checks.append(
            {
                "check_id": check_id,
                "severity": severity,
                "status": "PASS" if passed else "FAIL",
                "details": details,
            }
        )

    days = tables.get("calendar_day")
    if days is not None:
        expected_days = cfg.window.days
        add_check(
            "calendar_day_row_count",
            "ERROR",
            len(days) == expected_days,
            {"observed": int(len(days)), "expected": int(expected_days)},
        )

        wrong_event = (days["event_id"] != days["total_days"] // DAYS_PER_EVENT).sum()
        add_check(
            "event_id_matches_day",
            "ERROR",
            wrong_event == 0,
            {"mismatched_rows": int(wrong_event)},
        )

        add_check(
            "event_id_non_decreasing",
            "ERROR",
            bool(days["event_id"].is_monotonic_increasing),
            {},
        )

        snow_outside_winter = (days["is_snowing"] & (days["season"] != SEASON_WINTER)).sum()
        add_check(
            "snow_only_in_winter",
            "ERROR",
            snow_outside_winter == 0,
            {"snow_days_outside_winter": int(snow_outside_winter)},
        )

        snow_without_rain = (days["is_snowing"] & ~days["is_raining"]).sum()
        add_check(
            "snow_implies_rain",
            "ERROR",
            snow_without_rain == 0,
            {"snow_days_without_rain": int(snow_without_rain)},
        )

        for season, key in enumerate(SEASON_KEYS):
            season_days = days.loc[days["season"] == season, "is_raining"]
            if season_days.empty:
                continue
            observed = float(season_days.mean())
            target = cfg.rain_chance.for_season(season) / 100.0
            add_check(
                f"ratio_rain_rate_{key}",
                "WARN",
                _check_bounds(observed, target, 0.05),
                {"observed": observed, "target": target, "days": int(len(season_days))},
            )

    contests = tables.get("farming_contest")
    if contests is not None:
        valid = [c.value for c in CROP_TYPES]
        crop_cols = [f"crop_{i}" for i in range(1, CROPS_PER_EVENT + 1)]
        picks = contests[crop_cols]

        unknown = int((~picks.isin(valid)).to_numpy().sum())
        add_check(
            "contest_crops_known",
            "ERROR",
            unknown == 0,
            {"unknown_crops": unknown},
        )

        duplicated = int((picks.nunique(axis=1) != len(crop_cols)).sum())
        add_check(
            "contest_crops_distinct",
            "ERROR",
            duplicated == 0,
            {"events_with_duplicates": duplicated},
        )

        if days is not None:
            missing = set(days["event_id"]) - set(contests["event_id"])
            add_check(
                "contest_covers_window",
                "ERROR",
                not missing,
                {"missing_events": sorted(int(e) for e in missing)},
            )

    summary = {"INFO": 0, "WARN": 0, "ERROR": 0}
    for check in checks:
        if check["status"] == "FAIL":
            summary[check["severity"]] += 1

    report = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "scenario": cfg.run_name,
        "summary": summary,
        "checks": checks,
    }

    return report


def render_health_report_md(report: Dict[str, object]) -> str:
    lines = [f"# Health Report: {report['scenario']}", "", "## Summary"]
    summary = report["summary"]
    lines.append(f"- ERROR: {summary['ERROR']}")
    lines.append(f"- WARN: {summary['WARN']}")
    lines.append(f"- INFO: {summary['INFO']}")
    lines.append("\n## Checks")

    for check in report["checks"]:
        lines.append(f"- **{check['check_id']}** ({check['severity']}) - {check['status']}")
        details = check.get("details", {})
        if details:
            lines.append(f"  - Details: {details}")

    return "\n".join(lines) + "\n"
