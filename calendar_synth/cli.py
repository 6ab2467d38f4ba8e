from __future__ import annotations

import argparse
import json
from pathlib import Path

# Local imports (works once installed via -e . OR when repo root is on sys.path)
from calendar_synth.config import ScenarioConfig, load_config
from calendar_synth.contest import crops, event_day_range, event_id
from calendar_synth.pack_generator import generate_pack
from calendar_synth.registry import get_table_specs
from calendar_synth.validator import DEFAULT_SCHEMA_PATH, validate_pack
from calendar_synth.world_calendar import Calendar


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _cmd_doctor(_: argparse.Namespace) -> int:
    repo_root = _repo_root()
    print(f"Repo root: {repo_root}")

    needed = [
        repo_root / "schemas" / "pack_manifest.schema.json",
        repo_root / "scenarios" / "default.yaml",
    ]
    missing = [p for p in needed if not p.exists()]
    if missing:
        print("MISSING FILES:")
        for p in missing:
            print(f"  - {p}")
        return 2

    try:
        import jsonschema  # noqa: F401
        import openpyxl  # noqa: F401
        import pandas  # noqa: F401
        import yaml  # noqa: F401
    except ImportError as e:
        print("Python dependency problem:", repr(e))
        return 3

    print("OK: repo layout + key dependencies are good")
    return 0


def _cmd_now(args: argparse.Namespace) -> int:
    cfg = load_config(args.scenario) if args.scenario else ScenarioConfig()
    cal = Calendar(cfg.calendar_settings)

    state = cal.snapshot()
    eid = event_id(state["total_days"])
    first_day, last_day = event_day_range(eid)
    state["event"] = {
        "event_id": eid,
        "first_day": first_day,
        "last_day": last_day,
        "crops": [c.value for c in crops(eid)],
    }
    print(json.dumps(state, indent=2))
    return 0


def _cmd_crops(args: argparse.Namespace) -> int:
    first_day, last_day = event_day_range(args.event_id)
    payload = {
        "event_id": args.event_id,
        "first_day": first_day,
        "last_day": last_day,
        "crops": [c.value for c in crops(args.event_id)],
    }
    print(json.dumps(payload, indent=2))
    return 0


def _cmd_pack(args: argparse.Namespace) -> int:
    scenario = Path(args.scenario).resolve()
    if not scenario.exists():
        print(f"Scenario not found: {scenario}")
        return 2

    known = get_table_specs()
    unknown = [t for t in (args.table or []) if t not in known]
    if unknown:
        print(f"No builder registered for table(s): {', '.join(unknown)}")
        return 2

    pack_root = generate_pack(str(scenario), Path(args.out_base), args.table or None)
    print(f"Wrote pack: {pack_root}")
    print(f"Manifest: {pack_root / 'pack_manifest.json'}")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    errors = validate_pack(Path(args.pack), Path(args.schema))
    if errors:
        print("Pack validation FAILED:")
        for err in errors:
            print(f"  - {err}")
        return 1
    print("OK: pack is valid")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calendar-synth", description="Deterministic in-game calendar data")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_doc = sub.add_parser("doctor", help="Validate repo layout and Python deps")
    p_doc.set_defaults(func=_cmd_doctor)

    p_now = sub.add_parser("now", help="Print the current calendar state and contest crops")
    p_now.add_argument("--scenario", help="Scenario YAML path (defaults built in)")
    p_now.set_defaults(func=_cmd_now)

    p_crops = sub.add_parser("crops", help="Print the contest crops for an event id")
    p_crops.add_argument("event_id", type=int, help="Event id (total days // 3)")
    p_crops.set_defaults(func=_cmd_crops)

    p_pack = sub.add_parser("pack", help="Generate a calendar dataset pack for a scenario")
    p_pack.add_argument("scenario", help="Scenario YAML path")
    p_pack.add_argument("out_base", help="Output folder (pack lands under <out_base>/packs/)")
    p_pack.add_argument("--table", action="append", help="Only build this table (and its dependencies); repeatable")
    p_pack.set_defaults(func=_cmd_pack)

    p_val = sub.add_parser("validate", help="Validate a generated pack")
    p_val.add_argument("pack", help="Pack root folder")
    p_val.add_argument("--schema", default=str(DEFAULT_SCHEMA_PATH), help="Manifest JSON schema")
    p_val.set_defaults(func=_cmd_validate)

    return parser


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
