from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from calendar_synth.config import ScenarioConfig, load_config
from calendar_synth.health_checks import render_health_report_md, run_health_checks
from calendar_synth.registry import get_table_specs, toposort_tables
from calendar_synth.tables import BUILDERS

PACK_VERSION = "1.0"


def _metadata_for_table(df: pd.DataFrame) -> Dict[str, object]:
    null_rates = df.isna().mean().to_dict()
    return {
        "row_count": int(len(df)),
        "columns": list(df.columns),
        "null_rates": {k: float(v) for k, v in null_rates.items()},
    }


def _write_table(df: pd.DataFrame, tables_dir: Path, table: str, fmt: str) -> Path:
    if fmt == "xlsx":
        out_path = tables_dir / f"{table}.xlsx"
        df.to_excel(out_path, index=False, sheet_name=table, engine="openpyxl")
    else:
        out_path = tables_dir / f"{table}.csv"
        df.to_csv(out_path, index=False)
    return out_path


def build_tables(cfg: ScenarioConfig, tables: Optional[List[str]] = None) -> Dict[str, pd.DataFrame]:
    specs = get_table_specs()
    ordered = toposort_tables(tables or list(specs.keys()))

    frames: Dict[str, pd.DataFrame] = {}
    for table in ordered:
        frames[table] = BUILDERS[table](cfg, frames)
    return frames


def generate_pack(
    scenario_path: str,
    out_base: Path,
    tables: Optional[List[str]] = None,
) -> Path:
    """
    Generate a calendar dataset pack into:
      out_base/packs/<run_name>/<run_id>/tables/<table>.csv|xlsx
      out_base/packs/<run_name>/<run_id>/metadata/<table>.json
      out_base/packs/<run_name>/<run_id>/checks/health_report.{json,md}
    plus pack_manifest.json at the pack root.

    Returns the pack root.
    """
    cfg = load_config(scenario_path)
    specs = get_table_specs()

    created = datetime.now(timezone.utc).replace(microsecond=0)
    run_id = created.strftime("%Y%m%dT%H%M%SZ")
    pack_root = Path(out_base).resolve() / "packs" / cfg.run_name / run_id
    tables_dir = pack_root / "tables"
    metadata_dir = pack_root / "metadata"
    checks_dir = pack_root / "checks"

    tables_dir.mkdir(parents=True, exist_ok=True)
    metadata_dir.mkdir(parents=True, exist_ok=True)
    checks_dir.mkdir(parents=True, exist_ok=True)

    table_frames = build_tables(cfg, tables)

    generation_stats: Dict[str, Dict[str, object]] = {}
    row_counts: Dict[str, int] = {}
    outputs: List[Dict[str, str]] = []

    for table, df in table_frames.items():
        table_path = _write_table(df, tables_dir, table, cfg.output.format)

        meta = _metadata_for_table(df)
        meta_path = metadata_dir / f"{table}.json"
        meta_path.write_text(json.dumps(meta, indent=2), encoding="utf-8")

        generation_stats[table] = {
            "rows": meta["row_count"],
            "null_rates": meta["null_rates"],
        }
        row_counts[table] = meta["row_count"]
        outputs.append({"table": table, "path": str(table_path), "metadata": str(meta_path)})

    report = run_health_checks(table_frames, cfg)
    (checks_dir / "health_report.json").write_text(json.dumps(report, indent=2), encoding="utf-8")
    (checks_dir / "health_report.md").write_text(render_health_report_md(report), encoding="utf-8")

    manifest = {
        "pack_version": PACK_VERSION,
        "run_name": cfg.run_name,
        "run_id": run_id,
        "epoch": asdict(cfg.epoch),
        "window": asdict(cfg.window),
        "output_format": cfg.output.format,
        "tables_requested": list(tables) if tables else list(specs.keys()),
        "tables": list(table_frames.keys()),
        "grain_notes": {t: specs[t].grain for t in table_frames},
        "outputs": outputs,
        "data_profile": {"row_counts_by_table": row_counts},
        "generation_stats": generation_stats,
        "health_summary": report["summary"],
        "generator": {"created_at": created.isoformat()},
    }

    (pack_root / "pack_manifest.json").write_text(
        json.dumps(manifest, indent=2), encoding="utf-8"
    )

    return pack_root
