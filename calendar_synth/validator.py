from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

from jsonschema import ValidationError, validate

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "pack_manifest.schema.json"


def _load_schema(schema_path: Path) -> Dict[str, object]:
    return json.loads(schema_path.read_text(encoding="utf-8"))


def _validate_health_report(report_path: Path) -> List[str]:
    errors: List[str] = []
    payload = json.loads(report_path.read_text(encoding="utf-8"))
    if "summary" not in payload or "checks" not in payload:
        errors.append("health_report.json missing required keys: summary/checks")
        return errors
    summary = payload["summary"]
    for key in ["ERROR", "WARN", "INFO"]:
        if key not in summary:
            errors.append(f"health_report.json summary missing {key}")
    if not isinstance(payload["checks"], list):
        errors.append("health_report.json checks must be a list")
    return errors


def validate_pack(pack_path: Path, schema_path: Optional[Path] = None) -> List[str]:
    errors: List[str] = []
    pack_path = Path(pack_path).resolve()
    schema_path = Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH

    manifest_path = pack_path / "pack_manifest.json"
    tables_dir = pack_path / "tables"
    metadata_dir = pack_path / "metadata"

    if not manifest_path.exists():
        errors.append("Missing pack_manifest.json")
        return errors

    if not tables_dir.exists():
        errors.append("Missing tables/ directory")
    if not metadata_dir.exists():
        errors.append("Missing metadata/ directory")

    manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    schema = _load_schema(schema_path)

    try:
        validate(instance=manifest, schema=schema)
    except ValidationError as exc:
        errors.append(f"Manifest validation error: {exc.message}")

    fmt = manifest.get("output_format", "csv")
    for table in manifest.get("tables", []):
        if not (tables_dir / f"{table}.{fmt}").exists():
            errors.append(f"Missing table file for {table}")
        if not (metadata_dir / f"{table}.json").exists():
            errors.append(f"Missing metadata file for {table}")

    health_report = pack_path / "checks" / "health_report.json"
    if health_report.exists():
        errors.extend(_validate_health_report(health_report))
    else:
        errors.append("Missing checks/health_report.json")

    if "packs" not in pack_path.parts:
        errors.append("Pack path does not include 'packs' in directory tree")

    return errors
