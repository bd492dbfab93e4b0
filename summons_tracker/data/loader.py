"""Snapshot files: summons and cases as JSON or CSV.

JSON snapshots are either a list of summons rows or an object with
``summons`` and ``cases`` lists. CSV snapshots hold summons rows only; list
fields are stored as JSON arrays.
"""
from __future__ import annotations

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List

import polars as pl

from summons_tracker.core.case import Case
from summons_tracker.core.summons import Summons, to_str_list
from summons_tracker.data.config import LIST_FIELDS

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _read_rows(path: Path) -> List[Dict[str, Any]]:
    suf = path.suffix.lower()
    if suf == ".json":
        data = _read_json(path)
        if isinstance(data, dict):
            data = data.get("summons", [])
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of summons in {path}")
        return data
    if suf == ".csv":
        # Read every column as text; coercion happens in Summons.from_dict
        return pl.read_csv(path, infer_schema_length=0).to_dicts()
    raise ValueError(f"Unsupported snapshot format: {path.suffix}. Use .json or .csv")


def load_snapshot(path: Path) -> List[Summons]:
    """Load summons records from a snapshot file.

    Rows without an id are skipped with a warning.
    """
    records: List[Summons] = []
    for index, row in enumerate(_read_rows(path)):
        try:
            records.append(Summons.from_dict(row))
        except ValueError as e:
            logger.warning("Skipping row %d of %s: %s", index, path, e)
    logger.info("Loaded %d summons from %s", len(records), path)
    return records


def load_cases(path: Path) -> List[Case]:
    """Load cases from a JSON snapshot (empty for CSV or list snapshots)."""
    if path.suffix.lower() != ".json":
        return []
    data = _read_json(path)
    if not isinstance(data, dict):
        return []
    known = set(Case.__dataclass_fields__)
    cases: List[Case] = []
    for row in data.get("cases", []):
        kwargs = {k: v for k, v in row.items() if k in known}
        for name in ("assigned_officer", "activity"):
            if name in kwargs:
                kwargs[name] = to_str_list(kwargs[name])
        cases.append(Case(**kwargs))
    return cases


def _csv_value(name: str, value: Any) -> str | None:
    if name in LIST_FIELDS:
        return json.dumps(list(value or []))
    if isinstance(value, bool):
        return "true" if value else "false"
    return None if value is None else str(value)


def save_snapshot(records: List[Summons], path: Path) -> None:
    """Write summons records (with derived status) to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [record.to_dict() for record in records]
    suf = path.suffix.lower()
    if suf == ".json":
        payload: Any = rows
        if path.exists():
            existing = _read_json(path)
            if isinstance(existing, dict):
                # Keep cases and any other sections of an object snapshot
                payload = {**existing, "summons": rows}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    elif suf == ".csv":
        columns = [f.name for f in fields(Summons)] + ["status"]
        text_rows = [{name: _csv_value(name, row[name]) for name in columns} for row in rows]
        pl.DataFrame(text_rows, schema={name: pl.String for name in columns}).write_csv(path)
    else:
        raise ValueError(f"Unsupported snapshot format: {path.suffix}. Use .json or .csv")
    logger.info("Saved %d summons to %s", len(records), path)
