"""CSV loading utilities."""
from __future__ import annotations

from pathlib import Path
from typing import IO, Any, List, Tuple

import pandas as pd

from .models import Action, IdSequence, Operation, Table, parse_size


def _require_columns(df: pd.DataFrame, required: List[str], label: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"{label} is missing columns: {', '.join(missing)}")


def _cell(row: pd.Series, column: str) -> str:
    value = row.get(column, "")
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def load_tables(path: Path | str | IO[Any]) -> List[Table]:
    """Load table definitions from a CSV with ``capacity`` and optional ``id``.

    Rows without an id are numbered ``T1``, ``T2``, ... in file order.
    """
    df = pd.read_csv(path, dtype=str)
    _require_columns(df, ["capacity"], "tables.csv")
    ids = IdSequence("T")
    tables: List[Table] = []
    seen = set()
    for idx, row in df.iterrows():
        line = idx + 2
        try:
            capacity = parse_size(row["capacity"])
        except ValueError as exc:
            raise ValueError(f"tables.csv row {line}: {exc}") from None
        if capacity is None:
            raise ValueError(f"tables.csv row {line}: capacity is empty")
        table_id = _cell(row, "id") or ids.next_id()
        if table_id in seen:
            raise ValueError(f"tables.csv row {line}: duplicate table id {table_id}")
        seen.add(table_id)
        try:
            tables.append(Table(id=table_id, size=capacity))
        except ValueError as exc:
            raise ValueError(f"tables.csv row {line}: {exc}") from None
    return tables


def load_events(path: Path | str | IO[Any]) -> List[Operation]:
    """Load an arrival/departure script with ``action``, ``group`` and ``size``."""
    df = pd.read_csv(path, dtype=str)
    _require_columns(df, ["action", "group"], "events.csv")
    operations: List[Operation] = []
    for idx, row in df.iterrows():
        line = idx + 2
        who = _cell(row, "group")
        if not who:
            raise ValueError(f"events.csv row {line}: group is empty")
        try:
            action = Action.parse(_cell(row, "action"))
            size = parse_size(row.get("size")) if action is Action.ARRIVE else None
            operations.append(Operation(action=action, who=who, size=size))
        except ValueError as exc:
            raise ValueError(f"events.csv row {line}: {exc}") from None
    return operations


def load_all(tables_path: Path | str, events_path: Path | str) -> Tuple[List[Table], List[Operation]]:
    """Convenience wrapper returning tables and operations."""
    return load_tables(tables_path), load_events(events_path)
