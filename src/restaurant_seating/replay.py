"""
Event replay driver and pandas reports.

The engine only knows groups and tables; this module turns a script of
labelled arrivals and departures into engine calls and records what
happened at each step.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import pandas as pd

from .config import settings
from .logger import get_logger
from .manager import GroupNotSeatedError, SeatingManager
from .models import Action, CustomerGroup, Operation

logger = get_logger(__name__)

TIMELINE_COLUMNS = ["step", "action", "group", "size", "outcome", "table"]


@dataclass
class ReplayResult:
    manager: SeatingManager
    groups: Dict[str, CustomerGroup] = field(default_factory=dict)
    timeline: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=TIMELINE_COLUMNS))
    skipped: int = 0


def _row(step: int, action: str, group: CustomerGroup, outcome: str, table=None) -> dict:
    return {
        "step": step,
        "action": action,
        "group": group.id,
        "size": group.size,
        "outcome": outcome,
        "table": table.id if table is not None else None,
    }


def replay(
    manager: SeatingManager, operations: Iterable[Operation], strict: bool = True
) -> ReplayResult:
    """Apply ``operations`` to ``manager`` in order.

    With ``strict`` a departure of a group that is not seated propagates
    ``GroupNotSeatedError``; otherwise it is logged and recorded as
    ``ignored``. A departure for a label never seen always raises
    ``ValueError``.
    """
    groups: Dict[str, CustomerGroup] = {}
    rows: List[dict] = []
    skipped = 0

    for step, op in enumerate(operations, start=1):
        if op.action is Action.ARRIVE:
            group = groups.get(op.who)
            tracked = group is not None and (
                manager.locate(group) is not None or manager.is_waiting(group)
            )
            if tracked:
                manager.arrives(group)
                rows.append(_row(step, op.action.value, group, "ignored"))
                skipped += 1
                continue
            # A returning label is a new visit, hence a new group.
            group = CustomerGroup(id=op.who, size=op.size)
            groups[op.who] = group
            manager.arrives(group)
            table = manager.locate(group)
            rows.append(_row(step, op.action.value, group, "seated" if table is not None else "waiting", table))
            continue

        group = groups.get(op.who)
        if group is None:
            raise ValueError(f"Step {step}: {op.who} leaves but never arrived")
        before = manager.waiting_groups()
        try:
            manager.leaves(group)
        except GroupNotSeatedError:
            if strict:
                raise
            logger.warning(f"Step {step}: skipping departure of unseated {group}")
            rows.append(_row(step, op.action.value, group, "ignored"))
            skipped += 1
            continue
        rows.append(_row(step, op.action.value, group, "left"))
        for reseated in (g for g in before if not manager.is_waiting(g)):
            rows.append(_row(step, "reseat", reseated, "reseated", manager.locate(reseated)))

    timeline = pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
    logger.info(f"Replayed {len(rows)} events, {skipped} skipped")
    return ReplayResult(manager=manager, groups=groups, timeline=timeline, skipped=skipped)


def seating_frame(manager: SeatingManager) -> pd.DataFrame:
    """Current seating sorted by table id."""
    rows = [
        {"group": g.id, "size": g.size, "table": t.id, "capacity": t.size}
        for g, t in manager.seated().items()
    ]
    df = pd.DataFrame(rows, columns=["group", "size", "table", "capacity"])
    return df.sort_values("table").reset_index(drop=True)


def waiting_frame(manager: SeatingManager) -> pd.DataFrame:
    """Waiting groups in queue order."""
    rows = [
        {"position": i, "group": g.id, "size": g.size}
        for i, g in enumerate(manager.waiting_groups(), start=1)
    ]
    return pd.DataFrame(rows, columns=["position", "group", "size"])


def occupancy_summary(manager: SeatingManager) -> pd.DataFrame:
    """One row with occupancy counts and the occupied ratio."""
    stats: Dict[str, float] = dict(manager.occupancy())
    stats["occupancy_ratio"] = stats["occupied"] / stats["tables"] if stats["tables"] else 0.0
    return pd.DataFrame([stats])


def format_ratio(value: float) -> str:
    return settings.REPORT_FLOAT_FORMAT % value
