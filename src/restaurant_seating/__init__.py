"""Restaurant seating package."""
from .models import Action, CustomerGroup, IdSequence, Operation, Table, tables_from_sizes
from .manager import (
    GroupNotSeatedError,
    SeatingError,
    SeatingInvariantError,
    SeatingManager,
)
from .loader import load_all, load_events, load_tables
from .replay import ReplayResult, replay

__all__ = [
    "Action",
    "CustomerGroup",
    "IdSequence",
    "Operation",
    "Table",
    "tables_from_sizes",
    "GroupNotSeatedError",
    "SeatingError",
    "SeatingInvariantError",
    "SeatingManager",
    "load_all",
    "load_events",
    "load_tables",
    "ReplayResult",
    "replay",
]
