"""Data models for restaurant seating."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional
import math


def parse_size(value: object) -> Optional[int]:
    """Parse a size cell into an ``int``.

    Empty values such as ``""`` or ``None`` return ``None``.
    ``pandas`` often provides ``float('nan')`` for missing values which is
    also treated as empty.
    """
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if not value.is_integer():
            raise ValueError(f"Size must be a whole number: {value}")
        return int(value)
    text = str(value).strip()
    if not text or text.lower() == "nan":
        return None
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"Size must be a whole number: {value!r}") from None


def _check_size(kind: str, size: object) -> None:
    if isinstance(size, bool) or not isinstance(size, int):
        raise ValueError(f"{kind} size must be an int, got {size!r}")
    if size < 0:
        raise ValueError(f"{kind} size must be non-negative, got {size}")


@dataclass(frozen=True)
class Table:
    """A seating resource. Identity is the ``id``, not the size."""

    id: str
    size: int = field(compare=False)

    def __post_init__(self) -> None:
        _check_size("Table", self.size)

    def __str__(self) -> str:
        return f"Table({self.id}): ({self.size} chairs)"


@dataclass(frozen=True)
class CustomerGroup:
    """A request for a table. Identity is the ``id``, not the size."""

    id: str
    size: int = field(compare=False)

    def __post_init__(self) -> None:
        _check_size("Group", self.size)

    def __str__(self) -> str:
        return f"Group({self.id}): ({self.size} customers)"


class IdSequence:
    """Locally owned counter handing out ``<prefix><n>`` ids."""

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix
        self._next = 1

    def next_id(self) -> str:
        value = f"{self.prefix}{self._next}"
        self._next += 1
        return value


def tables_from_sizes(sizes: Iterable[int], prefix: str = "T") -> List[Table]:
    """Build one table per size with ids from a fresh sequence."""
    ids = IdSequence(prefix)
    return [Table(id=ids.next_id(), size=size) for size in sizes]


class Action(str, Enum):
    ARRIVE = "arrive"
    LEAVE = "leave"

    @classmethod
    def parse(cls, value: object) -> "Action":
        text = str(value).strip().lower()
        aliases = {"arrives": cls.ARRIVE, "leaves": cls.LEAVE}
        if text in aliases:
            return aliases[text]
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown action: {value!r}") from None


@dataclass(frozen=True)
class Operation:
    """One step of an arrival/departure script."""

    action: Action
    who: str
    size: Optional[int] = None

    def __post_init__(self) -> None:
        if self.action is Action.ARRIVE and self.size is None:
            raise ValueError(f"Arrival of {self.who} needs a group size")
        if self.size is not None:
            _check_size("Group", self.size)
