"""
Seating allocation engine.

Tables are kept in availability buckets keyed by capacity plus a set of
occupied tables; together they always hold every table exactly once.
Seated groups map to their table and waiting groups sit in an ordered set.

Cost per operation:
    arrives: O(K) where K is the number of distinct capacities present; the
             scan starts at the first capacity that fits and skips absent sizes
    locate:  O(1)
    leaves:  O(K) plus one pass over the waiting list, cut short as soon as
             every table is occupied
"""
from __future__ import annotations

from bisect import bisect_left
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .logger import get_logger
from .models import CustomerGroup, Table

logger = get_logger(__name__)


class SeatingError(Exception):
    """Base class for seating contract violations."""


class GroupNotSeatedError(SeatingError, LookupError):
    """Raised when a group that is not seated tries to leave."""


class SeatingInvariantError(SeatingError, AssertionError):
    """Raised when the engine's bookkeeping would become inconsistent."""


class SeatingManager:
    """Assigns arriving groups to tables and re-seats waiting groups on departures."""

    def __init__(self, tables: Iterable[Table]) -> None:
        # Available tables per capacity. Dicts keep insertion order, so the
        # table that has been free the longest is handed out first.
        self.available_by_size: Dict[int, Dict[Table, None]] = {}
        self.used_tables: Set[Table] = set()
        self.seating_map: Dict[CustomerGroup, Table] = {}
        self.waiting: Dict[CustomerGroup, None] = {}
        self._tables: Set[Table] = set()
        self._table_count = 0
        self._max_capacity = -1

        for table in tables:
            self._add_table(table)
        self._capacities = sorted(self.available_by_size)
        logger.debug(f"Manager ready with {self._table_count} tables, capacities {self._capacities}")

    def _add_table(self, table: Table) -> None:
        if table in self._tables:
            raise ValueError(f"Duplicate table: {table}")
        self._tables.add(table)
        bucket = self.available_by_size.setdefault(table.size, {})
        bucket[table] = None
        self._table_count += 1
        self._max_capacity = max(self._max_capacity, table.size)

    # ----------------------------- properties -----------------------------
    @property
    def table_count(self) -> int:
        return self._table_count

    @property
    def max_capacity(self) -> int:
        """Largest table capacity, or -1 when there are no tables."""
        return self._max_capacity

    # ----------------------------- operations -----------------------------
    def arrives(self, group: CustomerGroup) -> None:
        """Seat ``group`` at the smallest free table that fits, or queue it."""
        logger.info(f"Arrives {group}")
        if group in self.seating_map or group in self.waiting:
            logger.warning(f"{group} is already tracked, ignoring arrival")
            return

        table = self._get_free_table(group.size)
        if table is not None:
            self._seat_group(group, table)
        else:
            self.waiting[group] = None
            logger.debug(f"Queued {group} at position {len(self.waiting)}")

    def leaves(self, group: CustomerGroup) -> None:
        """Free the table of ``group`` and offer it to the waiting groups.

        Raises ``GroupNotSeatedError`` if the group is not currently seated.
        """
        logger.info(f"Leaves {group}")
        table = self.seating_map.pop(group, None)
        if table is None:
            state = "waiting" if group in self.waiting else "not tracked"
            raise GroupNotSeatedError(f"{group} was not seated ({state})")
        self._free_table(table)
        self._try_to_seat_waiting_groups()

    def locate(self, group: CustomerGroup) -> Optional[Table]:
        """Return the table ``group`` occupies, or ``None`` if it is not seated."""
        return self.seating_map.get(group)

    # ----------------------------- helpers -----------------------------
    def _get_free_table(self, minimum_seats: int) -> Optional[Table]:
        start = bisect_left(self._capacities, minimum_seats)
        for size in self._capacities[start:]:
            bucket = self.available_by_size[size]
            if bucket:
                return next(iter(bucket))
        return None

    def _seat_group(self, group: CustomerGroup, table: Table) -> None:
        if group.size > table.size:
            raise SeatingInvariantError(
                f"Cannot seat {group.size} customers in a table with only {table.size} seats"
            )
        self._use_table(table)
        self.seating_map[group] = table
        logger.debug(f"Seated {group} at {table}")

    def _use_table(self, table: Table) -> None:
        if table in self.used_tables:
            raise SeatingInvariantError(f"{table} is already occupied")
        bucket = self.available_by_size.get(table.size, {})
        if table not in bucket:
            raise SeatingInvariantError(f"{table} is not available")
        del bucket[table]
        self.used_tables.add(table)

    def _free_table(self, table: Table) -> None:
        if table not in self.used_tables:
            raise SeatingInvariantError(f"{table} is already available")
        self.used_tables.remove(table)
        self.available_by_size[table.size][table] = None

    def _try_to_seat_waiting_groups(self) -> List[CustomerGroup]:
        """Walk the queue once in arrival order and seat whoever fits.

        Seated groups are removed only after the walk so the remaining
        groups keep their relative order.
        """
        seated: List[CustomerGroup] = []
        for group in self.waiting:
            if len(self.used_tables) >= self._table_count:
                break
            table = self._get_free_table(group.size)
            if table is not None:
                self._seat_group(group, table)
                seated.append(group)
        for group in seated:
            del self.waiting[group]
        return seated

    # ----------------------------- views -----------------------------
    def is_waiting(self, group: CustomerGroup) -> bool:
        return group in self.waiting

    def waiting_groups(self) -> Tuple[CustomerGroup, ...]:
        """Waiting groups in arrival order."""
        return tuple(self.waiting)

    def seated(self) -> Dict[CustomerGroup, Table]:
        return dict(self.seating_map)

    def available_tables(self) -> List[Table]:
        return [t for size in self._capacities for t in self.available_by_size[size]]

    def occupied_tables(self) -> List[Table]:
        return sorted(self.used_tables, key=lambda t: (t.size, t.id))

    def occupancy(self) -> Dict[str, int]:
        occupied = len(self.used_tables)
        return {
            "tables": self._table_count,
            "occupied": occupied,
            "available": self._table_count - occupied,
            "seated": len(self.seating_map),
            "waiting": len(self.waiting),
        }

    def check_invariants(self) -> None:
        """Raise ``SeatingInvariantError`` if the bookkeeping is inconsistent."""
        available: Set[Table] = set()
        for size, bucket in self.available_by_size.items():
            for table in bucket:
                if table.size != size:
                    raise SeatingInvariantError(f"{table} filed under capacity {size}")
                available.add(table)

        both = available & self.used_tables
        if both:
            raise SeatingInvariantError(f"Tables both available and occupied: {sorted(t.id for t in both)}")
        if len(available) + len(self.used_tables) != self._table_count:
            raise SeatingInvariantError("Some tables are neither available nor occupied")

        if len(self.used_tables) != len(self.seating_map):
            raise SeatingInvariantError(
                f"{len(self.used_tables)} occupied tables for {len(self.seating_map)} seated groups"
            )
        if set(self.seating_map.values()) != self.used_tables:
            raise SeatingInvariantError("Occupied tables do not match the seating map")

        for group, table in self.seating_map.items():
            if group.size > table.size:
                raise SeatingInvariantError(f"{group} does not fit {table}")
            if group in self.waiting:
                raise SeatingInvariantError(f"{group} is both seated and waiting")
