"""Command line interface for restaurant seating."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .loader import load_all
from .logger import configure_logging, get_logger
from .manager import GroupNotSeatedError, SeatingManager
from .replay import format_ratio, occupancy_summary, replay, seating_frame, waiting_frame

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay restaurant arrivals and departures")
    parser.add_argument("--tables", required=True, help="Path to tables.csv")
    parser.add_argument("--events", required=True, help="Path to events.csv")
    parser.add_argument("--strict", action="store_true",
                        help="Abort when an unseated group leaves instead of skipping it.")
    parser.add_argument("--log-level", default=None, type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Override SEATING_LOG_LEVEL for this run.")
    parser.add_argument("--out-timeline", type=Path,
                        help="Write the per-step timeline CSV.")
    parser.add_argument("--out-seating", type=Path,
                        help="Write the final seating CSV: group,size,table,capacity.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by ``python -m restaurant_seating.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        configure_logging(level=args.log_level)

    try:
        tables, operations = load_all(args.tables, args.events)
        logger.info(f"Loaded {len(tables)} tables and {len(operations)} events")
        result = replay(SeatingManager(tables), operations, strict=args.strict)
    except (ValueError, GroupNotSeatedError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    manager = result.manager
    seating = seating_frame(manager)
    waiting = waiting_frame(manager)

    for row in seating.itertuples(index=False):
        print(f"{row.group},{row.table}")
    for row in waiting.itertuples(index=False):
        print(f"[WAITING] {row.position}. {row.group} ({row.size} customers)")

    counts = manager.occupancy()
    ratio = occupancy_summary(manager)["occupancy_ratio"].iloc[0]
    print(f"[OCCUPANCY] tables={counts['tables']} occupied={counts['occupied']} "
          f"waiting={counts['waiting']} ratio={format_ratio(ratio)}")

    if args.out_timeline:
        args.out_timeline.parent.mkdir(parents=True, exist_ok=True)
        result.timeline.to_csv(args.out_timeline, index=False)
    if args.out_seating:
        args.out_seating.parent.mkdir(parents=True, exist_ok=True)
        seating.to_csv(args.out_seating, index=False)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
