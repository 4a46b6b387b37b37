"""
Pure operations over an ordered list of records.

A record is a plain dict carrying at least ``id`` (str) and ``order`` (int).
Every operation returns a new list and never mutates its input; records that
are not touched by an operation are passed through as the same objects.
"""
from __future__ import annotations

import time
import uuid
from typing import Any, Dict, List, Optional, Tuple

from .record_kinds import RecordKind

Record = Dict[str, Any]

UP = "up"
DOWN = "down"
DIRECTIONS = (UP, DOWN)


def new_record_id(prefix: str) -> str:
    millis = int(time.time() * 1000)
    return f"{prefix}-{millis}-{uuid.uuid4().hex[:12]}"


def next_order(records: List[Record]) -> int:
    if not records:
        return 1
    return max(record["order"] for record in records) + 1


def sort_by_order(records: List[Record]) -> List[Record]:
    # sorted() is stable, ties keep their list position
    return sorted(records, key=lambda r: r["order"])


def renumber(records: List[Record]) -> List[Record]:
    """
    Re-assigns sequential order values (1..N) following the current
    list position. Records already holding the right value are reused.
    """
    result = []
    for position, record in enumerate(records, start=1):
        if record.get("order") == position:
            result.append(record)
        else:
            result.append({**record, "order": position})
    return result


def find_index(records: List[Record], record_id: str) -> Optional[int]:
    """Index of ``record_id`` in the order-sorted view of ``records``."""
    for index, record in enumerate(sort_by_order(records)):
        if record["id"] == record_id:
            return index
    return None


def add(records: List[Record], kind: RecordKind) -> Tuple[List[Record], str]:
    order = next_order(records)
    record = kind.build(order)
    record["id"] = new_record_id(kind.prefix)
    record["order"] = order
    return [*records, record], record["id"]


def update_field(records: List[Record], record_id: str, field: str, value: Any) -> List[Record]:
    return [
        {**record, field: value} if record["id"] == record_id else record
        for record in records
    ]


def delete(records: List[Record], record_id: str) -> List[Record]:
    """Drops the record. Remaining order values keep their gaps."""
    return [record for record in records if record["id"] != record_id]


def move(records: List[Record], index: int, direction: str) -> List[Record]:
    """
    Swaps the record at ``index`` of the order-sorted list with its
    neighbour and renumbers the whole list to 1..N.

    Moving past either end is a no-op and returns the input unchanged.
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")

    swap_index = index - 1 if direction == UP else index + 1
    if not (0 <= index < len(records)) or not (0 <= swap_index < len(records)):
        return list(records)

    ordered = sort_by_order(records)
    ordered[index], ordered[swap_index] = ordered[swap_index], ordered[index]
    return renumber(ordered)
