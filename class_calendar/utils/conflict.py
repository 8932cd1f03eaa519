# class_calendar/utils/conflict.py
from typing import Iterable, Optional, Set, Tuple

from class_calendar.schemas.enrollment import DAY_ORDER, candidate_of
from class_calendar.utils.timeparse import parse_time


def time_window(record) -> Optional[Tuple[str, int, int]]:
    """(day, start_min, end_min), or None when the record has no usable time block.

    Accepts stored records, candidates, or plain dicts with camelCase keys.
    """
    c = candidate_of(record)
    if c.day not in DAY_ORDER:
        return None
    s = parse_time(c.start)
    e = parse_time(c.end)
    if s is None or e is None:
        return None
    return c.day, s, e


def overlaps(s1: int, e1: int, s2: int, e2: int) -> bool:
    # half-open [s, e): touching endpoints do not overlap
    return s1 < e2 and e1 > s2


def has_conflict(candidate, records: Iterable, exclude_id: Optional[str] = None) -> bool:
    """
    Conflict when:
    1. candidate has a usable day/start/end (otherwise never a conflict)
    2. another record is on exactly the same day
    3. the intervals overlap: start < other_end and end > other_start

    exclude_id lets a record being edited ignore itself.
    """
    win = time_window(candidate)
    if win is None:
        return False
    day, s, e = win

    for r in records:
        if exclude_id is not None and getattr(r, "id", None) == exclude_id:
            continue
        other = time_window(r)
        if other is None or other[0] != day:
            continue
        if overlaps(s, e, other[1], other[2]):
            return True
    return False


def find_conflicting_ids(records) -> Set[str]:
    """Ids of records that collide with at least one other record."""
    records = list(records)
    return {r.id for r in records if has_conflict(r, records, exclude_id=r.id)}
