# class_calendar/utils/ordering.py
from typing import List

from class_calendar.schemas.enrollment import DAY_ORDER
from class_calendar.utils.timeparse import parse_time

_DAY_INDEX = {d: i for i, d in enumerate(DAY_ORDER, start=1)}


def _sort_key(r):
    day_idx = _DAY_INDEX.get(r.day, 9)
    start = parse_time(r.start)
    return (day_idx, 9999 if start is None else start, (r.name or "").casefold())


def presentation_order(records) -> List:
    """day, then start time, then name; records without a time block go last"""
    return sorted(records, key=_sort_key)


def matches_query(record, query) -> bool:
    q = (query or "").strip().lower()
    if not q:
        return True
    return any(
        q in (getattr(record, f) or "").lower()
        for f in ("name", "major", "course_code", "course_name")
    )
