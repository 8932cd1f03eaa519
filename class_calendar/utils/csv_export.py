# class_calendar/utils/csv_export.py
from datetime import datetime
from typing import Iterable

CSV_HEADERS = [
    "Name", "Email", "Major", "Year", "Notes",
    "Course Code", "Course Name", "Day", "Start", "End", "Location",
]

# column -> Enrollment attribute
CSV_FIELDS = [
    "name", "email", "major", "year", "notes",
    "course_code", "course_name", "day", "start", "end", "location",
]


def csv_safe(value) -> str:
    v = "" if value is None else str(value)
    if any(ch in v for ch in (",", '"', "\n")):
        return '"' + v.replace('"', '""') + '"'
    return v


def enrollment_row(record) -> list:
    return [getattr(record, f, "") for f in CSV_FIELDS]


def enrollments_to_csv(records: Iterable) -> str:
    """
    Header + one line per record, in the order given.
    Lines are joined with "\\n" (no trailing newline).
    """
    lines = [",".join(CSV_HEADERS)]
    for r in records:
        lines.append(",".join(csv_safe(v) for v in enrollment_row(r)))
    return "\n".join(lines)


def make_filename(prefix: str = "enrollments", ext: str = "csv") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.{ext}"
