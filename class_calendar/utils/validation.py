# class_calendar/utils/validation.py
from typing import Iterable, Optional

from class_calendar.schemas.enrollment import DAY_ORDER, candidate_of
from class_calendar.schemas.validation import ValidationResult
from class_calendar.utils.conflict import has_conflict
from class_calendar.utils.timeparse import parse_time

CONFLICT_WARNING = "Warning: this class conflicts with another one."


def is_domain_email(email: str, domain: str) -> bool:
    return (email or "").strip().lower().endswith("@" + domain.lower())


def validate(
    candidate,
    records: Iterable,
    exclude_id: Optional[str] = None,
    email_domain: str = "rit.edu",
    email_label: str = "RIT",
) -> ValidationResult:
    """
    Run every rule and collect all field errors at once.

    The conflict check only runs when day/start/end are all clean, and a
    hit is reported as conflict_warning, which never blocks.
    """
    c = candidate_of(candidate)
    errors = {}

    if not c.name:
        errors["name"] = "Name is required."

    if not c.email:
        errors["email"] = "Email is required."
    elif not is_domain_email(c.email, email_domain):
        errors["email"] = f"Use your {email_label} email (@{email_domain})."

    if not c.major:
        errors["major"] = "Major is required."
    if not c.year:
        errors["year"] = "Year is required."

    warning = None
    # any class field entered -> day/start/end all required
    if c.has_class_fields():
        if not c.day:
            errors["day"] = "Day is required."
        elif c.day not in DAY_ORDER:
            errors["day"] = f"Day must be one of {', '.join(DAY_ORDER)}."

        s = parse_time(c.start)
        e = parse_time(c.end)
        if not c.start:
            errors["start"] = "Start is required."
        elif s is None:
            errors["start"] = "Start must be HH:MM."
        if not c.end:
            errors["end"] = "End is required."
        elif e is None:
            errors["end"] = "End must be HH:MM."
        if s is not None and e is not None and e <= s:
            errors["end"] = "End must be after start."

        if not any(k in errors for k in ("day", "start", "end")):
            if has_conflict(c, records, exclude_id):
                warning = CONFLICT_WARNING

    return ValidationResult(field_errors=errors, conflict_warning=warning)
