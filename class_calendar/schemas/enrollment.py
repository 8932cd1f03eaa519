from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

DAY_ORDER = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# courseCode, courseName, day, start, end, location
CLASS_GROUP_FIELDS = ("course_code", "course_name", "day", "start", "end", "location")


class EnrollmentIn(BaseModel):
    """Candidate record as submitted by the form (no id / createdAt yet)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    name: str = ""
    email: str = ""
    major: str = ""
    year: str = ""
    notes: str = ""

    course_code: str = ""
    course_name: str = ""
    day: str = ""
    start: str = ""
    end: str = ""
    location: str = ""

    @field_validator(
        "name", "email", "major", "year", "notes",
        "course_code", "course_name", "day", "start", "end", "location",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, v: Any):
        if v is None:
            return ""
        if isinstance(v, (int, float)):
            return str(v)
        return v

    def has_class_fields(self) -> bool:
        return any(getattr(self, f) for f in CLASS_GROUP_FIELDS)

    def field_values(self) -> dict:
        """Plain field values, without identity."""
        return {k: getattr(self, k) for k in EnrollmentIn.model_fields}


class Enrollment(EnrollmentIn):
    id: str
    created_at: int = 0  # epoch milliseconds

    def edited(self, candidate: EnrollmentIn) -> "Enrollment":
        # same id, same createdAt, every other field replaced
        return Enrollment(id=self.id, created_at=self.created_at, **candidate.field_values())


def candidate_of(record: Optional[EnrollmentIn]) -> EnrollmentIn:
    if isinstance(record, EnrollmentIn):
        return record
    return EnrollmentIn.model_validate(record or {})
