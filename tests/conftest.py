import itertools
import logging

import pytest

from class_calendar.config import Settings
from class_calendar.schemas.enrollment import Enrollment, EnrollmentIn
from class_calendar.store import ScheduleStore
from class_calendar.utils.blob_store import MemoryBlobStore

KEY = "rit_enrollments_v2"


def make_candidate(**overrides) -> EnrollmentIn:
    data = dict(
        name="Ada Lovelace",
        email="ada@rit.edu",
        major="Computing",
        year="3",
        course_code="CSCI-250",
        course_name="Concepts of Computer Systems",
        day="Mon",
        start="09:00",
        end="10:00",
        location="GOL 1400",
    )
    data.update(overrides)
    return EnrollmentIn(**data)


def make_record(record_id: str, **overrides) -> Enrollment:
    return Enrollment(id=record_id, created_at=1_700_000_000_000, **make_candidate(**overrides).field_values())


@pytest.fixture
def ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def blobs():
    return MemoryBlobStore()


@pytest.fixture
def store(blobs, ids):
    return ScheduleStore(blobs, KEY, id_factory=ids, clock=lambda: 1_700_000_000_000)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DB_URL=f"sqlite:///{tmp_path / 'calendar.db'}",
        LOG_DIR=str(tmp_path / "logs"),
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("class_calendar")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
