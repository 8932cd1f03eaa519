# class_calendar/store.py
import logging
import threading
import time
import uuid
from typing import Callable, List, Optional, Set

from class_calendar.schemas.enrollment import Enrollment, candidate_of
from class_calendar.utils.blob_store import (
    BlobStore, PersistenceCorruption, decode_records, encode_records,
)

logger = logging.getLogger("class_calendar.store")


def new_id() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


class ScheduleStore:
    """
    Owns the ordered list of enrollments and flushes the whole list to
    one blob after every mutation. Insertion order is the stored order.

    Callers only ever get copies back; every read and write goes through
    one lock so there is a single writer.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        key: str,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.blob_store = blob_store
        self.key = key
        self.id_factory = id_factory
        self.clock = clock
        self._lock = threading.RLock()
        self._rows: List[Enrollment] = []
        self._issued: Set[str] = set()
        self.reload()

    @property
    def lock(self):
        """Reentrant; hold it to make a read-then-write sequence atomic."""
        return self._lock

    # ---- persistence ----
    def load(self) -> List[Enrollment]:
        try:
            raw = self.blob_store.get(self.key)
        except Exception:
            logger.exception("Could not read %s, starting empty", self.key)
            return []
        if raw is None:
            return []
        try:
            return decode_records(raw)
        except PersistenceCorruption as e:
            logger.warning("Stored enrollments under %s are unreadable (%s), starting empty", self.key, e)
            return []

    def save(self, records) -> None:
        self.blob_store.set(self.key, encode_records(records))

    def reload(self) -> None:
        with self._lock:
            self._rows = self.load()
            self._issued.update(r.id for r in self._rows)
            logger.info("Loaded %d enrollment(s) from %s", len(self._rows), self.key)

    # ---- queries ----
    def list(self) -> List[Enrollment]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._rows]

    def get(self, record_id: str) -> Optional[Enrollment]:
        with self._lock:
            idx = self._index(record_id)
            return None if idx is None else self._rows[idx].model_copy(deep=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    # ---- commands ----
    def add(self, candidate) -> Enrollment:
        c = candidate_of(candidate)
        with self._lock:
            record = Enrollment(id=self._next_id(), created_at=self.clock(), **c.field_values())
            self._commit(self._rows + [record])
            logger.info("Added enrollment %s", record.id)
            return record.model_copy(deep=True)

    def replace(self, record_id: str, candidate) -> Optional[Enrollment]:
        c = candidate_of(candidate)
        with self._lock:
            idx = self._index(record_id)
            if idx is None:
                logger.warning("Replace ignored, unknown enrollment %s", record_id)
                return None
            record = self._rows[idx].edited(c)
            rows = list(self._rows)
            rows[idx] = record
            self._commit(rows)
            logger.info("Updated enrollment %s", record_id)
            return record.model_copy(deep=True)

    def remove(self, record_id: str) -> bool:
        with self._lock:
            idx = self._index(record_id)
            if idx is None:
                logger.warning("Remove ignored, unknown enrollment %s", record_id)
                return False
            self._commit(self._rows[:idx] + self._rows[idx + 1:])
            logger.info("Removed enrollment %s", record_id)
            return True

    # ---- helpers ----
    def _commit(self, rows) -> None:
        # in-memory list only changes once the blob write went through
        self.save(rows)
        self._rows = rows

    def _index(self, record_id: str) -> Optional[int]:
        for i, r in enumerate(self._rows):
            if r.id == record_id:
                return i
        return None

    def _next_id(self) -> str:
        # ids are never handed out twice, even after the record is gone
        for _ in range(100):
            rid = self.id_factory()
            if rid not in self._issued:
                self._issued.add(rid)
                return rid
        raise RuntimeError("id factory keeps returning ids already in use")
