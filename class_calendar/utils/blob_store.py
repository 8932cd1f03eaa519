# class_calendar/utils/blob_store.py
import json
import logging
from typing import Dict, List, Optional, Protocol

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from class_calendar.models.kv_blob import KvBlob
from class_calendar.schemas.enrollment import Enrollment

logger = logging.getLogger("class_calendar.storage")

_records_adapter = TypeAdapter(List[Enrollment])


class PersistenceCorruption(Exception):
    """Stored blob is missing or can't be turned back into records."""


class BlobStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryBlobStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqlBlobStore:
    """One row per key in kv_blobs; set() overwrites the whole value."""

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self.session_factory() as db:
            row = db.get(KvBlob, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        with self.session_factory() as db:
            try:
                row = db.get(KvBlob, key)
                if row is None:
                    db.add(KvBlob(key=key, value=value))
                else:
                    row.value = value
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                logger.exception("Failed to write blob %s", key)
                raise


def encode_records(records) -> str:
    return json.dumps(
        [r.model_dump(by_alias=True) for r in records],
        ensure_ascii=False,
    )


def decode_records(raw: Optional[str]) -> List[Enrollment]:
    if raw is None:
        raise PersistenceCorruption("no stored value")
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise PersistenceCorruption(f"not JSON: {e}") from e
    if not isinstance(data, list):
        raise PersistenceCorruption(f"expected a list, got {type(data).__name__}")
    try:
        return _records_adapter.validate_python(data)
    except ValidationError as e:
        raise PersistenceCorruption(f"{e.error_count()} invalid field(s)") from e
