import json

import pytest
from sqlalchemy.exc import OperationalError

from class_calendar.database import init_db, make_engine, make_session_factory
from class_calendar.store import ScheduleStore
from class_calendar.utils.blob_store import (
    MemoryBlobStore, PersistenceCorruption, SqlBlobStore, decode_records,
)

from conftest import KEY, make_candidate


def test_missing_blob_loads_empty(store):
    assert store.list() == []


@pytest.mark.parametrize("raw", ["not json {", '{"id": "a"}', "[1, 2]", '[{"name": "no id"}]', ""])
def test_corrupted_blob_loads_empty(raw):
    blobs = MemoryBlobStore({KEY: raw})
    assert ScheduleStore(blobs, KEY).load() == []


def test_decode_raises_corruption_internally():
    with pytest.raises(PersistenceCorruption):
        decode_records("][")


class BrokenReads(MemoryBlobStore):
    def get(self, key):
        raise OSError("disk gone")


def test_read_failure_is_fail_open():
    assert ScheduleStore(BrokenReads(), KEY).list() == []


def test_add_assigns_identity_and_persists(store, blobs):
    rec = store.add(make_candidate())
    assert rec.id == "id-1"
    assert rec.created_at == 1_700_000_000_000

    stored = json.loads(blobs.get(KEY))
    assert len(stored) == 1
    assert stored[0]["id"] == "id-1"
    assert stored[0]["courseCode"] == "CSCI-250"
    assert stored[0]["createdAt"] == 1_700_000_000_000


def test_insertion_order_is_kept(store):
    store.add(make_candidate(name="Zed", day="Fri"))
    store.add(make_candidate(name="Amy", day="Mon"))
    assert [r.name for r in store.list()] == ["Zed", "Amy"]


def test_unknown_fields_tolerated_on_read():
    raw = json.dumps([{
        "id": "x1", "name": "Bo", "email": "bo@rit.edu", "major": "Art", "year": "2",
        "day": "Tue", "start": "13:00", "end": "14:00", "createdAt": 5, "color": "#F76902",
    }])
    rows = ScheduleStore(MemoryBlobStore({KEY: raw}), KEY).list()
    assert len(rows) == 1
    assert rows[0].id == "x1"
    assert rows[0].notes == ""
    assert not hasattr(rows[0], "color")


def test_replace_preserves_id_created_at_and_position(store, blobs):
    first = store.add(make_candidate(name="One"))
    store.add(make_candidate(name="Two"))

    updated = store.replace(first.id, make_candidate(name="Uno", location="Room 5"))
    assert updated.id == first.id
    assert updated.created_at == first.created_at

    rows = store.list()
    assert [r.name for r in rows] == ["Uno", "Two"]
    assert json.loads(blobs.get(KEY))[0]["location"] == "Room 5"


def test_replace_and_remove_unknown_id(store, blobs):
    store.add(make_candidate())
    before = blobs.get(KEY)
    assert store.replace("nope", make_candidate()) is None
    assert store.remove("nope") is False
    assert blobs.get(KEY) == before


def test_remove(store, blobs):
    a = store.add(make_candidate(name="A"))
    store.add(make_candidate(name="B"))
    assert store.remove(a.id) is True
    assert [r.name for r in store.list()] == ["B"]
    assert [r["name"] for r in json.loads(blobs.get(KEY))] == ["B"]


def test_ids_are_never_reused():
    handed = iter(["dup", "dup", "fresh"])
    store = ScheduleStore(MemoryBlobStore(), KEY, id_factory=lambda: next(handed))
    first = store.add(make_candidate())
    store.remove(first.id)
    second = store.add(make_candidate())
    assert first.id == "dup"
    assert second.id == "fresh"


def test_snapshots_are_copies(store):
    rec = store.add(make_candidate())
    snap = store.list()[0]
    snap.name = "Mallory"
    assert store.get(rec.id).name == "Ada Lovelace"


def test_reload_reads_back_what_was_saved(blobs, ids):
    store = ScheduleStore(blobs, KEY, id_factory=ids)
    store.add(make_candidate(name="Persisted"))
    again = ScheduleStore(blobs, KEY)
    assert [r.name for r in again.list()] == ["Persisted"]


class BrokenWrites(MemoryBlobStore):
    def set(self, key, value):
        raise OSError("read-only")


def test_failed_write_leaves_memory_unchanged():
    store = ScheduleStore(BrokenWrites(), KEY)
    with pytest.raises(OSError):
        store.add(make_candidate())
    assert store.list() == []


def test_sql_blob_store_round_trip(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'kv.db'}")
    init_db(engine)
    blobs = SqlBlobStore(make_session_factory(engine))

    assert blobs.get(KEY) is None
    blobs.set(KEY, "[]")
    blobs.set(KEY, '["x"]')
    assert blobs.get(KEY) == '["x"]'

    store = ScheduleStore(blobs, KEY)
    store.add(make_candidate(name="From SQL"))
    assert [r.name for r in ScheduleStore(blobs, KEY).list()] == ["From SQL"]


def test_sql_blob_store_without_tables_propagates_write_error(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    blobs = SqlBlobStore(make_session_factory(engine))
    with pytest.raises(OperationalError):
        blobs.set(KEY, "[]")
