"""Tests for the SQLite table store."""
import sqlite3

import pytest

from escala.errors import SchemaMismatchError, StoreError
from escala.models.period import Period
from escala.models.person import Person
from escala.store.base import detect_schema_mismatch
from escala.store.sqlite_store import SqliteRosterStore


def _create_legacy_db(path):
    """A database from before per-account rosters: no owner_id anywhere."""
    with sqlite3.connect(path) as conn:
        conn.execute("CREATE TABLE people (id TEXT PRIMARY KEY, name TEXT NOT NULL)")
        conn.execute("""
            CREATE TABLE assignments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                date TEXT, period TEXT, person1_id TEXT, person2_id TEXT
            )
        """)
        conn.commit()


class TestPeople:

    def test_insert_and_fetch_ordered_by_name(self, sqlite_store):
        sqlite_store.insert_person(Person(id="2", name="bruno", owner_id="u-1"))
        sqlite_store.insert_person(Person(id="1", name="Ana", owner_id="u-1"))

        people = sqlite_store.fetch_people("u-1")

        assert [p.name for p in people] == ["Ana", "bruno"]
        assert people[0].owner_id == "u-1"

    def test_owner_scoping(self, sqlite_store):
        sqlite_store.insert_person(Person(id="1", name="Ana", owner_id="u-1"))
        sqlite_store.insert_person(Person(id="2", name="Bruno", owner_id="u-2"))
        sqlite_store.insert_person(Person(id="3", name="Shared"))

        assert [p.id for p in sqlite_store.fetch_people("u-1")] == ["1"]
        assert [p.id for p in sqlite_store.fetch_people("u-2")] == ["2"]
        assert [p.id for p in sqlite_store.fetch_people(None)] == ["3"]

    def test_duplicate_id_is_store_error(self, sqlite_store):
        sqlite_store.insert_person(Person(id="1", name="Ana"))
        with pytest.raises(StoreError):
            sqlite_store.insert_person(Person(id="1", name="Ana again"))

    def test_delete_clears_slots(self, sqlite_store):
        sqlite_store.insert_person(Person(id="p-ana", name="Ana", owner_id="u-1"))
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING,
                                       {"person1_id": "p-ana", "person2_id": "p-x"}, "u-1")

        sqlite_store.delete_person("p-ana", "u-1")

        assert sqlite_store.fetch_people("u-1") == []
        [a] = sqlite_store.fetch_assignments("u-1")
        assert a.person1_id is None
        assert a.person2_id == "p-x"

    def test_delete_ignores_other_owner(self, sqlite_store):
        sqlite_store.insert_person(Person(id="p-ana", name="Ana", owner_id="u-1"))
        sqlite_store.delete_person("p-ana", "u-2")
        assert len(sqlite_store.fetch_people("u-1")) == 1


class TestAssignments:

    def test_upsert_creates(self, sqlite_store):
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person1_id": "p-ana"}, "u-1")

        [a] = sqlite_store.fetch_assignments("u-1")
        assert a.date == "2026-01-04"
        assert a.period is Period.MORNING
        assert a.person1_id == "p-ana"
        assert a.person2_id is None
        assert a.owner_id == "u-1"

    def test_upsert_updates_only_given_column(self, sqlite_store):
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person1_id": "p-ana"}, "u-1")
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person2_id": "p-bruno"}, "u-1")

        [a] = sqlite_store.fetch_assignments("u-1")
        assert (a.person1_id, a.person2_id) == ("p-ana", "p-bruno")

    def test_upsert_clear_slot(self, sqlite_store):
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person1_id": "p-ana"}, "u-1")
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person1_id": None}, "u-1")

        [a] = sqlite_store.fetch_assignments("u-1")
        assert a.is_empty

    def test_same_key_per_owner(self, sqlite_store):
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person1_id": "a"}, "u-1")
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person1_id": "b"}, "u-2")
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person1_id": "c"}, None)
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person2_id": "d"}, None)

        assert sqlite_store.fetch_assignments("u-1")[0].person1_id == "a"
        assert sqlite_store.fetch_assignments("u-2")[0].person1_id == "b"
        [shared] = sqlite_store.fetch_assignments(None)
        assert shared.occupants == ("c", "d")

    def test_periods_are_distinct(self, sqlite_store):
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person1_id": "a"})
        sqlite_store.upsert_assignment("2026-01-04", Period.EVENING, {"person1_id": "b"})
        assert len(sqlite_store.fetch_assignments()) == 2

    def test_unknown_field_rejected(self, sqlite_store):
        with pytest.raises(ValueError):
            sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person3_id": "x"})

    def test_empty_fields_rejected(self, sqlite_store):
        with pytest.raises(ValueError):
            sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {})

    @pytest.mark.parametrize("date_id", ["2026-1-4", "2026-02-30", "2026-W01-1", "amanhã"])
    def test_malformed_date_never_stored(self, sqlite_store, date_id):
        sqlite_store.upsert_assignment("2026-01-04", Period.MORNING, {"person1_id": "p-ana"}, "u-1")

        with pytest.raises(ValueError):
            sqlite_store.upsert_assignment(date_id, Period.MORNING, {"person1_id": "p-ana"}, "u-1")

        assert [a.date for a in sqlite_store.fetch_assignments("u-1")] == ["2026-01-04"]


class TestSchemaMismatch:

    def test_missing_tables(self, tmp_path):
        store = SqliteRosterStore(tmp_path / "empty.db")

        with pytest.raises(SchemaMismatchError) as exc:
            store.fetch_people()

        assert "people" in str(exc.value)
        assert "init-db" in exc.value.remediation

    def test_legacy_columns(self, tmp_path):
        path = tmp_path / "legacy.db"
        _create_legacy_db(path)
        store = SqliteRosterStore(path)

        with pytest.raises(SchemaMismatchError) as exc:
            store.fetch_assignments("u-1")
        assert "owner_id" in exc.value.remediation

    def test_ensure_schema_on_legacy_db_reports_mismatch(self, tmp_path):
        path = tmp_path / "legacy.db"
        _create_legacy_db(path)

        with pytest.raises(SchemaMismatchError):
            SqliteRosterStore(path, create_schema=True)

    @pytest.mark.parametrize("message, expected", [
        ("no such table: assignments", "assignments"),
        ("no such column: owner_id", "owner_id"),
        ("table people has no column named owner_id", "owner_id"),
        ('relation "public.assignments" does not exist', "public.assignments"),
        ("Could not find the 'owner_id' column of 'people'", "owner_id"),
        ("database is locked", None),
        ("", None),
    ])
    def test_detect_schema_mismatch(self, message, expected):
        assert detect_schema_mismatch(message) == expected
