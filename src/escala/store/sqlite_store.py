"""
SQLite Table Store
==================
Shared roster storage in a single SQLite database file.
Every browser session opens its own connection per call; the database
enforces (date, period, owner_id) uniqueness and performs the upserts.
"""
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from pydantic import ValidationError

from escala.core.calendar import date_to_id, parse_date_id
from escala.errors import SchemaMismatchError, StoreError
from escala.models.assignment import Assignment, Occupant
from escala.models.period import Period, Slot
from escala.models.person import Person
from escala.models.validated import AssignmentRecord, PersonRecord
from escala.store.base import RosterStore, detect_schema_mismatch
from escala.utils.logging_setup import get_logger

logger = get_logger("escala.store.sqlite")

# Default database location
DEFAULT_DB_PATH = Path("data/escala.db")

SLOT_COLUMNS = tuple(slot.column for slot in Slot)

SCHEMA = """
CREATE TABLE IF NOT EXISTS people (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    owner_id TEXT NOT NULL DEFAULT '',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS assignments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date TEXT NOT NULL,          -- YYYY-MM-DD
    period TEXT NOT NULL,        -- 'MANHÃ' | 'NOITE'
    person1_id TEXT,
    person2_id TEXT,
    owner_id TEXT NOT NULL DEFAULT '',
    UNIQUE(date, period, owner_id)
);
CREATE INDEX IF NOT EXISTS idx_people_owner ON people(owner_id, name);
CREATE INDEX IF NOT EXISTS idx_assignments_owner ON assignments(owner_id, date);
"""


def _owner_key(owner_id: Optional[str]) -> str:
    # NULL would defeat the UNIQUE constraint, so "no owner" is stored as ''
    return owner_id or ""


def remediation_for(db_path: Union[str, Path], missing: str = "") -> str:
    """Instruction shown to the administrator when the schema is out of date."""
    what = f" ('{missing}' is missing)" if missing else ""
    return (
        f"The roster database schema is out of date{what}. "
        f"Run `escala init-db --db {db_path}` to create the missing tables; "
        f"for a database created before per-account rosters, back it up and "
        f"recreate it, since columns are not migrated automatically."
    )


class SqliteRosterStore(RosterStore):
    """
    Roster persistence in SQLite.

    Usage:
        store = SqliteRosterStore(Path("data/escala.db"))
        store.ensure_schema()
        store.insert_person(Person.new("Alice", owner_id=user.id))
        store.upsert_assignment("2026-01-04", Period.MORNING, {"person1_id": pid}, owner_id=user.id)
    """

    def __init__(self, db_path: Optional[Union[str, Path]] = None, create_schema: bool = False):
        """Initialize with database path; optionally create the tables."""
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        if create_schema:
            self.ensure_schema()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, translating sqlite errors into store errors."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            if conn is not None:
                conn.rollback()
            missing = detect_schema_mismatch(str(e))
            if missing is not None:
                logger.error(f"Schema mismatch in {self.db_path}: {e}")
                raise SchemaMismatchError(str(e), remediation_for(self.db_path, missing)) from e
            logger.error(f"SQLite error in {self.db_path}: {e}")
            raise StoreError(str(e)) from e
        finally:
            if conn is not None:
                conn.close()

    def ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.executescript(SCHEMA)
        logger.debug(f"Schema ensured at {self.db_path}")

    def fetch_people(self, owner_id: Optional[str] = None) -> List[Person]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT id, name, owner_id FROM people WHERE owner_id = ? ORDER BY name COLLATE NOCASE, id",
                (_owner_key(owner_id),)
            ).fetchall()
        try:
            people = [PersonRecord.model_validate(dict(r)).to_person() for r in rows]
        except ValidationError as e:
            raise StoreError(f"Invalid person row: {e}") from e
        logger.debug(f"Fetched {len(people)} people (owner={owner_id!r})")
        return people

    def fetch_assignments(self, owner_id: Optional[str] = None) -> List[Assignment]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT date, period, person1_id, person2_id, owner_id FROM assignments "
                "WHERE owner_id = ? ORDER BY date, period",
                (_owner_key(owner_id),)
            ).fetchall()
        try:
            assignments = [AssignmentRecord.model_validate(dict(r)).to_assignment() for r in rows]
        except ValidationError as e:
            raise StoreError(f"Invalid assignment row: {e}") from e
        logger.debug(f"Fetched {len(assignments)} assignments (owner={owner_id!r})")
        return assignments

    def insert_person(self, person: Person) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO people (id, name, owner_id) VALUES (?, ?, ?)",
                (person.id, person.name, _owner_key(person.owner_id))
            )
        logger.info(f"Inserted person {person.name!r} ({person.id})")

    def delete_person(self, person_id: str, owner_id: Optional[str] = None) -> None:
        owner = _owner_key(owner_id)
        with self._connect() as conn:
            conn.execute("DELETE FROM people WHERE id = ? AND owner_id = ?", (person_id, owner))
            for column in SLOT_COLUMNS:
                conn.execute(
                    f"UPDATE assignments SET {column} = NULL WHERE {column} = ? AND owner_id = ?",
                    (person_id, owner)
                )
        logger.info(f"Deleted person {person_id}")

    def upsert_assignment(
        self,
        date_id: str,
        period: Period,
        fields: Dict[str, Occupant],
        owner_id: Optional[str] = None,
    ) -> None:
        unknown = set(fields) - set(SLOT_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown assignment fields: {sorted(unknown)}")
        if not fields:
            raise ValueError("upsert_assignment needs at least one slot field")

        date_id = date_to_id(parse_date_id(date_id))
        period = Period(period)
        columns = sorted(fields)
        values = [fields[c] or None for c in columns]
        updates = ", ".join(f"{c} = excluded.{c}" for c in columns)

        with self._connect() as conn:
            conn.execute(f"""
                INSERT INTO assignments (date, period, owner_id, {", ".join(columns)})
                VALUES (?, ?, ?, {", ".join("?" for _ in columns)})
                ON CONFLICT(date, period, owner_id) DO UPDATE SET {updates}
            """, (date_id, period.value, _owner_key(owner_id), *values))
        logger.debug(f"Upserted {date_id} {period.value}: {fields}")
