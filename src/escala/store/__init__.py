# escala/store - Table store contract and backends
from .base import RosterStore, detect_schema_mismatch
from .sqlite_store import DEFAULT_DB_PATH, SqliteRosterStore

__all__ = ["RosterStore", "SqliteRosterStore", "DEFAULT_DB_PATH", "detect_schema_mismatch"]
