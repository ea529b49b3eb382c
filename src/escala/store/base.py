"""
Table Store Contract
====================
The narrow interface the roster board needs from its backing store.
"""
import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from escala.models.assignment import Assignment, Occupant
from escala.models.period import Period
from escala.models.person import Person

# Error texts that mean the schema is older than the application
_SCHEMA_PATTERNS = [
    re.compile(r"no such table:?\s*(?P<name>\w+)?", re.IGNORECASE),
    re.compile(r"no such column:?\s*(?P<name>[\w.]+)?", re.IGNORECASE),
    re.compile(r"has no column named\s*(?P<name>\w+)?", re.IGNORECASE),
    re.compile(r"relation \"?(?P<name>[\w.]+)\"? does not exist", re.IGNORECASE),
    re.compile(r"column \"?(?P<name>[\w.]+)\"? does not exist", re.IGNORECASE),
    re.compile(r"could not find the '(?P<name>\w+)' column", re.IGNORECASE),
]


def detect_schema_mismatch(message: str) -> Optional[str]:
    """
    Guess from a backend error message whether a table or column is missing.

    Returns:
        The missing object's name ("" when unknown), or None if the
        message does not look like a schema problem.
    """
    for pattern in _SCHEMA_PATTERNS:
        match = pattern.search(message or "")
        if match:
            return match.group("name") or ""
    return None


class RosterStore(ABC):
    """Persistence for people and assignments, optionally scoped to an owner."""

    @abstractmethod
    def ensure_schema(self) -> None:
        """Create the tables this store needs."""

    @abstractmethod
    def fetch_people(self, owner_id: Optional[str] = None) -> List[Person]:
        """All people of an owner, ordered by name."""

    @abstractmethod
    def fetch_assignments(self, owner_id: Optional[str] = None) -> List[Assignment]:
        """All assignments of an owner."""

    @abstractmethod
    def insert_person(self, person: Person) -> None:
        """Insert a new person record."""

    @abstractmethod
    def delete_person(self, person_id: str, owner_id: Optional[str] = None) -> None:
        """Delete a person by id and clear the slots that reference it."""

    @abstractmethod
    def upsert_assignment(
        self,
        date_id: str,
        period: Period,
        fields: Dict[str, Occupant],
        owner_id: Optional[str] = None,
    ) -> None:
        """
        Insert or update the assignment keyed by (date, period, owner).

        Only the columns named in ``fields`` change on an existing record.
        """
