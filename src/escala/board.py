"""
Roster Board
============
Application state for one signed-in account: the roster, the assignments
and the optimistic mutations that keep them in step with the store.

Each mutation changes local state first, then writes to the store, and
returns a MutationResult. The caller hands that result to settle():
a Confirmed result needs nothing more, a ReconcileRequired result makes
the board re-fetch and overwrite its local state.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from escala.core.calendar import date_to_id, parse_date_id
from escala.core.reconcile import apply_assignment, assignment_patch, clear_person, find_assignment
from escala.errors import SchemaMismatchError, StoreError
from escala.models.assignment import Assignment, Occupant
from escala.models.period import Period, Slot
from escala.models.person import Person
from escala.store.base import RosterStore
from escala.utils.logging_setup import get_logger

logger = get_logger("escala.board")


@dataclass(frozen=True)
class Snapshot:
    """Local state captured before an optimistic change."""
    people: Tuple[Person, ...] = ()
    assignments: Tuple[Assignment, ...] = ()


@dataclass(frozen=True)
class Confirmed:
    """The store accepted the change; local state is authoritative."""
    action: str
    detail: str = ""


@dataclass(frozen=True)
class ReconcileRequired:
    """The store rejected the change; local state must be re-fetched."""
    action: str
    error: str
    previous: Snapshot = field(default_factory=Snapshot)
    remediation: str = ""


MutationResult = Union[Confirmed, ReconcileRequired]


class RosterBoard:
    """
    People and assignments of one owner, mirrored from a RosterStore.

    Usage:
        board = RosterBoard(store, owner_id=user.id)
        board.load()
        board.settle(board.assign("2026-01-04", Period.MORNING, 1, person.id))
    """

    def __init__(self, store: RosterStore, owner_id: Optional[str] = None):
        self.store = store
        self.owner_id = owner_id
        self.people: List[Person] = []
        self.assignments: List[Assignment] = []
        self.loading = False
        self.loaded = False
        self.last_error: Optional[str] = None
        self.remediation: Optional[str] = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """
        Fetch people and assignments, replacing local state.

        On failure the error is logged and recorded in last_error and the
        local state is left as it was.

        Returns:
            True if both reads succeeded
        """
        self.loading = True
        try:
            people = self.store.fetch_people(self.owner_id)
            assignments = self.store.fetch_assignments(self.owner_id)
        except StoreError as e:
            self._record_error("load", e)
            return False
        finally:
            self.loading = False

        self.people = people
        self.assignments = assignments
        self.loaded = True
        self.last_error = None
        self.remediation = None
        logger.info(f"Loaded {len(people)} people and {len(assignments)} assignments")
        return True

    refresh = load

    def person(self, person_id: Occupant) -> Optional[Person]:
        if not person_id:
            return None
        for p in self.people:
            if p.id == person_id:
                return p
        return None

    def occupant_name(self, person_id: Occupant) -> str:
        """Display name of an occupant, or '' for an empty or unknown slot."""
        p = self.person(person_id)
        return p.name if p else ""

    def assignment_for(self, date_id: str, period: Period) -> Optional[Assignment]:
        return find_assignment(self.assignments, date_id, period)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_person(self, name: str) -> MutationResult:
        """
        Add a roster member.

        Raises:
            ValueError: the trimmed name is empty
        """
        person = Person.new(name, owner_id=self.owner_id)
        previous = self._snapshot()
        self.people = self.people + [person]

        try:
            self.store.insert_person(person)
        except StoreError as e:
            return self._reconcile("add_person", e, previous)

        logger.info(f"Added {person.name!r}")
        return Confirmed("add_person", person.id)

    def remove_person(self, person_id: str) -> MutationResult:
        """Remove a roster member and empty the slots it occupied."""
        previous = self._snapshot()
        self.people = [p for p in self.people if p.id != person_id]
        self.assignments = clear_person(self.assignments, person_id)

        try:
            self.store.delete_person(person_id, self.owner_id)
        except StoreError as e:
            return self._reconcile("remove_person", e, previous)

        logger.info(f"Removed person {person_id}")
        return Confirmed("remove_person", person_id)

    def assign(self, date_id: str, period: Period, slot: Slot, occupant: Occupant) -> MutationResult:
        """
        Put a person in (or clear) one slot of a service period.

        Raises:
            ValueError: date_id is not a YYYY-MM-DD calendar day
        """
        date_id = date_to_id(parse_date_id(date_id))
        period = Period(period)
        slot = Slot(slot)
        occupant = occupant or None

        previous = self._snapshot()
        self.assignments, record = apply_assignment(
            self.assignments, date_id, period, slot, occupant, owner_id=self.owner_id
        )

        try:
            self.store.upsert_assignment(date_id, period, assignment_patch(slot, occupant), self.owner_id)
        except StoreError as e:
            return self._reconcile("assign", e, previous)

        logger.info(f"Assigned {date_id} {period.value} slot {slot.value} -> {occupant or '(vazio)'}")
        return Confirmed("assign", f"{record.date} {record.period.value}")

    def settle(self, result: MutationResult) -> MutationResult:
        """
        Apply a mutation result.

        A ReconcileRequired result re-fetches from the store; if that read
        fails too, the pre-mutation snapshot is restored. The write error
        itself stays on the result; last_error only reports failed reads.
        """
        if isinstance(result, Confirmed):
            return result

        logger.warning(f"{result.action} failed, reconciling with store: {result.error}")
        if not self.load():
            self.people = list(result.previous.people)
            self.assignments = list(result.previous.assignments)
            logger.warning(f"Re-fetch failed, restored state from before {result.action}")
        return result

    # ------------------------------------------------------------------

    def _snapshot(self) -> Snapshot:
        return Snapshot(people=tuple(self.people), assignments=tuple(self.assignments))

    def _record_error(self, action: str, error: StoreError) -> None:
        self.last_error = str(error)
        if isinstance(error, SchemaMismatchError):
            self.remediation = error.remediation
        logger.error(f"{action} failed: {error}")

    def _reconcile(self, action: str, error: StoreError, previous: Snapshot) -> ReconcileRequired:
        logger.error(f"{action} failed: {error}")
        remediation = error.remediation if isinstance(error, SchemaMismatchError) else ""
        return ReconcileRequired(action=action, error=str(error), previous=previous, remediation=remediation)
