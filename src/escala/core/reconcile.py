"""
Assignment Reconciler
=====================
Decides whether a slot change creates a new assignment or updates an
existing one. Pure functions: the caller owns the collection and the store.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from escala.models.assignment import Assignment, Occupant
from escala.models.period import Period, Slot


def find_assignment(
    assignments: Sequence[Assignment],
    date_id: str,
    period: Period,
) -> Optional[Assignment]:
    """Return the assignment for (date, period), if any."""
    period = Period(period)
    for a in assignments:
        if a.date == date_id and a.period is period:
            return a
    return None


def apply_assignment(
    assignments: Sequence[Assignment],
    date_id: str,
    period: Period,
    slot: Slot,
    occupant: Occupant,
    owner_id: Optional[str] = None,
) -> Tuple[List[Assignment], Assignment]:
    """
    Set one slot of a (date, period), replacing or appending the record.

    Args:
        assignments: Current collection (not modified)
        date_id: YYYY-MM-DD
        period: Service period
        slot: 1 or 2
        occupant: Person id, or None to clear the slot
        owner_id: Owner stamped on a newly created record

    Returns:
        (new collection, the resulting record)
    """
    period = Period(period)
    slot = Slot(slot)

    updated = list(assignments)
    for idx, existing in enumerate(updated):
        if existing.date == date_id and existing.period is period:
            record = existing.with_occupant(slot, occupant)
            updated[idx] = record
            return updated, record

    record = Assignment(date=date_id, period=period, owner_id=owner_id).with_occupant(slot, occupant)
    updated.append(record)
    return updated, record


def assignment_patch(slot: Slot, occupant: Occupant) -> Dict[str, Occupant]:
    """Columns to send with the upsert: only the slot that changed."""
    return {Slot(slot).column: occupant or None}


def clear_person(assignments: Sequence[Assignment], person_id: str) -> List[Assignment]:
    """Empty every slot that references a removed person."""
    cleared = []
    for a in assignments:
        if a.person1_id == person_id:
            a = a.with_occupant(Slot.FIRST, None)
        if a.person2_id == person_id:
            a = a.with_occupant(Slot.SECOND, None)
        cleared.append(a)
    return cleared
