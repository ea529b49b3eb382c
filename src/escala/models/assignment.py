"""Assignment and shift day models."""
import datetime
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .period import Period, Slot


# Occupant of a slot: a person id, or None when the slot is empty
Occupant = Optional[str]


@dataclass(frozen=True)
class Assignment:
    """Who occupies each of the two slots of a (date, period)."""

    date: str  # YYYY-MM-DD
    period: Period
    person1_id: Occupant = None
    person2_id: Occupant = None
    owner_id: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.period, str) and not isinstance(self.period, Period):
            object.__setattr__(self, "period", Period.from_string(self.period))
        # "" is a legacy spelling of the empty marker
        object.__setattr__(self, "person1_id", self.person1_id or None)
        object.__setattr__(self, "person2_id", self.person2_id or None)

    @property
    def key(self) -> Tuple[str, Period]:
        """Uniqueness key within one owner."""
        return (self.date, self.period)

    def occupant(self, slot: Slot) -> Occupant:
        """Return the occupant of a slot."""
        return self.person1_id if Slot(slot) is Slot.FIRST else self.person2_id

    def with_occupant(self, slot: Slot, occupant: Occupant) -> "Assignment":
        """Copy with only the requested slot replaced."""
        if Slot(slot) is Slot.FIRST:
            return replace(self, person1_id=occupant or None)
        return replace(self, person2_id=occupant or None)

    @property
    def occupants(self) -> Tuple[Occupant, Occupant]:
        return (self.person1_id, self.person2_id)

    @property
    def is_empty(self) -> bool:
        return self.person1_id is None and self.person2_id is None

    def to_dict(self) -> dict:
        """Convert to the persisted record shape."""
        return {
            "date": self.date,
            "period": self.period.value,
            "person1_id": self.person1_id,
            "person2_id": self.person2_id,
            "owner_id": self.owner_id,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Assignment":
        """Create from a persisted record."""
        return cls(
            date=str(d["date"]),
            period=Period.from_string(d["period"]),
            person1_id=d.get("person1_id") or None,
            person2_id=d.get("person2_id") or None,
            owner_id=d.get("owner_id") or None,
        )


@dataclass(frozen=True)
class ShiftDay:
    """A service day of the month and the periods it carries. Derived, never stored."""

    date: datetime.date
    weekday_label: str
    periods: Tuple[Period, ...]

    @property
    def is_sunday(self) -> bool:
        return self.date.weekday() == 6
