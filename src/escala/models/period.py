"""Service period and slot definitions."""
from enum import Enum, IntEnum


class Period(str, Enum):
    """Time-of-day service windows. Values are the persisted tokens."""
    MORNING = "MANHÃ"
    EVENING = "NOITE"

    @property
    def label(self) -> str:
        """Display label."""
        return self.value

    @property
    def order(self) -> int:
        """Sort key, morning first."""
        return 0 if self is Period.MORNING else 1

    @classmethod
    def from_string(cls, s: str) -> "Period":
        """Parse a period from its token or a common alias."""
        mapping = {
            "manhã": cls.MORNING, "manha": cls.MORNING, "morning": cls.MORNING, "m": cls.MORNING,
            "noite": cls.EVENING, "evening": cls.EVENING, "night": cls.EVENING, "n": cls.EVENING,
        }
        key = str(s).strip().lower()
        if key in mapping:
            return mapping[key]
        for member in cls:
            if member.value == str(s).strip().upper():
                return member
        raise ValueError(f"Unknown period: {s!r}")

    @classmethod
    def _missing_(cls, value):
        # Period("MORNING"), Period("noite")
        try:
            return cls.from_string(value)
        except ValueError:
            return None


class Slot(IntEnum):
    """The two occupant positions of a service period."""
    FIRST = 1
    SECOND = 2

    @property
    def column(self) -> str:
        """Store column holding this slot's occupant."""
        return f"person{self.value}_id"


# Weekday numbers as returned by date.weekday()
WEDNESDAY = 2
SUNDAY = 6

WEEKDAY_LABELS = {
    SUNDAY: "DOMINGO",
    WEDNESDAY: "QUARTA-FEIRA",
}

# Periods served on each service weekday, in display order
SERVICE_PERIODS = {
    SUNDAY: (Period.MORNING, Period.EVENING),
    WEDNESDAY: (Period.EVENING,),
}
