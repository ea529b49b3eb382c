# escala/models - Data models for the roster
from .assignment import Assignment, Occupant, ShiftDay
from .period import SERVICE_PERIODS, WEEKDAY_LABELS, Period, Slot
from .person import Person
from .rules import DAY_STYLES, MONTH_NAMES, RULES

__all__ = [
    "Person",
    "Period", "Slot", "SERVICE_PERIODS", "WEEKDAY_LABELS",
    "Assignment", "Occupant", "ShiftDay",
    "RULES", "DAY_STYLES", "MONTH_NAMES",
]
