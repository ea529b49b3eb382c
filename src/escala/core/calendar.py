"""
Service Calendar
================
Generates the service days of a month and the date helpers around them.

Months are zero-based (0 = January) throughout this module, matching the
month index stored in the UI state.
"""
import calendar
import datetime
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from escala.models.assignment import ShiftDay
from escala.models.period import SERVICE_PERIODS, WEEKDAY_LABELS
from escala.models.rules import MONTH_NAMES, RULES
from escala.utils.logging_setup import log_function_call


@dataclass(frozen=True)
class MonthInfo:
    """The month a roster view should display."""
    year: int
    month: int  # zero-based
    is_transitioned: bool = False


def _check_month(month: int) -> None:
    if not 0 <= month <= 11:
        raise ValueError(f"month must be a zero-based index 0-11, got {month}")


@log_function_call
def generate_shift_days(year: int, month: int) -> List[ShiftDay]:
    """
    List the service days of a month in ascending date order.

    Sundays carry a morning and an evening period, Wednesdays only an
    evening period. Every other weekday is left out.

    Args:
        year: Calendar year
        month: Zero-based month index (0-11)

    Returns:
        Ordered list of ShiftDay
    """
    _check_month(month)
    last_day = calendar.monthrange(year, month + 1)[1]

    days = []
    for day in range(1, last_day + 1):
        date = datetime.date(year, month + 1, day)
        weekday = date.weekday()
        if weekday in SERVICE_PERIODS:
            days.append(ShiftDay(
                date=date,
                weekday_label=WEEKDAY_LABELS[weekday],
                periods=SERVICE_PERIODS[weekday],
            ))
    return days


def date_to_id(date: Union[datetime.date, datetime.datetime]) -> str:
    """
    Format a date as the YYYY-MM-DD key used in the store.

    Built from the date's own year/month/day fields; a datetime is never
    converted to another timezone first.
    """
    return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"


def parse_date_id(text: str) -> datetime.date:
    """Parse a YYYY-MM-DD key back into a date."""
    parts = str(text).strip().split("-")
    if len(parts) != 3 or len(parts[0]) != 4 or len(parts[1]) != 2 or len(parts[2]) != 2:
        raise ValueError(f"expected YYYY-MM-DD, got {text!r}")
    try:
        year, month, day = (int(p) for p in parts)
    except ValueError:
        raise ValueError(f"expected YYYY-MM-DD, got {text!r}")
    return datetime.date(year, month, day)


def target_month_info(now: Optional[datetime.datetime] = None) -> MonthInfo:
    """
    Month to display at a given moment.

    From the rollover time (18:30) on the last day of a month onwards,
    the following month is shown.
    """
    now = now or datetime.datetime.now()
    month = now.month - 1
    last_day = calendar.monthrange(now.year, now.month)[1]
    rollover = datetime.datetime.combine(
        datetime.date(now.year, now.month, last_day),
        RULES.rollover_time,
        tzinfo=now.tzinfo,
    )
    if now >= rollover:
        year, month = shift_month(now.year, month, 1)
        return MonthInfo(year=year, month=month, is_transitioned=True)
    return MonthInfo(year=now.year, month=month, is_transitioned=False)


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Move a (year, zero-based month) pair by offset months."""
    _check_month(month)
    total = year * 12 + month + offset
    return total // 12, total % 12


def month_name(month: int) -> str:
    """Portuguese name of a zero-based month."""
    _check_month(month)
    return MONTH_NAMES[month]


def format_date_display(date: datetime.date) -> str:
    """DD/MM/YYYY, as printed on the shift cards."""
    return f"{date.day:02d}/{date.month:02d}/{date.year:04d}"
