# escala/core - Calendar and assignment logic
from .calendar import (
    MonthInfo,
    date_to_id,
    format_date_display,
    generate_shift_days,
    month_name,
    parse_date_id,
    shift_month,
    target_month_info,
)
from .reconcile import apply_assignment, assignment_patch, clear_person, find_assignment

__all__ = [
    "generate_shift_days", "date_to_id", "parse_date_id",
    "target_month_info", "shift_month", "month_name", "format_date_display", "MonthInfo",
    "apply_assignment", "assignment_patch", "clear_person", "find_assignment",
]
