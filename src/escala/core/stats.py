"""Per-person statistics for a month of assignments."""
from typing import Dict, List, Sequence

import pandas as pd

from escala.core.calendar import date_to_id, generate_shift_days
from escala.models.assignment import Assignment
from escala.models.person import Person


def month_date_ids(year: int, month: int) -> List[str]:
    """Date keys of the service days of a zero-based month."""
    return [date_to_id(d.date) for d in generate_shift_days(year, month)]


def assignment_counts(
    people: Sequence[Person],
    assignments: Sequence[Assignment],
    year: int,
    month: int,
) -> Dict[str, int]:
    """
    Count the slots each person fills in a month.

    Every roster member appears, with 0 when unassigned. Occupants that
    no longer exist in the roster are ignored.

    Returns:
        {person name: slot count}, in roster order
    """
    in_month = set(month_date_ids(year, month))
    by_id = {p.id: 0 for p in people}
    for a in assignments:
        if a.date not in in_month:
            continue
        for occupant in a.occupants:
            if occupant in by_id:
                by_id[occupant] += 1
    return {p.name: by_id[p.id] for p in people}


def counts_to_dataframe(counts: Dict[str, int]) -> pd.DataFrame:
    """Convert counts to a DataFrame sorted by count, for charting."""
    if not counts:
        return pd.DataFrame(columns=["Voluntário", "Escalas"])
    df = pd.DataFrame(list(counts.items()), columns=["Voluntário", "Escalas"])
    return df.sort_values(["Escalas", "Voluntário"], ascending=[False, True]).reset_index(drop=True)
