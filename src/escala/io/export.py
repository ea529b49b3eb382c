"""Month roster export: DataFrame, CSV and Excel."""
import io
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from escala.core.calendar import date_to_id, format_date_display, generate_shift_days, month_name
from escala.core.reconcile import find_assignment
from escala.models.assignment import Assignment
from escala.models.person import Person
from escala.models.rules import DAY_STYLES

COLUMNS = ["Data", "Dia", "Período", "Voluntário 1", "Voluntário 2"]

THIN = Side(border_style="thin", color="CCCCCC")
BORDER_THIN = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)
HEADER_FILL = "1E3A8A"


def month_to_dataframe(
    people: Sequence[Person],
    assignments: Sequence[Assignment],
    year: int,
    month: int,
) -> pd.DataFrame:
    """
    One row per (service day, period) of a zero-based month.

    Empty slots are "", occupants are shown by name.
    """
    names = {p.id: p.name for p in people}
    rows = []
    for day in generate_shift_days(year, month):
        date_id = date_to_id(day.date)
        for period in day.periods:
            a = find_assignment(assignments, date_id, period)
            rows.append({
                "Data": format_date_display(day.date),
                "Dia": day.weekday_label,
                "Período": period.value,
                "Voluntário 1": names.get(a.person1_id, "") if a else "",
                "Voluntário 2": names.get(a.person2_id, "") if a else "",
            })
    if not rows:
        return pd.DataFrame(columns=COLUMNS)
    return pd.DataFrame(rows, columns=COLUMNS)


def export_to_csv(df: pd.DataFrame, output: Union[str, Path, io.StringIO, None] = None) -> str:
    """Write the month table as CSV; returns the CSV text as well."""
    text = df.to_csv(index=False)
    if isinstance(output, io.StringIO):
        output.write(text)
    elif output is not None:
        Path(output).write_text(text, encoding="utf-8")
    return text


def _fill(color: str) -> PatternFill:
    color = color.lstrip("#")
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def export_to_excel(
    df: pd.DataFrame,
    output: Union[str, Path, io.BytesIO],
    year: int,
    month: int,
) -> None:
    """
    Export the month table to a styled workbook.

    Args:
        df: Output of month_to_dataframe
        output: File path or BytesIO buffer
        year: Calendar year (for the title)
        month: Zero-based month (for the title)
    """
    wb = Workbook()
    ws = wb.active
    ws.title = f"{month_name(month)} {year}"

    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(COLUMNS))
    title = ws.cell(row=1, column=1, value=f"Escala - {month_name(month)} {year}")
    title.font = Font(bold=True, size=14)
    title.alignment = Alignment(horizontal="center")

    for j, col in enumerate(COLUMNS, start=1):
        cell = ws.cell(row=2, column=j, value=col)
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = _fill(HEADER_FILL)
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = BORDER_THIN

    for i, record in enumerate(df.to_dict("records"), start=3):
        style = DAY_STYLES.get(record["Dia"])
        for j, col in enumerate(COLUMNS, start=1):
            cell = ws.cell(row=i, column=j, value=record[col])
            cell.border = BORDER_THIN
            cell.alignment = Alignment(horizontal="center", vertical="center")
            if style and col in ("Data", "Dia"):
                cell.fill = _fill(style.color_bg)
                cell.font = Font(bold=True, color=style.color_text.lstrip("#"))

    for j, width in enumerate([12, 16, 10, 28, 28], start=1):
        ws.column_dimensions[get_column_letter(j)].width = width
    ws.freeze_panes = "A3"

    if isinstance(output, io.BytesIO):
        wb.save(output)
    else:
        wb.save(str(output))


def unassigned_slots(df: pd.DataFrame) -> List[str]:
    """Labels of the (day, period) rows with at least one empty slot."""
    missing = df[(df["Voluntário 1"] == "") | (df["Voluntário 2"] == "")]
    return [f"{r['Data']} {r['Período']}" for r in missing.to_dict("records")]
