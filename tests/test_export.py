"""Tests for the month table, its exports and per-person counts."""
import io

import pytest
from openpyxl import load_workbook

from escala.core.stats import assignment_counts, counts_to_dataframe
from escala.io.export import COLUMNS, export_to_csv, export_to_excel, month_to_dataframe, unassigned_slots
from escala.io.pdf_export import export_month_to_pdf, latin1_text
from escala.models.assignment import Assignment
from escala.models.period import Period
from escala.models.person import Person


@pytest.fixture
def january_df(sample_people, sample_assignments):
    return month_to_dataframe(sample_people, sample_assignments, 2026, 0)


class TestMonthTable:

    def test_one_row_per_period(self, january_df):
        # 4 Sundays x 2 periods + 4 Wednesdays x 1
        assert len(january_df) == 12
        assert list(january_df.columns) == COLUMNS

    def test_first_rows(self, january_df):
        rows = january_df.to_dict("records")
        assert rows[0] == {
            "Data": "04/01/2026", "Dia": "DOMINGO", "Período": "MANHÃ",
            "Voluntário 1": "Ana", "Voluntário 2": "Bruno",
        }
        assert rows[1]["Período"] == "NOITE"
        assert rows[2]["Dia"] == "QUARTA-FEIRA"
        assert rows[2]["Voluntário 2"] == "Ana"

    def test_removed_person_shows_empty(self, sample_assignments):
        df = month_to_dataframe([], sample_assignments, 2026, 0)
        assert df.iloc[0]["Voluntário 1"] == ""

    def test_unassigned_slots(self, january_df):
        missing = unassigned_slots(january_df)
        assert len(missing) == 11
        assert "04/01/2026 MANHÃ" not in missing
        assert "04/01/2026 NOITE" in missing


class TestCSVExport:

    def test_export_to_csv_buffer(self, january_df):
        buffer = io.StringIO()
        text = export_to_csv(january_df, buffer)

        assert buffer.getvalue() == text
        assert text.splitlines()[0] == ",".join(COLUMNS)
        assert "Ana" in text

    def test_export_to_csv_file(self, january_df, tmp_path):
        path = tmp_path / "escala.csv"
        export_to_csv(january_df, path)
        assert "Bruno" in path.read_text(encoding="utf-8")


class TestExcelExport:

    def test_export_to_excel_buffer(self, january_df):
        buffer = io.BytesIO()
        export_to_excel(january_df, buffer, 2026, 0)
        buffer.seek(0)

        wb = load_workbook(buffer)
        ws = wb.active
        assert ws.title == "Janeiro 2026"
        assert ws.cell(row=1, column=1).value == "Escala - Janeiro 2026"
        assert [ws.cell(row=2, column=j).value for j in range(1, 6)] == COLUMNS
        assert ws.cell(row=3, column=4).value == "Ana"
        assert ws.max_row == 2 + len(january_df)


class TestPDFExport:

    def test_export_pdf_buffer(self, january_df):
        buffer = io.BytesIO()
        export_month_to_pdf(january_df, buffer, 2026, 0)
        assert buffer.getvalue().startswith(b"%PDF")

    def test_export_pdf_file(self, january_df, tmp_path):
        path = tmp_path / "escala.pdf"
        export_month_to_pdf(january_df, path, 2026, 0)
        assert path.stat().st_size > 0

    def test_names_outside_latin1(self):
        people = [Person(id="p1", name="Łukasz 🙂"), Person(id="p2", name="Zoë Ødegård")]
        assignments = [Assignment(date="2026-01-04", period=Period.MORNING, person1_id="p1", person2_id="p2")]
        df = month_to_dataframe(people, assignments, 2026, 0)

        buffer = io.BytesIO()
        export_month_to_pdf(df, buffer, 2026, 0)
        assert buffer.getvalue().startswith(b"%PDF")

    @pytest.mark.parametrize("name, expected", [
        ("João", "João"),
        ("Zoë Ødegård", "Zoë Ødegård"),
        ("Erdős", "Erdos"),
        ("Łukasz 🙂", "?ukasz ?"),
    ])
    def test_latin1_text(self, name, expected):
        assert latin1_text(name) == expected


class TestStats:

    def test_assignment_counts(self, sample_people, sample_assignments):
        counts = assignment_counts(sample_people, sample_assignments, 2026, 0)
        assert counts == {"Ana": 2, "Bruno": 1, "Carla": 1}

    def test_counts_outside_month_ignored(self, sample_people, sample_assignments):
        counts = assignment_counts(sample_people, sample_assignments, 2026, 1)
        assert counts == {"Ana": 0, "Bruno": 0, "Carla": 0}

    def test_counts_dataframe_sorted(self):
        df = counts_to_dataframe({"Bruno": 1, "Ana": 1, "Carla": 3})
        assert list(df["Voluntário"]) == ["Carla", "Ana", "Bruno"]

    def test_counts_dataframe_empty(self):
        assert counts_to_dataframe({}).empty
