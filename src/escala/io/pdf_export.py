"""
PDF Export for the Month Roster
===============================
A4 portrait sheet listing every service day of the month, for printing
and posting. Uses fpdf2.
"""
import io
import unicodedata
from datetime import datetime
from pathlib import Path
from typing import Union

import pandas as pd
from fpdf import FPDF

from escala.core.calendar import month_name
from escala.io.export import COLUMNS
from escala.models.rules import DAY_STYLES
from escala.utils.logging_setup import get_logger

logger = get_logger("escala.io.pdf_export")

COLUMN_WIDTHS = [24, 32, 20, 57, 57]
HEADER_BG = (30, 58, 138)


def latin1_text(value) -> str:
    """
    Text the core Helvetica font can encode.

    Characters outside latin-1 fall back to their unaccented base letter
    (e.g. "ő" -> "o"), or to "?" when there is none.
    """
    out = []
    for ch in str(value):
        if ord(ch) < 256:
            out.append(ch)
            continue
        base = unicodedata.normalize("NFKD", ch).encode("latin-1", "ignore").decode("latin-1")
        out.append(base or "?")
    return "".join(out)


def _hex_to_rgb(color: str):
    color = color.lstrip("#")
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))


class RosterPDF(FPDF):
    """PDF with a title header and page footer."""

    def __init__(self, title: str):
        super().__init__(orientation="P", unit="mm", format="A4")
        self.title = title
        self.set_auto_page_break(auto=True, margin=15)

    def header(self):
        self.set_font("Helvetica", "B", 14)
        self.cell(0, 10, self.title, border=0, align="C")
        self.ln(6)
        self.set_font("Helvetica", "", 8)
        self.cell(0, 5, f"Gerado em {datetime.now().strftime('%d/%m/%Y %H:%M')}", border=0, align="C")
        self.ln(8)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.cell(0, 10, f"Página {self.page_no()}/{{nb}}", align="C")


def export_month_to_pdf(
    df: pd.DataFrame,
    output: Union[str, Path, io.BytesIO],
    year: int,
    month: int,
) -> None:
    """
    Export the month table (from month_to_dataframe) to PDF.

    Args:
        df: Month table
        output: File path or BytesIO buffer
        year: Calendar year
        month: Zero-based month
    """
    pdf = RosterPDF(title=f"Escala - {month_name(month)} {year}")
    pdf.alias_nb_pages()
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 9)
    pdf.set_fill_color(*HEADER_BG)
    pdf.set_text_color(255, 255, 255)
    for col, width in zip(COLUMNS, COLUMN_WIDTHS):
        pdf.cell(width, 7, col, border=1, align="C", fill=True)
    pdf.ln()

    pdf.set_font("Helvetica", "", 9)
    for record in df.to_dict("records"):
        style = DAY_STYLES.get(record["Dia"])
        for col, width in zip(COLUMNS, COLUMN_WIDTHS):
            fill = bool(style) and col in ("Data", "Dia")
            if fill:
                pdf.set_fill_color(*_hex_to_rgb(style.color_bg))
                pdf.set_text_color(*_hex_to_rgb(style.color_text))
            else:
                pdf.set_text_color(0, 0, 0)
            pdf.cell(width, 6, latin1_text(record[col]), border=1, align="C", fill=fill)
        pdf.ln()

    if isinstance(output, io.BytesIO):
        output.write(bytes(pdf.output()))
    else:
        pdf.output(str(output))
    logger.debug(f"PDF exported: {len(df)} rows for {month_name(month)} {year}")
