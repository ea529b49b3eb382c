"""
Export View
===========
Handles file downloads (CSV, Excel, PDF) of the month shown.
"""
import io

import streamlit as st
from fpdf.errors import FPDFException

from app.state.session import SessionStateManager
from escala.board import RosterBoard
from escala.core.calendar import month_name
from escala.io.export import export_to_csv, export_to_excel, month_to_dataframe, unassigned_slots
from escala.io.pdf_export import export_month_to_pdf
from escala.utils.logging_setup import get_logger

logger = get_logger("escala.app.export")


def render_downloads(board: RosterBoard, state: SessionStateManager):
    """Render the download section."""
    year, month = state.view_month
    label = f"{month_name(month)} {year}"
    stem = f"escala_{year}_{month + 1:02d}"

    st.subheader(f"📥 Downloads: {label}")

    df = month_to_dataframe(board.people, board.assignments, year, month)
    st.dataframe(df, width="stretch", hide_index=True)

    missing = unassigned_slots(df)
    if missing:
        with st.expander(f"⚠️ {len(missing)} período(s) com vaga em aberto", expanded=False):
            for item in missing:
                st.write(f"- {item}")

    col1, col2, col3 = st.columns(3)

    with col1:
        st.download_button(
            "📥 Baixar CSV",
            export_to_csv(df),
            f"{stem}.csv",
            "text/csv",
        )

    with col2:
        xlsx_buffer = io.BytesIO()
        export_to_excel(df, xlsx_buffer, year, month)
        st.download_button(
            "📥 Baixar Excel",
            xlsx_buffer.getvalue(),
            f"{stem}.xlsx",
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

    with col3:
        pdf_buffer = io.BytesIO()
        try:
            export_month_to_pdf(df, pdf_buffer, year, month)
        except FPDFException as e:
            logger.error(f"PDF export failed for {label}: {e}")
            st.error(f"❌ Não foi possível gerar o PDF: {e}")
        else:
            st.download_button(
                "📥 Baixar PDF",
                pdf_buffer.getvalue(),
                f"{stem}.pdf",
                "application/pdf",
            )
