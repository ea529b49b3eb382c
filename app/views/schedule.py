"""
Schedule View
=============
Month navigation and the list of shift cards.
"""
import streamlit as st

from app.components.shift_card import render_shift_card
from app.state.session import SessionStateManager
from escala.board import RosterBoard
from escala.core.calendar import generate_shift_days, month_name
from escala.models.rules import DAY_STYLES


def _render_month_nav(state: SessionStateManager):
    year, month = state.view_month
    prev_col, title_col, next_col = st.columns([1, 4, 1])
    with prev_col:
        if st.button("◀", key="month_prev", help="Mês anterior"):
            state.change_month(-1)
            st.rerun()
    with title_col:
        st.markdown(
            f'<div class="month-banner"><h2>{month_name(month)}</h2><p>{year}</p></div>',
            unsafe_allow_html=True,
        )
    with next_col:
        if st.button("▶", key="month_next", help="Próximo mês"):
            state.change_month(1)
            st.rerun()


def render_schedule(board: RosterBoard, state: SessionStateManager):
    """Render the monthly shift grid."""
    _render_month_nav(state)

    info_col, legend_col = st.columns([3, 2])
    with info_col:
        st.subheader("Cronograma de Atividades")
        st.caption("Defina os responsáveis para cada culto")
    with legend_col:
        legend = " ".join(
            f'<span class="shift-card-header" style="font-size:0.7rem;padding:0.2rem 0.6rem;'
            f'background:{s.color_bg};color:{s.color_text};border-radius:999px">{s.label}</span>'
            for s in DAY_STYLES.values()
        )
        st.markdown(legend, unsafe_allow_html=True)

    if not board.people:
        st.info("ℹ️ Cadastre voluntários na aba Equipe para preencher a escala.")

    year, month = state.view_month
    days = generate_shift_days(year, month)
    if not days:
        st.info("Nenhum dia de escala encontrado para este período.")
        return

    for day in days:
        with st.container(border=True):
            render_shift_card(day, board, state)
