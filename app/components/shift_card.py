"""Shift card: one service day with two selectable slots per period."""
from typing import List, Optional

import streamlit as st

from app.components.styling import day_css_class
from app.state.session import SLOT_WIDGET_PREFIX, SessionStateManager
from escala.board import ReconcileRequired, RosterBoard
from escala.core.calendar import date_to_id, format_date_display
from escala.models.assignment import ShiftDay
from escala.models.period import Period, Slot
from escala.models.rules import RULES


def slot_widget_key(date_id: str, period: Period, slot: Slot) -> str:
    return f"{SLOT_WIDGET_PREFIX}{date_id}_{period.name}_{int(slot)}"


def _on_slot_change(state: SessionStateManager, date_id: str, period: Period, slot: Slot):
    """Selectbox callback: optimistic assign, then reconcile if the write failed."""
    board = state.board
    if board is None:
        return
    occupant = st.session_state.get(slot_widget_key(date_id, period, slot))
    result = board.settle(board.assign(date_id, period, slot, occupant))
    if isinstance(result, ReconcileRequired):
        state.reset_slot_widgets()
        message = f"Não foi possível salvar a escala ({result.error}). Dados recarregados."
        if result.remediation:
            message += f"\n\n{result.remediation}"
        state.flash("error", message)


def render_shift_card(day: ShiftDay, board: RosterBoard, state: SessionStateManager):
    """Render a card for one service day."""
    date_id = date_to_id(day.date)
    options: List[Optional[str]] = [None] + [p.id for p in board.people]

    st.markdown(
        f'<div class="shift-card-header {day_css_class(day.weekday_label)}">'
        f'{day.weekday_label} - {format_date_display(day.date)}</div>',
        unsafe_allow_html=True,
    )

    for period in day.periods:
        existing = board.assignment_for(date_id, period)
        label_col, *slot_cols = st.columns([1, 2, 2])
        with label_col:
            st.markdown(f'<div class="period-label">{period.label}</div>', unsafe_allow_html=True)

        for slot, col in zip(Slot, slot_cols):
            occupant = existing.occupant(slot) if existing else None
            index = options.index(occupant) if occupant in options else 0
            with col:
                st.selectbox(
                    f"{period.label} {int(slot)}",
                    options,
                    index=index,
                    format_func=lambda pid: board.occupant_name(pid) if pid else RULES.empty_choice_label,
                    key=slot_widget_key(date_id, period, slot),
                    on_change=_on_slot_change,
                    args=(state, date_id, period, slot),
                    label_visibility="collapsed",
                )
