"""Team manager UI component for Streamlit."""
import plotly.express as px
import streamlit as st

from app.state.session import SessionStateManager
from escala.auth import can_manage_roster
from escala.board import ReconcileRequired, RosterBoard
from escala.core.calendar import month_name
from escala.core.stats import assignment_counts, counts_to_dataframe


def _report(state: SessionStateManager, result, success: str):
    if isinstance(result, ReconcileRequired):
        state.reset_slot_widgets()
        message = f"Erro ao salvar no banco ({result.error}). Lista recarregada."
        if result.remediation:
            message += f"\n\n{result.remediation}"
        state.flash("error", message)
    else:
        state.flash("success", success)


def render_team_manager(board: RosterBoard, state: SessionStateManager, key_prefix: str = "team"):
    """
    Render the roster: add form, member list with removal, and
    the month's assignment counts.
    """
    user = state.session.user if state.session else None
    can_edit = can_manage_roster(user, state.config.admin_email)

    head_col, refresh_col, count_col = st.columns([3, 1, 1])
    with head_col:
        st.subheader("👥 Gestão da Equipe")
        st.caption("Controle de acesso exclusivo para administradores.")
    with refresh_col:
        if st.button("🔄 Recarregar Lista", key=f"{key_prefix}_refresh"):
            with st.spinner("Buscando nomes no banco..."):
                board.refresh()
            state.reset_slot_widgets()
            st.rerun()
    with count_col:
        st.metric("Membros", len(board.people))

    if can_edit:
        with st.form(f"{key_prefix}_add_form", clear_on_submit=True):
            name_col, btn_col = st.columns([4, 1])
            with name_col:
                new_name = st.text_input(
                    "Nome", placeholder="Nome completo do voluntário", label_visibility="collapsed"
                )
            with btn_col:
                submitted = st.form_submit_button("💾 Salvar no Banco", type="primary")
        if submitted:
            if new_name.strip():
                result = board.settle(board.add_person(new_name))
                _report(state, result, f"✅ {new_name.strip()} adicionado(a)")
                st.rerun()
            else:
                st.warning("Informe um nome.")
    else:
        st.info("🔒 Somente o administrador pode alterar a equipe.")

    st.divider()

    if not board.people:
        st.info("Nenhum membro cadastrado.")
    for person in board.people:
        name_col, action_col = st.columns([5, 1])
        with name_col:
            st.markdown(f"**{person.name}**")
        if not can_edit:
            continue
        with action_col:
            if state.pending_removal == person.id:
                if st.button("Confirmar", key=f"{key_prefix}_confirm_{person.id}", type="primary"):
                    state.pending_removal = None
                    result = board.settle(board.remove_person(person.id))
                    state.reset_slot_widgets()
                    _report(state, result, f"🗑️ {person.name} removido(a)")
                    st.rerun()
                if st.button("Cancelar", key=f"{key_prefix}_cancel_{person.id}"):
                    state.pending_removal = None
                    st.rerun()
            elif st.button("🗑️", key=f"{key_prefix}_remove_{person.id}", help="Remover do Banco"):
                state.pending_removal = person.id
                st.rerun()

    if board.people:
        year, month = state.view_month
        st.divider()
        st.write(f"**Escalas por voluntário: {month_name(month)} {year}**")
        df = counts_to_dataframe(assignment_counts(board.people, board.assignments, year, month))
        fig = px.bar(df, x="Voluntário", y="Escalas", color_discrete_sequence=["#4285F4"])
        fig.update_layout(margin=dict(l=20, r=20, t=30, b=20), height=300)
        st.plotly_chart(fig, width="stretch")
