"""
Escala - Streamlit Web UI
=========================
Volunteer roster for Sunday and Wednesday services.
"""
import sys
import os
import streamlit as st

# Add src and project root to python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from app.state.session import SessionStateManager
from app.components.styling import apply_styling
from app.components.login import render_login
from app.components.team_manager import render_team_manager
from app.views.schedule import render_schedule
from app.views.export import render_downloads
from escala.config import AppConfig
from escala.models.rules import RULES
from escala.utils.logging_setup import init_logging


def _load_config() -> AppConfig:
    """Read settings and configure logging once per browser session."""
    if "config" in st.session_state:
        return st.session_state["config"]
    config = AppConfig.from_env()
    init_logging(config)
    return config


def main():
    # 1. Init
    config = _load_config()
    SessionStateManager.init_state(config)
    state = SessionStateManager()
    apply_styling()

    if not state.start():
        st.title(f"📅 {RULES.app_title}")
        st.error(f"❌ Não foi possível abrir o banco de dados.\n\n{state.startup_error}")
        return

    _render_flash(state)

    # 2. Auth gate
    session = state.session
    if session is None:
        render_login(state)
        return

    board = state.board
    if board is None:
        # Signed in before the listener existed (e.g. after a code reload)
        state.handle_session_change("SIGNED_IN", session)
        board = state.board

    # 3. Header
    title_col, user_col = st.columns([4, 1])
    with title_col:
        st.title(f"📅 {RULES.app_title}")
    with user_col:
        st.caption("Olá,")
        st.markdown(f"**{session.user.display_name}**")
        if st.button("🚪 Sair", key="sign_out"):
            state.auth.sign_out()
            st.rerun()

    # 4. Load failures and schema problems
    if board.last_error:
        st.error(f"❌ Erro ao buscar dados: {board.last_error}")
        if board.remediation:
            st.warning(f"🛠️ {board.remediation}")
        if st.button("🔄 Recarregar", key="reload_after_error"):
            board.refresh()
            state.reset_slot_widgets()
            st.rerun()

    # 5. Main tabs
    labels = RULES.tab_labels
    tab_schedule, tab_team, tab_downloads = st.tabs([labels["schedule"], labels["team"], labels["downloads"]])

    with tab_schedule:
        render_schedule(board, state)

    with tab_team:
        render_team_manager(board, state)

    with tab_downloads:
        render_downloads(board, state)


def _render_flash(state: SessionStateManager):
    message = state.pop_flash()
    if not message:
        return
    level, text = message
    if level == "success":
        st.success(text)
    elif level == "error":
        st.error(text)
    else:
        st.info(text)


if __name__ == "__main__":
    main()
