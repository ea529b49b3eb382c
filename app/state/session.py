"""
Session State Management
========================
Encapsulates all Streamlit session state interactions, and the
init/teardown lifecycle driven by the auth session-change events.
"""
from typing import Optional, Tuple, TYPE_CHECKING
import streamlit as st

from escala.auth import SIGNED_IN, SIGNED_OUT, AuthService, Session
from escala.board import RosterBoard
from escala.config import AppConfig
from escala.core.calendar import shift_month, target_month_info
from escala.errors import SchemaMismatchError, StoreError
from escala.store.sqlite_store import SqliteRosterStore
from escala.utils.logging_setup import get_logger

if TYPE_CHECKING:
    from escala.auth import Subscription
    from escala.store.base import RosterStore

logger = get_logger("escala.app.session")

# Prefix of the per-slot selectbox keys
SLOT_WIDGET_PREFIX = "slot_"


class SessionStateManager:
    """Manages type-safe access to session state."""

    @staticmethod
    def init_state(config: Optional[AppConfig] = None):
        """Initialize default session state values."""
        config = config or AppConfig()
        if config.start_month is not None:
            year = config.start_year or target_month_info().year
            month = config.start_month
        else:
            current = target_month_info()
            year, month = current.year, current.month

        defaults = {
            "config": config,
            "auth": None,
            "store": None,
            "auth_subscription": None,
            "board": None,
            "startup_error": None,
            "view_year": year,
            "view_month": month,
            "login_mode": "login",
            "pending_removal": None,
            "flash": None,
        }

        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, auth: Optional[AuthService] = None, store: Optional["RosterStore"] = None) -> bool:
        """
        Create the auth service and store once per browser session and
        subscribe to session changes.

        Returns:
            False if the backing store could not be opened
        """
        if self.auth is not None:
            return True

        config = self.config
        try:
            store = store or SqliteRosterStore(config.db_path, create_schema=config.auto_create_schema)
            auth = auth or AuthService(config.db_path)
        except SchemaMismatchError as e:
            st.session_state["startup_error"] = f"{e}\n\n{e.remediation}"
            return False
        except StoreError as e:
            logger.error(f"Cannot open store: {e}")
            st.session_state["startup_error"] = str(e)
            return False

        st.session_state["store"] = store
        st.session_state["auth"] = auth
        st.session_state["auth_subscription"] = auth.on_session_change(self.handle_session_change)
        st.session_state["startup_error"] = None
        return True

    def teardown(self):
        """Unsubscribe from the auth service and forget the session."""
        subscription: Optional["Subscription"] = st.session_state.get("auth_subscription")
        if subscription is not None:
            subscription.unsubscribe()
        st.session_state["auth_subscription"] = None
        st.session_state["auth"] = None
        st.session_state["store"] = None
        st.session_state["board"] = None

    def handle_session_change(self, event: str, session: Optional[Session]):
        """Build the roster board on sign-in, drop it on sign-out."""
        if event == SIGNED_IN and session is not None:
            board = RosterBoard(self.store, owner_id=session.user.id)
            board.load()
            st.session_state["board"] = board
        elif event == SIGNED_OUT:
            st.session_state["board"] = None
            st.session_state["pending_removal"] = None
            self.reset_slot_widgets()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> AppConfig:
        return st.session_state.get("config") or AppConfig()

    @property
    def auth(self) -> Optional[AuthService]:
        return st.session_state.get("auth")

    @property
    def store(self) -> Optional["RosterStore"]:
        return st.session_state.get("store")

    @property
    def board(self) -> Optional[RosterBoard]:
        return st.session_state.get("board")

    @property
    def session(self) -> Optional[Session]:
        return self.auth.current_session if self.auth else None

    @property
    def startup_error(self) -> Optional[str]:
        return st.session_state.get("startup_error")

    @property
    def view_month(self) -> Tuple[int, int]:
        """(year, zero-based month) currently shown."""
        return st.session_state.get("view_year"), st.session_state.get("view_month")

    def change_month(self, offset: int):
        year, month = shift_month(*self.view_month, offset)
        st.session_state["view_year"] = year
        st.session_state["view_month"] = month

    @property
    def login_mode(self) -> str:
        return st.session_state.get("login_mode", "login")

    @login_mode.setter
    def login_mode(self, value: str):
        st.session_state["login_mode"] = value

    @property
    def pending_removal(self) -> Optional[str]:
        return st.session_state.get("pending_removal")

    @pending_removal.setter
    def pending_removal(self, value: Optional[str]):
        st.session_state["pending_removal"] = value

    def flash(self, level: str, message: str):
        """Queue a message for the next rerun."""
        st.session_state["flash"] = (level, message)

    def pop_flash(self) -> Optional[Tuple[str, str]]:
        message = st.session_state.get("flash")
        st.session_state["flash"] = None
        return message

    def reset_slot_widgets(self):
        """Forget selectbox values so they re-read the board on the next run."""
        for key in [k for k in st.session_state.keys() if str(k).startswith(SLOT_WIDGET_PREFIX)]:
            del st.session_state[key]
