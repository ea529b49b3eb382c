"""
Authentication
==============
Email/password accounts stored alongside the roster, and the session
lifecycle the UI subscribes to.

Usage:
    auth = AuthService(Path("data/escala.db"))
    sub = auth.on_session_change(lambda event, session: ...)
    auth.sign_in("ana@example.com", "secret")
    ...
    sub.unsubscribe()
"""
import hashlib
import hmac
import re
import secrets
import sqlite3
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

from escala.errors import AuthError, StoreError
from escala.utils.logging_setup import get_logger

logger = get_logger("escala.auth")

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

MIN_PASSWORD_LENGTH = 6
PBKDF2_ITERATIONS = 200_000

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class User:
    """A signed-up account. Its id scopes the account's roster."""
    id: str
    email: str
    full_name: str = ""

    @property
    def display_name(self) -> str:
        """Full name, or the local part of the email."""
        return self.full_name or self.email.split("@")[0]


@dataclass(frozen=True)
class Session:
    """An authenticated session."""
    user: User
    token: str = field(default_factory=lambda: secrets.token_urlsafe(24))
    created_at: datetime = field(default_factory=datetime.now)


SessionListener = Callable[[str, Optional[Session]], None]


class Subscription:
    """Handle returned by on_session_change."""

    def __init__(self, listeners: List[SessionListener], callback: SessionListener):
        self._listeners = listeners
        self._callback = callback

    @property
    def active(self) -> bool:
        return self._callback in self._listeners

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


def hash_password(password: str, salt: Optional[bytes] = None) -> str:
    """PBKDF2-SHA256 hash encoded as 'salt$digest' (hex)."""
    salt = salt or secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Check a password against a stored hash."""
    try:
        salt_hex, digest_hex = stored.split("$", 1)
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    candidate = hash_password(password, salt).split("$", 1)[1]
    return hmac.compare_digest(candidate, digest_hex)


class AuthService:
    """
    Account storage plus the current session of one UI client.

    Listeners registered with on_session_change are called with
    (SIGNED_IN, session) or (SIGNED_OUT, None).
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._session: Optional[Session] = None
        self._listeners: List[SessionListener] = []
        self._init_db()

    def _init_db(self):
        """Create the users table if it doesn't exist."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS users (
                        id TEXT PRIMARY KEY,
                        email TEXT NOT NULL UNIQUE,
                        full_name TEXT,
                        password_hash TEXT NOT NULL,
                        created_at TIMESTAMP
                    )
                """)
                conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot initialise accounts in {self.db_path}: {e}") from e

    @property
    def current_session(self) -> Optional[Session]:
        return self._session

    @property
    def current_user(self) -> Optional[User]:
        return self._session.user if self._session else None

    def on_session_change(self, callback: SessionListener) -> Subscription:
        """Subscribe to sign-in/sign-out events."""
        self._listeners.append(callback)
        return Subscription(self._listeners, callback)

    def _emit(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event, self._session)

    def sign_up(self, email: str, password: str, full_name: str = "") -> User:
        """
        Create an account. Does not sign in.

        Raises:
            AuthError: invalid email, short password or email already taken
        """
        email = str(email).strip().lower()
        if not _EMAIL_RE.match(email):
            raise AuthError("Informe um e-mail válido.")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(f"A senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres.")

        user = User(id=str(uuid.uuid4()), email=email, full_name=str(full_name).strip())
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    "INSERT INTO users (id, email, full_name, password_hash, created_at) VALUES (?, ?, ?, ?, ?)",
                    (user.id, user.email, user.full_name, hash_password(password), datetime.now().isoformat())
                )
                conn.commit()
        except sqlite3.IntegrityError:
            raise AuthError("Este e-mail já está cadastrado.")
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        logger.info(f"Signed up {email}")
        return user

    def sign_in(self, email: str, password: str) -> Session:
        """
        Authenticate and start a session.

        Raises:
            AuthError: unknown email or wrong password
        """
        email = str(email).strip().lower()
        try:
            with sqlite3.connect(self.db_path) as conn:
                row = conn.execute(
                    "SELECT id, email, full_name, password_hash FROM users WHERE email = ?",
                    (email,)
                ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

        if not row or not verify_password(password or "", row[3]):
            logger.warning(f"Failed sign-in for {email}")
            raise AuthError("E-mail ou senha inválidos.")

        self._session = Session(user=User(id=row[0], email=row[1], full_name=row[2] or ""))
        logger.info(f"Signed in {email}")
        self._emit(SIGNED_IN)
        return self._session

    def sign_out(self) -> None:
        """End the current session, if any."""
        if self._session is None:
            return
        logger.info(f"Signed out {self._session.user.email}")
        self._session = None
        self._emit(SIGNED_OUT)


def can_manage_roster(user: Optional[User], admin_email: Optional[str]) -> bool:
    """
    Whether a user may add or remove roster members.

    With no administrator configured every signed-in user manages their own
    roster; otherwise only the administrator does.
    """
    if user is None:
        return False
    if not admin_email:
        return True
    return user.email.lower() == admin_email.strip().lower()
