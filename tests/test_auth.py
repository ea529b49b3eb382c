"""Tests for accounts and the session lifecycle."""
import pytest

from escala.auth import (
    SIGNED_IN,
    SIGNED_OUT,
    AuthService,
    User,
    can_manage_roster,
    hash_password,
    verify_password,
)
from escala.errors import AuthError


@pytest.fixture
def auth(tmp_path):
    return AuthService(tmp_path / "auth.db")


class TestPasswords:

    def test_hash_verifies(self):
        stored = hash_password("segredo1")
        assert verify_password("segredo1", stored)
        assert not verify_password("segredo2", stored)

    def test_hash_is_salted(self):
        assert hash_password("segredo1") != hash_password("segredo1")

    def test_malformed_hash(self):
        assert not verify_password("x", "not-a-hash")


class TestSignUpSignIn:

    def test_sign_up_does_not_sign_in(self, auth):
        user = auth.sign_up("Ana@Example.com ", "segredo1", full_name="Ana Souza")

        assert user.email == "ana@example.com"
        assert auth.current_session is None

    def test_sign_in(self, auth):
        created = auth.sign_up("ana@example.com", "segredo1", full_name="Ana Souza")

        session = auth.sign_in("ANA@example.com", "segredo1")

        assert session.user.id == created.id
        assert auth.current_user.display_name == "Ana Souza"
        assert session.token

    def test_duplicate_email(self, auth):
        auth.sign_up("ana@example.com", "segredo1")
        with pytest.raises(AuthError):
            auth.sign_up("ana@example.com", "outrasenha")

    @pytest.mark.parametrize("email, password", [
        ("not-an-email", "segredo1"),
        ("ana@example.com", "12345"),
        ("ana@example.com", ""),
    ])
    def test_invalid_sign_up(self, auth, email, password):
        with pytest.raises(AuthError):
            auth.sign_up(email, password)

    def test_wrong_password(self, auth):
        auth.sign_up("ana@example.com", "segredo1")
        with pytest.raises(AuthError, match="inválidos"):
            auth.sign_in("ana@example.com", "errada")
        assert auth.current_session is None

    def test_unknown_email(self, auth):
        with pytest.raises(AuthError):
            auth.sign_in("ninguem@example.com", "segredo1")


class TestSessionEvents:

    def test_listener_sees_sign_in_and_out(self, auth):
        events = []
        auth.on_session_change(lambda event, session: events.append((event, session)))
        auth.sign_up("ana@example.com", "segredo1")

        auth.sign_in("ana@example.com", "segredo1")
        auth.sign_out()

        assert [e for e, _ in events] == [SIGNED_IN, SIGNED_OUT]
        assert events[0][1].user.email == "ana@example.com"
        assert events[1][1] is None

    def test_sign_out_without_session_is_silent(self, auth):
        events = []
        auth.on_session_change(lambda event, session: events.append(event))
        auth.sign_out()
        assert events == []

    def test_unsubscribe(self, auth):
        events = []
        sub = auth.on_session_change(lambda event, session: events.append(event))
        assert sub.active

        sub.unsubscribe()
        sub.unsubscribe()
        auth.sign_up("ana@example.com", "segredo1")
        auth.sign_in("ana@example.com", "segredo1")

        assert not sub.active
        assert events == []


class TestRosterPermission:

    def test_no_user(self):
        assert not can_manage_roster(None, None)

    def test_no_admin_configured(self):
        assert can_manage_roster(User(id="1", email="ana@example.com"), None)

    def test_admin_only(self):
        admin = User(id="1", email="Admin@Example.com")
        other = User(id="2", email="ana@example.com")
        assert can_manage_roster(admin, "admin@example.com")
        assert not can_manage_roster(other, "admin@example.com")

    def test_display_name_falls_back_to_email(self):
        assert User(id="1", email="ana@example.com").display_name == "ana"
