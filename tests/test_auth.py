"""Tests for the authentication service."""

import pytest

from pocketbook.domain.auth import normalize_email
from pocketbook.domain.errors import AuthenticationError, ConflictError, ValidationError

PASSWORD = "correct horse battery"


class TestSignUp:
    def test_sign_up_returns_session(self, auth_service):
        session = auth_service.sign_up(" Carol@Example.com ", PASSWORD)

        assert session.email == "carol@example.com"
        assert isinstance(session.user_id, int)

    def test_password_is_hashed(self, auth_service, temp_db, user_a):
        stored = temp_db.get_password_hash(user_a.user_id)

        assert stored != PASSWORD
        assert PASSWORD not in stored

    def test_duplicate_email(self, auth_service, user_a):
        with pytest.raises(ConflictError, match="already exists"):
            auth_service.sign_up("ALICE@example.com", PASSWORD)

    def test_short_password(self, auth_service):
        with pytest.raises(ValidationError, match="at least 8 characters"):
            auth_service.sign_up("dave@example.com", "short")

    @pytest.mark.parametrize("email", ["", "not-an-email", "@example.com", "dave@"])
    def test_invalid_email(self, email):
        with pytest.raises(ValidationError):
            normalize_email(email)


class TestSignIn:
    def test_sign_in(self, auth_service, user_a):
        assert auth_service.sign_in("alice@example.com", PASSWORD) == user_a

    def test_wrong_password(self, auth_service, user_a):
        with pytest.raises(AuthenticationError, match="Invalid login credentials"):
            auth_service.sign_in("alice@example.com", "wrong password")

    def test_unknown_user_gets_same_message(self, auth_service):
        with pytest.raises(AuthenticationError, match="Invalid login credentials"):
            auth_service.sign_in("nobody@example.com", PASSWORD)


class TestSession:
    def test_session_for_registered_user(self, auth_service, user_a):
        assert auth_service.session_for("Alice@Example.com") == user_a

    @pytest.mark.parametrize("email", [None, "", "nobody@example.com"])
    def test_session_for_unknown(self, auth_service, email):
        with pytest.raises(AuthenticationError, match="Not authenticated"):
            auth_service.session_for(email)


class TestChangePassword:
    def test_change_password(self, auth_service, user_a):
        auth_service.change_password(user_a, PASSWORD, "a much better password")

        assert auth_service.sign_in("alice@example.com", "a much better password") == user_a
        with pytest.raises(AuthenticationError):
            auth_service.sign_in("alice@example.com", PASSWORD)

    def test_requires_current_password(self, auth_service, user_a):
        with pytest.raises(AuthenticationError):
            auth_service.change_password(user_a, "guess", "a much better password")

    def test_new_password_must_be_long_enough(self, auth_service, user_a):
        with pytest.raises(ValidationError):
            auth_service.change_password(user_a, PASSWORD, "short")

    def test_requires_session(self, auth_service):
        with pytest.raises(AuthenticationError, match="Not authenticated"):
            auth_service.change_password(None, PASSWORD, "a much better password")
