"""Application tests for signup, login, logout and token resolution."""

import pytest
from identity.session.authentication import LogIn, LogOut, actor_for_token, user_for_token
from identity.session.session import Session
from identity.user.registration import SignUp, ensure_default_admin, find_user_by_email
from protean import current_domain
from protean.exceptions import ValidationError
from shared.actor import Role
from shared.errors import Unauthenticated


def _sign_up(email="jane@example.com", password="secret1", name="Jane Doe"):
    return current_domain.process(SignUp(name=name, email=email, password=password), asynchronous=False)


def _log_in(email="jane@example.com", password="secret1"):
    return current_domain.process(LogIn(email=email, password=password), asynchronous=False)


class TestSignUp:
    def test_signup_creates_customer_and_session(self):
        token = _sign_up()

        user = find_user_by_email("jane@example.com")
        assert user.name == "Jane Doe"
        assert user.role == Role.CUSTOMER.value
        assert user_for_token(token).id == user.id

    def test_duplicate_email_is_rejected(self):
        _sign_up()
        with pytest.raises(ValidationError) as exc:
            _sign_up(name="Someone Else")
        assert exc.value.messages["email"] == ["Email already exists"]

    def test_duplicate_check_ignores_case(self):
        _sign_up()
        with pytest.raises(ValidationError):
            _sign_up(email="JANE@example.com")


class TestLogIn:
    def test_login_returns_new_token(self):
        signup_token = _sign_up()
        token = _log_in()
        assert token != signup_token
        assert user_for_token(token).email == "jane@example.com"

    def test_login_records_last_login(self):
        _sign_up()
        _log_in()
        assert find_user_by_email("jane@example.com").last_login_at is not None

    def test_wrong_password(self):
        _sign_up()
        with pytest.raises(ValidationError) as exc:
            _log_in(password="wrong-one")
        assert exc.value.messages["credentials"] == ["Invalid email or password"]

    def test_unknown_email(self):
        with pytest.raises(ValidationError) as exc:
            _log_in(email="ghost@example.com")
        assert exc.value.messages["credentials"] == ["Invalid email or password"]


class TestLogOut:
    def test_logout_ends_session(self):
        token = _sign_up()
        current_domain.process(LogOut(token=token), asynchronous=False)

        assert not current_domain.repository_for(Session).get(token).is_active
        with pytest.raises(Unauthenticated):
            user_for_token(token)

    def test_logout_unknown_token_is_noop(self):
        current_domain.process(LogOut(token="unknown-token"), asynchronous=False)


class TestTokenResolution:
    def test_missing_token(self):
        with pytest.raises(Unauthenticated):
            user_for_token(None)

    def test_unknown_token(self):
        with pytest.raises(Unauthenticated):
            user_for_token("made-up")

    def test_actor_for_customer(self):
        actor = actor_for_token(_sign_up())
        assert not actor.is_admin


class TestDefaultAdmin:
    def test_default_admin_is_created(self):
        assert ensure_default_admin() == "admin-1"

        token = _log_in(email="admin@store.com", password="admin123")
        assert actor_for_token(token).is_admin

    def test_default_admin_is_created_once(self):
        ensure_default_admin()
        assert ensure_default_admin() is None
