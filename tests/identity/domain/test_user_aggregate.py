"""Tests for the User aggregate and password hashing."""

import pytest
from identity.user.events import UserLoggedIn, UserRegistered
from identity.user.passwords import hash_password, verify_password
from identity.user.user import User
from protean.exceptions import ValidationError
from shared.actor import Role


class TestPasswords:
    def test_hash_is_salted(self):
        assert hash_password("secret1") != hash_password("secret1")

    def test_verify_matching_password(self):
        assert verify_password("secret1", hash_password("secret1"))

    def test_verify_wrong_password(self):
        assert not verify_password("secret2", hash_password("secret1"))

    def test_verify_garbage_hash(self):
        assert not verify_password("secret1", "not-a-hash")

    def test_plaintext_never_stored(self):
        assert "secret1" not in hash_password("secret1")


class TestUserRegistration:
    def test_register_customer(self):
        user = User.register(name="Jane Doe", email="Jane@Example.com ", password="secret1")
        assert user.email == "jane@example.com"
        assert user.role == Role.CUSTOMER.value
        assert not user.is_admin
        assert user.check_password("secret1")

    def test_register_raises_event(self):
        user = User.register(name="Jane Doe", email="jane@example.com", password="secret1")
        assert isinstance(user._events[0], UserRegistered)
        assert user._events[0].email == "jane@example.com"

    def test_register_admin(self):
        user = User.register(name="Admin", email="admin@store.com", password="admin123", role=Role.ADMIN)
        assert user.is_admin

    def test_short_password_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            User.register(name="Jane", email="jane@example.com", password="123")
        assert "password" in exc.value.messages

    def test_malformed_email_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            User.register(name="Jane", email="not-an-email", password="secret1")
        assert "email" in exc.value.messages


class TestUserBehaviour:
    def test_record_login(self):
        user = User.register(name="Jane", email="jane@example.com", password="secret1")
        user._events.clear()

        user.record_login()

        assert user.last_login_at is not None
        assert isinstance(user._events[0], UserLoggedIn)

    def test_as_actor(self):
        user = User.register(name="Jane", email="jane@example.com", password="secret1", id="u-1")
        actor = user.as_actor()
        assert actor.user_id == "u-1"
        assert actor.role == Role.CUSTOMER
