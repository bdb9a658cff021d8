"""User aggregate: a storefront account holding credentials and a role."""

import re
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from identity.domain import identity
from identity.user.passwords import hash_password, verify_password
from shared.actor import Actor, Role

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email):
    return (email or "").strip().lower()


@identity.aggregate
class User:
    email: String(required=True, max_length=254, unique=True)
    name: String(required=True, max_length=150)
    password_hash: String(required=True, max_length=255)
    role: String(choices=Role, default=Role.CUSTOMER.value)
    created_at: DateTime()
    last_login_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not _EMAIL_PATTERN.match(self.email or ""):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def register(cls, name, email, password, role=Role.CUSTOMER, id=None):
        from identity.user.events import UserRegistered

        if not password or len(password) < 6:
            raise ValidationError({"password": ["Password must be at least 6 characters"]})

        kwargs = {"id": id} if id else {}
        user = cls(
            **kwargs,
            name=name.strip() if name else name,
            email=normalize_email(email),
            password_hash=hash_password(password),
            role=Role(role).value,
            created_at=datetime.now(UTC),
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                name=user.name,
                role=user.role,
            )
        )
        return user

    @property
    def is_admin(self):
        return self.role == Role.ADMIN.value

    def check_password(self, password):
        return verify_password(password or "", self.password_hash)

    def record_login(self):
        from identity.user.events import UserLoggedIn

        self.last_login_at = datetime.now(UTC)
        self.raise_(UserLoggedIn(user_id=str(self.id), logged_in_at=self.last_login_at))

    def as_actor(self):
        return Actor(user_id=str(self.id), role=Role(self.role))
