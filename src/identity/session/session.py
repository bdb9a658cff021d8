"""Session aggregate: an opaque bearer token bound to a user."""

import secrets
from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.aggregate
class Session:
    token: String(identifier=True, max_length=64)
    user_id: Identifier(required=True)
    created_at: DateTime()
    ended_at: DateTime()

    @classmethod
    def open(cls, user_id):
        return cls(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=datetime.now(UTC),
        )

    @property
    def is_active(self):
        return self.ended_at is None

    def end(self):
        if self.ended_at is None:
            self.ended_at = datetime.now(UTC)
