"""Login and logout: commands, handler and token resolution."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.session.session import Session
from identity.user.registration import find_user_by_email
from identity.user.user import User
from shared.errors import Unauthenticated

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@identity.command(part_of="Session")
class LogIn:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)


@identity.command(part_of="Session")
class LogOut:
    token: String(required=True, max_length=64)


@identity.command_handler(part_of=Session)
class AuthenticationHandler:
    @handle(LogIn)
    def log_in(self, command):
        user = find_user_by_email(command.email)
        if user is None or not user.check_password(command.password):
            logger.info("Login rejected", email=command.email)
            raise ValidationError({"credentials": [INVALID_CREDENTIALS]})

        user.record_login()
        current_domain.repository_for(User).add(user)

        session = Session.open(user_id=str(user.id))
        current_domain.repository_for(Session).add(session)

        logger.info("User logged in", user_id=str(user.id))
        return session.token

    @handle(LogOut)
    def log_out(self, command):
        repo = current_domain.repository_for(Session)
        try:
            session = repo.get(command.token)
        except ObjectNotFoundError:
            return

        session.end()
        repo.add(session)


def user_for_token(token):
    """The user owning an active session, or ``Unauthenticated``."""
    if not token:
        raise Unauthenticated("Authentication required")

    try:
        session = current_domain.repository_for(Session).get(token)
        if not session.is_active:
            raise Unauthenticated("Session has ended")
        return current_domain.repository_for(User).get(session.user_id)
    except ObjectNotFoundError:
        raise Unauthenticated("Invalid session token") from None


def actor_for_token(token):
    return user_for_token(token).as_actor()
