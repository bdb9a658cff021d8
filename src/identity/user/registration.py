"""Account registration: signup command, handler and default admin seeding."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.session.session import Session
from identity.user.user import User, normalize_email
from shared.actor import Role
from shared.settings import default_admin_credentials

logger = structlog.get_logger(__name__)

DEFAULT_ADMIN_ID = "admin-1"


def find_user_by_email(email):
    matches = current_domain.repository_for(User)._dao.query.filter(email=normalize_email(email)).all().items
    return matches[0] if matches else None


@identity.command(part_of="User")
class SignUp:
    """Create a customer account and open a session for it."""

    name: String(required=True, max_length=150)
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)


@identity.command_handler(part_of=User)
class SignUpHandler:
    @handle(SignUp)
    def sign_up(self, command):
        if find_user_by_email(command.email) is not None:
            raise ValidationError({"email": ["Email already exists"]})

        user = User.register(name=command.name, email=command.email, password=command.password)
        current_domain.repository_for(User).add(user)

        session = Session.open(user_id=str(user.id))
        current_domain.repository_for(Session).add(session)

        logger.info("User signed up", user_id=str(user.id))
        return session.token


def ensure_default_admin():
    """Create the default admin account unless one with its email exists."""
    email, password = default_admin_credentials()
    if find_user_by_email(email) is not None:
        return None

    admin = User.register(
        id=DEFAULT_ADMIN_ID,
        name="Admin User",
        email=email,
        password=password,
        role=Role.ADMIN,
    )
    current_domain.repository_for(User).add(admin)
    logger.info("Default admin created", email=admin.email)
    return str(admin.id)
