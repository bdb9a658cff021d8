"""Identity bounded context: storefront users, roles and login sessions."""

from protean.domain import Domain

from shared.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
identity = Domain(name="identity")
