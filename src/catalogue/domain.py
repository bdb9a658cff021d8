"""Catalogue bounded context: products and categories shown in the storefront.

The catalogue is a read-mostly query surface: products are loaded by the seed
or by admin tooling and are never mutated by storefront operations.
"""

from protean.domain import Domain

from shared.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
