"""Schema setup for domains configured with a SQL provider.

Memory providers need no schema; the loops below only touch providers whose
``provider`` setting is ``sqlite`` or ``postgresql``.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    return [
        (name, provider)
        for name, provider in domain.providers.items()
        if provider.conn_info["provider"] in _SQL_PROVIDERS
    ]


def setup_db(domain: Domain):
    """Create tables for every aggregate, entity and projection of the domain."""
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            registered = [
                *domain.registry.aggregates.values(),
                *domain.registry.entities.values(),
                *domain.registry.projections.values(),
            ]
            for record in registered:
                if record.cls.meta_.provider == name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop all tables created by ``setup_db``."""
    with domain.domain_context():
        for _, provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
