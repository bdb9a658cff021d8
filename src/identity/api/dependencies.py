"""FastAPI dependencies resolving the calling actor from a bearer token.

Tokens are looked up inside the identity domain context so that routers of
other contexts can depend on them.
"""

from fastapi import Header

from identity.domain import identity
from identity.session.authentication import actor_for_token
from shared.actor import Actor
from shared.errors import Unauthenticated


def bearer_token(authorization: str | None) -> str | None:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def current_actor(authorization: str | None = Header(default=None)) -> Actor:
    token = bearer_token(authorization)
    if token is None:
        raise Unauthenticated("Authentication required")

    with identity.domain_context():
        return actor_for_token(token)


async def optional_actor(authorization: str | None = Header(default=None)) -> Actor | None:
    token = bearer_token(authorization)
    if token is None:
        return None

    with identity.domain_context():
        return actor_for_token(token)
