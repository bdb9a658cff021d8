"""Storefront FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the config overlay from [tool.protean] in pyproject.toml.
from catalogue.domain import catalogue  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.domain import identity  # noqa: E402
from ordering.domain import ordering  # noqa: E402
from shared.settings import seed_catalogue_on_startup
from shared.utils.exception_handlers import register_storefront_exception_handlers
from shared.utils.logging import add_context, clear_context

identity.init()
catalogue.init()
ordering.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/auth": identity,
    "/products": catalogue,
    "/categories": catalogue,
    "/carts": ordering,
    "/checkouts": ordering,
    "/orders": ordering,
    "/admin": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------
def bootstrap():
    """Ensure the default admin account and, unless disabled, the sample catalogue."""
    from catalogue.seed import seed_catalogue
    from identity.user.registration import ensure_default_admin

    with identity.domain_context():
        ensure_default_admin()

    if seed_catalogue_on_startup():
        with catalogue.domain_context():
            seed_catalogue()


@asynccontextmanager
async def lifespan(app: FastAPI):
    bootstrap()
    yield


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Storefront: Catalogue, Identity and Ordering domains",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    clear_context()
    add_context(method=request.method, path=request.url.path)
    if domain is not None:
        add_context(domain=domain.name)
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match: pass through (health check, docs, etc.)
    return await call_next(request)


register_storefront_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from catalogue.api import category_router, product_router  # noqa: E402
from identity.api.routes import router as identity_router  # noqa: E402
from ordering.api import admin_router, cart_router, checkout_router, order_router  # noqa: E402

app.include_router(identity_router)
app.include_router(product_router)
app.include_router(category_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)
app.include_router(admin_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "identity": {"name": identity.name},
                "catalogue": {"name": catalogue.name},
                "ordering": {"name": ordering.name},
            },
        }
    )
