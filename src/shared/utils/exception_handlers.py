"""FastAPI exception handlers for the storefront error kinds."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.integrations.fastapi import register_exception_handlers

from shared.errors import StorefrontError


async def _storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _object_not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "NotFound", "message": str(exc)})


def register_storefront_exception_handlers(app: FastAPI) -> None:
    """Install Protean's handlers plus the storefront error kinds."""
    register_exception_handlers(app)
    app.add_exception_handler(StorefrontError, _storefront_error_handler)
    app.add_exception_handler(ObjectNotFoundError, _object_not_found_handler)
