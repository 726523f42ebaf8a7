"""FastAPI application factory for the catalog HTTP API."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.infrastructure.api.products import router as products_router
from catalog.infrastructure.config import Settings, get_settings
from catalog.infrastructure.logging_config import configure_logging

logger = structlog.get_logger(__name__)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and parameters are client errors: 400 with a message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    logger.warning("request_rejected", path=request.url.path, errors=messages)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "; ".join(messages) or "Invalid request"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Product Catalog",
        description="Create, list, update and soft-delete catalog products.",
        version="0.1.0",
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(products_router)

    logger.info("catalog_api_ready", storage=settings.STORAGE_BACKEND)
    return app
