"""
CopyCart Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn copycart.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌─────┐  │
    │  │  Req ID  │→│  Logging        │→│ GZip │→│CORS │  │
    │  └──────────┘ └─────────────────┘ └──────┘ └─────┘  │
    │                                                     │
    │  Routes:                                            │
    │  GET/POST /products  POST /ai/generate-content      │
    │  POST /ai/chat       GET /health                    │
    │                                                     │
    │  Exception Handlers (all → JSON body):              │
    │  Store/Validation/Extraction/EmptyReply → 500       │
    │  Upstream → upstream status or 500                  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config check → create tables
    Shutdown: close the inference client → dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from copycart import __version__
from copycart.config import settings
from copycart.database import dispose_engine, init_models
from copycart.exceptions import (
    CopyCartError,
    EmptyReplyError,
    ExtractionError,
    StoreError,
    UpstreamError,
    ValidationError,
)
from copycart.middleware.logging import RequestLoggingMiddleware
from copycart.middleware.request_id import RequestIDMiddleware, request_id_var
from copycart.routes import ai, health, products
from copycart.services.marketing_service import marketing_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] copycart.services.product_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("CopyCart Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Product endpoints still work; the AI endpoints will report upstream errors
        logger.error("Configuration error: %s", str(e))

    await init_models()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("CopyCart Backend shutting down...")
    await marketing_service.client.aclose()
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(exc: CopyCartError, rid: str) -> JSONResponse:
    content: Dict[str, Any] = {
        "error": exc.error_code,
        "message": exc.message,
        "request_id": rid,
    }
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception taxonomy to JSON error responses.

    Handler hierarchy:
        ValidationError         → 500 (required field missing)
        RequestValidationError  → 500 (body is not a valid JSON object)
        StoreError              → 500
        UpstreamError           → exc.status_code (upstream status or 500)
        ExtractionError         → 500
        EmptyReplyError         → 500
        Exception (fallback)    → 500, details withheld
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error on %s: %s", rid, exc.field, exc.details)
        return _error_response(exc, rid)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request body: %s", rid, exc.errors())
        return _error_response(
            ValidationError(message="Invalid request body", details=str(exc.errors())),
            rid,
        )

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(exc, rid)

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Upstream error (%d): %s | %s",
            rid,
            exc.status_code,
            exc.message,
            exc.details,
        )
        return _error_response(exc, rid)

    @app.exception_handler(ExtractionError)
    async def handle_extraction_error(request: Request, exc: ExtractionError):
        rid = request_id_var.get("")
        logger.error("[%s] Extraction error: %s | Context: %s", rid, exc.details, exc.context)
        return _error_response(exc, rid)

    @app.exception_handler(EmptyReplyError)
    async def handle_empty_reply(request: Request, exc: EmptyReplyError):
        rid = request_id_var.get("")
        logger.error("[%s] Empty chat reply | Context: %s", rid, exc.context)
        return _error_response(exc, rid)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="CopyCart API",
        description=(
            "Product catalogue with AI-drafted listing copy and a marketing "
            "assistant backed by a hosted text-generation model."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(products.router)
    app.include_router(ai.router)
    app.include_router(health.router)

    return app


app = create_app()
