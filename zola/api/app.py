"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error handlers, static assets, and router registration.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from zola.api.routes import router as relay_router
from zola.relay.gemini_service import RelayConfigError, UpstreamError
from zola.ui import STATIC_DIR

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting Ask ZOLA API...")
    yield
    logger.info("Shutting down Ask ZOLA API...")


async def relay_config_error_handler(request: Request, exc: RelayConfigError) -> JSONResponse:
    logger.error(f"Relay misconfigured: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    logger.warning(f"Upstream request failed: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Ask ZOLA API",
        description=(
            "Streaming relay between the ZOLA chat interface and Gemini. "
            "Replays the conversation, grounds answers with Google Search, and "
            "streams the reply back as plain text."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.add_exception_handler(RelayConfigError, relay_config_error_handler)
    application.add_exception_handler(UpstreamError, upstream_error_handler)

    application.include_router(relay_router)
    application.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "ask-zola"}

    return application


app = create_app()
