"""tripgate API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GatewayError -> one response per request
    - CORS configured from settings (not hardcoded)
    - Pooled outbound httpx clients created on startup, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: GatewayError (mapped), RequestValidationError
      (Pydantic), Exception (catch-all)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tripgate import __version__
from tripgate.api.error_handlers import register_error_handlers
from tripgate.api.routes import chat, health, og_image, places
from tripgate.config import get_settings
from tripgate.infrastructure.observability import setup_logging
from tripgate.infrastructure.upstream_client import (
    create_api_http_client,
    create_page_http_client,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.api_http_client = create_api_http_client(settings)
    app.state.page_http_client = create_page_http_client(settings)
    logger.info("tripgate API started")
    try:
        yield
    finally:
        await app.state.api_http_client.aclose()
        await app.state.page_http_client.aclose()
        logger.info("tripgate API shutting down")


app = FastAPI(title="tripgate API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(places.router)
app.include_router(chat.router)
app.include_router(og_image.router)

register_error_handlers(app)
