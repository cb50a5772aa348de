"""Shipping Quote API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ShipQuoteError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - QuoteService and its QuoteCache built on startup via lifespan, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Cache lives on app.state, not in a module global: one per app, one per test
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shipquote import __version__
from shipquote.api.dependencies import build_quote_service
from shipquote.api.error_handlers import register_error_handlers
from shipquote.api.routes import health, shipping_rates
from shipquote.config import get_settings
from shipquote.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.quote_service = build_quote_service()
    logger.info(
        f"Shipping Quote API started (cache ttl={settings.cache_ttl_seconds}s, "
        f"max_entries={settings.cache_max_entries})",
    )
    yield
    app.state.quote_service.cache.close()
    logger.info("Shipping Quote API shutting down")


app = FastAPI(
    title="Shipping Quote API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(shipping_rates.router)

register_error_handlers(app)
