"""Request Dependencies — hand the app-owned QuoteService and QuoteCache to routes.

Invariants:
    - One QuoteService (and its QuoteCache) per app, stored on app.state
    - Missing state is built from settings on first use, so the quote endpoint
      never fails for lack of wiring

Design Decisions:
    - Depends() over module globals: tests override get_quote_service with an
      isolated cache (ADR: no hidden shared state)
"""

from fastapi import Depends, Request

from shipquote.config import get_settings
from shipquote.infrastructure.quote_cache import QuoteCache
from shipquote.services.quote_service import QuoteService


def build_quote_service() -> QuoteService:
    settings = get_settings()
    cache = QuoteCache(
        ttl_ms=settings.cache_ttl_ms,
        max_entries=settings.cache_max_entries,
    )
    return QuoteService(cache, max_weight_oz=settings.max_weight_oz)


async def get_quote_service(request: Request) -> QuoteService:
    service = getattr(request.app.state, "quote_service", None)
    if service is None:
        service = build_quote_service()
        request.app.state.quote_service = service
    return service


async def get_quote_cache(
    service: QuoteService = Depends(get_quote_service),
) -> QuoteCache:
    return service.cache
