"""Shipping Rates — quote endpoint plus cache administration.

Invariants:
    - POST /calculate answers 200 (rates, possibly fallback) or 400 VALIDATION_ERROR, nothing else
    - The raw body is handed to QuoteService unparsed: body decoding is part of the pipeline
    - Degraded quotes are still 200; the `fallback` flag tells clients apart

Design Decisions:
    - Body read via Request, not a Pydantic parameter: FastAPI would answer 422 for
      a non-numeric weight before our validator could produce the field-scoped 400
    - Cache admin routes are sync: they run in the threadpool and contend on the cache lock
"""

import logging

from fastapi import APIRouter, Depends, Request

from shipquote.api.dependencies import get_quote_cache, get_quote_service
from shipquote.infrastructure.quote_cache import QuoteCache
from shipquote.schemas.quote import (
    CacheClearResponse,
    CacheStatsResponse,
    QuoteResponse,
    ValidationErrorResponse,
)
from shipquote.services.quote_service import QuoteService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/shipping", tags=["shipping"])


@router.post(
    "/calculate",
    response_model=QuoteResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ValidationErrorResponse}},
)
async def calculate_shipping(
    request: Request,
    service: QuoteService = Depends(get_quote_service),
):
    """Quote shipping rates for {weight (oz), state, postalCode}, cheapest first."""
    raw_body = await request.body()
    result = service.handle(raw_body)
    return result.to_response()


@router.get("/cache/stats", response_model=CacheStatsResponse)
def cache_stats(cache: QuoteCache = Depends(get_quote_cache)):
    """Current quote cache size and hit/miss counters."""
    return cache.stats().to_dict()


@router.delete("/cache", response_model=CacheClearResponse)
def clear_cache(cache: QuoteCache = Depends(get_quote_cache)):
    """Drop every cached quote. The next request per key recomputes."""
    cleared = cache.clear()
    logger.info(f"Quote cache cleared ({cleared} entries)", extra={"evicted": cleared})
    return {"cleared": cleared}
