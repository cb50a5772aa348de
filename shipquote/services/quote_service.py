"""Quote Service — orchestrates validate, cache lookup, calculate, sort, store.

Invariants:
    - Malformed bodies and invalid fields raise QuoteValidationError (the only 400 path)
    - Any other failure degrades to fallback rates; handle() never raises anything else
    - Fallback rates are never written to the cache
    - Rates leave the service sorted cheapest first
    - Every degraded answer is logged with its DegradedReason

Design Decisions:
    - Two-tier result (QuoteOk | QuoteDegraded) over bare try/except: the degraded
      path stays observable while callers still see a plain 200
    - Calculator injected: tests substitute a failing calculator without patching
    - Cache injected: one instance per app, isolated instances per test
"""

import json
import math
import logging
from typing import Any, Callable

from shipquote.core.cache_key import derive_cache_key
from shipquote.core.domain_types import CarrierOffer, DegradedReason
from shipquote.core.errors import MalformedRequestError, QuoteValidationError
from shipquote.core.fallback import fallback_offers
from shipquote.core.quote_result import QuoteDegraded, QuoteOk, QuoteResult
from shipquote.core.rate_tables import calculate_rates, sort_offers
from shipquote.core.validate_request import (
    MAX_WEIGHT_OZ, ValidationFailure, parse_weight, validate_quote_request,
)
from shipquote.infrastructure.quote_cache import QuoteCache

logger = logging.getLogger(__name__)


CALCULATION_FAILED_MESSAGE = (
    "Live rate calculation is unavailable. Showing standard shipping rates."
)
PIPELINE_FAILED_MESSAGE = (
    "Unable to calculate exact shipping rates. Showing estimated rates."
)


class QuoteService:
    """Turns a raw quote request body into a QuoteResult."""

    def __init__(
        self,
        cache: QuoteCache,
        max_weight_oz: float = MAX_WEIGHT_OZ,
        calculator: Callable[[float], list[CarrierOffer]] = calculate_rates,
    ):
        self.cache = cache
        self.max_weight_oz = max_weight_oz
        self._calculator = calculator

    def handle(self, raw_body: bytes | str) -> QuoteResult:
        """Outermost boundary: parse and quote, degrading on unexpected failure."""
        payload: Any = None
        try:
            payload = parse_body(raw_body)
            return self.quote(payload)
        except QuoteValidationError:
            raise
        except Exception as e:
            logger.error(
                f"Quote pipeline failed, serving fallback rates: {e}",
                exc_info=True,
                extra={"degraded_reason": DegradedReason.PIPELINE_FAILED.value},
            )
            return QuoteDegraded(
                weight=_best_effort_weight(payload),
                rates=tuple(fallback_offers()),
                reason=DegradedReason.PIPELINE_FAILED,
                message=PIPELINE_FAILED_MESSAGE,
            )

    def quote(self, payload: dict) -> QuoteResult:
        """Validate, then answer from cache or calculate and store."""
        validated = validate_quote_request(
            payload.get("weight"),
            payload.get("state"),
            payload.get("postalCode"),
            max_weight_oz=self.max_weight_oz,
        )
        if isinstance(validated, ValidationFailure):
            logger.info(
                f"Quote rejected: {validated.kind.value} on {validated.field}",
                extra={"error_code": validated.kind.value},
            )
            raise validated.to_error()

        weight = float(validated.weight_oz)
        key = derive_cache_key(validated)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(
                "Quote served from cache",
                extra={"cache_key": key, "cached": True},
            )
            return QuoteOk(weight=weight, rates=cached, cached=True)

        try:
            offers = self._calculator(weight)
        except Exception as e:
            logger.warning(
                f"Rate calculation failed, serving fallback rates: {e}",
                exc_info=True,
                extra={
                    "degraded_reason": DegradedReason.CALCULATION_FAILED.value,
                    "cache_key": key,
                    "weight_oz": weight,
                },
            )
            return QuoteDegraded(
                weight=weight,
                rates=tuple(fallback_offers()),
                reason=DegradedReason.CALCULATION_FAILED,
                message=CALCULATION_FAILED_MESSAGE,
            )

        rates = tuple(sort_offers(offers))
        self.cache.put(key, rates)
        self.cache.evict_if_oversized()
        logger.debug(
            f"Quote calculated: {len(rates)} offers",
            extra={"cache_key": key, "weight_oz": weight},
        )
        return QuoteOk(weight=weight, rates=rates)


def parse_body(raw_body: bytes | str) -> dict:
    """Decode a JSON object body. Raises MalformedRequestError otherwise."""
    if not raw_body:
        raise MalformedRequestError("Request body is required")
    try:
        payload = json.loads(raw_body)
    except ValueError:
        raise MalformedRequestError("Request body is not valid JSON")
    if not isinstance(payload, dict):
        raise MalformedRequestError()
    return payload


def _best_effort_weight(payload: Any) -> float | None:
    """Weight to echo on a degraded answer. Runs inside the except branch: must not raise."""
    if not isinstance(payload, dict):
        return None
    try:
        weight = parse_weight(payload.get("weight"))
    except (ArithmeticError, ValueError, TypeError):
        return None
    if weight is None or not math.isfinite(weight):
        return None
    return weight
