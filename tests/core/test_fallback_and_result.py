"""Fallback Rates & Quote Result — tests for the static offers and 200 body shape.

Tests cover:
    - Fallback set is the fixed standard/priority USPS pair
    - fallback_offers() returns a fresh list each call
    - QuoteOk body omits cached unless set
    - QuoteDegraded body always flags fallback and carries a message
"""

from shipquote.core.domain_types import DegradedReason, ServiceId
from shipquote.core.fallback import FALLBACK_OFFERS, fallback_offers
from shipquote.core.quote_result import QuoteDegraded, QuoteOk
from shipquote.core.rate_tables import calculate_rates, sort_offers


def test_fallback_pair():
    standard, priority = fallback_offers()
    assert standard.id == ServiceId.FALLBACK_STANDARD
    assert standard.price == 9.99
    assert standard.estimated_transit_days == "5-7 business days"
    assert priority.id == ServiceId.FALLBACK_PRIORITY
    assert priority.price == 14.99
    assert priority.estimated_transit_days == "2-3 business days"
    assert {standard.carrier, priority.carrier} == {"USPS"}


def test_fallback_offers_returns_fresh_list():
    first = fallback_offers()
    first.clear()
    assert len(fallback_offers()) == 2
    assert len(FALLBACK_OFFERS) == 2


def test_offer_wire_shape():
    assert fallback_offers()[0].to_dict() == {
        "id": "fallback-standard",
        "name": "Standard Shipping",
        "carrier": "USPS",
        "service": "Standard",
        "price": 9.99,
        "estimatedDays": "5-7 business days",
    }


def test_quote_ok_response_without_cached_flag():
    result = QuoteOk(weight=10.0, rates=tuple(sort_offers(calculate_rates(10))))
    body = result.to_response()
    assert body["weight"] == 10.0
    assert body["weightUnit"] == "oz"
    assert [r["price"] for r in body["rates"]] == [11.00, 18.00, 32.40]
    assert "cached" not in body
    assert "fallback" not in body
    assert result.degraded is False


def test_quote_ok_response_with_cached_flag():
    result = QuoteOk(weight=10.0, rates=(), cached=True)
    assert result.to_response()["cached"] is True


def test_degraded_response_flags_fallback():
    result = QuoteDegraded(
        weight=None,
        rates=tuple(fallback_offers()),
        reason=DegradedReason.PIPELINE_FAILED,
        message="Showing estimated rates.",
    )
    body = result.to_response()
    assert body["fallback"] is True
    assert body["message"] == "Showing estimated rates."
    assert [r["price"] for r in body["rates"]] == [9.99, 14.99]
    assert result.degraded is True
