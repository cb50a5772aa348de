"""Fallback Rates — static offers served when normal pricing is unavailable.

Invariants:
    - FALLBACK_OFFERS is constant: two USPS offers, standard then priority
    - Fallback offers are never cached (they are not weight or destination specific)
"""

from shipquote.core.domain_types import CarrierOffer, ServiceId


FALLBACK_OFFERS: tuple[CarrierOffer, ...] = (
    CarrierOffer(
        id=ServiceId.FALLBACK_STANDARD,
        display_name="Standard Shipping",
        carrier="USPS",
        service_name="Standard",
        price=9.99,
        estimated_transit_days="5-7 business days",
    ),
    CarrierOffer(
        id=ServiceId.FALLBACK_PRIORITY,
        display_name="Priority Shipping",
        carrier="USPS",
        service_name="Priority",
        price=14.99,
        estimated_transit_days="2-3 business days",
    ),
)


def fallback_offers() -> list[CarrierOffer]:
    """Fresh list over the shared frozen offers."""
    return list(FALLBACK_OFFERS)
