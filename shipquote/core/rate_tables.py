"""Rate Tables — weight-tier pricing for the four carrier service classes.

Invariants:
    - calculate_rates is PURE and deterministic: same weight, same offers, same order
    - Weight is clamped to [MIN_WEIGHT_OZ, MAX_WEIGHT_OZ] before pricing
    - First Class only when oz <= 16; UPS Ground only when lb >= 2
    - Express = round(Priority * 1.8, 2), always strictly above Priority
    - Generation order: First Class, Priority, Express, UPS Ground
    - Pricing ignores destination; state and postal code only shape the cache key

Design Decisions:
    - Decimal arithmetic, half-up to cents: 18.00 * 1.8 is exactly 32.40
    - Tier tables as (upper_bound, price) tuples: inclusive upper bounds, scanned in order
    - Over-10-lb pricing is stepped: every full 5 lb above 10 adds a flat increment
"""

import math
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP

from shipquote.core.domain_types import CarrierOffer, ServiceId
from shipquote.core.errors import ErrorContext, RateCalculationError


MIN_WEIGHT_OZ: float = 0.1
MAX_WEIGHT_OZ: float = 1600.0
OUNCES_PER_POUND = Decimal(16)

FIRST_CLASS_MAX_OZ = Decimal(16)
UPS_GROUND_MIN_LB = Decimal(2)
EXPRESS_MULTIPLIER = Decimal("1.8")

CENT = Decimal("0.01")

# (inclusive upper bound, price)
FIRST_CLASS_TIERS_OZ: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal(4), Decimal("7.98")),
    (Decimal(8), Decimal("9.00")),
    (Decimal(16), Decimal("11.00")),
)

PRIORITY_TIERS_LB: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal(1), Decimal("18.00")),
    (Decimal(2), Decimal("22.00")),
    (Decimal(3), Decimal("26.00")),
    (Decimal(5), Decimal("32.00")),
    (Decimal(10), Decimal("40.00")),
)
PRIORITY_HEAVY_BASE = Decimal("50.00")
PRIORITY_HEAVY_STEP = Decimal("10.00")

UPS_GROUND_TIERS_LB: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal(3), Decimal("24.00")),
    (Decimal(5), Decimal("30.00")),
    (Decimal(10), Decimal("44.00")),
)
UPS_GROUND_HEAVY_BASE = Decimal("56.00")
UPS_GROUND_HEAVY_STEP = Decimal("12.00")

HEAVY_THRESHOLD_LB = Decimal(10)
HEAVY_STEP_LB = Decimal(5)


def calculate_rates(weight_oz: float) -> list[CarrierOffer]:
    """Price every applicable service for a weight in ounces. Unsorted."""
    if not math.isfinite(weight_oz):
        raise RateCalculationError(
            f"weight {weight_oz!r} is not a finite number",
            ErrorContext(debug_info={"weight_oz": str(weight_oz)}),
        )

    oz = Decimal(str(min(max(weight_oz, MIN_WEIGHT_OZ), MAX_WEIGHT_OZ)))
    lb = oz / OUNCES_PER_POUND

    offers: list[CarrierOffer] = []

    if oz <= FIRST_CLASS_MAX_OZ:
        offers.append(_offer(
            ServiceId.USPS_FIRST_CLASS, "USPS First Class", "USPS",
            "First Class Package", _tier_price(oz, FIRST_CLASS_TIERS_OZ),
            "3-5 business days",
        ))

    priority = priority_price(lb)
    offers.append(_offer(
        ServiceId.USPS_PRIORITY, "USPS Priority Mail", "USPS",
        "Priority Mail", priority, "2-3 business days",
    ))
    offers.append(_offer(
        ServiceId.USPS_PRIORITY_EXPRESS, "USPS Priority Mail Express", "USPS",
        "Priority Mail Express", express_price(priority), "1-2 business days",
    ))

    if lb >= UPS_GROUND_MIN_LB:
        offers.append(_offer(
            ServiceId.UPS_GROUND, "UPS Ground", "UPS",
            "Ground", ups_ground_price(lb), "3-5 business days",
        ))

    return offers


def sort_offers(offers: list[CarrierOffer]) -> list[CarrierOffer]:
    """Cheapest first. Stable: ties keep generation order."""
    return sorted(offers, key=lambda offer: offer.price)


def priority_price(lb: Decimal) -> Decimal:
    if lb > HEAVY_THRESHOLD_LB:
        return _heavy_price(lb, PRIORITY_HEAVY_BASE, PRIORITY_HEAVY_STEP)
    return _tier_price(lb, PRIORITY_TIERS_LB)


def express_price(priority: Decimal) -> Decimal:
    return (priority * EXPRESS_MULTIPLIER).quantize(CENT, rounding=ROUND_HALF_UP)


def ups_ground_price(lb: Decimal) -> Decimal:
    if lb > HEAVY_THRESHOLD_LB:
        return _heavy_price(lb, UPS_GROUND_HEAVY_BASE, UPS_GROUND_HEAVY_STEP)
    return _tier_price(lb, UPS_GROUND_TIERS_LB)


# ─── Helpers ─────────────────────────────────────────────────────

def _tier_price(
    weight: Decimal, tiers: tuple[tuple[Decimal, Decimal], ...],
) -> Decimal:
    for upper_bound, price in tiers:
        if weight <= upper_bound:
            return price
    raise RateCalculationError(
        f"weight {weight} is above the last tier ({tiers[-1][0]})",
    )


def _heavy_price(lb: Decimal, base: Decimal, step: Decimal) -> Decimal:
    steps = ((lb - HEAVY_THRESHOLD_LB) / HEAVY_STEP_LB).to_integral_value(
        rounding=ROUND_FLOOR,
    )
    return base + steps * step


def _offer(
    service_id: ServiceId,
    display_name: str,
    carrier: str,
    service_name: str,
    price: Decimal,
    transit: str,
) -> CarrierOffer:
    return CarrierOffer(
        id=service_id,
        display_name=display_name,
        carrier=carrier,
        service_name=service_name,
        price=float(price.quantize(CENT, rounding=ROUND_HALF_UP)),
        estimated_transit_days=transit,
    )
