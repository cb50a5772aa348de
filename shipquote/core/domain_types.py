"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - WeightOz is always ounces; pounds exist only inside the rate tables
    - CarrierOffer is frozen: offers are never mutated after calculation
    - US_STATE_CODES is the single source of truth for accepted destinations
    - All valid kinds and service ids encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

WeightOz = NewType("WeightOz", float)      # 0 < w <= 1600
CacheKey = NewType("CacheKey", str)        # "{weight}-{state}-{zip3}"
EpochMillis = NewType("EpochMillis", int)


# ─── Enums ───────────────────────────────────────────────────────

class ValidationKind(str, Enum):
    """Why a quote request was rejected. First failing rule wins."""
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_WEIGHT = "INVALID_WEIGHT"
    WEIGHT_TOO_HIGH = "WEIGHT_TOO_HIGH"
    INVALID_STATE = "INVALID_STATE"
    INVALID_POSTAL_CODE = "INVALID_POSTAL_CODE"


class ServiceId(str, Enum):
    """Stable offer slugs. Clients key on these; never rename."""
    USPS_FIRST_CLASS = "usps-first-class"
    USPS_PRIORITY = "usps-priority"
    USPS_PRIORITY_EXPRESS = "usps-priority-express"
    UPS_GROUND = "ups-ground"
    FALLBACK_STANDARD = "fallback-standard"
    FALLBACK_PRIORITY = "fallback-priority"


class DegradedReason(str, Enum):
    """Why a quote was answered with fallback rates."""
    CALCULATION_FAILED = "calculation_failed"
    PIPELINE_FAILED = "pipeline_failed"


# 50 states + DC + 5 inhabited territories
US_STATE_CODES: frozenset[str] = frozenset({
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    "DC",
    "PR", "VI", "GU", "AS", "MP",
})


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class CarrierOffer:
    """One priced shipping option."""
    id: ServiceId
    display_name: str
    carrier: str
    service_name: str
    price: float
    estimated_transit_days: str

    def to_dict(self) -> dict:
        """Wire shape: {id, name, carrier, service, price, estimatedDays}."""
        return {
            "id": self.id.value,
            "name": self.display_name,
            "carrier": self.carrier,
            "service": self.service_name,
            "price": self.price,
            "estimatedDays": self.estimated_transit_days,
        }


@dataclass(frozen=True)
class QuoteRequest:
    """Normalized, validated quote input."""
    weight_oz: WeightOz
    state: str
    postal_code: str
