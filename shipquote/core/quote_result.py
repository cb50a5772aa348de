"""Quote Result — two-tier outcome of one quote request.

Invariants:
    - QuoteOk carries calculated (or cached) rates, sorted cheapest first
    - QuoteDegraded carries fallback rates plus the reason they were used
    - to_response() is the only place the 200 JSON body is shaped

Design Decisions:
    - Explicit Degraded variant over swallowing exceptions: the shell logs the
      reason while the caller-visible contract stays a plain 200
"""

from dataclasses import dataclass

from shipquote.core.domain_types import CarrierOffer, DegradedReason


WEIGHT_UNIT = "oz"


@dataclass(frozen=True)
class QuoteOk:
    weight: float | None
    rates: tuple[CarrierOffer, ...]
    cached: bool = False

    @property
    def degraded(self) -> bool:
        return False

    def to_response(self) -> dict:
        body = {
            "weight": self.weight,
            "weightUnit": WEIGHT_UNIT,
            "rates": [offer.to_dict() for offer in self.rates],
        }
        if self.cached:
            body["cached"] = True
        return body


@dataclass(frozen=True)
class QuoteDegraded:
    weight: float | None
    rates: tuple[CarrierOffer, ...]
    reason: DegradedReason
    message: str

    @property
    def degraded(self) -> bool:
        return True

    def to_response(self) -> dict:
        return {
            "weight": self.weight,
            "weightUnit": WEIGHT_UNIT,
            "rates": [offer.to_dict() for offer in self.rates],
            "fallback": True,
            "message": self.message,
        }


QuoteResult = QuoteOk | QuoteDegraded
