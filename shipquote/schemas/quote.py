"""Quote Schemas — Pydantic models for the shipping quote API contract.

Invariants:
    - Wire names are camelCase (weightUnit, estimatedDays, postalCode); Python names snake_case
    - Optional flags (cached, fallback, message) are omitted, never sent as null

Design Decisions:
    - Response-only models: the request body is validated by core/validate_request so
      field-scoped messages and rule ordering stay under our control, not Pydantic's
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RateOut(BaseModel):
    """One carrier offer as returned to clients."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    carrier: str
    service: str
    price: float
    estimated_days: str = Field(alias="estimatedDays")


class QuoteResponse(BaseModel):
    """200 body: calculated, cached or fallback rates."""
    model_config = ConfigDict(populate_by_name=True)

    weight: float | None = None
    weight_unit: str = Field("oz", alias="weightUnit")
    rates: list[RateOut]
    cached: bool | None = None
    fallback: bool | None = None
    message: str | None = None


class ValidationErrorDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field: str
    value: Any = None
    max_weight: float | None = Field(None, alias="maxWeight")


class ValidationErrorResponse(BaseModel):
    """400 body, the only non-200 answer of the quote endpoint."""
    error: str
    code: str = "VALIDATION_ERROR"
    details: ValidationErrorDetails | None = None


class CacheStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    size: int
    max_entries: int = Field(alias="maxEntries")
    ttl_ms: int = Field(alias="ttlMs")
    hits: int
    misses: int
    evictions: int


class CacheClearResponse(BaseModel):
    cleared: int
