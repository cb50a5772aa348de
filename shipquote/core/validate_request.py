"""Quote Request Validation — normalizes weight, state and postal code before any work.

Invariants:
    - validate_quote_request is PURE: returns QuoteRequest or ValidationFailure, never raises
    - Rules run in a fixed order; the first failing rule wins
    - MAX_WEIGHT_OZ (1600 oz = 100 lb) is a business ceiling, not an overflow guard
    - Normalized state is upper-cased and trimmed; normalized postal code is trimmed

Design Decisions:
    - Failure returned as a value, shell converts to QuoteValidationError
      (ADR: core never raises for expected input problems)
    - Booleans rejected as weights even though bool subclasses int
"""

import math
import re
from dataclasses import dataclass
from typing import Any

from shipquote.core.domain_types import (
    QuoteRequest, ValidationKind, WeightOz, US_STATE_CODES,
)
from shipquote.core.errors import QuoteValidationError


MAX_WEIGHT_OZ: float = 1600.0
POSTAL_CODE_PATTERN = re.compile(r"[0-9]{5}(?:-[0-9]{4})?")


@dataclass(frozen=True)
class ValidationFailure:
    """Structured rejection: which field, which rule, what the caller sent."""
    field: str
    kind: ValidationKind
    message: str
    value: Any = None
    max_weight: float | None = None

    def to_error(self) -> QuoteValidationError:
        return QuoteValidationError(
            self.message,
            field=self.field,
            value=_json_safe(self.value),
            kind=self.kind.value,
            max_weight=self.max_weight,
        )


def validate_quote_request(
    weight: Any,
    state: Any,
    postal_code: Any,
    max_weight_oz: float = MAX_WEIGHT_OZ,
) -> QuoteRequest | ValidationFailure:
    """Validate the three raw quote fields. Pure."""
    weight_or_failure = _check_weight(weight, max_weight_oz)
    if isinstance(weight_or_failure, ValidationFailure):
        return weight_or_failure

    state_or_failure = _check_state(state)
    if isinstance(state_or_failure, ValidationFailure):
        return state_or_failure

    postal_or_failure = _check_postal_code(postal_code)
    if isinstance(postal_or_failure, ValidationFailure):
        return postal_or_failure

    return QuoteRequest(
        weight_oz=WeightOz(weight_or_failure),
        state=state_or_failure,
        postal_code=postal_or_failure,
    )


def parse_weight(raw: Any) -> float | None:
    """Coerce a raw weight to float. Returns None when not numeric."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        try:
            return float(raw)
        except OverflowError:
            # JSON ints have no size limit; past float range they are off the scale
            return math.inf if raw > 0 else -math.inf
    if isinstance(raw, float):
        return raw
    if isinstance(raw, str):
        try:
            return float(raw.strip())
        except ValueError:
            return None
    return None


# ─── Rules ───────────────────────────────────────────────────────

def _check_weight(raw: Any, max_weight_oz: float) -> float | ValidationFailure:
    if _is_blank(raw):
        return ValidationFailure(
            "weight", ValidationKind.MISSING_FIELD,
            "Weight is required.", raw,
        )

    weight = parse_weight(raw)
    if weight is None or math.isnan(weight) or weight <= 0:
        return ValidationFailure(
            "weight", ValidationKind.INVALID_WEIGHT,
            "Invalid weight. Weight must be a number greater than 0.", raw,
        )

    if weight > max_weight_oz:
        return ValidationFailure(
            "weight", ValidationKind.WEIGHT_TOO_HIGH,
            f"Weight exceeds the maximum of {_format_number(max_weight_oz)} oz "
            f"({_format_number(max_weight_oz / 16)} lb).",
            raw, max_weight=_format_limit(max_weight_oz),
        )

    return weight


def _check_state(raw: Any) -> str | ValidationFailure:
    if _is_blank(raw):
        return ValidationFailure(
            "state", ValidationKind.MISSING_FIELD,
            "State is required.", raw,
        )
    if not isinstance(raw, str):
        return ValidationFailure(
            "state", ValidationKind.INVALID_STATE,
            "Invalid state. Use a 2-letter US state or territory code.", raw,
        )

    state = raw.strip().upper()
    if state not in US_STATE_CODES:
        return ValidationFailure(
            "state", ValidationKind.INVALID_STATE,
            f"Invalid state '{raw}'. Use a 2-letter US state or territory code.",
            raw,
        )
    return state


def _check_postal_code(raw: Any) -> str | ValidationFailure:
    if _is_blank(raw):
        return ValidationFailure(
            "postalCode", ValidationKind.MISSING_FIELD,
            "Postal code is required.", raw,
        )
    if not isinstance(raw, str) or not POSTAL_CODE_PATTERN.fullmatch(raw.strip()):
        return ValidationFailure(
            "postalCode", ValidationKind.INVALID_POSTAL_CODE,
            "Invalid postal code. Use 5 digits or ZIP+4 (e.g. 12345-6789).",
            raw,
        )
    return raw.strip()


# ─── Helpers ─────────────────────────────────────────────────────

def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _format_number(value: float) -> str:
    return f"{value:g}"


def _format_limit(value: float) -> float | int:
    return int(value) if float(value).is_integer() else value


def _json_safe(value: Any) -> Any:
    """NaN/Infinity are not valid JSON; echo them back as strings, at any depth."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    return value
