"""Quote Request Validation — tests for pure field normalization and rule order.

Tests cover:
    - Weight: missing, non-numeric, zero/negative/NaN, ceiling, numeric strings
    - State: missing, unknown, lower-case and padded input normalized
    - Postal code: 5-digit and ZIP+4 accepted, everything else rejected
    - First failing rule wins
    - ValidationFailure.to_error builds the 400 envelope
"""

import math

import pytest

from shipquote.core.domain_types import QuoteRequest, ValidationKind, US_STATE_CODES
from shipquote.core.validate_request import (
    MAX_WEIGHT_OZ,
    ValidationFailure,
    parse_weight,
    validate_quote_request,
)


def _fail(weight=10, state="MD", postal="21201") -> ValidationFailure:
    result = validate_quote_request(weight, state, postal)
    assert isinstance(result, ValidationFailure)
    return result


# ─── weight ──────────────────────────────────────────────────────

@pytest.mark.parametrize("weight", [None, "", "   "])
def test_missing_weight(weight):
    failure = _fail(weight=weight)
    assert failure.field == "weight"
    assert failure.kind == ValidationKind.MISSING_FIELD


@pytest.mark.parametrize("weight", ["abc", True, [], {}, "10oz"])
def test_non_numeric_weight(weight):
    failure = _fail(weight=weight)
    assert failure.field == "weight"
    assert failure.kind == ValidationKind.INVALID_WEIGHT


@pytest.mark.parametrize("weight", [0, -1, -0.5, float("nan"), "0", "nan"])
def test_non_positive_or_nan_weight(weight):
    failure = _fail(weight=weight)
    assert failure.kind == ValidationKind.INVALID_WEIGHT


def test_weight_above_ceiling_reports_max_weight():
    failure = _fail(weight=1601)
    assert failure.kind == ValidationKind.WEIGHT_TOO_HIGH
    assert failure.max_weight == 1600
    assert "1600" in failure.message


def test_infinite_weight_is_too_high():
    failure = _fail(weight=float("inf"))
    assert failure.kind == ValidationKind.WEIGHT_TOO_HIGH


def test_weight_at_ceiling_accepted():
    result = validate_quote_request(MAX_WEIGHT_OZ, "MD", "21201")
    assert isinstance(result, QuoteRequest)
    assert result.weight_oz == 1600.0


def test_numeric_string_weight_converted():
    result = validate_quote_request(" 12.5 ", "MD", "21201")
    assert isinstance(result, QuoteRequest)
    assert result.weight_oz == 12.5


def test_custom_ceiling():
    result = validate_quote_request(200, "MD", "21201", max_weight_oz=160)
    assert isinstance(result, ValidationFailure)
    assert result.kind == ValidationKind.WEIGHT_TOO_HIGH
    assert result.max_weight == 160


def test_parse_weight_rejects_bool():
    assert parse_weight(False) is None
    assert parse_weight(3) == 3.0
    assert parse_weight("1e2") == 100.0


# ─── state ───────────────────────────────────────────────────────

@pytest.mark.parametrize("state", [None, "", "  "])
def test_missing_state(state):
    failure = _fail(state=state)
    assert failure.field == "state"
    assert failure.kind == ValidationKind.MISSING_FIELD


@pytest.mark.parametrize("state", ["XX", "Maryland", "M", 42, "ON"])
def test_unknown_state(state):
    failure = _fail(state=state)
    assert failure.field == "state"
    assert failure.kind == ValidationKind.INVALID_STATE


def test_state_trimmed_and_upper_cased():
    result = validate_quote_request(10, "  md ", "21201")
    assert isinstance(result, QuoteRequest)
    assert result.state == "MD"


@pytest.mark.parametrize("state", ["DC", "PR", "VI", "GU", "AS", "MP"])
def test_dc_and_territories_accepted(state):
    assert isinstance(validate_quote_request(10, state, "00901"), QuoteRequest)


def test_state_set_has_fifty_six_members():
    assert len(US_STATE_CODES) == 56


# ─── postal code ─────────────────────────────────────────────────

@pytest.mark.parametrize("postal", ["21201", "90210-1234", " 21201 "])
def test_valid_postal_codes(postal):
    result = validate_quote_request(10, "MD", postal)
    assert isinstance(result, QuoteRequest)
    assert result.postal_code == postal.strip()


@pytest.mark.parametrize(
    "postal", ["2120", "212011", "21201-12", "21201 1234", "ABCDE", 21201],
)
def test_invalid_postal_codes(postal):
    failure = _fail(postal=postal)
    assert failure.field == "postalCode"
    assert failure.kind == ValidationKind.INVALID_POSTAL_CODE


def test_missing_postal_code():
    failure = _fail(postal=None)
    assert failure.field == "postalCode"
    assert failure.kind == ValidationKind.MISSING_FIELD


# ─── ordering & conversion ───────────────────────────────────────

def test_first_failure_wins():
    failure = _fail(weight=-1, state="XX", postal="bad")
    assert failure.field == "weight"

    failure = _fail(weight=10, state="XX", postal="bad")
    assert failure.field == "state"


def test_to_error_builds_validation_envelope():
    error = _fail(weight=1601).to_error()
    assert error.http_status == 400
    assert error.to_response() == {
        "error": error.message,
        "code": "VALIDATION_ERROR",
        "details": {"field": "weight", "value": 1601, "maxWeight": 1600},
    }


def test_to_error_makes_nan_json_safe():
    error = _fail(weight=float("nan")).to_error()
    assert error.value == "nan"


def test_to_error_makes_nested_non_finite_json_safe():
    error = _fail(weight=[float("nan"), {"x": float("-inf")}]).to_error()
    assert error.value == ["nan", {"x": "-inf"}]


def test_parse_weight_integer_beyond_float_range():
    assert parse_weight(10**400) == math.inf
    assert parse_weight(-(10**400)) == -math.inf


def test_integer_beyond_float_range_is_too_high():
    failure = _fail(weight=10**400)
    assert failure.kind == ValidationKind.WEIGHT_TOO_HIGH
    assert failure.max_weight == 1600
