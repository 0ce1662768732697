"""Error Hierarchy — tests for codes, HTTP status and the response envelope.

Tests cover:
    - Every error carries code, category and http_status
    - to_response() builds the REST envelope with a JSON-safe value
"""

import json
from datetime import date

import pytest

from filterscope.core.errors import (
    AdapterNotImplementedError,
    CoercionFailedError,
    DatabaseError,
    DependentFilterMissingError,
    ErrorCategory,
    FilterScopeError,
    InvalidFilterValueError,
    InvalidLiteralError,
    RequiredFilterMissingError,
    ResourceNotFoundError,
    SingularViolationError,
    UnknownFilterError,
    UnknownFilterTypeError,
)


@pytest.mark.parametrize("error,code,status", [
    (UnknownFilterError("r", "f"), "UNKNOWN_FILTER", 400),
    (RequiredFilterMissingError("r", ["a"]), "REQUIRED_FILTER_MISSING", 400),
    (DependentFilterMissingError("r", ["a"]), "DEPENDENT_FILTER_MISSING", 400),
    (SingularViolationError("r", "f", ["a", "b"]), "SINGULAR_FILTER", 400),
    (InvalidFilterValueError("r", "f", "x"), "INVALID_FILTER_VALUE", 400),
    (InvalidLiteralError("r", "f", "[1"), "INVALID_LITERAL", 400),
    (CoercionFailedError("r", "f", "integer", "x"), "COERCION_FAILED", 400),
    (ResourceNotFoundError("r"), "RESOURCE_NOT_FOUND", 404),
    (AdapterNotImplementedError("r", "a", "f", "filter_string_gt"),
     "ADAPTER_NOT_IMPLEMENTED", 500),
    (UnknownFilterTypeError("money"), "UNKNOWN_FILTER_TYPE", 500),
    (DatabaseError("down", "query"), "DATABASE_ERROR", 503),
])
def test_codes_and_status(error, code, status):
    assert isinstance(error, FilterScopeError)
    assert error.code == code
    assert error.http_status == status


def test_configuration_defects_categorized():
    error = AdapterNotImplementedError("r", "a", "f", "filter_string_gt")
    assert error.category == ErrorCategory.CONFIGURATION


def test_response_envelope():
    response = InvalidFilterValueError("employees", "status", "deleted").to_response()
    body = response["error"]
    assert body["code"] == "INVALID_FILTER_VALUE"
    assert body["category"] == "validation"
    assert body["context"] == {
        "resource": "employees",
        "filter": "status",
        "operator": None,
        "value": "deleted",
    }
    assert "deleted" in body["message"]


def test_response_value_is_json_safe():
    error = InvalidFilterValueError("employees", "hired_on", date(2020, 1, 1))
    body = error.to_response()
    assert body["error"]["context"]["value"] == "2020-01-01"
    json.dumps(body)
