"""Type Registry — tests for canonical names, array detection and casting.

Tests cover:
    - Aliased types share a canonical name
    - is_array for array_of_* names and the array canonical type
    - Lax casting of query-string literals
    - Hash types decode JSON object text
    - Unknown types raise UnknownFilterTypeError
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

import pytest
from pydantic import ValidationError

from filterscope.core.errors import UnknownFilterTypeError
from filterscope.core.type_registry import TypeRegistry, build_default_registry


@pytest.fixture
def types():
    return build_default_registry()


def test_aliases_share_canonical_name(types):
    assert types.canonical_name("integer_id") == "integer"
    assert types.canonical_name("big_decimal") == "decimal"
    assert types.canonical_name("array_of_uuids") == "array"


def test_is_array(types):
    assert types.is_array("array")
    assert types.is_array("array_of_strings")
    assert not types.is_array("string")


def test_custom_type_with_array_canonical_is_array():
    registry = TypeRegistry()
    registry.register("tags", "array", list[str])
    assert registry.is_array("tags")


def test_scalar_casts(types):
    assert types.cast("integer", "42") == 42
    assert types.cast("float", "1.5") == 1.5
    assert types.cast("decimal", "10.25") == Decimal("10.25")
    assert types.cast("boolean", "false") is False
    assert types.cast("date", "2024-05-01") == date(2024, 5, 1)
    assert types.cast("datetime", "2024-05-01T09:30:00") == datetime(2024, 5, 1, 9, 30)
    raw = "11111111-1111-1111-1111-111111111111"
    assert types.cast("uuid", raw) == UUID(raw)


def test_string_accepts_numbers(types):
    assert types.cast("string", 5) == "5"


def test_hash_decodes_json_text(types):
    assert types.cast("hash", '{"a": 1, "b": 2}') == {"a": 1, "b": 2}
    assert types.cast("hash", {"a": 1}) == {"a": 1}


def test_array_promotes_scalar(types):
    assert types.cast("array_of_integers", "3") == [3]
    assert types.cast("array_of_integers", ["1", "2"]) == [1, 2]


def test_invalid_literal_is_value_error(types):
    with pytest.raises(ValidationError):
        types.cast("integer", "abc")
    with pytest.raises(ValueError):
        types.cast("hash", "{not json")


def test_unknown_type(types):
    with pytest.raises(UnknownFilterTypeError) as exc_info:
        types.canonical_name("money")
    assert exc_info.value.code == "UNKNOWN_FILTER_TYPE"
    assert exc_info.value.http_status == 500


def test_names_lists_registered(types):
    assert "integer_id" in types.names()
    assert "hash" in types.names()
