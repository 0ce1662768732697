"""Filter Dispatch — tests for custom-operator precedence and adapter lookup.

Tests cover:
    - Custom operator wins over an adapter operation of the same name
    - "!op" resolved filters dispatch to not_op
    - Adapter lookup uses the canonical type (integer_id → integer)
    - Missing adapter operation → AdapterNotImplementedError
"""

import pytest

from filterscope.core.dispatch_filter import dispatch_filter, operation_name
from filterscope.core.domain_types import ResolvedFilter
from filterscope.core.errors import AdapterNotImplementedError
from filterscope.core.resource import FilterDefinition
from tests.sample_resources import RecordingAdapter, build_employee_resource


def _resource(*filters):
    return build_employee_resource(RecordingAdapter(), list(filters))


def test_operation_name_format():
    assert operation_name("string", "not_eq") == "filter_string_not_eq"


def test_adapter_operation_applied():
    definition = FilterDefinition("name")
    resource = _resource(definition)
    scope = dispatch_filter(
        resource, definition, ResolvedFilter("name", "eq", ["bob"]), (),
    )
    assert scope == (("filter_string_eq", "name", ["bob"]),)


def test_bang_operator_dispatches_negation():
    definition = FilterDefinition("name")
    resource = _resource(definition)
    scope = dispatch_filter(
        resource, definition, ResolvedFilter("name", "!eq", ["bob"]), (),
    )
    assert scope == (("filter_string_not_eq", "name", ["bob"]),)


def test_canonical_type_used_for_lookup():
    definition = FilterDefinition("id", "integer_id")
    resource = _resource(definition)
    scope = dispatch_filter(resource, definition, ResolvedFilter("id", "gt", [3]), ())
    assert scope == (("filter_integer_gt", "id", [3]),)


def test_custom_operator_takes_precedence():
    calls = []

    def custom_eq(scope, value, context):
        calls.append((value, context))
        return scope + (("custom", value),)

    definition = FilterDefinition("name", operators={"eq": custom_eq})
    resource = _resource(definition)
    scope = dispatch_filter(
        resource, definition, ResolvedFilter("name", "eq", ["bob"]), (), "ctx",
    )
    assert scope == (("custom", ["bob"]),)
    assert calls == [(["bob"], "ctx")]


def test_custom_negated_operator_registered_with_bang():
    definition = FilterDefinition(
        "name", operators={"!search": lambda scope, value, ctx: scope + ("neg",)},
    )
    resource = _resource(definition)
    scope = dispatch_filter(
        resource, definition, ResolvedFilter("name", "not_search", ["x"]), (),
    )
    assert scope == ("neg",)


def test_missing_operation_raises_configuration_error():
    definition = FilterDefinition("name")
    resource = _resource(definition)
    with pytest.raises(AdapterNotImplementedError) as exc_info:
        dispatch_filter(
            resource, definition, ResolvedFilter("name", "gt", ["b"]), (),
        )
    error = exc_info.value
    assert error.operation == "filter_string_gt"
    assert error.adapter == "recording"
    assert error.attribute == "name"
    assert error.http_status == 500
