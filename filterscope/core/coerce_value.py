"""Type Coercion — cast tokenized values to the filter's declared type.

Invariants:
    - Array types: the whole value is cast as one unit (the type system promotes scalars)
    - Scalar types: always returns a list, one cast per element
    - Any ValueError/TypeError from the type system → CoercionFailedError
"""

from typing import Any

from filterscope.core.domain_types import (
    ParamValue, RawLiteral, ScalarValue, SequenceValue, StructuredValue,
)
from filterscope.core.errors import CoercionFailedError
from filterscope.core.resource import FilterDefinition, Resource


def coerce_value(
    resource: Resource, definition: FilterDefinition, attribute: str, value: ParamValue,
) -> Any:
    """Cast a tokenized value. Returns one value (array types) or a list."""
    if resource.types.is_array(definition.type_name):
        return _cast(resource, definition, attribute, unwrap(value))
    return [
        _cast(resource, definition, attribute, element)
        for element in as_elements(value)
    ]


def unwrap(value: ParamValue) -> Any:
    """Variant → plain Python value."""
    match value:
        case SequenceValue(items=items):
            return list(items)
        case ScalarValue(value=inner) | StructuredValue(value=inner):
            return inner
        case RawLiteral(text=text):
            return text


def as_elements(value: ParamValue) -> list:
    """Variant → list of elements to cast individually."""
    match value:
        case SequenceValue(items=items):
            return list(items)
        case ScalarValue(value=inner) | StructuredValue(value=inner):
            return [inner]
        case RawLiteral(text=text):
            return [text]


def _cast(
    resource: Resource, definition: FilterDefinition, attribute: str, literal: Any,
) -> Any:
    try:
        return resource.types.cast(definition.type_name, literal)
    except (ValueError, TypeError):
        raise CoercionFailedError(
            resource.name, attribute, definition.type_name, literal,
        ) from None
