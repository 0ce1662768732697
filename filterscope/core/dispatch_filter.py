"""Filter Dispatch — route a resolved filter to a custom operator or the adapter.

Invariants:
    - A custom callable for the exact (normalized) operator always wins; the
      adapter is not consulted
    - Adapter lookup key is (canonical type, operator) — declared type aliases never matter
    - Missing adapter operation → AdapterNotImplementedError (configuration defect)
"""

from typing import Any

from filterscope.core.domain_types import ResolvedFilter, normalize_operator
from filterscope.core.errors import AdapterNotImplementedError
from filterscope.core.resource import FilterDefinition, Resource


def operation_name(canonical_type: str, operator: str) -> str:
    """Human-readable name for an adapter operation, used in errors and logs."""
    return f"filter_{canonical_type}_{operator}"


def dispatch_filter(
    resource: Resource,
    definition: FilterDefinition,
    resolved: ResolvedFilter,
    scope: Any,
    context: Any = None,
) -> Any:
    """Apply one resolved filter to the scope. Returns the new scope."""
    operator = normalize_operator(resolved.operator)

    custom = definition.operators.get(operator)
    if custom is not None:
        return custom(scope, resolved.value, context)

    canonical = resource.canonical_type(definition)
    operation = resource.adapter.lookup(canonical, operator)
    if operation is None:
        raise AdapterNotImplementedError(
            resource.name,
            resource.adapter.name,
            resolved.attribute,
            operation_name(canonical, operator),
        )
    return operation(scope, resolved.attribute, resolved.value)
