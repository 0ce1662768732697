"""Filter Engine — drive normalize → tokenize → validate → coerce → dispatch per parameter.

Invariants:
    - Required and dependent checks run once, before any parameter is touched
    - Parameters are processed in supplied order; each dispatch receives the
      scope returned by the previous one
    - Fail-fast: the first error aborts apply(); no scope is returned
    - A single filter reaches the dispatcher with exactly one value (or None)

Design Decisions:
    - apply() is an explicit fold (functools.reduce) over the parameters
    - resolve_param() exposes everything but dispatch, for callers that only
      need the typed, validated value
"""

import logging
from functools import reduce
from typing import Any, Mapping

from filterscope.core.coerce_value import coerce_value
from filterscope.core.dispatch_filter import dispatch_filter
from filterscope.core.domain_types import RawLiteral, ResolvedFilter, normalize_operator
from filterscope.core.enforce_filters import (
    check_allowlist,
    check_denylist,
    check_singular,
    validate_request_filters,
)
from filterscope.core.normalize_param import normalize_param
from filterscope.core.resource import FilterDefinition, Resource
from filterscope.core.tokenize_value import tokenize_value

logger = logging.getLogger(__name__)


class FilterEngine:
    """Applies one request's filter parameters to a scope."""

    def __init__(
        self, resource: Resource, params: Mapping[str, Any], context: Any = None,
    ):
        self._resource = resource
        self._params = params
        self._context = context

    def apply(self, scope: Any) -> Any:
        """Return the scope narrowed by every parameter, or raise."""
        validate_request_filters(self._resource, self._params)
        return reduce(self._apply_param, self._params.items(), scope)

    def resolve_param(self, param_name: str, raw_value: Any) -> ResolvedFilter:
        definition = self._resource.find_filter(param_name, self._context)
        return self._resolve(definition, raw_value)

    def _apply_param(self, scope: Any, param: tuple[str, Any]) -> Any:
        param_name, raw_value = param
        definition = self._resource.find_filter(param_name, self._context)
        resolved = self._resolve(definition, raw_value)
        logger.debug(
            f"Applying filter {resolved.attribute} {resolved.operator}",
            extra={
                "resource": self._resource.name,
                "filter_name": resolved.attribute,
                "operator": resolved.operator,
            },
        )
        return dispatch_filter(
            self._resource, definition, resolved, scope, self._context,
        )

    def _resolve(self, definition: FilterDefinition, raw_value: Any) -> ResolvedFilter:
        resource = self._resource
        canonical = resource.canonical_type(definition)

        normalized = normalize_param(raw_value, canonical)
        value = normalized.value
        if isinstance(value, RawLiteral):
            value = tokenize_value(resource.name, definition, value, canonical)

        check_singular(resource, definition, value)
        coerced = coerce_value(resource, definition, definition.name, value)

        elements = coerced if isinstance(coerced, list) else [coerced]
        check_allowlist(resource, definition, elements)
        check_denylist(resource, definition, elements)

        if definition.single:
            coerced = elements[0] if elements else None

        return ResolvedFilter(
            attribute=definition.name,
            operator=normalize_operator(normalized.operator),
            value=coerced,
        )


def apply_filters(
    resource: Resource, params: Mapping[str, Any], scope: Any, context: Any = None,
) -> Any:
    """Functional shorthand for FilterEngine(...).apply(scope)."""
    return FilterEngine(resource, params, context).apply(scope)
