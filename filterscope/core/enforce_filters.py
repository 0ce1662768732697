"""Filter Enforcement — per-parameter and request-wide filter validation.

Invariants:
    - All functions are PURE: no IO, no side effects beyond raising
    - Per-parameter checks raise on the first offending element
    - Required/dependent checks aggregate every offender into one error
    - validate_request_filters runs required before dependent — first error wins

Design Decisions:
    - missing_* helpers return lists; check_* wrap them and raise, so callers
      can inspect without try/except
"""

from typing import Any, Iterable, Mapping

from filterscope.core.domain_types import ParamValue, SequenceValue
from filterscope.core.errors import (
    DependentFilterMissingError,
    InvalidFilterValueError,
    RequiredFilterMissingError,
    SingularViolationError,
)
from filterscope.core.resource import FilterDefinition, Resource


# ─── Request-wide (batched) ─────────────────────────────────────

def missing_required_filters(
    resource: Resource, params: Mapping[str, Any],
) -> list[str]:
    """Required filters supplied under neither their name nor an alias."""
    return [
        definition.name
        for definition in resource.filters.values()
        if definition.required and not definition.supplied_in(params)
    ]


def missing_dependent_filters(
    resource: Resource, params: Mapping[str, Any],
) -> list[str]:
    """Supplied filters whose declared dependency was not supplied."""
    return [
        definition.name
        for definition in resource.filters.values()
        if definition.depends_on
        and definition.supplied_in(params)
        and not _dependency_supplied(resource, definition.depends_on, params)
    ]


def _dependency_supplied(
    resource: Resource, dependency: str, params: Mapping[str, Any],
) -> bool:
    target = resource.filters.get(dependency)
    if target is None:
        return dependency in params
    return target.supplied_in(params)


def check_required_filters(resource: Resource, params: Mapping[str, Any]) -> None:
    missing = missing_required_filters(resource, params)
    if missing:
        raise RequiredFilterMissingError(resource.name, missing)


def check_dependent_filters(resource: Resource, params: Mapping[str, Any]) -> None:
    missing = missing_dependent_filters(resource, params)
    if missing:
        raise DependentFilterMissingError(resource.name, missing)


def validate_request_filters(resource: Resource, params: Mapping[str, Any]) -> None:
    """Run both batched checks. Required wins over dependent."""
    check_required_filters(resource, params)
    check_dependent_filters(resource, params)


# ─── Per-parameter ──────────────────────────────────────────────

def check_singular(
    resource: Resource, definition: FilterDefinition, value: ParamValue,
) -> None:
    """A single filter never takes more than one value."""
    if (
        definition.single
        and isinstance(value, SequenceValue)
        and len(value.items) > 1
    ):
        raise SingularViolationError(resource.name, definition.name, list(value.items))


def check_allowlist(
    resource: Resource, definition: FilterDefinition, values: Iterable[Any],
) -> None:
    if definition.allow is None:
        return
    for value in values:
        if value not in definition.allow:
            raise InvalidFilterValueError(resource.name, definition.name, value)


def check_denylist(
    resource: Resource, definition: FilterDefinition, values: Iterable[Any],
) -> None:
    if definition.deny is None:
        return
    for value in values:
        if value in definition.deny:
            raise InvalidFilterValueError(resource.name, definition.name, value)
