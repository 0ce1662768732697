"""Boundary Protocols — contracts between the filter engine and its collaborators.

Invariants:
    - Core NEVER imports a backend — adapters are handed in via Resource
    - Scopes are opaque: typed as Any, only passed through
    - lookup() returns None for unsupported combinations; the dispatcher decides the error

Design Decisions:
    - Protocol over ABC: structural subtyping, adapters need no shared base class
    - Synchronous on purpose: scope transformations build queries, they do not run them
"""

from typing import Any, Callable, Protocol


ScopeOperation = Callable[[Any, str, Any], Any]
"""Adapter operation: (scope, attribute, value) -> new scope."""

CustomOperation = Callable[[Any, Any, Any], Any]
"""Per-filter custom operator: (scope, value, context) -> new scope."""

Guard = Callable[[Any], bool]
"""Per-filter guard: (context) -> whether the filter may be used."""


class TypeSystem(Protocol):
    """Contract for literal → typed value casting."""
    def canonical_name(self, type_name: str) -> str: ...
    def is_array(self, type_name: str) -> bool: ...
    def cast(self, type_name: str, value: Any) -> Any: ...


class FilterAdapter(Protocol):
    """Contract for a backend that knows how to narrow a scope."""
    name: str

    def base_scope(self, model: Any) -> Any: ...
    def lookup(self, canonical_type: str, operator: str) -> ScopeOperation | None: ...
    def operators_for(self, canonical_type: str) -> list[str]: ...
