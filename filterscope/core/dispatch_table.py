"""Dispatch Table — explicit canonical type → operator → operation lookup.

Invariants:
    - Every entry is added through register(); nothing is discovered by name
    - Types sharing an implementation share the same function reference
    - Missing entries return None — never raise here

Design Decisions:
    - Two-level dict over "filter_<type>_<op>" attribute lookup: every mapping
      is visible at registration time
"""

from typing import Iterable, Mapping

from filterscope.core.boundary_protocols import ScopeOperation


class DispatchTable:
    """Canonical type → operator → scope operation."""

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, ScopeOperation]] = {}

    def register(
        self,
        canonical_types: Iterable[str],
        operations: Mapping[str, ScopeOperation],
    ) -> None:
        """Register the same operations for every type in a capability group."""
        for canonical in canonical_types:
            self._entries.setdefault(canonical, {}).update(operations)

    def lookup(self, canonical_type: str, operator: str) -> ScopeOperation | None:
        return self._entries.get(canonical_type, {}).get(operator)

    def operators_for(self, canonical_type: str) -> list[str]:
        return list(self._entries.get(canonical_type, {}))

    def __contains__(self, key: tuple[str, str]) -> bool:
        canonical_type, operator = key
        return self.lookup(canonical_type, operator) is not None
