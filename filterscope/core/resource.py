"""Resource Configuration — declared filters and how a request name resolves to one.

Invariants:
    - FilterDefinition and Resource are frozen; safe to share across requests
    - Custom operator keys are stored normalized ("!foo" → "not_foo")
    - A filter resolves by its name first, then by any alias
    - A filter whose guard rejects the context resolves like an undeclared one

Design Decisions:
    - Guards evaluated here, at lookup, so the engine only ever sees permitted filters
    - allow/deny kept as tuples: membership works for unhashable coerced values (dicts)
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from filterscope.core.boundary_protocols import (
    CustomOperation, FilterAdapter, Guard, TypeSystem,
)
from filterscope.core.domain_types import normalize_operator
from filterscope.core.errors import UnknownFilterError


@dataclass(frozen=True)
class FilterDefinition:
    """One allowlisted filter on a resource."""
    name: str
    type_name: str = "string"
    aliases: frozenset[str] = frozenset()
    single: bool = False
    allow: tuple | None = None
    deny: tuple | None = None
    required: bool = False
    depends_on: str | None = None
    operators: Mapping[str, CustomOperation] = field(default_factory=dict)
    guard: Guard | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "aliases", frozenset(self.aliases))
        if self.allow is not None:
            object.__setattr__(self, "allow", tuple(self.allow))
        if self.deny is not None:
            object.__setattr__(self, "deny", tuple(self.deny))
        object.__setattr__(self, "operators", MappingProxyType({
            normalize_operator(op): fn for op, fn in self.operators.items()
        }))

    @property
    def names(self) -> frozenset[str]:
        """Declared name plus aliases."""
        return self.aliases | {self.name}

    def permits(self, context: Any) -> bool:
        return self.guard is None or bool(self.guard(context))

    def supplied_in(self, params: Mapping[str, Any]) -> bool:
        return any(name in params for name in self.names)


@dataclass(frozen=True)
class Resource:
    """A filterable resource: its filters, type system, and backend adapter."""
    name: str
    adapter: FilterAdapter
    types: TypeSystem
    filters: Mapping[str, FilterDefinition]
    model: Any = None

    @classmethod
    def build(
        cls,
        name: str,
        adapter: FilterAdapter,
        types: TypeSystem,
        filters: Iterable[FilterDefinition],
        model: Any = None,
    ) -> "Resource":
        return cls(
            name=name,
            adapter=adapter,
            types=types,
            filters=MappingProxyType({f.name: f for f in filters}),
            model=model,
        )

    def find_filter(self, param_name: str, context: Any = None) -> FilterDefinition:
        """Resolve a request parameter name (or alias) to its definition."""
        definition = self.filters.get(param_name)
        if definition is None:
            definition = next(
                (f for f in self.filters.values() if param_name in f.aliases),
                None,
            )
        if definition is None or not definition.permits(context):
            raise UnknownFilterError(self.name, str(param_name))
        return definition

    def canonical_type(self, definition: FilterDefinition) -> str:
        return self.types.canonical_name(definition.type_name)

    def base_scope(self) -> Any:
        return self.adapter.base_scope(self.model)
