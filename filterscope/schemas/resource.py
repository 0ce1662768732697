"""Resource Schemas — Pydantic models describing filterable resources.

Invariants:
    - FilterSchema.operators lists custom operators first, then adapter operations
    - Aliases sorted for stable output
"""

from typing import Any

from pydantic import BaseModel

from filterscope.core.resource import FilterDefinition, Resource


class FilterSchema(BaseModel):
    """Public description of one allowlisted filter."""
    name: str
    type: str
    aliases: list[str] = []
    single: bool = False
    required: bool = False
    depends_on: str | None = None
    allow: list[Any] | None = None
    deny: list[Any] | None = None
    operators: list[str] = []

    @classmethod
    def from_definition(
        cls, resource: Resource, definition: FilterDefinition,
    ) -> "FilterSchema":
        custom = list(definition.operators)
        supported = resource.adapter.operators_for(resource.canonical_type(definition))
        return cls(
            name=definition.name,
            type=definition.type_name,
            aliases=sorted(definition.aliases),
            single=definition.single,
            required=definition.required,
            depends_on=definition.depends_on,
            allow=list(definition.allow) if definition.allow is not None else None,
            deny=list(definition.deny) if definition.deny is not None else None,
            operators=custom + [op for op in supported if op not in custom],
        )


class ResourceList(BaseModel):
    """Names of every registered resource."""
    data: list[str]


class RecordPage(BaseModel):
    """Filtered rows of one resource."""
    data: list[dict[str, Any]]
    meta: dict[str, Any]
