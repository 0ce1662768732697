"""Type Registry — declared filter types, their canonical names, and casting.

Invariants:
    - Every declared type maps to exactly one canonical name
    - Aliased types (integer_id → integer) share the canonical name used for dispatch
    - cast() raises pydantic ValidationError (a ValueError) on invalid literals
    - Unknown declared types raise UnknownFilterTypeError (configuration defect)

Design Decisions:
    - pydantic TypeAdapter for casting: lax-mode coercion of query-string
      literals ("5" → 5, "true" → True, ISO dates) without hand-written parsers
    - Array types promote a scalar to a one-element list in the caster itself,
      so the coercer never special-cases scalar promotion
"""

import json
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any
from uuid import UUID

from pydantic import BeforeValidator, TypeAdapter

from filterscope.core.errors import UnknownFilterTypeError


ARRAY_TYPE_PREFIX = "array_of"


def _stringify_numbers(value: Any) -> Any:
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


def _decode_json_object(value: Any) -> Any:
    if isinstance(value, str):
        return json.loads(value)
    return value


def _promote_scalar(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


String = Annotated[str, BeforeValidator(_stringify_numbers)]
Hash = Annotated[dict[str, Any], BeforeValidator(_decode_json_object)]


def array_of(item_type: Any) -> Any:
    """List type that accepts a bare scalar as a one-element list."""
    return Annotated[list[item_type], BeforeValidator(_promote_scalar)]


@dataclass(frozen=True)
class TypeSpec:
    """One registered filter type."""
    name: str
    canonical_name: str
    adapter: TypeAdapter


class TypeRegistry:
    """Declared type name → TypeSpec. Satisfies the TypeSystem protocol."""

    def __init__(self) -> None:
        self._specs: dict[str, TypeSpec] = {}

    def register(self, name: str, canonical_name: str, python_type: Any) -> None:
        self._specs[name] = TypeSpec(name, canonical_name, TypeAdapter(python_type))

    def spec(self, type_name: str) -> TypeSpec:
        spec = self._specs.get(type_name)
        if spec is None:
            raise UnknownFilterTypeError(type_name)
        return spec

    def names(self) -> list[str]:
        return list(self._specs)

    def canonical_name(self, type_name: str) -> str:
        return self.spec(type_name).canonical_name

    def is_array(self, type_name: str) -> bool:
        return (
            type_name.startswith(ARRAY_TYPE_PREFIX)
            or self.canonical_name(type_name) == "array"
        )

    def cast(self, type_name: str, value: Any) -> Any:
        return self.spec(type_name).adapter.validate_python(value)


def build_default_registry() -> TypeRegistry:
    """Registry with the stock filter types."""
    registry = TypeRegistry()
    registry.register("string", "string", String)
    registry.register("integer", "integer", int)
    registry.register("integer_id", "integer", int)
    registry.register("float", "float", float)
    registry.register("decimal", "decimal", Decimal)
    registry.register("big_decimal", "decimal", Decimal)
    registry.register("boolean", "boolean", bool)
    registry.register("date", "date", date)
    registry.register("datetime", "datetime", datetime)
    registry.register("uuid", "uuid", UUID)
    registry.register("hash", "hash", Hash)
    registry.register("array", "array", array_of(Any))
    registry.register("array_of_strings", "array", array_of(String))
    registry.register("array_of_integers", "array", array_of(int))
    registry.register("array_of_uuids", "array", array_of(UUID))
    return registry
