"""SQLAlchemy Adapter — narrows SQLAlchemy 2.0 Select scopes per type and operator.

Invariants:
    - Scope is a Select over one mapped entity; every operation returns a new Select
    - Values arrive as lists (single filters may pass a bare value or None)
    - None (a single filter with no tokens) is an empty any-of: matches nothing
    - Multi-value operators match ANY of the values (IN / OR)
    - not_* variants wrap the positive clause in NOT
    - String eq/prefix/suffix/like are case-insensitive; eql is exact
    - LIKE wildcards in user values are escaped (autoescape)
    - datetime eq/not_eq/lte compare at whole-second granularity

Design Decisions:
    - Capability groups (equatable, ordered) registered once per group instead
      of one method per declared type
    - Column resolved from the Select's entity at call time: one adapter
      instance serves every model
"""

from datetime import timedelta
from typing import Any, Callable

from sqlalchemy import Select, false, func, inspect, not_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from filterscope.core.dispatch_table import DispatchTable


EQUATABLE_TYPES = ("integer", "float", "decimal", "date", "uuid")
ORDERED_TYPES = ("integer", "float", "decimal", "date", "datetime")

_WHOLE_SECOND = timedelta(seconds=1) - timedelta(microseconds=1)

Clause = Callable[[Any, list], ColumnElement]


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _any_of(clauses: list[ColumnElement]) -> ColumnElement:
    return or_(false(), *clauses)


def _column(scope: Select, attribute: str):
    entity = scope.column_descriptions[0]["entity"]
    return getattr(entity, attribute)


# ─── Clause builders: (column, values) -> predicate ─────────────

def _string_eq(column, values: list) -> ColumnElement:
    return func.lower(column).in_([str(v).lower() for v in values])


def _exact_eq(column, values: list) -> ColumnElement:
    return column.in_(values)


def _string_prefix(column, values: list) -> ColumnElement:
    return _any_of([column.istartswith(v, autoescape=True) for v in values])


def _string_suffix(column, values: list) -> ColumnElement:
    return _any_of([column.iendswith(v, autoescape=True) for v in values])


def _string_like(column, values: list) -> ColumnElement:
    return _any_of([column.icontains(v, autoescape=True) for v in values])


def _datetime_eq(column, values: list) -> ColumnElement:
    return _any_of([column.between(v, v + _WHOLE_SECOND) for v in values])


def _gt(column, values: list) -> ColumnElement:
    return _any_of([column > v for v in values])


def _gte(column, values: list) -> ColumnElement:
    return _any_of([column >= v for v in values])


def _lt(column, values: list) -> ColumnElement:
    return _any_of([column < v for v in values])


def _lte(column, values: list) -> ColumnElement:
    return _any_of([column <= v for v in values])


def _datetime_lte(column, values: list) -> ColumnElement:
    return _lte(column, [v + _WHOLE_SECOND for v in values])


def where(clause: Clause, *, negate: bool = False):
    """Lift a clause builder into a scope operation (scope, attribute, value) -> scope."""
    def operation(scope: Select, attribute: str, value: Any) -> Select:
        predicate = clause(_column(scope, attribute), _as_list(value))
        return scope.where(not_(predicate) if negate else predicate)
    return operation


def positive_and_negated(operator: str, clause: Clause) -> dict:
    return {operator: where(clause), f"not_{operator}": where(clause, negate=True)}


class SQLAlchemyAdapter:
    """FilterAdapter over SQLAlchemy Select statements."""

    name = "sqlalchemy"

    def __init__(self) -> None:
        table = DispatchTable()
        table.register(["string"], {
            **positive_and_negated("eq", _string_eq),
            **positive_and_negated("eql", _exact_eq),
            **positive_and_negated("prefix", _string_prefix),
            **positive_and_negated("suffix", _string_suffix),
            **positive_and_negated("like", _string_like),
        })
        table.register(EQUATABLE_TYPES, positive_and_negated("eq", _exact_eq))
        table.register(["boolean"], {"eq": where(_exact_eq)})
        table.register(ORDERED_TYPES, {
            "gt": where(_gt),
            "gte": where(_gte),
            "lt": where(_lt),
            "lte": where(_lte),
        })
        # after the ordered group: lte is overridden
        table.register(["datetime"], {
            **positive_and_negated("eq", _datetime_eq),
            "lte": where(_datetime_lte),
        })
        self._table = table

    def base_scope(self, model: Any) -> Select:
        return select(model)

    def lookup(self, canonical_type: str, operator: str):
        return self._table.lookup(canonical_type, operator)

    def operators_for(self, canonical_type: str) -> list[str]:
        return self._table.operators_for(canonical_type)

    async def resolve(self, db: AsyncSession, scope: Select) -> list:
        """Execute the scope and return the mapped rows."""
        result = await db.execute(scope)
        return list(result.scalars().all())


def record_to_dict(record: Any) -> dict[str, Any]:
    """Mapped instance → {column key: value}."""
    mapper = inspect(record).mapper
    return {attr.key: getattr(record, attr.key) for attr in mapper.column_attrs}
