"""Filter Runner — base scope → FilterEngine → rows, for one request.

Invariants:
    - The engine runs synchronously between awaits; only resolve() does IO
    - Filter errors are logged with resource + code, then re-raised unchanged
    - No rows are fetched if any filter fails (all-or-nothing)
"""

import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from filterscope.core.errors import FilterScopeError
from filterscope.core.filter_engine import FilterEngine
from filterscope.core.resource import Resource
from filterscope.infrastructure.observability import log_filter_error

logger = logging.getLogger(__name__)


def build_filtered_scope(
    resource: Resource, params: Mapping[str, Any], context: Any = None,
) -> Any:
    """Apply request filters to the resource's base scope."""
    try:
        return FilterEngine(resource, params, context).apply(resource.base_scope())
    except FilterScopeError as e:
        log_filter_error(logger, e)
        raise


async def run_filtered_query(
    db: AsyncSession,
    resource: Resource,
    params: Mapping[str, Any],
    context: Any = None,
) -> list:
    """Filter and fetch. The resource's adapter must expose async resolve()."""
    scope = build_filtered_scope(resource, params, context)
    rows = await resource.adapter.resolve(db, scope)
    logger.debug(
        f"Resolved {len(rows)} row(s) for {resource.name}",
        extra={"resource": resource.name},
    )
    return rows
