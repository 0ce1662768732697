"""Resource Routes — list resources, describe their filters, fetch filtered rows.

Invariants:
    - GET /api/v1/resources/ lists registered resource names
    - GET /api/v1/resources/{name}/filters describes every allowlisted filter
    - GET /api/v1/resources/{name}?filter[...]=... returns rows matching every filter
    - Unknown resources → 404; filter errors → their own status via error handlers
    - The Request is the filter context handed to guards and custom operators
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from filterscope.adapters.sqlalchemy_adapter import record_to_dict
from filterscope.api.filter_query import parse_filter_query
from filterscope.config import get_settings
from filterscope.infrastructure.database import get_db
from filterscope.schemas.resource import FilterSchema, RecordPage, ResourceList
from filterscope.services.filter_runner import run_filtered_query
from filterscope.services.resource_registry import resource_registry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/resources", tags=["resources"])


@router.get("/", response_model=ResourceList)
async def list_resources():
    return ResourceList(data=resource_registry.names())


@router.get("/{resource_name}/filters", response_model=list[FilterSchema])
async def describe_filters(resource_name: str):
    """Filter schema: declared filters and the operators each accepts."""
    resource = resource_registry.get(resource_name)
    return [
        FilterSchema.from_definition(resource, definition)
        for definition in resource.filters.values()
    ]


@router.get("/{resource_name}", response_model=RecordPage)
async def list_records(
    resource_name: str, request: Request, db: AsyncSession = Depends(get_db),
):
    resource = resource_registry.get(resource_name)
    params = parse_filter_query(
        request.query_params.multi_items(), get_settings().filter_param_key,
    )
    rows = await run_filtered_query(db, resource, params, context=request)
    return RecordPage(
        data=[record_to_dict(row) for row in rows],
        meta={"count": len(rows)},
    )
