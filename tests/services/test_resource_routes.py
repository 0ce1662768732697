"""Integration Tests: resource routes — filter query string → rows over HTTP.

Invariants:
    - Filter errors come back as the structured error envelope with their status
    - Unknown resources → 404
    - Guards and custom operators receive the Request as context

Design Decisions:
    - Real SQLAlchemyAdapter over seeded in-memory SQLite; no mocks
"""

from filterscope.adapters.sqlalchemy_adapter import SQLAlchemyAdapter
from filterscope.core.resource import FilterDefinition
from filterscope.services.resource_registry import resource_registry
from tests.sample_resources import build_employee_resource


def _ids(response):
    return sorted(row["id"] for row in response.json()["data"])


# ==============================================================================
# Listing & description
# ==============================================================================


async def test_list_resources(client):
    response = await client.get("/api/v1/resources/")
    assert response.status_code == 200
    assert "employees" in response.json()["data"]


async def test_describe_filters(client):
    response = await client.get("/api/v1/resources/employees/filters")
    assert response.status_code == 200
    by_name = {f["name"]: f for f in response.json()}
    assert by_name["name"]["aliases"] == ["full_name"]
    assert "not_prefix" in by_name["name"]["operators"]
    assert by_name["title"]["allow"] == ["engineer", "manager", "director"]
    assert by_name["active"]["single"] is True
    assert by_name["active"]["operators"] == ["eq"]


async def test_unknown_resource_404(client):
    response = await client.get("/api/v1/resources/payroll")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


# ==============================================================================
# Filtering
# ==============================================================================


async def test_no_filters_returns_everything(client):
    response = await client.get("/api/v1/resources/employees")
    assert response.status_code == 200
    assert response.json()["meta"]["count"] == 4


async def test_operator_filters(client):
    response = await client.get(
        "/api/v1/resources/employees",
        params={"filter[age][gt]": "30", "filter[name][!eq]": "bob"},
    )
    assert response.status_code == 200
    assert _ids(response) == [1, 4]


async def test_comma_list(client):
    response = await client.get(
        "/api/v1/resources/employees", params={"filter[title]": "manager,director"},
    )
    assert _ids(response) == [2, 4]


async def test_record_serialized(client):
    response = await client.get(
        "/api/v1/resources/employees", params={"filter[full_name]": "alice"},
    )
    [alice] = response.json()["data"]
    assert alice["name"] == "Alice"
    assert alice["hired_on"] == "2019-03-01"
    assert alice["external_id"] == "11111111-1111-1111-1111-111111111111"


# ==============================================================================
# Errors
# ==============================================================================


async def test_unknown_filter_400(client):
    response = await client.get(
        "/api/v1/resources/employees", params={"filter[password]": "x"},
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "UNKNOWN_FILTER"
    assert error["context"]["filter"] == "password"


async def test_allowlist_violation_400(client):
    response = await client.get(
        "/api/v1/resources/employees", params={"filter[title]": "engineer,intern"},
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_FILTER_VALUE"
    assert error["context"]["value"] == "intern"


async def test_singular_violation_400(client):
    response = await client.get(
        "/api/v1/resources/employees", params={"filter[active]": "true,false"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "SINGULAR_FILTER"


async def test_coercion_failure_400(client):
    response = await client.get(
        "/api/v1/resources/employees", params={"filter[age]": "old"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "COERCION_FAILED"


async def test_adapter_gap_500(client):
    response = await client.get(
        "/api/v1/resources/employees", params={"filter[active][gt]": "true"},
    )
    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "ADAPTER_NOT_IMPLEMENTED"
    assert error["category"] == "configuration"


async def test_guard_receives_request(client):
    resource = build_employee_resource(
        SQLAlchemyAdapter(),
        [FilterDefinition(
            "name", guard=lambda request: request.headers.get("x-role") == "admin",
        )],
        name="guarded",
    )
    resource_registry.register(resource)
    try:
        denied = await client.get(
            "/api/v1/resources/guarded", params={"filter[name]": "bob"},
        )
        allowed = await client.get(
            "/api/v1/resources/guarded",
            params={"filter[name]": "bob"},
            headers={"x-role": "admin"},
        )
    finally:
        resource_registry.unregister("guarded")
    assert denied.status_code == 400
    assert allowed.status_code == 200
    assert _ids(allowed) == [2]


async def test_required_filter_400(client):
    resource = build_employee_resource(
        SQLAlchemyAdapter(),
        [FilterDefinition("title", required=True), FilterDefinition("age", "integer")],
        name="scoped",
    )
    resource_registry.register(resource)
    try:
        response = await client.get(
            "/api/v1/resources/scoped", params={"filter[age]": "abc"},
        )
    finally:
        resource_registry.unregister("scoped")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "REQUIRED_FILTER_MISSING"


# ==============================================================================
# Health
# ==============================================================================


async def test_health(client):
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json()["service"] == "filterscope-api"


async def test_ready_with_database(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"
