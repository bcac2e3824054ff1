"""
tests.test_access_api

End-to-end request gating over HTTP: role + route name + method -> status/message.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import httpx
import pytest
from fastapi import FastAPI

from invest_portal.access.gate import (
    DENY_RESOURCE_MESSAGE,
    DENY_WRITE_MESSAGE,
    AccessDecision,
    AccessDeniedError,
    GateContext,
    RequestGate,
)
from invest_portal.access.policy import DEFAULT_POLICY
from invest_portal.access.scope import OUT_OF_DISTRICT_MESSAGE

from .conftest import Login

T = TypeVar("T")

PROJECT_BODY = {"name": "Логистический центр", "total_investment": "250000.00"}


@pytest.mark.asyncio
async def test_akim_is_blocked_from_users(client: httpx.AsyncClient, login: Login) -> None:
    headers = await login(role_name="akim")
    r = await client.get("/v1/users", headers=headers)
    assert r.status_code == 403
    assert r.json()["detail"] == DENY_RESOURCE_MESSAGE


@pytest.mark.asyncio
async def test_akim_may_view_single_region(
    client: httpx.AsyncClient, login: Login, region_id: int
) -> None:
    headers = await login(role_name="akim")

    r = await client.get(f"/v1/regions/{region_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["id"] == region_id

    r = await client.get("/v1/regions", headers=headers)
    assert r.status_code == 403
    assert r.json()["detail"] == DENY_RESOURCE_MESSAGE


@pytest.mark.asyncio
async def test_akim_can_read_but_not_write_projects(
    client: httpx.AsyncClient, login: Login, region_id: int, project_id: int
) -> None:
    headers = await login(role_name="akim")

    r = await client.get("/v1/investment-projects", headers=headers)
    assert r.status_code == 200
    assert [p["id"] for p in r.json()] == [project_id]

    r = await client.put(
        f"/v1/investment-projects/{project_id}",
        headers=headers,
        json={**PROJECT_BODY, "region_id": region_id},
    )
    assert r.status_code == 403
    assert r.json()["detail"] == DENY_WRITE_MESSAGE

    r = await client.delete(f"/v1/investment-projects/{project_id}", headers=headers)
    assert r.status_code == 403
    assert r.json()["detail"] == DENY_WRITE_MESSAGE

    # Nothing was changed by the rejected requests.
    r = await client.get(f"/v1/investment-projects/{project_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["name"] == "Завод ферросплавов"


@pytest.mark.asyncio
async def test_zamakim_display_name_and_legacy_label_are_read_only(
    client: httpx.AsyncClient, login: Login, region_id: int
) -> None:
    body = {**PROJECT_BODY, "region_id": region_id}

    headers = await login(role_name="zamakim")
    r = await client.post("/v1/investment-projects", headers=headers, json=body)
    assert r.status_code == 403
    assert r.json()["detail"] == DENY_WRITE_MESSAGE

    headers = await login(role_label="Заместитель акима")
    r = await client.post("/v1/investment-projects", headers=headers, json=body)
    assert r.status_code == 403
    assert r.json()["detail"] == DENY_WRITE_MESSAGE


@pytest.mark.asyncio
async def test_ispolnitel_is_blocked_from_admin_only_resources(
    client: httpx.AsyncClient, login: Login
) -> None:
    headers = await login(role_name="ispolnitel")
    for path in ("/v1/roles", "/v1/users", "/v1/project-types"):
        r = await client.get(path, headers=headers)
        assert r.status_code == 403, path
        assert r.json()["detail"] == DENY_RESOURCE_MESSAGE


@pytest.mark.asyncio
async def test_ispolnitel_can_create_projects(
    client: httpx.AsyncClient, login: Login, region_id: int
) -> None:
    headers = await login(role_name="ispolnitel")

    r = await client.post(
        "/v1/investment-projects",
        headers=headers,
        json={**PROJECT_BODY, "region_id": region_id},
    )
    assert r.status_code == 201
    assert r.json()["status"] == "plan"

    r = await client.get("/v1/regions", headers=headers)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_limited_role_match_is_case_sensitive(client: httpx.AsyncClient, login: Login) -> None:
    headers = await login(role_name="Ispolnitel")
    r = await client.get("/v1/roles", headers=headers)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_admin_passes_the_gate(client: httpx.AsyncClient, login: Login) -> None:
    headers = await login(role_name="superadmin", role_label="admin")

    r = await client.get("/v1/users", headers=headers)
    assert r.status_code == 200

    r = await client.post(
        "/v1/project-types",
        headers=headers,
        json={"name": "Индустриальный"},
    )
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_anonymous_requests_pass_the_gate(client: httpx.AsyncClient) -> None:
    # The gate lets anonymous traffic through; authentication answers with 401.
    r = await client.get("/v1/users")
    assert r.status_code == 401

    r = await client.post("/v1/investment-projects", json={**PROJECT_BODY, "region_id": 1})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_denied_response_keeps_request_id(client: httpx.AsyncClient, login: Login) -> None:
    headers = await login(role_name="akim")
    r = await client.get("/v1/roles", headers={**headers, "x-request-id": "deny-1"})
    assert r.status_code == 403
    assert r.headers["x-request-id"] == "deny-1"


@pytest.mark.asyncio
async def test_shared_props_follow_role_classification(
    client: httpx.AsyncClient, login: Login
) -> None:
    r = await client.get("/v1/shared")
    assert r.status_code == 200
    assert r.json()["canModify"] is True
    assert r.json()["auth"]["user"] is None

    headers = await login(role_label="Заместитель акима")
    r = await client.get("/v1/shared", headers=headers)
    assert r.json()["canModify"] is False
    assert r.json()["auth"]["user"]["role"] == "Заместитель акима"

    headers = await login(role_name="ispolnitel")
    r = await client.get("/v1/shared", headers={**headers, "Cookie": "sidebar_state=false"})
    body = r.json()
    assert body["canModify"] is True
    assert body["sidebarOpen"] is False
    assert body["auth"]["user"]["role_model"]["name"] == "ispolnitel"


@pytest.mark.asyncio
async def test_denials_go_through_gate_handle(
    app: FastAPI, client: httpx.AsyncClient, login: Login
) -> None:
    class LockdownGate(RequestGate):
        def handle(self, ctx: GateContext, call_next: Callable[[GateContext], T]) -> T:
            raise AccessDeniedError(AccessDecision.deny_resource)

    headers = await login(role_name="superadmin", role_label="admin")
    app.state.request_gate = LockdownGate(DEFAULT_POLICY)

    r = await client.get("/v1/investment-projects", headers=headers)
    assert r.status_code == 403
    assert r.json()["detail"] == DENY_RESOURCE_MESSAGE


@pytest.mark.asyncio
async def test_district_executor_sees_only_own_region(
    client: httpx.AsyncClient, login: Login, region_id: int, other_region_id: int, project_id: int
) -> None:
    headers = await login(role_name="ispolnitel", region_id=other_region_id)

    r = await client.post(
        "/v1/investment-projects",
        headers=headers,
        json={**PROJECT_BODY, "region_id": other_region_id},
    )
    assert r.status_code == 201
    own_id = r.json()["id"]

    # The district filter overrides whatever region the caller asks for.
    for params in ({}, {"region_id": region_id}):
        r = await client.get("/v1/investment-projects", headers=headers, params=params)
        assert r.status_code == 200
        assert [p["id"] for p in r.json()] == [own_id]

    r = await client.get(f"/v1/investment-projects/{project_id}", headers=headers)
    assert r.status_code == 404

    r = await client.delete(f"/v1/investment-projects/{project_id}", headers=headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_district_executor_cannot_write_outside_region(
    client: httpx.AsyncClient, login: Login, region_id: int, other_region_id: int
) -> None:
    headers = await login(role_name="ispolnitel", region_id=other_region_id)

    r = await client.post(
        "/v1/investment-projects",
        headers=headers,
        json={**PROJECT_BODY, "region_id": region_id},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == OUT_OF_DISTRICT_MESSAGE

    r = await client.post(
        "/v1/investment-projects",
        headers=headers,
        json={**PROJECT_BODY, "region_id": other_region_id},
    )
    own_id = r.json()["id"]

    r = await client.put(
        f"/v1/investment-projects/{own_id}",
        headers=headers,
        json={**PROJECT_BODY, "region_id": region_id},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == OUT_OF_DISTRICT_MESSAGE

    r = await client.get(f"/v1/investment-projects/{own_id}", headers=headers)
    assert r.json()["region_id"] == other_region_id


@pytest.mark.asyncio
async def test_baskarma_scope_depends_on_type(
    client: httpx.AsyncClient, login: Login, region_id: int, other_region_id: int, project_id: int
) -> None:
    district = await login(role_name="baskarma", region_id=other_region_id, baskarma_type="district")
    r = await client.get(f"/v1/investment-projects/{project_id}", headers=district)
    assert r.status_code == 404

    oblast = await login(role_name="baskarma", region_id=other_region_id, baskarma_type="oblast")
    r = await client.get(f"/v1/investment-projects/{project_id}", headers=oblast)
    assert r.status_code == 200

    r = await client.get("/v1/shared", headers=district)
    assert r.json()["auth"]["user"]["baskarma_type"] == "district"
    assert r.json()["auth"]["user"]["region_id"] == other_region_id


@pytest.mark.asyncio
async def test_executor_without_region_is_not_scoped(
    client: httpx.AsyncClient, login: Login, project_id: int
) -> None:
    headers = await login(role_name="ispolnitel")
    r = await client.get(f"/v1/investment-projects/{project_id}", headers=headers)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_akim_can_read_sez_issues_but_not_file_them(
    client: httpx.AsyncClient, login: Login, region_id: int
) -> None:
    admin = await login(role_name="superadmin", role_label="admin")
    r = await client.post("/v1/sezs", headers=admin, json={"name": "СЭЗ Хоргос", "region_id": region_id})
    assert r.status_code == 201
    sez_id = r.json()["id"]

    headers = await login(role_name="akim")
    r = await client.get("/v1/sezs", headers=headers)
    assert r.status_code == 200
    assert [s["id"] for s in r.json()] == [sez_id]

    r = await client.get(f"/v1/sezs/{sez_id}/issues", headers=headers)
    assert r.status_code == 200
    assert r.json() == []

    r = await client.post(
        f"/v1/sezs/{sez_id}/issues",
        headers=headers,
        json={"title": "Нет электроэнергии", "description": "Подстанция", "severity": "high"},
    )
    assert r.status_code == 403
    assert r.json()["detail"] == DENY_WRITE_MESSAGE

    r = await client.get(f"/v1/sezs/{sez_id}/issues", headers=headers)
    assert r.json() == []


@pytest.mark.asyncio
async def test_completion_review_is_a_write_for_read_only_roles(
    client: httpx.AsyncClient, login: Login, project_id: int
) -> None:
    executor = await login(role_name="ispolnitel")
    executor_id = int((await client.get("/v1/shared", headers=executor)).json()["auth"]["user"]["id"])
    base = f"/v1/investment-projects/{project_id}/tasks"

    r = await client.post(base, headers=executor, json={"title": "Подвести газ", "assigned_to": executor_id})
    assert r.status_code == 201
    task_id = r.json()["id"]

    r = await client.post(f"{base}/{task_id}/completions", headers=executor, json={"comment": "Готово"})
    assert r.status_code == 201
    completion_id = r.json()["id"]
    review_url = f"{base}/{task_id}/completions/{completion_id}/review"

    # `.review` is not a write suffix; the PUT method alone makes it a write.
    akim = await login(role_name="akim")
    r = await client.put(review_url, headers=akim, json={"status": "approved"})
    assert r.status_code == 403
    assert r.json()["detail"] == DENY_WRITE_MESSAGE

    r = await client.put(review_url, headers=executor, json={"status": "approved"})
    assert r.status_code == 200
    assert r.json()["status"] == "approved"
    assert r.json()["reviewed_by"] == executor_id

    r = await client.get(base, headers=akim)
    assert r.status_code == 200
    assert r.json()[0]["status"] == "done"
