"""Tests for the /companies routes."""

import pytest


@pytest.mark.asyncio
async def test_create_company(client, admin_headers):
    payload = {
        "handle": "new",
        "name": "New",
        "description": "DescNew",
        "numEmployees": 10,
        "logoUrl": "http://new.img",
    }
    r = await client.post("/api/v1/companies", json=payload, headers=admin_headers)
    assert r.status_code == 201
    assert r.json() == {"company": payload}


@pytest.mark.asyncio
async def test_create_company_duplicate(client, job_ids, admin_headers):
    r = await client.post(
        "/api/v1/companies",
        json={"handle": "c1", "name": "Dup", "description": "d"},
        headers=admin_headers,
    )
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_create_company_requires_admin(client, user_headers):
    r = await client.post(
        "/api/v1/companies",
        json={"handle": "x", "name": "X", "description": "d"},
        headers=user_headers,
    )
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_list_companies_filtered(client, job_ids):
    r = await client.get("/api/v1/companies", params={"minEmployees": "2", "maxEmployees": "3"})
    assert r.status_code == 200
    assert [c["handle"] for c in r.json()["companies"]] == ["c2", "c3"]

    r = await client.get("/api/v1/companies", params={"minEmployees": "3", "maxEmployees": "1"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_get_company(client, job_ids):
    r = await client.get("/api/v1/companies/c2")
    assert r.status_code == 200
    company = r.json()["company"]
    assert company["numEmployees"] == 2
    assert [j["title"] for j in company["jobs"]] == ["j2"]


@pytest.mark.asyncio
async def test_update_company(client, job_ids, admin_headers):
    r = await client.patch(
        "/api/v1/companies/c1", json={"numEmployees": 106}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json()["company"]["numEmployees"] == 106


@pytest.mark.asyncio
async def test_update_company_empty_body(client, job_ids, admin_headers):
    r = await client.patch("/api/v1/companies/c1", json={}, headers=admin_headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_delete_company(client, job_ids, admin_headers):
    r = await client.delete("/api/v1/companies/c3", headers=admin_headers)
    assert r.json() == {"deleted": "c3"}

    r = await client.get("/api/v1/companies/c3")
    assert r.status_code == 404
    r = await client.get(f"/api/v1/jobs/{job_ids['senior dev']}")
    assert r.status_code == 404
