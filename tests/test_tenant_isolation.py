"""
Integration tests for tenant isolation

A caller resolved to one business must never read or change another
business's rows; foreign ids behave exactly like ids that do not exist.
"""

import pytest
from httpx import AsyncClient
from uuid import uuid4

from servicetracker.models import ServiceUpdate
from sqlmodel import select


async def _create_service(client: AsyncClient, headers: dict, email: str = "jane@example.com") -> dict:
    response = await client.post(
        "/api/services/create",
        json={
            "title": "Boiler repair",
            "description": "No hot water",
            "customerName": "Jane Doe",
            "customerEmail": email,
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["service"]


@pytest.mark.asyncio
async def test_cross_tenant_service_access_is_not_found(client, onboard):
    headers_a, _ = await onboard("Alpha")
    headers_b, _ = await onboard("Beta")
    service = await _create_service(client, headers_a)

    response = await client.get(f"/api/services/{service['id']}", headers=headers_b)
    assert response.status_code == 404
    assert response.json() == {"error": "Service not found"}

    response = await client.get(f"/api/services/{service['id']}", headers=headers_a)
    assert response.status_code == 200
    assert response.json()["service"]["title"] == "Boiler repair"


@pytest.mark.asyncio
async def test_foreign_id_looks_like_missing_id(client, onboard):
    headers_a, _ = await onboard("Alpha")
    headers_b, _ = await onboard("Beta")
    service = await _create_service(client, headers_a)

    foreign = await client.get(f"/api/services/{service['id']}", headers=headers_b)
    missing = await client.get(f"/api/services/{uuid4()}", headers=headers_b)

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()


@pytest.mark.asyncio
async def test_cross_tenant_status_update_is_rejected(client, onboard, session_factory):
    headers_a, _ = await onboard("Alpha")
    headers_b, _ = await onboard("Beta")
    service = await _create_service(client, headers_a)

    for method in ("PATCH", "PUT"):
        response = await client.request(
            method,
            f"/api/services/{service['id']}",
            json={"status": "CANCELLED"},
            headers=headers_b,
        )
        assert response.status_code == 404

    response = await client.get(f"/api/services/{service['id']}", headers=headers_a)
    assert response.json()["service"]["status"] == "PENDING"

    async with session_factory() as session:
        result = await session.exec(select(ServiceUpdate))
        assert len(result.all()) == 1


@pytest.mark.asyncio
async def test_cross_tenant_customer_access_is_not_found(client, onboard):
    headers_a, _ = await onboard("Alpha")
    headers_b, _ = await onboard("Beta")
    response = await client.post(
        "/api/customers/create",
        json={"name": "Jane", "email": "jane@example.com"},
        headers=headers_a,
    )
    customer_id = response.json()["customer"]["id"]

    assert (await client.get(f"/api/customers/{customer_id}", headers=headers_b)).status_code == 404
    response = await client.patch(
        f"/api/customers/{customer_id}",
        json={"name": "Hijacked", "email": "evil@example.com"},
        headers=headers_b,
    )
    assert response.status_code == 404
    assert (await client.delete(f"/api/customers/{customer_id}", headers=headers_b)).status_code == 404

    response = await client.get(f"/api/customers/{customer_id}", headers=headers_a)
    assert response.status_code == 200
    assert response.json()["customer"]["name"] == "Jane"


@pytest.mark.asyncio
async def test_lists_only_show_own_business(client, onboard):
    headers_a, _ = await onboard("Alpha")
    headers_b, _ = await onboard("Beta")
    await _create_service(client, headers_a, email="a-customer@example.com")
    await _create_service(client, headers_b, email="b-customer@example.com")

    for headers, email in ((headers_a, "a-customer@example.com"), (headers_b, "b-customer@example.com")):
        services = (await client.get("/api/services", headers=headers)).json()["services"]
        assert [s["customer"]["email"] for s in services] == [email]

        body = (await client.get("/api/customers", headers=headers)).json()
        assert [c["email"] for c in body["customers"]] == [email]

        stats = (await client.get("/api/dashboard", headers=headers)).json()["stats"]
        assert stats["totalServices"] == 1


@pytest.mark.asyncio
async def test_same_customer_email_in_two_businesses(client, onboard):
    headers_a, _ = await onboard("Alpha")
    headers_b, _ = await onboard("Beta")

    service_a = await _create_service(client, headers_a, email="shared@example.com")
    service_b = await _create_service(client, headers_b, email="shared@example.com")

    assert service_a["customerId"] != service_b["customerId"]


@pytest.mark.asyncio
async def test_cannot_assign_technician_from_other_business(client, onboard):
    headers_a, _ = await onboard("Alpha")
    _, body_b = await onboard("Beta")
    service = await _create_service(client, headers_a)

    response = await client.patch(
        f"/api/services/{service['id']}/technician",
        json={"technicianId": body_b["user"]["id"]},
        headers=headers_a,
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Technician not found"
