"""Tests for the order endpoints"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from app.config import settings
from app.jobs import tasks


def order_payload(**overrides) -> dict:
    payload = {
        "customer_name": "Sam Lee",
        "customer_email": "sam@example.com",
        "customer_phone": "+15551234567",
        "address": "12 Harbour Street",
        "items": [
            {"name": "Margherita", "quantity": 2, "price_cents": 1250},
            {"name": "Lemonade", "price_cents": 450},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_order(client: AsyncClient):
    response = await client.post("/orders", json=order_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "In Progress"
    assert data["subtotal_cents"] == 2950
    assert data["tax_cents"] == 0
    assert data["total_cents"] == 2950
    assert [(i["name"], i["quantity"], i["line_total_cents"]) for i in data["items"]] == [
        ("Margherita", 2, 2500),
        ("Lemonade", 1, 450),
    ]


@pytest.mark.asyncio
async def test_create_order_uses_menu_prices(client: AsyncClient, test_menu_items):
    steak = test_menu_items[1]

    response = await client.post(
        "/orders",
        json=order_payload(items=[{"menu_item_id": str(steak.id), "quantity": 2, "price_cents": 1}]),
    )

    assert response.status_code == 201
    item = response.json()["items"][0]
    assert item["name"] == "Ribeye Steak"
    assert item["price_cents"] == 3400
    assert item["menu_item_id"] == str(steak.id)
    assert response.json()["total_cents"] == 6800


@pytest.mark.asyncio
async def test_create_order_applies_tax(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "order_tax_rate", 0.0875)

    response = await client.post("/orders", json=order_payload())

    data = response.json()
    assert data["subtotal_cents"] == 2950
    assert data["tax_cents"] == 258
    assert data["total_cents"] == 3208


@pytest.mark.asyncio
async def test_create_order_unknown_menu_item(client: AsyncClient):
    missing = str(uuid4())

    response = await client.post("/orders", json=order_payload(items=[{"menu_item_id": missing}]))

    assert response.status_code == 400
    assert response.json() == {"error": "Menu item not available", "reason": missing}


@pytest.mark.asyncio
async def test_create_order_item_without_price(client: AsyncClient):
    response = await client.post(
        "/orders",
        json=order_payload(items=[{"name": "Lemonade", "quantity": 1}]),
    )

    assert response.status_code == 400
    assert response.json()["reason"] == "items[0]"


@pytest.mark.asyncio
async def test_create_order_requires_items(client: AsyncClient):
    response = await client.post("/orders", json=order_payload(items=[]))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


@pytest.mark.asyncio
async def test_create_order_queues_confirmation(client: AsyncClient, monkeypatch):
    queued = []
    monkeypatch.setattr(settings, "notifications_enabled", True)
    monkeypatch.setattr(tasks.send_order_confirmation, "delay", lambda details: queued.append(details))

    response = await client.post("/orders", json=order_payload())

    assert response.status_code == 201
    assert len(queued) == 1
    assert queued[0]["order_id"] == response.json()["id"]
    assert queued[0]["total_cents"] == 2950


@pytest.mark.asyncio
async def test_get_order_is_public(client: AsyncClient):
    created = await client.post("/orders", json=order_payload())

    response = await client.get(f"/orders/{created.json()['id']}")

    assert response.status_code == 200
    assert response.json()["customer_name"] == "Sam Lee"

    missing = await client.get(f"/orders/{uuid4()}")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_list_orders_requires_staff(client: AsyncClient):
    response = await client.get("/orders")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_list_orders_paginated(client: AsyncClient, staff_client: AsyncClient):
    for name in ("First", "Second", "Third"):
        await client.post("/orders", json=order_payload(customer_name=name))

    response = await staff_client.get("/orders", params={"page": 1, "page_size": 2})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["page"] == 1
    assert len(data["items"]) == 2


@pytest.mark.asyncio
async def test_staff_marks_order_done(client: AsyncClient, staff_client: AsyncClient):
    created = await client.post("/orders", json=order_payload())
    order_id = created.json()["id"]

    response = await staff_client.patch(f"/orders/{order_id}", json={"status": "Done"})
    assert response.status_code == 200
    assert response.json()["status"] == "Done"

    done = await staff_client.get("/orders", params={"status": "Done"})
    assert [o["id"] for o in done.json()["items"]] == [order_id]

    in_progress = await staff_client.get("/orders", params={"status": "In Progress"})
    assert in_progress.json()["total"] == 0


@pytest.mark.asyncio
async def test_update_order_items_recomputes_totals(client: AsyncClient, admin_client: AsyncClient):
    created = await client.post("/orders", json=order_payload())

    response = await admin_client.put(
        f"/orders/{created.json()['id']}",
        json={"items": [{"name": "Espresso", "quantity": 3, "price_cents": 300}], "address": None},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_cents"] == 900
    assert data["address"] is None
    assert len(data["items"]) == 1


@pytest.mark.asyncio
async def test_update_order_rejects_unknown_status(client: AsyncClient, admin_client: AsyncClient):
    created = await client.post("/orders", json=order_payload())

    response = await admin_client.patch(f"/orders/{created.json()['id']}", json={"status": "Shipped"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_order_requires_fields(client: AsyncClient, admin_client: AsyncClient):
    created = await client.post("/orders", json=order_payload())
    order_url = f"/orders/{created.json()['id']}"

    response = await admin_client.patch(order_url, json={})
    assert response.status_code == 400
    assert response.json()["error"] == "No valid fields provided for update"

    response = await admin_client.patch(order_url, json={"customer_name": None})
    assert response.status_code == 400
    assert response.json()["reason"] == "customer_name"


@pytest.mark.asyncio
async def test_delete_order_requires_admin(client: AsyncClient, staff_client: AsyncClient, admin_client: AsyncClient):
    created = await client.post("/orders", json=order_payload())
    order_url = f"/orders/{created.json()['id']}"

    response = await staff_client.delete(order_url)
    assert response.status_code == 403

    response = await admin_client.delete(order_url)
    assert response.status_code == 204

    missing = await client.get(order_url)
    assert missing.status_code == 404
