"""Tests for the reservation endpoints"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from app.config import settings
from app.jobs import tasks

from tests.conftest import RESERVATION_DATE, RESERVATION_TIME, reservation_payload


@pytest.mark.asyncio
async def test_create_reservation(client: AsyncClient, dining_tables):
    """Test reserving a table for a party of three"""
    response = await client.post("/reservations", json=reservation_payload(guests=3))

    assert response.status_code == 201
    data = response.json()
    assert data["first_name"] == "Jane"
    assert data["guests"] == 3
    assert data["seating"] == "Indoor"
    assert data["date"] == RESERVATION_DATE
    assert data["time"] == RESERVATION_TIME
    assert data["special_requests"] == "Window seat if possible"
    assert data["table"]["id"] == dining_tables[2]
    assert data["table"]["table_number"] == 2
    assert data["table"]["seats"] == 4
    assert data["table"]["type"] == "Indoor"


@pytest.mark.asyncio
async def test_create_reservation_twelve_hour_time(client: AsyncClient, dining_tables):
    response = await client.post(
        "/reservations",
        json=reservation_payload(time="7:30 PM", guests="2", seating="INDOOR"),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["time"] == "19:30"
    assert data["guests"] == 2
    assert data["table"]["table_number"] == 1


@pytest.mark.asyncio
async def test_create_reservation_missing_fields(client: AsyncClient, dining_tables):
    payload = reservation_payload()
    del payload["email"]
    del payload["seating"]

    response = await client.post("/reservations", json=payload)

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Missing required fields"
    assert data["reason"] == "email, seating"


@pytest.mark.asyncio
async def test_create_reservation_malformed_body(client: AsyncClient, dining_tables):
    response = await client.post("/reservations", json=reservation_payload(guests=[3]))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


@pytest.mark.asyncio
async def test_create_reservation_no_capacity(client: AsyncClient, dining_tables):
    """Second identical request for the only outdoor table conflicts"""
    first = await client.post("/reservations", json=reservation_payload(seating="Outdoor"))
    assert first.status_code == 201

    response = await client.post("/reservations", json=reservation_payload(seating="Outdoor"))

    assert response.status_code == 409
    assert response.json() == {
        "error": "No Outdoor table available for 3 guests",
        "reason": "No available tables for the selected seating and guests.",
    }


@pytest.mark.asyncio
async def test_list_reservations_filtered(client: AsyncClient, dining_tables):
    created = await client.post("/reservations", json=reservation_payload(guests=5))
    await client.post("/reservations", json=reservation_payload(guests=2, time="18:00"))

    response = await client.get(
        "/reservations",
        params={"date": RESERVATION_DATE, "time": RESERVATION_TIME},
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["id"] == created.json()["id"]
    assert data[0]["table"]["table_number"] == 3
    assert data[0]["table"]["seats"] == 6

    everything = await client.get("/reservations")
    assert [r["time"] for r in everything.json()] == ["18:00", "19:00"]


@pytest.mark.asyncio
async def test_list_reservations_bad_filter(client: AsyncClient):
    response = await client.get("/reservations", params={"date": "tomorrow"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_cancel_requires_admin(client: AsyncClient, dining_tables):
    created = await client.post("/reservations", json=reservation_payload())

    response = await client.delete(f"/reservations/{created.json()['id']}")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_cancel_reservation_releases_table(client: AsyncClient, admin_client: AsyncClient, dining_tables):
    created = await client.post("/reservations", json=reservation_payload(seating="Outdoor"))
    reservation_id = created.json()["id"]

    full = await client.post("/reservations", json=reservation_payload(seating="Outdoor"))
    assert full.status_code == 409

    response = await admin_client.delete(f"/reservations/{reservation_id}")
    assert response.status_code == 204

    table = await client.get(f"/tables/{dining_tables[4]}")
    assert table.json()["availability"] is True

    again = await client.post("/reservations", json=reservation_payload(seating="Outdoor"))
    assert again.status_code == 201
    assert again.json()["table"]["id"] == dining_tables[4]


@pytest.mark.asyncio
async def test_cancel_unknown_reservation(admin_client: AsyncClient):
    response = await admin_client.delete(f"/reservations/{uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Reservation not found"}


@pytest.mark.asyncio
async def test_get_and_update_reservation(client: AsyncClient, admin_client: AsyncClient, dining_tables):
    created = await client.post("/reservations", json=reservation_payload())
    reservation_id = created.json()["id"]

    response = await admin_client.get(f"/reservations/{reservation_id}")
    assert response.status_code == 200
    assert response.json()["email"] == "jane@example.com"

    response = await admin_client.patch(
        f"/reservations/{reservation_id}",
        json={"phone": "+15550000000", "time": "20:00", "specialRequests": "High chair"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["phone"] == "+15550000000"
    assert data["time"] == "20:00"
    assert data["special_requests"] == "High chair"


@pytest.mark.asyncio
async def test_update_reservation_to_taken_slot(client: AsyncClient, admin_client: AsyncClient, dining_tables):
    await client.post("/reservations", json=reservation_payload(seating="Outdoor"))
    later = await client.post("/reservations", json=reservation_payload(seating="Outdoor", time="20:00"))

    response = await admin_client.patch(
        f"/reservations/{later.json()['id']}",
        json={"time": RESERVATION_TIME},
    )

    assert response.status_code == 409
    assert response.json()["error"] == "Table is already reserved"


@pytest.mark.asyncio
async def test_reservation_queues_confirmation(client: AsyncClient, dining_tables, monkeypatch):
    queued = []
    monkeypatch.setattr(settings, "notifications_enabled", True)
    monkeypatch.setattr(tasks.send_reservation_confirmation, "delay", lambda details: queued.append(details))

    response = await client.post("/reservations", json=reservation_payload())

    assert response.status_code == 201
    assert len(queued) == 1
    assert queued[0]["reservation_id"] == response.json()["id"]
    assert queued[0]["email"] == "jane@example.com"
    assert queued[0]["table_number"] == 2


@pytest.mark.asyncio
async def test_notification_failure_keeps_reservation(client: AsyncClient, dining_tables, monkeypatch):
    def broker_down(details):
        raise ConnectionError("redis unavailable")

    monkeypatch.setattr(settings, "notifications_enabled", True)
    monkeypatch.setattr(tasks.send_reservation_confirmation, "delay", broker_down)

    response = await client.post("/reservations", json=reservation_payload())
    assert response.status_code == 201

    listed = await client.get("/reservations")
    assert [r["id"] for r in listed.json()] == [response.json()["id"]]
