"""Tests for contact messages, testimonials and the team page"""

from uuid import uuid4

import pytest
from httpx import AsyncClient


def contact_payload(**overrides) -> dict:
    payload = {
        "firstName": "Ada",
        "lastName": "Byron",
        "email": "ada@example.com",
        "phone": "+15550001111",
        "subject": "Private dining",
        "message": "Do you host parties of 30?",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_submit_contact_message(client: AsyncClient):
    response = await client.post("/contact", json=contact_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["first_name"] == "Ada"
    assert data["subject"] == "Private dining"
    assert data["is_read"] is False


@pytest.mark.asyncio
async def test_contact_message_requires_every_field(client: AsyncClient):
    payload = contact_payload()
    del payload["phone"]

    response = await client.post("/contact", json=payload)
    assert response.status_code == 400

    response = await client.post("/contact", json=contact_payload(message=""))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_contact_messages_are_private(client: AsyncClient):
    await client.post("/contact", json=contact_payload())

    response = await client.get("/contact")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_staff_reads_and_marks_messages(client: AsyncClient, staff_client: AsyncClient):
    created = await client.post("/contact", json=contact_payload())
    await client.post("/contact", json=contact_payload(subject="Gift cards"))
    message_id = created.json()["id"]

    response = await staff_client.patch(f"/contact/{message_id}", json={"is_read": True})
    assert response.status_code == 200
    assert response.json()["is_read"] is True

    unread = await staff_client.get("/contact", params={"is_read": False})
    assert [m["subject"] for m in unread.json()] == ["Gift cards"]

    everything = await staff_client.get("/contact")
    assert len(everything.json()) == 2

    single = await staff_client.get(f"/contact/{message_id}")
    assert single.json()["email"] == "ada@example.com"


@pytest.mark.asyncio
async def test_delete_contact_message(client: AsyncClient, staff_client: AsyncClient, admin_client: AsyncClient):
    created = await client.post("/contact", json=contact_payload())
    message_url = f"/contact/{created.json()['id']}"

    response = await staff_client.delete(message_url)
    assert response.status_code == 403

    response = await admin_client.delete(message_url)
    assert response.status_code == 204

    response = await admin_client.get(message_url)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_testimonials_are_public(client: AsyncClient):
    response = await client.post(
        "/testimonials",
        json={"name": "Maria L.", "rating": 5, "content": "Wonderful evening."},
    )
    assert response.status_code == 201
    testimonial_id = response.json()["id"]
    assert response.json()["photo"] is None

    listed = await client.get("/testimonials")
    assert [t["name"] for t in listed.json()] == ["Maria L."]

    single = await client.get(f"/testimonials/{testimonial_id}")
    assert single.json()["rating"] == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [0, 6])
async def test_testimonial_rating_range(client: AsyncClient, rating):
    response = await client.post(
        "/testimonials",
        json={"name": "Tom", "rating": rating, "content": "Fine."},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_admin_moderates_testimonials(client: AsyncClient, admin_client: AsyncClient):
    created = await client.post(
        "/testimonials",
        json={"name": "Tom", "rating": 4, "content": "Great stek."},
    )
    url = f"/testimonials/{created.json()['id']}"

    response = await client.patch(url, json={"content": "Great steak."})
    assert response.status_code == 401

    response = await admin_client.patch(url, json={"content": "Great steak."})
    assert response.status_code == 200
    assert response.json()["content"] == "Great steak."
    assert response.json()["rating"] == 4

    response = await admin_client.delete(url)
    assert response.status_code == 204

    response = await client.get(url)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_team_requires_login(client: AsyncClient):
    response = await client.get("/team")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_team_management(staff_client: AsyncClient, admin_client: AsyncClient):
    member = {
        "name": "Giulia Rossi",
        "email": "giulia@example.com",
        "role": "Head Chef",
        "quote": "Good food is shared food.",
    }

    response = await staff_client.post("/team", json=member)
    assert response.status_code == 403

    response = await admin_client.post("/team", json=member)
    assert response.status_code == 201
    member_url = f"/team/{response.json()['id']}"

    listed = await staff_client.get("/team")
    assert [m["name"] for m in listed.json()] == ["Giulia Rossi"]

    response = await admin_client.put(member_url, json={"role": "Executive Chef", "name": None})
    assert response.status_code == 200
    assert response.json()["role"] == "Executive Chef"
    assert response.json()["name"] == "Giulia Rossi"

    response = await admin_client.delete(member_url)
    assert response.status_code == 204

    response = await staff_client.get(member_url)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_team_member_requires_role(admin_client: AsyncClient):
    response = await admin_client.post("/team", json={"name": "Sam", "email": "sam@example.com"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_team_member(staff_client: AsyncClient):
    response = await staff_client.get(f"/team/{uuid4()}")

    assert response.status_code == 404
