from __future__ import annotations

import httpx
import pytest
from fakes import FakeNotifier

CONTACT = {"name": "Luis Rojas", "email": "luis@example.pe", "message": "Necesito una ficha técnica."}


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/contact", "/api/qi/contact"])
async def test_contact_message_sent(
    client: httpx.AsyncClient, fake_notifier: FakeNotifier, path: str
) -> None:
    resp = await client.post(path, json={**CONTACT, "phone": ""})

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Mensaje enviado exitosamente."}
    (message,) = fake_notifier.contacts
    assert message.email == "luis@example.pe"
    assert message.phone is None


@pytest.mark.asyncio
async def test_missing_fields_rejected(client: httpx.AsyncClient, fake_notifier: FakeNotifier) -> None:
    resp = await client.post("/contact", json={"name": "Luis", "message": "   "})

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Missing required fields"
    assert fake_notifier.contacts == []


@pytest.mark.asyncio
async def test_delivery_failure_is_500(client: httpx.AsyncClient, fake_notifier: FakeNotifier) -> None:
    fake_notifier.fail = True

    resp = await client.post("/contact", json=CONTACT)

    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Failed to send message"
