"""End-to-end flows through the HTTP API."""

import csv
import io

from openpyxl import load_workbook

from renttrackr_backend.modules.messaging.client import (
    TwilioWhatsAppClient,
    get_whatsapp_client,
)
from renttrackr_backend.main import app

from .test_messaging import FakeWhatsAppClient


async def _create(client, headers, path: str, payload: dict) -> dict:
    response = await client.post(f"/api{path}", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["success"] is True
    return body["data"]


async def _rental(client, headers) -> dict:
    prop = await _create(client, headers, "/properties", {"address": "12 Oak St"})
    unit = await _create(
        client,
        headers,
        f"/properties/{prop['id']}/units",
        {"unit_number": "1A", "rent_amount": 1200},
    )
    tenant = await _create(
        client,
        headers,
        "/tenants",
        {
            "property_id": prop["id"],
            "unit_id": unit["id"],
            "name": "Jane Doe",
            "phone": "(555) 123-4567",
            "email": "jane@example.com",
        },
    )
    lease = await _create(
        client,
        headers,
        "/leases",
        {
            "tenant_id": tenant["id"],
            "start_date": "2024-01-01",
            "end_date": "2024-12-31",
            "rent": 1200,
        },
    )
    return {"property": prop, "unit": unit, "tenant": tenant, "lease": lease}


async def test_health(client):
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_transaction_id_is_echoed(client):
    response = await client.get("/api/health", headers={"x-transaction-id": "abc12345"})
    assert response.headers["x-transaction-id"] == "abc12345"

    response = await client.get("/api/health")
    assert len(response.headers["x-transaction-id"]) == 8


async def test_requests_need_a_bearer_token(client):
    response = await client.get("/api/properties")
    assert response.status_code == 401

    response = await client.get(
        "/api/properties", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401


async def test_first_request_creates_the_user(client, alice):
    response = await client.get("/api/users/me", headers=alice)

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "alice@example.com"


async def test_rental_chain_and_isolation(client, alice, bob):
    rental = await _rental(client, alice)

    response = await client.get("/api/tenants", headers=alice)
    tenants = response.json()["data"]
    assert [(t["name"], t["unit_number"]) for t in tenants] == [("Jane Doe", "1A")]

    response = await client.get(f"/api/properties/{rental['property']['id']}", headers=bob)
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Property not found or unauthorized",
        "error": "Property not found or unauthorized",
        "data": None,
    }

    response = await client.get("/api/tenants", headers=bob)
    assert response.json()["data"] == []


async def test_duplicate_unit_number_is_rejected(client, alice):
    rental = await _rental(client, alice)

    response = await client.post(
        f"/api/properties/{rental['property']['id']}/units",
        json={"unit_number": "1A", "rent_amount": 900},
        headers=alice,
    )

    assert response.status_code == 400
    assert "already exists" in response.json()["message"]


async def test_unit_number_is_stored_trimmed(client, alice):
    rental = await _rental(client, alice)

    unit = await _create(
        client,
        alice,
        f"/properties/{rental['property']['id']}/units",
        {"unit_number": " 2B ", "rent_amount": 900},
    )

    assert unit["unit_number"] == "2B"


async def test_profile_email_cannot_be_cleared(client, alice):
    response = await client.put("/api/users/me", json={"email": None}, headers=alice)

    assert response.status_code == 400
    assert response.json()["message"] == (
        "Validation error for field 'email': Value cannot be empty"
    )

    response = await client.get("/api/users/me", headers=alice)
    assert response.json()["data"]["email"] == "alice@example.com"


async def test_lease_dates_are_validated(client, alice):
    rental = await _rental(client, alice)

    response = await client.post(
        "/api/leases",
        json={
            "tenant_id": rental["tenant"]["id"],
            "start_date": "2024-06-01",
            "end_date": "2024-01-01",
            "rent": 1000,
        },
        headers=alice,
    )
    assert response.status_code == 422


async def test_shared_property_through_invitation(client, alice, bob):
    await client.get("/api/users/me", headers=bob)
    owner = await _create(client, alice, "/owners", {"name": "Oak Holdings", "type": "llc"})
    prop = await _create(
        client, alice, "/properties", {"address": "7 Pine Rd", "owner_id": owner["id"]}
    )
    invitation = await _create(
        client,
        alice,
        f"/owners/{owner['id']}/invitations",
        {"email": "bob@example.com", "role": "viewer"},
    )
    assert invitation["invite_url"].endswith(invitation["token"])

    await _create(client, bob, "/owners/invitations/accept", {"token": invitation["token"]})

    response = await client.get(f"/api/properties/{prop['id']}", headers=bob)
    assert response.status_code == 200

    response = await client.put(
        f"/api/properties/{prop['id']}", json={"notes": "bob"}, headers=bob
    )
    assert response.status_code == 404

    response = await client.put(
        f"/api/owners/{owner['id']}/users/user_bob", json={"role": "editor"}, headers=alice
    )
    assert response.status_code == 200

    response = await client.put(
        f"/api/properties/{prop['id']}", json={"notes": "bob"}, headers=bob
    )
    assert response.status_code == 200
    assert response.json()["data"]["notes"] == "bob"


async def test_last_admin_cannot_leave(client, alice):
    owner = await _create(client, alice, "/owners", {"name": "Solo"})

    response = await client.delete(
        f"/api/owners/{owner['id']}/users/user_alice", headers=alice
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot remove the last admin"


async def test_payments_roll_into_dashboard_and_reports(client, alice):
    rental = await _rental(client, alice)
    await _create(
        client,
        alice,
        "/payments",
        {"lease_id": rental["lease"]["id"], "amount": 1200, "date": "2024-02-01", "late_fee": 25},
    )
    await _create(
        client,
        alice,
        "/expenses",
        {"property_id": rental["property"]["id"], "type": "Repair", "amount": 300, "date": "2024-02-10"},
    )

    response = await client.get("/api/dashboard/summary", headers=alice)
    summary = response.json()["data"]
    assert (summary["property_count"], summary["tenant_count"]) == (1, 1)

    response = await client.get(
        "/api/financials/reports/income-statement", params={"year": 2024}, headers=alice
    )
    statement = response.json()["data"]
    assert statement["total_revenue"] == 1200
    assert statement["net_income"] == 900

    response = await client.get("/api/financials/reports/payment", headers=alice)
    report = response.json()["data"]
    assert report["total_late_fees"] == 25
    assert report["monthly_payments"] == [
        {"month": "February 2024", "amount": 1200, "count": 1, "late_fees": 25}
    ]
    assert report["payments"][0]["tenant_email"] == "jane@example.com"


async def test_export_downloads(client, alice):
    rental = await _rental(client, alice)
    await _create(
        client,
        alice,
        "/payments",
        {"lease_id": rental["lease"]["id"], "amount": 1200, "date": "2024-03-01"},
    )

    response = await client.get(
        "/api/financials/export/cash-flow",
        params={"format": "csv", "year": 2024},
        headers=alice,
    )
    assert response.status_code == 200
    assert response.headers["content-disposition"] == (
        'attachment; filename="cash-flow-analysis-2024.csv"'
    )
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["Cash Flow Analysis", "Year: 2024"]
    assert ["Total Revenue", "$1200.00"] in rows

    response = await client.get(
        "/api/financials/export/tenant", params={"format": "xlsx"}, headers=alice
    )
    assert response.status_code == 200
    workbook = load_workbook(io.BytesIO(response.content))
    assert workbook.sheetnames == ["Summary", "Tenants"]
    assert workbook["Tenants"]["A2"].value == "Jane Doe"


async def test_search_finds_records_and_actions(client, alice):
    await _rental(client, alice)

    response = await client.get("/api/search", params={"q": "Oak"}, headers=alice)

    results = response.json()["data"]
    assert {"type": "property", "title": "12 Oak St"}.items() <= results[0].items()


async def test_onboarding_progress(client, alice):
    response = await client.get("/api/onboarding/status", headers=alice)
    status = response.json()["data"]
    assert status["show_welcome"] is True
    assert status["is_complete"] is False

    await _rental(client, alice)
    response = await client.get("/api/onboarding/status", headers=alice)
    status = response.json()["data"]
    assert [step["complete"] for step in status["steps"]] == [False, True, True, True]


async def test_payment_reminder_uses_tenant_phone(client, alice):
    fake = FakeWhatsAppClient()
    app.dependency_overrides[get_whatsapp_client] = lambda: fake
    rental = await _rental(client, alice)

    data = await _create(
        client,
        alice,
        "/messages/payment-reminder",
        {"tenant_id": rental["tenant"]["id"], "amount": 1200, "due_date": "2024-04-01"},
    )

    assert data["to"] == "+15551234567"
    to, body = fake.sent[0]
    assert body.startswith("Hello Jane Doe,")
    assert "$1200.00" in body and "April 1, 2024" in body


async def test_unconfigured_twilio_answers_502(client, alice):
    app.dependency_overrides[get_whatsapp_client] = lambda: TwilioWhatsAppClient(
        None, None, "whatsapp:+14155238886", "https://example.test"
    )

    response = await client.post(
        "/api/messages/whatsapp",
        json={"to": "+15551234567", "message": "Hi"},
        headers=alice,
    )

    assert response.status_code == 502
    assert response.json()["error"] == {"error": "Twilio credentials are not configured"}


async def test_invalid_phone_is_rejected(client, alice):
    app.dependency_overrides[get_whatsapp_client] = FakeWhatsAppClient

    response = await client.post(
        "/api/messages/whatsapp",
        json={"to": "12", "message": "Hi"},
        headers=alice,
    )

    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid phone number format")


async def _renovation_cost(client, headers, renovation_id: str) -> float:
    response = await client.get(f"/api/renovations/{renovation_id}", headers=headers)
    return response.json()["data"]["total_cost"]


async def test_renovation_total_follows_its_items(client, alice):
    rental = await _rental(client, alice)
    renovation = await _create(
        client,
        alice,
        "/renovations",
        {"property_id": rental["property"]["id"], "title": "Kitchen", "total_cost": 50},
    )
    items_path = f"/renovations/{renovation['id']}/items"

    tiles = await _create(
        client, alice, items_path, {"category": "Tiles", "quantity": 3, "unit_cost": 19.99}
    )
    assert tiles["total_cost"] == 59.97
    assert await _renovation_cost(client, alice, renovation["id"]) == 59.97

    sink = await _create(
        client, alice, items_path, {"category": "Sink", "unit_cost": 200, "total_cost": 180}
    )
    assert sink["total_cost"] == 180
    assert await _renovation_cost(client, alice, renovation["id"]) == 239.97

    response = await client.put(
        f"/api/renovations/items/{tiles['id']}", json={"quantity": 5}, headers=alice
    )
    assert response.json()["data"]["total_cost"] == 99.95
    assert await _renovation_cost(client, alice, renovation["id"]) == 279.95

    response = await client.delete(f"/api/renovations/items/{sink['id']}", headers=alice)
    assert response.status_code == 200
    assert await _renovation_cost(client, alice, renovation["id"]) == 99.95


async def test_permit_status_change_is_logged(client, alice):
    rental = await _rental(client, alice)
    permit = await _create(
        client,
        alice,
        "/parking/permits",
        {"property_id": rental["property"]["id"], "permit_number": "P-100"},
    )
    path = f"/api/parking/permits/{permit['id']}"

    await client.put(path, json={"vehicle_color": "Blue"}, headers=alice)
    response = await client.get(f"{path}/activity", headers=alice)
    assert response.json()["data"] == []

    response = await client.put(path, json={"status": "Cancelled"}, headers=alice)
    assert response.json()["data"]["status"] == "Cancelled"

    response = await client.get(f"{path}/activity", headers=alice)
    notes = [entry["note"] for entry in response.json()["data"]]
    assert notes == ["Status changed from Active to Cancelled"]
