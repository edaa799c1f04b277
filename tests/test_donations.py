import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.anyio

def _donation(**overrides):
    body = {
        "donor_name": "Ravi Verma",
        "donor_email": "ravi@example.com",
        "donor_phone": "+91 90000 00000",
        "amount": 1500,
        "payment_method": "upi",
        "transaction_id": "UPI-1001",
        "purpose": "Education",
    }
    body.update(overrides)
    return body

async def test_create_then_list(test_client: AsyncClient, login):
    r = await test_client.post("/api/donations", json=_donation())
    assert r.status_code == 201, r.text
    created = r.json()
    assert created["payment_method"] == "UPI"
    assert created["status"] == "Completed"
    assert created["receipt_number"].startswith("BSS-RCP-")

    headers = await login()
    listed = await test_client.get("/api/donations", headers=headers)
    assert listed.status_code == 200
    assert [d["id"] for d in listed.json()] == [created["id"]]

async def test_receipt_numbers_are_sequential(test_client: AsyncClient):
    numbers = []
    for amount in (100, 200, 300):
        r = await test_client.post("/api/donations", json=_donation(amount=amount))
        numbers.append(r.json()["receipt_number"])
    assert len(set(numbers)) == 3
    assert [int(n.rsplit("-", 1)[1]) for n in numbers] == [1, 2, 3]

async def test_backdated_donation_numbers_by_its_year(test_client: AsyncClient):
    r = await test_client.post("/api/donations", json=_donation(date="2024-12-31T10:00:00Z"))
    assert r.json()["receipt_number"] == "BSS-RCP-2024-000001"

async def test_invalid_donations(test_client: AsyncClient):
    r = await test_client.post("/api/donations", json=_donation(amount=0))
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request"
    assert "details" in r.json()
    r = await test_client.post("/api/donations", json=_donation(payment_method="Barter"))
    assert r.status_code == 400

async def test_filter_update_delete(test_client: AsyncClient, login):
    headers = await login()
    cash = (await test_client.post("/api/donations", json=_donation(payment_method="Cash"))).json()
    await test_client.post("/api/donations", json=_donation())

    r = await test_client.get("/api/donations", params={"payment_method": "Cash"}, headers=headers)
    assert [d["id"] for d in r.json()] == [cash["id"]]

    r = await test_client.put(f"/api/donations/{cash['id']}", headers=headers, json={"status": "Pending"})
    assert r.status_code == 200
    assert r.json()["status"] == "Pending"
    assert r.json()["amount"] == 1500

    r = await test_client.delete(f"/api/donations/{cash['id']}", headers=headers)
    assert r.status_code == 200
    remaining = await test_client.get("/api/donations", headers=headers)
    assert cash["id"] not in [d["id"] for d in remaining.json()]
    assert (await test_client.get(f"/api/donations/{cash['id']}", headers=headers)).status_code == 404

async def test_malformed_id(test_client: AsyncClient, login):
    headers = await login()
    r = await test_client.get("/api/donations/not-an-id", headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid ID format"}

async def test_receipt_pdf(test_client: AsyncClient, login):
    donation = (await test_client.post("/api/donations", json=_donation())).json()
    headers = await login()
    r = await test_client.get(f"/api/generate-receipt/{donation['id']}", headers=headers)
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert "attachment" in r.headers["content-disposition"]
    assert r.content.startswith(b"%PDF")

async def test_receipt_needs_matching_donor_or_permission(test_client: AsyncClient, login):
    donation = (await test_client.post("/api/donations", json=_donation())).json()
    assert (await test_client.get(f"/api/generate-receipt/{donation['id']}")).status_code == 401

    stranger = await login("mod@example.com", role="moderator")
    r = await test_client.get(f"/api/generate-receipt/{donation['id']}", headers=stranger)
    assert r.status_code == 403

    donor = await login("ravi@example.com", role="moderator")
    r = await test_client.get(f"/api/generate-receipt/{donation['id']}", headers=donor)
    assert r.status_code == 200

async def test_receipt_by_number(test_client: AsyncClient):
    donation = (await test_client.post("/api/donations", json=_donation())).json()
    url = f"/api/generate-receipt/number/{donation['receipt_number']}"
    r = await test_client.get(url, params={"email": "RAVI@example.com"})
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")
    assert (await test_client.get(url, params={"email": "someone@example.com"})).status_code == 403
    missing = await test_client.get("/api/generate-receipt/number/BSS-RCP-1999-000009",
                                    params={"email": "ravi@example.com"})
    assert missing.status_code == 404

async def test_bulk_receipts(test_client: AsyncClient, login):
    headers = await login()
    ids = [(await test_client.post("/api/donations", json=_donation(amount=a))).json()["id"] for a in (10, 20)]
    r = await test_client.post("/api/generate-receipt", headers=headers, json={"donation_ids": ids})
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")

    r = await test_client.post("/api/generate-receipt", headers=headers,
                               json={"donation_ids": ["64b7f0c2a1b2c3d4e5f60718"]})
    assert r.status_code == 404

async def test_sample_receipt(test_client: AsyncClient):
    r = await test_client.get("/api/test-receipt")
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")

async def test_update_cannot_clear_required_fields(test_client: AsyncClient, login):
    headers = await login()
    donation = (await test_client.post("/api/donations", json=_donation())).json()
    for field in ("amount", "donor_name", "payment_method"):
        r = await test_client.put(f"/api/donations/{donation['id']}", headers=headers, json={field: None})
        assert r.status_code == 400, field
    # optional fields can still be cleared
    r = await test_client.put(f"/api/donations/{donation['id']}", headers=headers, json={"donor_phone": None})
    assert r.status_code == 200
    assert r.json()["donor_phone"] is None

    listed = await test_client.get("/api/donations", headers=headers)
    assert listed.status_code == 200
    assert listed.json()[0]["amount"] == 1500

async def test_non_finite_amount_is_rejected(test_client: AsyncClient, login):
    body = b'{"donor_name": "Ravi", "donor_email": "ravi@example.com", "amount": Infinity, "payment_method": "UPI"}'
    r = await test_client.post("/api/donations", content=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 400

    headers = await login()
    donation = (await test_client.post("/api/donations", json=_donation())).json()
    r = await test_client.put(f"/api/donations/{donation['id']}", content=b'{"amount": NaN}',
                              headers={**headers, "Content-Type": "application/json"})
    assert r.status_code == 400
    assert (await test_client.get("/api/donations", headers=headers)).status_code == 200
