"""
Integration tests for the worker/vendor payment API.

Tests directory CRUD, payment recording, cascading delete and error shapes.
"""

import pytest


async def create_worker(client, **overrides):
    payload = {"name": "Chinedu Okafor", "role": "Carpenter", "hourly_rate": 2500, "contact": "0803 000 1111"}
    payload.update(overrides)
    response = await client.post("/v1/workers", json=payload)
    assert response.status_code == 201
    return response.json()


async def create_vendor(client, **overrides):
    payload = {"name": "BUA Cement", "category": "Cement", "contact": "sales@bua.test", "rating": 4}
    payload.update(overrides)
    response = await client.post("/v1/vendors", json=payload)
    assert response.status_code == 201
    return response.json()


# TEST 1: Worker creation
@pytest.mark.asyncio
async def test_create_worker_starts_unpaid(client):
    data = await create_worker(client)
    
    assert data["kind"] == "WORKER"
    assert data["role"] == "Carpenter"
    assert data["total_paid"] == 0
    assert data["last_payment_date"] is None
    assert "id" in data


# TEST 2: Payment scenario
@pytest.mark.asyncio
async def test_record_payments_updates_worker(client):
    worker = await create_worker(client)
    
    response = await client.post(
        f"/v1/workers/{worker['id']}/payments",
        json={"amount": 500.00, "payment_date": "2024-02-10", "description": "advance"},
    )
    assert response.status_code == 201
    entry = response.json()
    assert entry["amount"] == 500.0
    assert entry["payee_id"] == worker["id"]
    assert entry["payment_date"] == "2024-02-10"
    assert entry["description"] == "advance"
    assert entry["created_at"]
    
    await client.post(
        f"/v1/workers/{worker['id']}/payments",
        json={"amount": 250.50, "payment_date": "2024-02-15", "description": "balance"},
    )
    
    data = (await client.get(f"/v1/workers/{worker['id']}")).json()
    assert data["total_paid"] == 750.5
    assert data["last_payment_date"] == "2024-02-15"
    
    listing = (await client.get(f"/v1/workers/{worker['id']}/payments")).json()
    assert listing["total"] == 2
    assert [p["description"] for p in listing["payments"]] == ["balance", "advance"]


# TEST 3: Unknown payee
@pytest.mark.asyncio
async def test_payment_to_unknown_worker_is_structured_404(client):
    response = await client.post(
        "/v1/workers/9999/payments",
        json={"amount": 10, "payment_date": "2024-02-10"},
    )
    
    assert response.status_code == 404
    body = response.json()
    assert body["error_code"] == "ERR_TXN_FAILED"
    assert body["details"]["cause"] == "ERR_NOT_FOUND_001"
    
    summary = (await client.get("/v1/analytics")).json()
    assert summary["payment_entries"] == 0


# TEST 4: Request validation
@pytest.mark.asyncio
@pytest.mark.parametrize("field,payload", [
    ("amount", {"amount": -5, "payment_date": "2024-02-10"}),
    ("amount", {"amount": 0, "payment_date": "2024-02-10"}),
    ("amount", {"amount": 10.005, "payment_date": "2024-02-10"}),
    ("amount", {"amount": "ten", "payment_date": "2024-02-10"}),
    ("payment_date", {"amount": 10, "payment_date": "2024-02-31"}),
])
async def test_invalid_payment_value_is_invalid_argument(client, field, payload):
    worker = await create_worker(client)

    response = await client.post(f"/v1/workers/{worker['id']}/payments", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "ERR_INVALID_ARGUMENT"
    assert body["details"]["field"] == field
    data = (await client.get(f"/v1/workers/{worker['id']}")).json()
    assert data["total_paid"] == 0


@pytest.mark.asyncio
async def test_missing_payment_field_is_schema_error(client):
    worker = await create_worker(client)

    response = await client.post(
        f"/v1/workers/{worker['id']}/payments", json={"payment_date": "2024-02-10"}
    )

    assert response.status_code == 422
    assert response.json()["error_code"] == "ERR_VALIDATION"


@pytest.mark.asyncio
async def test_out_of_range_payee_id_is_invalid_argument(client):
    too_big = 2**64

    response = await client.post(
        f"/v1/workers/{too_big}/payments",
        json={"amount": 1, "payment_date": "2024-01-01"},
    )
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "payee_id"

    for response in (
        await client.get(f"/v1/workers/{too_big}"),
        await client.get(f"/v1/workers/{too_big}/payments"),
        await client.delete(f"/v1/workers/{too_big}"),
    ):
        assert response.status_code == 400
        assert response.json()["error_code"] == "ERR_INVALID_ARGUMENT"


# TEST 5: Kind isolation
@pytest.mark.asyncio
async def test_vendor_id_is_not_a_worker(client):
    vendor = await create_vendor(client)
    
    assert (await client.get(f"/v1/workers/{vendor['id']}")).status_code == 404
    response = await client.post(
        f"/v1/workers/{vendor['id']}/payments",
        json={"amount": 10, "payment_date": "2024-02-10"},
    )
    assert response.status_code == 404
    
    data = (await client.get(f"/v1/vendors/{vendor['id']}")).json()
    assert data["total_paid"] == 0


# TEST 6: Update cannot touch totals
@pytest.mark.asyncio
async def test_update_changes_directory_fields_only(client):
    worker = await create_worker(client)
    await client.post(
        f"/v1/workers/{worker['id']}/payments",
        json={"amount": 100, "payment_date": "2024-02-10"},
    )
    
    response = await client.put(
        f"/v1/workers/{worker['id']}",
        json={"role": "Foreman", "total_paid": 1, "last_payment_date": "1999-01-01"},
    )
    
    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "Foreman"
    assert data["name"] == "Chinedu Okafor"  # Unchanged
    assert data["total_paid"] == 100
    assert data["last_payment_date"] == "2024-02-10"


# TEST 7: Cascading delete
@pytest.mark.asyncio
async def test_delete_worker_removes_payments(client):
    worker = await create_worker(client)
    keeper = await create_worker(client, name="Kept Worker")
    for payee in (worker, keeper):
        await client.post(
            f"/v1/workers/{payee['id']}/payments",
            json={"amount": 40, "payment_date": "2024-02-10"},
        )
    
    response = await client.delete(f"/v1/workers/{worker['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Worker deleted successfully"
    
    assert (await client.get(f"/v1/workers/{worker['id']}/payments")).status_code == 404
    assert (await client.delete(f"/v1/workers/{worker['id']}")).status_code == 404
    
    summary = (await client.get("/v1/analytics")).json()
    assert summary["workers"] == 1
    assert summary["payment_entries"] == 1


# TEST 8: Vendor flow and listing
@pytest.mark.asyncio
async def test_vendor_payments_and_listing(client):
    vendor = await create_vendor(client)
    await create_vendor(client, name="Tiles Galore", category="Finishing")
    
    await client.post(
        f"/v1/vendors/{vendor['id']}/payments",
        json={"amount": 150000, "payment_date": "2024-03-03", "description": "40 bags"},
    )
    
    listing = (await client.get("/v1/vendors")).json()
    assert listing["total"] == 2
    assert {v["name"] for v in listing["payees"]} == {"BUA Cement", "Tiles Galore"}
    paid = next(v for v in listing["payees"] if v["id"] == vendor["id"])
    assert paid["total_paid"] == 150000
    assert paid["category"] == "Cement"
    assert paid["rating"] == 4


@pytest.mark.asyncio
async def test_health_and_correlation_header(client):
    response = await client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Correlation-ID"] == "abc-123"
