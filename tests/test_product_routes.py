"""Product routes — end-to-end behaviour of the five CRUD endpoints.

Invariants:
    - Store-assigned ids; client-supplied ids are ignored
    - Absent ids give 404 on get, update and delete, never 500
    - Invalid payloads are rejected with 400 before the service runs
    - Persistence failures surface as 500 with the generic error body
"""

import pytest

from products_api.dao.product_dao import product_dao
from products_api.services.product_service import product_service


async def test_list_on_empty_store_returns_empty_array(client):
    res = await client.get("/products")
    assert res.status_code == 200
    assert res.json() == []


async def test_create_then_get_returns_same_product(client, chair):
    created = await client.post("/products", json=chair)
    assert created.status_code == 201
    body = created.json()
    assert isinstance(body["id"], int)
    assert {k: body[k] for k in chair} == chair

    fetched = await client.get(f"/products/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == body


async def test_full_lifecycle(client, chair):
    """POST → GET → PUT → DELETE → GET 404."""
    created = (await client.post("/products", json=chair)).json()
    product_id = created["id"]

    res = await client.get(f"/products/{product_id}")
    assert res.status_code == 200
    assert res.json() == created

    updated = await client.put(
        f"/products/{product_id}",
        json={"name": "Chair", "price": 39.99, "color": "red", "stock": 8},
    )
    assert updated.status_code == 200
    assert updated.json() == {
        "id": product_id, "name": "Chair", "price": 39.99, "color": "red", "stock": 8,
    }

    deleted = await client.delete(f"/products/{product_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Product deleted", "success": True, "id": product_id}

    gone = await client.get(f"/products/{product_id}")
    assert gone.status_code == 404


async def test_list_returns_products_in_creation_order(client, chair):
    await client.post("/products", json=chair)
    await client.post("/products", json={"name": "Table", "price": 120, "stock": 2})

    res = await client.get("/products")
    assert res.status_code == 200
    assert [p["name"] for p in res.json()] == ["Chair", "Table"]
    assert res.json()[1]["color"] is None


async def test_client_supplied_id_is_ignored(client, chair):
    res = await client.post("/products", json={**chair, "id": 999})
    assert res.status_code == 201
    assert res.json()["id"] != 999


async def test_update_replaces_every_field(client, chair):
    created = (await client.post("/products", json=chair)).json()

    res = await client.put(
        f"/products/{created['id']}",
        json={"name": "Stool", "price": 0, "stock": 0},
    )
    assert res.status_code == 200
    assert res.json() == {"id": created["id"], "name": "Stool", "price": 0, "color": None, "stock": 0}


@pytest.mark.parametrize("method", ["get", "put", "delete"])
async def test_absent_id_is_not_found(client, chair, method):
    kwargs = {"json": chair} if method == "put" else {}
    res = await getattr(client, method)("/products/4242", **kwargs)
    assert res.status_code == 404
    assert res.json() == {"message": "Product not found", "success": False, "status_code": 404}


async def test_delete_twice_is_not_found(client, chair):
    created = (await client.post("/products", json=chair)).json()
    assert (await client.delete(f"/products/{created['id']}")).status_code == 200
    assert (await client.delete(f"/products/{created['id']}")).status_code == 404


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"price": 1.0, "color": "red", "stock": 1}, "name"),
        ({"name": "", "price": 1.0, "stock": 1}, "name"),
        ({"name": "Chair", "price": -0.01, "stock": 1}, "price"),
        ({"name": "Chair", "price": 1.0, "stock": -1}, "stock"),
        ({"name": "Chair", "price": "cheap", "stock": 1}, "price"),
        ({"name": "Chair", "price": 1.0, "stock": 1.5}, "stock"),
    ],
)
async def test_create_rejects_invalid_payload(client, payload, field):
    res = await client.post("/products", json=payload)
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Invalid input"
    assert field in [e["field"] for e in body["errors"]]


async def test_create_rejects_malformed_json(client):
    res = await client.post(
        "/products", content=b"{not json", headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["errors"] == [{"field": "body", "message": "Request body must be valid JSON"}]


async def test_create_rejects_non_object_body(client):
    res = await client.post("/products", json=[{"name": "Chair"}])
    assert res.status_code == 400


async def test_invalid_payload_never_reaches_service(client, monkeypatch):
    calls = []

    async def spy(db, payload):
        calls.append(payload)

    monkeypatch.setattr(product_service, "create_product", spy)

    res = await client.post("/products", json={"price": 1.0, "stock": 1})
    assert res.status_code == 400
    assert calls == []


async def test_update_validates_before_lookup(client):
    """An invalid body on an absent id is a 400, the validator runs first."""
    res = await client.put("/products/4242", json={"name": "Chair", "price": -1, "stock": 1})
    assert res.status_code == 400


@pytest.mark.parametrize("method", ["get", "put", "delete"])
@pytest.mark.parametrize("raw_id", ["abc", "1.5", "-1", "99999999999999999999"])
async def test_unusable_id_is_not_found(client, chair, method, raw_id):
    """Ids that are not integers, or that the store cannot hold, name no product."""
    kwargs = {"json": chair} if method == "put" else {}
    res = await getattr(client, method)(f"/products/{raw_id}", **kwargs)
    assert res.status_code == 404
    assert res.json()["message"] == "Product not found"


async def test_create_rejects_stock_the_store_cannot_hold(client, chair):
    res = await client.post("/products", json={**chair, "stock": 10**20})
    assert res.status_code == 400
    assert [e["field"] for e in res.json()["errors"]] == ["stock"]
    assert (await client.get("/products")).json() == []


async def test_persistence_failure_is_server_error(client, monkeypatch):
    async def broken(db):
        raise RuntimeError("database is gone")

    monkeypatch.setattr(product_dao, "get_all", broken)

    res = await client.get("/products")
    assert res.status_code == 500
    assert res.json() == {
        "message": "Could not retrieve products", "success": False, "status_code": 500,
    }


async def test_unknown_route_uses_error_body(client):
    res = await client.get("/orders")
    assert res.status_code == 404
    assert res.json()["success"] is False


async def test_responses_carry_request_id(client):
    res = await client.get("/products", headers={"X-Request-ID": "req-123"})
    assert res.headers["X-Request-ID"] == "req-123"


async def test_health(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
