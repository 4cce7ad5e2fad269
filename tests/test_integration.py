import pytest
from fastapi.testclient import TestClient

from delivery_admin.errors import StoreError
from delivery_admin.main import create_app


@pytest.fixture(autouse=True)
def fresh_order_store(monkeypatch: pytest.MonkeyPatch):
    from delivery_admin.persistence import orders as orders_persistence

    monkeypatch.setattr(orders_persistence.settings, "store_backend", "memory")
    monkeypatch.setattr(orders_persistence.settings, "batch_threshold", 5)
    orders_persistence.get_order_store.cache_clear()
    yield
    orders_persistence.get_order_store.cache_clear()


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


def _create(client: TestClient, zone: str, customer: str = "Ada") -> dict:
    response = client.post(
        "/api/orders",
        json={"customer": customer, "dispensary": "Green Leaf", "zone": zone},
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_root_and_health(api_client: TestClient):
    assert api_client.get("/").json()["status"] == "running"
    assert api_client.get("/api/health").json() == {"status": "ok"}

    database = api_client.get("/api/health/database").json()
    assert database["backend"] == "memory"
    assert database["connected"] is True


def test_create_and_list_orders(api_client: TestClient):
    first = _create(api_client, "Brooklyn", customer="Ada")
    second = _create(api_client, "Queens", customer="Grace")

    assert first["status"] == "PLACED"
    assert first["zone"] == "Brooklyn"
    assert "createdAt" in first

    listed = api_client.get("/api/orders").json()
    assert [order["id"] for order in listed] == [first["id"], second["id"]]


def test_list_orders_by_zone(api_client: TestClient):
    created = [_create(api_client, zone) for zone in ("Queens", "Bronx", "Queens", "Brooklyn")]

    response = api_client.get("/api/orders", params={"zone": "Queens"})

    assert response.status_code == 200
    assert [order["id"] for order in response.json()] == [created[0]["id"], created[2]["id"]]


def test_list_orders_unknown_zone_is_bad_request(api_client: TestClient):
    response = api_client.get("/api/orders", params={"zone": "Hoboken"})

    assert response.status_code == 400


def test_create_order_missing_field_is_bad_request(api_client: TestClient):
    response = api_client.post("/api/orders", json={"customer": "Ada", "zone": "Queens"})

    assert response.status_code == 400
    assert "dispensary" in response.json()["detail"]
    assert api_client.get("/api/orders").json() == []


def test_update_status(api_client: TestClient):
    order = _create(api_client, "Manhattan")

    response = api_client.patch(f"/api/orders/{order['id']}/status", json={"status": "DISPATCHED"})

    assert response.status_code == 200
    assert response.json()["status"] == "DISPATCHED"
    assert api_client.get(f"/api/orders/{order['id']}").json()["status"] == "DISPATCHED"


def test_update_status_unknown_order_is_not_found(api_client: TestClient):
    order = _create(api_client, "Manhattan")

    response = api_client.patch("/api/orders/does-not-exist/status", json={"status": "DELIVERED"})

    assert response.status_code == 404
    assert api_client.get("/api/orders").json() == [order]


def test_update_status_invalid_value_is_bad_request(api_client: TestClient):
    order = _create(api_client, "Manhattan")

    response = api_client.patch(f"/api/orders/{order['id']}/status", json={"status": "TELEPORTED"})

    assert response.status_code == 400


def test_get_unknown_order_is_not_found(api_client: TestClient):
    assert api_client.get("/api/orders/nope").status_code == 404


def test_optimize_empty(api_client: TestClient):
    response = api_client.get("/api/orders/optimize")

    assert response.status_code == 200
    assert response.json() == {"batches": [], "unbatchedCount": 0}


def test_optimize_batches_brooklyn(api_client: TestClient):
    brooklyn = [_create(api_client, "Brooklyn")["id"] for _ in range(6)]
    for _ in range(3):
        _create(api_client, "Queens")
    dispatched = _create(api_client, "Queens")
    api_client.patch(f"/api/orders/{dispatched['id']}/status", json={"status": "DISPATCHED"})

    first = api_client.get("/api/orders/optimize").json()
    second = api_client.get("/api/orders/optimize").json()

    assert first == second
    assert first["unbatchedCount"] == 3
    assert first["batches"] == [
        {"zone": "Brooklyn", "orderCount": 6, "assignment": "Fleet A", "orderIds": brooklyn}
    ]
    statuses = {order["status"] for order in api_client.get("/api/orders", params={"zone": "Brooklyn"}).json()}
    assert statuses == {"PLACED"}


def test_summary(api_client: TestClient):
    _create(api_client, "Bronx")
    _create(api_client, "Bronx")

    payload = api_client.get("/api/orders/summary").json()

    assert payload["totalOrders"] == 2
    assert payload["placedOrders"] == 2
    assert payload["byZone"]["Bronx"] == 2
    assert payload["byStatus"]["DELIVERED"] == 0


def test_store_failure_is_service_unavailable(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from delivery_admin.api.routes import orders as orders_routes

    def broken(*_args, **_kwargs):
        raise StoreError("Failed to list orders: connection refused")

    monkeypatch.setattr(orders_routes, "list_orders", broken)

    response = api_client.get("/api/orders")

    assert response.status_code == 503
    assert "connection refused" in response.json()["detail"]


@pytest.mark.parametrize(
    "body",
    [
        {"customer": 123, "dispensary": "Green Leaf", "zone": "Queens"},
        {"customer": "Ada", "dispensary": ["Green Leaf"], "zone": "Queens"},
        None,
    ],
)
def test_create_order_malformed_body_is_bad_request(api_client: TestClient, body):
    response = api_client.post("/api/orders", json=body) if body is not None else api_client.post("/api/orders")

    assert response.status_code == 400
    assert isinstance(response.json()["detail"], str)
    assert api_client.get("/api/orders").json() == []


def test_update_status_non_string_is_bad_request(api_client: TestClient):
    order = _create(api_client, "Bronx")

    response = api_client.patch(f"/api/orders/{order['id']}/status", json={"status": 7})

    assert response.status_code == 400
    assert "status" in response.json()["detail"]
    assert api_client.get(f"/api/orders/{order['id']}").json()["status"] == "PLACED"
