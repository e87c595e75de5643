from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from catalogue.app import create_app
from catalogue.repository import InMemoryProductStore
from catalogue.state import ConnectionStateCell
from catalogue.supervisor import ConnectionSupervisor

DATA_ROUTES = [
    "/products",
    "/product/sku1",
    "/products/cat1",
    "/categories",
    "/search",
    "/search/Product1",
]


class BrokenStore(InMemoryProductStore):
    async def _fail(self, *args):
        raise RuntimeError("connection reset by peer at 10.0.0.7")

    find_all = _fail
    find_one_by_sku = _fail
    find_by_category = _fail
    distinct_categories = _fail
    text_search = _fail


class Opaque:
    __slots__ = ()


@pytest.fixture
def client(products):
    return TestClient(create_app(InMemoryProductStore(products)))


@pytest.fixture
def disconnected_client():
    async def connector(target: str):
        raise AssertionError("connector should not run without lifespan")

    supervisor = ConnectionSupervisor(ConnectionStateCell(), connector=connector, retry_interval=0.0)
    return TestClient(create_app(supervisor=supervisor))


def test_health_reports_connected_store(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"app": "OK", "mongo": True}


def test_health_reports_disconnected_store(disconnected_client) -> None:
    response = disconnected_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"app": "OK", "mongo": False}


def test_list_products_returns_everything(client) -> None:
    response = client.get("/products")
    assert response.status_code == 200
    body = response.json()
    assert len(body) == 2
    assert body[0]["sku"] == "sku1"


def test_get_product_by_sku(client) -> None:
    response = client.get("/product/sku1")
    assert response.status_code == 200
    assert response.json()["name"] == "Product1"


def test_get_product_unknown_sku_is_404(client) -> None:
    with capture_logs() as logs:
        response = client.get("/product/nonexistent")
    assert response.status_code == 404
    assert response.text == "SKU not found"
    failures = [entry for entry in logs if entry["event"] == "request_failed"]
    assert len(failures) == 1
    assert failures[0]["log_level"] == "warning"
    assert failures[0]["error_type"] == "SKU_NOT_FOUND"
    assert failures[0]["sku"] == "nonexistent"


def test_products_by_category(client) -> None:
    response = client.get("/products/cat1")
    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert "cat1" in body[0]["categories"]


def test_products_by_empty_category_is_404(client) -> None:
    with capture_logs() as logs:
        response = client.get("/products/cat9")
    assert response.status_code == 404
    assert response.text == "No products for cat9"
    failure = next(entry for entry in logs if entry["event"] == "request_failed")
    assert failure["error_type"] == "CATEGORY_EMPTY"
    assert failure["category"] == "cat9"


def test_list_categories(client) -> None:
    response = client.get("/categories")
    assert response.status_code == 200
    assert sorted(response.json()) == ["cat1", "cat2"]


def test_search_without_text_matches_list_all(client) -> None:
    assert client.get("/search").json() == client.get("/products").json()


def test_search_text(client) -> None:
    response = client.get("/search/Product1")
    assert response.status_code == 200
    body = response.json()
    assert [item["sku"] for item in body] == ["sku1"]


def test_search_without_hits_is_empty_success(client) -> None:
    response = client.get("/search/unicorn")
    assert response.status_code == 200
    assert response.json() == []


def test_repeated_reads_are_identical(client) -> None:
    for path in DATA_ROUTES:
        assert client.get(path).content == client.get(path).content


@pytest.mark.parametrize("path", ["/health", "/products", "/product/missing", "/categories"])
def test_every_response_carries_cors_and_timing_headers(client, path: str) -> None:
    response = client.get(path)
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["timing-allow-origin"] == "*"


@pytest.mark.parametrize("path", DATA_ROUTES)
def test_disconnected_routes_short_circuit(disconnected_client, path: str) -> None:
    with capture_logs() as logs:
        response = disconnected_client.get(path)
    assert response.status_code == 500
    assert response.text == "database not available"
    assert response.headers["access-control-allow-origin"] == "*"
    failure = next(entry for entry in logs if entry["event"] == "request_failed")
    assert failure["log_level"] == "error"
    assert failure["error_type"] == "DEPENDENCY_DOWN"
    assert failure["dependency"] == "mongodb"


@pytest.mark.parametrize(
    "path, error_type",
    [
        ("/products", "FETCH_PRODUCTS_FAILED"),
        ("/product/sku1", "FETCH_PRODUCT_FAILED"),
        ("/products/cat1", "FETCH_CATEGORY_FAILED"),
        ("/categories", "FETCH_CATEGORIES_FAILED"),
        ("/search", "SEARCH_FAILED"),
        ("/search/Product1", "SEARCH_FAILED"),
    ],
)
def test_store_failure_hides_cause_from_client(products, path: str, error_type: str) -> None:
    client = TestClient(create_app(BrokenStore(products)))
    with capture_logs() as logs:
        response = client.get(path)
    assert response.status_code == 500
    assert response.text == "internal error"
    assert "10.0.0.7" not in response.text
    failure = next(entry for entry in logs if entry["event"] == "request_failed")
    assert failure["log_level"] == "error"
    assert failure["error_type"] == error_type
    assert "10.0.0.7" in failure["error"]
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["timing-allow-origin"] == "*"


def test_unencodable_document_is_internal_error_with_headers(products) -> None:
    store = InMemoryProductStore(products + [{"sku": "sku3", "name": "Odd", "blob": Opaque()}])
    client = TestClient(create_app(store))
    with capture_logs() as logs:
        response = client.get("/products")
    assert response.status_code == 500
    assert response.text == "internal error"
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["timing-allow-origin"] == "*"
    failure = next(entry for entry in logs if entry["event"] == "request_failed")
    assert failure["error_type"] == "FETCH_PRODUCTS_FAILED"


def test_requests_are_logged_except_health(client) -> None:
    with capture_logs() as logs:
        client.get("/health")
        client.get("/product/sku1")
        client.get("/product/missing")
    completed = [entry for entry in logs if entry["event"] == "request_completed"]
    assert [(entry["method"], entry["path"], entry["status_code"]) for entry in completed] == [
        ("GET", "/product/sku1", 200),
        ("GET", "/product/missing", 404),
    ]


def test_lifespan_connects_in_background(products) -> None:
    store = InMemoryProductStore(products)
    targets: list[str] = []

    async def connector(target: str):
        targets.append(target)
        return store

    supervisor = ConnectionSupervisor(ConnectionStateCell(), connector=connector, retry_interval=0.0)
    app = create_app(supervisor=supervisor)

    with TestClient(app) as client:
        connected = False
        for _ in range(100):
            connected = client.get("/health").json()["mongo"]
            if connected:
                break
            time.sleep(0.01)
        assert connected
        assert client.get("/products").status_code == 200

    assert targets == [app.state.settings.mongo_url]
