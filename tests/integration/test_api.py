"""Integration tests for the storefront REST API."""

from decimal import Decimal

from fastapi.testclient import TestClient

from core.application.services import CartApplicationService, CatalogApplicationService
from core.domain.exceptions import CartUpdateFailedError, ConcurrencyError, StorageFaultError
from tests.support import LISTED_PRODUCTS


def _register(client: TestClient, catalog, email: str = "ken@example.com") -> int:
    response = client.post(
        "/api/v1/users/register",
        json={
            "first_name": "Ken",
            "last_name": "Sanchez",
            "email_address": email,
            "password": "s3cret",
            "address_type_id": catalog.address_type_id,
            "address_line1": "1 Microsoft Way",
            "city": "Redmond",
            "state_province_id": catalog.state_province_id,
            "postal_code": "98052",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["business_entity_id"]


def _owner(business_entity_id: int) -> dict:
    return {"X-Business-Entity-Id": str(business_entity_id)}


def test_health(test_client: TestClient):
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


# =============================================================================
# CATALOG
# =============================================================================

def test_list_products_defaults(test_client: TestClient, catalog):
    response = test_client.get("/api/v1/products")

    assert response.status_code == 200
    products = response.json()
    assert len(products) == len(LISTED_PRODUCTS)
    photos = {p["name"]: p["large_photo"] for p in products}
    assert isinstance(photos["Mountain-100 Black"], str) and photos["Mountain-100 Black"]
    assert photos["Racing Socks"] is None


def test_list_products_with_query_filters(test_client: TestClient, catalog):
    response = test_client.get(
        "/api/v1/products",
        params={
            "category_id": catalog.categories["bikes"],
            "colors": ["Red", "Silver"],
            "sort_by": "PriceAsc",
            "page_size": 2,
        },
    )

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Mountain-200 Red", "Road-250 Silver"]


def test_filter_products_with_body(test_client: TestClient, catalog):
    response = test_client.post(
        "/api/v1/products",
        json={"search_text": "Road", "sort_by": "NameDesc"},
    )

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Road-250 Silver", "Road-150 Red"]


def test_invalid_page_size_is_rejected(test_client: TestClient, catalog):
    response = test_client.get("/api/v1/products", params={"page_size": 0})

    assert response.status_code == 422


def test_recent_products(test_client: TestClient, catalog):
    response = test_client.get("/api/v1/products/recent", params={"count": 2})

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Racing Socks", "Road-250 Silver"]


def test_get_product(test_client: TestClient, catalog):
    found = test_client.get(f"/api/v1/products/{catalog.products['mountain_black']}")
    missing = test_client.get("/api/v1/products/999999")

    assert found.status_code == 200
    assert found.json()["description"] == "Sturdy hardtail for any trail."
    assert Decimal(found.json()["list_price"]) == Decimal("200")
    assert missing.status_code == 404


def test_categories_subcategories_and_colors(test_client: TestClient, catalog):
    categories = test_client.get("/api/v1/categories").json()
    subcategories = test_client.get(
        f"/api/v1/categories/{catalog.categories['clothing']}/subcategories"
    ).json()
    colors = test_client.get(
        "/api/v1/colors", params={"category_id": catalog.categories["bikes"]}
    ).json()

    assert sorted(c["name"] for c in categories) == ["Bikes", "Clothing"]
    assert [s["name"] for s in subcategories] == ["Jerseys"]
    assert colors == ["Black", "Red", "Silver"]


# =============================================================================
# USERS
# =============================================================================

def test_register_and_login(test_client: TestClient, catalog):
    user_id = _register(test_client, catalog)

    ok = test_client.post("/api/v1/users/login", json={"email": "ken@example.com", "password": "s3cret"})
    rejected = test_client.post("/api/v1/users/login", json={"email": "ken@example.com", "password": "nope"})

    assert ok.status_code == 200
    assert ok.json()["business_entity_id"] == user_id
    assert rejected.status_code == 400
    assert rejected.json()["detail"] == "Incorrect password."


def test_reference_lookups(test_client: TestClient, catalog):
    states = test_client.get("/api/v1/users/states").json()
    address_types = test_client.get("/api/v1/users/address-types").json()

    assert [s["name"] for s in states] == ["Washington"]
    assert sorted(t["name"] for t in address_types) == ["Home", "Shipping"]


def test_update_own_account(test_client: TestClient, catalog):
    user_id = _register(test_client, catalog)

    response = test_client.patch(
        f"/api/v1/users/{user_id}", json={"password": "n3w"}, headers=_owner(user_id)
    )
    login = test_client.post("/api/v1/users/login", json={"email": "ken@example.com", "password": "n3w"})

    assert response.status_code == 204
    assert login.status_code == 200


def test_cannot_modify_another_account(test_client: TestClient, catalog):
    user_id = _register(test_client, catalog)

    response = test_client.delete(f"/api/v1/users/{user_id}", headers=_owner(user_id + 1))

    assert response.status_code == 403


def test_identity_header_is_separate_from_path_id(test_client: TestClient, catalog):
    user_id = _register(test_client, catalog)

    missing_header = test_client.patch(f"/api/v1/users/{user_id}", json={"city": "Seattle"})
    other_user = test_client.patch(
        f"/api/v1/users/{user_id}", json={"city": "Seattle"}, headers=_owner(user_id + 1)
    )

    assert missing_header.status_code == 422
    assert other_user.status_code == 403


def test_delete_account(test_client: TestClient, catalog):
    user_id = _register(test_client, catalog)

    deleted = test_client.delete(f"/api/v1/users/{user_id}", headers=_owner(user_id))
    again = test_client.delete(f"/api/v1/users/{user_id}", headers=_owner(user_id))
    login = test_client.post("/api/v1/users/login", json={"email": "ken@example.com", "password": "s3cret"})

    assert deleted.status_code == 204
    assert again.status_code == 404
    assert login.status_code == 400


def test_update_unknown_user_is_not_found(test_client: TestClient, catalog):
    response = test_client.patch("/api/v1/users/4242", json={"city": "Seattle"}, headers=_owner(4242))

    assert response.status_code == 404


# =============================================================================
# CART
# =============================================================================

def test_cart_lifecycle(test_client: TestClient, catalog):
    owner = _owner(_register(test_client, catalog))
    socks = catalog.products["socks"]
    jersey = catalog.products["jersey"]

    assert test_client.get("/api/v1/cart", headers=owner).status_code == 404

    for product_id, quantity in ((socks, 2), (socks, 1), (jersey, 2)):
        response = test_client.put(
            "/api/v1/cart", json={"product_id": product_id, "quantity": quantity}, headers=owner
        )
        assert response.status_code == 200, response.text

    cart = test_client.get("/api/v1/cart", headers=owner).json()
    assert cart["details"]["item_count"] == 5
    assert Decimal(cart["details"]["total_price"]) == Decimal("35")
    assert sorted(item["quantity"] for item in cart["items"]) == [2, 3]

    removed = test_client.request(
        "DELETE", "/api/v1/cart", json={"product_id": socks, "quantity": 10}, headers=owner
    )
    assert removed.status_code == 200

    cart = test_client.get("/api/v1/cart", headers=owner).json()
    assert [item["product_id"] for item in cart["items"]] == [jersey]


def test_removing_missing_cart_item_is_not_found(test_client: TestClient, catalog):
    owner = _owner(_register(test_client, catalog))

    response = test_client.request(
        "DELETE",
        "/api/v1/cart",
        json={"product_id": catalog.products["socks"], "quantity": 1},
        headers=owner,
    )

    assert response.status_code == 404


def test_cart_requires_identity_header(test_client: TestClient, catalog):
    response = test_client.get("/api/v1/cart")

    assert response.status_code == 422


def test_cart_quantity_must_be_positive(test_client: TestClient, catalog):
    response = test_client.put(
        "/api/v1/cart", json={"product_id": catalog.products["socks"], "quantity": 0}, headers=_owner(1)
    )

    assert response.status_code == 422


# =============================================================================
# ERROR MAPPING
# =============================================================================

def test_retryable_failure_maps_to_conflict(test_client: TestClient, catalog, monkeypatch):
    async def lost_race(self, business_entity_id, request):
        raise CartUpdateFailedError(cause=ConcurrencyError("row now exists"))

    monkeypatch.setattr(CartApplicationService, "add_item", lost_race)

    response = test_client.put(
        "/api/v1/cart", json={"product_id": catalog.products["socks"], "quantity": 1}, headers=_owner(1)
    )

    assert response.status_code == 409
    assert response.json()["retryable"] is True


def test_non_retryable_failure_maps_to_server_error(test_client: TestClient, catalog, monkeypatch):
    async def broken(self, business_entity_id, request):
        raise CartUpdateFailedError(cause=RuntimeError("disk full"))

    monkeypatch.setattr(CartApplicationService, "add_item", broken)

    response = test_client.put(
        "/api/v1/cart", json={"product_id": catalog.products["socks"], "quantity": 1}, headers=_owner(1)
    )

    assert response.status_code == 500
    assert response.json()["retryable"] is False


def test_storage_fault_maps_to_service_unavailable(test_client: TestClient, monkeypatch):
    async def unreachable(self):
        raise StorageFaultError("connection refused")

    monkeypatch.setattr(CatalogApplicationService, "list_categories", unreachable)

    response = test_client.get("/api/v1/categories")

    assert response.status_code == 503
