import pytest


@pytest.fixture
def scenario(make_product, make_store, set_price):
    """Store A 10.00 available, B 8.50 unavailable, C 12.00 available."""
    product = make_product("Arroz 1kg", description="Grano largo")
    store_a = make_store("A", address="Calle 1", phone="111", website="https://a.example.com")
    store_b = make_store("B")
    store_c = make_store("C")
    set_price(product["id"], store_a["id"], 10.00)
    set_price(product["id"], store_b["id"], 8.50, isAvailable=False)
    set_price(product["id"], store_c["id"], 12.00)
    return product, (store_a, store_b, store_c)


def test_compare_returns_product_prices_and_stats(client, scenario):
    product, (store_a, _, _) = scenario

    response = client.get(f"/api/compare/{product['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["product"]["name"] == "Arroz 1kg"
    assert body["stats"] == {
        "totalStores": 3,
        "availableStores": 2,
        "unavailableStores": 1,
        "minPrice": 10.0,
        "maxPrice": 12.0,
        "avgPrice": 11.0,
    }
    # Default order is price ascending
    assert [p["price"] for p in body["prices"]] == [8.5, 10.0, 12.0]

    store = body["prices"][1]["store"]
    assert store == {
        "id": store_a["id"],
        "name": "A",
        "address": "Calle 1",
        "phone": "111",
        "website": "https://a.example.com",
    }


def test_stats_do_not_depend_on_paging_sorting_or_filter(client, scenario):
    product, _ = scenario
    url = f"/api/compare/{product['id']}"
    expected = client.get(url).json()["stats"]

    for params in (
        {"skip": 1, "limit": 1},
        {"sortBy": "lastUpdated", "order": "desc"},
        {"sortBy": "storeName", "skip": 2},
        {"isAvailable": "true"},
        {"isAvailable": "false", "limit": 1},
    ):
        assert client.get(url, params=params).json()["stats"] == expected


def test_pagination(client, scenario):
    product, _ = scenario

    body = client.get(f"/api/compare/{product['id']}", params={"skip": 1, "limit": 1}).json()

    assert [p["price"] for p in body["prices"]] == [10.0]


def test_availability_filter(client, scenario):
    product, _ = scenario
    url = f"/api/compare/{product['id']}"

    available = client.get(url, params={"isAvailable": "true"}).json()["prices"]
    unavailable = client.get(url, params={"isAvailable": "false"}).json()["prices"]

    assert [p["store"]["name"] for p in available] == ["A", "C"]
    assert [p["store"]["name"] for p in unavailable] == ["B"]
    assert all(p["isAvailable"] for p in available)


def test_sort_by_store_name_descending(client, scenario):
    product, _ = scenario

    prices = client.get(
        f"/api/compare/{product['id']}", params={"sortBy": "storeName", "order": "desc"}
    ).json()["prices"]

    assert [p["store"]["name"] for p in prices] == ["C", "B", "A"]


def test_sort_by_price_descending(client, scenario):
    product, _ = scenario

    prices = client.get(
        f"/api/compare/{product['id']}", params={"sortBy": "price", "order": "desc"}
    ).json()["prices"]

    assert [p["price"] for p in prices] == [12.0, 10.0, 8.5]


def test_unknown_sort_key_falls_back_to_price_ascending(client, scenario):
    product, _ = scenario

    prices = client.get(
        f"/api/compare/{product['id']}", params={"sortBy": "bogus", "order": "desc"}
    ).json()["prices"]

    assert [p["price"] for p in prices] == [8.5, 10.0, 12.0]


def test_product_without_prices(client, make_product):
    product = make_product()

    body = client.get(f"/api/compare/{product['id']}").json()

    assert body["prices"] == []
    assert body["stats"]["totalStores"] == 0
    assert body["stats"]["minPrice"] is None
    assert body["stats"]["avgPrice"] is None


def test_unknown_product_is_not_found(client):
    response = client.get("/api/compare/999")

    assert response.status_code == 404
    assert response.json() == {"error": "Producto no encontrado"}
