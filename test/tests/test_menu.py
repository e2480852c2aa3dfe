import pytest


@pytest.fixture
def menu(make_menu_item):
    return {
        "pizza": make_menu_item("Pizza", 12.5, "Main course", description="Wood-fired"),
        "salad": make_menu_item("Green Salad", 8.99, "Salads", description="Crisp greens"),
        "cake": make_menu_item("Chocolate Cake", 6.0, "Desserts", available=False),
    }


def test_list_is_public_and_sorted(client, menu):
    r = client.get("/api/menu/list")
    assert r.status_code == 200
    names = [m["name"] for m in r.get_json()]
    assert names == ["Chocolate Cake", "Pizza", "Green Salad"]  # Desserts, Main course, Salads


def test_list_filters(client, menu):
    r = client.get("/api/menu/list?category=Salads")
    assert [m["name"] for m in r.get_json()] == ["Green Salad"]

    r = client.get("/api/menu/list?available=false")
    assert [m["name"] for m in r.get_json()] == ["Chocolate Cake"]

    r = client.get("/api/menu/list?search=WOOD")
    assert [m["name"] for m in r.get_json()] == ["Pizza"]

    r = client.get("/api/menu/list?search=nothing-matches")
    assert r.get_json() == []

    r = client.get("/api/menu/list?limit=1&skip=1")
    assert [m["name"] for m in r.get_json()] == ["Pizza"]


def test_add_requires_admin(client, customer):
    headers, _ = customer
    r = client.post("/api/menu/add", json={"name": "Soup", "price": 5, "category": "Soups"}, headers=headers)
    assert r.status_code == 403
    assert r.get_json()["message"] == "Access denied: Unauthorized role"

    r = client.post("/api/menu/add", json={"name": "Soup", "price": 5, "category": "Soups"})
    assert r.status_code == 401


def test_add_menu_item(client, admin_headers):
    r = client.post("/api/menu/add", json={"name": "  Soup  ", "price": 5.5, "category": "Soups"},
                    headers=admin_headers)
    assert r.status_code == 201
    item = r.get_json()
    assert item["name"] == "Soup"
    assert item["available"] is True


def test_add_validation_and_duplicates(client, admin_headers, menu):
    r = client.post("/api/menu/add", json={"name": "Soup"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.get_json()["message"] == "name, price and category are required"

    r = client.post("/api/menu/add", json={"name": "Soup", "price": -1, "category": "Soups"},
                    headers=admin_headers)
    assert r.status_code == 400

    r = client.post("/api/menu/add", json={"name": "Soup", "price": 4, "category": "Lunch"},
                    headers=admin_headers)
    assert r.status_code == 400
    assert r.get_json()["errors"][0]["field"] == "category"

    r = client.post("/api/menu/add", json={"name": "Pizza ", "price": 9, "category": "Main course"},
                    headers=admin_headers)
    assert r.status_code == 409
    assert r.get_json()["message"] == "Menu item with this name already exists"


def test_edit_menu_item(client, admin_headers, menu):
    r = client.put(f"/api/menu/edit/{menu['pizza']}", json={"price": 14.0, "available": False},
                   headers=admin_headers)
    assert r.status_code == 200
    assert r.get_json()["price"] == 14.0
    assert r.get_json()["available"] is False

    r = client.put(f"/api/menu/edit/{menu['pizza']}", json={"price": "cheap"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.get_json()["message"] == "Invalid price"

    r = client.put(f"/api/menu/edit/{menu['pizza']}", json={"name": "Green Salad"}, headers=admin_headers)
    assert r.status_code == 409

    r = client.put("/api/menu/edit/9999", json={"price": 1.0}, headers=admin_headers)
    assert r.status_code == 404
    assert r.get_json()["message"] == "Menu item not found"


def test_delete_menu_item(client, admin_headers, menu):
    r = client.delete(f"/api/menu/delete/{menu['cake']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.get_json() == {"message": "Deleted", "id": menu["cake"]}

    r = client.delete(f"/api/menu/delete/{menu['cake']}", headers=admin_headers)
    assert r.status_code == 404


def test_delete_menu_item_in_use(client, admin_headers, customer, menu):
    headers, _ = customer
    client.post("/api/orders/create", json={"items": [{"menuItem": menu["salad"], "quantity": 1}]},
                headers=headers)
    r = client.delete(f"/api/menu/delete/{menu['salad']}", headers=admin_headers)
    assert r.status_code == 409


@pytest.mark.parametrize("query", ["limit=-1", "skip=-5", "limit=abc"])
def test_list_rejects_bad_paging(client, query):
    r = client.get(f"/api/menu/list?{query}")
    assert r.status_code == 400


def test_list_zero_limit_means_default(client, make_menu_item):
    make_menu_item("Pizza", 10.0)
    make_menu_item("Pasta", 12.0)
    r = client.get("/api/menu/list?limit=0")
    assert len(r.get_json()) == 2
