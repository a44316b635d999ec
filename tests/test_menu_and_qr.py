from decimal import Decimal


def test_create_category_and_item(client, owner_headers):
    category = client.post("/api/v1/menu/categories", headers=owner_headers,
                           json={"name": "Beverages", "name_tamil": "பானங்கள்", "display_order": 2})
    assert category.status_code == 201, category.text

    item = client.post("/api/v1/menu/items", headers=owner_headers, json={
        "name": "Masala Chai", "name_tamil": "மசாலா டீ", "emoji": "🍵",
        "price": "25.00", "category_id": category.json()["id"], "current_stock": 3,
    })
    assert item.status_code == 201, item.text
    body = item.json()
    assert Decimal(body["price"]) == Decimal("25.00")
    assert body["min_stock_level"] == 5
    assert body["stock_status"] == "low_stock"


def test_item_with_unknown_category_is_404(client, owner_headers):
    response = client.post("/api/v1/menu/items", headers=owner_headers,
                           json={"name": "Idli", "price": "40.00", "category_id": 99})
    assert response.status_code == 404
    assert response.json()["message"] == "Category 99 not found"


def test_stock_status_and_filter_by_category(client, owner_headers, menu):
    items = client.get("/api/v1/menu/items", headers=owner_headers,
                       params={"category_id": menu["category"].id}).json()

    assert {i["name"]: i["stock_status"] for i in items} == {
        "Masala Dosa": "in_stock",
        "Filter Coffee": "in_stock",
        "Medu Vada": "out_of_stock",
    }


def test_set_stock_then_deactivate(client, owner_headers, menu):
    vada = menu["vada"]

    restocked = client.patch(f"/api/v1/menu/items/{vada.id}/stock", headers=owner_headers,
                             json={"current_stock": 12})
    assert restocked.json()["stock_status"] == "in_stock"

    removed = client.delete(f"/api/v1/menu/items/{vada.id}", headers=owner_headers)
    assert removed.json()["is_active"] is False

    names = [i["name"] for i in client.get("/api/v1/menu/items", headers=owner_headers).json()]
    assert "Medu Vada" not in names


def test_negative_stock_is_422(client, owner_headers, menu):
    response = client.patch(f"/api/v1/menu/items/{menu['dosa'].id}/stock", headers=owner_headers,
                            json={"current_stock": -1})
    assert response.status_code == 422


def test_qr_table_default_payload(client, owner_headers):
    response = client.post("/api/v1/qr-tables", headers=owner_headers, json={"table_number": 3})

    assert response.status_code == 201, response.text
    assert response.json()["qr_code"] == "http://localhost:8501/menu?table=3"

    custom = client.post("/api/v1/qr-tables", headers=owner_headers,
                         json={"table_number": 4, "qr_code": "https://spicehouse.in/t/4"})
    assert custom.json()["qr_code"] == "https://spicehouse.in/t/4"

    tables = client.get("/api/v1/qr-tables", headers=owner_headers).json()
    assert [t["table_number"] for t in tables] == [3, 4]


def test_duplicate_table_number_is_400(client, owner_headers):
    client.post("/api/v1/qr-tables", headers=owner_headers, json={"table_number": 1})
    response = client.post("/api/v1/qr-tables", headers=owner_headers, json={"table_number": 1})
    assert response.status_code == 400
    assert response.json()["message"] == "Table 1 already exists"


def test_table_menu_is_public(client, owner_headers, menu):
    client.post("/api/v1/qr-tables", headers=owner_headers, json={"table_number": 7})
    client.post("/api/v1/menu/items", headers=owner_headers, json={"name": "Sweet Pongal", "price": "60.00"})

    response = client.get("/api/v1/qr-tables/7/menu")

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["table_number"] == 7
    assert [c["name"] for c in body["categories"]] == ["South Indian"]
    assert [i["name"] for i in body["categories"][0]["items"]] == ["Masala Dosa", "Filter Coffee", "Medu Vada"]
    assert [i["name"] for i in body["uncategorized"]] == ["Sweet Pongal"]


def test_unknown_table_menu_is_404(client):
    response = client.get("/api/v1/qr-tables/12/menu")
    assert response.status_code == 404
    assert response.json() == {"message": "Table 12 not found", "code": "NOT_FOUND"}
