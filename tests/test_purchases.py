import pytest


@pytest.fixture
def stock(make_category, make_location, make_supplier, make_item):
    item = make_item(make_category()["id"], make_location()["id"])
    supplier = make_supplier()
    return item, supplier


def test_create_purchase_computes_total(client, user_headers, stock):
    item, supplier = stock

    response = client.post(
        "/purchases",
        json={
            "item_id": item["id"],
            "supplier_id": supplier["id"],
            "quantity": 5,
            "unit_price": 25.50,
            "purchase_date": "2024-02-01T00:00:00",
            "notes": "Initial order",
        },
        headers=user_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["total_price"] == 127.5
    assert body["unit_price"] == 25.5
    assert body["notes"] == "Initial order"


def test_create_purchase_rejects_non_positive_values(client, user_headers, stock):
    item, supplier = stock
    payload = {
        "item_id": item["id"],
        "supplier_id": supplier["id"],
        "quantity": 0,
        "unit_price": 10,
        "purchase_date": "2024-02-01T00:00:00",
    }

    assert client.post("/purchases", json=payload, headers=user_headers).status_code == 422

    payload.update(quantity=1, unit_price=0)
    assert client.post("/purchases", json=payload, headers=user_headers).status_code == 422


def test_create_purchase_with_unknown_references_fails(client, user_headers, stock):
    item, supplier = stock
    payload = {
        "item_id": 999,
        "supplier_id": supplier["id"],
        "quantity": 1,
        "unit_price": 10,
        "purchase_date": "2024-02-01T00:00:00",
    }

    response = client.post("/purchases", json=payload, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Inventory item with ID 999 does not exist"

    payload.update(item_id=item["id"], supplier_id=999)
    response = client.post("/purchases", json=payload, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Supplier with ID 999 does not exist"


def test_update_quantity_recomputes_total(client, user_headers, stock, make_purchase):
    item, supplier = stock
    purchase = make_purchase(item["id"], supplier["id"], quantity=2, unit_price=100.0)

    response = client.put(f"/purchases/{purchase['id']}", json={"quantity": 3}, headers=user_headers)

    assert response.status_code == 200
    assert response.json()["unit_price"] == 100.0
    assert response.json()["total_price"] == 300.0


def test_update_unit_price_recomputes_total(client, user_headers, stock, make_purchase):
    item, supplier = stock
    purchase = make_purchase(item["id"], supplier["id"], quantity=4, unit_price=10.0)

    response = client.put(f"/purchases/{purchase['id']}", json={"unit_price": 12.25}, headers=user_headers)

    assert response.json()["quantity"] == 4
    assert response.json()["total_price"] == 49.0


def test_update_notes_keeps_total(client, user_headers, stock, make_purchase):
    item, supplier = stock
    purchase = make_purchase(item["id"], supplier["id"], quantity=2, unit_price=7.5)

    response = client.put(f"/purchases/{purchase['id']}", json={"notes": "Paid"}, headers=user_headers)

    assert response.json()["notes"] == "Paid"
    assert response.json()["total_price"] == 15.0


def test_update_purchase_validates_references(client, user_headers, stock, make_purchase):
    item, supplier = stock
    purchase = make_purchase(item["id"], supplier["id"])

    response = client.put(f"/purchases/{purchase['id']}", json={"supplier_id": 999}, headers=user_headers)

    assert response.status_code == 400


def test_update_missing_purchase_fails(client, user_headers):
    response = client.put("/purchases/999", json={"quantity": 1}, headers=user_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Purchase with ID 999 does not exist"


def test_purchases_by_item_and_supplier(
    client, user_headers, make_category, make_location, make_supplier, make_item, make_purchase
):
    category = make_category()
    location = make_location()
    laptop = make_item(category["id"], location["id"], item_code="LT-001")
    monitor = make_item(category["id"], location["id"], item_code="MN-001")
    acme = make_supplier(name="Acme")
    globex = make_supplier(name="Globex")

    make_purchase(laptop["id"], acme["id"])
    make_purchase(monitor["id"], acme["id"])
    make_purchase(laptop["id"], globex["id"])

    by_item = client.get(f"/purchases/by-item/{laptop['id']}", headers=user_headers).json()
    by_supplier = client.get(f"/purchases/by-supplier/{acme['id']}", headers=user_headers).json()

    assert [p["supplier_id"] for p in by_item] == [acme["id"], globex["id"]]
    assert [p["item_id"] for p in by_supplier] == [laptop["id"], monitor["id"]]
    assert client.get("/purchases/by-item/999", headers=user_headers).json() == []


def test_get_and_delete_purchase(client, user_headers, stock, make_purchase):
    item, supplier = stock
    purchase = make_purchase(item["id"], supplier["id"])

    assert client.get(f"/purchases/{purchase['id']}", headers=user_headers).json()["id"] == purchase["id"]
    assert client.delete(f"/purchases/{purchase['id']}", headers=user_headers).json() == {"success": True}
    assert client.get(f"/purchases/{purchase['id']}", headers=user_headers).json() is None
    assert client.delete(f"/purchases/{purchase['id']}", headers=user_headers).json() == {"success": False}
