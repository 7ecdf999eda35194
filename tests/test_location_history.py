import pytest


@pytest.fixture
def setup(client, user_headers, make_category, make_location, make_item):
    origin = make_location(name="Head Office", branch_code="HO01")
    destination = make_location(name="Warehouse", branch_code="WH01")
    item = make_item(make_category()["id"], origin["id"])
    return item, origin, destination


def _item_location(client, headers, item_id):
    return client.get(f"/inventory/{item_id}", headers=headers).json()["location_id"]


def test_completed_transfer_moves_item(client, user_headers, setup, make_transfer):
    item, origin, destination = setup

    transfer = make_transfer(item["id"], destination["id"], from_location_id=origin["id"], status="completed")

    assert transfer["status"] == "completed"
    assert _item_location(client, user_headers, item["id"]) == destination["id"]


def test_pending_transfer_leaves_item(client, user_headers, setup, make_transfer):
    item, origin, destination = setup

    make_transfer(item["id"], destination["id"], from_location_id=origin["id"], status="pending")

    assert _item_location(client, user_headers, item["id"]) == origin["id"]


def test_completing_transfer_on_update_moves_item(client, user_headers, setup, make_transfer):
    item, origin, destination = setup
    transfer = make_transfer(item["id"], destination["id"], from_location_id=origin["id"], status="in_transit")

    response = client.put(
        f"/location-history/{transfer['id']}",
        json={"status": "completed"},
        headers=user_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert _item_location(client, user_headers, item["id"]) == destination["id"]


def test_notes_only_update_keeps_item_location(client, user_headers, setup, make_transfer):
    item, origin, destination = setup
    transfer = make_transfer(item["id"], destination["id"], status="pending")

    response = client.put(
        f"/location-history/{transfer['id']}",
        json={"notes": "Waiting for courier"},
        headers=user_headers,
    )

    assert response.json()["notes"] == "Waiting for courier"
    assert response.json()["status"] == "pending"
    assert _item_location(client, user_headers, item["id"]) == origin["id"]


def test_cancelled_transfer_leaves_item(client, user_headers, setup, make_transfer):
    item, origin, destination = setup
    transfer = make_transfer(item["id"], destination["id"], status="pending")

    client.put(f"/location-history/{transfer['id']}", json={"status": "cancelled"}, headers=user_headers)

    assert _item_location(client, user_headers, item["id"]) == origin["id"]


def test_transfer_without_origin_is_allowed(setup, make_transfer):
    item, _, destination = setup

    transfer = make_transfer(item["id"], destination["id"], from_location_id=None)

    assert transfer["from_location_id"] is None


def test_transfer_for_unknown_item_fails(client, user_headers, setup):
    _, origin, destination = setup

    response = client.post(
        "/location-history",
        json={
            "item_id": 999,
            "from_location_id": origin["id"],
            "to_location_id": destination["id"],
            "transfer_date": "2024-03-01T09:00:00",
            "transferred_by": "IT Support",
            "status": "pending",
        },
        headers=user_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Item with ID 999 does not exist"


def test_transfer_to_unknown_location_fails(client, user_headers, setup):
    item, origin, _ = setup

    response = client.post(
        "/location-history",
        json={
            "item_id": item["id"],
            "from_location_id": origin["id"],
            "to_location_id": 999,
            "transfer_date": "2024-03-01T09:00:00",
            "transferred_by": "IT Support",
            "status": "completed",
        },
        headers=user_headers,
    )

    assert response.status_code == 400
    assert _item_location(client, user_headers, item["id"]) == origin["id"]


def test_transfer_requires_transferred_by(client, user_headers, setup):
    item, _, destination = setup

    response = client.post(
        "/location-history",
        json={
            "item_id": item["id"],
            "to_location_id": destination["id"],
            "transfer_date": "2024-03-01T09:00:00",
            "transferred_by": "",
            "status": "pending",
        },
        headers=user_headers,
    )

    assert response.status_code == 422


def test_list_is_newest_first(client, user_headers, setup, make_transfer):
    item, _, destination = setup
    first = make_transfer(item["id"], destination["id"])
    second = make_transfer(item["id"], destination["id"])

    body = client.get("/location-history", headers=user_headers).json()

    assert [t["id"] for t in body] == [second["id"], first["id"]]


def test_by_item_orders_by_transfer_date(client, user_headers, setup, make_transfer):
    item, _, destination = setup
    early = make_transfer(item["id"], destination["id"], transfer_date="2024-01-01T09:00:00")
    late = make_transfer(item["id"], destination["id"], transfer_date="2024-06-01T09:00:00")

    body = client.get(f"/location-history/by-item/{item['id']}", headers=user_headers).json()

    assert [t["id"] for t in body] == [late["id"], early["id"]]


def test_update_missing_transfer_fails(client, user_headers):
    response = client.put("/location-history/999", json={"status": "completed"}, headers=user_headers)

    assert response.status_code == 404


def test_get_and_delete_transfer(client, user_headers, setup, make_transfer):
    item, _, destination = setup
    transfer = make_transfer(item["id"], destination["id"])

    assert client.get(f"/location-history/{transfer['id']}", headers=user_headers).json()["id"] == transfer["id"]
    assert client.delete(f"/location-history/{transfer['id']}", headers=user_headers).json() == {"success": True}
    assert client.get(f"/location-history/{transfer['id']}", headers=user_headers).json() is None
    assert client.delete(f"/location-history/{transfer['id']}", headers=user_headers).json() == {"success": False}
