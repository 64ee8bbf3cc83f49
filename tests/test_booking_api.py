from flower_shop.models import Booking, Guest

from tests.conftest import booking_body, count, make_product, stock_of


def _create(client, product_id, **kwargs):
    resp = client.post("/bookings", json=booking_body(product_id, **kwargs))
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_booking_returns_expanded_booking(client, db, product):
    data = _create(client, product.id, quantity=3)

    assert data["status"] == "Booking"
    assert data["totalCost"] == 300000
    assert data["quantity"] == 3
    assert data["product"]["id"] == product.id
    assert data["product"]["stock"] == 7
    assert data["guest"]["email"] == "a@x.com"
    assert data["guest"]["deliveryType"] == "pickup"
    assert stock_of(db, product.id) == 7


def test_create_booking_for_delivery_requires_receiver(client, db, product):
    body = booking_body(product.id, deliveryType="delivery", receiverName="Budi")

    resp = client.post("/bookings", json=body)

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"
    assert "receiverPhone" in resp.json()["message"]
    assert count(db, Guest) == 0
    assert stock_of(db, product.id) == 10


def test_create_booking_for_delivery(client, product):
    data = _create(
        client,
        product.id,
        deliveryType="delivery",
        receiverName="Budi",
        receiverPhone="0899",
        receiverAddress="Jl. Melati 5",
    )

    assert data["guest"]["receiverAddress"] == "Jl. Melati 5"


def test_create_booking_missing_fields(client, db, product):
    body = booking_body(product.id)
    del body["pickupDate"]

    resp = client.post("/bookings", json=body)

    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required fields"
    assert count(db, Booking) == 0


def test_create_booking_rejects_unknown_fields(client, product):
    body = booking_body(product.id)
    body["discount"] = 50

    resp = client.post("/bookings", json=body)

    assert resp.status_code == 400


def test_create_booking_rejects_non_positive_quantity(client, db, product):
    resp = client.post("/bookings", json=booking_body(product.id, quantity=0))

    assert resp.status_code == 400
    assert stock_of(db, product.id) == 10


def test_create_booking_unknown_product(client, db):
    resp = client.post("/bookings", json=booking_body(12345))

    assert resp.status_code == 404
    assert resp.json()["error"] == "Product not found"
    assert count(db, Guest) == 0


def test_create_booking_insufficient_stock(client, db):
    product = make_product(db, stock=1)

    resp = client.post("/bookings", json=booking_body(product.id, quantity=2))

    assert resp.status_code == 400
    assert resp.json()["error"] == "Insufficient stock"
    assert stock_of(db, product.id) == 1


def test_cancel_then_done_scenario(client, db, product, admin_headers):
    booking = _create(client, product.id, quantity=3)

    resp = client.patch(f"/bookings/{booking['id']}", json={"status": "Canceled"}, headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()["status"] == "Canceled"
    assert resp.json()["product"]["stock"] == 10
    assert stock_of(db, product.id) == 10


def test_done_order_keeps_stock(client, db, product, admin_headers):
    booking = _create(client, product.id, quantity=3)

    resp = client.patch(f"/bookings/{booking['id']}", json={"status": "Done Order"}, headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()["status"] == "Done Order"
    assert stock_of(db, product.id) == 7


def test_invalid_status(client, db, product, admin_headers):
    booking = _create(client, product.id, quantity=3)

    resp = client.patch(f"/bookings/{booking['id']}", json={"status": "NotARealStatus"}, headers=admin_headers)

    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid status")
    db.expire_all()
    assert db.get(Booking, booking["id"]).status == "Booking"
    assert stock_of(db, product.id) == 7


def test_missing_status(client, product, admin_headers):
    booking = _create(client, product.id)

    for body in ({}, {"status": ""}):
        resp = client.patch(f"/bookings/{booking['id']}", json=body, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Status is required"}


def test_status_of_unknown_booking(client, admin_headers):
    resp = client.patch("/bookings/999", json={"status": "Confirmed"}, headers=admin_headers)

    assert resp.status_code == 404
    assert resp.json()["error"] == "Booking not found"


def test_status_change_requires_admin(client, db, product):
    booking = _create(client, product.id, quantity=3)

    resp = client.patch(f"/bookings/{booking['id']}", json={"status": "Canceled"})

    assert resp.status_code == 401
    assert stock_of(db, product.id) == 7


def test_method_override(client, db, product, admin_headers):
    booking = _create(client, product.id, quantity=3)

    resp = client.post(
        f"/bookings/{booking['id']}?_method=PATCH",
        json={"status": "Canceled"},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    assert stock_of(db, product.id) == 10


def test_method_override_rejects_other_methods(client, db, product, admin_headers):
    booking = _create(client, product.id, quantity=3)

    for url in (f"/bookings/{booking['id']}", f"/bookings/{booking['id']}?_method=DELETE"):
        resp = client.post(url, json={"status": "Canceled"}, headers=admin_headers)
        assert resp.status_code == 405
        assert resp.json() == {"error": "Method not allowed"}

    assert stock_of(db, product.id) == 7


def test_wrong_verb_on_booking(client, product, admin_headers):
    booking = _create(client, product.id)

    resp = client.put(f"/bookings/{booking['id']}", json={"status": "Canceled"}, headers=admin_headers)

    assert resp.status_code == 405
    assert "error" in resp.json()


def test_list_and_view_bookings(client, db, admin_headers):
    product = make_product(db, stock=20)
    first = _create(client, product.id, quantity=1)
    second = _create(client, product.id, quantity=2, email="b@x.com")

    resp = client.get("/bookings", headers=admin_headers)
    assert resp.status_code == 200
    assert [b["id"] for b in resp.json()] == [second["id"], first["id"]]

    resp = client.get(f"/bookings/{first['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["guest"]["email"] == "a@x.com"

    assert client.get("/bookings/999", headers=admin_headers).status_code == 404
    assert client.get("/bookings").status_code == 401


def test_create_booking_rejects_out_of_range_numbers(client, db, product):
    for body in (booking_body(product.id, quantity=2**70), booking_body(2**70)):
        resp = client.post("/bookings", json=body)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid request"

    assert stock_of(db, product.id) == 10
    assert count(db, Booking) == 0


def test_method_override_is_case_sensitive(client, db, product, admin_headers):
    booking = _create(client, product.id, quantity=3)

    resp = client.post(
        f"/bookings/{booking['id']}?_method=patch",
        json={"status": "Canceled"},
        headers=admin_headers,
    )

    assert resp.status_code == 405
    assert stock_of(db, product.id) == 7
