"""
Tests de los endpoints /bookings
"""
from app.enums.booking_status import BookingStatus
from app.models.booking import Booking


def _create(client, auth_headers, user, item, start="2024-01-01", end="2024-01-03", **extra):
    payload = {"itemId": item.id, "startDate": start, "endDate": end, **extra}
    return client.post("/bookings/", json=payload, headers=auth_headers(user))


def test_create_booking_returns_201_with_pricing(client, auth_headers, item, owner, renter):
    response = _create(client, auth_headers, renter, item, message="Bonjour !")

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["totalDays"] == 2
    assert data["totalPrice"] == 200
    assert data["serviceFee"] == 20
    assert data["totalAmount"] == 220
    assert data["item"]["title"] == item.title
    assert data["owner"]["id"] == owner.id
    assert data["renter"]["firstName"] == "Salma"
    assert data["messages"][0]["message"] == "Bonjour !"


def test_create_booking_requires_authentication(client, item):
    response = client.post(
        "/bookings/",
        json={"itemId": item.id, "startDate": "2024-01-01", "endDate": "2024-01-03"},
    )

    assert response.status_code == 401


def test_create_booking_with_invalid_token(client, item):
    response = client.post(
        "/bookings/",
        json={"itemId": item.id, "startDate": "2024-01-01", "endDate": "2024-01-03"},
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401


def test_create_booking_for_missing_item(client, auth_headers, renter):
    response = client.post(
        "/bookings/",
        json={"itemId": 999, "startDate": "2024-01-01", "endDate": "2024-01-03"},
        headers=auth_headers(renter),
    )

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "not_found"


def test_self_booking_is_forbidden(client, auth_headers, item, owner):
    response = _create(client, auth_headers, owner, item)

    assert response.status_code == 403
    assert response.json()["detail"]["code"] == "forbidden"


def test_inverted_dates_are_rejected(client, auth_headers, item, renter):
    response = _create(client, auth_headers, renter, item, start="2024-01-03", end="2024-01-01")

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "invalid_input"


def test_missing_dates_are_rejected(client, auth_headers, item, renter):
    response = client.post(
        "/bookings/", json={"itemId": item.id}, headers=auth_headers(renter)
    )

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "invalid_input"


def test_overlapping_request_returns_conflict(client, auth_headers, item, renter, stranger):
    assert _create(client, auth_headers, renter, item, end="2024-01-05").status_code == 201

    response = _create(client, auth_headers, stranger, item, start="2024-01-05", end="2024-01-07")

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "code": "conflict",
        "message": "The item is not available for these dates",
    }


def test_timezone_aware_dates_are_stored_as_utc(client, auth_headers, item, renter, db):
    response = _create(
        client, auth_headers, renter, item,
        start="2024-01-01T01:00:00+01:00", end="2024-01-03T01:00:00+01:00",
    )

    assert response.status_code == 201
    booking = db.query(Booking).one()
    assert booking.start_date.isoformat() == "2024-01-01T00:00:00"
    assert booking.total_days == 2


def test_owner_accepts_booking(client, auth_headers, item, owner, renter):
    booking_id = _create(client, auth_headers, renter, item).json()["id"]

    response = client.put(f"/bookings/{booking_id}/accept", headers=auth_headers(owner))

    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"


def test_accept_by_someone_else_is_forbidden(client, auth_headers, item, renter, stranger):
    booking_id = _create(client, auth_headers, renter, item).json()["id"]

    response = client.put(f"/bookings/{booking_id}/accept", headers=auth_headers(stranger))

    assert response.status_code == 403


def test_accept_twice_is_invalid_state(client, auth_headers, item, owner, renter):
    booking_id = _create(client, auth_headers, renter, item).json()["id"]
    client.put(f"/bookings/{booking_id}/accept", headers=auth_headers(owner))

    response = client.put(f"/bookings/{booking_id}/accept", headers=auth_headers(owner))

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "invalid_state"


def test_accept_missing_booking(client, auth_headers, owner):
    response = client.put("/bookings/404/accept", headers=auth_headers(owner))

    assert response.status_code == 404


def test_reject_with_reason(client, auth_headers, item, owner, renter):
    booking_id = _create(client, auth_headers, renter, item).json()["id"]

    response = client.put(
        f"/bookings/{booking_id}/reject",
        json={"reason": "Objet en réparation"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["cancellationReason"] == "Objet en réparation"


def test_cancel_without_body(client, auth_headers, item, renter, db):
    booking_id = _create(client, auth_headers, renter, item).json()["id"]

    response = client.put(f"/bookings/{booking_id}/cancel", headers=auth_headers(renter))

    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"
    assert db.get(Booking, booking_id).status == BookingStatus.CANCELLED


def test_cancel_rejected_booking_is_invalid_state(client, auth_headers, item, owner, renter):
    booking_id = _create(client, auth_headers, renter, item).json()["id"]
    client.put(f"/bookings/{booking_id}/reject", headers=auth_headers(owner))

    response = client.put(f"/bookings/{booking_id}/cancel", headers=auth_headers(renter))

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "invalid_state"


def test_my_bookings_lists_renter_and_owner_sides(client, auth_headers, item, owner, renter, stranger):
    booking_id = _create(client, auth_headers, renter, item).json()["id"]

    for user in (owner, renter):
        response = client.get("/bookings/my-bookings", headers=auth_headers(user))
        assert response.status_code == 200
        assert [b["id"] for b in response.json()] == [booking_id]

    response = client.get("/bookings/my-bookings", headers=auth_headers(stranger))
    assert response.json() == []


def test_get_booking_party_only(client, auth_headers, item, owner, renter, stranger):
    booking_id = _create(client, auth_headers, renter, item).json()["id"]

    response = client.get(f"/bookings/{booking_id}", headers=auth_headers(owner))
    assert response.status_code == 200
    assert response.json()["renter"]["email"] == "renter@example.com"

    response = client.get(f"/bookings/{booking_id}", headers=auth_headers(stranger))
    assert response.status_code == 403

    response = client.get("/bookings/9999", headers=auth_headers(owner))
    assert response.status_code == 404
