import pytest


@pytest.fixture
def assigned_hotel_headers(client, admin_headers, hotel, hotel_admin, login_as):
    response = client.post(f"/api/admin/assign/hotel/{hotel.id}", json={"adminId": hotel_admin.id}, headers=admin_headers)
    assert response.status_code == 200, response.text
    return login_as(hotel_admin.email)


@pytest.fixture
def assigned_lot_headers(client, admin_headers, lot, parking_admin, login_as):
    response = client.post(f"/api/admin/assign/parking/{lot.id}", json={"adminId": parking_admin.id}, headers=admin_headers)
    assert response.status_code == 200, response.text
    return login_as(parking_admin.email)


def test_dashboard_statistics(client, admin_headers, customer_headers, hotel_booking, parking_booking):
    client.post("/api/bookings", json=hotel_booking, headers=customer_headers)
    client.post("/api/bookings", json=parking_booking, headers=customer_headers)

    data = client.get("/api/admin/dashboard", headers=admin_headers).json()["data"]

    statistics = data["statistics"]
    assert statistics["users"] == 2
    assert statistics["hotels"] == 1
    assert statistics["parkingLots"] == 1
    assert statistics["bookings"] == 2
    assert statistics["revenue"] == 605
    assert statistics["avgBookingValue"] == 302.5
    assert len(statistics["recentActivity"]) == 2
    assert "Jane Traveler" in statistics["recentActivity"][0]["description"]
    assert len(data["recentBookings"]) == 2


def test_user_crud(client, admin_headers):
    created = client.post(
        "/api/admin/users",
        json={"name": "Front Desk", "email": "desk@dfwparking.com", "password": "secret1", "role": "support"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    user_id = created.json()["data"]["user"]["_id"]

    duplicate = client.post(
        "/api/admin/users",
        json={"name": "Copy", "email": "DESK@dfwparking.com", "password": "secret1", "role": "customer"},
        headers=admin_headers,
    )
    assert duplicate.status_code == 400

    listed = client.get("/api/admin/users", params={"role": "support"}, headers=admin_headers).json()["data"]
    assert [user["email"] for user in listed["users"]] == ["desk@dfwparking.com"]

    updated = client.put(f"/api/admin/users/{user_id}", json={"isActive": False}, headers=admin_headers)
    assert updated.json()["data"]["user"]["isActive"] is False

    assert client.delete(f"/api/admin/users/{user_id}", headers=admin_headers).status_code == 200
    assert client.get("/api/admin/users", params={"role": "support"}, headers=admin_headers).json()["data"]["users"] == []


def test_admin_cannot_change_own_role_or_delete_self(client, admin_headers, super_admin):
    own_role = client.put(f"/api/admin/users/{super_admin.id}", json={"role": "customer"}, headers=admin_headers)
    assert own_role.status_code == 400
    assert own_role.json()["message"] == "Cannot modify your own role"

    delete_self = client.delete(f"/api/admin/users/{super_admin.id}", headers=admin_headers)
    assert delete_self.status_code == 400


def test_deactivated_account_is_signed_out(client, admin_headers, customer, customer_headers):
    client.put(f"/api/admin/users/{customer.id}", json={"isActive": False}, headers=admin_headers)

    assert client.get("/api/auth/me", headers=customer_headers).status_code == 401
    relogin = client.post("/api/auth/login", json={"email": customer.email, "password": "password123"})
    assert relogin.json()["message"] == "Account is deactivated"


def test_create_hotel_with_defaults(client, admin_headers):
    response = client.post(
        "/api/admin/hotels",
        json={
            "name": "Grand Hyatt DFW",
            "address": "2337 S International Pkwy, DFW Airport, TX 75261",
            "description": "Inside Terminal D",
            "stars": 4,
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    hotel = response.json()["data"]["hotel"]
    assert hotel["rating"] == 4
    assert [room["type"] for room in hotel["rooms"]] == ["Standard", "Deluxe"]
    assert hotel["address"]["country"] == "USA"
    assert hotel["policies"]["checkIn"] == "3:00 PM"


def test_update_and_delete_hotel(client, admin_headers, hotel):
    updated = client.put(f"/api/admin/hotels/{hotel.id}", json={"stars": 5, "isActive": False}, headers=admin_headers)
    assert updated.json()["data"]["hotel"]["rating"] == 5

    assert client.get(f"/api/hotels/{hotel.id}").json()["message"] == "Hotel is not available"

    assert client.delete(f"/api/admin/hotels/{hotel.id}", headers=admin_headers).status_code == 200
    assert client.get("/api/admin/hotels", headers=admin_headers).json()["data"]["hotels"] == []


def test_hotel_with_active_booking_cannot_be_deleted(client, admin_headers, customer_headers, hotel, hotel_booking):
    client.post("/api/bookings", json=hotel_booking, headers=customer_headers)

    response = client.delete(f"/api/admin/hotels/{hotel.id}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Cannot delete hotel with active bookings"


def test_create_parking_lot_generates_spots(client, admin_headers):
    response = client.post(
        "/api/admin/parking",
        json={
            "name": "Express Lot",
            "address": {"line1": "1 Express Rd", "city": "DFW Airport", "state": "TX", "zipCode": "75261"},
            "description": "Economy parking",
            "totalSpots": 22,
            "pricing": {"hourly": 5, "daily": 18},
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    lot = response.json()["data"]["parkingLot"]
    assert lot["capacity"]["total"] == 22
    assert lot["availabilityPercentage"] == 100
    numbers = [spot["spotNumber"] for spot in lot["parkingSpots"]]
    assert numbers[0] == "A-01"
    assert "B-02" in numbers


def test_assign_requires_matching_role(client, admin_headers, hotel, customer):
    response = client.post(f"/api/admin/assign/hotel/{hotel.id}", json={"adminId": customer.id}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid hotel admin"


def test_hotel_admin_without_assignment(client, hotel_admin, login_as):
    response = client.get("/api/admin/hotel-stats", headers=login_as(hotel_admin.email))

    assert response.status_code == 403
    assert response.json()["message"] == "No hotel assigned to this admin"


def test_hotel_admin_manages_rooms(client, assigned_hotel_headers, customer_headers, hotel_booking):
    client.post("/api/bookings", json=hotel_booking, headers=customer_headers)

    stats = client.get("/api/admin/hotel-stats", headers=assigned_hotel_headers).json()["data"]["statistics"]
    assert stats["hotel"]["name"] == "DFW Airport Marriott"
    assert stats["totalRooms"] == 2
    assert stats["activeBookings"] == 1
    assert stats["revenue"] == 525

    created = client.post(
        "/api/admin/hotel/rooms",
        json={"type": "Deluxe", "name": "Deluxe Queen", "description": "Two queens", "price": 210, "capacity": 4, "available": 3},
        headers=assigned_hotel_headers,
    )
    assert created.status_code == 201
    room_id = created.json()["data"]["room"]["_id"]

    updated = client.put(f"/api/admin/hotel/rooms/{room_id}", json={"price": 199}, headers=assigned_hotel_headers)
    assert updated.json()["data"]["room"]["price"] == 199

    assert client.delete(f"/api/admin/hotel/rooms/{room_id}", headers=assigned_hotel_headers).status_code == 200
    rooms = client.get("/api/admin/hotel/rooms", headers=assigned_hotel_headers).json()["data"]["rooms"]
    assert len(rooms) == 2

    bookings = client.get("/api/admin/hotel/bookings", headers=assigned_hotel_headers).json()["data"]["bookings"]
    assert len(bookings) == 1


def test_parking_admin_manages_spots(client, assigned_lot_headers):
    created = client.post(
        "/api/admin/parking/spots",
        json={"spotNumber": "B-01", "spotType": "Covered", "section": "B"},
        headers=assigned_lot_headers,
    )
    assert created.status_code == 201
    spot_id = created.json()["data"]["spot"]["_id"]

    duplicate = client.post(
        "/api/admin/parking/spots",
        json={"spotNumber": "B-01", "spotType": "Standard", "section": "B"},
        headers=assigned_lot_headers,
    )
    assert duplicate.status_code == 400

    client.put(f"/api/admin/parking/spots/{spot_id}", json={"isAvailable": False}, headers=assigned_lot_headers)
    stats = client.get("/api/admin/parking-stats", headers=assigned_lot_headers).json()["data"]["statistics"]
    assert stats["totalSpots"] == 4
    assert stats["availableSpots"] == 3

    assert client.delete(f"/api/admin/parking/spots/{spot_id}", headers=assigned_lot_headers).status_code == 200
    spots = client.get("/api/admin/parking/spots", headers=assigned_lot_headers).json()["data"]["spots"]
    assert len(spots) == 3


def test_booking_status_changes(client, admin_headers, customer_headers, hotel, hotel_booking):
    booking = client.post("/api/bookings", json=hotel_booking, headers=customer_headers).json()["data"]["booking"]

    checked_in = client.put(
        f"/api/admin/bookings/{booking['_id']}/status",
        json={"status": "checked_in", "notes": "Arrived early"},
        headers=admin_headers,
    ).json()["data"]["booking"]
    assert checked_in["status"] == "checked_in"
    assert checked_in["notes"] == "Arrived early"

    cancelled = client.delete(f"/api/admin/bookings/{booking['_id']}", headers=admin_headers).json()["data"]["booking"]
    assert cancelled["cancellationReason"] == "Cancelled by administrator"

    rooms = client.get(f"/api/hotels/{hotel.id}/rooms").json()["data"]["rooms"]
    assert rooms[0]["available"] == 2


def test_hotel_admin_cannot_touch_other_properties(client, assigned_hotel_headers, customer_headers, parking_booking):
    booking = client.post("/api/bookings", json=parking_booking, headers=customer_headers).json()["data"]["booking"]

    response = client.put(
        f"/api/admin/bookings/{booking['_id']}/status",
        json={"status": "completed"},
        headers=assigned_hotel_headers,
    )

    assert response.status_code == 403
