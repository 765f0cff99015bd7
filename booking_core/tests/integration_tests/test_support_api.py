import pytest


@pytest.fixture
def ticket(client, customer_headers) -> dict:
    response = client.post(
        "/api/support/tickets",
        json={
            "subject": "Shuttle never arrived",
            "message": "Waited forty minutes at Terminal D for the hotel shuttle.",
            "priority": "high",
            "category": "service",
        },
        headers=customer_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["ticket"]


def test_customer_opens_ticket(ticket, customer):
    assert ticket["status"] == "open"
    assert ticket["requester"] == customer.id
    assert ticket["customer"]["email"] == customer.email


def test_customer_cannot_list_tickets(client, customer_headers):
    assert client.get("/api/support/tickets", headers=customer_headers).status_code == 403


def test_ticket_workflow(client, support_headers, support_agent, ticket):
    assigned = client.post(f"/api/support/tickets/{ticket['_id']}/assign", headers=support_headers).json()["data"]["ticket"]
    assert assigned["status"] == "in_progress"
    assert assigned["assignedTo"] == support_agent.id

    resolved = client.put(
        f"/api/support/tickets/{ticket['_id']}",
        json={"resolution": "Refunded the shuttle fee"},
        headers=support_headers,
    ).json()["data"]["ticket"]
    assert resolved["status"] == "resolved"
    assert resolved["resolvedAt"] is not None
    assert resolved["notes"][-1]["createdBy"] == support_agent.id


def test_ticket_search_and_filters(client, support_headers, ticket):
    found = client.get("/api/support/tickets", params={"search": "shuttle"}, headers=support_headers).json()["data"]
    assert found["pagination"]["total"] == 1

    by_customer = client.get("/api/support/tickets", params={"search": "jane@"}, headers=support_headers).json()["data"]
    assert by_customer["pagination"]["total"] == 1

    low = client.get("/api/support/tickets", params={"priority": "low"}, headers=support_headers).json()["data"]
    assert low["tickets"] == []


def test_missing_ticket(client, support_headers):
    response = client.get("/api/support/tickets/missing", headers=support_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Ticket not found"


def test_dashboard_and_issues(client, support_headers, ticket, customer_headers, hotel_booking):
    client.post("/api/bookings", json=hotel_booking, headers=customer_headers)

    statistics = client.get("/api/support/dashboard", headers=support_headers).json()["data"]["statistics"]
    assert statistics["totalUsers"] == 1
    assert statistics["totalBookings"] == 1
    assert statistics["openTickets"] == 1

    issues = client.get("/api/support/issues", headers=support_headers).json()["data"]["commonIssues"]
    assert {group["category"] for group in issues} == {"Booking Issues", "Payment Issues", "Cancellation Issues"}


def test_customer_lookup(client, support_headers, customer, customer_headers, hotel_booking):
    client.post("/api/bookings", json=hotel_booking, headers=customer_headers)

    users = client.get("/api/support/users", params={"search": "jane"}, headers=support_headers).json()["data"]["users"]
    assert [user["_id"] for user in users] == [customer.id]

    detail = client.get(f"/api/support/users/{customer.id}", headers=support_headers).json()["data"]
    assert len(detail["bookings"]) == 1


def test_support_cancels_booking(client, support_headers, customer, customer_headers, hotel, hotel_booking):
    booking = client.post("/api/bookings", json=hotel_booking, headers=customer_headers).json()["data"]["booking"]

    found = client.get("/api/support/bookings", params={"search": "Jane"}, headers=support_headers).json()["data"]
    assert found["pagination"]["total"] == 1

    detail = client.get(f"/api/support/bookings/{booking['_id']}", headers=support_headers).json()["data"]
    assert detail["customer"]["email"] == customer.email

    updated = client.put(
        f"/api/support/bookings/{booking['_id']}",
        json={"status": "cancelled", "notes": "Customer called in"},
        headers=support_headers,
    ).json()["data"]["booking"]
    assert updated["status"] == "cancelled"
    assert updated["notes"] == "Customer called in"

    rooms = client.get(f"/api/hotels/{hotel.id}/rooms").json()["data"]["rooms"]
    assert rooms[0]["available"] == 2
