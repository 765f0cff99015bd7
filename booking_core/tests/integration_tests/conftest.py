import os
import tempfile

# the app reads its settings at import time
TEST_DIR = tempfile.mkdtemp(prefix="dfw-parking-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(TEST_DIR, 'test.sqlite3')}"
os.environ["LOG_DIR"] = os.path.join(TEST_DIR, "logs")
os.environ["UPLOAD_PATH"] = os.path.join(TEST_DIR, "uploads")
os.environ["RATE_LIMIT_MAX_REQUESTS"] = "100000"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app import database  # noqa: E402
from app.main import app  # noqa: E402
from app.model.model_hotel import Hotel, Room  # noqa: E402
from app.model.model_parking import ParkingLot, ParkingSpot  # noqa: E402
from app.model.model_user import Account  # noqa: E402
from app.utils.utils import hash_password, spot_number  # noqa: E402

PASSWORD = "password123"


@pytest.fixture(autouse=True)
def tables():
    database.Base.metadata.drop_all(bind=database.engine)
    database.create_tables()
    yield
    database.Base.metadata.drop_all(bind=database.engine)


@pytest.fixture
def db():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(tables) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


def create_account(db, role: str, email: str, name: str = "Test User") -> Account:
    db_account = Account(name=name, email=email, password=hash_password(PASSWORD), role=role)
    db.add(db_account)
    db.commit()
    db.refresh(db_account)
    return db_account


def login(client: TestClient, email: str) -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


@pytest.fixture
def customer(db) -> Account:
    return create_account(db, "customer", "jane@example.com", name="Jane Traveler")


@pytest.fixture
def super_admin(db) -> Account:
    return create_account(db, "super_admin", "admin@dfwparking.com", name="Super Admin")


@pytest.fixture
def hotel_admin(db) -> Account:
    return create_account(db, "hotel_admin", "hotel.admin@dfwparking.com", name="Hotel Admin")


@pytest.fixture
def parking_admin(db) -> Account:
    return create_account(db, "parking_admin", "parking.admin@dfwparking.com", name="Parking Admin")


@pytest.fixture
def support_agent(db) -> Account:
    return create_account(db, "support", "support@dfwparking.com", name="Support Agent")


@pytest.fixture
def customer_headers(client, customer) -> dict:
    return login(client, customer.email)


@pytest.fixture
def admin_headers(client, super_admin) -> dict:
    return login(client, super_admin.email)


@pytest.fixture
def support_headers(client, support_agent) -> dict:
    return login(client, support_agent.email)


@pytest.fixture
def hotel(db) -> Hotel:
    db_hotel = Hotel(
        name="DFW Airport Marriott",
        description="Full-service hotel minutes from the terminals",
        address={"line1": "8440 Freeport Pkwy", "city": "Irving", "state": "TX", "zipCode": "75063", "country": "USA"},
        distance="0.5 miles from airport",
        rating=4.5,
        amenities=["Free WiFi", "Shuttle Service"],
        rooms=[
            Room(type="Standard", name="Standard King", description="One king bed", price=150, capacity=2, available=2),
            Room(type="Suite", name="Executive Suite", description="Separate living area", price=320, capacity=4, available=1),
        ],
    )
    db.add(db_hotel)
    db.commit()
    db.refresh(db_hotel)
    return db_hotel


@pytest.fixture
def lot(db) -> ParkingLot:
    db_lot = ParkingLot(
        name="Terminal Parking",
        description="Covered parking next to Terminal D",
        address={"line1": "2400 Aviation Dr", "city": "DFW Airport", "state": "TX", "zipCode": "75261", "country": "USA"},
        distance="0.2 miles from terminal",
        pricing={"hourly": 8, "daily": 25, "weekly": 150, "monthly": 500},
        capacity={"total": 3, "available": 3},
        features=["Covered Parking", "24/7 Security"],
        spots=[
            ParkingSpot(spot_number=spot_number(1), section="A", type="Standard"),
            ParkingSpot(spot_number=spot_number(2), section="A", type="Standard"),
            ParkingSpot(spot_number=spot_number(3), section="A", type="Electric"),
        ],
    )
    db.add(db_lot)
    db.commit()
    db.refresh(db_lot)
    return db_lot


def hotel_booking_payload(hotel: Hotel, room_index: int = 0, total: float = 525) -> dict:
    room = sorted(hotel.rooms, key=lambda r: r.price)[room_index]
    return {
        "type": "hotel",
        "hotel": {
            "hotelId": hotel.id,
            "roomId": room.id,
            "checkIn": "2025-03-01",
            "checkOut": "2025-03-04",
            "guests": 2,
            "roomType": room.type,
            "amenities": ["wifi", "breakfast"],
            "roomPrice": room.price,
        },
        "payment": {"method": "credit_card", "amount": total, "currency": "USD", "status": "pending"},
        "pricing": {"subtotal": total, "taxes": 0, "fees": 0, "discount": 0, "total": total},
        "status": "confirmed",
    }


def parking_booking_payload(lot: ParkingLot, spot_type: str = "Standard", total: float = 80) -> dict:
    return {
        "type": "parking",
        "parking": {
            "parkingLotId": lot.id,
            "checkIn": "2025-03-01T08:00:00",
            "checkOut": "2025-03-01T18:00:00",
            "vehicleInfo": {"make": "Toyota", "model": "Camry", "licensePlate": "ABC-1234"},
            "spotType": spot_type,
            "spotPrice": 8,
        },
        "payment": {"method": "credit_card", "amount": total, "currency": "USD", "status": "pending"},
        "pricing": {"subtotal": total, "taxes": 0, "fees": 0, "discount": 0, "total": total},
        "status": "confirmed",
    }


@pytest.fixture
def hotel_booking(hotel) -> dict:
    return hotel_booking_payload(hotel)


@pytest.fixture
def parking_booking(lot) -> dict:
    return parking_booking_payload(lot)


@pytest.fixture
def login_as(client):
    return lambda email: login(client, email)


@pytest.fixture
def make_account(db):
    return lambda role, email, name="Test User": create_account(db, role, email, name=name)
