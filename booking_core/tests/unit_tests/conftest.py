from datetime import datetime

import pytest


@pytest.fixture
def hotel() -> dict:
    return {
        "id": "hotel-1",
        "name": "DFW Airport Marriott",
        "rating": 4.5,
        "rooms": [
            {"id": "room-1", "type": "Standard", "price": 150, "capacity": 2, "available": 3},
            {"id": "room-2", "type": "Deluxe", "price": 220, "capacity": 4, "available": 1},
        ],
    }


@pytest.fixture
def room(hotel) -> dict:
    return hotel["rooms"][0]


@pytest.fixture
def lot() -> dict:
    return {
        "id": "lot-1",
        "name": "Terminal Parking",
        "pricing": {"hourly": 8, "daily": 25, "weekly": 150, "monthly": 500},
        "capacity": {"total": 40, "available": 40},
    }


@pytest.fixture
def check_in() -> datetime:
    return datetime(2025, 3, 1, 15, 0)


@pytest.fixture
def check_out() -> datetime:
    return datetime(2025, 3, 4, 11, 0)
