import logging
from typing import List, Optional

import pydash
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import Field
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.database import db_comment_endpoint, get_db
from app.endpoint.bookings import cancel_booking, get_booking, release_inventory
from app.endpoint.login import authorize, session_backend
from app.model.model_booking import Booking
from app.model.model_hotel import Hotel, Room
from app.model.model_parking import ParkingLot, ParkingSpot
from app.model.model_user import Account
from app.models import CamelModel, dump, dump_all, envelope, pagination
from app.schema import schema_booking, schema_hotel, schema_parking, schema_user
from app.utils import utils
from booking_core.base import (
    ACTIVE_BOOKING_STATUSES,
    BILLABLE_BOOKING_STATUSES,
    BookingStatus,
    BookingType,
    Role,
)

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter(prefix="/admin", tags=["Admin"])

super_admin = authorize(Role.SUPER_ADMIN)
hotel_admin = authorize(Role.HOTEL_ADMIN)
parking_admin = authorize(Role.PARKING_ADMIN)
booking_admin = authorize(Role.SUPER_ADMIN, Role.HOTEL_ADMIN, Role.PARKING_ADMIN)

DFW_LOCATION = {"type": "Point", "coordinates": [-96.797, 32.8968]}

DEFAULT_ROOMS = [
    {
        "type": "Standard",
        "name": "Standard Room",
        "description": "Comfortable standard room with essential amenities",
        "price": 150,
        "capacity": 2,
        "available": 10,
        "amenities": ["King Bed", "Free WiFi", "TV", "Air Conditioning"],
        "images": ["https://via.placeholder.com/400x300?text=Standard+Room"],
    },
    {
        "type": "Deluxe",
        "name": "Deluxe Room",
        "description": "Spacious deluxe room with premium amenities",
        "price": 250,
        "capacity": 2,
        "available": 5,
        "amenities": ["King Bed", "Free WiFi", "TV", "Mini Bar", "Balcony"],
        "images": ["https://via.placeholder.com/400x300?text=Deluxe+Room"],
    },
]

ACTIVE_STATUS_VALUES = [status.value for status in ACTIVE_BOOKING_STATUSES]
BILLABLE_STATUS_VALUES = [status.value for status in BILLABLE_BOOKING_STATUSES]


class AssignRequest(CamelModel):
    admin_id: str = Field(..., min_length=1)


def revenue_of(bookings: List[Booking]) -> float:
    return pydash.sum_by([booking for booking in bookings if booking.status in BILLABLE_STATUS_VALUES], "total") or 0


def recent_bookings(bookings: List[Booking], count: int) -> List[Booking]:
    return sorted(bookings, key=lambda booking: booking.created_at, reverse=True)[:count]


def bookings_of_type(db: Session, *types: BookingType) -> List[Booking]:
    return db.query(Booking).filter(db_comment_endpoint).filter(Booking.type.in_([t.value for t in types])).all()


def hotel_bookings(db: Session, hotel_id: str) -> List[Booking]:
    return [booking for booking in bookings_of_type(db, BookingType.HOTEL, BookingType.BOTH) if booking.hotel_id == hotel_id]


def lot_bookings(db: Session, lot_id: str) -> List[Booking]:
    return [booking for booking in bookings_of_type(db, BookingType.PARKING, BookingType.BOTH) if booking.parking_lot_id == lot_id]


def get_assigned_hotel(db: Session, account: Account) -> Hotel:
    db_hotel = db.query(Hotel).filter(db_comment_endpoint).filter(Hotel.admin_id == account.id).first()
    if db_hotel is None:
        raise HTTPException(status_code=403, detail="No hotel assigned to this admin")
    return db_hotel


def get_assigned_lot(db: Session, account: Account) -> ParkingLot:
    db_lot = db.query(ParkingLot).filter(db_comment_endpoint).filter(ParkingLot.admin_id == account.id).first()
    if db_lot is None:
        raise HTTPException(status_code=403, detail="No parking lot assigned to this admin")
    return db_lot


def get_account(db: Session, account_id: str) -> Account:
    db_account = db.query(Account).filter(db_comment_endpoint).filter(Account.id == account_id).first()
    if db_account is None:
        raise HTTPException(status_code=404, detail="User not found")
    return db_account


def get_hotel(db: Session, hotel_id: str) -> Hotel:
    db_hotel = db.query(Hotel).filter(db_comment_endpoint).filter(Hotel.id == hotel_id).first()
    if db_hotel is None:
        raise HTTPException(status_code=404, detail="Hotel not found")
    return db_hotel


def get_lot(db: Session, lot_id: str) -> ParkingLot:
    db_lot = db.query(ParkingLot).filter(db_comment_endpoint).filter(ParkingLot.id == lot_id).first()
    if db_lot is None:
        raise HTTPException(status_code=404, detail="Parking lot not found")
    return db_lot


def has_active_bookings(bookings: List[Booking]) -> bool:
    return any(booking.status in ACTIVE_STATUS_VALUES for booking in bookings)


def address_of(address) -> dict:
    if isinstance(address, str):
        return utils.parse_address(address)
    return address.model_dump(by_alias=True, mode="json")


# ---------------------------------------------------------------- assignment

@router.post("/assign/hotel/{hotel_id}")
def assign_hotel(
    hotel_id: str,
    assign: AssignRequest,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    db_admin = db.query(Account).filter(db_comment_endpoint).filter(Account.id == assign.admin_id).first()
    if db_admin is None or db_admin.role != Role.HOTEL_ADMIN.value:
        raise HTTPException(status_code=400, detail="Invalid hotel admin")

    db_hotel = get_hotel(db, hotel_id)
    # one hotel per admin; a previous assignment is released
    for other in db.query(Hotel).filter(Hotel.admin_id == db_admin.id, Hotel.id != hotel_id).all():
        other.admin_id = None
    db_hotel.admin_id = db_admin.id

    db.flush()
    db.refresh(db_hotel)
    logger.info(f"Hotel {db_hotel.id} assigned to {db_admin.email}")
    return envelope({"hotel": dump(schema_hotel.Hotel, db_hotel)}, message="Hotel assigned successfully")


@router.post("/assign/parking/{lot_id}")
def assign_parking_lot(
    lot_id: str,
    assign: AssignRequest,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    db_admin = db.query(Account).filter(db_comment_endpoint).filter(Account.id == assign.admin_id).first()
    if db_admin is None or db_admin.role != Role.PARKING_ADMIN.value:
        raise HTTPException(status_code=400, detail="Invalid parking admin")

    db_lot = get_lot(db, lot_id)
    for other in db.query(ParkingLot).filter(ParkingLot.admin_id == db_admin.id, ParkingLot.id != lot_id).all():
        other.admin_id = None
    db_lot.admin_id = db_admin.id

    db.flush()
    db.refresh(db_lot)
    logger.info(f"Parking lot {db_lot.id} assigned to {db_admin.email}")
    return envelope({"parkingLot": dump(schema_parking.ParkingLot, db_lot)}, message="Parking lot assigned successfully")


# ---------------------------------------------------------------- dashboards

@router.get("/dashboard")
def read_dashboard(account: Account = Depends(super_admin), db: Session = Depends(get_db)):
    bookings = db.query(Booking).filter(db_comment_endpoint).all()
    recent = recent_bookings(bookings, 10)
    revenue = revenue_of(bookings)
    billable_count = len([booking for booking in bookings if booking.status in BILLABLE_STATUS_VALUES])

    names = {
        db_account.id: db_account.name
        for db_account in db.query(Account).filter(Account.id.in_([booking.user_id for booking in recent])).all()
    }
    recent_activity = [
        {
            "description": f"New {booking.type} booking by {names.get(booking.user_id, 'User')}",
            "timestamp": booking.created_at.isoformat() if booking.created_at else None,
            "type": "booking",
        }
        for booking in recent
    ]

    return envelope({
        "statistics": {
            "users": db.query(Account).count(),
            "hotels": db.query(Hotel).count(),
            "parkingLots": db.query(ParkingLot).count(),
            "bookings": len(bookings),
            "revenue": revenue,
            "avgBookingValue": revenue / billable_count if billable_count else 0,
            "recentActivity": recent_activity,
        },
        "recentBookings": dump_all(schema_booking.Booking, recent),
    })


@router.get("/hotel-stats")
def read_hotel_stats(account: Account = Depends(hotel_admin), db: Session = Depends(get_db)):
    db_hotel = get_assigned_hotel(db, account)
    bookings = hotel_bookings(db, db_hotel.id)

    return envelope({
        "statistics": {
            "hotel": {"_id": db_hotel.id, "name": db_hotel.name},
            "totalRooms": len(db_hotel.rooms),
            "availableRooms": sum(room.available for room in db_hotel.rooms if room.is_active),
            "activeBookings": len([booking for booking in bookings if booking.status in ACTIVE_STATUS_VALUES]),
            "revenue": revenue_of(bookings),
            "recentBookings": dump_all(schema_booking.Booking, recent_bookings(bookings, 5)),
        },
    })


@router.get("/parking-stats")
def read_parking_stats(account: Account = Depends(parking_admin), db: Session = Depends(get_db)):
    db_lot = get_assigned_lot(db, account)
    bookings = lot_bookings(db, db_lot.id)

    return envelope({
        "statistics": {
            "parkingLot": {"_id": db_lot.id, "name": db_lot.name},
            "totalSpots": len(db_lot.spots),
            "availableSpots": len(db_lot.available_spots()),
            "activeBookings": len([booking for booking in bookings if booking.status in ACTIVE_STATUS_VALUES]),
            "revenue": revenue_of(bookings),
            "recentBookings": dump_all(schema_booking.Booking, recent_bookings(bookings, 5)),
        },
    })


# ---------------------------------------------------------------- users

@router.get("/users")
def read_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    role: Optional[Role] = None,
    search: Optional[str] = None,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    query = db.query(Account).filter(db_comment_endpoint)
    if role:
        query = query.filter(Account.role == role.value)
    if search:
        query = query.filter(or_(Account.name.ilike(f"%{search}%"), Account.email.ilike(f"%{search}%")))

    total = query.count()
    users = query.order_by(Account.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return envelope({
        "users": dump_all(schema_user.Account, users),
        "pagination": pagination(page, limit, total),
    })


@router.post("/users", status_code=201)
def create_user(
    account_create: schema_user.AccountCreate,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    email = account_create.email.lower()
    if db.query(Account).filter(db_comment_endpoint).filter(Account.email == email).first() is not None:
        raise HTTPException(status_code=400, detail="User with this email already exists")

    db_account = Account(
        name=account_create.name.strip(),
        email=email,
        password=utils.hash_password(account_create.password.get_secret_value()),
        role=account_create.role.value,
        phone=account_create.phone,
        address=account_create.address.model_dump(by_alias=True, exclude_none=True) if account_create.address else None,
    )
    db.add(db_account)
    db.flush()
    db.refresh(db_account)
    return envelope({"user": dump(schema_user.Account, db_account)}, message="User created successfully")


@router.put("/users/{account_id}")
def update_user(
    account_id: str,
    account_update: schema_user.AccountUpdate,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    db_account = get_account(db, account_id)
    update_data = account_update.model_dump(exclude_unset=True, by_alias=False, mode="json")

    if db_account.id == account.id and ("role" in update_data or update_data.get("is_active") is False):
        raise HTTPException(status_code=400, detail="Cannot modify your own role")

    if update_data.get("email"):
        update_data["email"] = update_data["email"].lower()
        if update_data["email"] != db_account.email:
            exists = db.query(Account).filter(db_comment_endpoint).filter(Account.email == update_data["email"]).first()
            if exists is not None:
                raise HTTPException(status_code=400, detail="User with this email already exists")

    if "address" in update_data and account_update.address is not None:
        update_data["address"] = account_update.address.model_dump(by_alias=True, exclude_none=True)

    for key, value in update_data.items():
        setattr(db_account, key, value)

    # a deactivated account loses its open sessions
    if update_data.get("is_active") is False:
        session_backend.delete_for_account(db, db_account.id)

    db.flush()
    db.refresh(db_account)
    return envelope({"user": dump(schema_user.Account, db_account)}, message="User updated successfully")


@router.delete("/users/{account_id}")
def delete_user(account_id: str, account: Account = Depends(super_admin), db: Session = Depends(get_db)):
    db_account = get_account(db, account_id)
    if db_account.id == account.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")

    bookings = db.query(Booking).filter(db_comment_endpoint).filter(Booking.user_id == db_account.id).all()
    if has_active_bookings(bookings):
        raise HTTPException(status_code=400, detail="Cannot delete user with active bookings")

    session_backend.delete_for_account(db, db_account.id)
    db.delete(db_account)
    db.flush()
    logger.info(f"Deleted account {db_account.email}")
    return envelope(message="User deleted successfully")


# ---------------------------------------------------------------- hotels

@router.get("/hotels")
def read_all_hotels(account: Account = Depends(super_admin), db: Session = Depends(get_db)):
    hotels = db.query(Hotel).filter(db_comment_endpoint).order_by(Hotel.name).all()
    return envelope({"hotels": dump_all(schema_hotel.Hotel, hotels)})


@router.post("/hotels", status_code=201)
def create_hotel(
    hotel_create: schema_hotel.HotelCreate,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    contact = hotel_create.contact_info.model_dump(exclude_none=True) if hotel_create.contact_info else {}
    policies = hotel_create.policies or {}
    rooms = [room.model_dump(mode="json") for room in hotel_create.rooms] or DEFAULT_ROOMS

    db_hotel = Hotel(
        name=hotel_create.name,
        description=hotel_create.description,
        address=address_of(hotel_create.address),
        location=DFW_LOCATION,
        distance="0.5 miles from airport",
        rating=hotel_create.stars,
        images=["https://via.placeholder.com/400x300?text=Hotel"],
        amenities=hotel_create.amenities or ["Free WiFi", "Shuttle Service", "Restaurant", "Fitness Center"],
        contact={
            "phone": contact.get("phone", "+1 (555) 123-4567"),
            "email": contact.get("email", "info@hotel.com"),
            "website": contact.get("website", "https://hotel.com"),
        },
        policies={
            "checkIn": policies.get("checkIn", "3:00 PM"),
            "checkOut": policies.get("checkOut", "11:00 AM"),
            "cancellation": policies.get("cancellation", "Free cancellation up to 24 hours before check-in"),
            "pets": policies.get("pets", False),
            "smoking": policies.get("smoking", False),
        },
        admin_id=hotel_create.admin,
        rooms=[Room(**room) for room in rooms],
    )
    db.add(db_hotel)
    db.flush()
    db.refresh(db_hotel)
    logger.info(f"Created hotel {db_hotel.name} with {len(db_hotel.rooms)} rooms")
    return envelope({"hotel": dump(schema_hotel.Hotel, db_hotel)}, message="Hotel created successfully")


@router.put("/hotels/{hotel_id}")
def update_hotel(
    hotel_id: str,
    hotel_update: schema_hotel.HotelUpdate,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    db_hotel = get_hotel(db, hotel_id)

    update_data = hotel_update.model_dump(exclude_unset=True, mode="json")
    if "stars" in update_data:
        update_data["rating"] = update_data.pop("stars")
    if hotel_update.address is not None:
        update_data["address"] = address_of(hotel_update.address)
    if hotel_update.contact is not None:
        update_data["contact"] = hotel_update.contact.model_dump(exclude_none=True)

    for key, value in update_data.items():
        setattr(db_hotel, key, value)

    db.flush()
    db.refresh(db_hotel)
    return envelope({"hotel": dump(schema_hotel.Hotel, db_hotel)}, message="Hotel updated successfully")


@router.delete("/hotels/{hotel_id}")
def delete_hotel(hotel_id: str, account: Account = Depends(super_admin), db: Session = Depends(get_db)):
    db_hotel = get_hotel(db, hotel_id)
    if has_active_bookings(hotel_bookings(db, db_hotel.id)):
        raise HTTPException(status_code=400, detail="Cannot delete hotel with active bookings")

    db.delete(db_hotel)
    db.flush()
    return envelope(message="Hotel deleted successfully")


# ---------------------------------------------------------------- hotel admin

@router.get("/hotel/rooms")
def read_rooms(account: Account = Depends(hotel_admin), db: Session = Depends(get_db)):
    db_hotel = get_assigned_hotel(db, account)
    return envelope({"rooms": dump_all(schema_hotel.Room, db_hotel.rooms)})


@router.post("/hotel/rooms", status_code=201)
def create_room(
    room_create: schema_hotel.RoomCreate,
    account: Account = Depends(hotel_admin),
    db: Session = Depends(get_db),
):
    db_hotel = get_assigned_hotel(db, account)
    room_data = room_create.model_dump(mode="json")
    room_data["images"] = room_data["images"] or ["https://via.placeholder.com/400x300?text=Room"]

    db_room = Room(**room_data, is_active=True)
    db_hotel.rooms.append(db_room)
    db.flush()
    db.refresh(db_room)
    return envelope({"room": dump(schema_hotel.Room, db_room)}, message="Room created successfully")


@router.put("/hotel/rooms/{room_id}")
def update_room(
    room_id: str,
    room_update: schema_hotel.RoomUpdate,
    account: Account = Depends(hotel_admin),
    db: Session = Depends(get_db),
):
    db_hotel = get_assigned_hotel(db, account)
    db_room = db_hotel.get_room(room_id)
    if db_room is None:
        raise HTTPException(status_code=404, detail="Room not found")

    for key, value in room_update.model_dump(exclude_unset=True, mode="json").items():
        setattr(db_room, key, value)

    db.flush()
    db.refresh(db_room)
    return envelope({"room": dump(schema_hotel.Room, db_room)}, message="Room updated successfully")


@router.delete("/hotel/rooms/{room_id}")
def delete_room(room_id: str, account: Account = Depends(hotel_admin), db: Session = Depends(get_db)):
    db_hotel = get_assigned_hotel(db, account)
    db_room = db_hotel.get_room(room_id)
    if db_room is None:
        raise HTTPException(status_code=404, detail="Room not found")

    db_hotel.rooms.remove(db_room)
    db.flush()
    return envelope(message="Room deleted successfully")


@router.get("/hotel/bookings")
def read_hotel_bookings(account: Account = Depends(hotel_admin), db: Session = Depends(get_db)):
    db_hotel = get_assigned_hotel(db, account)
    bookings = recent_bookings(hotel_bookings(db, db_hotel.id), None)
    return envelope({"bookings": dump_all(schema_booking.Booking, bookings)})


# ---------------------------------------------------------------- parking admin

@router.get("/parking/spots")
def read_spots(account: Account = Depends(parking_admin), db: Session = Depends(get_db)):
    db_lot = get_assigned_lot(db, account)
    return envelope({"spots": dump_all(schema_parking.ParkingSpot, db_lot.spots)})


@router.post("/parking/spots", status_code=201)
def create_spot(
    spot_create: schema_parking.SpotCreate,
    account: Account = Depends(parking_admin),
    db: Session = Depends(get_db),
):
    db_lot = get_assigned_lot(db, account)
    if any(spot.spot_number == spot_create.spot_number for spot in db_lot.spots):
        raise HTTPException(status_code=400, detail="Spot number already exists in this lot")

    db_spot = ParkingSpot(
        spot_number=spot_create.spot_number,
        section=spot_create.section,
        type=spot_create.spot_type.value,
        is_available=spot_create.is_available,
        is_reserved=spot_create.is_reserved,
    )
    db_lot.spots.append(db_spot)
    capacity = dict(db_lot.capacity or {})
    capacity["total"] = len(db_lot.spots)
    db_lot.capacity = capacity
    db_lot.refresh_capacity()

    db.flush()
    db.refresh(db_spot)
    return envelope({"spot": dump(schema_parking.ParkingSpot, db_spot)}, message="Parking spot created successfully")


@router.put("/parking/spots/{spot_id}")
def update_spot(
    spot_id: str,
    spot_update: schema_parking.SpotUpdate,
    account: Account = Depends(parking_admin),
    db: Session = Depends(get_db),
):
    db_lot = get_assigned_lot(db, account)
    db_spot = db_lot.get_spot(spot_id)
    if db_spot is None:
        raise HTTPException(status_code=404, detail="Parking spot not found")

    update_data = spot_update.model_dump(exclude_unset=True, mode="json")
    if "spot_type" in update_data:
        update_data["type"] = update_data.pop("spot_type")
    for key, value in update_data.items():
        setattr(db_spot, key, value)
    db_lot.refresh_capacity()

    db.flush()
    db.refresh(db_spot)
    return envelope({"spot": dump(schema_parking.ParkingSpot, db_spot)}, message="Parking spot updated successfully")


@router.delete("/parking/spots/{spot_id}")
def delete_spot(spot_id: str, account: Account = Depends(parking_admin), db: Session = Depends(get_db)):
    db_lot = get_assigned_lot(db, account)
    db_spot = db_lot.get_spot(spot_id)
    if db_spot is None:
        raise HTTPException(status_code=404, detail="Parking spot not found")

    db_lot.spots.remove(db_spot)
    capacity = dict(db_lot.capacity or {})
    capacity["total"] = len(db_lot.spots)
    db_lot.capacity = capacity
    db_lot.refresh_capacity()
    db.flush()
    return envelope(message="Parking spot deleted successfully")


@router.get("/parking/bookings")
def read_parking_bookings(account: Account = Depends(parking_admin), db: Session = Depends(get_db)):
    db_lot = get_assigned_lot(db, account)
    bookings = recent_bookings(lot_bookings(db, db_lot.id), None)
    return envelope({"bookings": dump_all(schema_booking.Booking, bookings)})


# ---------------------------------------------------------------- parking lots

@router.get("/parking")
def read_all_parking_lots(account: Account = Depends(super_admin), db: Session = Depends(get_db)):
    lots = db.query(ParkingLot).filter(db_comment_endpoint).order_by(ParkingLot.name).all()
    return envelope({"parkingLots": dump_all(schema_parking.ParkingLot, lots)})


@router.post("/parking", status_code=201)
def create_parking_lot(
    lot_create: schema_parking.ParkingLotCreate,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    total_spots = lot_create.total_spots
    contact = lot_create.contact_info.model_dump(exclude_none=True) if lot_create.contact_info else {}
    policies = lot_create.policies or {}

    db_lot = ParkingLot(
        name=lot_create.name,
        description=lot_create.description,
        address=address_of(lot_create.address),
        location=DFW_LOCATION,
        distance="0.5 miles from terminal",
        pricing=lot_create.pricing.model_dump(exclude_none=True),
        capacity={
            "total": total_spots,
            "available": total_spots,
            "covered": int(total_spots * 0.3),
            "handicap": int(total_spots * 0.05),
            "electric": int(total_spots * 0.1),
        },
        features=lot_create.features or ["Covered Parking", "24/7 Security", "Shuttle Service"],
        images=["https://via.placeholder.com/400x300?text=Parking+Lot"],
        operating_hours={"open": "24/7", "close": "24/7"},
        contact={
            "phone": contact.get("phone", "+1 (555) 123-4567"),
            "email": contact.get("email", "info@dfwparking.com"),
        },
        policies={
            "maxStay": policies.get("maxStay", 30),
            "cancellation": policies.get("cancellation", "Free cancellation up to 2 hours before arrival"),
            "oversizedVehicles": policies.get("oversizedVehicles", False),
        },
        admin_id=lot_create.admin,
        spots=[
            ParkingSpot(spot_number=utils.spot_number(index), type="Standard", is_available=True, is_reserved=False)
            for index in range(1, total_spots + 1)
        ],
    )
    db.add(db_lot)
    db.flush()
    db.refresh(db_lot)
    logger.info(f"Created parking lot {db_lot.name} with {total_spots} spots")
    return envelope({"parkingLot": dump(schema_parking.ParkingLot, db_lot)}, message="Parking lot created successfully")


@router.put("/parking/{lot_id}")
def update_parking_lot(
    lot_id: str,
    lot_update: schema_parking.ParkingLotUpdate,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    db_lot = get_lot(db, lot_id)

    update_data = lot_update.model_dump(exclude_unset=True, mode="json")
    if lot_update.address is not None:
        update_data["address"] = address_of(lot_update.address)
    if lot_update.pricing is not None:
        update_data["pricing"] = lot_update.pricing.model_dump(exclude_none=True)
    if lot_update.contact is not None:
        update_data["contact"] = lot_update.contact.model_dump(exclude_none=True)

    for key, value in update_data.items():
        setattr(db_lot, key, value)

    db.flush()
    db.refresh(db_lot)
    return envelope({"parkingLot": dump(schema_parking.ParkingLot, db_lot)}, message="Parking lot updated successfully")


@router.delete("/parking/{lot_id}")
def delete_parking_lot(lot_id: str, account: Account = Depends(super_admin), db: Session = Depends(get_db)):
    db_lot = get_lot(db, lot_id)
    if has_active_bookings(lot_bookings(db, db_lot.id)):
        raise HTTPException(status_code=400, detail="Cannot delete parking lot with active bookings")

    db.delete(db_lot)
    db.flush()
    return envelope(message="Parking lot deleted successfully")


# ---------------------------------------------------------------- bookings

@router.get("/bookings")
def read_all_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[BookingStatus] = None,
    type: Optional[BookingType] = None,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    query = db.query(Booking).filter(db_comment_endpoint)
    if status:
        query = query.filter(Booking.status == status.value)
    if type:
        query = query.filter(Booking.type == type.value)

    total = query.count()
    bookings = query.order_by(Booking.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return envelope({
        "bookings": dump_all(schema_booking.Booking, bookings),
        "pagination": pagination(page, limit, total),
    })


def apply_status(db: Session, booking: Booking, status_update: schema_booking.BookingStatusUpdate) -> Booking:
    if status_update.status == BookingStatus.CANCELLED and booking.status != BookingStatus.CANCELLED.value:
        release_inventory(db, booking)
    booking.set_status(status_update.status.value)
    if status_update.notes:
        booking.notes = status_update.notes
    db.flush()
    db.refresh(booking)
    return booking


@router.put("/bookings/{booking_id}")
def update_booking(
    booking_id: str,
    status_update: schema_booking.BookingStatusUpdate,
    account: Account = Depends(super_admin),
    db: Session = Depends(get_db),
):
    db_booking = apply_status(db, get_booking(db, booking_id), status_update)
    return envelope({"booking": dump(schema_booking.Booking, db_booking)}, message="Booking status updated successfully")


@router.delete("/bookings/{booking_id}")
def cancel_any_booking(booking_id: str, account: Account = Depends(super_admin), db: Session = Depends(get_db)):
    db_booking = cancel_booking(db, get_booking(db, booking_id), "Cancelled by administrator")
    return envelope({"booking": dump(schema_booking.Booking, db_booking)}, message="Booking cancelled successfully")


@router.put("/bookings/{booking_id}/status")
def update_booking_status(
    booking_id: str,
    status_update: schema_booking.BookingStatusUpdate,
    account: Account = Depends(booking_admin),
    db: Session = Depends(get_db),
):
    db_booking = get_booking(db, booking_id)

    # property admins only touch bookings on their own property
    if account.role == Role.HOTEL_ADMIN.value:
        if db_booking.hotel_id != get_assigned_hotel(db, account).id:
            raise HTTPException(status_code=403, detail="Access denied")
    elif account.role == Role.PARKING_ADMIN.value:
        if db_booking.parking_lot_id != get_assigned_lot(db, account).id:
            raise HTTPException(status_code=403, detail="Access denied")

    db_booking = apply_status(db, db_booking, status_update)
    return envelope({"booking": dump(schema_booking.Booking, db_booking)}, message="Booking status updated successfully")
