import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import db_comment_endpoint, get_db
from app.model.model_hotel import Hotel
from app.models import dump, dump_all, envelope, pagination
from app.schema import schema_hotel
from booking_core.pricing import count_nights
from booking_core.time_utils import as_datetime, datetime_to_str

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter(prefix="/hotels", tags=["Hotels"])


class HotelSort(str, Enum):
    RATING = "rating"
    PRICE = "price"
    DISTANCE = "distance"
    NAME = "name"


def split_csv(value: Optional[str]):
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def matches_search(hotel: Hotel, search: str) -> bool:
    search = search.lower()
    city = (hotel.address or {}).get("city") or ""
    return any(search in (text or "").lower() for text in (hotel.name, hotel.description, city))


def lowest_price(hotel: Hotel) -> float:
    prices = [room.price for room in hotel.rooms]
    return min(prices) if prices else float("inf")


def sort_hotels(hotels, sort: HotelSort):
    if sort == HotelSort.RATING:
        return sorted(hotels, key=lambda hotel: hotel.rating or 0, reverse=True)
    if sort == HotelSort.PRICE:
        return sorted(hotels, key=lowest_price)
    if sort == HotelSort.DISTANCE:
        return sorted(hotels, key=lambda hotel: hotel.distance or "")
    return sorted(hotels, key=lambda hotel: hotel.name.lower())


def get_active_hotel(db: Session, hotel_id: str) -> Hotel:
    db_hotel = db.query(Hotel).filter(db_comment_endpoint).filter(Hotel.id == hotel_id).first()
    if db_hotel is None or not db_hotel.is_active:
        raise HTTPException(status_code=404, detail="Hotel not found or not available")
    return db_hotel


@router.get("")
def read_hotels(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    rating: Optional[float] = Query(None, ge=0, le=5),
    amenities: Optional[str] = None,
    check_in: Optional[datetime] = Query(None, alias="checkIn"),
    check_out: Optional[datetime] = Query(None, alias="checkOut"),
    guests: int = Query(1, ge=1, le=10),
    sort: HotelSort = HotelSort.RATING,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = db.query(Hotel).filter(db_comment_endpoint).filter(Hotel.is_active.is_(True))
    if rating is not None:
        query = query.filter(Hotel.rating >= rating)
    hotels = query.all()

    wanted_amenities = split_csv(amenities)
    if wanted_amenities:
        hotels = [hotel for hotel in hotels if set(hotel.amenities or []) & set(wanted_amenities)]
    if search:
        hotels = [hotel for hotel in hotels if matches_search(hotel, search)]

    total = len(hotels)
    hotels = sort_hotels(hotels, sort)[(page - 1) * limit:page * limit]

    # availability narrows the page, not the total
    if check_in and check_out:
        hotels = [hotel for hotel in hotels if hotel.available_rooms(guests)]

    return envelope({
        "hotels": dump_all(schema_hotel.Hotel, hotels),
        "pagination": pagination(page, limit, total),
    })


@router.get("/{hotel_id}")
def read_hotel(hotel_id: str, db: Session = Depends(get_db)):
    db_hotel = db.query(Hotel).filter(db_comment_endpoint).filter(Hotel.id == hotel_id).first()
    if db_hotel is None:
        raise HTTPException(status_code=404, detail="Hotel not found")
    if not db_hotel.is_active:
        raise HTTPException(status_code=404, detail="Hotel is not available")
    return envelope({"hotel": dump(schema_hotel.Hotel, db_hotel)})


@router.get("/{hotel_id}/availability")
def read_hotel_availability(
    hotel_id: str,
    check_in: datetime = Query(..., alias="checkIn"),
    check_out: datetime = Query(..., alias="checkOut"),
    guests: int = Query(..., ge=1, le=10),
    db: Session = Depends(get_db),
):
    check_in, check_out = as_datetime(check_in), as_datetime(check_out)
    if check_in >= check_out:
        raise HTTPException(status_code=400, detail="Check-out date must be after check-in date")

    db_hotel = get_active_hotel(db, hotel_id)
    duration = count_nights(check_in, check_out)

    available_rooms = []
    for room in db_hotel.available_rooms(guests):
        room_data = dump(schema_hotel.Room, room)
        room_data["totalPrice"] = room.price * duration
        room_data["duration"] = duration
        available_rooms.append(room_data)

    return envelope({
        "hotel": {
            "_id": db_hotel.id,
            "name": db_hotel.name,
            "address": db_hotel.address,
            "amenities": db_hotel.amenities,
        },
        "checkIn": datetime_to_str(check_in),
        "checkOut": datetime_to_str(check_out),
        "duration": duration,
        "guests": guests,
        "availableRooms": available_rooms,
    })


@router.get("/{hotel_id}/rooms")
def read_hotel_rooms(hotel_id: str, db: Session = Depends(get_db)):
    db_hotel = get_active_hotel(db, hotel_id)
    rooms = [room for room in db_hotel.rooms if room.is_active]
    return envelope({
        "hotel": {"_id": db_hotel.id, "name": db_hotel.name},
        "rooms": dump_all(schema_hotel.Room, rooms),
    })
