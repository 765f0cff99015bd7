import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import db_comment_endpoint, get_db
from app.endpoint.login import get_current_account
from app.model.model_booking import Booking
from app.model.model_hotel import Hotel
from app.model.model_parking import ParkingLot
from app.model.model_user import Account
from app.models import dump, dump_all, envelope, pagination
from app.schema import schema_booking
from booking_core.base import FINAL_BOOKING_STATUSES, BookingStatus, BookingType, Role

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking(db: Session, booking_id: str) -> Booking:
    db_booking = db.query(Booking).filter(db_comment_endpoint).filter(Booking.id == booking_id).first()
    if db_booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return db_booking


def get_owned_booking(db: Session, booking_id: str, account: Account) -> Booking:
    db_booking = get_booking(db, booking_id)
    if db_booking.user_id != account.id and account.role != Role.SUPER_ADMIN.value:
        raise HTTPException(status_code=403, detail="Access denied")
    return db_booking


def release_inventory(db: Session, booking: Booking):
    """Gives the booking's room and spot back to their hotel and lot."""
    booking_type = BookingType(booking.type)

    if booking_type.has_hotel_leg and booking.hotel_id:
        db_hotel = db.query(Hotel).filter(Hotel.id == booking.hotel_id).first()
        room_id = booking.hotel.get("roomId")
        if db_hotel is not None and db_hotel.get_room(room_id) is not None:
            db_hotel.update_room_availability(room_id, -1)

    if booking_type.has_parking_leg and booking.parking_lot_id:
        db_lot = db.query(ParkingLot).filter(ParkingLot.id == booking.parking_lot_id).first()
        spot_id = booking.parking.get("spotId")
        if db_lot is not None and spot_id and db_lot.get_spot(spot_id) is not None:
            db_lot.update_spot_availability(spot_id, True, None)


def cancel_booking(db: Session, booking: Booking, reason: str) -> Booking:
    if BookingStatus(booking.status) in FINAL_BOOKING_STATUSES:
        raise HTTPException(status_code=400, detail="Booking cannot be cancelled")

    booking.cancel(reason)
    release_inventory(db, booking)
    db.flush()
    db.refresh(booking)
    logger.info(f"Booking {booking.id} cancelled: {reason}")
    return booking


@router.get("")
def read_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[BookingStatus] = None,
    type: Optional[BookingType] = None,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    query = db.query(Booking).filter(db_comment_endpoint).filter(Booking.user_id == account.id)
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


@router.post("", status_code=201)
def create_booking(
    booking_create: schema_booking.BookingCreate,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    booking_type = booking_create.type
    db_hotel = db_room = db_lot = db_spot = None

    if booking_type.has_hotel_leg:
        hotel_leg = booking_create.hotel
        db_hotel = db.query(Hotel).filter(db_comment_endpoint).filter(Hotel.id == hotel_leg.hotel_id).first()
        if db_hotel is None:
            raise HTTPException(status_code=404, detail="Hotel not found")
        db_room = db_hotel.get_room(hotel_leg.room_id)
        if db_room is None or not db_room.is_active or db_room.available < 1:
            raise HTTPException(status_code=400, detail="Room is not available")

    if booking_type.has_parking_leg:
        parking_leg = booking_create.parking
        db_lot = db.query(ParkingLot).filter(db_comment_endpoint).filter(ParkingLot.id == parking_leg.parking_lot_id).first()
        if db_lot is None:
            raise HTTPException(status_code=404, detail="Parking lot not found")

        # a combined stay parks on the hotel's allocation, only standalone
        # parking holds a specific spot
        if booking_type == BookingType.PARKING:
            if parking_leg.spot_id:
                db_spot = db_lot.get_spot(parking_leg.spot_id)
                if db_spot is None or not db_spot.is_available or db_spot.is_reserved:
                    raise HTTPException(status_code=400, detail="Parking spot is not available")
            else:
                db_spot = db_lot.find_available_spot(parking_leg.spot_type.value)
                if db_spot is None:
                    raise HTTPException(status_code=400, detail="No parking spot available for the selected type")

    hotel_data = booking_create.hotel.model_dump(by_alias=True, mode="json") if db_hotel else None
    parking_data = booking_create.parking.model_dump(by_alias=True, mode="json") if db_lot else None
    if db_spot is not None:
        parking_data["spotId"] = db_spot.id

    db_booking = Booking(
        user_id=account.id,
        type=booking_type.value,
        hotel=hotel_data,
        parking=parking_data,
        payment=booking_create.payment.model_dump(by_alias=True, mode="json"),
        pricing=booking_create.pricing.model_dump(by_alias=True, mode="json"),
        total=booking_create.pricing.total,
        special_requests=booking_create.special_requests,
    )
    db_booking.set_status(booking_create.status.value)
    db.add(db_booking)
    db.flush()

    if db_room is not None:
        db_hotel.update_room_availability(db_room.id, 1)
    if db_spot is not None:
        db_lot.update_spot_availability(db_spot.id, False, db_booking.id)

    db.flush()
    db.refresh(db_booking)
    logger.info(f"Booking {db_booking.id} ({db_booking.type}) created for {account.email}")
    return envelope({"booking": dump(schema_booking.Booking, db_booking)}, message="Booking created successfully")


@router.get("/{booking_id}")
def read_booking(booking_id: str, account: Account = Depends(get_current_account), db: Session = Depends(get_db)):
    db_booking = get_owned_booking(db, booking_id, account)
    return envelope({"booking": dump(schema_booking.Booking, db_booking)})


@router.put("/{booking_id}")
def update_booking(
    booking_id: str,
    booking_update: schema_booking.BookingUpdate,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    db_booking = get_owned_booking(db, booking_id, account)

    for key, value in booking_update.model_dump(exclude_unset=True).items():
        setattr(db_booking, key, value)

    db.flush()
    db.refresh(db_booking)
    return envelope({"booking": dump(schema_booking.Booking, db_booking)}, message="Booking updated successfully")


@router.delete("/{booking_id}")
def delete_booking(
    booking_id: str,
    booking_cancel: Optional[schema_booking.BookingCancel] = Body(None),
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    db_booking = get_owned_booking(db, booking_id, account)
    reason = (booking_cancel.reason if booking_cancel else None) or "Cancelled by user"
    db_booking = cancel_booking(db, db_booking, reason)
    return envelope({"booking": dump(schema_booking.Booking, db_booking)}, message="Booking cancelled successfully")
