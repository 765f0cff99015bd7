import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import db_comment_endpoint, get_db
from app.endpoint.hotel.hotel import split_csv
from app.model.model_parking import ParkingLot
from app.models import dump, dump_all, envelope, pagination
from app.schema import schema_parking
from booking_core.base import SpotType
from booking_core.pricing import count_nights, parking_hours, quote_parking
from booking_core.time_utils import as_datetime, datetime_to_str

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter(prefix="/parking", tags=["Parking"])


class ParkingSort(str, Enum):
    PRICE = "price"
    DISTANCE = "distance"
    AVAILABILITY = "availability"
    NAME = "name"


def matches_search(lot: ParkingLot, search: str) -> bool:
    search = search.lower()
    city = (lot.address or {}).get("city") or ""
    return any(search in (text or "").lower() for text in (lot.name, lot.description, city))


def sort_lots(lots, sort: ParkingSort):
    if sort == ParkingSort.PRICE:
        return sorted(lots, key=lambda lot: (lot.pricing or {}).get("daily", 0))
    if sort == ParkingSort.DISTANCE:
        return sorted(lots, key=lambda lot: lot.distance or "")
    if sort == ParkingSort.AVAILABILITY:
        return sorted(lots, key=lambda lot: (lot.capacity or {}).get("available", 0), reverse=True)
    return sorted(lots, key=lambda lot: lot.name.lower())


@router.get("")
def read_parking_lots(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    spot_type: Optional[SpotType] = Query(None, alias="spotType"),
    features: Optional[str] = None,
    check_in: Optional[datetime] = Query(None, alias="checkIn"),
    check_out: Optional[datetime] = Query(None, alias="checkOut"),
    sort: ParkingSort = ParkingSort.AVAILABILITY,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    lots = db.query(ParkingLot).filter(db_comment_endpoint).filter(ParkingLot.is_active.is_(True)).all()

    wanted_features = split_csv(features)
    if wanted_features:
        lots = [lot for lot in lots if set(lot.features or []) & set(wanted_features)]
    if search:
        lots = [lot for lot in lots if matches_search(lot, search)]

    total = len(lots)
    lots = sort_lots(lots, sort)[(page - 1) * limit:page * limit]

    if check_in and check_out:
        if spot_type:
            lots = [lot for lot in lots if lot.find_available_spot(spot_type.value) is not None]
        else:
            lots = [lot for lot in lots if lot.available_spots()]

    return envelope({
        "parkingLots": dump_all(schema_parking.ParkingLot, lots),
        "pagination": pagination(page, limit, total),
    })


@router.get("/{lot_id}")
def read_parking_lot(lot_id: str, db: Session = Depends(get_db)):
    db_lot = db.query(ParkingLot).filter(db_comment_endpoint).filter(ParkingLot.id == lot_id).first()
    if db_lot is None:
        raise HTTPException(status_code=404, detail="Parking lot not found")
    if not db_lot.is_active:
        raise HTTPException(status_code=404, detail="Parking lot is not available")
    return envelope({"parkingLot": dump(schema_parking.ParkingLot, db_lot)})


@router.get("/{lot_id}/availability")
def read_parking_availability(
    lot_id: str,
    check_in: datetime = Query(..., alias="checkIn"),
    check_out: datetime = Query(..., alias="checkOut"),
    spot_type: SpotType = Query(SpotType.STANDARD, alias="spotType"),
    db: Session = Depends(get_db),
):
    check_in, check_out = as_datetime(check_in), as_datetime(check_out)
    if check_in >= check_out:
        raise HTTPException(status_code=400, detail="Check-out date must be after check-in date")

    db_lot = db.query(ParkingLot).filter(db_comment_endpoint).filter(ParkingLot.id == lot_id).first()
    if db_lot is None or not db_lot.is_active:
        raise HTTPException(status_code=404, detail="Parking lot not found or not available")

    available_spots = [spot for spot in db_lot.available_spots() if spot.type == spot_type.value]
    duration = count_nights(check_in, check_out)

    return envelope({
        "parkingLot": {
            "_id": db_lot.id,
            "name": db_lot.name,
            "address": db_lot.address,
            "features": db_lot.features,
        },
        "checkIn": datetime_to_str(check_in),
        "checkOut": datetime_to_str(check_out),
        "duration": duration,
        "hours": parking_hours(check_in, check_out),
        "spotType": spot_type.value,
        "availableSpots": len(available_spots),
        "pricing": {
            **(db_lot.pricing or {}),
            "totalPrice": quote_parking(db_lot.pricing, duration),
        },
    })
