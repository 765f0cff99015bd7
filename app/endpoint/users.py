import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import db_comment_endpoint, get_db
from app.endpoint.login import get_current_account
from app.model.model_booking import Booking
from app.model.model_user import Account
from app.models import dump, dump_all, envelope, pagination
from app.schema import schema_booking, schema_user
from booking_core.base import BookingStatus

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter()


@router.get("/users/profile", tags=["Users"])
def read_profile(account: Account = Depends(get_current_account)):
    return envelope({"user": dump(schema_user.Account, account)})


@router.put("/users/profile", tags=["Users"])
def update_profile(
    profile: schema_user.ProfileUpdate,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    if profile.name:
        account.name = profile.name.strip()
    if profile.phone:
        account.phone = profile.phone
    if profile.address:
        # merged field by field; omitted address parts are kept
        address = dict(account.address or {})
        address.update(profile.address.model_dump(by_alias=True, exclude_none=True))
        account.address = address

    db.flush()
    db.refresh(account)
    return envelope({"user": dump(schema_user.Account, account)}, message="Profile updated successfully")


@router.get("/users/bookings", tags=["Users"])
def read_booking_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[BookingStatus] = None,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    query = db.query(Booking).filter(db_comment_endpoint).filter(Booking.user_id == account.id)
    if status:
        query = query.filter(Booking.status == status.value)

    total = query.count()
    bookings = query.order_by(Booking.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return envelope({
        "bookings": dump_all(schema_booking.Booking, bookings),
        "pagination": pagination(page, limit, total),
    })
