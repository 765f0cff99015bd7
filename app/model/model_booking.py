import math

from sqlalchemy import JSON, Column, DateTime, Float, Index, String, Text
from sqlalchemy.orm import relationship

from app.database import Base, new_object_id, utcnow
from booking_core.base import BookingStatus, BookingType
from booking_core.time_utils import as_datetime


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_user_created", "user_id", "created_at"),
    )

    id = Column(String(32), primary_key=True, default=new_object_id)
    user_id = Column(String(32), nullable=False)
    type = Column(String(16), nullable=False, index=True)
    status = Column(String(16), nullable=False, default=BookingStatus.PENDING.value, index=True)
    # embedded legs, stored with their wire (camelCase) keys
    hotel = Column(JSON)
    parking = Column(JSON)
    payment = Column(JSON, nullable=False)
    pricing = Column(JSON, nullable=False)
    total = Column(Float, nullable=False, default=0)
    special_requests = Column(Text)
    cancellation_reason = Column(Text)
    notes = Column(Text)
    confirmed_at = Column(DateTime)
    cancelled_at = Column(DateTime)
    completed_at = Column(DateTime)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship(
        "Account",
        primaryjoin="foreign(Booking.user_id) == Account.id",
        viewonly=True,
    )

    @property
    def hotel_id(self):
        return (self.hotel or {}).get("hotelId")

    @property
    def parking_lot_id(self):
        return (self.parking or {}).get("parkingLotId")

    @property
    def duration(self) -> int:
        leg = None
        if self.type == BookingType.HOTEL.value:
            leg = self.hotel
        elif self.type == BookingType.PARKING.value:
            leg = self.parking
        if not leg:
            return 0

        check_in = as_datetime(leg.get("checkIn"))
        check_out = as_datetime(leg.get("checkOut"))
        if check_in is None or check_out is None:
            return 0
        return math.ceil((check_out - check_in).total_seconds() / 86400)

    def calculate_total(self) -> float:
        pricing = self.pricing or {}
        return (
            pricing.get("subtotal", 0)
            + pricing.get("taxes", 0)
            + pricing.get("fees", 0)
            - pricing.get("discount", 0)
        )

    def set_status(self, status: str):
        self.status = status
        if status == BookingStatus.CONFIRMED.value:
            self.confirmed_at = utcnow()
        elif status == BookingStatus.COMPLETED.value:
            self.completed_at = utcnow()
        elif status == BookingStatus.CANCELLED.value:
            self.cancelled_at = utcnow()

    def cancel(self, reason: str = ""):
        self.set_status(BookingStatus.CANCELLED.value)
        self.cancellation_reason = reason
