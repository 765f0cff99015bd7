from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from app.models import CamelModel, RecordModel
from booking_core.base import BookingStatus, BookingType, PaymentMethod, SpotType
from booking_core.time_utils import as_datetime


class Booking(RecordModel):
    user_id: str = Field(serialization_alias="user")
    type: str
    status: str
    hotel: Optional[dict] = None
    parking: Optional[dict] = None
    payment: dict
    pricing: dict
    duration: int = 0
    special_requests: Optional[str] = None
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LegDates(CamelModel):
    check_in: datetime
    check_out: datetime

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def parse_date(cls, value):
        # accepts bare dates ("2025-03-01") as midnight
        if isinstance(value, str):
            return as_datetime(value)
        return value

    @model_validator(mode="after")
    def check_order(self):
        if self.check_out <= self.check_in:
            raise ValueError("Check-out date must be after check-in date")
        return self


class HotelLeg(LegDates):
    hotel_id: str
    room_id: str
    guests: int = Field(1, ge=1, le=10)
    room_type: Optional[str] = None
    amenities: List[str] = []
    room_price: Optional[float] = Field(None, ge=0)


class VehicleInfo(CamelModel):
    make: Optional[str] = None
    model: Optional[str] = None
    color: Optional[str] = None
    license_plate: str = Field(..., min_length=1)
    type: Optional[str] = None


class ParkingLeg(LegDates):
    parking_lot_id: str
    spot_id: Optional[str] = None
    vehicle_info: VehicleInfo
    spot_type: SpotType = SpotType.STANDARD
    spot_price: Optional[float] = Field(None, ge=0)


class Payment(CamelModel):
    method: PaymentMethod
    amount: float = Field(..., ge=0)
    currency: str = "USD"
    status: str = "pending"


class Pricing(CamelModel):
    subtotal: float = Field(0, ge=0)
    taxes: float = Field(0, ge=0)
    fees: float = Field(0, ge=0)
    discount: float = Field(0, ge=0)
    total: float = Field(..., ge=0)


class BookingCreate(CamelModel):
    type: BookingType
    hotel: Optional[HotelLeg] = None
    parking: Optional[ParkingLeg] = None
    payment: Payment
    pricing: Pricing
    status: BookingStatus = BookingStatus.CONFIRMED
    special_requests: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_legs(self):
        if self.type.has_hotel_leg and self.hotel is None:
            raise ValueError("Hotel and room information is required for hotel bookings")
        if self.type.has_parking_leg and self.parking is None:
            raise ValueError("Parking lot information is required for parking bookings")
        return self


class BookingUpdate(CamelModel):
    special_requests: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class BookingCancel(CamelModel):
    reason: Optional[str] = None


class BookingStatusUpdate(CamelModel):
    status: BookingStatus
    notes: Optional[str] = None


class SupportBookingUpdate(CamelModel):
    status: Optional[BookingStatus] = None
    notes: Optional[str] = None
    special_requests: Optional[str] = Field(None, max_length=500)
