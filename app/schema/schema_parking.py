from datetime import datetime
from typing import List, Optional, Union

from pydantic import Field

from app.models import CamelModel, LocationAddress, RecordModel
from booking_core.base import SpotType


class ParkingSpot(RecordModel):
    spot_number: str
    section: Optional[str] = None
    type: str
    is_available: bool = True
    is_reserved: bool = False
    current_booking_id: Optional[str] = Field(None, serialization_alias="currentBooking")


class ParkingLot(RecordModel):
    name: str
    description: str
    address: dict
    full_address: str
    location: Optional[dict] = None
    distance: Optional[str] = None
    pricing: dict
    capacity: dict
    availability_percentage: int = 0
    features: List[str] = []
    images: List[str] = []
    operating_hours: Optional[dict] = None
    contact: Optional[dict] = None
    policies: Optional[dict] = None
    spots: List[ParkingSpot] = Field([], serialization_alias="parkingSpots")
    is_active: bool = True
    admin_id: Optional[str] = Field(None, serialization_alias="admin")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ParkingPricing(CamelModel):
    hourly: float = Field(..., ge=0)
    daily: float = Field(..., ge=0)
    weekly: Optional[float] = Field(None, ge=0)
    monthly: Optional[float] = Field(None, ge=0)


class ParkingContact(CamelModel):
    phone: Optional[str] = None
    email: Optional[str] = None


class ParkingLotCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: Union[LocationAddress, str]
    description: str = Field(..., min_length=1)
    total_spots: int = Field(..., ge=1)
    features: List[str] = []
    pricing: ParkingPricing
    admin: Optional[str] = None
    contact_info: Optional[ParkingContact] = None
    policies: Optional[dict] = None


class ParkingLotUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[LocationAddress] = None
    description: Optional[str] = Field(None, min_length=1)
    distance: Optional[str] = None
    pricing: Optional[ParkingPricing] = None
    features: Optional[List[str]] = None
    images: Optional[List[str]] = None
    operating_hours: Optional[dict] = None
    contact: Optional[ParkingContact] = None
    policies: Optional[dict] = None
    is_active: Optional[bool] = None


class SpotCreate(CamelModel):
    spot_number: str = Field(..., min_length=1)
    spot_type: SpotType
    section: str = Field(..., min_length=1)
    is_available: bool = True
    is_reserved: bool = False


class SpotUpdate(CamelModel):
    spot_number: Optional[str] = Field(None, min_length=1)
    spot_type: Optional[SpotType] = None
    section: Optional[str] = Field(None, min_length=1)
    is_available: Optional[bool] = None
    is_reserved: Optional[bool] = None
