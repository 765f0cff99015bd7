from datetime import datetime
from typing import List, Optional, Union

from pydantic import Field

from app.models import CamelModel, LocationAddress, RecordModel
from booking_core.base import RoomType


class Room(RecordModel):
    type: str
    name: str
    description: Optional[str] = None
    price: float
    capacity: int
    available: int
    amenities: List[str] = []
    images: List[str] = []
    is_active: bool = True


class Hotel(RecordModel):
    name: str
    description: str
    address: dict
    full_address: str
    location: Optional[dict] = None
    distance: Optional[str] = None
    rating: float = 0
    total_reviews: int = 0
    images: List[str] = []
    amenities: List[str] = []
    contact: Optional[dict] = None
    policies: Optional[dict] = None
    rooms: List[Room] = []
    is_active: bool = True
    admin_id: Optional[str] = Field(None, serialization_alias="admin")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RoomCreate(CamelModel):
    type: RoomType
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    capacity: int = Field(..., ge=1, le=10)
    available: int = Field(..., ge=0)
    amenities: List[str] = []
    images: List[str] = []


class RoomUpdate(CamelModel):
    type: Optional[RoomType] = None
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, ge=1, le=10)
    available: Optional[int] = Field(None, ge=0)
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None
    is_active: Optional[bool] = None


class HotelContact(CamelModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


class HotelCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    # either a structured address or "line1, city, state, zip"
    address: Union[LocationAddress, str]
    description: str = Field(..., min_length=1)
    stars: int = Field(..., ge=1, le=5)
    amenities: List[str] = []
    rooms: List[RoomCreate] = []
    admin: Optional[str] = None
    contact_info: Optional[HotelContact] = None
    policies: Optional[dict] = None


class HotelUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[LocationAddress] = None
    description: Optional[str] = Field(None, min_length=1)
    stars: Optional[int] = Field(None, ge=1, le=5)
    distance: Optional[str] = None
    images: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    contact: Optional[HotelContact] = None
    policies: Optional[dict] = None
    is_active: Optional[bool] = None
