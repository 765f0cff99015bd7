from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.database import Base, new_object_id, utcnow
from app.model.model_hotel import format_address
from booking_core.base import SpotType


class ParkingLot(Base):
    __tablename__ = "parking_lots"

    id = Column(String(32), primary_key=True, default=new_object_id)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    address = Column(JSON, nullable=False)
    location = Column(JSON)
    distance = Column(String(100))
    # {"hourly", "daily", "weekly", "monthly"}
    pricing = Column(JSON, nullable=False)
    # {"total", "available", "covered", "handicap", "electric"}
    capacity = Column(JSON, nullable=False)
    features = Column(JSON, default=list)
    images = Column(JSON, default=list)
    operating_hours = Column(JSON)
    contact = Column(JSON)
    policies = Column(JSON)
    is_active = Column(Boolean, default=True)
    admin_id = Column(String(32), index=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    spots = relationship(
        "ParkingSpot",
        back_populates="lot",
        cascade="all, delete-orphan",
        order_by="ParkingSpot.spot_number",
    )
    admin = relationship(
        "Account",
        primaryjoin="foreign(ParkingLot.admin_id) == Account.id",
        viewonly=True,
    )

    @property
    def full_address(self) -> str:
        return format_address(self.address)

    @property
    def availability_percentage(self) -> int:
        capacity = self.capacity or {}
        total = capacity.get("total") or 0
        if not total:
            return 0
        return round(capacity.get("available", 0) / total * 100)

    def get_spot(self, spot_id: str):
        return next((spot for spot in self.spots if spot.id == spot_id), None)

    def available_spots(self):
        return [spot for spot in self.spots if spot.is_available and not spot.is_reserved]

    def find_available_spot(self, spot_type: str = SpotType.STANDARD.value):
        return next((spot for spot in self.available_spots() if spot.type == spot_type), None)

    def refresh_capacity(self):
        # JSON columns only notice reassignment, not in-place edits
        capacity = dict(self.capacity or {})
        if self.spots:
            capacity["available"] = len([spot for spot in self.spots if spot.is_available])
        self.capacity = capacity

    def update_spot_availability(self, spot_id: str, is_available: bool, booking_id: str = None):
        spot = self.get_spot(spot_id)
        if spot is None:
            raise LookupError("Parking spot not found")
        spot.is_available = is_available
        spot.current_booking_id = booking_id
        self.refresh_capacity()
        return spot


class ParkingSpot(Base):
    __tablename__ = "parking_spots"

    id = Column(String(32), primary_key=True, default=new_object_id)
    lot_id = Column(String(32), ForeignKey("parking_lots.id", ondelete="CASCADE"), index=True, nullable=False)
    spot_number = Column(String(20), nullable=False)
    section = Column(String(20))
    type = Column(String(20), default=SpotType.STANDARD.value)
    is_available = Column(Boolean, default=True)
    is_reserved = Column(Boolean, default=False)
    current_booking_id = Column(String(32))

    lot = relationship("ParkingLot", back_populates="spots")
