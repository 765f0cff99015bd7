from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database import Base, new_object_id, utcnow


def format_address(address: dict) -> str:
    if not address:
        return ""
    parts = [address.get("line1") or address.get("street") or ""]
    if address.get("line2"):
        parts.append(address["line2"])
    parts.append(f"{address.get('city', '')}, {address.get('state', '')} {address.get('zipCode', '')}".strip())
    if address.get("country") and address["country"] != "USA":
        parts.append(address["country"])
    return ", ".join(part for part in parts if part)


class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(String(32), primary_key=True, default=new_object_id)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    address = Column(JSON, nullable=False)
    location = Column(JSON)
    distance = Column(String(100))
    rating = Column(Float, default=0)
    total_reviews = Column(Integer, default=0)
    images = Column(JSON, default=list)
    amenities = Column(JSON, default=list)
    contact = Column(JSON)
    policies = Column(JSON)
    is_active = Column(Boolean, default=True)
    # document-style reference, no foreign key: an admin account can be
    # deleted without touching the hotel
    admin_id = Column(String(32), index=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    rooms = relationship("Room", back_populates="hotel", cascade="all, delete-orphan", order_by="Room.price")
    admin = relationship(
        "Account",
        primaryjoin="foreign(Hotel.admin_id) == Account.id",
        viewonly=True,
    )

    @property
    def full_address(self) -> str:
        return format_address(self.address)

    def get_room(self, room_id: str):
        return next((room for room in self.rooms if room.id == room_id), None)

    def available_rooms(self, guests: int = 1):
        return [
            room for room in self.rooms
            if room.is_active and room.available > 0 and room.capacity >= guests
        ]

    def update_room_availability(self, room_id: str, quantity: int):
        """
        Takes `quantity` rooms out of the available count (a negative quantity
        gives them back). The count never drops below zero.
        """
        room = self.get_room(room_id)
        if room is None:
            raise LookupError("Room not found")
        room.available = max(0, room.available - quantity)
        return room


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String(32), primary_key=True, default=new_object_id)
    hotel_id = Column(String(32), ForeignKey("hotels.id", ondelete="CASCADE"), index=True, nullable=False)
    type = Column(String(32), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    price = Column(Float, nullable=False)
    capacity = Column(Integer, nullable=False)
    available = Column(Integer, nullable=False, default=0)
    amenities = Column(JSON, default=list)
    images = Column(JSON, default=list)
    is_active = Column(Boolean, default=True)

    hotel = relationship("Hotel", back_populates="rooms")
