from sqlalchemy import JSON, Boolean, Column, DateTime, String

from app.database import Base, new_object_id, utcnow
from booking_core.base import Role


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(32), primary_key=True, default=new_object_id)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.CUSTOMER.value)
    phone = Column(String(32))
    address = Column(JSON)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
