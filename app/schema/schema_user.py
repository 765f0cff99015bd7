from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, SecretStr

from app.models import Address, CamelModel, RecordModel
from booking_core.base import Role

PHONE_PATTERN = r"^\+?[\d\s\-()]+$"


class Account(RecordModel):
    name: str
    email: str
    role: str
    phone: Optional[str] = None
    address: Optional[dict] = None
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AccountSummary(RecordModel):
    name: str
    email: str
    phone: Optional[str] = None


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: SecretStr = Field(..., min_length=6)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    address: Optional[Address] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: SecretStr


class ChangePasswordRequest(CamelModel):
    current_password: SecretStr
    new_password: SecretStr = Field(..., min_length=6)


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    address: Optional[Address] = None


class AccountCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: SecretStr = Field(..., min_length=6)
    role: Role
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    address: Optional[Address] = None


class AccountUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    role: Optional[Role] = None
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    address: Optional[Address] = None
    is_active: Optional[bool] = None
