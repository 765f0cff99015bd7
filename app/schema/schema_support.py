from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.models import CamelModel, RecordModel
from booking_core.base import TicketCategory, TicketPriority, TicketStatus


class SupportTicket(RecordModel):
    customer: dict
    requester_id: Optional[str] = Field(None, serialization_alias="requester")
    subject: str
    message: str
    status: str
    priority: str
    category: str
    assigned_to_id: Optional[str] = Field(None, serialization_alias="assignedTo")
    assigned_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    resolution: Optional[str] = None
    notes: List[dict] = []
    related_booking_id: Optional[str] = Field(None, serialization_alias="relatedBooking")
    tags: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TicketCreate(CamelModel):
    subject: str = Field(..., min_length=5, max_length=200)
    message: str = Field(..., min_length=10, max_length=2000)
    priority: TicketPriority = TicketPriority.MEDIUM
    category: TicketCategory = TicketCategory.OTHER
    related_booking: Optional[str] = None


class TicketUpdate(CamelModel):
    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None
    resolution: Optional[str] = None
