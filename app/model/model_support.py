from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlalchemy.orm import relationship

from app.database import Base, new_object_id, utcnow
from booking_core.base import TicketCategory, TicketPriority, TicketStatus
from booking_core.time_utils import datetime_to_str


class SupportTicket(Base):
    __tablename__ = "support_tickets"

    id = Column(String(32), primary_key=True, default=new_object_id)
    # {"name", "email", "phone"} copied from the requester at creation time
    customer = Column(JSON, nullable=False)
    requester_id = Column(String(32), index=True)
    subject = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default=TicketStatus.OPEN.value, index=True)
    priority = Column(String(16), nullable=False, default=TicketPriority.MEDIUM.value, index=True)
    category = Column(String(16), nullable=False, default=TicketCategory.OTHER.value)
    assigned_to_id = Column(String(32), index=True)
    assigned_at = Column(DateTime)
    resolved_at = Column(DateTime)
    resolution = Column(Text)
    notes = Column(JSON, default=list)
    related_booking_id = Column(String(32))
    tags = Column(JSON, default=list)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    assigned_to = relationship(
        "Account",
        primaryjoin="foreign(SupportTicket.assigned_to_id) == Account.id",
        viewonly=True,
    )

    def add_note(self, content: str, account_id: str):
        self.notes = list(self.notes or []) + [{
            "content": content,
            "createdBy": account_id,
            "createdAt": datetime_to_str(utcnow()),
        }]

    def assign(self, account_id: str):
        self.assigned_to_id = account_id
        self.assigned_at = utcnow()
        if self.status == TicketStatus.OPEN.value:
            self.status = TicketStatus.IN_PROGRESS.value

    def update_status(self, status: str, account_id: str):
        self.status = status
        self.add_note(f"Status changed to: {status}", account_id)
        if status == TicketStatus.RESOLVED.value and self.resolved_at is None:
            self.resolved_at = utcnow()

    def resolve(self, resolution: str, account_id: str):
        self.status = TicketStatus.RESOLVED.value
        self.resolution = resolution
        self.resolved_at = utcnow()
        self.add_note(f"Ticket resolved: {resolution}", account_id)
