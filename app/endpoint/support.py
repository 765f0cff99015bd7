import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.database import db_comment_endpoint, get_db
from app.endpoint.admin import get_account
from app.endpoint.bookings import get_booking, release_inventory
from app.endpoint.login import authorize, get_current_account
from app.model.model_booking import Booking
from app.model.model_support import SupportTicket
from app.model.model_user import Account
from app.models import dump, dump_all, envelope, pagination
from app.schema import schema_booking, schema_support, schema_user
from booking_core.base import BookingStatus, BookingType, Role, TicketPriority, TicketStatus

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

router = APIRouter(prefix="/support", tags=["Support"])

support_agent = authorize(Role.SUPPORT)

COMMON_ISSUES = [
    {
        "category": "Booking Issues",
        "issues": [
            {
                "title": "Cannot complete booking",
                "description": "User unable to complete hotel or parking booking",
                "solutions": [
                    "Check if room/spot is still available",
                    "Verify payment method is valid",
                    "Clear browser cache and try again",
                ],
            },
            {
                "title": "Booking confirmation not received",
                "description": "User did not receive booking confirmation email",
                "solutions": [
                    "Check spam/junk folder",
                    "Verify email address is correct",
                    "Resend confirmation email",
                ],
            },
        ],
    },
    {
        "category": "Payment Issues",
        "issues": [
            {
                "title": "Payment declined",
                "description": "Credit card or payment method declined",
                "solutions": [
                    "Verify card details are correct",
                    "Check if card has sufficient funds",
                    "Try alternative payment method",
                ],
            },
            {
                "title": "Double charge",
                "description": "User charged twice for same booking",
                "solutions": [
                    "Verify if both charges went through",
                    "Initiate refund for duplicate charge",
                    "Contact payment processor if needed",
                ],
            },
        ],
    },
    {
        "category": "Cancellation Issues",
        "issues": [
            {
                "title": "Cannot cancel booking",
                "description": "User unable to cancel existing booking",
                "solutions": [
                    "Check cancellation policy",
                    "Verify booking is within cancellation window",
                    "Manual cancellation by support if needed",
                ],
            },
            {
                "title": "Refund not received",
                "description": "Refund not processed after cancellation",
                "solutions": [
                    "Check refund processing time (3-5 business days)",
                    "Verify original payment method",
                    "Contact payment processor if delayed",
                ],
            },
        ],
    },
]


def get_ticket(db: Session, ticket_id: str) -> SupportTicket:
    db_ticket = db.query(SupportTicket).filter(db_comment_endpoint).filter(SupportTicket.id == ticket_id).first()
    if db_ticket is None:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return db_ticket


@router.get("/dashboard")
def read_dashboard(account: Account = Depends(support_agent), db: Session = Depends(get_db)):
    recent = db.query(Booking).filter(db_comment_endpoint).order_by(Booking.created_at.desc()).limit(10).all()
    return envelope({
        "statistics": {
            "totalUsers": db.query(Account).filter(Account.role == Role.CUSTOMER.value).count(),
            "totalBookings": db.query(Booking).count(),
            "pendingBookings": db.query(Booking).filter(Booking.status == BookingStatus.PENDING.value).count(),
            "openTickets": db.query(SupportTicket).filter(SupportTicket.status != TicketStatus.RESOLVED.value).count(),
        },
        "recentBookings": dump_all(schema_booking.Booking, recent),
    })


# ---------------------------------------------------------------- tickets

@router.get("/tickets")
def read_tickets(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[TicketStatus] = None,
    priority: Optional[TicketPriority] = None,
    search: Optional[str] = None,
    account: Account = Depends(support_agent),
    db: Session = Depends(get_db),
):
    query = db.query(SupportTicket).filter(db_comment_endpoint)
    if status:
        query = query.filter(SupportTicket.status == status.value)
    if priority:
        query = query.filter(SupportTicket.priority == priority.value)
    tickets = query.order_by(SupportTicket.created_at.desc()).all()

    # customer name and email live in a JSON column
    if search:
        needle = search.lower()
        tickets = [
            ticket for ticket in tickets
            if any(
                needle in (text or "").lower()
                for text in (ticket.subject, ticket.message, ticket.customer.get("name"), ticket.customer.get("email"))
            )
        ]

    total = len(tickets)
    return envelope({
        "tickets": dump_all(schema_support.SupportTicket, tickets[(page - 1) * limit:page * limit]),
        "pagination": pagination(page, limit, total),
    })


@router.post("/tickets", status_code=201)
def create_ticket(
    ticket_create: schema_support.TicketCreate,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    db_ticket = SupportTicket(
        customer={"name": account.name, "email": account.email, "phone": account.phone},
        requester_id=account.id,
        subject=ticket_create.subject.strip(),
        message=ticket_create.message.strip(),
        priority=ticket_create.priority.value,
        category=ticket_create.category.value,
        related_booking_id=ticket_create.related_booking,
        notes=[],
        tags=[],
    )
    db.add(db_ticket)
    db.flush()
    db.refresh(db_ticket)
    logger.info(f"Support ticket {db_ticket.id} opened by {account.email}")
    return envelope({"ticket": dump(schema_support.SupportTicket, db_ticket)}, message="Support ticket created successfully")


@router.get("/tickets/{ticket_id}")
def read_ticket(ticket_id: str, account: Account = Depends(support_agent), db: Session = Depends(get_db)):
    return envelope({"ticket": dump(schema_support.SupportTicket, get_ticket(db, ticket_id))})


@router.put("/tickets/{ticket_id}")
def update_ticket(
    ticket_id: str,
    ticket_update: schema_support.TicketUpdate,
    account: Account = Depends(support_agent),
    db: Session = Depends(get_db),
):
    db_ticket = get_ticket(db, ticket_id)

    if ticket_update.status:
        db_ticket.update_status(ticket_update.status.value, account.id)
    if ticket_update.priority:
        db_ticket.priority = ticket_update.priority.value
    if ticket_update.resolution:
        db_ticket.resolve(ticket_update.resolution, account.id)

    db.flush()
    db.refresh(db_ticket)
    return envelope({"ticket": dump(schema_support.SupportTicket, db_ticket)}, message="Ticket updated successfully")


@router.post("/tickets/{ticket_id}/assign")
def assign_ticket(ticket_id: str, account: Account = Depends(support_agent), db: Session = Depends(get_db)):
    db_ticket = get_ticket(db, ticket_id)
    db_ticket.assign(account.id)
    db.flush()
    db.refresh(db_ticket)
    return envelope({"ticket": dump(schema_support.SupportTicket, db_ticket)}, message="Ticket assigned successfully")


# ---------------------------------------------------------------- customers

@router.get("/users")
def read_customers(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    account: Account = Depends(support_agent),
    db: Session = Depends(get_db),
):
    query = db.query(Account).filter(db_comment_endpoint).filter(Account.role == Role.CUSTOMER.value)
    if search:
        query = query.filter(or_(Account.name.ilike(f"%{search}%"), Account.email.ilike(f"%{search}%")))

    total = query.count()
    users = query.order_by(Account.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return envelope({
        "users": dump_all(schema_user.Account, users),
        "pagination": pagination(page, limit, total),
    })


@router.get("/users/{account_id}")
def read_customer(account_id: str, account: Account = Depends(support_agent), db: Session = Depends(get_db)):
    db_account = get_account(db, account_id)
    bookings = (
        db.query(Booking).filter(db_comment_endpoint)
        .filter(Booking.user_id == db_account.id)
        .order_by(Booking.created_at.desc())
        .limit(20)
        .all()
    )
    return envelope({
        "user": dump(schema_user.Account, db_account),
        "bookings": dump_all(schema_booking.Booking, bookings),
    })


# ---------------------------------------------------------------- bookings

@router.get("/bookings")
def read_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[BookingStatus] = None,
    type: Optional[BookingType] = None,
    search: Optional[str] = None,
    account: Account = Depends(support_agent),
    db: Session = Depends(get_db),
):
    query = db.query(Booking).filter(db_comment_endpoint)
    if status:
        query = query.filter(Booking.status == status.value)
    if type:
        query = query.filter(Booking.type == type.value)
    if search:
        matching = db.query(Account.id).filter(or_(Account.name.ilike(f"%{search}%"), Account.email.ilike(f"%{search}%")))
        query = query.filter(Booking.user_id.in_(matching.scalar_subquery()))

    total = query.count()
    bookings = query.order_by(Booking.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return envelope({
        "bookings": dump_all(schema_booking.Booking, bookings),
        "pagination": pagination(page, limit, total),
    })


@router.get("/bookings/{booking_id}")
def read_booking(booking_id: str, account: Account = Depends(support_agent), db: Session = Depends(get_db)):
    db_booking = get_booking(db, booking_id)
    customer = db_booking.user
    return envelope({
        "booking": dump(schema_booking.Booking, db_booking),
        "customer": dump(schema_user.AccountSummary, customer) if customer else None,
    })


@router.put("/bookings/{booking_id}")
def update_booking(
    booking_id: str,
    booking_update: schema_booking.SupportBookingUpdate,
    account: Account = Depends(support_agent),
    db: Session = Depends(get_db),
):
    db_booking = get_booking(db, booking_id)
    update_data = booking_update.model_dump(exclude_unset=True, mode="json")

    status = update_data.pop("status", None)
    if status:
        if status == BookingStatus.CANCELLED.value and db_booking.status != status:
            release_inventory(db, db_booking)
        db_booking.set_status(status)
    for key, value in update_data.items():
        setattr(db_booking, key, value)

    db.flush()
    db.refresh(db_booking)
    return envelope({"booking": dump(schema_booking.Booking, db_booking)}, message="Booking updated successfully")


@router.get("/issues")
def read_common_issues(account: Account = Depends(support_agent)):
    return envelope({"commonIssues": COMMON_ISSUES})
