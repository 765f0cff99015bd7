from enum import Enum


class Role(str, Enum):
    CUSTOMER = "customer"
    HOTEL_ADMIN = "hotel_admin"
    PARKING_ADMIN = "parking_admin"
    SUPER_ADMIN = "super_admin"
    SUPPORT = "support"


class BookingType(str, Enum):
    HOTEL = "hotel"
    PARKING = "parking"
    BOTH = "both"

    @property
    def has_hotel_leg(self) -> bool:
        return self in (BookingType.HOTEL, BookingType.BOTH)

    @property
    def has_parking_leg(self) -> bool:
        return self in (BookingType.PARKING, BookingType.BOTH)


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# bookings in these states can no longer be cancelled
FINAL_BOOKING_STATUSES = (BookingStatus.CANCELLED, BookingStatus.COMPLETED)

# bookings in these states hold a room or a spot
ACTIVE_BOOKING_STATUSES = (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN)

# bookings in these states count towards revenue
BILLABLE_BOOKING_STATUSES = (
    BookingStatus.CONFIRMED,
    BookingStatus.CHECKED_IN,
    BookingStatus.CHECKED_OUT,
    BookingStatus.COMPLETED,
)


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PAYPAL = "paypal"
    STRIPE = "stripe"


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class TicketPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TicketCategory(str, Enum):
    BOOKING = "booking"
    PAYMENT = "payment"
    TECHNICAL = "technical"
    SERVICE = "service"
    OTHER = "other"


class RoomType(str, Enum):
    STANDARD = "Standard"
    DELUXE = "Deluxe"
    SUITE = "Suite"
    EXECUTIVE = "Executive"
    PRESIDENTIAL = "Presidential"


class SpotType(str, Enum):
    STANDARD = "Standard"
    COVERED = "Covered"
    HANDICAP = "Handicap"
    ELECTRIC = "Electric"
    OVERSIZED = "Oversized"
