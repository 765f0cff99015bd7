from booking_core.base import BookingType
from booking_core.wizard.base import BookingWizard


class HotelBookingWizard(BookingWizard):
    booking_type = BookingType.HOTEL
    steps = ("dates", "hotel", "room", "payment")
