from booking_core.base import BookingType
from booking_core.wizard.base import BookingWizard


class ParkingBookingWizard(BookingWizard):
    booking_type = BookingType.PARKING
    steps = ("duration", "lot", "vehicle", "payment")
