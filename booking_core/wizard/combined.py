from booking_core.base import BookingType
from booking_core.wizard.base import BookingWizard


class CombinedBookingWizard(BookingWizard):
    """Hotel stay plus airport parking, submitted as a single booking."""
    booking_type = BookingType.BOTH
    steps = ("dates", "hotel", "room", "parking", "lot", "payment")

    def use_stay_for_parking(self):
        """Parks the car for the length of the hotel stay."""
        self.set_parking_period(self.check_in, self.check_out)
