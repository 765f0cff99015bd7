import logging
from datetime import datetime
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from booking_core.base import BookingType, SpotType
from booking_core.pricing import (
    AMENITY_PRICES,
    DEFAULT_BOOKING_STATUS,
    count_nights,
    hotel_leg_total,
    lot_rates,
    parking_hours,
    parking_leg_total,
    payment_for,
    price_breakdown,
)
from booking_core.time_utils import as_datetime, datetime_to_str

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class WizardStepError(Exception):
    pass


def is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


class BookingWizard(BaseModel):
    """
    Multi-step booking flow shared by the hotel, parking and combined variants.

    A variant declares its `steps`; each step name maps to a predicate that
    must hold before the wizard advances past it. Selections are plain
    dictionaries as returned by the API client (identifiers under `id`).
    The wizard never talks to the server itself: `confirm()` hands the
    assembled booking payload to the injected `submit` callable.
    """
    booking_type: ClassVar[BookingType]
    steps: ClassVar[Tuple[str, ...]]

    submit: Optional[Callable[[Dict[str, Any]], Any]] = None
    step_index: int = 0

    # hotel leg
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    guests: Optional[int] = 1
    hotel: Optional[Dict[str, Any]] = None
    room: Optional[Dict[str, Any]] = None
    amenities: List[str] = Field(default_factory=list)

    # parking leg
    parking_start: Optional[datetime] = None
    parking_end: Optional[datetime] = None
    lot: Optional[Dict[str, Any]] = None
    vehicle: Dict[str, Optional[str]] = Field(default_factory=dict)
    spot_type: SpotType = SpotType.STANDARD

    special_requests: Optional[str] = None

    class Config:
        arbitrary_types_allowed = True

    # ------------------------------------------------------------ navigation

    @property
    def current_step(self) -> str:
        return self.steps[self.step_index]

    @property
    def is_last_step(self) -> bool:
        return self.step_index == len(self.steps) - 1

    def step_valid(self, step: str) -> bool:
        predicate = getattr(self, f"{step}_ready", None)
        if predicate is None:
            raise WizardStepError(f"Unknown wizard step: {step}")
        return bool(predicate())

    @property
    def can_proceed(self) -> bool:
        return self.step_valid(self.current_step)

    @property
    def can_confirm(self) -> bool:
        return self.is_last_step and all(self.step_valid(step) for step in self.steps)

    def next(self) -> str:
        if self.is_last_step:
            raise WizardStepError("Already on the last step")
        if not self.can_proceed:
            raise WizardStepError(f"Step '{self.current_step}' is incomplete")
        self.step_index += 1
        return self.current_step

    def previous(self) -> str:
        if self.step_index == 0:
            raise WizardStepError("Already on the first step")
        self.step_index -= 1
        return self.current_step

    def reset(self):
        fresh = type(self)(submit=self.submit)
        for name in type(self).model_fields:
            setattr(self, name, getattr(fresh, name))

    # ------------------------------------------------------------ predicates

    def dates_ready(self) -> bool:
        return (
            self.check_in is not None
            and self.check_out is not None
            and self.check_out > self.check_in
            and bool(self.guests)
        )

    def hotel_ready(self) -> bool:
        return self.hotel is not None

    def room_ready(self) -> bool:
        return self.room is not None

    def duration_ready(self) -> bool:
        return (
            self.parking_start is not None
            and self.parking_end is not None
            and self.parking_end > self.parking_start
        )

    def lot_ready(self) -> bool:
        return self.lot is not None

    def vehicle_ready(self) -> bool:
        return not is_blank(self.vehicle.get("licensePlate"))

    def parking_ready(self) -> bool:
        return self.duration_ready() and self.vehicle_ready()

    def payment_ready(self) -> bool:
        return True

    # ------------------------------------------------------------ selections

    def set_dates(self, check_in, check_out, guests: Optional[int] = None):
        self.check_in = as_datetime(check_in)
        self.check_out = as_datetime(check_out)
        if guests is not None:
            self.guests = guests

    def select_hotel(self, hotel: Dict[str, Any]):
        # rooms belong to a hotel, so a new hotel drops the previous room
        if self.hotel is None or self.hotel.get("id") != hotel.get("id"):
            self.room = None
        self.hotel = hotel

    def select_room(self, room: Dict[str, Any]):
        if self.hotel is None:
            raise WizardStepError("Select a hotel before choosing a room")
        self.room = room

    def toggle_amenity(self, amenity: str) -> bool:
        if amenity not in AMENITY_PRICES:
            raise ValueError(f"Unknown amenity: {amenity}")
        if amenity in self.amenities:
            self.amenities.remove(amenity)
            return False
        self.amenities.append(amenity)
        return True

    def set_parking_period(self, start, end):
        self.parking_start = as_datetime(start)
        self.parking_end = as_datetime(end)

    def select_lot(self, lot: Dict[str, Any], spot_type: Optional[SpotType] = None):
        self.lot = lot
        if spot_type is not None:
            self.spot_type = SpotType(spot_type)

    def set_vehicle(self, license_plate: str, **details: Optional[str]):
        self.vehicle = {"licensePlate": license_plate, **details}

    # ------------------------------------------------------------ pricing

    @property
    def nights(self) -> int:
        return count_nights(self.check_in, self.check_out)

    @property
    def hours(self) -> int:
        return parking_hours(self.parking_start, self.parking_end)

    @property
    def hotel_total(self) -> float:
        if self.room is None:
            return 0
        return hotel_leg_total(self.room.get("price", 0), self.amenities, self.nights)

    @property
    def parking_total(self) -> float:
        if self.lot is None or self.parking_start is None or self.parking_end is None:
            return 0
        hourly, daily = lot_rates(self.lot)
        return parking_leg_total(hourly, daily, self.hours)

    @property
    def total(self) -> float:
        total = 0
        if self.booking_type.has_hotel_leg:
            total += self.hotel_total
        if self.booking_type.has_parking_leg:
            total += self.parking_total
        return total

    # ------------------------------------------------------------ payload

    def hotel_leg(self) -> Dict[str, Any]:
        return {
            "hotelId": self.hotel["id"],
            "roomId": self.room["id"],
            "checkIn": datetime_to_str(self.check_in),
            "checkOut": datetime_to_str(self.check_out),
            "guests": self.guests,
            "roomType": self.room.get("type"),
            "amenities": list(self.amenities),
            "roomPrice": self.room.get("price"),
        }

    def parking_leg(self) -> Dict[str, Any]:
        hourly, _ = lot_rates(self.lot)
        return {
            "parkingLotId": self.lot["id"],
            "checkIn": datetime_to_str(self.parking_start),
            "checkOut": datetime_to_str(self.parking_end),
            "vehicleInfo": {key: value for key, value in self.vehicle.items() if value is not None},
            "spotType": self.spot_type.value,
            "spotPrice": hourly,
        }

    def build_payload(self) -> Dict[str, Any]:
        total = self.total
        payload: Dict[str, Any] = {
            "type": self.booking_type.value,
            "pricing": price_breakdown(total),
            "payment": payment_for(total),
            "status": DEFAULT_BOOKING_STATUS.value,
        }
        if self.booking_type.has_hotel_leg:
            payload["hotel"] = self.hotel_leg()
        if self.booking_type.has_parking_leg:
            payload["parking"] = self.parking_leg()
        if not is_blank(self.special_requests):
            payload["specialRequests"] = self.special_requests
        return payload

    def confirm(self):
        """
        Submits the booking and starts over on success.

        Raises:
            WizardStepError: when the wizard is not on its last step with
                every step complete, or when no submit callable was given.

        Exceptions raised by `submit` propagate and the wizard keeps its
        state so the user can retry.
        """
        if not self.can_confirm:
            raise WizardStepError("Booking is incomplete")
        if self.submit is None:
            raise WizardStepError("No submit handler configured")

        payload = self.build_payload()
        result = self.submit(payload)
        logger.info(f"{self.booking_type.value} booking submitted, total {payload['pricing']['total']}")
        self.reset()
        return result
