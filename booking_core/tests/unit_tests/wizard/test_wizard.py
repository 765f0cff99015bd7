from datetime import datetime

import pytest

from booking_core.wizard.base import WizardStepError
from booking_core.wizard.combined import CombinedBookingWizard
from booking_core.wizard.hotel import HotelBookingWizard
from booking_core.wizard.parking import ParkingBookingWizard


def advance_to_end(wizard):
    while not wizard.is_last_step:
        wizard.next()


@pytest.fixture
def hotel_wizard(hotel, room, check_in, check_out):
    wizard = HotelBookingWizard()
    wizard.set_dates(check_in, check_out, guests=2)
    wizard.select_hotel(hotel)
    wizard.select_room(room)
    wizard.toggle_amenity("wifi")
    wizard.toggle_amenity("breakfast")
    return wizard


@pytest.fixture
def parking_wizard(lot):
    wizard = ParkingBookingWizard()
    wizard.set_parking_period(datetime(2025, 3, 1, 8), datetime(2025, 3, 1, 18))
    wizard.select_lot(lot)
    wizard.set_vehicle("ABC-1234", make="Toyota", model="Camry")
    return wizard


def test_hotel_wizard_total(hotel_wizard):
    assert hotel_wizard.nights == 3
    assert hotel_wizard.total == 525


def test_parking_wizard_total(parking_wizard):
    assert parking_wizard.hours == 10
    assert parking_wizard.total == 80


def test_next_refuses_incomplete_step():
    wizard = HotelBookingWizard()

    assert wizard.current_step == "dates"
    assert not wizard.can_proceed
    with pytest.raises(WizardStepError):
        wizard.next()
    assert wizard.step_index == 0


def test_check_out_must_follow_check_in(check_in):
    wizard = HotelBookingWizard()
    wizard.set_dates(check_in, check_in)

    assert not wizard.can_proceed


def test_previous_from_first_step_raises():
    with pytest.raises(WizardStepError):
        HotelBookingWizard().previous()


def test_walk_forward_and_back(hotel_wizard):
    assert hotel_wizard.next() == "hotel"
    assert hotel_wizard.next() == "room"
    assert hotel_wizard.previous() == "hotel"
    assert hotel_wizard.next() == "room"
    assert hotel_wizard.next() == "payment"
    with pytest.raises(WizardStepError):
        hotel_wizard.next()


def test_selecting_another_hotel_clears_room(hotel_wizard, hotel):
    hotel_wizard.select_hotel(hotel)
    assert hotel_wizard.room is not None

    hotel_wizard.select_hotel({"id": "hotel-2", "name": "Hyatt Regency", "rooms": []})
    assert hotel_wizard.room is None
    assert hotel_wizard.total == 0


def test_room_needs_a_hotel(room):
    with pytest.raises(WizardStepError):
        HotelBookingWizard().select_room(room)


def test_toggle_amenity(hotel_wizard):
    assert not hotel_wizard.toggle_amenity("wifi")
    assert hotel_wizard.amenities == ["breakfast"]
    with pytest.raises(ValueError):
        hotel_wizard.toggle_amenity("spa")


def test_vehicle_step_requires_plate(lot):
    wizard = ParkingBookingWizard()
    wizard.set_parking_period("2025-03-01T08:00:00", "2025-03-01T10:00:00")
    wizard.next()
    wizard.select_lot(lot)
    wizard.next()
    wizard.set_vehicle("   ")

    assert wizard.current_step == "vehicle"
    assert not wizard.can_proceed


def test_combined_without_lot_cannot_confirm(hotel, room, check_in, check_out):
    wizard = CombinedBookingWizard(submit=lambda payload: payload)
    wizard.set_dates(check_in, check_out)
    wizard.select_hotel(hotel)
    wizard.select_room(room)
    wizard.use_stay_for_parking()
    wizard.set_vehicle("XYZ-987")
    wizard.step_index = len(wizard.steps) - 1

    assert not wizard.can_confirm
    with pytest.raises(WizardStepError):
        wizard.confirm()


def test_combined_total_adds_both_legs(hotel, room, lot, check_in, check_out):
    wizard = CombinedBookingWizard()
    wizard.set_dates(check_in, check_out)
    wizard.select_hotel(hotel)
    wizard.select_room(room)
    wizard.use_stay_for_parking()
    wizard.select_lot(lot)

    # 3 nights at 150, parking 68 hours billed as 3 days at 25
    assert wizard.total == 450 + 75


def test_confirm_submits_payload_and_resets(hotel_wizard):
    submitted = []
    hotel_wizard.submit = submitted.append
    advance_to_end(hotel_wizard)

    hotel_wizard.confirm()

    payload = submitted[0]
    assert payload["type"] == "hotel"
    assert payload["status"] == "confirmed"
    assert payload["pricing"]["total"] == 525
    assert payload["payment"]["amount"] == 525
    assert payload["hotel"]["hotelId"] == "hotel-1"
    assert payload["hotel"]["roomId"] == "room-1"
    assert payload["hotel"]["amenities"] == ["wifi", "breakfast"]
    assert "parking" not in payload

    assert hotel_wizard.step_index == 0
    assert hotel_wizard.hotel is None
    assert hotel_wizard.amenities == []
    assert hotel_wizard.submit == submitted.append


def test_failed_submit_keeps_state(parking_wizard):
    def fail(payload):
        raise RuntimeError("Parking spot is not available")

    parking_wizard.submit = fail
    advance_to_end(parking_wizard)

    with pytest.raises(RuntimeError):
        parking_wizard.confirm()

    assert parking_wizard.current_step == "payment"
    assert parking_wizard.lot["id"] == "lot-1"
    assert parking_wizard.vehicle["licensePlate"] == "ABC-1234"


def test_parking_payload(parking_wizard):
    payload = parking_wizard.build_payload()

    assert payload["type"] == "parking"
    assert payload["parking"]["parkingLotId"] == "lot-1"
    assert payload["parking"]["checkIn"] == "2025-03-01T08:00:00"
    assert payload["parking"]["vehicleInfo"] == {"licensePlate": "ABC-1234", "make": "Toyota", "model": "Camry"}
    assert payload["parking"]["spotType"] == "Standard"
    assert "hotel" not in payload


def test_reset_clears_selections(hotel_wizard):
    hotel_wizard.next()
    hotel_wizard.reset()

    assert hotel_wizard.step_index == 0
    assert hotel_wizard.check_in is None
    assert hotel_wizard.room is None
