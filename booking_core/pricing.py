"""
Booking price arithmetic shared by the wizard and the availability endpoints.

Hotel legs are billed per started night. Wizard parking legs are billed per
started hour up to a day, then per started day. The lot availability quote
works in started days instead and also applies the weekly and monthly tiers.
"""
import math
from datetime import timedelta
from typing import Dict, Iterable, Optional

from booking_core.base import BookingStatus, PaymentMethod
from booking_core.time_utils import as_datetime

ONE_DAY = timedelta(days=1)
ONE_HOUR = timedelta(hours=1)

AMENITY_PRICES: Dict[str, float] = {
    "wifi": 10,
    "breakfast": 15,
    "parking": 20,
    "shuttle": 25,
}


def amenity_price(amenity: str) -> float:
    try:
        return AMENITY_PRICES[amenity]
    except KeyError:
        raise ValueError(f"Unknown amenity: {amenity}")


def count_nights(check_in, check_out) -> int:
    check_in, check_out = as_datetime(check_in), as_datetime(check_out)
    if check_in is None or check_out is None:
        return 0
    return max(0, math.ceil((check_out - check_in) / ONE_DAY))


def hotel_leg_total(room_price: float, amenities: Iterable[str], nights: int) -> float:
    nightly = room_price + sum(amenity_price(amenity) for amenity in amenities)
    return nightly * nights


def parking_hours(start, end) -> int:
    start, end = as_datetime(start), as_datetime(end)
    if start is None or end is None:
        return 0
    return math.ceil(abs(end - start) / ONE_HOUR)


def parking_leg_total(hourly: float, daily: float, hours: int) -> float:
    if hours <= 24:
        return hourly * hours
    return daily * math.ceil(hours / 24)


def quote_parking(pricing: Optional[dict], days: int) -> float:
    """
    Availability quote for a stay of `days` started days: one day costs the
    hourly rate, up to a week is billed daily, up to 30 days per started week
    and beyond that per started 30-day month. A tier missing from the lot
    falls back to the one below it.
    """
    pricing = pricing or {}
    hourly, daily = pricing.get("hourly", 0), pricing.get("daily", 0)
    if days <= 1:
        return hourly
    if days <= 7 or not pricing.get("weekly"):
        return daily * days
    if days <= 30 or not pricing.get("monthly"):
        return pricing["weekly"] * math.ceil(days / 7)
    return pricing["monthly"] * math.ceil(days / 30)


def lot_rates(lot: Optional[dict]):
    pricing = (lot or {}).get("pricing") or {}
    return pricing.get("hourly", 0), pricing.get("daily", 0)


def price_breakdown(total: float) -> Dict[str, float]:
    return {
        "subtotal": total,
        "taxes": 0,
        "fees": 0,
        "discount": 0,
        "total": total,
    }


def payment_for(total: float) -> Dict[str, object]:
    return {
        "method": PaymentMethod.CREDIT_CARD.value,
        "amount": total,
        "currency": "USD",
        "status": "pending",
    }


DEFAULT_BOOKING_STATUS = BookingStatus.CONFIRMED
