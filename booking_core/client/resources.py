from typing import Any, Dict, Optional

from booking_core import DEFAULT_API_URL
from booking_core.client.base import ApiClient
from booking_core.session import ClientSession


def unwrap(body: Dict[str, Any]) -> Dict[str, Any]:
    return body["data"] if "data" in body else body


class Resource:
    def __init__(self, client: ApiClient):
        self.client = client


class AuthResource(Resource):
    def register(self, name: str, email: str, password: str, **profile) -> Dict[str, Any]:
        data = unwrap(self.client.post("/auth/register", {"name": name, "email": email, "password": password, **profile}))
        self.client.session.start(data["token"], data["user"])
        return data

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = unwrap(self.client.post("/auth/login", {"email": email, "password": password}))
        self.client.session.start(data["token"], data["user"])
        return data

    def logout(self):
        try:
            self.client.post("/auth/logout")
        finally:
            self.client.session.clear()

    def me(self) -> Dict[str, Any]:
        return unwrap(self.client.get("/auth/me"))["user"]

    def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return self.client.put(
            "/auth/change-password",
            {"currentPassword": current_password, "newPassword": new_password},
        )


class HotelsResource(Resource):
    def list(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/hotels", params))

    def get(self, hotel_id: str) -> Dict[str, Any]:
        return unwrap(self.client.get(f"/hotels/{hotel_id}"))["hotel"]

    def availability(self, hotel_id: str, check_in: str, check_out: str, guests: int = 1) -> Dict[str, Any]:
        params = {"checkIn": check_in, "checkOut": check_out, "guests": guests}
        return unwrap(self.client.get(f"/hotels/{hotel_id}/availability", params))

    def rooms(self, hotel_id: str) -> Dict[str, Any]:
        return unwrap(self.client.get(f"/hotels/{hotel_id}/rooms"))


class ParkingResource(Resource):
    def list(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/parking", params))

    def get(self, lot_id: str) -> Dict[str, Any]:
        return unwrap(self.client.get(f"/parking/{lot_id}"))["parkingLot"]

    def availability(self, lot_id: str, check_in: str, check_out: str, spot_type: Optional[str] = None) -> Dict[str, Any]:
        params = {"checkIn": check_in, "checkOut": check_out, "spotType": spot_type}
        return unwrap(self.client.get(f"/parking/{lot_id}/availability", params))


class BookingsResource(Resource):
    def list(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/bookings", params))

    def get(self, booking_id: str) -> Dict[str, Any]:
        return unwrap(self.client.get(f"/bookings/{booking_id}"))["booking"]

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.post("/bookings", payload))["booking"]

    def update(self, booking_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.put(f"/bookings/{booking_id}", changes))["booking"]

    def cancel(self, booking_id: str, reason: Optional[str] = None) -> Dict[str, Any]:
        return unwrap(self.client.delete(f"/bookings/{booking_id}", {"reason": reason}))["booking"]


class UsersResource(Resource):
    def profile(self) -> Dict[str, Any]:
        return unwrap(self.client.get("/users/profile"))["user"]

    def update_profile(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        account = unwrap(self.client.put("/users/profile", changes))["user"]
        self.client.session.update_account(account)
        return account

    def bookings(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/users/bookings", params))


class AdminResource(Resource):
    def dashboard(self) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/dashboard"))

    def hotel_stats(self) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/hotel-stats"))

    def parking_stats(self) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/parking-stats"))

    # users
    def users(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/users", params))

    def create_user(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.post("/admin/users", data))["user"]

    def update_user(self, account_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.put(f"/admin/users/{account_id}", changes))["user"]

    def delete_user(self, account_id: str) -> Dict[str, Any]:
        return self.client.delete(f"/admin/users/{account_id}")

    # hotels
    def hotels(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/hotels", params))

    def create_hotel(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.post("/admin/hotels", data))["hotel"]

    def update_hotel(self, hotel_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.put(f"/admin/hotels/{hotel_id}", changes))["hotel"]

    def delete_hotel(self, hotel_id: str) -> Dict[str, Any]:
        return self.client.delete(f"/admin/hotels/{hotel_id}")

    def assign_hotel(self, hotel_id: str, admin_id: str) -> Dict[str, Any]:
        return unwrap(self.client.post(f"/admin/assign/hotel/{hotel_id}", {"adminId": admin_id}))

    # parking lots
    def parking_lots(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/parking", params))

    def create_parking_lot(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.post("/admin/parking", data))["parkingLot"]

    def update_parking_lot(self, lot_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.put(f"/admin/parking/{lot_id}", changes))["parkingLot"]

    def delete_parking_lot(self, lot_id: str) -> Dict[str, Any]:
        return self.client.delete(f"/admin/parking/{lot_id}")

    def assign_parking(self, lot_id: str, admin_id: str) -> Dict[str, Any]:
        return unwrap(self.client.post(f"/admin/assign/parking/{lot_id}", {"adminId": admin_id}))

    # bookings
    def bookings(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/bookings", params))

    def update_booking(self, booking_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.put(f"/admin/bookings/{booking_id}", changes))["booking"]

    def cancel_booking(self, booking_id: str) -> Dict[str, Any]:
        return unwrap(self.client.delete(f"/admin/bookings/{booking_id}"))["booking"]

    def update_booking_status(self, booking_id: str, status: str, notes: Optional[str] = None) -> Dict[str, Any]:
        body = {"status": status, "notes": notes}
        return unwrap(self.client.put(f"/admin/bookings/{booking_id}/status", body))["booking"]

    # hotel admin
    def rooms(self) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/hotel/rooms"))

    def create_room(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.post("/admin/hotel/rooms", data))["room"]

    def update_room(self, room_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.put(f"/admin/hotel/rooms/{room_id}", changes))["room"]

    def delete_room(self, room_id: str) -> Dict[str, Any]:
        return self.client.delete(f"/admin/hotel/rooms/{room_id}")

    def hotel_bookings(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/hotel/bookings", params))

    # parking admin
    def spots(self) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/parking/spots"))

    def create_spot(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.post("/admin/parking/spots", data))["spot"]

    def update_spot(self, spot_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.put(f"/admin/parking/spots/{spot_id}", changes))["spot"]

    def delete_spot(self, spot_id: str) -> Dict[str, Any]:
        return self.client.delete(f"/admin/parking/spots/{spot_id}")

    def parking_bookings(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/admin/parking/bookings", params))


class SupportResource(Resource):
    def dashboard(self) -> Dict[str, Any]:
        return unwrap(self.client.get("/support/dashboard"))

    def tickets(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/support/tickets", params))

    def create_ticket(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.post("/support/tickets", data))["ticket"]

    def ticket(self, ticket_id: str) -> Dict[str, Any]:
        return unwrap(self.client.get(f"/support/tickets/{ticket_id}"))["ticket"]

    def update_ticket(self, ticket_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.put(f"/support/tickets/{ticket_id}", changes))["ticket"]

    def assign_ticket(self, ticket_id: str) -> Dict[str, Any]:
        return unwrap(self.client.post(f"/support/tickets/{ticket_id}/assign"))["ticket"]

    def users(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/support/users", params))

    def user(self, account_id: str) -> Dict[str, Any]:
        return unwrap(self.client.get(f"/support/users/{account_id}"))

    def bookings(self, **params) -> Dict[str, Any]:
        return unwrap(self.client.get("/support/bookings", params))

    def booking(self, booking_id: str) -> Dict[str, Any]:
        return unwrap(self.client.get(f"/support/bookings/{booking_id}"))

    def update_booking(self, booking_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return unwrap(self.client.put(f"/support/bookings/{booking_id}", changes))["booking"]

    def issues(self) -> Dict[str, Any]:
        return unwrap(self.client.get("/support/issues"))["commonIssues"]


class HealthResource(Resource):
    def check(self) -> Dict[str, Any]:
        return self.client.get("/health")

    def detailed(self) -> Dict[str, Any]:
        return self.client.get("/health/detailed")


class DfwParkingApi:
    """All resource facades over one `ApiClient` and its session."""

    def __init__(self, base_url: str = DEFAULT_API_URL, session: Optional[ClientSession] = None, http=None):
        self.client = ApiClient(base_url, session=session, http=http)
        self.auth = AuthResource(self.client)
        self.hotels = HotelsResource(self.client)
        self.parking = ParkingResource(self.client)
        self.bookings = BookingsResource(self.client)
        self.users = UsersResource(self.client)
        self.admin = AdminResource(self.client)
        self.support = SupportResource(self.client)
        self.health = HealthResource(self.client)

    @property
    def session(self) -> ClientSession:
        return self.client.session

    def restore_session(self) -> bool:
        return self.session.restore(self.auth.me)
