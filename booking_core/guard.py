"""
Route access for the booking UI.

Every role's reachable routes live in `ROUTE_TABLE`; `check_route` is the
single place that decides whether a path renders or where it redirects.
"""
from enum import Enum
from typing import Dict, FrozenSet, Optional, Union

from pydantic import BaseModel

from booking_core.base import Role

LOGIN_ROUTE = "/login"
HOME_ROUTE = "/"

PUBLIC_ROUTES: FrozenSet[str] = frozenset({"/", "/login", "/register"})

ROUTE_TABLE: Dict[Role, FrozenSet[str]] = {
    Role.CUSTOMER: frozenset({"/booking", "/profile", "/dashboard"}),
    Role.SUPER_ADMIN: frozenset({"/admin", "/dashboard"}),
    Role.HOTEL_ADMIN: frozenset({"/hotel-admin", "/dashboard"}),
    Role.PARKING_ADMIN: frozenset({"/parking-admin", "/dashboard"}),
    Role.SUPPORT: frozenset({"/support", "/dashboard"}),
}

# routes with nested pages, e.g. /booking/hotel
PREFIX_ROUTES: FrozenSet[str] = frozenset({"/booking"})

KNOWN_ROUTES: FrozenSet[str] = PUBLIC_ROUTES.union(*ROUTE_TABLE.values())


class DashboardView(str, Enum):
    CUSTOMER = "customer_dashboard"
    SUPER_ADMIN = "admin_dashboard"
    HOTEL_ADMIN = "hotel_admin_dashboard"
    PARKING_ADMIN = "parking_admin_dashboard"
    SUPPORT = "support_dashboard"


DASHBOARD_VIEWS: Dict[Role, DashboardView] = {
    Role.CUSTOMER: DashboardView.CUSTOMER,
    Role.SUPER_ADMIN: DashboardView.SUPER_ADMIN,
    Role.HOTEL_ADMIN: DashboardView.HOTEL_ADMIN,
    Role.PARKING_ADMIN: DashboardView.PARKING_ADMIN,
    Role.SUPPORT: DashboardView.SUPPORT,
}


class RouteDecision(BaseModel):
    allowed: bool
    redirect: Optional[str] = None

    @classmethod
    def render(cls) -> "RouteDecision":
        return cls(allowed=True)

    @classmethod
    def redirect_to(cls, path: str) -> "RouteDecision":
        return cls(allowed=False, redirect=path)


def normalize_path(path: str) -> str:
    path = path.split("?", 1)[0].split("#", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path or HOME_ROUTE


def route_key(path: str) -> Optional[str]:
    """Maps a concrete path onto the route that owns it, or None if unknown."""
    path = normalize_path(path)
    if path in KNOWN_ROUTES:
        return path
    for prefix in PREFIX_ROUTES:
        if path.startswith(prefix + "/"):
            return prefix
    return None


def check_route(path: str, role: Union[Role, str, None]) -> RouteDecision:
    key = route_key(path)
    if key is None:
        return RouteDecision.redirect_to(HOME_ROUTE)
    if key in PUBLIC_ROUTES:
        return RouteDecision.render()
    if role is None:
        return RouteDecision.redirect_to(LOGIN_ROUTE)

    try:
        role = Role(role)
    except ValueError:
        return RouteDecision.redirect_to(LOGIN_ROUTE)

    if key in ROUTE_TABLE[role]:
        return RouteDecision.render()
    return RouteDecision.redirect_to(LOGIN_ROUTE)


def dashboard_view(role: Union[Role, str]) -> DashboardView:
    return DASHBOARD_VIEWS[Role(role)]
