import pytest

from booking_core.base import Role
from booking_core.guard import ROUTE_TABLE, DashboardView, check_route, dashboard_view


def test_support_cannot_open_hotel_admin_panel():
    decision = check_route("/hotel-admin", Role.SUPPORT)

    assert not decision.allowed
    assert decision.redirect == "/login"


def test_support_opens_support_panel():
    assert check_route("/support", Role.SUPPORT).allowed


@pytest.mark.parametrize("path", ["/", "/login", "/register"])
def test_public_routes_render_without_account(path):
    assert check_route(path, None).allowed


def test_protected_route_without_account_redirects_to_login():
    assert check_route("/dashboard", None).redirect == "/login"


def test_unknown_path_redirects_home():
    assert check_route("/does-not-exist", Role.SUPER_ADMIN).redirect == "/"


def test_booking_subpages_belong_to_customers():
    assert check_route("/booking/hotel", Role.CUSTOMER).allowed
    assert check_route("/booking/combined/", "customer").allowed
    assert check_route("/booking", Role.SUPER_ADMIN).redirect == "/login"


def test_query_string_is_ignored():
    assert check_route("/admin?tab=users", Role.SUPER_ADMIN).allowed


def test_unknown_role_is_sent_to_login():
    assert check_route("/dashboard", "guest").redirect == "/login"


def test_every_role_has_a_dashboard():
    for role in ROUTE_TABLE:
        assert check_route("/dashboard", role).allowed


def test_dashboard_views_are_distinct():
    views = {dashboard_view(role) for role in Role}

    assert len(views) == len(Role)
    assert dashboard_view("parking_admin") == DashboardView.PARKING_ADMIN
