import os

import pytest
import requests

from booking_core.base import Role
from booking_core.errors import ApiError
from booking_core.session import ClientSession, FileTokenStore, MemoryTokenStore


def test_start_and_clear_round_through_the_store():
    store = MemoryTokenStore()
    session = ClientSession(store)

    session.start("token-1", {"id": "a1", "email": "jane@example.com", "role": "customer"})

    assert session.is_authenticated
    assert session.is_customer
    assert store.load()["token"] == "token-1"

    session.clear()

    assert not session.is_authenticated
    assert session.role is None
    assert store.load() == {}


def test_file_store_survives_a_new_session(tmp_path):
    path = str(tmp_path / "nested" / "session.json")
    ClientSession(FileTokenStore(path)).start("token-2", {"id": "a2", "role": "support"})

    restored = ClientSession(FileTokenStore(path))

    assert restored.token == "token-2"
    assert restored.role == Role.SUPPORT


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
def test_file_store_is_owner_only(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{}")
    path.chmod(0o644)

    FileTokenStore(str(path)).save("token-7", {"id": "a7", "role": "customer"})

    assert path.stat().st_mode & 0o777 == 0o600
    assert FileTokenStore(str(path)).load()["token"] == "token-7"


def test_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json")

    assert FileTokenStore(str(path)).load() == {}


def test_restore_keeps_confirmed_session():
    store = MemoryTokenStore()
    store.save("token-3", {"id": "a3", "role": "customer", "name": "Old"})
    session = ClientSession(store)

    assert session.restore(lambda: {"id": "a3", "role": "customer", "name": "New"})
    assert session.account["name"] == "New"
    assert store.load()["user"]["name"] == "New"


def test_restore_clears_rejected_session():
    store = MemoryTokenStore()
    store.save("token-4", {"id": "a4", "role": "customer"})
    session = ClientSession(store)

    def reject():
        raise ApiError(401, "Invalid token")

    assert not session.restore(reject)
    assert session.token is None
    assert store.load() == {}


def test_restore_clears_session_when_server_is_unreachable():
    store = MemoryTokenStore()
    store.save("token-5", {"id": "a5", "role": "customer"})
    session = ClientSession(store)

    def unreachable():
        raise requests.ConnectionError("connection refused")

    assert not session.restore(unreachable)
    assert not session.is_authenticated


def test_restore_propagates_programming_errors():
    store = MemoryTokenStore()
    store.save("token-6", {"id": "a6", "role": "customer"})
    session = ClientSession(store)

    def broken():
        raise KeyError("user")

    with pytest.raises(KeyError):
        session.restore(broken)
    assert session.token == "token-6"


def test_restore_without_token_does_not_call_server():
    session = ClientSession(MemoryTokenStore())
    calls = []

    assert not session.restore(lambda: calls.append(1))
    assert calls == []


def test_role_helpers():
    session = ClientSession()
    session.start("t", {"id": "a5", "role": "parking_admin"})

    assert session.is_parking_admin
    assert session.has_role(Role.PARKING_ADMIN, Role.HOTEL_ADMIN)
    assert not session.is_super_admin
    assert not session.is_hotel_admin
    assert not session.is_support
