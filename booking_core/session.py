import json
import logging
import os
from typing import Any, Callable, Dict, Optional

import requests

from booking_core import DEFAULT_SESSION_FILE
from booking_core.base import Role
from booking_core.errors import ApiError

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class TokenStore:
    """Persists the bearer token and the signed-in account between runs."""

    def load(self) -> Dict[str, Any]:
        raise NotImplementedError

    def save(self, token: str, account: Optional[Dict[str, Any]]):
        raise NotImplementedError

    def clear(self):
        raise NotImplementedError


class MemoryTokenStore(TokenStore):
    def __init__(self):
        self.data: Dict[str, Any] = {}

    def load(self) -> Dict[str, Any]:
        return dict(self.data)

    def save(self, token: str, account: Optional[Dict[str, Any]]):
        self.data = {"token": token, "user": account}

    def clear(self):
        self.data = {}


class FileTokenStore(TokenStore):
    def __init__(self, path: str = DEFAULT_SESSION_FILE):
        self.path = path

    def load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}

    def save(self, token: str, account: Optional[Dict[str, Any]]):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        # owner-only, the file holds a bearer token
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        os.chmod(self.path, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump({"token": token, "user": account}, f)

    def clear(self):
        if os.path.exists(self.path):
            os.remove(self.path)


class ClientSession:
    """
    The signed-in state of one UI client.

    Holds the bearer token, the account returned by the server and the
    route the client is currently showing. Nothing here is global: every
    API client and panel receives the session it works with.
    """

    def __init__(self, store: Optional[TokenStore] = None, location: str = "/"):
        self.store = store if store is not None else MemoryTokenStore()
        self.location = location
        saved = self.store.load()
        self.token: Optional[str] = saved.get("token")
        self.account: Optional[Dict[str, Any]] = saved.get("user")

    def start(self, token: str, account: Dict[str, Any]):
        self.token = token
        self.account = account
        self.store.save(token, account)
        logger.info(f"Session started for {account.get('email')}")

    def update_account(self, account: Dict[str, Any]):
        self.account = account
        if self.token:
            self.store.save(self.token, account)

    def clear(self):
        self.token = None
        self.account = None
        self.store.clear()

    def navigate(self, path: str):
        self.location = path

    def restore(self, fetch_account: Callable[[], Dict[str, Any]]) -> bool:
        """
        Verifies a stored token with the server.

        `fetch_account` is expected to call `GET /auth/me` and return the
        account; an `ApiError` or a transport error it raises ends the session.

        Returns:
            bool: True when a stored token was confirmed.
        """
        if not self.token:
            self.clear()
            return False
        try:
            account = fetch_account()
        except (ApiError, requests.RequestException) as e:
            logger.info(f"Stored session rejected: {e}")
            self.clear()
            return False
        self.update_account(account)
        return True

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.account is not None

    @property
    def role(self) -> Optional[Role]:
        if not self.account or not self.account.get("role"):
            return None
        return Role(self.account["role"])

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles

    @property
    def is_customer(self) -> bool:
        return self.has_role(Role.CUSTOMER)

    @property
    def is_super_admin(self) -> bool:
        return self.has_role(Role.SUPER_ADMIN)

    @property
    def is_hotel_admin(self) -> bool:
        return self.has_role(Role.HOTEL_ADMIN)

    @property
    def is_parking_admin(self) -> bool:
        return self.has_role(Role.PARKING_ADMIN)

    @property
    def is_support(self) -> bool:
        return self.has_role(Role.SUPPORT)
