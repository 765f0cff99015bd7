import logging
from typing import Any, Dict, Optional

import requests

from booking_core import DEFAULT_API_URL
from booking_core.client.normalizer import normalize_response
from booking_core.errors import ApiError, AuthenticationError
from booking_core.guard import LOGIN_ROUTE
from booking_core.session import ClientSession

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def read_body(response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {"data": body}


class ApiClient:
    """
    Thin JSON client for the DFW Parking REST API.

    `http` is anything with a `requests`-style
    `request(method, url, params=, json=, headers=)` method; a fresh
    `requests.Session` is used when none is given. The bearer token comes
    from `session`, and an HTTP 401 ends that session and sends it back to
    the login route before `AuthenticationError` is raised.
    """

    def __init__(self, base_url: str = DEFAULT_API_URL, session: Optional[ClientSession] = None, http=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else ClientSession()
        self.http = http if http is not None else requests.Session()

    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    def request(self, method: str, path: str, params: Optional[dict] = None, json: Optional[dict] = None) -> Dict[str, Any]:
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        response = self.http.request(
            method,
            f"{self.base_url}{path}",
            params=params or None,
            json=json,
            headers=self.headers(),
        )
        body = read_body(response)
        message = body.get("message") or getattr(response, "reason_phrase", None) or getattr(response, "reason", "")

        if response.status_code == 401:
            logger.info(f"{method} {path} rejected with 401, clearing session")
            self.session.clear()
            self.session.navigate(LOGIN_ROUTE)
            raise AuthenticationError(response.status_code, message, body)

        if not 200 <= response.status_code < 300:
            logger.warning(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message, body)

        return normalize_response(body)

    def get(self, path: str, params: Optional[dict] = None) -> Dict[str, Any]:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Optional[dict] = None) -> Dict[str, Any]:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Optional[dict] = None) -> Dict[str, Any]:
        return self.request("PUT", path, json=json)

    def delete(self, path: str, json: Optional[dict] = None) -> Dict[str, Any]:
        return self.request("DELETE", path, json=json)
