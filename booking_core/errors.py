from typing import Any, Dict, Optional


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, payload: Optional[Dict[str, Any]] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}

    @property
    def errors(self):
        return self.payload.get("errors", [])


class AuthenticationError(ApiError):
    pass
