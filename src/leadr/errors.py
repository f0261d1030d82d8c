"""
LEADR error types.

API failures travel as data (``LeadrError`` inside a ``LeadrResult``); the
exceptions below are for the few conditions that cannot be returned that way.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

NETWORK_ERROR = "network_error"
API_ERROR = "api_error"
VALIDATION_ERROR = "validation_error"
PARSE_ERROR = "parse_error"
NOT_AUTHENTICATED = "not_authenticated"
NO_REFRESH_TOKEN = "no_refresh_token"
INVALID_ARGUMENT = "invalid_argument"
NOT_FOUND = "not_found"
NO_NEXT_PAGE = "no_next_page"
NO_PREV_PAGE = "no_prev_page"
FETCH_UNAVAILABLE = "fetch_unavailable"
UNKNOWN = "unknown"


class LeadrError(BaseModel):
    """Error triple: HTTP status (0 for local/network failures), machine code, message."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    code: str
    message: str

    @classmethod
    def from_body(cls, status_code: int, body: Optional[str]) -> "LeadrError":
        """Decode a server error body: ``{"error": "..."}`` or ``{"error": [{"msg": "..."}]}``."""
        if not body:
            return cls(status_code=status_code, code=UNKNOWN, message="Unknown error")
        try:
            parsed = json.loads(body)
        except ValueError:
            return cls(status_code=status_code, code=UNKNOWN, message=body)
        if not isinstance(parsed, dict):
            return cls(status_code=status_code, code=UNKNOWN, message=body)

        error = parsed.get("error")
        if isinstance(error, str):
            return cls(status_code=status_code, code=API_ERROR, message=error)
        if isinstance(error, list) and error and isinstance(error[0], dict):
            msg = error[0].get("msg")
            return cls(
                status_code=status_code,
                code=VALIDATION_ERROR,
                message=msg if isinstance(msg, str) else "Validation error",
            )
        return cls(status_code=status_code, code=UNKNOWN, message=body)

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class LeadrException(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class LeadrAPIError(LeadrException):
    """Raised by ``LeadrResult.unwrap()`` on a failed result."""

    def __init__(self, error: LeadrError):
        super().__init__(error.code, error.message, {"status_code": error.status_code})
        self.error = error
        self.status_code = error.status_code


class StorageError(LeadrException):
    def __init__(self, message: str):
        super().__init__("storage_error", message)


class ConfigurationError(LeadrException):
    def __init__(self, message: str):
        super().__init__("configuration_error", message)
