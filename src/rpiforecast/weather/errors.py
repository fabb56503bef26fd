"""Exception classes for weather API interactions.

This module defines the hierarchy of errors a poll cycle can end with.
Network errors cover transport failures and non-200 responses; decode
errors cover payloads that are not usable as a forecast batch.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from rpiforecast.common.enums import FailureKind

# Human‑readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - check lat/lon or parameters",
    401: "Invalid or missing API key",
    403: "Account blocked / key revoked",
    404: "Coordinates returned no data",
    429: "Rate limit exceeded",
    500: "OpenWeather internal error",
    502: "Bad gateway at OpenWeather",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}


class WeatherAPIError(Exception):
    """Error ending a poll cycle without a forecast update.

    Carries a numeric code (the HTTP status where one exists, 0 otherwise)
    and a human-readable message.
    """

    kind: FailureKind = FailureKind.NETWORK

    def __init__(self, code: int, message: str) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code or 0
            message: Human-readable error message
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message


class NetworkError(WeatherAPIError):
    """Raised when a network issue prevents API communication."""

    def __init__(
        self, message: str, original_error: Exception | None = None, code: int = 0
    ) -> None:
        """Initialize with network error details.

        Args:
            message: Description of the network error
            original_error: The original exception that was caught
            code: HTTP status code when the server answered
        """
        super().__init__(code, message)
        self.original_error = original_error


class HttpStatusError(NetworkError):
    """Raised when the server answers with a status other than 200."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message, code=code)

    @property
    def is_client_error(self) -> bool:
        """True for 400-499 status codes."""
        return 400 <= self.code < 500

    @property
    def is_server_error(self) -> bool:
        """True for 500-599 status codes."""
        return self.code >= 500

    @classmethod
    def from_status(cls, status_code: int, message: str | None = None) -> HttpStatusError:
        """Create the error matching an HTTP status.

        Args:
            status_code: HTTP status code
            message: Message from the response, falls back to HTTP_ERROR_MAP

        Returns:
            Appropriate HttpStatusError subclass
        """
        msg = message or HTTP_ERROR_MAP.get(status_code, f"HTTP {status_code}")
        if status_code in (401, 403):
            return AuthenticationError(status_code, msg)
        if status_code == 404:
            return NotFoundError(status_code, msg)
        if status_code == 429:
            return RateLimitError(status_code, msg)
        if 400 <= status_code < 500:
            return ClientError(status_code, msg)
        if status_code >= 500:
            return ServerError(status_code, msg)
        return cls(status_code, msg)


class AuthenticationError(HttpStatusError):
    """Raised when API authentication fails (invalid API key)."""

    pass


class NotFoundError(HttpStatusError):
    """Raised when a requested resource doesn't exist."""

    pass


class RateLimitError(HttpStatusError):
    """Raised when rate limits are exceeded."""

    pass


class ClientError(HttpStatusError):
    """Raised for other 4xx client errors."""

    pass


class ServerError(HttpStatusError):
    """Raised for 5xx server errors."""

    pass


class DecodeErrorReason(Enum):
    MALFORMED = "malformed"  # body is not valid JSON
    MISSING_LIST = "missing_list"  # no top-level "list" array


class DecodeError(WeatherAPIError):
    """Raised when a response body cannot be decoded into a forecast batch."""

    kind = FailureKind.DECODE

    def __init__(
        self,
        reason: DecodeErrorReason,
        message: str,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize with decoding error details.

        Args:
            reason: Which part of the decode failed
            message: Description of the decoding error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.reason = reason
        self.original_error = original_error
