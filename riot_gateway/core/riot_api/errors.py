"""Custom error classes for Riot API client and HTTP status classification."""

import json
import math
from typing import Any, Dict, Mapping, Optional, Union

DEFAULT_RETRY_AFTER = 1.0  # seconds, used when a 429 carries no Retry-After


class RiotAPIError(Exception):
    """Base exception for Riot API errors with status code tracking."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
        retry_after: Optional[float] = None,
        app_rate_limit: Optional[str] = None,
        method_rate_limit: Optional[str] = None,
    ) -> None:
        """
        Initialize RiotAPIError.

        Args:
            message: Error message
            status_code: HTTP status code (400, 401, 403, 404, 429, 503, etc.)
            response_data: Structured error body from the API, if any
            retry_after: Seconds to wait before retry (for 429 errors)
            app_rate_limit: App-level rate limit header (for 429 errors)
            method_rate_limit: Method-level rate limit header (for 429 errors)
        """
        super().__init__(message)
        self.status_code: Optional[int] = status_code
        self.response_data: Dict[str, Any] = response_data or {}
        self.retry_after: Optional[float] = retry_after
        self.app_rate_limit: Optional[str] = app_rate_limit
        self.method_rate_limit: Optional[str] = method_rate_limit
        self.message: str = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code == 429 and self.retry_after:
            return f"Rate Limit Error {self.status_code}: {self.message} (Retry after: {self.retry_after}s)"
        if self.status_code:
            return f"Riot API Error {self.status_code}: {self.message}"
        return f"Riot API Error: {self.message}"

    @property
    def retry_after_ms(self) -> Optional[int]:
        """Retry hint in milliseconds."""
        if self.retry_after is None:
            return None
        return int(round(self.retry_after * 1000))

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "retry_after": self.retry_after,
            "app_rate_limit": self.app_rate_limit,
            "method_rate_limit": self.method_rate_limit,
            "response_data": self.response_data,
        }

    # Helper methods for error type checking
    def is_rate_limit(self) -> bool:
        """Check if this is a rate limit error (429)."""
        return self.status_code == 429

    def is_not_found(self) -> bool:
        """Check if this is a not found error (404)."""
        return self.status_code == 404

    def is_auth_error(self) -> bool:
        """Check if this is an authentication/authorization error (401, 403)."""
        return self.status_code in (401, 403)

    def is_server_error(self) -> bool:
        """Check if this is a server error (5xx)."""
        return self.status_code is not None and self.status_code >= 500


class BadRequestError(RiotAPIError):
    """Bad request (400) - invalid parameters."""


class AuthenticationError(RiotAPIError):
    """Authentication error (401) - missing or invalid API key."""


class ForbiddenError(RiotAPIError):
    """Forbidden error (403) - key expired or lacking permissions."""


class NotFoundError(RiotAPIError):
    """Not found error (404) - resource doesn't exist."""


class UnsupportedMediaTypeError(RiotAPIError):
    """Unsupported media type (415)."""


class RateLimitError(RiotAPIError):
    """Rate limit error (429) - can be retried after cooldown."""


class ServerError(RiotAPIError):
    """Internal server error (500)."""


class ServiceUnavailableError(RiotAPIError):
    """Bad gateway or service unavailable (502, 503) - Riot servers down."""


class UnexpectedStatusError(RiotAPIError):
    """Any status code without a dedicated error class."""


class TransportError(RiotAPIError):
    """Request never produced an HTTP response (connection, timeout)."""


class MalformedResponseError(RiotAPIError):
    """Successful response whose body is not valid JSON."""


def _header(headers: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    if not headers:
        return None
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def parse_retry_after(headers: Optional[Mapping[str, str]]) -> float:
    """
    Read the Retry-After header as seconds.

    Returns DEFAULT_RETRY_AFTER when the header is missing or not numeric.
    """
    raw = _header(headers, "Retry-After")
    if raw is None:
        return DEFAULT_RETRY_AFTER
    try:
        seconds = float(raw.strip())
    except (ValueError, AttributeError):
        return DEFAULT_RETRY_AFTER
    if seconds < 0 or not math.isfinite(seconds):
        return DEFAULT_RETRY_AFTER
    return seconds


def _parse_error_body(
    body: Union[bytes, str, Mapping[str, Any], None],
) -> Optional[Dict[str, Any]]:
    """Decode a structured error body, returning None when it is not one."""
    if body is None:
        return None
    if isinstance(body, Mapping):
        return dict(body)
    try:
        decoded = json.loads(body)
    except (ValueError, TypeError):
        return None
    return decoded if isinstance(decoded, dict) else None


def _error_message(status_code: int, data: Optional[Dict[str, Any]], reason: str) -> str:
    """Message from {"status": {"message": ...}} or the generic HTTP text."""
    if data:
        status = data.get("status")
        if isinstance(status, dict) and status.get("message"):
            return str(status["message"])
    return f"HTTP {status_code}: {reason}"


def classify_error(
    status_code: int,
    headers: Optional[Mapping[str, str]] = None,
    body: Union[bytes, str, Mapping[str, Any], None] = None,
    reason: Optional[str] = None,
) -> RiotAPIError:
    """
    Map a non-success HTTP response to exactly one RiotAPIError subclass.

    Never raises; an unparsable body falls back to a generic message.

    Args:
        status_code: HTTP status code
        headers: Response headers
        body: Raw or decoded error body
        reason: HTTP reason phrase

    Returns:
        The classified error, ready to be raised by the caller
    """
    try:
        data = _parse_error_body(body)
    except Exception:  # noqa: BLE001
        data = None
    message = _error_message(status_code, data, reason or "Unknown Error")

    if status_code == 400:
        return BadRequestError(f"Bad Request: {message}", status_code, data)
    if status_code == 401:
        return AuthenticationError("Unauthorized: Invalid API key", status_code, data)
    if status_code == 403:
        return ForbiddenError(
            "Forbidden: API key may be expired or lacking permissions",
            status_code,
            data,
        )
    if status_code == 404:
        return NotFoundError("Not Found: Summoner or data not found", status_code, data)
    if status_code == 415:
        return UnsupportedMediaTypeError("Unsupported Media Type", status_code, data)
    if status_code == 429:
        return RateLimitError(
            "Rate limited by Riot API",
            status_code,
            data,
            retry_after=parse_retry_after(headers),
            app_rate_limit=_header(headers, "X-App-Rate-Limit"),
            method_rate_limit=_header(headers, "X-Method-Rate-Limit"),
        )
    if status_code == 500:
        return ServerError(
            "Internal Server Error: Riot API is experiencing issues", status_code, data
        )
    if status_code == 502:
        return ServiceUnavailableError(
            "Bad Gateway: Riot API is temporarily unavailable", status_code, data
        )
    if status_code == 503:
        return ServiceUnavailableError(
            "Service Unavailable: Riot API is under maintenance", status_code, data
        )
    return UnexpectedStatusError(f"API Error {status_code}: {message}", status_code, data)
