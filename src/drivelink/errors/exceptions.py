"""Exception hierarchy and HTTP error mapping for drivelink."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DriveLinkError(Exception):
    """
    Base exception for drivelink.

    Attributes:
        kind: Stable error-kind string reported in result objects.
        details: Optional structured information (e.g., HTTP status, remote body).
        cause: Optional original exception that triggered this error.
    """

    kind: str = "remote_rejected"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause

    @property
    def message(self) -> str:
        return str(self)

    def describe(self) -> str:
        """Return '<kind>: <message>' plus the remote diagnostic when present."""
        text = f"{self.kind}: {self}"
        body = self.details.get("body")
        if isinstance(body, str) and body and body not in text:
            text = f"{text} ({body})"
        return text


class UnauthenticatedError(DriveLinkError):
    """Raised when no access token is available (drive not connected)."""

    kind = "unauthenticated"


class AuthError(DriveLinkError):
    """Raised when the remote rejects the token (HTTP 401) or the provider fails."""

    kind = "unauthenticated"


class PermissionDeniedError(DriveLinkError):
    """Raised when access is denied (HTTP 403)."""


class InvalidArgumentError(DriveLinkError):
    """Raised when arguments are invalid (HTTP 400 or local validation)."""

    kind = "invalid_argument"


class NotFoundError(DriveLinkError):
    """Raised when a drive item or path is not found (HTTP 404)."""

    kind = "not_found"


class ConflictError(DriveLinkError):
    """Raised on a name collision (HTTP 409/412)."""

    kind = "conflict"


class RateLimitError(DriveLinkError):
    """Raised when throttled (HTTP 429). details['retry_after'] holds seconds, if sent."""


class QuotaExceededError(DriveLinkError):
    """Raised when the drive is out of space (HTTP 507 or quota error code)."""


class RemoteRejectedError(DriveLinkError):
    """Raised for unclassified remote errors (5xx, unknown 4xx, malformed bodies)."""


class FolderCreationError(DriveLinkError):
    """Raised when a folder path segment cannot be resolved or created."""


class ProtocolViolationError(DriveLinkError):
    """Raised when a chunked upload runs out of bytes without a completion response."""

    kind = "protocol_violation"


class SessionExpiredError(DriveLinkError):
    """Raised before sending a chunk to an upload session past its expiration."""

    kind = "session_expired"


class NotDownloadableError(DriveLinkError):
    """Raised when an item carries no download URL (e.g., it is a folder)."""

    kind = "not_downloadable"


class TransferFailedError(DriveLinkError):
    """Raised when fetching bytes from a pre-signed download URL fails."""

    kind = "transfer_failed"


class NetworkError(DriveLinkError):
    """Raised when network/timeout issues prevent the request."""

    kind = "network"


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to drivelink exceptions."""

    status_code: int
    code: str | None = None
    message: str | None = None
    body: str | None = None
    retry_after: float | None = None


_QUOTA_CODES: tuple[str, ...] = (
    "quotaLimitReached",
    "insufficientStorage",
)


def _is_quota_code(code: str | None) -> bool:
    if not code:
        return False
    return any(key.lower() == code.lower() for key in _QUOTA_CODES)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> DriveLinkError:
    """
    Map an HTTP error to a drivelink exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionDeniedError, but QuotaExceededError for quota codes
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - 507 -> QuotaExceededError
        - otherwise -> RemoteRejectedError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "code": info.code,
    }
    if info.body:
        details["body"] = info.body
    if info.retry_after is not None:
        details["retry_after"] = info.retry_after

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_code(info.code):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionDeniedError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)
    if info.status_code == 507 or _is_quota_code(info.code):
        return QuotaExceededError(message, details=details, cause=cause)

    return RemoteRejectedError(message, details=details, cause=cause)
