"""Public error exports for drivelink."""

from __future__ import annotations

from .exceptions import (
    AuthError,
    ConflictError,
    DriveLinkError,
    FolderCreationError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotDownloadableError,
    NotFoundError,
    PermissionDeniedError,
    ProtocolViolationError,
    QuotaExceededError,
    RateLimitError,
    RemoteRejectedError,
    SessionExpiredError,
    TransferFailedError,
    UnauthenticatedError,
    map_http_error,
)

__all__ = [
    "DriveLinkError",
    "UnauthenticatedError",
    "AuthError",
    "PermissionDeniedError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "RemoteRejectedError",
    "FolderCreationError",
    "ProtocolViolationError",
    "SessionExpiredError",
    "NotDownloadableError",
    "TransferFailedError",
    "NetworkError",
    "HttpErrorInfo",
    "map_http_error",
]
