"""Authenticated HTTP calls against the Graph drive API (internal use only)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional

import httpx

from drivelink.auth import TokenProvider
from drivelink.config import DriveConfig
from drivelink.errors import (
    AuthError,
    DriveLinkError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    RemoteRejectedError,
    UnauthenticatedError,
    map_http_error,
)
from drivelink.util.time import parse_retry_after

logger = logging.getLogger(__name__)

Outcome = Literal["success", "accepted", "conflict", "failure"]


def classify_status(status_code: int) -> Outcome:
    if status_code == 202:
        return "accepted"
    if 200 <= status_code <= 299:
        return "success"
    if status_code == 409:
        return "conflict"
    return "failure"


@dataclass(slots=True)
class GraphResponse:
    """A classified HTTP response."""

    status_code: int
    outcome: Outcome
    data: Any = None
    text: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""

    @property
    def ok(self) -> bool:
        return self.outcome in ("success", "accepted")

    def error(self, context: str) -> DriveLinkError:
        """Build the mapped exception for a non-success response."""
        info = _response_to_error_info(self, context)
        return map_http_error(info)

    def raise_for_failure(self, context: str) -> "GraphResponse":
        if not self.ok:
            raise self.error(context)
        return self

    def json_object(self, context: str) -> dict[str, Any]:
        """Return the body as a JSON object, or raise RemoteRejectedError."""
        if not isinstance(self.data, dict):
            raise RemoteRejectedError(
                f"{context}: expected a JSON object in the response",
                details={"status_code": self.status_code, "body": self.text[:500]},
            )
        return self.data


class GraphTransport:
    """
    One HTTP call at a time, classified.

    Notes:
        - No automatic retry. Retry-After is surfaced in error details.
        - Calls with authenticated=False (pre-signed URLs) carry no bearer token.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        config: Optional[DriveConfig] = None,
        *,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._token_provider = token_provider
        self._config = config or DriveConfig()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=self._config.request_timeout)

    @property
    def config(self) -> DriveConfig:
        return self._config

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def access_token(self) -> Optional[str]:
        try:
            return self._token_provider.get_valid_access_token()
        except DriveLinkError:
            raise
        except Exception as exc:
            raise AuthError("Token provider failed", cause=exc) from exc

    def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Optional[Any] = None,
        content: Optional[bytes] = None,
        content_type: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        authenticated: bool = True,
    ) -> GraphResponse:
        """
        Perform a single call and classify the response.

        Args:
            url: Path relative to the drive URL (e.g. "/items/X"), or an
                absolute URL.

        Raises:
            UnauthenticatedError: no token (no network call is made).
            NetworkError: transport failure or timeout.
            InvalidArgumentError: the request cannot be built (non-ASCII
                header value, malformed URL).
        """
        send_headers: dict[str, str] = {}
        if authenticated:
            token = self.access_token()
            if not token:
                raise UnauthenticatedError(
                    "Not authenticated", details={"method": method, "url": _redact(url)}
                )
            send_headers["Authorization"] = f"Bearer {token}"

        body: Optional[bytes] = None
        if json_body is not None:
            body = json.dumps(json_body).encode("utf-8")
            send_headers["Content-Type"] = "application/json"
        elif content is not None:
            body = content
            send_headers["Content-Type"] = content_type or "application/octet-stream"
            send_headers["Content-Length"] = str(len(content))
        if headers:
            send_headers.update(headers)

        full_url = self._absolute(url)
        try:
            response = self._client.request(
                method,
                full_url,
                content=body,
                params=params,
                headers=send_headers,
                timeout=timeout if timeout is not None else self._config.request_timeout,
            )
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %s", method, _redact(full_url), exc)
            raise NetworkError(
                f"Network error during {method} request",
                details={"url": _redact(full_url)},
                cause=exc,
            ) from exc
        except (httpx.InvalidURL, ValueError) as exc:
            # Header values must be ASCII; URLs must parse.
            raise InvalidArgumentError(
                f"Invalid {method} request",
                details={"url": _redact(full_url), "reason": str(exc)},
                cause=exc,
            ) from exc

        result = _classify(response)
        logger.debug("%s %s -> %s", method, _redact(full_url), response.status_code)
        return result

    def _absolute(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        return self._config.drive_url + url


def _classify(response: httpx.Response) -> GraphResponse:
    raw = response.content
    text = ""
    data: Any = None
    if raw:
        content_type = response.headers.get("Content-Type", "")
        if "json" in content_type:
            text = response.text
            try:
                data = json.loads(text)
            except ValueError:
                data = None
        elif content_type.startswith("text/") or not response.is_success:
            # Binary success bodies (downloads) are kept in content only.
            text = response.text

    return GraphResponse(
        status_code=response.status_code,
        outcome=classify_status(response.status_code),
        data=data,
        text=text,
        headers=response.headers,
        content=raw,
    )


def _response_to_error_info(resp: GraphResponse, context: str) -> HttpErrorInfo:
    code = None
    message = None
    if isinstance(resp.data, dict):
        err = resp.data.get("error")
        if isinstance(err, dict):
            code = err.get("code") if isinstance(err.get("code"), str) else None
            message = err.get("message") if isinstance(err.get("message"), str) else None
    message = f"{context}: {message or f'HTTP error {resp.status_code}'}"

    retry_after = None
    if resp.status_code in (429, 503):
        retry_after = parse_retry_after(resp.headers.get("Retry-After"))

    return HttpErrorInfo(
        status_code=resp.status_code,
        code=code,
        message=message,
        body=resp.text[:2000] if resp.text else None,
        retry_after=retry_after,
    )


def _redact(url: str) -> str:
    return url.split("?", 1)[0]
