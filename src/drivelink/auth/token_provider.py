"""Access-token provider interface for drivelink.

Token acquisition and refresh live outside this library. The client only asks
for a currently valid bearer token before each authenticated call.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable

from drivelink.errors import AuthError


@runtime_checkable
class TokenProvider(Protocol):
    """Anything exposing get_valid_access_token()."""

    def get_valid_access_token(self) -> Optional[str]:
        """Return a bearer token, or None when the drive is not connected."""
        ...


class StaticTokenProvider:
    """Token provider returning a fixed token (scripts, tests)."""

    def __init__(self, token: Optional[str]) -> None:
        if token is not None and (not isinstance(token, str) or not token.strip()):
            raise ValueError("token must be a non-empty string or None")
        self._token = token

    def get_valid_access_token(self) -> Optional[str]:
        return self._token


class CallableTokenProvider:
    """
    Adapt a zero-argument callable into a TokenProvider.

    Notes:
        - An empty string returned by the callable is treated as "not connected".
        - Exceptions raised by the callable become AuthError.
    """

    def __init__(self, func: Callable[[], Optional[str]]) -> None:
        if not callable(func):
            raise TypeError("func must be callable")
        self._func = func

    def get_valid_access_token(self) -> Optional[str]:
        try:
            token = self._func()
        except Exception as exc:
            raise AuthError("Token provider failed", cause=exc) from exc
        if not token:
            return None
        return token
