"""Public auth exports for drivelink."""

from __future__ import annotations

from .token_provider import CallableTokenProvider, StaticTokenProvider, TokenProvider

__all__ = ["TokenProvider", "StaticTokenProvider", "CallableTokenProvider"]
