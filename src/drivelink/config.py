"""Runtime configuration for drivelink.

Settings come from constructor arguments or, through ``DriveConfig.from_env``,
from ``DRIVELINK_*`` environment variables. Nothing is read from or written to
disk.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from drivelink.errors import InvalidArgumentError

DEFAULT_GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_DRIVE_PATH = "/me/drive"

# Upload session chunks must be a multiple of 320 KiB.
CHUNK_GRANULARITY = 320 * 1024
MAX_CHUNK_SIZE = 60 * 1024 * 1024

DEFAULT_SMALL_FILE_LIMIT = 4 * 1024 * 1024
DEFAULT_CHUNK_SIZE = 10 * CHUNK_GRANULARITY
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_CHUNK_TIMEOUT = 120.0
DEFAULT_ROOT_FOLDER_NAME = "Portail Cabinet"

ENV_PREFIX = "DRIVELINK_"


@dataclass(frozen=True)
class DriveConfig:
    """Connection and transfer settings."""

    graph_base_url: str = DEFAULT_GRAPH_BASE_URL
    drive_path: str = DEFAULT_DRIVE_PATH
    small_file_limit: int = DEFAULT_SMALL_FILE_LIMIT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    chunk_timeout: float = DEFAULT_CHUNK_TIMEOUT
    root_folder_name: str = DEFAULT_ROOT_FOLDER_NAME

    def __post_init__(self) -> None:
        if not isinstance(self.graph_base_url, str) or not self.graph_base_url.strip():
            raise InvalidArgumentError("graph_base_url must be a non-empty string")
        if not isinstance(self.drive_path, str) or not self.drive_path.startswith("/"):
            raise InvalidArgumentError("drive_path must start with '/'")
        if self.small_file_limit <= 0:
            raise InvalidArgumentError("small_file_limit must be positive")
        if self.chunk_size <= 0 or self.chunk_size % CHUNK_GRANULARITY != 0:
            raise InvalidArgumentError(
                "chunk_size must be a positive multiple of 320 KiB",
                details={"chunk_size": self.chunk_size, "granularity": CHUNK_GRANULARITY},
            )
        if self.chunk_size > MAX_CHUNK_SIZE:
            raise InvalidArgumentError(
                "chunk_size exceeds the per-request maximum",
                details={"chunk_size": self.chunk_size, "maximum": MAX_CHUNK_SIZE},
            )
        if self.request_timeout <= 0 or self.chunk_timeout <= 0:
            raise InvalidArgumentError("timeouts must be positive")
        if not isinstance(self.root_folder_name, str) or not self.root_folder_name.strip():
            raise InvalidArgumentError("root_folder_name must be a non-empty string")

    @property
    def drive_url(self) -> str:
        """Base URL of the drive resource, e.g. https://graph.microsoft.com/v1.0/me/drive."""
        return self.graph_base_url.rstrip("/") + self.drive_path.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DriveConfig":
        """
        Build a config from DRIVELINK_* variables.

        Unset variables keep their defaults.

        Raises:
            InvalidArgumentError: if a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        for field_name in ("graph_base_url", "drive_path", "root_folder_name"):
            value = env.get(ENV_PREFIX + field_name.upper())
            if value:
                kwargs[field_name] = value.strip()

        for field_name in ("small_file_limit", "chunk_size"):
            value = env.get(ENV_PREFIX + field_name.upper())
            if value:
                kwargs[field_name] = _parse_number(field_name, value, int)

        for field_name in ("request_timeout", "chunk_timeout"):
            value = env.get(ENV_PREFIX + field_name.upper())
            if value:
                kwargs[field_name] = _parse_number(field_name, value, float)

        return cls(**kwargs)  # type: ignore[arg-type]


def _parse_number(name: str, value: str, kind: type) -> object:
    try:
        return kind(value.strip())
    except ValueError as exc:
        raise InvalidArgumentError(
            f"{ENV_PREFIX}{name.upper()} is not a valid number",
            details={"value": value},
            cause=exc,
        ) from exc
