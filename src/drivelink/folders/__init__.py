"""Folder resolution exports for drivelink."""

from __future__ import annotations

from .resolver import FolderResolver

__all__ = ["FolderResolver"]
