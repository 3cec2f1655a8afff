"""Logical folder path helpers."""

from __future__ import annotations

ROOT_PATH = "/"


def normalize_folder_path(path: str | None) -> str:
    """
    Normalize a slash-delimited folder path.

    Empty segments are dropped, so "Root//Clients/" becomes "/Root/Clients".
    None, "" and "/" all normalize to the root "/".
    """
    if path is None:
        return ROOT_PATH
    if not isinstance(path, str):
        raise TypeError("path must be a string")
    segments = split_segments(path)
    if not segments:
        return ROOT_PATH
    return "/" + "/".join(segments)


def split_segments(path: str) -> list[str]:
    return [part.strip() for part in path.split("/") if part.strip()]


def is_root(path: str | None) -> bool:
    return normalize_folder_path(path) == ROOT_PATH


def iter_prefixes(path: str) -> list[tuple[str, str]]:
    """
    Return (segment, accumulated_path) pairs walking left to right.

    "/A/B" -> [("A", "/A"), ("B", "/A/B")]
    """
    prefixes: list[tuple[str, str]] = []
    current = ""
    for segment in split_segments(path):
        current = f"{current}/{segment}"
        prefixes.append((segment, current))
    return prefixes
