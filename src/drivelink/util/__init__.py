from .paths import ROOT_PATH, is_root, iter_prefixes, normalize_folder_path, split_segments
from .time import (
    normalize_dt,
    now_utc,
    parse_retry_after,
    parse_rfc3339,
    parse_rfc3339_or_none,
)

__all__ = [
    "ROOT_PATH",
    "is_root",
    "iter_prefixes",
    "normalize_folder_path",
    "split_segments",
    "now_utc",
    "parse_rfc3339",
    "parse_rfc3339_or_none",
    "parse_retry_after",
    "normalize_dt",
]
