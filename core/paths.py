# core/paths.py
"""
Canonical path handling.

Convention: a directory path ends with "/", a file path never does, and
the root directory is exactly "/". Every function here is pure and total;
any input, including None, coerces to some path instead of raising.
"""

from typing import Final, List, Optional

ROOT: Final[str] = "/"
SEP: Final[str] = "/"


def normalize_path(value: object) -> str:
    """Single leading slash, no empty segments, no trailing slash."""
    if not value or not isinstance(value, str):
        return ROOT
    parts = [s for s in value.split(SEP) if s]
    if not parts:
        return ROOT
    return SEP + SEP.join(parts)


def is_dir_path(path: str) -> bool:
    return path == ROOT or path.endswith(SEP)


def as_dir_path(value: object) -> str:
    path = normalize_path(value)
    if path == ROOT:
        return ROOT
    return path + SEP


def as_file_path(value: object) -> str:
    return normalize_path(value)


def canonical(value: object) -> str:
    """Keep whichever form the caller's trailing slash implies."""
    if isinstance(value, str) and is_dir_path(value):
        return as_dir_path(value)
    return as_file_path(value)


def segments(value: object) -> List[str]:
    return [s for s in normalize_path(value).split(SEP) if s]


def parent_dir_of(value: object) -> Optional[str]:
    """Directory one level up; None only for root itself."""
    parts = segments(value)
    if not parts:
        return None
    if len(parts) == 1:
        return ROOT
    return SEP + SEP.join(parts[:-1]) + SEP


def base_name(value: object) -> str:
    parts = segments(value)
    return parts[-1] if parts else ROOT
