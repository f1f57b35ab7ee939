"""Path segmentation helpers."""
from __future__ import annotations

from collections.abc import Sequence


def split_path(path: str, separator: str = "/") -> list[str]:
    """Split ``path`` into segments.

    Every separator is significant: ``""`` yields ``[""]`` and doubled,
    leading or trailing separators yield empty-string segments.

    Examples:
        >>> split_path("users/42/orders")
        ['users', '42', 'orders']
        >>> split_path("/users//42/")
        ['', 'users', '', '42', '']
        >>> split_path("")
        ['']
    """
    if not isinstance(path, str):
        raise TypeError(f"path must be a str, got {type(path).__name__}")
    return path.split(separator)


def join_path(segments: Sequence[str], separator: str = "/") -> str:
    return separator.join(segments)
