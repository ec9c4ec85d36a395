"""Getter resolution for jsonx-core paths."""

from __future__ import annotations

import re

from .errors import IndexOutOfRangeError, PathNotFoundError, TypeMismatchError
from .values import JArray, JObject, Value, type_name

_INDEX_RE = re.compile(r"-?[0-9]+")


def split_path(path: str) -> list[str]:
    """Split a dot path into segments.  ``""`` addresses the root."""
    if path == "":
        return []
    return path.split(".")


def parse_index(segment: str) -> int | None:
    """Return the integer an index-looking segment addresses, else None."""
    if _INDEX_RE.fullmatch(segment):
        return int(segment)
    return None


def apply_getter(value: Value, segment: str, path: str = "") -> Value:
    """Resolve a single path segment on *value*.

    - JArray: integer segment, 0 <= i < len
    - JObject: key must exist (integer-looking keys are plain keys)
    - anything else: TypeMismatchError
    """
    if isinstance(value, JArray):
        idx = parse_index(segment)
        if idx is None:
            raise TypeMismatchError(f"cannot access property '{segment}' on array")
        if idx < 0 or idx >= len(value.items):
            raise IndexOutOfRangeError(idx, len(value.items))
        return value.items[idx]

    if isinstance(value, JObject):
        try:
            return value.entries[segment]
        except KeyError:
            raise PathNotFoundError(path or segment) from None

    raise TypeMismatchError(
        f"cannot access property '{segment}' on {type_name(value)}"
    )


def walk(root: Value, segments: list[str], path: str = "") -> Value:
    current = root
    for segment in segments:
        current = apply_getter(current, segment, path)
    return current


def get_path(root: Value, path: str) -> Value:
    """Resolve a full dot path; raises a JSONXError on the first failure."""
    return walk(root, split_path(path), path)
