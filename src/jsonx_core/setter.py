"""Setter resolution for jsonx-core paths."""

from __future__ import annotations

from .errors import InvalidIndexError, TypeMismatchError
from .getter import parse_index, split_path, walk
from .values import JArray, JObject, Null, Value, _NullType, type_name


def _new_container(segment: str) -> Value:
    """Container that *segment* can address: array for indexes, else object."""
    if parse_index(segment) is not None:
        return JArray([])
    return JObject({})


def _check_index(segment: str, max_index: int) -> int:
    idx = parse_index(segment)
    if idx is None:
        raise TypeMismatchError(f"cannot set property '{segment}' on array")
    if idx < 0 or idx >= max_index:
        raise InvalidIndexError(idx, max_index)
    return idx


def _fits_root(root: Value, segment: str) -> bool:
    """Whether *root* can be walked into with its first *segment*."""
    if isinstance(root, JObject):
        return True
    if isinstance(root, JArray):
        return parse_index(segment) is not None
    return False


def set_path(root: Value, path: str, value: Value, max_index: int) -> Value:
    """Assign *value* at *path* inside *root* and return the root.

    The returned root differs from *root* when the path is empty or *root*
    cannot hold the first segment (Null, a scalar, or an array addressed by
    a key); a fresh container is allocated then.  Missing or Null slots
    along the way become containers; arrays grow with Null padding.
    """
    segments = split_path(path)
    if not segments:
        return value

    if not _fits_root(root, segments[0]):
        root = _new_container(segments[0])

    current = root
    last = len(segments) - 1
    for depth, segment in enumerate(segments):
        if isinstance(current, JObject):
            if depth == last:
                current.entries[segment] = value
                break
            child = current.entries.get(segment, Null)
            if isinstance(child, _NullType):
                child = _new_container(segments[depth + 1])
                current.entries[segment] = child

        elif isinstance(current, JArray):
            idx = _check_index(segment, max_index)
            items = current.items
            if len(items) <= idx:
                items.extend([Null] * (idx + 1 - len(items)))
            if depth == last:
                items[idx] = value
                break
            child = items[idx]
            if isinstance(child, _NullType):
                child = _new_container(segments[depth + 1])
                items[idx] = child

        else:
            raise TypeMismatchError(
                f"cannot set property '{segment}' on {type_name(current)}"
            )

        current = child

    return root


def delete_path(root: Value, path: str) -> Value:
    """Remove the object key addressed by *path*; return the root.

    Array elements cannot be deleted by path.  A missing final key is a
    no-op; the empty path resets the root to Null.
    """
    segments = split_path(path)
    if not segments:
        return Null

    parent = walk(root, segments[:-1], path)
    if not isinstance(parent, JObject):
        raise TypeMismatchError(f"cannot delete from {type_name(parent)}")
    parent.entries.pop(segments[-1], None)
    return root
