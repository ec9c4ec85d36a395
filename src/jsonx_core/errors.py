"""Error kinds carried by JSON values."""

from __future__ import annotations


class JSONXError(Exception):
    """Base class for every error a JSON handle can carry."""


class ParseError(JSONXError):
    """Malformed JSON text."""


class PathNotFoundError(JSONXError):
    def __init__(self, path: str) -> None:
        super().__init__(f"path not found: {path}")
        self.path = path


class IndexOutOfRangeError(JSONXError):
    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"array index out of range: {index} (length {length})")
        self.index = index
        self.length = length


class TypeMismatchError(JSONXError):
    """The operation needs a different shape than the one it was given."""


class InvalidIndexError(JSONXError):
    def __init__(self, index: int, limit: int) -> None:
        super().__init__(f"invalid array index: {index} (allowed 0..{limit - 1})")
        self.index = index
        self.limit = limit


class SchemaValidationError(JSONXError):
    def __init__(self, message: str, path: str) -> None:
        super().__init__(f"{message} at {path}")
        self.path = path


class EncodeError(JSONXError):
    """The value cannot be written as JSON text (NaN, infinities, foreign objects)."""
