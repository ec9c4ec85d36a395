"""JSON — the dynamic value handle with a sticky error slot."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Callable, Iterable

from .codec import decode, encode, struct_to_value
from .config import get_settings
from .errors import IndexOutOfRangeError, JSONXError, TypeMismatchError
from .getter import get_path
from .setter import delete_path, set_path
from .values import (
    JArray,
    JBool,
    JNumber,
    JObject,
    JString,
    Null,
    Value,
    _NullType,
    clone_value,
    format_scalar,
    from_native,
    to_native,
)

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class JSON:
    """A JSON value plus an optional error, built for long fluent chains.

    Once a handle carries an error every chained call returns a handle with
    that error, so a chain is checked once at the end::

        doc = new_object().set("user.name", "Li").set("user.age", 30)
        doc.get("user.name").as_string()   # → "Li"
        doc.get("user.email").error        # → PathNotFoundError

    Structural operations (get, set, index, append, merge ...) report
    failures through the error slot and never raise.  The ``as_*``
    accessors are lossy: they return a zero value on errors and on shape
    mismatches alike.  Only the ``must_*`` helpers raise.

    ``set``/``delete``/``append``/``prepend``/``remove`` mutate the tree in
    place.  A set that needs a new root (empty path, Null root) replaces
    this handle's root; always continue with the returned handle.

    Not thread-safe: guard a shared handle with a lock.
    """

    __slots__ = ("_value", "_error")

    def __init__(self, data: Any = None) -> None:
        self._error: JSONXError | None = None
        try:
            self._value: Value = from_native(data)
        except JSONXError as exc:
            self._value = Null
            self._error = exc

    @classmethod
    def _wrap(cls, value: Value, error: JSONXError | None = None) -> JSON:
        handle = cls.__new__(cls)
        handle._value = value
        handle._error = error
        return handle

    def _fail(self, error: JSONXError, value: Value = Null) -> JSON:
        logger.debug("jsonx: %s", error)
        return JSON._wrap(value, error)

    # -- State ----------------------------------------------------------

    @property
    def value(self) -> Value:
        """The wrapped Value (Null or the preserved payload when errored)."""
        return self._value

    @property
    def error(self) -> JSONXError | None:
        return self._error

    def __repr__(self) -> str:
        if self._error is not None:
            return f"JSON(error={self._error!r})"
        try:
            return f"JSON({encode(self._value)})"
        except JSONXError:
            return f"JSON(<{type(self._value).__name__}>)"

    def __str__(self) -> str:
        return self.as_string()

    # -- Path navigation ------------------------------------------------

    def get(self, path: str = "") -> JSON:
        if self._error is not None or path == "":
            return self
        try:
            return JSON._wrap(get_path(self._value, path))
        except JSONXError as exc:
            return self._fail(exc)

    def has(self, path: str) -> bool:
        if self._error is not None:
            return False
        try:
            get_path(self._value, path)
        except JSONXError:
            return False
        return True

    def set(self, path: str, value: Any) -> JSON:
        if self._error is not None:
            return self
        try:
            self._value = set_path(
                self._value,
                path,
                from_native(value),
                get_settings().max_array_index,
            )
        except JSONXError as exc:
            return self._fail(exc, self._value)
        return self

    def delete(self, path: str) -> JSON:
        if self._error is not None:
            return self
        try:
            self._value = delete_path(self._value, path)
        except JSONXError as exc:
            return self._fail(exc, self._value)
        return self

    # -- Shape predicates -----------------------------------------------

    def is_object(self) -> bool:
        return self._error is None and isinstance(self._value, JObject)

    def is_array(self) -> bool:
        return self._error is None and isinstance(self._value, JArray)

    def is_string(self) -> bool:
        return self._error is None and isinstance(self._value, JString)

    def is_number(self) -> bool:
        return self._error is None and isinstance(self._value, JNumber)

    def is_bool(self) -> bool:
        return self._error is None and isinstance(self._value, JBool)

    def is_null(self) -> bool:
        return self._error is None and isinstance(self._value, _NullType)

    # -- Coercing accessors ---------------------------------------------

    def as_string(self) -> str:
        if self._error is not None:
            return ""
        v = self._value
        if isinstance(v, _NullType):
            return ""
        if isinstance(v, (JObject, JArray)):
            try:
                return encode(v)
            except JSONXError:
                return ""
        return format_scalar(v)

    def as_int(self) -> int:
        """Integer value truncated toward zero; 0 outside the signed 64-bit range."""
        if self._error is not None:
            return 0
        v = self._value
        if isinstance(v, JNumber):
            if not math.isfinite(v.value):
                return 0
            n = int(v.value)
        elif isinstance(v, JString) and _INT_RE.fullmatch(v.value):
            # more digits than any int64 holds
            if len(v.value.lstrip("+-").lstrip("0")) > 19:
                return 0
            n = int(v.value)
        else:
            return 0
        if _INT64_MIN <= n <= _INT64_MAX:
            return n
        return 0

    as_int64 = as_int

    def as_float(self) -> float:
        if self._error is not None:
            return 0.0
        v = self._value
        if isinstance(v, JNumber):
            return v.value
        if isinstance(v, JString):
            try:
                return float(v.value)
            except ValueError:
                return 0.0
        return 0.0

    def as_bool(self) -> bool:
        if self._error is not None:
            return False
        v = self._value
        if isinstance(v, JBool):
            return v.value
        if isinstance(v, JString):
            return v.value in _TRUE_STRINGS
        if isinstance(v, JNumber):
            return v.value != 0
        return False

    # -- Collections ----------------------------------------------------

    def length(self) -> int:
        """Elements of an array, keys of an object, characters of a string."""
        if self._error is not None:
            return 0
        v = self._value
        if isinstance(v, JArray):
            return len(v.items)
        if isinstance(v, JObject):
            return len(v.entries)
        if isinstance(v, JString):
            return len(v.value)
        return 0

    def index(self, i: int) -> JSON:
        if self._error is not None:
            return self
        v = self._value
        if not isinstance(v, JArray):
            return self._fail(TypeMismatchError("not an array"))
        if i < 0 or i >= len(v.items):
            return self._fail(IndexOutOfRangeError(i, len(v.items)))
        return JSON._wrap(v.items[i])

    def _convert_all(self, values: Iterable[Any]) -> list[Value]:
        return [from_native(x) for x in values]

    def append(self, *values: Any) -> JSON:
        if self._error is not None:
            return self
        if not isinstance(self._value, JArray):
            return self._fail(TypeMismatchError("not an array"), self._value)
        try:
            converted = self._convert_all(values)
        except JSONXError as exc:
            return self._fail(exc, self._value)
        self._value.items.extend(converted)
        return self

    def prepend(self, *values: Any) -> JSON:
        if self._error is not None:
            return self
        if not isinstance(self._value, JArray):
            return self._fail(TypeMismatchError("not an array"), self._value)
        try:
            converted = self._convert_all(values)
        except JSONXError as exc:
            return self._fail(exc, self._value)
        self._value.items[0:0] = converted
        return self

    def remove(self, i: int) -> JSON:
        if self._error is not None:
            return self
        v = self._value
        if not isinstance(v, JArray):
            return self._fail(TypeMismatchError("not an array"), v)
        if i < 0 or i >= len(v.items):
            return self._fail(IndexOutOfRangeError(i, len(v.items)), v)
        del v.items[i]
        return self

    def keys(self) -> list[str]:
        """Object keys in sorted order ([] for anything else)."""
        if self._error is not None or not isinstance(self._value, JObject):
            return []
        return self._value.sorted_keys()

    def values(self) -> list[JSON]:
        """Object values, in the order of keys()."""
        if self._error is not None or not isinstance(self._value, JObject):
            return []
        entries = self._value.entries
        return [JSON._wrap(entries[k]) for k in sorted(entries)]

    def _elements(self) -> list[tuple[str, Value]]:
        v = self._value
        if isinstance(v, JArray):
            return [(str(i), item) for i, item in enumerate(v.items)]
        if isinstance(v, JObject):
            return [(k, v.entries[k]) for k in v.sorted_keys()]
        return []

    def for_each(self, fn: Callable[[str, JSON], Any]) -> JSON:
        """Call ``fn(key, element)`` per element; stop when it returns False.

        Arrays go in index order (keys are "0", "1", ...), objects in sorted
        key order.
        """
        if self._error is not None:
            return self
        for key, item in self._elements():
            if fn(key, JSON._wrap(item)) is False:
                break
        return self

    def map(self, fn: Callable[[str, JSON], Any]) -> JSON:
        """New container of the same shape holding ``fn(key, element)``."""
        if self._error is not None:
            return self
        v = self._value
        if not isinstance(v, (JArray, JObject)):
            return self
        try:
            mapped = [(k, from_native(fn(k, JSON._wrap(item)))) for k, item in self._elements()]
        except JSONXError as exc:
            return self._fail(exc)
        if isinstance(v, JArray):
            return JSON._wrap(JArray([item for _, item in mapped]))
        return JSON._wrap(JObject(dict(mapped)))

    def filter(self, fn: Callable[[str, JSON], Any]) -> JSON:
        """New container with the elements for which ``fn`` is truthy."""
        if self._error is not None:
            return self
        v = self._value
        if not isinstance(v, (JArray, JObject)):
            return self
        kept = [(k, item) for k, item in self._elements() if fn(k, JSON._wrap(item))]
        if isinstance(v, JArray):
            return JSON._wrap(JArray([item for _, item in kept]))
        return JSON._wrap(JObject(dict(kept)))

    # -- Cloning and merging --------------------------------------------

    def clone(self) -> JSON:
        if self._error is not None:
            return JSON._wrap(Null, self._error)
        return JSON._wrap(clone_value(self._value))

    def merge(self, other: JSON | Any) -> JSON:
        """Shallow merge of two objects; *other* wins on key collisions."""
        if self._error is not None:
            return self
        other = _as_handle(other)
        if other._error is not None:
            return self._fail(other._error, self._value)
        a, b = self._value, other._value
        if not isinstance(a, JObject) or not isinstance(b, JObject):
            return self._fail(TypeMismatchError("both values must be objects"), a)
        return JSON._wrap(JObject({**a.entries, **b.entries}))

    def deep_merge(self, other: JSON | Any) -> JSON:
        """Recursive merge through keys that hold objects on both sides.

        Every other collision (arrays included) takes *other*'s value; a
        non-object on either side yields a clone of *other*.
        """
        if self._error is not None:
            return self
        other = _as_handle(other)
        if other._error is not None:
            return self._fail(other._error, self._value)
        return JSON._wrap(_deep_merge(self._value, other._value))

    # -- Serialization --------------------------------------------------

    def to_text(self) -> tuple[str, JSONXError | None]:
        if self._error is not None:
            return "", self._error
        try:
            return encode(self._value), None
        except JSONXError as exc:
            return "", exc

    def to_pretty_text(self) -> tuple[str, JSONXError | None]:
        if self._error is not None:
            return "", self._error
        try:
            return encode(self._value, pretty=True), None
        except JSONXError as exc:
            return "", exc

    def to_bytes(self) -> tuple[bytes, JSONXError | None]:
        text, err = self.to_text()
        if err is not None:
            return b"", err
        return text.encode("utf-8"), None

    def to_dict(self) -> tuple[dict[str, Any] | None, JSONXError | None]:
        if self._error is not None:
            return None, self._error
        if not isinstance(self._value, JObject):
            return None, TypeMismatchError("not an object")
        return to_native(self._value), None

    def to_list(self) -> tuple[list[Any] | None, JSONXError | None]:
        if self._error is not None:
            return None, self._error
        if not isinstance(self._value, JArray):
            return None, TypeMismatchError("not an array")
        return to_native(self._value), None

    def to_native(self) -> Any:
        return to_native(self._value)

    # -- Raising helpers ------------------------------------------------

    def must_get(self, path: str) -> JSON:
        result = self.get(path)
        if result._error is not None:
            raise result._error
        return result

    def must_string(self) -> str:
        if self._error is not None:
            raise self._error
        return self.as_string()

    def must_int(self) -> int:
        if self._error is not None:
            raise self._error
        return self.as_int()

    def must_bool(self) -> bool:
        if self._error is not None:
            raise self._error
        return self.as_bool()

    def must_text(self) -> str:
        text, err = self.to_text()
        if err is not None:
            raise err
        return text


def _as_handle(obj: JSON | Any) -> JSON:
    return obj if isinstance(obj, JSON) else JSON(obj)


def _deep_merge(dst: Value, src: Value) -> Value:
    if isinstance(dst, JObject) and isinstance(src, JObject):
        merged = dict(dst.entries)
        for key, value in src.entries.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = clone_value(value)
        return JObject(merged)
    return clone_value(src)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def parse(text: str) -> JSON:
    """Decode JSON text; malformed input yields a handle carrying ParseError."""
    try:
        return JSON._wrap(decode(text))
    except JSONXError as exc:
        logger.debug("jsonx: parse failed: %s", exc)
        return JSON._wrap(Null, exc)


def parse_bytes(data: bytes) -> JSON:
    return parse(data)


def new_object() -> JSON:
    return JSON._wrap(JObject({}))


def new_array() -> JSON:
    return JSON._wrap(JArray([]))


def from_dict(m: Mapping[str, Any]) -> JSON:
    if not isinstance(m, Mapping):
        return JSON._wrap(Null, TypeMismatchError("not a mapping"))
    return JSON(m)


def from_list(s: list[Any] | tuple[Any, ...]) -> JSON:
    if not isinstance(s, (list, tuple)):
        return JSON._wrap(Null, TypeMismatchError("not a list"))
    return JSON(s)


def from_struct(obj: Any) -> JSON:
    """Capture a dataclass (or any JSON-encodable object) by marshalling it
    to text and parsing it back.  See codec.marshal_struct for field naming.
    """
    try:
        return JSON._wrap(struct_to_value(obj))
    except JSONXError as exc:
        logger.debug("jsonx: from_struct failed: %s", exc)
        return JSON._wrap(Null, exc)
