"""Value types for jsonx-core."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .errors import TypeMismatchError


@dataclass(slots=True)
class JString:
    value: str


@dataclass(slots=True)
class JNumber:
    value: float

    def __post_init__(self) -> None:
        self.value = float(self.value)


@dataclass(slots=True)
class JBool:
    value: bool


@dataclass(slots=True)
class JArray:
    items: list["Value"]


@dataclass(slots=True)
class JObject:
    entries: dict[str, "Value"]

    def sorted_keys(self) -> list[str]:
        return sorted(self.entries)


class _NullType:
    """Singleton for JSON null (and for the payload of an errored handle)."""

    _instance: "_NullType | None" = None

    def __new__(cls) -> "_NullType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_NullType":
        return self

    def __deepcopy__(self, memo) -> "_NullType":
        return self


Null = _NullType()

Value = Union[JObject, JArray, JString, JNumber, JBool, _NullType]

_VALUE_TYPES = (JObject, JArray, JString, JNumber, JBool, _NullType)


# ---------------------------------------------------------------------------
# Native <-> Value conversion
# ---------------------------------------------------------------------------

def is_value(obj: Any) -> bool:
    return isinstance(obj, _VALUE_TYPES)


def from_native(obj: Any) -> Value:
    """Convert a plain Python object into a Value tree.

    - dict / Mapping → JObject (keys stringified)
    - list / tuple   → JArray
    - bool           → JBool (checked before numbers)
    - int / float    → JNumber
    - None           → Null
    - Value          → returned unchanged (no copy)
    - JSON handle    → a deep copy of its payload (an errored handle raises
                       its error)
    """
    from .document import JSON

    if isinstance(obj, _VALUE_TYPES):
        return obj
    if isinstance(obj, JSON):
        if obj.error is not None:
            raise obj.error
        return clone_value(obj.value)
    if obj is None:
        return Null
    if isinstance(obj, str):
        return JString(obj)
    if isinstance(obj, bool):
        return JBool(obj)
    if isinstance(obj, (int, float)):
        try:
            return JNumber(obj)
        except OverflowError:
            raise TypeMismatchError("integer too large for a JSON number") from None
    if isinstance(obj, Mapping):
        return JObject({str(k): from_native(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return JArray([from_native(v) for v in obj])
    raise TypeMismatchError(f"unsupported value type: {type(obj).__name__}")


def to_native(value: Value) -> Any:
    """Convert a Value tree back into plain dicts, lists and scalars."""
    if isinstance(value, JObject):
        return {k: to_native(v) for k, v in value.entries.items()}
    if isinstance(value, JArray):
        return [to_native(v) for v in value.items]
    if isinstance(value, JNumber):
        return number_to_native(value.value)
    if isinstance(value, (JString, JBool)):
        return value.value
    return None


def number_to_native(v: float) -> int | float:
    """Integral numbers read back as ``int``."""
    if math.isfinite(v) and v.is_integer() and abs(v) < 1e21:
        return int(v)
    return v


def clone_value(value: Value) -> Value:
    """Deep copy; containers are freshly allocated at every level."""
    if isinstance(value, JObject):
        return JObject({k: clone_value(v) for k, v in value.entries.items()})
    if isinstance(value, JArray):
        return JArray([clone_value(v) for v in value.items])
    if isinstance(value, JString):
        return JString(value.value)
    if isinstance(value, JNumber):
        return JNumber(value.value)
    if isinstance(value, JBool):
        return JBool(value.value)
    return Null


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def type_name(value: Value) -> str:
    if isinstance(value, JObject):
        return "object"
    if isinstance(value, JArray):
        return "array"
    if isinstance(value, JString):
        return "string"
    if isinstance(value, JNumber):
        return "number"
    if isinstance(value, JBool):
        return "boolean"
    return "null"


def format_scalar(value: Value) -> str:
    """Render a leaf the way the JSON encoder writes it (strings unquoted)."""
    if isinstance(value, JString):
        return value.value
    if isinstance(value, JNumber):
        return str(number_to_native(value.value))
    if isinstance(value, JBool):
        return str(value.value).lower()
    if isinstance(value, _NullType):
        return "null"
    raise TypeMismatchError(f"not a scalar: {type_name(value)}")
